import unittest

from markupsafe import Markup

from pageview.util import quoting


class TestQuoting(unittest.TestCase):

    def test_html_quote(self):
        self.assertEqual(quoting.html_quote(1),
                         '1')
        self.assertEqual(quoting.html_quote(None),
                         '')
        self.assertEqual(quoting.html_quote('<hey!>'),
                         '&lt;hey!&gt;')
        self.assertEqual(quoting.html_quote('<ဩ>'),
                         '&lt;ဩ&gt;')

    def test_xml_escape(self):
        self.assertEqual(quoting.xml_escape('a < b & "c" \'d\' > e'),
                         'a &lt; b &amp; &#34;c&#34; &#39;d&#39; &gt; e')
        self.assertEqual(quoting.xml_escape(42), '42')

    def test_strip_html(self):
        self.assertEqual(quoting.strip_html('<b>Tom</b>&nbsp;&amp; Jerry'),
                         'Tom & Jerry')

    def test_is_markup(self):
        self.assertTrue(quoting.is_markup(Markup('<br/>')))
        self.assertFalse(quoting.is_markup('<br/>'))
