# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
import re

import markupsafe

__all__ = ['html_quote', 'xml_escape', 'strip_html', 'is_markup']

_tag_re = re.compile(r'<.*?>', re.S)


def html_quote(v):
    """
    Quote the value (turned to a string) as HTML.  This quotes <, >,
    and quotes; None becomes ''.
    """
    if v is None:
        return ''
    return str(markupsafe.escape(v))


def xml_escape(s):
    """
    Escape ``&``, ``<``, ``>``, ``"`` and ``'`` so the text can be placed
    in XML character data or attribute values.
    """
    return str(markupsafe.escape(str(s)))


def strip_html(s):
    # @@: Too simple?
    s = _tag_re.sub('', s)
    s = s.replace('&nbsp;', ' ').replace('&lt;', '<').replace('&gt;', '>')
    return s.replace('&amp;', '&')


def is_markup(value):
    """True for values that render themselves as markup (``__html__``)."""
    return hasattr(value, '__html__')
