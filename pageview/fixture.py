# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Routines for testing WSGI applications.

Most interesting is ``TestApp``, for testing WSGI applications
in-process::

    app = TestApp(ResourceContext(directory, mounts={'/': page}))
    res = app.get('/')
    assert 'Hello' in res
"""

import re
import sys
import time
from urllib.parse import urlencode

from pageview import wsgilib
from pageview.util import NO_DEFAULT

__all__ = ['AppError', 'TestApp', 'TestResponse']


class AppError(Exception):
    pass


class TestApp(object):

    # for py.test
    __test__ = False

    def __init__(self, app, extra_environ=None):
        self.app = app
        self.extra_environ = extra_environ or {}

    def make_environ(self):
        return self.extra_environ.copy()

    def get(self, url, params=None, headers={}, extra_environ={},
            status=None, expect_errors=False):
        # Hide from py.test:
        __tracebackhide__ = True
        if params:
            if not isinstance(params, str):
                params = urlencode(params)
            if '?' in url:
                url += '&'
            else:
                url += '?'
            url += params
        environ = self.make_environ()
        for header, value in headers.items():
            environ['HTTP_%s' % header.replace('-', '_').upper()] = value
        environ.update(extra_environ)
        return self.do_request(url, environ, status, expect_errors)

    def post(self, url, params=b'', headers={}, extra_environ={},
             status=None, expect_errors=False):
        __tracebackhide__ = True
        environ = self.make_environ()
        if params and isinstance(params, (list, tuple, dict)):
            params = urlencode(params)
        if isinstance(params, str):
            params = params.encode('utf-8')
        environ['CONTENT_TYPE'] = 'application/x-www-form-urlencoded'
        environ['CONTENT_LENGTH'] = str(len(params))
        environ['REQUEST_METHOD'] = 'POST'
        environ['wsgi.input'] = params
        for header, value in headers.items():
            environ['HTTP_%s' % header.replace('-', '_').upper()] = value
        environ.update(extra_environ)
        return self.do_request(url, environ, status, expect_errors)

    def do_request(self, url, environ, status, expect_errors):
        __tracebackhide__ = True
        environ['pageview.testing'] = True
        start_time = time.time()
        raw_res = wsgilib.raw_interactive(self.app, url, **environ)
        end_time = time.time()
        res = TestResponse(self, *raw_res, total_time=end_time - start_time)
        res.url = url
        if not expect_errors:
            self.check_status(status, res)
            self.check_errors(res)
        return res

    def check_status(self, status, res):
        __tracebackhide__ = True
        if status == '*':
            return
        if status is None:
            if res.status == 200 or (
                res.status >= 300 and res.status < 400):
                return
            raise AppError(
                "Bad response: %s (not 200 OK or 3xx redirect for %s)"
                % (res.full_status, res.url))
        if status != res.status:
            raise AppError(
                "Bad response: %s (not %s)" % (res.full_status, status))

    def check_errors(self, res):
        if res.errors:
            raise AppError(
                "Application had errors logged:\n%s" % res.errors)


class TestResponse(object):

    # for py.test
    __test__ = False

    def __init__(self, test_app, status, headers, body, errors,
                 total_time=None):
        self.test_app = test_app
        self.status = int(status.split()[0])
        self.full_status = status
        self.headers = headers
        self.body = body
        self.errors = errors
        self._normal_body = None
        self.time = total_time

    @property
    def charset(self):
        content_type = self.header('content-type', '')
        match = re.search(r'charset=([^;\s]+)', content_type, re.I)
        if match:
            return match.group(1)
        return 'utf-8'

    @property
    def text(self):
        """The body decoded with the charset of the response"""
        return self.body.decode(self.charset)

    def header(self, name, default=NO_DEFAULT):
        """
        Returns the named header; an error if there is not exactly one
        matching header (unless you give a default -- always an error
        if there is more than one header)
        """
        found = None
        for cur_name, value in self.headers:
            if cur_name.lower() == name.lower():
                assert not found, (
                    "Ambiguous header: %s matches %r and %r"
                    % (name, found, value))
                found = value
        if found is None:
            if default is NO_DEFAULT:
                raise KeyError(
                    "No header found: %r (from %s)"
                    % (name, ', '.join([n for n, v in self.headers])))
            else:
                return default
        return found

    def all_headers(self, name):
        """
        Gets all headers, returns as a list
        """
        return [value for cur_name, value in self.headers
                if cur_name.lower() == name.lower()]

    _normal_body_regex = re.compile(r'[ \n\r\t]+')

    @property
    def normal_body(self):
        if self._normal_body is None:
            self._normal_body = self._normal_body_regex.sub(' ', self.text)
        return self._normal_body

    def __contains__(self, s):
        """
        A response 'contains' a string if it is present in the body
        of the response.  Whitespace is normalized when searching
        for a string.
        """
        if not isinstance(s, str):
            s = str(s)
        return (self.text.find(s) != -1
                or self.normal_body.find(s) != -1)

    def mustcontain(self, *strings):
        """
        Assert that the response contains all of the strings passed
        in as arguments.

        Equivalent to::

            assert string in res
        """
        for s in strings:
            if s not in self:
                print("Actual response (no %r):" % s, file=sys.stderr)
                print(self, file=sys.stderr)
                raise IndexError(
                    "Body does not contain string %r" % s)

    def __repr__(self):
        return '<Response %s %r>' % (self.full_status, self.body[:20])

    def __str__(self):
        simple_body = '\n'.join([l for l in self.text.splitlines()
                                 if l.strip()])
        return 'Response: %s\n%s\n%s' % (
            self.full_status,
            '\n'.join(['%s: %s' % (n, v) for n, v in self.headers]),
            simple_body)
