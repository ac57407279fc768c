# (c) 2005 Ian Bicking, Clark C. Evans and contributors
# This module is part of the Python Paste Project and is released under
# the MIT License: http://www.opensource.org/licenses/mit-license.php
"""
HTTP Exception Middleware

This module processes Python exceptions that relate to HTTP exceptions
by defining a set of exceptions, all subclasses of HTTPException, and a
request handler (`HTTPExceptionHandler`) that catches these exceptions
and turns them into proper responses.

Only the exceptions a page layer raises itself are defined here::

  Exception
    HTTPException
      HTTPError
        HTTPClientError
          400 - HTTPBadRequest
          404 - HTTPNotFound
        HTTPServerError
          500 - HTTPInternalServerError

Exceptions in the 5xx range are treated as serious errors: they are
logged with their traceback and ``exc_info`` is passed on to
``start_response``.
"""

import logging
import sys

from pageview.util.quoting import strip_html, html_quote

log = logging.getLogger(__name__)


class HTTPException(Exception):
    """
    Base class for all HTTP exceptions

    This encapsulates an HTTP response that interrupts normal application
    flow; but one which is not necessarly an error condition.

    Attributes:

       ``code``
           the HTTP status code for the exception

       ``title``
           remainder of the status line (stuff after the code)

       ``explanation``
           a plain-text explanation of the error message that is
           not subject to environment or header substitutions;
           it is accessable in the template via %(explanation)s

       ``detail``
           a plain-text message customization that is not subject
           to environment or header substutions; accessable in
           the template via %(detail)s

       ``template``
           a content fragment (in HTML) used for environment and
           header substution; the default template includes both
           the explanation and further detail provided in the
           message

    Parameters:

       ``detail``     a plain-text override of the default ``detail``
       ``headers``    a list of (k,v) header pairs
       ``comment``    a plain-text additional information which is
                      usually stripped/hidden for end-users
    """

    code = None
    title = None
    explanation = ''
    detail = ''
    comment = ''
    template = "%(explanation)s\n<br/>%(detail)s\n<!-- %(comment)s -->"
    server_name = 'WSGI server'

    def __init__(self, detail=None, headers=None, comment=None):
        assert self.code, "Do not directly instantiate abstract exceptions."
        assert isinstance(headers, (type(None), list))
        assert isinstance(detail, (type(None), str))
        assert isinstance(comment, (type(None), str))
        self.headers = headers or []
        if detail is not None:
            self.detail = detail
        if comment is not None:
            self.comment = comment
        Exception.__init__(self, "%s %s\n%s\n%s\n" % (
            self.code, self.title, self.explanation, self.detail))

    def make_body(self, environ, template, escfunc):
        args = {'explanation': escfunc(self.explanation),
                'detail': escfunc(self.detail),
                'comment': escfunc(self.comment)}
        if HTTPException.template == self.template:
            return template % args
        for (k, v) in environ.items():
            args[k] = escfunc(v)
        for (k, v) in self.headers:
            args[k.lower()] = escfunc(v)
        return template % args

    def plain(self, environ):
        """ text/plain representation of the exception """
        noop = lambda _: _
        body = self.make_body(environ, strip_html(self.template), noop)
        return ('%s %s\n%s\n' % (self.code, self.title, body))

    def html(self, environ):
        """ text/html representation of the exception """
        body = self.make_body(environ, self.template, html_quote)
        return ('<html><head><title>%(title)s</title></head>\n'
                '<body>\n'
                '<h1>%(title)s</h1>\n'
                '<p>%(body)s</p>\n'
                '<hr noshade>\n'
                '<div align="right">%(server)s</div>\n'
                '</body></html>\n'
                % {'title': self.title,
                   'code': self.code,
                   'server': self.server_name,
                   'body': body})

    def wsgi_application(self, environ, start_response, exc_info=None):
        """
        This exception as a WSGI application
        """
        if 'html' in environ.get('HTTP_ACCEPT', ''):
            headers = {'content-type': 'text/html; charset=utf-8'}
            content = self.html(environ)
        else:
            headers = {'content-type': 'text/plain; charset=utf-8'}
            content = self.plain(environ)
        headers.update(self.headers)
        start_response('%s %s' % (self.code, self.title),
                       list(headers.items()),
                       exc_info)
        return [content.encode('utf-8')]

    def __repr__(self):
        return '<%s %s; code=%s>' % (self.__class__.__name__,
                                     self.title, self.code)


class HTTPError(HTTPException):
    """
    This is an exception which indicates that an error has occured,
    and that any work in progress should not be committed.  These are
    typically results in the 400's and 500's.
    """


class HTTPClientError(HTTPError):
    """
    This is an error condition in which the client is presumed to be
    in-error.  This is an expected problem, and thus is not considered
    a bug.  A server-side traceback is not warranted.  Unless specialized,
    this is a '400 Bad Request'
    """
    code = 400
    title = 'Bad Request'
    explanation = 'The server could not understand your request.'


HTTPBadRequest = HTTPClientError


class HTTPNotFound(HTTPClientError):
    code = 404
    title = 'Not Found'
    explanation = ('The resource could not be found.')


class HTTPServerError(HTTPError):
    """
    This is an error condition in which the server is presumed to be
    in-error.  This is usually unexpected, and thus requires a traceback.
    Unless specialized, this is a '500 Internal Server Error'
    """
    code = 500
    title = 'Internal Server Error'
    explanation = ('An internal server error occurred.')


HTTPInternalServerError = HTTPServerError

__all__ = ['HTTPException', 'HTTPError', 'HTTPClientError', 'HTTPBadRequest',
           'HTTPNotFound', 'HTTPServerError', 'HTTPInternalServerError']

_exceptions = {}
for _value in (HTTPClientError, HTTPNotFound, HTTPServerError):
    _exceptions[_value.code] = _value


def get_exception(code):
    return _exceptions[code]

############################################################
## Middleware implementation:
############################################################


class HTTPExceptionHandler(object):
    """
    This middleware catches any exceptions (which are subclasses of
    ``HTTPException``) and turns them into proper HTTP responses.

    Attributes:

       ``warning_level``
           This attribute determines for what exceptions a stack
           trace is kept for lower level reporting; by default, it
           only keeps stack trace for 5xx, HTTPServerError exceptions.
           To keep a stack trace for 4xx, HTTPClientError exceptions,
           set this to 400.
    """

    def __init__(self, application, warning_level=None):
        assert not warning_level or (warning_level > 99 and
                                     warning_level < 600)
        self.warning_level = warning_level or 500
        self.application = application

    def __call__(self, environ, start_response):
        environ['pageview.httpexceptions'] = self
        environ.setdefault('pageview.expected_exceptions',
                           []).append(HTTPException)
        try:
            return self.application(environ, start_response)
        except HTTPException:
            return self.send_http_response(environ, start_response,
                                           sys.exc_info())

    def send_http_response(self, environ, start_response, exc_info):
        try:
            exc = exc_info[1]
            if exc.code >= self.warning_level:
                log.error('%s while serving %s', exc.title,
                          environ.get('PATH_INFO', ''), exc_info=exc_info)
                return exc.wsgi_application(environ, start_response, exc_info)
            log.debug('%s while serving %s: %s', exc.title,
                      environ.get('PATH_INFO', ''), exc.detail)
            return exc.wsgi_application(environ, start_response)
        finally:
            exc_info = None


def make_middleware(app, global_conf=None, warning_level=None):
    """
    ``httpexceptions`` middleware; this catches any
    ``pageview.httpexceptions.HTTPException`` exceptions (exceptions
    like ``HTTPNotFound`` or a failed view lookup) and turns them into
    proper HTTP responses.

    ``warning_level`` can be an integer corresponding to an HTTP code.
    Any code over that value will be passed 'up' the chain, potentially
    reported on by another piece of middleware.
    """
    if warning_level:
        warning_level = int(warning_level)
    return HTTPExceptionHandler(app, warning_level=warning_level)


__all__.extend(['HTTPExceptionHandler', 'get_exception', 'make_middleware'])
