# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""WSGI Wrappers for a Request and Response

The WSGIRequest and WSGIResponse objects are light wrappers to make it easier
to deal with an incoming request and sending a response.  They are the
"real" request and response a page renders against; internal dispatches
substitute the wrappers in ``pageview.recursive``.
"""
import copy
import re
from http.client import responses
from io import BytesIO, StringIO

from babel import Locale, UnknownLocaleError

from pageview.exceptions import WriterStreamConflictError
from pageview.request import (
    parse_querystring, parse_formvars, parse_accept_language)
from pageview.util.multidict import MultiDict
from pageview.wsgilib import has_header, header_value, remove_header

__all__ = ['WSGIRequest', 'WSGIResponse', 'environ_getter']


class environ_getter(object):
    """For delegating an attribute to a key in self.environ."""
    # @@: Also __set__?  Should setting be allowed?
    def __init__(self, key, default='', default_factory=None):
        self.key = key
        self.default = default
        self.default_factory = default_factory

    def __get__(self, obj, type=None):
        if obj is None:
            return self
        if self.key not in obj.environ:
            if self.default_factory:
                val = obj.environ[self.key] = self.default_factory()
                return val
            else:
                return self.default
        return obj.environ[self.key]

    def __repr__(self):
        return '<Proxy for WSGI environ %r key>' % self.key


class WSGIRequest(object):
    """WSGI Request API Object

    This object represents a WSGI request with a more friendly interface.
    This does not expose every detail of the WSGI environment, and does not
    in any way express anything beyond what is available in the environment
    dictionary.  *All* state is kept in the environment dictionary; this
    is essential for interoperability.

    Request attributes (values shared by the code taking part in one
    request, such as the model of a view) live in a dictionary under the
    ``pageview.attributes`` key.

    You are free to subclass this object.

    """
    def __init__(self, environ):
        self.environ = environ

    body = environ_getter('wsgi.input')
    scheme = environ_getter('wsgi.url_scheme')
    method = environ_getter('REQUEST_METHOD')
    script_name = environ_getter('SCRIPT_NAME')
    path_info = environ_getter('PATH_INFO')
    query_string = environ_getter('QUERY_STRING')
    attributes = environ_getter('pageview.attributes', default_factory=dict)
    resources = environ_getter('pageview.resources', default=None)

    def get_attribute(self, name):
        """The attribute called `name`, or None"""
        return self.attributes.get(name)

    def set_attribute(self, name, value):
        """Sets an attribute; setting None removes it"""
        if value is None:
            self.remove_attribute(name)
        else:
            self.attributes[name] = value

    def remove_attribute(self, name):
        self.attributes.pop(name, None)

    @property
    def languages(self):
        """Language tags from ``Accept-Language``, preferred first"""
        return parse_accept_language(self.environ)

    @property
    def locale(self):
        """
        The first language of the request that Babel knows, as a
        ``babel.Locale``; None if the request names no usable language.
        """
        for lang in self.languages:
            try:
                return Locale.parse(lang, sep='-')
            except (ValueError, UnknownLocaleError):
                continue
        return None

    @property
    def GET(self):
        """
        MultiDict representing the QUERY_STRING parameters. Always
        present, if possibly empty.
        """
        return MultiDict(parse_querystring(self.environ))

    @property
    def POST(self):
        """MultiDict representing a url-encoded POST body.

        This will consume wsgi.input when first accessed if applicable,
        but the variables read will be kept in
        environ['pageview.parsed_formvars']
        """
        return parse_formvars(self.environ, include_get_vars=False)

    @property
    def params(self):
        """MultiDict of keys from POST and GET, in that order"""
        pms = MultiDict()
        pms.extend(self.POST)
        pms.extend(self.GET)
        return pms

    def get_parameter(self, name):
        """The first value of the parameter `name`, or None"""
        return self.params.get(name)

    def get_request_dispatcher(self, path):
        """
        A dispatcher that can forward or include this request to
        `path`, or None if nothing can be dispatched there.
        """
        resources = self.resources
        if resources is None:
            return None
        return resources.get_request_dispatcher(path)

    def for_path(self, path, query_string=None):
        """
        A copy of this request aimed at `path`, for an internal dispatch.

        The environment is copied (so the new PATH_INFO does not leak
        back), but the attribute dictionary is the same object.
        """
        environ = dict(self.environ)
        environ['PATH_INFO'] = path
        if query_string is not None:
            environ['QUERY_STRING'] = query_string
        new_request = copy.copy(self)
        new_request.environ = environ
        return new_request

    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.method,
                               self.script_name + self.path_info)


_CHARSET_RE = re.compile(r'.*;\s*charset=(.*?)(;|$)', re.I)


class WSGIResponse(object):
    """A basic HTTP response, written through a text writer or a byte
    stream (but not both)"""

    default_content_type = 'text/html'
    default_charset = 'UTF-8'

    def __init__(self, content_type=None, charset=None, code=200):
        self.status_code = code
        self.headers = []
        self.content_type = content_type or self.default_content_type
        self.charset = charset or self.default_charset
        self.locale = None
        self._writer = None
        self._stream = None

    def set_status(self, code):
        self.status_code = code

    def get_status(self):
        return self.status_code

    def set_header(self, name, value):
        remove_header(self.headers, name)
        self.headers.append((name, value))

    def add_header(self, name, value):
        self.headers.append((name, value))

    def get_header(self, name):
        return header_value(self.headers, name)

    def contains_header(self, name):
        return has_header(self.headers, name)

    def set_content_type(self, content_type):
        """
        Sets the content type; a ``charset`` parameter also sets the
        character encoding
        """
        charset_match = _CHARSET_RE.match(content_type)
        if charset_match:
            self.charset = charset_match.group(1)
            content_type = content_type.split(';', 1)[0].strip()
        self.content_type = content_type

    def get_content_type(self):
        return '%s; charset=%s' % (self.content_type, self.charset)

    def get_character_encoding(self):
        return self.charset

    def set_locale(self, locale):
        self.locale = locale
        self.set_header('Content-Language', str(locale).replace('_', '-'))

    def get_locale(self):
        return self.locale

    def get_writer(self):
        if self._stream is not None:
            raise WriterStreamConflictError(
                'get_output_stream() has already been called for this '
                'response')
        if self._writer is None:
            self._writer = StringIO()
        return self._writer

    def get_output_stream(self):
        if self._writer is not None:
            raise WriterStreamConflictError(
                'get_writer() has already been called for this response')
        if self._stream is None:
            self._stream = BytesIO()
        return self._stream

    def reset(self):
        """Clears the status, the headers and the buffer"""
        self.status_code = 200
        self.headers = []
        self.reset_buffer()

    def reset_buffer(self):
        for buffer in (self._writer, self._stream):
            if buffer is not None:
                buffer.seek(0)
                buffer.truncate()

    @property
    def body(self):
        if self._writer is not None:
            return self._writer.getvalue().encode(self.charset)
        if self._stream is not None:
            return self._stream.getvalue()
        return b''

    def __call__(self, environ, start_response):
        """Convenience call to send status, headers and body

        Conforms to the WSGI interface for calling purposes only.
        """
        body = self.body
        status = '%s %s' % (self.status_code,
                            responses.get(self.status_code, 'Unknown'))
        response_headers = [('Content-Type', self.get_content_type())]
        response_headers.extend(self.headers)
        if not self.contains_header('Content-Length'):
            response_headers.append(('Content-Length', str(len(body))))
        start_response(status, response_headers)
        return [body]

    def __repr__(self):
        return '<%s %s %s>' % (self.__class__.__name__, self.status_code,
                               self.get_content_type())
