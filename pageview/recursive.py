# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Internal requests: forwarding and including other resources, and the
request/response substitutes used to capture what they render.

``Dispatcher``
    Forwards or includes a request to one path.  Obtain one from
    ``WSGIRequest.get_request_dispatcher(path)``.

``ResponseWrapper``
    Stands in for a response and keeps everything written to it in
    memory, to be read back with ``get_string()``.

``RequestWrapper``
    Stands in for a request; attributes set on it stay on it, and it
    always claims to be a ``GET``.

Several keys are added to the environment of a dispatched request:

``pageview.dispatch.type``
    ``'forward'`` or ``'include'``.

``pageview.dispatch.path``
    The path that was dispatched to.

``pageview.dispatch.old_path_info``
    The chain of paths that led to this dispatch; forwarding to a path
    already on the chain raises ``DispatchLoopError``.  Includes and
    views are not checked: a view runs with a model of its own, so
    rendering one path again further down is how trees are drawn.
"""

import logging
from collections import ChainMap
from io import BytesIO, StringIO

from pageview.exceptions import DispatchLoopError, WriterStreamConflictError
from pageview.wsgiwrappers import WSGIRequest

__all__ = ['Dispatcher', 'RequestWrapper', 'ResponseWrapper']

log = logging.getLogger(__name__)


class Dispatcher(object):

    """
    Forwards or includes requests to `path`, served by `application`.

    `application` is either an object with a ``service(request,
    response)`` method (like ``pageview.page.Page``), which is called
    directly, or any WSGI application, whose body is written to the
    response.
    """

    def __init__(self, application, path, query_string=None):
        self.application = application
        self.path = path
        self.query_string = query_string

    def forward(self, request, response):
        """
        Lets the target produce the response: the buffer is cleared
        first, and the target's status and headers are kept.
        """
        response.reset_buffer()
        self.dispatch('forward', request, response)

    def include(self, request, response):
        """
        Adds the target's output to the response; its status and
        headers are ignored.
        """
        self.dispatch('include', request, response, check_loop=False)

    def render(self, request, response):
        """
        Forwards a view: `request` is an overlay carrying its own model,
        so the same path may be rendered again further down the chain
        (a tree of nodes sharing one view).
        """
        response.reset_buffer()
        self.dispatch('forward', request, response, check_loop=False)

    def dispatch(self, dispatch_type, request, response, check_loop=True):
        visited = (request.environ.get('pageview.dispatch.old_path_info')
                   or [request.path_info])
        if check_loop and self.path in visited:
            raise DispatchLoopError(self.path, visited)
        request = request.for_path(self.path, self.query_string)
        environ = request.environ
        environ['pageview.dispatch.old_path_info'] = visited + [self.path]
        environ['pageview.dispatch.type'] = dispatch_type
        environ['pageview.dispatch.path'] = self.path
        log.debug('%s to %s', dispatch_type, self.path)
        self.run(dispatch_type, request, response)

    def serve(self, request, response):
        """
        Serves `request` itself (a request from the client, not an
        internal dispatch) with the target.
        """
        request.environ['pageview.dispatch.old_path_info'] = [self.path]
        self.run('forward', request, response)

    def run(self, dispatch_type, request, response):
        service = getattr(self.application, 'service', None)
        if service is not None:
            service(request, response)
        else:
            self.run_application(dispatch_type, request.environ, response)

    def run_application(self, dispatch_type, environ, response):
        def start_response(status, headers, exc_info=None):
            if exc_info:
                try:
                    raise exc_info[1].with_traceback(exc_info[2])
                finally:
                    exc_info = None
            if dispatch_type == 'forward':
                response.set_status(int(status.split()[0]))
                for name, value in headers:
                    if name.lower() == 'content-type':
                        response.set_content_type(value)
                    elif name.lower() != 'content-length':
                        response.add_header(name, value)
            return write

        def write(data):
            write_body(response, data)

        app_iter = self.application(environ, start_response)
        try:
            for s in app_iter:
                write(s)
        finally:
            if hasattr(app_iter, 'close'):
                app_iter.close()

    def __repr__(self):
        return '<%s for %s: %r>' % (self.__class__.__name__, self.path,
                                    self.application)


def write_body(response, data):
    """
    Writes a chunk of a WSGI body to the response's byte stream, or to
    its writer when the writer is the one in use.
    """
    charset = response.get_character_encoding()
    if isinstance(data, str):
        data = data.encode(charset)
    try:
        stream = response.get_output_stream()
    except WriterStreamConflictError:
        response.get_writer().write(data.decode(charset))
    else:
        stream.write(data)


class RequestWrapper(WSGIRequest):

    """
    A request for an internal dispatch that keeps attributes to itself.

    Attributes set on the wrapper go into a private ``overlay``
    dictionary; reading an attribute looks there first and then at the
    wrapped request.  Setting an attribute to None shadows the wrapped
    request's value; ``remove_attribute`` drops the overlay's entry, so
    the wrapped value shows again.  The wrapped request is never
    modified.  The method
    is always ``GET``: the dispatch is a read-only navigation whatever
    the original request was.
    """

    def __init__(self, request):
        self.request = request
        self.overlay = {}
        environ = dict(request.environ)
        environ['REQUEST_METHOD'] = 'GET'
        environ['pageview.attributes'] = ChainMap(
            self.overlay, request.attributes)
        WSGIRequest.__init__(self, environ)

    @property
    def method(self):
        return 'GET'

    def get_attribute(self, name):
        if name in self.overlay:
            return self.overlay[name]
        return self.request.get_attribute(name)

    def set_attribute(self, name, value):
        # None is kept, hiding the wrapped request's value
        self.overlay[name] = value

    def remove_attribute(self, name):
        self.overlay.pop(name, None)

    @property
    def params(self):
        return self.request.params


class ResponseWrapper(object):

    """
    A response that keeps its output in memory.

    Either ``get_writer()`` or ``get_output_stream()`` may be used, not
    both.  Status codes are recorded here and not passed on; content
    type, locale and buffer resets are ignored.  Anything else (headers,
    for instance) goes to the wrapped response.
    """

    def __init__(self, response, char_encoding=None,
                 default_encoding='ISO-8859-1'):
        self.response = response
        self.char_encoding = char_encoding
        self.default_encoding = default_encoding
        self.is_writer_used = False
        self.is_stream_used = False
        self._chars = StringIO()
        self._bytes = BytesIO()
        self._status = 200

    def get_writer(self):
        if self.is_stream_used:
            raise WriterStreamConflictError(
                'Attempt to get a writer after the output stream was used')
        self.is_writer_used = True
        return self._chars

    def get_output_stream(self):
        if self.is_writer_used:
            raise WriterStreamConflictError(
                'Attempt to get an output stream after the writer was used')
        self.is_stream_used = True
        return self._bytes

    def reset(self):
        pass

    def reset_buffer(self):
        pass

    def set_content_type(self, content_type):
        pass  # ignore

    def set_locale(self, locale):
        pass  # ignore

    def set_status(self, code):
        self._status = code

    def get_status(self):
        return self._status

    def get_character_encoding(self):
        return self.char_encoding or self.default_encoding

    def get_string(self):
        if self.is_writer_used:
            return self._chars.getvalue()
        elif self.is_stream_used:
            return self._bytes.getvalue().decode(
                self.get_character_encoding())
        # target didn't write anything
        return ''

    def close(self):
        """Discards the captured output"""
        self._chars.close()
        self._bytes.close()

    def __getattr__(self, name):
        return getattr(self.response, name)

    def __repr__(self):
        return '<%s around %r>' % (self.__class__.__name__, self.response)
