# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
The resource namespace of an application: which paths exist, and what
can be dispatched to them.
"""

import logging
import mimetypes
import os

from paste.deploy.converters import aslist

from pageview import httpexceptions
from pageview.recursive import Dispatcher
from pageview.request import construct_url, path_info_split
from pageview.wsgiwrappers import WSGIRequest, WSGIResponse

__all__ = ['ResourceContext', 'make_static', 'make_resource_app']

log = logging.getLogger(__name__)


class ResourceContext(object):

    """
    WSGI application serving a directory of resources and a set of
    mounted applications.

    A path names a resource if a file exists at that path under
    `directory`, or if an application is mounted at exactly that path.
    Files are turned into applications by *constructors*: a dictionary
    of extensions (with leading ``.``) as keys, and callables
    ``constructor(filename)`` returning an application (or None) as
    values.  The key ``*`` is used when no other constructor is found.
    The template engine that renders views plugs in here.

    Paths under one of `hidden_prefixes` can be reached by internal
    dispatch (``forward``, ``include``, views) but are not served to
    clients.

    The context puts itself in ``environ['pageview.resources']``, which
    is how requests find their dispatchers.
    """

    def __init__(self, directory=None, mounts=None, constructors=None,
                 hidden_prefixes=('WEB-INF',)):
        if directory is not None:
            directory = os.path.abspath(directory)
        self.directory = directory
        self.mounts = dict(mounts or {})
        self.constructors = dict(constructors or {})
        self.hidden_prefixes = list(hidden_prefixes)

    def register_constructor(self, extension, constructor):
        """
        Register a function as a constructor.

        The extension should have a leading ``.``, or be the special
        extension ``*`` (a catch-all).
        """
        assert extension not in self.constructors, (
            "A constructor already exists for the extension %r (%r) "
            "when attemption to register constructor %r"
            % (extension, self.constructors[extension], constructor))
        self.constructors[extension] = constructor

    def mount(self, path, application):
        assert path.startswith('/'), (
            "Mount paths should start with /: %r" % path)
        self.mounts[path] = application

    def find_file(self, path):
        if self.directory is None or not path.startswith('/'):
            return None
        filename = os.path.normpath(
            os.path.join(self.directory, path.lstrip('/')))
        if not filename.startswith(self.directory + os.sep):
            return None
        if not os.path.isfile(filename):
            return None
        return filename

    def get_resource(self, path):
        """
        Returns the filename of the file at `path`, the path itself for a
        mounted application, or None if the resource does not exist.
        """
        if path in self.mounts:
            return path
        return self.find_file(path)

    def get_request_dispatcher(self, path):
        """
        Returns a ``Dispatcher`` for `path` (which may carry a query
        string), or None if nothing can be dispatched to it.
        """
        query_string = None
        if '?' in path:
            path, query_string = path.split('?', 1)
        if path in self.mounts:
            return Dispatcher(self.mounts[path], path, query_string)
        filename = self.find_file(path)
        if filename is None:
            return None
        application = self.get_application(filename)
        if application is None:
            return None
        return Dispatcher(application, path, query_string)

    def get_application(self, filename):
        ext = os.path.splitext(filename)[1]
        constructor = self.constructors.get(ext, self.constructors.get('*'))
        if constructor is None:
            log.debug('No constructor found for %s', filename)
            return None
        app = constructor(filename)
        if app is None:
            log.debug('Constructor %r returned None for %s',
                      constructor, filename)
        return app

    def is_hidden(self, path_info):
        first, rest = path_info_split(path_info)
        return first in self.hidden_prefixes

    def __call__(self, environ, start_response):
        environ['pageview.resources'] = self
        path_info = environ.get('PATH_INFO', '')
        dispatcher = None
        if path_info and not self.is_hidden(path_info):
            dispatcher = self.get_request_dispatcher(path_info)
        if dispatcher is None:
            environ['wsgi.errors'].write(
                'No resource found for %s\n' % path_info)
            raise httpexceptions.HTTPNotFound(
                'The resource at %s could not be found'
                % construct_url(environ))
        request = WSGIRequest(environ)
        response = WSGIResponse()
        dispatcher.serve(request, response)
        return response(environ, start_response)

    def __repr__(self):
        return '<%s directory=%r mounts=%s>' % (
            self.__class__.__name__, self.directory,
            ', '.join(sorted(self.mounts)) or '(none)')


def make_static(filename):
    """
    Constructor serving `filename` as it is, with a content type
    guessed from its name.
    """
    content_type = mimetypes.guess_type(filename)[0] or 'application/octet-stream'

    def static_app(environ, start_response):
        with open(filename, 'rb') as f:
            body = f.read()
        start_response('200 OK', [('Content-Type', content_type),
                                  ('Content-Length', str(len(body)))])
        return [body]
    return static_app


def make_resource_app(global_conf, directory=None, hidden_prefixes=None,
                      static_extensions=None):
    """
    ``paste.deploy`` factory for a ``ResourceContext``.

    ``hidden_prefixes`` and ``static_extensions`` are whitespace
    separated lists; files with one of the static extensions are served
    as they are.
    """
    if hidden_prefixes is None:
        hidden_prefixes = ['WEB-INF']
    context = ResourceContext(
        directory or global_conf.get('here'),
        hidden_prefixes=aslist(hidden_prefixes))
    for ext in aslist(static_extensions):
        context.register_constructor(ext, make_static)
    return context
