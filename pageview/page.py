# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
A base class for pages.

Subclass ``Page`` and implement ``render(page_context)``::

    class ArticlePage(Page):
        def render(self, page_context):
            page_context.view(page_context.resource())

A page is a WSGI application of its own, and can also be mounted in a
``ResourceContext`` (or returned by one of its constructors) so other
pages can forward to it or include it.
"""

from paste.deploy.converters import aslist

from pageview.context import PageContext
from pageview.wsgiwrappers import WSGIRequest, WSGIResponse

__all__ = ['Page', 'make_page_config']


class Page(object):

    """
    Keyword arguments are passed on to every ``PageContext`` the page
    creates (``null_string``, ``view_prefixes``, ``view_postfixes``,
    ``default_character_encoding``).
    """

    page_context_class = PageContext

    def __init__(self, **config):
        self.config = config

    def __call__(self, environ, start_response):
        request = WSGIRequest(environ)
        response = WSGIResponse()
        self.service(request, response)
        return response(environ, start_response)

    def service(self, request, response):
        out = response.get_writer()
        page_context = self.create_page_context(out, request, response)
        try:
            self.render(page_context)
        finally:
            page_context.completed()

    def create_page_context(self, out, request, response):
        return self.page_context_class(out, request, response,
                                       request.resources, **self.config)

    def render(self, page_context):
        raise NotImplementedError


def make_page_config(global_conf, **local_conf):
    """
    Converts ``paste.deploy`` configuration into keyword arguments for
    ``Page``: ``view_prefixes`` and ``view_postfixes`` are whitespace
    separated lists; a prefix of ``/`` stands for the root.
    """
    config = {}
    for name in ('view_prefixes', 'view_postfixes'):
        if name in local_conf:
            values = aslist(local_conf[name])
            config[name] = ['' if value == '/' else value for value in values]
    for name in ('null_string', 'default_character_encoding'):
        if name in local_conf:
            config[name] = local_conf[name]
    return config
