import os
import string
from io import BytesIO, StringIO

import pytest

from pageview.context import PageContext
from pageview.resources import ResourceContext
from pageview.wsgiwrappers import WSGIRequest, WSGIResponse

VIEW_DATA = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                         'view_data')


def make_template(filename):
    """
    Stand-in template engine: substitutes ``$it``, ``$name`` (of the
    ``it`` attribute) and ``$method``.
    """
    with open(filename, 'rb') as f:
        template = string.Template(f.read().decode('utf-8'))

    def template_app(environ, start_response):
        request = WSGIRequest(environ)
        it = request.get_attribute('it')
        body = template.safe_substitute(
            it=it, name=getattr(it, 'name', ''), method=request.method)
        start_response('200 OK',
                       [('Content-Type', 'text/html; charset=utf-8')])
        return [body.encode('utf-8')]
    return template_app


def make_environ(path='/', **environ):
    basic_environ = {
        'REQUEST_METHOD': 'GET',
        'SCRIPT_NAME': '',
        'PATH_INFO': path,
        'SERVER_NAME': 'localhost',
        'SERVER_PORT': '80',
        'wsgi.url_scheme': 'http',
        'wsgi.input': BytesIO(),
        'wsgi.errors': StringIO(),
        }
    basic_environ.update(environ)
    return basic_environ


@pytest.fixture
def view_data():
    return VIEW_DATA


@pytest.fixture
def resources():
    return ResourceContext(VIEW_DATA, constructors={'.ssp': make_template})


@pytest.fixture
def make_request(resources):
    def make_request(path='/page', **environ):
        environ.setdefault('pageview.resources', resources)
        return WSGIRequest(make_environ(path, **environ))
    return make_request


@pytest.fixture
def make_context(resources, make_request):
    def make_context(path='/page', environ=None, **config):
        request = make_request(path, **(environ or {}))
        response = WSGIResponse()
        return PageContext(response.get_writer(), request, response,
                           resources, **config)
    return make_context
