from pageview.wsgilib import (
    has_header, header_value, raw_interactive, remove_header)


def app_iterable_func_bytes():
    yield b'a'
    yield b'b'
    yield b'c'


class ClosingApp(object):

    def __init__(self):
        self.closed = False

    def __call__(self, environ, start_response):
        start_response('200 OK', [('Content-Type', 'text/plain')])
        environ['wsgi.errors'].write('a warning')
        self.environ = environ
        return self

    def __iter__(self):
        return app_iterable_func_bytes()

    def close(self):
        self.closed = True


def test_raw_interactive():
    app = ClosingApp()
    status, headers, body, errors = raw_interactive(
        app, '/path?x=1', HTTP_ACCEPT='text/html', wsgi__input=b'data')
    assert status == '200 OK'
    assert headers == [('Content-Type', 'text/plain')]
    assert body == b'abc'
    assert errors == 'a warning'
    assert app.closed
    assert app.environ['PATH_INFO'] == '/path'
    assert app.environ['QUERY_STRING'] == 'x=1'
    assert app.environ['HTTP_ACCEPT'] == 'text/html'
    assert app.environ['wsgi.input'].read() == b'data'
    assert app.environ['CONTENT_LENGTH'] == 4


def test_headers():
    headers = [('Content-Type', 'text/plain'), ('X-A', '1'), ('x-a', '2')]
    assert has_header(headers, 'content-type')
    assert not has_header(headers, 'Location')
    assert header_value(headers, 'X-A') == '1,2'
    assert header_value(headers, 'Location') is None
    assert remove_header(headers, 'X-a') == '2'
    assert headers == [('Content-Type', 'text/plain')]
    assert remove_header(headers, 'X-A') is None
