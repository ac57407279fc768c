import pytest

from pageview.fixture import AppError, TestApp
from pageview.wsgiwrappers import WSGIRequest


class SimpleApplication(object):

    def __call__(self, environ, start_response):
        self.request = WSGIRequest(environ)
        status = environ.get('HTTP_X_STATUS', '200 OK')
        if self.request.path_info == '/errors':
            environ['wsgi.errors'].write('something went wrong')
        start_response(status, [('Content-Type',
                                 'text/html; charset=utf-8')])
        return [('<html>\n  <body>hello   %s</body></html>'
                 % self.request.get_parameter('name')).encode('utf-8')]


def test_fixture():
    app = SimpleApplication()
    test_app = TestApp(app)
    res = test_app.get('/', params={'name': 'sm\xf6rebr\xf6'})
    assert (app.request.environ['QUERY_STRING'] ==
            'name=sm%C3%B6rebr%C3%B6')
    assert res.status == 200
    assert res.charset == 'utf-8'
    assert 'hello sm\xf6rebr\xf6' in res
    res.mustcontain('<html>', '</html>')
    with pytest.raises(IndexError):
        res.mustcontain('goodbye')
    assert res.header('content-type') == 'text/html; charset=utf-8'
    assert res.all_headers('X-Missing') == []
    with pytest.raises(KeyError):
        res.header('X-Missing')
    assert res.header('X-Missing', None) is None


def test_post_params():
    app = SimpleApplication()
    TestApp(app).post('/', params={'name': 'bob'})
    assert app.request.method == 'POST'
    assert app.request.POST.items() == [('name', 'bob')]


def test_status_checks():
    test_app = TestApp(SimpleApplication())
    with pytest.raises(AppError):
        test_app.get('/', headers={'X-Status': '404 Not Found'})
    res = test_app.get('/', headers={'X-Status': '404 Not Found'},
                       status=404)
    assert res.full_status == '404 Not Found'
    test_app.get('/', headers={'X-Status': '302 Found'})
    test_app.get('/', headers={'X-Status': '500 Server Error'}, status='*')


def test_errors_logged():
    test_app = TestApp(SimpleApplication())
    with pytest.raises(AppError):
        test_app.get('/errors')
    res = test_app.get('/errors', expect_errors=True)
    assert res.errors == 'something went wrong'


def test_extra_environ():
    app = SimpleApplication()
    TestApp(app, extra_environ={'REMOTE_USER': 'bob'}).get('/')
    assert app.request.environ['REMOTE_USER'] == 'bob'
    assert app.request.environ['pageview.testing']
