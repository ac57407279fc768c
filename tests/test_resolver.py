from pageview.resolver import (
    class_path, resolve_view, resolve_view_for_type, type_lineage, view_paths)
from pageview.resources import ResourceContext
from pageview.wsgiwrappers import WSGIRequest

from conftest import make_environ
from zoo import Animal, Dog, Puppy


class Foo(object):
    __module__ = 'com.example'


class Root(object):
    __module__ = 'chain'


class Middle(Root):
    __module__ = 'chain'


class Leaf(Middle):
    __module__ = 'chain'


def text_app(text):
    def app(environ, start_response):
        start_response('200 OK', [('Content-Type', 'text/plain')])
        return [text.encode('ascii')]
    return app


class RecordingResources(ResourceContext):

    def __init__(self, *args, **kw):
        ResourceContext.__init__(self, *args, **kw)
        self.looked_up = []

    def get_resource(self, path):
        self.looked_up.append(path)
        return ResourceContext.get_resource(self, path)


def request_for(resources):
    return WSGIRequest(make_environ('/page', **{
        'pageview.resources': resources}))


def test_type_lineage_stops_before_object():
    assert type_lineage(Puppy) == [Puppy, Dog, Animal]
    assert type_lineage(object) == []


def test_class_path():
    assert class_path(Foo) == 'com/example/Foo'
    assert class_path(Dog) == 'zoo/Dog'


def test_candidate_order():
    assert view_paths(Foo, 'v', ['WEB-INF', ''], ['.ssp']) == [
        '/WEB-INF/com/example/Foo.v.ssp', '/com/example/Foo.v.ssp']
    assert view_paths(Foo, 'index', ['a', 'b'], ['.x', '.y']) == [
        '/a/com/example/Foo.index.x', '/a/com/example/Foo.index.y',
        '/b/com/example/Foo.index.x', '/b/com/example/Foo.index.y']


def test_search_order_before_ascending():
    resources = RecordingResources()
    request = request_for(resources)
    assert resolve_view(request, resources, Foo(), 'v',
                        ['WEB-INF', ''], ['.ssp']) is None
    assert resources.looked_up == [
        '/WEB-INF/com/example/Foo.v.ssp', '/com/example/Foo.v.ssp']


def test_ascends_to_ancestor():
    resources = RecordingResources(
        mounts={'/chain/Root.index.ssp': text_app('root')})
    request = request_for(resources)
    path, dispatcher = resolve_view(request, resources, Leaf(), 'index',
                                    ['WEB-INF', ''], ['.ssp'])
    assert path == '/chain/Root.index.ssp'
    assert dispatcher.application is resources.mounts[path]
    assert resources.looked_up == [
        '/WEB-INF/chain/Leaf.index.ssp', '/chain/Leaf.index.ssp',
        '/WEB-INF/chain/Middle.index.ssp', '/chain/Middle.index.ssp',
        '/WEB-INF/chain/Root.index.ssp', '/chain/Root.index.ssp']


def test_most_specific_class_wins():
    resources = ResourceContext(mounts={
        '/chain/Root.index.ssp': text_app('root'),
        '/chain/Middle.index.ssp': text_app('middle'),
        })
    path, dispatcher = resolve_view(request_for(resources), resources,
                                    Leaf(), 'index', [''], ['.ssp'])
    assert path == '/chain/Middle.index.ssp'


def test_first_prefix_wins():
    resources = ResourceContext(mounts={
        '/WEB-INF/chain/Leaf.index.ssp': text_app('hidden'),
        '/chain/Leaf.index.ssp': text_app('public'),
        })
    path, dispatcher = resolve_view_for_type(
        request_for(resources), resources, 'index', Leaf,
        ['WEB-INF', ''], ['.ssp'])
    assert path == '/WEB-INF/chain/Leaf.index.ssp'


def test_resolving_twice_gives_same_path(resources):
    request = request_for(resources)
    first = resolve_view(request, resources, Puppy('Rex'), 'index',
                         ['WEB-INF', ''], ['.ssp'])
    second = resolve_view(request, resources, Puppy('Rex'), 'index',
                          ['WEB-INF', ''], ['.ssp'])
    assert first[0] == second[0] == '/zoo/Dog.index.ssp'


def test_existing_but_undispatchable_is_skipped(resources):
    request = request_for(resources)
    assert resources.get_resource('/zoo/Animal.raw.txt') is not None
    assert resolve_view(request, resources, Animal('Cat'), 'raw',
                        ['WEB-INF', ''], ['.txt']) is None


def test_dispatchable_but_missing_is_skipped():
    resources = ResourceContext()

    class Everywhere(object):
        def get_request_dispatcher(self, path):
            return object()
    assert resolve_view_for_type(Everywhere(), resources, 'index', Root,
                                 [''], ['.ssp']) is None
