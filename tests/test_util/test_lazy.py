from pageview.util.lazy import Lazy


def test_factory_called_once():
    calls = []

    def factory():
        calls.append(1)
        return object()
    cell = Lazy(factory)
    assert not cell.initialized
    value = cell()
    assert cell() is value
    assert calls == [1]
    assert cell.initialized


def test_assignment_skips_factory():
    def factory():
        raise AssertionError('factory should not be called')
    cell = Lazy(factory)
    assert cell('assigned') is None
    assert cell() == 'assigned'
    cell(None)
    assert cell() is None
    assert 'value=None' in repr(cell)
