# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Finding the view template of a model object.

A view named ``index`` of a ``com.example.Foo`` instance is looked up
at ``/<prefix>/com/example/Foo.index<postfix>`` for every prefix (outer
loop) and postfix (inner loop); an empty prefix gives
``/com/example/Foo.index<postfix>``.  When no candidate of a class is
dispatchable the search moves on to the next class of the model's type
lineage, stopping before ``object``.  The first candidate that exists
*and* yields a dispatcher wins.

Nothing is cached; resolving the same view twice searches twice.
"""

import inspect
import logging

__all__ = ['type_lineage', 'class_path', 'view_paths',
           'resolve_view_for_type', 'resolve_view']

log = logging.getLogger(__name__)


def type_lineage(cls):
    """
    The classes whose views apply to instances of `cls`, most specific
    first: its method resolution order without ``object``.
    """
    return [c for c in inspect.getmro(cls) if c is not object]


def class_path(cls):
    """``com.example.Foo`` becomes ``com/example/Foo``"""
    return ('%s.%s' % (cls.__module__, cls.__qualname__)).replace('.', '/')


def view_paths(cls, view, prefixes, postfixes):
    """
    The candidate paths for `view` of class `cls`, in search order.
    """
    paths = []
    for prefix in prefixes:
        for postfix in postfixes:
            path = class_path(cls) + '.' + view + postfix
            if not prefix:
                paths.append('/' + path)
            else:
                paths.append('/' + prefix + '/' + path)
    return paths


def resolve_view_for_type(request, resources, view, cls, prefixes,
                          postfixes):
    """
    Looks for `view` among the candidates of `cls` only.

    Returns ``(path, dispatcher)`` for the first candidate that exists
    in `resources` and that `request` can dispatch to, else None.
    """
    for full_path in view_paths(cls, view, prefixes, postfixes):
        if resources.get_resource(full_path) is None:
            log.debug('No resource at %s', full_path)
            continue
        dispatcher = request.get_request_dispatcher(full_path)
        if dispatcher is not None:
            return full_path, dispatcher
        log.debug('Resource %s exists but cannot be dispatched to',
                  full_path)
    return None


def resolve_view(request, resources, model, view, prefixes, postfixes):
    """
    Looks for `view` of `model`, walking up its type lineage.

    Returns ``(path, dispatcher)`` or None.
    """
    for cls in type_lineage(type(model)):
        found = resolve_view_for_type(request, resources, view, cls,
                                      prefixes, postfixes)
        if found is not None:
            log.debug('Resolved %r view of %s to %s', view,
                      cls.__qualname__, found[0])
            return found
    log.warning('No %r view found for %r', view, model)
    return None
