# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
from collections.abc import MutableMapping

from pageview.util import NO_DEFAULT


class MultiDict(MutableMapping):

    """
    An ordered dictionary that can have multiple values for each key.
    Adds the methods getall, getone, and add to the normal dictionary
    interface.  Item access returns the first value for a key.
    """

    def __init__(self, *args, **kw):
        if len(args) > 1:
            raise TypeError(
                "MultiDict can only be called with one positional argument")
        if args and kw:
            raise TypeError(
                "MultiDict can be called with a positional argument *or* "
                "keyword arguments, not both")
        if args:
            if hasattr(args[0], 'items'):
                items = list(args[0].items())
            else:
                items = list(args[0])
            self._items = items
        elif kw:
            self._items = list(kw.items())
        else:
            self._items = []

    def __getitem__(self, key):
        for k, v in self._items:
            if k == key:
                return v
        raise KeyError(repr(key))

    def __setitem__(self, key, value):
        try:
            del self[key]
        except KeyError:
            pass
        self._items.append((key, value))

    def add(self, key, value):
        """
        Add the key and value, not overwriting any previous value.
        """
        self._items.append((key, value))

    def getall(self, key):
        """
        Return a list of all values matching the key (may be an empty list)
        """
        return [v for k, v in self._items if k == key]

    def getone(self, key):
        """
        Get one value matching the key, raising a KeyError if multiple
        values were found.
        """
        v = self.getall(key)
        if not v:
            raise KeyError('Key not found: %r' % key)
        if len(v) > 1:
            raise KeyError('Multiple values match %r: %r' % (key, v))
        return v[0]

    def __delitem__(self, key):
        items = self._items
        found = False
        for i in range(len(items)-1, -1, -1):
            if items[i][0] == key:
                del items[i]
                found = True
        if not found:
            raise KeyError(repr(key))

    def __contains__(self, key):
        for k, v in self._items:
            if k == key:
                return True
        return False

    def pop(self, key, default=NO_DEFAULT):
        for i in range(len(self._items)):
            if self._items[i][0] == key:
                v = self._items[i][1]
                del self._items[i]
                return v
        if default is NO_DEFAULT:
            raise KeyError(repr(key))
        return default

    def extend(self, other):
        """
        Add every pair of `other` (a mapping or a sequence of pairs)
        without replacing existing values.
        """
        if hasattr(other, 'items'):
            other = other.items()
        for k, v in other:
            self._items.append((k, v))

    def __repr__(self):
        items = ', '.join(['(%r, %r)' % v for v in self._items])
        return 'MultiDict([%s])' % items

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        for k, v in self._items:
            yield k

    def items(self):
        return self._items[:]

    def values(self):
        return [v for k, v in self._items]
