# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
A lazily initialized, re-settable value.
"""

from pageview.util import NO_DEFAULT

__all__ = ['Lazy']


class Lazy(object):

    """
    Holds a factory and the value it produces.

    Calling the cell with no arguments returns the value, calling the
    factory the first time only.  Calling it with one argument replaces
    the value; the factory is then never called::

        >>> cell = Lazy(lambda: 'built')
        >>> cell()
        'built'
        >>> cell('assigned')
        >>> cell()
        'assigned'
    """

    def __init__(self, factory):
        self.factory = factory
        self.value = NO_DEFAULT

    def __call__(self, value=NO_DEFAULT):
        if value is not NO_DEFAULT:
            self.value = value
            return None
        if self.value is NO_DEFAULT:
            self.value = self.factory()
        return self.value

    @property
    def initialized(self):
        return self.value is not NO_DEFAULT

    def __repr__(self):
        if self.initialized:
            return '<%s value=%r>' % (self.__class__.__name__, self.value)
        return '<%s factory=%r>' % (self.__class__.__name__, self.factory)
