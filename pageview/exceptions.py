# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Errors raised while rendering a page.

Every error is an ``HTTPServerError``, so an
``HTTPExceptionHandler`` placed in front of the application reports
it as a ``500 Internal Server Error`` whose detail is the message.
"""

from pageview.httpexceptions import HTTPServerError

__all__ = ['PageError', 'NoSuchAttributeError', 'NoSuchParameterError',
           'NullModelError', 'NoViewTemplateError',
           'DispatchUnavailableError', 'DispatchLoopError',
           'WriterStreamConflictError']


def type_name(obj):
    cls = type(obj)
    return '%s.%s' % (cls.__module__, cls.__qualname__)


class PageError(HTTPServerError):

    def __init__(self, message):
        HTTPServerError.__init__(self, detail=message)
        self.message = message

    def __str__(self):
        return self.message


class NoSuchAttributeError(PageError):

    """
    A required request attribute is missing.
    """

    def __init__(self, attribute):
        PageError.__init__(
            self, "No attribute called '%s' was available in this page"
            % attribute)
        self.attribute = attribute


class NoSuchParameterError(NoSuchAttributeError):

    def __init__(self, parameter):
        PageError.__init__(
            self, "No parameter called '%s' was given in this request"
            % parameter)
        self.attribute = self.parameter = parameter


class NullModelError(PageError):

    def __init__(self, message='No model object given!'):
        PageError.__init__(self, message)


class NoViewTemplateError(PageError):

    """
    No class in the model's type lineage has a dispatchable template
    for the view.
    """

    def __init__(self, model, view):
        PageError.__init__(
            self, "No '%s' view template could be found for model object "
            "'%s' of type: %s" % (view, model, type_name(model)))
        self.model = model
        self.view = view


class DispatchUnavailableError(PageError):

    def __init__(self, path):
        PageError.__init__(
            self, 'No dispatcher available for path: %s' % path)
        self.path = path


class DispatchLoopError(PageError):

    def __init__(self, path, visited):
        PageError.__init__(
            self, "Dispatch loop detected; %r visited twice (internal "
            "dispatch path: %s)" % (path, ', '.join(visited)))
        self.path = path
        self.visited = list(visited)


class WriterStreamConflictError(PageError):

    """
    A response was asked for a text writer after its byte stream was
    handed out, or the other way around.
    """
