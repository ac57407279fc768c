# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
The page context: what a page's ``render`` method works with.
"""

import logging

from pageview.exceptions import (
    DispatchUnavailableError, NoSuchAttributeError, NoSuchParameterError,
    NoViewTemplateError, NullModelError)
from pageview import formatting
from pageview.formatting import (
    DATE, MARKUP, MARKUP_SEQUENCE, NULL, NUMBER, LocaleFormatter,
    value_kind)
from pageview.recursive import RequestWrapper, ResponseWrapper
from pageview.resolver import resolve_view
from pageview.util.lazy import Lazy
from pageview.util.quoting import xml_escape

__all__ = ['PageContext', 'RESOURCE_BEAN_ATTRIBUTE']

log = logging.getLogger(__name__)

# The attribute holding the object a page or view renders
RESOURCE_BEAN_ATTRIBUTE = 'it'


class PageContext(object):

    """
    Helpers for a page to use the request and response it is rendering:
    attributes and parameters, views of model objects, includes and
    forwards, and writing values to `out` formatted for the locale of
    the request.

    One context serves one request; it is not shared between requests
    or threads.

    Configuration:

    ``null_string``
        What ``to_string`` gives for None.

    ``view_prefixes``, ``view_postfixes``
        The directories and extensions tried when looking for a view
        (see ``pageview.resolver``).

    ``default_character_encoding``
        How views that write bytes are decoded.
    """

    def __init__(self, out, request, response, resources, null_string='',
                 view_prefixes=('WEB-INF', ''), view_postfixes=('.ssp',),
                 default_character_encoding='ISO-8859-1'):
        self.out = out
        self.request = request
        self.response = response
        self.resources = resources
        self.null_string = null_string
        self.view_prefixes = list(view_prefixes)
        self.view_postfixes = list(view_postfixes)
        self.default_character_encoding = default_character_encoding
        self._number_format = Lazy(lambda: formatting.number_format(self.locale))
        self._percent_format = Lazy(lambda: formatting.percent_format(self.locale))
        self._date_format = Lazy(lambda: formatting.date_format(self.locale))

    def completed(self):
        """
        Called after each page completes
        """
        self.out.flush()

    ## Attributes and parameters

    def attribute(self, name):
        """
        Returns the attribute `name`, raising ``NoSuchAttributeError`` if
        it is not available
        """
        value = self.request.get_attribute(name)
        if value is None:
            raise NoSuchAttributeError(name)
        return value

    def attribute_or_else(self, name, default):
        value = self.request.get_attribute(name)
        if value is None:
            return default
        return value

    def resource(self):
        """
        Returns the object bound to this request by the resource layer
        (the ``it`` attribute)
        """
        return self.attribute(RESOURCE_BEAN_ATTRIBUTE)

    def resource_or_else(self, default):
        return self.attribute_or_else(RESOURCE_BEAN_ATTRIBUTE, default)

    def parameter(self, name):
        value = self.request.get_parameter(name)
        if value is None:
            raise NoSuchParameterError(name)
        return value

    def parameter_or_else(self, name, default):
        value = self.request.get_parameter(name)
        if value is None:
            return default
        return value

    ## Rendering

    def include(self, path):
        """
        Includes the given page inside this page
        """
        self.get_request_dispatcher(path).include(self.request, self.response)

    def forward(self, path):
        """
        Forwards this request to the given page
        """
        self.get_request_dispatcher(path).forward(self.request, self.response)

    def get_request_dispatcher(self, path):
        dispatcher = self.request.get_request_dispatcher(path)
        if dispatcher is None:
            raise DispatchUnavailableError(path)
        return dispatcher

    def view(self, model, view='index'):
        """
        Renders the view of the given model object, looking for the view in
        package/module/ClassName.view.ssp (see ``pageview.resolver``)

        The view sees the model as the ``it`` attribute.  Its output is
        captured and only written to `out` once the view has finished,
        so nothing reaches `out` if it fails.
        """
        if model is None:
            raise NullModelError()
        found = None
        if self.resources is not None:
            found = resolve_view(self.request, self.resources, model, view,
                                 self.view_prefixes, self.view_postfixes)
        if found is None:
            raise NoViewTemplateError(model, view)
        path, dispatcher = found
        self.out.flush()

        wrapped_request = RequestWrapper(self.request)
        wrapped_response = ResponseWrapper(
            self.response, default_encoding=self.default_character_encoding)
        wrapped_request.set_attribute(RESOURCE_BEAN_ATTRIBUTE, model)
        try:
            dispatcher.render(wrapped_request, wrapped_response)
            text = wrapped_response.get_string()
        finally:
            wrapped_response.close()
        log.debug('View %s wrote %d characters', path, len(text))
        self.out.write(text)

    ## Writing values

    def to_string(self, value):
        """
        Converts the value to a string so it can be output on the screen,
        which uses the ``null_string`` value for None
        """
        kind = value_kind(value)
        if kind == DATE:
            return self.date_format(value)
        elif kind == NUMBER:
            return self.number_format(value)
        elif kind == NULL:
            return self.null_string
        elif kind == MARKUP_SEQUENCE:
            return ''.join([str(node) for node in value])
        return str(value)

    def write(self, value):
        """
        Writes the value to `out`; markup is written as it is, anything
        else through ``to_string``
        """
        kind = value_kind(value)
        if kind == MARKUP:
            self.out.write(value.__html__())
        elif kind == MARKUP_SEQUENCE:
            for node in value:
                self.out.write(node.__html__())
        else:
            self.out.write(self.to_string(value))

    def write_xml_escape(self, value):
        """
        Writes the value to `out` XML escaped; markup is passed through
        as it is.  None is written as the ``null_string`` value.
        """
        if value_kind(value) in (MARKUP, MARKUP_SEQUENCE):
            self.write(value)
        else:
            self.out.write(xml_escape(self.to_string(value)))

    def format(self, pattern, *args, **kw):
        """
        Returns the formatted string using the locale of the users
        request or the default locale if not available
        """
        return LocaleFormatter(self.locale).format(pattern, *args, **kw)

    def percent(self, number):
        return self.percent_format(number)

    ## Locale based formatters

    @property
    def locale(self):
        locale = self.request.locale
        if locale is None:
            return formatting.get_default_locale()
        return locale

    @property
    def number_format(self):
        return self._number_format()

    @number_format.setter
    def number_format(self, value):
        self._number_format(value)

    @property
    def percent_format(self):
        return self._percent_format()

    @percent_format.setter
    def percent_format(self, value):
        self._percent_format(value)

    @property
    def date_format(self):
        return self._date_format()

    @date_format.setter
    def date_format(self, value):
        self._date_format(value)
