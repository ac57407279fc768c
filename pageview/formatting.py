# (c) 2005 Ian Bicking and contributors; written for Paste (http://pythonpaste.org)
# Licensed under the MIT license: http://www.opensource.org/licenses/mit-license.php
"""
Locale-aware formatting of the values a page writes out.

Values fall into one of the kinds below; ``value_kind`` tells which.
Dates and numbers are formatted for a locale using Babel, markup (any
object with an ``__html__`` method, like ``markupsafe.Markup``) is
written as it is.
"""

import datetime
import decimal
import functools
import numbers
import string

from babel import Locale, UnknownLocaleError, default_locale
from babel.dates import format_date
from babel.numbers import format_decimal, format_percent

from pageview.util.quoting import is_markup

__all__ = ['DATE', 'NUMBER', 'MARKUP', 'MARKUP_SEQUENCE', 'NULL', 'OTHER',
           'value_kind', 'get_default_locale', 'number_format',
           'percent_format', 'date_format', 'LocaleFormatter']

DATE = 'date'
NUMBER = 'number'
MARKUP = 'markup'
MARKUP_SEQUENCE = 'markup_sequence'
NULL = 'null'
OTHER = 'other'

DATE_FORMATS = ('short', 'medium', 'long', 'full')

FALLBACK_LOCALE = 'en_US'


def value_kind(value):
    if value is None:
        return NULL
    if is_markup(value):
        return MARKUP
    if isinstance(value, (list, tuple)) and all(map(is_markup, value)):
        return MARKUP_SEQUENCE
    if isinstance(value, datetime.date):
        return DATE
    if isinstance(value, bool):
        return OTHER
    if isinstance(value, (numbers.Real, decimal.Decimal)):
        return NUMBER
    return OTHER


def get_default_locale():
    """
    The locale of the process (from ``LC_ALL``, ``LC_CTYPE``, ``LANG``
    or ``LANGUAGE``), or ``en_US`` when none is set.
    """
    try:
        return Locale.parse(default_locale() or FALLBACK_LOCALE)
    except (ValueError, UnknownLocaleError):
        return Locale.parse(FALLBACK_LOCALE)


def number_format(locale):
    return functools.partial(format_decimal, locale=locale)


def percent_format(locale):
    return functools.partial(format_percent, locale=locale)


def date_format(locale, format='full'):
    return functools.partial(format_date, format=format, locale=locale)


class LocaleFormatter(string.Formatter):

    """
    ``str.format`` for a locale.

    Numbers given the ``n`` format spec use the locale's decimal format
    (``'{0:n}'`` gives ``1,234.5`` in ``en_US`` and ``1.234,5`` in
    ``de_DE``); dates take ``short``, ``medium``, ``long`` or ``full``
    as their spec.  Everything else formats as ``str.format`` would.
    """

    def __init__(self, locale):
        self.locale = locale

    def format_field(self, value, format_spec):
        kind = value_kind(value)
        if kind == NUMBER and format_spec == 'n':
            return format_decimal(value, locale=self.locale)
        if kind == DATE and format_spec in DATE_FORMATS:
            return format_date(value, format=format_spec, locale=self.locale)
        return string.Formatter.format_field(self, value, format_spec)
