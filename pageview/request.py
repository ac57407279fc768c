# (c) 2005 Ian Bicking and contributors
# This module is part of the Python Paste Project and is released under
# the MIT License: http://www.opensource.org/licenses/mit-license.php
"""
This module provides helper routines with work directly on a WSGI
environment to solve common requirements.

   * parse_querystring(environ)
   * parse_formvars(environ, include_get_vars=True)
   * parse_accept_language(environ)
   * construct_url(environ, with_query_string=True, with_path_info=True,
                   script_name=None, path_info=None, querystring=None)
   * path_info_split(path_info)

"""
from urllib.parse import parse_qsl

from pageview.util.multidict import MultiDict

__all__ = ['parse_querystring', 'parse_formvars', 'parse_accept_language',
           'construct_url', 'path_info_split']


def parse_querystring(environ):
    """
    Parses a query string into a list like ``[(name, value)]``.
    Caches this value in case parse_querystring is called again
    for the same request.

    You can pass the result to ``dict()``, but be aware that keys that
    appear multiple times will be lost (only the last value will be
    preserved).

    """
    source = environ.get('QUERY_STRING', '')
    if not source:
        return []
    if 'pageview.parsed_querystring' in environ:
        parsed, check_source = environ['pageview.parsed_querystring']
        if check_source == source:
            return parsed
    parsed = parse_qsl(source, keep_blank_values=True,
                       strict_parsing=False)
    environ['pageview.parsed_querystring'] = (parsed, source)
    return parsed


def parse_formvars(environ, include_get_vars=True):
    """Parses the request, returning a MultiDict of the keys.

    Only ``application/x-www-form-urlencoded`` bodies are read; other
    bodies leave ``wsgi.input`` alone and contribute nothing.

    If ``include_get_vars`` is true, then GET (query string) variables
    will also be folded into the result, after the body variables.

    """
    # The body can be read once only, so its variables are cached
    # (keyed on the input stream) and the query string added on top.
    source = environ.get('wsgi.input')
    body_vars = None
    if 'pageview.parsed_formvars' in environ:
        parsed, check_source = environ['pageview.parsed_formvars']
        if check_source is source:
            body_vars = parsed
    if body_vars is None:
        body_vars = []
        content_type = environ.get('CONTENT_TYPE', '').split(';', 1)[0].strip()
        if (environ.get('REQUEST_METHOD') == 'POST'
            and content_type in ('', 'application/x-www-form-urlencoded')):
            try:
                length = int(environ.get('CONTENT_LENGTH') or 0)
            except ValueError:
                length = 0
            if length > 0:
                body = environ['wsgi.input'].read(length)
                body_vars = parse_qsl(body.decode('utf-8', 'replace'),
                                      keep_blank_values=True)
        environ['pageview.parsed_formvars'] = (body_vars, source)
    formvars = MultiDict(body_vars)
    if include_get_vars:
        formvars.extend(parse_querystring(environ))
    return formvars


def parse_accept_language(environ):
    """
    Returns the language tags of the ``Accept-Language`` header, best
    quality first.  Tags without an explicit quality count as ``q=1``;
    ``*`` is dropped.
    """
    header = environ.get('HTTP_ACCEPT_LANGUAGE', '')
    languages = []
    for position, part in enumerate(header.split(',')):
        part = part.strip()
        if not part:
            continue
        if ';' in part:
            lang, params = part.split(';', 1)
            quality = 1.0
            for param in params.split(';'):
                name, _, value = param.strip().partition('=')
                if name == 'q':
                    try:
                        quality = float(value)
                    except ValueError:
                        quality = 0.0
        else:
            lang, quality = part, 1.0
        lang = lang.strip()
        if lang == '*' or quality <= 0:
            continue
        languages.append((-quality, position, lang))
    languages.sort()
    return [lang for _, _, lang in languages]


def construct_url(environ, with_query_string=True, with_path_info=True,
                  script_name=None, path_info=None, querystring=None):
    """Reconstructs the URL from the WSGI environment.

    You may override SCRIPT_NAME, PATH_INFO, and QUERYSTRING with
    the keyword arguments.

    """
    url = environ['wsgi.url_scheme']+'://'

    if environ.get('HTTP_HOST'):
        url += environ['HTTP_HOST'].split(':')[0]
    else:
        url += environ['SERVER_NAME']

    if environ['wsgi.url_scheme'] == 'https':
        if environ['SERVER_PORT'] != '443':
            url += ':' + environ['SERVER_PORT']
    else:
        if environ['SERVER_PORT'] != '80':
            url += ':' + environ['SERVER_PORT']

    if script_name is None:
        url += environ.get('SCRIPT_NAME', '')
    else:
        url += script_name
    if with_path_info:
        if path_info is None:
            url += environ.get('PATH_INFO', '')
        else:
            url += path_info
    if with_query_string:
        if querystring is None:
            if environ.get('QUERY_STRING'):
                url += '?' + environ['QUERY_STRING']
        elif querystring:
            url += '?' + querystring
    return url


def path_info_split(path_info):
    """
    Splits off the first segment of the path.  Returns (first_part,
    rest_of_path).  first_part can be None (if PATH_INFO is empty), ''
    (if PATH_INFO is '/'), or a name without any /'s.  rest_of_path
    can be '' or a string starting with /.

    """
    if not path_info:
        return None, ''
    assert path_info.startswith('/'), (
        "PATH_INFO should start with /: %r" % path_info)
    path_info = path_info.lstrip('/')
    if '/' in path_info:
        first, rest = path_info.split('/', 1)
        return first, '/' + rest
    else:
        return path_info, ''
