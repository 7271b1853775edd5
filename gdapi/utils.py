import rfc3987
from flask import json

from .exceptions import InvalidUrl


def parse_url(url, rule='URI'):
    """
    Split a URL into its ``scheme``, ``authority``, ``path``, ``query`` and ``fragment`` components.

    :param str url: the URL to parse
    :param str rule: the RFC 3987 grammar rule to match, ``URI`` or ``URI_reference``
    :raises InvalidUrl: if the URL does not match the grammar
    """
    try:
        parts = rfc3987.parse(url, rule=rule)
    except (ValueError, TypeError):
        raise InvalidUrl(url)
    return {k: parts.get(k) for k in ('scheme', 'authority', 'path', 'query', 'fragment')}


def compose_url(scheme=None, authority=None, path=None, query=None, fragment=None):
    url = ''
    if scheme is not None:
        url += scheme + ':'
    if authority is not None:
        url += '//' + authority
    url += path or ''
    if query is not None:
        url += '?' + query
    if fragment is not None:
        url += '#' + fragment
    return url


def remove_dot_segments(path):
    """
    Collapse ``.`` and ``..`` segments of an absolute path.

    A ``..`` that would climb above the root is kept as a literal segment: ``/a/../../b`` becomes ``/../b``.
    """
    segments = path.split('/')
    if segments and segments[0] == '':
        segments.pop(0)

    i = 1
    while i < len(segments):
        if segments[i - 1] == '.':
            del segments[i - 1]
            if i > 1:
                i -= 1
        elif segments[i] == '..' and segments[i - 1] != '..':
            del segments[i - 1:i + 1]
            if i > 1:
                i -= 1
                # keep the trailing slash of "a/b/.."
                if i == len(segments):
                    segments.append('')
        else:
            i += 1

    if segments and segments[-1] == '.':
        segments[-1] = ''

    return '/' + '/'.join(segments)


def abs_url(base, url):
    """
    Join an API base URL and a path fragment into an absolute URL.

    The base is always treated as a directory and a single leading slash on ``url`` is ignored, so
    ``abs_url('http://example.com/v1', '/schemas')`` and ``abs_url('http://example.com/v1/', 'schemas')``
    both return ``http://example.com/v1/schemas``.

    :param str base: absolute base URL
    :param str url: relative reference or absolute URL
    :raises InvalidUrl: if either argument cannot be parsed
    """
    if base is None:
        raise InvalidUrl(base)
    if url is None:
        url = ''

    base = parse_url(base)
    base['path'] = (base['path'] or '').rstrip('/') + '/'

    if url.startswith('/'):
        url = url[1:]
    ref = parse_url(url, rule='URI_reference')

    if ref['scheme'] is not None:
        return url

    target = dict(ref, scheme=base['scheme'])
    if ref['authority'] is None:
        target['authority'] = base['authority']
        if not ref['path']:
            target['path'] = base['path']
            if ref['query'] is None:
                target['query'] = base['query']
        elif ref['path'].startswith('/'):
            target['path'] = remove_dot_segments(ref['path'])
        else:
            merged = base['path'][:base['path'].rfind('/') + 1] + ref['path']
            target['path'] = remove_dot_segments(merged)
    elif ref['path']:
        target['path'] = remove_dot_segments(ref['path'])

    return compose_url(**target)


def _to_json(obj):
    if hasattr(obj, 'to_json'):
        return obj.to_json()
    raise TypeError('Object of type {} is not JSON serializable'.format(obj.__class__.__name__))


def json_dumps(obj, pretty=False):
    """
    Serialize ``obj`` to a JSON string. Resources, including those nested in fields, are written as their fields.
    """
    settings = {'default': _to_json}
    if pretty:
        settings['indent'] = 4
        settings['sort_keys'] = True
    return json.dumps(obj, **settings)
