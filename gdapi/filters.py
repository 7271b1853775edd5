"""
Query string construction for collection queries.

A filter specification maps a field name to either a plain value, which is an equality condition, or a list of
conditions, each an object with an optional ``modifier`` (defaults to ``eq``) and a ``value``::

    {
        "name": "apple",
        "price": [
            {"modifier": "gte", "value": 1},
            {"modifier": "lt", "value": 5}
        ]
    }

This is encoded as ``?name=apple&price_gte=1&price_lt=5``. Fields are always emitted in lexicographic order and
fields whose value is ``null`` are skipped.
"""
from collections import namedtuple
from urllib.parse import unquote_plus, urlencode

from jsonschema import Draft4Validator

from .exceptions import InvalidFilter
from .utils import parse_url, compose_url

EQUALITY_MODIFIER = 'eq'

_SCALAR_SCHEMA = {"type": ["string", "number", "boolean", "null"]}

FILTERS_SCHEMA = {
    "type": "object",
    "additionalProperties": {
        "anyOf": [
            _SCALAR_SCHEMA,
            {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "modifier": {"type": ["string", "null"]},
                        "value": _SCALAR_SCHEMA
                    },
                    "additionalProperties": False
                }
            }
        ]
    }
}

PARAMS_SCHEMA = {
    "type": "object",
    "additionalProperties": _SCALAR_SCHEMA
}

_filters_validator = Draft4Validator(FILTERS_SCHEMA)
_params_validator = Draft4Validator(PARAMS_SCHEMA)


class Condition(namedtuple('Condition', ['field', 'modifier', 'value'])):

    @property
    def param(self):
        """Name of the query parameter, e.g. ``price_gte``; equality conditions use the bare field name."""
        if self.modifier == EQUALITY_MODIFIER:
            return self.field
        return '{}_{}'.format(self.field, self.modifier)


def _validate(validator, instance):
    errors = [
        {
            'path': tuple(error.absolute_path),
            'validationOf': {error.validator: error.validator_value},
            'message': error.message
        }
        for error in validator.iter_errors(instance)
    ]
    if errors:
        raise InvalidFilter(sorted(errors, key=lambda e: repr(e['path'])))


def format_value(value):
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def convert_filters(filters):
    """
    Yield a :class:`Condition` for every condition in a filter specification, ordered by field name.

    :raises InvalidFilter: if the specification is malformed
    """
    _validate(_filters_validator, filters)

    for field in sorted(filters):
        value = filters[field]
        if value is None:
            continue

        if isinstance(value, list):
            for condition in value:
                yield Condition(field, condition.get('modifier') or EQUALITY_MODIFIER, condition.get('value'))
        else:
            yield Condition(field, EQUALITY_MODIFIER, value)


def _split_query(query):
    """
    Split a raw query string into ``(name, segment)`` pairs. Segments stay percent-encoded exactly as given; only
    the name is decoded, for matching against parameters being set.
    """
    pairs = []
    for segment in (query or '').split('&'):
        if segment:
            pairs.append((unquote_plus(segment.split('=', 1)[0], errors='surrogateescape'), segment))
    return pairs


def _encode_param(key, value):
    return key, urlencode([(key, value)])


def _set_param(pairs, key, value):
    result = []
    found = False
    for k, segment in pairs:
        if k != key:
            result.append((k, segment))
        elif not found:
            result.append(_encode_param(key, value))
            found = True

    if not found:
        result.append(_encode_param(key, value))
    return result


def _query_url(url, filters, params):
    parts = parse_url(url)

    conditions = list(convert_filters(filters)) if filters else []
    if not (conditions or params):
        return url

    pairs = _split_query(parts['query'])

    for condition in conditions:
        pairs.append(_encode_param(condition.param, format_value(condition.value)))

    for key, value in params.items():
        pairs = _set_param(pairs, key, format_value(value))

    parts['query'] = '&'.join(segment for _, segment in pairs) if pairs else None
    return compose_url(**parts)


def add_filters_to_url(url, filters):
    """
    Append the query parameters for a filter specification to ``url``.

    Parameters already present on the URL are kept; conditions are always appended, never replaced.

    Example::

        >>> add_filters_to_url('http://example.com?sort=name', {'fname': [{'value': 'Fred'}]})
        'http://example.com?sort=name&fname=Fred'

    :param str url: URL to add the parameters to
    :param dict filters: a filter specification
    :raises InvalidUrl: if ``url`` cannot be parsed
    :raises InvalidFilter: if ``filters`` is malformed
    """
    return _query_url(url, filters, {})


def build_complex_query_url(url, filters=None, params=None):
    """
    Return ``url`` with the filter conditions appended and each of ``params`` set.

    Unlike filters, ``params`` replace any parameter of the same name already on the URL. If a ``sort`` is given
    without an ``order``, the order defaults to ``asc``.

    Example::

        >>> build_complex_query_url('http://example.com', {'foo': 'bar'}, {'sort': 'surname'})
        'http://example.com?foo=bar&sort=surname&order=asc'

    :param str url: URL to add the parameters to
    :param dict filters: an optional filter specification
    :param dict params: optional query parameters such as ``sort``, ``order``, ``limit`` or ``marker``
    :raises InvalidUrl: if ``url`` cannot be parsed
    :raises InvalidFilter: if ``filters`` or ``params`` is malformed
    """
    params = params or {}
    _validate(_params_validator, params)
    params = dict(params)

    if 'sort' in params and params.get('order') is None:
        params['order'] = 'asc'

    return _query_url(url, filters, params)
