from collections.abc import Mapping

from .collection import Collection
from .resource import Resource
from .schema import Schema


class ResourceRegistry(object):
    """
    Maps schema type names to :class:`Resource` classes.

    Each decoded server payload is turned into a resource through :meth:`instantiate`, which picks the class
    registered for the payload's ``type``, looked up first by its fully-qualified schema URL and then by its short name.

    :param default: the class used when no entry matches a payload's type
    :param dict entries: optional initial mapping of type names to classes
    """

    def __init__(self, default, entries=None):
        self.default = default
        self.entries = dict(entries or {})

    def add(self, type_name, resource_class):
        """
        Register ``resource_class`` for the type ``type_name``, which is either a short type name such as
        ``collection`` or a fully-qualified schema URL.
        """
        self.entries[type_name] = resource_class
        return resource_class

    def copy(self):
        return self.__class__(self.default, self.entries)

    def find_implementation(self, *candidates):
        """
        Return the class registered for the first of ``candidates`` that has an entry, or ``None``.
        """
        for name in candidates:
            if name and name in self.entries:
                return self.entries[name]
        return None

    def instantiate(self, fields, client, http_response=None):
        """
        Construct the most specific resource for a decoded JSON object.

        :param dict fields: the decoded JSON object
        :param client: the :class:`gdapi.client.Client` the resource is bound to
        :param http_response: optional response the fields were read from
        """
        type_short = ''
        type_long = ''
        if isinstance(fields, Mapping):
            type_short = fields.get('type') or ''
        if not isinstance(type_short, str):
            type_short = ''
        if type_short and client is not None:
            type_long = client.schemas_url(type_short)

        resource_class = self.find_implementation(type_long, type_short) or self.default
        return resource_class(fields, client, http_response=http_response)

    def __repr__(self):
        return '<ResourceRegistry {}>'.format(sorted(self.entries))


default_registry = ResourceRegistry(Resource, {
    'collection': Collection,
    'schema': Schema
})
