import logging
from collections.abc import Mapping

from .exceptions import MissingRequiredInput, UnknownLink, UnknownAction
from .utils import abs_url, json_dumps

logger = logging.getLogger(__name__)


class Resource(object):
    """
    A single resource returned by a gdapi server.

    A resource is a JSON object of fields, two of which are special: ``links`` maps names to URLs of related
    representations and ``actions`` maps names to URLs that trigger operations on the server. Both are followed
    through the :class:`gdapi.client.Client` the resource is bound to.

    Usage example:

    .. code-block:: python

        car = client.query_by_id('automobile', '1001')

        car.get('make')            # 'Tesla'
        car.set('model', 'X')      # 'X'
        car = car.save()

        schemas = car.follow_link('schemas')
        result = car.do_action('charge', {'with': 'quick_charger'})

    Resources are normally created with :meth:`new_subclassed`, which picks the most specific class for the
    payload's ``type``.

    :param dict fields: the decoded JSON object
    :param client: the :class:`gdapi.client.Client` used to follow links and actions
    :param http_response: optional :class:`requests.Response` the resource was read from
    :raises MissingRequiredInput: if ``fields`` is not a mapping or ``client`` is ``None``

    .. attribute:: fields

        The underlying JSON object. This is exactly what is sent back to the server when saving.
    """

    def __init__(self, fields, client, http_response=None):
        if client is None:
            raise MissingRequiredInput('A client is required to construct a {}'.format(self.__class__.__name__))
        if not isinstance(fields, Mapping):
            raise MissingRequiredInput('The fields of a {} must be a mapping, got {!r}'.format(
                self.__class__.__name__, fields))

        self.fields = fields
        self.client = client
        self.http_response = http_response

    @classmethod
    def new_subclassed(cls, fields, client, http_response=None):
        """
        Construct a resource using the class registered on the client's registry for the payload's ``type``.
        """
        if client is None:
            raise MissingRequiredInput('A client is required to construct a resource')
        return client.registry.instantiate(fields, client, http_response=http_response)

    def get(self, name, default=None):
        return self.fields.get(name, default)

    def set(self, name, value):
        """
        Set the field ``name`` and return the stored value.
        """
        self.fields[name] = value
        return self.fields[name]

    def __getitem__(self, name):
        return self.fields[name]

    def __setitem__(self, name, value):
        self.fields[name] = value

    def __contains__(self, name):
        return name in self.fields

    @property
    def id(self):
        return self.fields.get('id')

    @property
    def type(self):
        return self.fields.get('type')

    @property
    def type_fq(self):
        """
        The full URL of the schema for this resource's type.

        Resolved against the ``schemas`` link of the resource; resources without one use the client's schema URL.
        """
        type_name = '' if self.type is None else str(self.type)
        schemas_url = self.link('schemas')
        if schemas_url is None:
            return self.client.schemas_url(type_name)
        return abs_url(schemas_url, type_name)

    @property
    def links(self):
        return self.fields.get('links') or {}

    @property
    def actions(self):
        return self.fields.get('actions') or {}

    def link(self, name):
        return self.links.get(name)

    def action(self, name):
        return self.actions.get(name)

    def _link_url(self, name):
        url = self.link(name)
        if url is None:
            raise UnknownLink(name, self.links.keys())
        return url

    def follow_link(self, name):
        """
        GET the representation behind the link ``name``.

        :raises UnknownLink: if the resource has no such link
        """
        url = self._link_url(name)
        logger.debug('Following link %r of %r', name, self)
        return self.client.http_request_as_resource('GET', url)

    def do_action(self, name, data=None):
        """
        POST ``data`` to the action ``name``.

        :raises UnknownAction: if the resource has no such action
        """
        url = self.action(name)
        if url is None:
            raise UnknownAction(name, self.actions.keys())
        logger.debug('Performing action %r of %r', name, self)
        return self.client.http_request_as_resource('POST', url, data)

    def refresh(self):
        return self.client.http_request_as_resource('GET', self._link_url('self'))

    def save(self):
        """
        PUT this resource to its ``self`` link and return the resource sent back by the server.
        """
        return self.client.http_request_as_resource('PUT', self._link_url('self'), self)

    def delete(self):
        return self.client.http_request_as_resource('DELETE', self._link_url('self'))

    def items(self):
        """
        Return the resources this resource contains. A plain resource only contains itself.
        """
        return [self]

    def schema(self):
        """
        Return the :class:`gdapi.schema.Schema` describing this resource's type.

        :raises UnknownSchema: if the client has no schema for the type
        """
        return self.client.find_schema(self.type_fq, self.type)

    def to_json(self):
        return self.fields

    def to_string(self, pretty=False):
        return json_dumps(self, pretty=pretty)

    def __repr__(self):
        return '<{} type={!r} id={!r}>'.format(self.__class__.__name__, self.type, self.id)
