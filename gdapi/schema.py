from urllib.parse import quote

from .filters import build_complex_query_url
from .resource import Resource
from .utils import abs_url


class Schema(Resource):
    """
    A resource of type ``schema``, describing the fields, methods, actions and filters of another type.

    The ``id`` of a schema is the short name of the type it describes and its ``collection`` link points to
    where instances of that type are listed and created.
    """

    def resource_fields(self):
        return self.fields.get('resourceFields') or {}

    def resource_field(self, name):
        return self.resource_fields().get(name)

    def resource_methods(self):
        return self.fields.get('resourceMethods') or []

    def collection_methods(self):
        return self.fields.get('collectionMethods') or []

    def resource_actions(self):
        return self.fields.get('resourceActions') or {}

    def collection_actions(self):
        return self.fields.get('collectionActions') or {}

    def collection_filters(self):
        return self.fields.get('collectionFilters') or {}

    def collection_url(self):
        return self._link_url('collection')

    def query(self, filters=None, params=None):
        """
        List instances of this type.

        :param dict filters: a filter specification, see :mod:`gdapi.filters`
        :param dict params: extra query parameters, e.g. ``{'sort': 'name', 'limit': 10}``
        """
        url = build_complex_query_url(self.collection_url(), filters, params)
        return self.client.http_request_as_resource('GET', url)

    def query_by_id(self, id):
        url = abs_url(self.collection_url(), quote(str(id), safe=''))
        return self.client.http_request_as_resource('GET', url)

    def create(self, data):
        """
        POST a new instance of this type to the collection. The ``type`` of ``data`` defaults to this schema's id.
        """
        if isinstance(data, Resource):
            data = data.to_json()
        data = dict(data)
        data.setdefault('type', self.id)
        return self.client.http_request_as_resource('POST', self.collection_url(), data)
