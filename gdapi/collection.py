from .resource import Resource


class Collection(Resource):
    """
    A page of resources. The items are embedded in the ``data`` field; paging information is in ``pagination``.

    Iterating a collection yields its items for the current page only::

        for car in client.query('automobile', {'make': 'Tesla'}):
            print(car.id)
    """

    def items(self):
        """
        Return one resource for each object in ``data``, each built with the class registered for its type.
        """
        return [Resource.new_subclassed(data, self.client) for data in self.fields.get('data') or ()]

    def __iter__(self):
        return iter(self.items())

    def __len__(self):
        return len(self.fields.get('data') or ())

    def __bool__(self):
        return True

    def resource_type(self):
        return self.fields.get('resourceType')

    def pagination(self):
        return self.fields.get('pagination') or {}

    def has_next_page(self):
        return bool(self.pagination().get('next'))

    def next_page(self):
        """
        Fetch the next page, or return ``None`` on the last page.
        """
        url = self.pagination().get('next')
        if not url:
            return None
        return self.client.http_request_as_resource('GET', url)

    def sort_link(self, name):
        return (self.fields.get('sortLinks') or {}).get(name)

    def create_types(self):
        return self.fields.get('createTypes') or {}
