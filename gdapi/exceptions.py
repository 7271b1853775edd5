class GDAPIException(Exception):
    """
    Base class for all errors raised by this package.
    """

    def as_dict(self):
        return {
            'type': 'error',
            'message': str(self)
        }


class MissingRequiredInput(GDAPIException):
    pass


class _UnknownName(GDAPIException):
    kind = None

    def __init__(self, name, valid_names=()):
        self.name = name
        self.valid_names = sorted(valid_names)
        super(_UnknownName, self).__init__(
            '{} is not a valid {} name. Did you mean one of these? {}'.format(
                name, self.kind, ' '.join(self.valid_names)))

    def as_dict(self):
        dct = super(_UnknownName, self).as_dict()
        dct['name'] = self.name
        dct['validNames'] = self.valid_names
        return dct


class UnknownLink(_UnknownName):
    kind = 'link'


class UnknownAction(_UnknownName):
    kind = 'action'


class InvalidUrl(GDAPIException):

    def __init__(self, url):
        self.url = url
        super(InvalidUrl, self).__init__('Unable to parse URL: {!r}'.format(url))


class InvalidFilter(GDAPIException):

    def __init__(self, errors):
        self.errors = errors
        super(InvalidFilter, self).__init__('; '.join(
            '{}: {}'.format('/'.join(str(p) for p in error['path']) or '<root>', error['message'])
            for error in errors))

    def as_dict(self):
        dct = super(InvalidFilter, self).as_dict()
        dct['errors'] = self.errors
        return dct


class UnknownSchema(GDAPIException):

    def __init__(self, name):
        self.name = name
        super(UnknownSchema, self).__init__('No schema found for type {!r}'.format(name))


class RequestError(GDAPIException):
    """
    Raised by :class:`gdapi.client.Client` for an HTTP error status when ``RAISE_ON_ERRORS`` is set.

    .. attribute:: fields

        Decoded body of the error response (usually a resource of type ``error``), or ``None``.
    """

    def __init__(self, status_code, fields=None, response=None):
        self.status_code = status_code
        self.fields = fields
        self.response = response

        message = None
        if isinstance(fields, dict):
            message = fields.get('message') or fields.get('code')
        super(RequestError, self).__init__('HTTP {}{}'.format(status_code, ': {}'.format(message) if message else ''))

    def as_dict(self):
        dct = super(RequestError, self).as_dict()
        dct['status'] = self.status_code
        if isinstance(self.fields, dict):
            dct.update(self.fields)
        return dct
