import logging
import os

import requests
from flask import Config, json

from .exceptions import MissingRequiredInput, RequestError, UnknownSchema
from .registry import default_registry
from .signals import before_request, after_request
from .utils import abs_url, json_dumps

logger = logging.getLogger(__name__)


class Client(object):
    """
    Talks to a gdapi server and turns its responses into :class:`gdapi.resource.Resource` objects.

    Settings are kept in :attr:`config`, a :class:`flask.Config`:

    =====================  ==============================  ==============================================================
    Key                    Default                         Description
    =====================  ==============================  ==============================================================
    URL                    ---                             Base URL of the API, e.g. ``https://example.com/v1``
    BASIC_USERNAME         ``None``                        User name for HTTP basic authentication
    BASIC_PASSWORD         ``None``                        Password for HTTP basic authentication
    USER_AGENT             ``'gdapi-client'``              ``User-Agent`` header sent with every request
    TIMEOUT                ``10``                          Request timeout in seconds
    RAISE_ON_ERRORS        ``True``                        Raise :class:`RequestError` for responses with status >= 400
    SCHEMAS_FILE           ``None``                        Read schemas from this JSON file instead of the server
    =====================  ==============================  ==============================================================

    :param str url: base URL of the API; overrides ``URL`` in ``config``
    :param config: optional mapping of settings
    :param ResourceRegistry registry: maps types to resource classes; defaults to :data:`gdapi.registry.default_registry`
    :param requests.Session session: optional session to send requests with
    """

    def __init__(self, url=None, config=None, registry=None, session=None, **kwargs):
        self.config = Config(os.getcwd())
        self.config.from_mapping(config or {}, **{k.upper(): v for k, v in kwargs.items()})
        if url is not None:
            self.config['URL'] = url

        self.config.setdefault('BASIC_USERNAME', None)
        self.config.setdefault('BASIC_PASSWORD', None)
        self.config.setdefault('USER_AGENT', 'gdapi-client')
        self.config.setdefault('TIMEOUT', 10)
        self.config.setdefault('RAISE_ON_ERRORS', True)
        self.config.setdefault('SCHEMAS_FILE', None)

        if not self.config.get('URL'):
            raise MissingRequiredInput('A client requires a URL')

        self.registry = registry or default_registry
        self.session = session or requests.Session()
        self._schemas = None
        self._schemas_by_name = {}

    @classmethod
    def from_env(cls, prefix='GDAPI', **kwargs):
        """
        Create a client from environment variables such as ``GDAPI_URL`` and ``GDAPI_TIMEOUT``.
        """
        config = Config(os.getcwd())
        config.from_prefixed_env(prefix)
        return cls(config=config, **kwargs)

    @property
    def url(self):
        return self.config['URL']

    def schemas_url(self, type=None):
        """
        Return the URL of the schema collection, or of the schema for ``type`` if given.
        """
        url = abs_url(self.url, 'schemas')
        if type:
            return abs_url(url, str(type))
        return url

    def _auth(self):
        username = self.config['BASIC_USERNAME']
        if username is None:
            return None
        return username, self.config['BASIC_PASSWORD'] or ''

    def _decode(self, response):
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            if response.status_code >= 400:
                return None
            raise

    def _request(self, method, url, content=None):
        headers = {'Accept': 'application/json'}
        if self.config['USER_AGENT']:
            headers['User-Agent'] = self.config['USER_AGENT']

        data = None
        if content is not None:
            data = json_dumps(content)
            headers['Content-Type'] = 'application/json'

        before_request.send(self, method=method, url=url, content=content)
        logger.debug('%s %s', method, url)

        response = self.session.request(method, url,
                                        data=data,
                                        headers=headers,
                                        auth=self._auth(),
                                        timeout=self.config['TIMEOUT'])

        after_request.send(self, response=response)

        fields = self._decode(response)
        if response.status_code >= 400:
            logger.warning('%s %s returned HTTP %s', method, url, response.status_code)
            if self.config['RAISE_ON_ERRORS']:
                raise RequestError(response.status_code, fields, response=response)
        return fields, response

    def http_request(self, method, url, content=None):
        """
        Send a request and return the decoded JSON body.

        :param str method: HTTP method
        :param str url: absolute URL
        :param content: optional body; a :class:`Resource` or any JSON-serializable value
        :raises RequestError: for an error status if ``RAISE_ON_ERRORS`` is set
        """
        fields, response = self._request(method, url, content)
        return fields

    def http_request_as_resource(self, method, url, content=None):
        """
        Send a request and return the body as the most specific :class:`Resource` for its type.
        """
        fields, response = self._request(method, url, content)
        if fields is None:
            fields = {}
        return self.registry.instantiate(fields, self, http_response=response)

    def _load_schemas(self):
        if self.config['SCHEMAS_FILE']:
            with open(self.config['SCHEMAS_FILE']) as f:
                collection = self.registry.instantiate(json.load(f), self)
        else:
            collection = self.http_request_as_resource('GET', self.schemas_url())

        schemas = collection.items()
        self._schemas_by_name = {}
        for schema in schemas:
            self._schemas_by_name[schema.id] = schema
            self._schemas_by_name[self.schemas_url(schema.id)] = schema
            if schema.link('self'):
                self._schemas_by_name[schema.link('self')] = schema

        logger.debug('Loaded %d schemas', len(schemas))
        return schemas

    def schemas(self, reload=False):
        """
        Return all schemas known to the server. They are fetched on first use and cached on the client.
        """
        if self._schemas is None or reload:
            self._schemas = self._load_schemas()
        return list(self._schemas)

    def find_schema(self, *names):
        """
        Return the schema for the first of ``names`` that is known, trying each as a schema URL or a type name.

        :raises UnknownSchema: if none of the names is known
        """
        self.schemas()
        for name in names:
            if name and name in self._schemas_by_name:
                return self._schemas_by_name[name]
        raise UnknownSchema(names[-1] if names else None)

    def schema(self, type):
        return self.find_schema(self.schemas_url(type), type)

    def query(self, type, filters=None, params=None):
        return self.schema(type).query(filters, params)

    def query_by_id(self, type, id):
        return self.schema(type).query_by_id(id)

    def create(self, type, data):
        return self.schema(type).create(data)
