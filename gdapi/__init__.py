from .client import Client
from .collection import Collection
from .exceptions import GDAPIException, MissingRequiredInput, UnknownLink, UnknownAction, InvalidUrl, \
    InvalidFilter, UnknownSchema, RequestError
from .filters import add_filters_to_url, build_complex_query_url
from .registry import ResourceRegistry, default_registry
from .resource import Resource
from .schema import Schema
from .utils import abs_url

__version__ = '0.1.0'

__all__ = (
    'Client',
    'Resource',
    'Collection',
    'Schema',
    'ResourceRegistry',
    'default_registry',
    'abs_url',
    'add_filters_to_url',
    'build_complex_query_url',
    'GDAPIException',
    'MissingRequiredInput',
    'UnknownLink',
    'UnknownAction',
    'InvalidUrl',
    'InvalidFilter',
    'UnknownSchema',
    'RequestError',
    'signals'
)
