from unittest import TestCase

import requests
from flask import json
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from gdapi import Client


class FlaskAdapter(BaseAdapter):
    """
    A transport adapter that sends requests to a Flask application through its test client instead of the network.
    """

    def __init__(self, app):
        super(FlaskAdapter, self).__init__()
        self.test_client = app.test_client()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        headers = {k: v for k, v in request.headers.items() if k.lower() != 'content-length'}
        resp = self.test_client.open(request.url,
                                     method=request.method,
                                     headers=headers,
                                     data=request.body)

        response = requests.Response()
        response.status_code = resp.status_code
        response.reason = resp.status
        response.headers = CaseInsensitiveDict(dict(resp.headers))
        response._content = resp.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class BaseTestCase(TestCase):
    base_url = 'http://example.com/v1'

    def setUp(self):
        super(BaseTestCase, self).setUp()
        self.client = self.create_client()

    def create_client(self, **kwargs):
        return Client(self.base_url, **kwargs)

    def assertJSONEqual(self, first, second, msg=None):
        self.assertEqual(json.loads(json.dumps(first)), json.loads(json.dumps(second)), msg)

    def pp(self, obj):
        print(json.dumps(obj, sort_keys=True, indent=4, separators=(',', ': ')))
