import json

import pytest
import requests

from docusign_client.client import DSClient
from docusign_client.config import DSConfig


@pytest.fixture
def ds_config():
    return DSConfig(endpoint='https://api.example.com',
                    api_version='v2',
                    username='user@example.com',
                    password='secret',
                    integrator_key='TEST-KEY')


@pytest.fixture
def client(ds_config):
    return DSClient(ds_config)


@pytest.fixture
def make_response():
    def _make(status=200, payload=None, text=None):
        response = requests.Response()
        response.status_code = status
        if text is None:
            text = json.dumps(payload if payload is not None else {})
        response._content = text.encode('utf-8')
        response.headers['Content-Type'] = 'application/json'
        return response
    return _make
