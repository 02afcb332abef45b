"""
Tests for the Flask glue: per-app client, form parsing and the
(msg, status) helpers used by views.
"""

import json
from io import BytesIO
from unittest.mock import patch

import pytest
from flask import Flask, request

from docusign_client.calls import (create_envelope, envelope_request_from_form,
                                   get_client, login_information)
from docusign_client.client import DSClient
from docusign_client.exceptions import TransportError


@pytest.fixture
def app():
    app = Flask(__name__)
    app.config.update(DS_ENDPOINT='https://api.example.com',
                      DS_USERNAME='user@example.com',
                      DS_PASSWORD='secret',
                      DS_INTEGRATOR_KEY='TEST-KEY',
                      DS_ACCOUNT_ID='42')
    return app


def _form(signers, files=(('%PDF-1', 'doc1.pdf'),), **extra):
    data = {'subject': 'Please sign', 'body': 'Hello', 'signers': signers}
    data.update(extra)
    data['files'] = [(BytesIO(content.encode()), name) for content, name in files]
    return data


class TestGetClient:

    def test_one_client_per_app(self, app):
        with app.app_context():
            first = get_client(app.config)
            second = get_client(app.config)

        assert isinstance(first, DSClient)
        assert first is second
        assert first.get_account_id() == '42'

    def test_apps_do_not_share_clients(self, app):
        other = Flask('other')
        other.config.update(app.config)

        with app.app_context():
            first = get_client(app.config)
        with other.app_context():
            second = get_client(other.config)

        assert first is not second


class TestEnvelopeRequestFromForm:

    def test_builds_request(self, app):
        signers = json.dumps([{'email': 'a@x.com', 'name': 'A'},
                              {'email': 'b@x.com', 'name': 'B'}])
        data = _form(signers, files=(('%PDF-1', 'doc1.pdf'), ('%PDF-2', 'doc2.pdf')),
                     status='draft')

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            envelope_request = envelope_request_from_form(request)

        assert envelope_request.email_subject == 'Please sign'
        assert envelope_request.email_body == 'Hello'
        assert envelope_request.status == 'draft'
        assert [s.email for s in envelope_request.signers] == ['a@x.com', 'b@x.com']
        assert [f.name for f in envelope_request.files] == ['doc1.pdf', 'doc2.pdf']

    def test_single_signer_object_is_accepted(self, app):
        data = _form(json.dumps({'email': 'a@x.com', 'name': 'A'}))

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            envelope_request = envelope_request_from_form(request)

        assert len(envelope_request.signers) == 1

    def test_invalid_signers_json(self, app):
        with app.test_request_context('/', method='POST', data=_form('not json'),
                                      content_type='multipart/form-data'):
            with pytest.raises(ValueError):
                envelope_request_from_form(request)


class TestCreateEnvelope:

    def test_relays_docusign_answer(self, app):
        data = _form(json.dumps([{'email': 'a@x.com', 'name': 'A'}]))

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            with patch.object(DSClient, 'create_envelope_from_document') as mock_create:
                mock_create.return_value.json.return_value = {'envelopeId': 'env-1'}
                mock_create.return_value.status_code = 201

                msg, status = create_envelope(app.config, request)

        assert status == 201
        assert msg == {'envelopeId': 'env-1'}
        sent = mock_create.call_args.args[0]
        assert sent.signers[0].name == 'A'

    def test_missing_files_is_bad_request(self, app):
        data = _form(json.dumps([{'email': 'a@x.com', 'name': 'A'}]), files=())

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            msg, status = create_envelope(app.config, request)

        assert status == 400

    def test_bad_signer_is_bad_request(self, app):
        data = _form(json.dumps([{'email': 'a@x.com'}]))

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            msg, status = create_envelope(app.config, request)

        assert status == 400

    def test_transport_failure_is_bad_gateway(self, app):
        data = _form(json.dumps([{'email': 'a@x.com', 'name': 'A'}]))

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            with patch.object(DSClient, 'create_envelope_from_document',
                              side_effect=TransportError('down')):
                msg, status = create_envelope(app.config, request)

        assert status == 502


    def test_malformed_login_answer_is_bad_gateway(self, app, make_response):
        app.config['DS_ACCOUNT_ID'] = None
        data = _form(json.dumps([{'email': 'a@x.com', 'name': 'A'}]))

        with app.test_request_context('/', method='POST', data=data,
                                      content_type='multipart/form-data'):
            with patch('docusign_client.client.requests.Session') as mock_session_cls:
                session = mock_session_cls.return_value.__enter__.return_value
                session.request.return_value = make_response(
                    200, {'loginAccounts': {'accountId': '1'}})

                msg, status = create_envelope(app.config, request)

        assert status == 502
        assert session.request.call_count == 1


class TestLoginInformation:

    def test_missing_configuration(self):
        app = Flask(__name__)

        with app.app_context():
            msg, status = login_information(app.config)

        assert status == 500

    def test_relays_docusign_answer(self, app):
        with app.app_context():
            with patch.object(DSClient, 'get_login_information') as mock_login:
                mock_login.return_value.json.return_value = {'loginAccounts': []}
                mock_login.return_value.status_code = 200

                msg, status = login_information(app.config)

        assert status == 200
        assert msg == {'loginAccounts': []}
