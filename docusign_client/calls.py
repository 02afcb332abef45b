import json
import logging

from flask import current_app

from .client import DSClient
from .config import DSConfig
from .dto import DocumentRef, EnvelopeRequest, Signer
from .exceptions import ConfigurationError, DSClientError

logger = logging.getLogger(__name__)


def get_client(config):
    """
    Return the DSClient bound to the current Flask app, building it from
    the app config on first use.
    """
    client = current_app.extensions.get('docusign')
    if client is None:
        client = DSClient(DSConfig.from_mapping(config))
        current_app.extensions['docusign'] = client
    return client


def envelope_request_from_form(request_data):
    form = request_data.form
    try:
        signers = json.loads(form.get('signers') or '[]')
    except json.JSONDecodeError as err:
        raise ValueError('Invalid signers format. Must be a JSON list.') from err
    if isinstance(signers, dict):
        signers = [signers]
    files = [DocumentRef(io=upload.stream,
                         name=upload.filename,
                         content_type=upload.mimetype or 'application/pdf')
             for upload in request_data.files.getlist('files')]
    return EnvelopeRequest(email_subject=form.get('subject', ''),
                           email_body=form.get('body', ''),
                           status=form.get('status', 'sent'),
                           signers=[Signer(**signer) for signer in signers],
                           files=files)


def create_envelope(config, request_data):
    try:
        envelope_request = envelope_request_from_form(request_data)
    except (ValueError, TypeError) as e:
        # pydantic ValidationError is a ValueError
        logger.info(f'Rejected envelope request: {e}')
        return str(e), 400
    if not envelope_request.files:
        return 'At least one file is required.', 400
    try:
        response = get_client(config).create_envelope_from_document(
            envelope_request)
    except ConfigurationError as e:
        logger.exception(e)
        return 'DocuSign is not configured.', 500
    except DSClientError as e:
        logger.exception(f'Error during DocuSign envelope creation: {e}')
        return 'Cannot create envelope.', 502
    logger.info(f'DocuSign answered {response.status_code} '
                f'to envelope creation')
    return _payload(response), response.status_code


def login_information(config):
    try:
        response = get_client(config).get_login_information()
    except ConfigurationError as e:
        logger.exception(e)
        return 'DocuSign is not configured.', 500
    except DSClientError as e:
        logger.exception(f'Error during DocuSign login lookup: {e}')
        return 'Cannot get login information.', 502
    return _payload(response), response.status_code


def _payload(response):
    try:
        return response.json()
    except ValueError:
        return response.text
