import logging

from flask import Blueprint, jsonify, request, current_app

from docusign_client.calls import create_envelope, login_information


ds = Blueprint('ds', __name__)
logger = logging.getLogger(__name__)


@ds.route('/envelopes', methods=['POST'])
def docusign_create_envelope():
    """
    Multipart form with subject, body, status, signers (JSON list of
    {"email", "name"}) and one or more ``files`` uploads.
    """
    config = current_app.config
    msg, status = create_envelope(config, request)
    return jsonify({'msg': msg}), status


@ds.route('/login_information', methods=['GET'])
def ds_login_information():
    config = current_app.config
    msg, status = login_information(config)
    return jsonify({'msg': msg}), status
