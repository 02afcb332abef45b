import logging
import threading
from urllib.parse import urlsplit
from xml.sax.saxutils import escape

import requests
from requests.structures import CaseInsensitiveDict

from .api import make_multipart
from .config import DSConfig
from .dto import EnvelopeRequest
from .exceptions import (AccountResolutionError, ConfigurationError,
                         MalformedURI, RemoteApiError, TransportError)

logger = logging.getLogger(__name__)

AUTH_HEADER = 'X-DocuSign-Authentication'


class DSClient:

    def __init__(self, config: DSConfig):
        if not config.endpoint or not config.api_version:
            raise ConfigurationError('DocuSign endpoint and API version '
                                     'must be set')
        if not (config.username and config.password
                and config.integrator_key):
            raise ConfigurationError('DocuSign credentials must be set')
        if not config.verify_ssl:
            logger.warning('TLS certificate verification is disabled for '
                           f'{config.endpoint}')
        self.config = config
        self._account_id = config.account_id
        self._account_lock = threading.Lock()
        self._auth_headers = {AUTH_HEADER: self._credentials(config)}

    @staticmethod
    def _credentials(config):
        return ('<DocuSignCredentials>'
                f'<Username>{escape(config.username)}</Username>'
                f'<Password>{escape(config.password)}</Password>'
                f'<IntegratorKey>{escape(config.integrator_key)}'
                '</IntegratorKey>'
                '</DocuSignCredentials>')

    def headers(self, user_defined_headers=None):
        """
        Merge request headers.

        Callers may override ``Accept`` or add headers of their own, the
        authentication header is always applied last.

        :param user_defined_headers: optional dict of extra headers
        :return: CaseInsensitiveDict
        """
        merged = CaseInsensitiveDict({'Accept': 'application/json'})
        if user_defined_headers:
            merged.update(user_defined_headers)
        merged.update(self._auth_headers)
        return merged

    def build_uri(self, url):
        """
        Join endpoint, API version and a relative url starting with "/".

        The result is parsed to check it is an absolute https URI and
        returned as a string, which is what requests expects.

        :raises MalformedURI: when the URI cannot be parsed, has no host or
         does not use https
        """
        uri = f'{self.config.endpoint}/{self.config.api_version}{url}'
        try:
            parts = urlsplit(uri)
        except ValueError as err:
            raise MalformedURI(uri) from err
        if parts.scheme != 'https' or not parts.netloc:
            raise MalformedURI(uri)
        return uri

    def _request(self, method, uri, **kwargs):
        logger.debug(f'{method} {uri}')
        try:
            with requests.Session() as session:
                return session.request(method, uri,
                                       timeout=self.config.timeout,
                                       verify=self.config.verify_ssl,
                                       **kwargs)
        except requests.exceptions.RequestException as err:
            raise TransportError(f'{method} {uri} failed: {err}') from err

    def get_login_information(self, headers=None):
        """
        Fetch the login accounts for the configured credentials.

        The response body holds ``loginAccounts``, each entry carrying
        ``accountId``, ``baseUrl``, ``email``, ``isDefault``, ``name``,
        ``userId`` and ``userName``.

        :param headers: optional header overrides
        :return: requests.Response
        """
        uri = self.build_uri('/login_information')
        logger.info('Requesting DocuSign login information')
        return self._request('GET', uri, headers=self.headers(headers))

    def get_account_id(self):
        if self._account_id:
            return self._account_id
        with self._account_lock:
            if not self._account_id:
                self._account_id = self._resolve_account_id()
                logger.info(f'Resolved DocuSign account: {self._account_id}')
        return self._account_id

    def _resolve_account_id(self):
        response = self.get_login_information()
        if not response.ok:
            raise AccountResolutionError(
                f'Login information request failed with status '
                f'{response.status_code}')
        try:
            accounts = response.json().get('loginAccounts')
        except (ValueError, AttributeError) as err:
            raise AccountResolutionError(
                'Cannot parse login information response') from err
        if not isinstance(accounts, list) or not accounts:
            raise AccountResolutionError
        account = accounts[0]
        if not isinstance(account, dict) or not account.get('accountId'):
            raise AccountResolutionError(
                'Login information response has no usable account')
        return account['accountId']

    def create_envelope_from_document(self, request: EnvelopeRequest):
        """
        Create an envelope from uploaded documents, without a template.

        :param request: EnvelopeRequest with files, signers, email subject
         and body and a status of 'sent' or 'draft'
        :return: requests.Response whose JSON holds envelopeId, status,
         statusDateTime and uri
        """
        uri = self.build_uri(f'/accounts/{self.get_account_id()}/envelopes')
        body, content_type = make_multipart(request)
        headers = self.headers(request.headers)
        headers['Content-Type'] = content_type
        logger.info(f'Creating envelope "{request.email_subject}" with '
                    f'{len(request.files)} documents')
        return self._request('POST', uri, data=body, headers=headers)


def raise_for_status(response):
    """Turn a non-2xx DocuSign response into RemoteApiError."""
    if response.ok:
        return response
    error_code = message = None
    try:
        error_body = response.json()
    except ValueError:
        error_body = None
    if isinstance(error_body, dict):
        error_code = error_body.get('errorCode')
        message = error_body.get('message')
    raise RemoteApiError(status=response.status_code,
                         body=response.text,
                         error_code=error_code,
                         message=message)
