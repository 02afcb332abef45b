class DSClientError(Exception):
    """Base class for every error raised by docusign_client."""


class ConfigurationError(DSClientError):

    def __init__(self, message='DocuSign client is not configured'):
        super().__init__(message)


class MalformedURI(DSClientError):

    def __init__(self, uri):
        self.uri = uri
        super().__init__(f'Cannot build a valid absolute URI from {uri!r}')


class TransportError(DSClientError):
    """Connection, TLS or timeout failure while talking to DocuSign."""


class AccountResolutionError(DSClientError):

    def __init__(self, message='No login account was found'):
        super().__init__(message)


class RemoteApiError(DSClientError):
    """Non-2xx answer from DocuSign, raised only on explicit request."""

    def __init__(self, status, body, error_code=None, message=None):
        self.status = status
        self.body = body
        self.error_code = error_code
        self.message = message
        super().__init__(f'DocuSign answered {status}: '
                         f'{error_code or "unknown error"} {message or ""}'.strip())
