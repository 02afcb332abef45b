from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .exceptions import ConfigurationError

DEFAULT_ENDPOINT = 'https://demo.docusign.net/restapi'
DEFAULT_API_VERSION = 'v2'
DEFAULT_TIMEOUT = 30.0

REQUIRED_KEYS = ('DS_USERNAME', 'DS_PASSWORD', 'DS_INTEGRATOR_KEY')


class DSConfig(BaseModel):
    """Immutable settings handed to a DSClient at construction."""
    model_config = ConfigDict(frozen=True)

    endpoint: str = DEFAULT_ENDPOINT
    api_version: str = DEFAULT_API_VERSION
    username: str
    password: str
    integrator_key: str
    account_id: Optional[str] = None
    verify_ssl: bool = True
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_mapping(cls, config: Mapping):
        """
        Build settings from a flat mapping such as Flask ``app.config``
        or ``os.environ``.

        :param config: mapping with DS_* keys
        :return: DSConfig
        :raises ConfigurationError: when a credential is missing or a value
         cannot be coerced to its type
        """
        missing = [key for key in REQUIRED_KEYS if not config.get(key)]
        if missing:
            raise ConfigurationError(
                f'Missing DocuSign settings: {", ".join(missing)}')
        values = {
            'endpoint': config.get('DS_ENDPOINT') or DEFAULT_ENDPOINT,
            'api_version': config.get('DS_API_VERSION') or DEFAULT_API_VERSION,
            'username': config['DS_USERNAME'],
            'password': config['DS_PASSWORD'],
            'integrator_key': config['DS_INTEGRATOR_KEY'],
            'account_id': config.get('DS_ACCOUNT_ID') or None,
        }
        if config.get('DS_VERIFY_SSL') is not None:
            values['verify_ssl'] = config['DS_VERIFY_SSL']
        if config.get('DS_TIMEOUT') is not None:
            values['timeout'] = config['DS_TIMEOUT']
        try:
            return cls(**values)
        except ValidationError as err:
            raise ConfigurationError(
                f'Invalid DocuSign settings: {err}') from err
