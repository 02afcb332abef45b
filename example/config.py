import os


class DefaultConfig:
    APPLICATION_ROOT = os.environ.get('APPLICATION_ROOT', '')
    DS_ENDPOINT = os.environ.get('DS_ENDPOINT',
                                 'https://demo.docusign.net/restapi')
    DS_API_VERSION = os.environ.get('DS_API_VERSION', 'v2')
    DS_USERNAME = os.environ.get('DS_USERNAME')
    DS_PASSWORD = os.environ.get('DS_PASSWORD')
    DS_INTEGRATOR_KEY = os.environ.get('DS_INTEGRATOR_KEY')
    DS_ACCOUNT_ID = os.environ.get('DS_ACCOUNT_ID')
    # Only turn this off against a local test double.
    DS_VERIFY_SSL = os.environ.get('DS_VERIFY_SSL', 'true')
    DS_TIMEOUT = os.environ.get('DS_TIMEOUT', '30')


class TestingConfig(DefaultConfig):
    TESTING = True
    DS_USERNAME = 'user@example.com'
    DS_PASSWORD = 'secret'
    DS_INTEGRATOR_KEY = 'TEST-KEY'
    DS_ACCOUNT_ID = '12345'


def get_config_object():
    if os.environ.get('FLASK_ENV') == 'testing':
        return TestingConfig()
    return DefaultConfig()
