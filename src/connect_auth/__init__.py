"""
connect-auth - Autenticação JWT com query string hash para apps Connect
"""

from .api_client import ApiClient, ApiRequestError
from .canonical import (
    DEFAULT_STRATEGY,
    CanonicalRequestStrategy,
    Rfc5849Strategy,
    create_canonical_request,
    create_query_string_hash,
    percent_encode,
)
from .config import Config, ConfigError
from .errors import AuthError, ClockError, EncodingError
from .logging_config import setup_logging
from .security import (
    AUTH_SCHEME,
    Claims,
    Header,
    Parameters,
    RequestSigner,
    build_claims,
    create_auth_header,
    sign_claims,
)

__all__ = [
    'ApiClient',
    'ApiRequestError',
    'AUTH_SCHEME',
    'AuthError',
    'CanonicalRequestStrategy',
    'Claims',
    'ClockError',
    'Config',
    'ConfigError',
    'DEFAULT_STRATEGY',
    'EncodingError',
    'Header',
    'Parameters',
    'RequestSigner',
    'Rfc5849Strategy',
    'build_claims',
    'create_auth_header',
    'create_canonical_request',
    'create_query_string_hash',
    'percent_encode',
    'setup_logging',
    'sign_claims',
]
