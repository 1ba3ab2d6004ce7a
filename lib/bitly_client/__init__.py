from .client import BitlyClient
from .config_types import CLIENT_VERSION, ClientConfig
from .errors import ApiError, BitlyError, MalformedResponseError, RequestTimeout, TransportError, UsageError
from .query import encode_params, normalize_params

__version__ = CLIENT_VERSION

__all__ = [
    "BitlyClient",
    "ClientConfig",
    "BitlyError",
    "UsageError",
    "TransportError",
    "RequestTimeout",
    "ApiError",
    "MalformedResponseError",
    "encode_params",
    "normalize_params",
]
