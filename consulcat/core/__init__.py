"""
consulcat core module.

Configuration, errors, optional parameter contracts, logging and the HTTP
transport shared by the catalog client.
"""

from .config import ConsulSettings
from .errors import (
    BadStatus,
    ConsulError,
    DecodeError,
    NotFoundError,
    ParameterContractError,
    TransportConnectionError,
    TransportError,
    TransportTimeoutError,
)
from .parameters import BlockFor, Consistency, Param, ParamGroup, get_param

__all__ = [
    "BadStatus",
    "BlockFor",
    "Consistency",
    "ConsulError",
    "ConsulSettings",
    "DecodeError",
    "NotFoundError",
    "Param",
    "ParamGroup",
    "ParameterContractError",
    "TransportConnectionError",
    "TransportError",
    "TransportTimeoutError",
    "get_param",
]
