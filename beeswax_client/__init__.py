"""Beeswax API client.

Async client for the Beeswax advertising platform supporting:
- Cookie-session authentication with single-flight renewal on expiry
- Find, query and paginated query_all for every configured entity
- Create, edit and delete verified by a follow-up read
- Creative asset and audience segment uploads
"""

from .client import BeeswaxClient
from .config_schema import (
    BEESWAX_ENTITIES,
    BeeswaxConnectionConfig,
    BeeswaxSettings,
    EntityConfig,
    get_entity_config,
    parse_connection_config,
)
from .errors import BeeswaxAPIError, BeeswaxAuthenticationError, is_not_found_error
from .managers import PAGE_SIZE, BeeswaxEntityManager, SegmentUploadManager
from .schemas import OperationResult
from .tls import build_ssl_context
from .version import get_version

__all__ = [
    "BEESWAX_ENTITIES",
    "PAGE_SIZE",
    "BeeswaxAPIError",
    "BeeswaxAuthenticationError",
    "BeeswaxClient",
    "BeeswaxConnectionConfig",
    "BeeswaxEntityManager",
    "BeeswaxSettings",
    "EntityConfig",
    "OperationResult",
    "SegmentUploadManager",
    "build_ssl_context",
    "get_entity_config",
    "get_version",
    "is_not_found_error",
    "parse_connection_config",
]
