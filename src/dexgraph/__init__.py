"""dexgraph: an asynchronous, caching client for the PokéAPI resource graph.

PokéAPI resources link to each other by URL instead of embedding one another.
This package decodes every resource into a typed, immutable model whose links
are lazy :class:`~dexgraph.models.Reference` values, and resolves them through
a per-client cache that fetches each resource at most once, however many
concurrent callers ask for it.
"""

__version__ = "0.1.0"
__author__ = "dexgraph contributors"

# Import core modules for easy access; importing models registers the kinds.
from . import cache, config, exceptions, identifier, kinds, log_config, models, types
from .cache import CacheStats, Failed, Pending, Ready
from .client import DexGraphClient
from .config import DexGraphSettings, get_settings
from .exceptions import (
    APIError,
    ConfigurationError,
    DexGraphError,
    MalformedFieldError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    TimeoutError,
    TransportError,
    UnknownResourceKindError,
    UnrecognizedEndpointError,
)
from .identifier import Identifier
from .kinds import KINDS, KindRegistry, ResourceKind
from .log_config import configure_logging
from .models import Reference, Resource
from .pager import Pager
from .transport import HttpTransport, Transport

__all__ = [
    "__version__",
    "__author__",
    "APIError",
    "CacheStats",
    "ConfigurationError",
    "DexGraphClient",
    "DexGraphError",
    "DexGraphSettings",
    "Failed",
    "HttpTransport",
    "Identifier",
    "KINDS",
    "KindRegistry",
    "MalformedFieldError",
    "NetworkError",
    "NotFoundError",
    "Pager",
    "Pending",
    "RateLimitError",
    "Ready",
    "Reference",
    "Resource",
    "ResourceKind",
    "TimeoutError",
    "Transport",
    "TransportError",
    "UnknownResourceKindError",
    "UnrecognizedEndpointError",
    "cache",
    "config",
    "configure_logging",
    "exceptions",
    "get_settings",
    "identifier",
    "kinds",
    "log_config",
    "models",
    "types",
]
