"""Resource resolution and concurrent listing.

Submodules
----------
catalog     -- listable resources from server-preferred discovery.
resolver    -- type string to APIResource.
lister      -- paginated listing of one resource in one scope.
aggregator  -- concurrent fan-out with forbidden suppression.
client      -- Client facade over the above.
"""

from kubescope.client.client import Client
from kubescope.client.errors import (
    AuthorizationError,
    KubeScopeError,
    ObjectNotFoundError,
    ResolutionError,
    TransportError,
)

__all__ = [
    "AuthorizationError",
    "Client",
    "KubeScopeError",
    "ObjectNotFoundError",
    "ResolutionError",
    "TransportError",
]
