"""kubernetes-asyncio backed implementations of the client capability interfaces.

Submodules
----------
ratelimit  -- TokenBucket: client-side QPS/burst limit.
transport  -- KubeTransport: rate-limited raw JSON GETs over ApiClient.
discovery  -- DiscoveryClient: /api and /apis enumeration.
mapper     -- DiscoveryRESTMapper: resource/kind/scope lookups.
dynamic    -- DynamicClient: untyped get/list of any resource type.
"""

from kubescope.kube.discovery import DiscoveryClient
from kubescope.kube.dynamic import DynamicClient
from kubescope.kube.mapper import DiscoveryRESTMapper
from kubescope.kube.ratelimit import TokenBucket
from kubescope.kube.transport import KubeTransport

__all__ = [
    "DiscoveryClient",
    "DiscoveryRESTMapper",
    "DynamicClient",
    "KubeTransport",
    "TokenBucket",
]
