"""Core data structures for kubescope."""

from kubescope.models.config import KubeScopeConfig
from kubescope.models.discovery import APIGroup, APIResourceList, DiscoveredResource
from kubescope.models.resources import APIResource, GetRequest, ListRequest, ObjectList, ObjectRecord
from kubescope.models.schema import (
    GroupKind,
    GroupResource,
    GroupVersion,
    GroupVersionKind,
    GroupVersionResource,
)

__all__ = [
    "APIGroup",
    "APIResource",
    "APIResourceList",
    "DiscoveredResource",
    "GetRequest",
    "GroupKind",
    "GroupResource",
    "GroupVersion",
    "GroupVersionKind",
    "GroupVersionResource",
    "KubeScopeConfig",
    "ListRequest",
    "ObjectList",
    "ObjectRecord",
]
