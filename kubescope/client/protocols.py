"""Capability interfaces the listing engine depends on.

Default implementations backed by kubernetes-asyncio live in
``kubescope.kube``; tests substitute in-memory fakes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Protocol

from kubescope.models.discovery import APIGroup, APIResourceList
from kubescope.models.resources import APIResource, ObjectList
from kubescope.models.schema import GroupKind, GroupVersionKind, GroupVersionResource


class Scope(StrEnum):
    """Scope of a REST mapping."""

    NAMESPACE = "namespace"
    ROOT = "root"


@dataclass(frozen=True)
class RESTMapping:
    """Identity and scope of one resource as known to a RESTMapper."""

    resource: GroupVersionResource
    gvk: GroupVersionKind
    scope: Scope


class NoMatchError(LookupError):
    """A RESTMapper has no entry for the requested resource or kind."""


class DiscoveryInterface(Protocol):
    async def server_groups(self) -> list[APIGroup]: ...

    async def server_resources_for_group_version(self, group_version: str) -> APIResourceList: ...

    async def server_group_resources(self) -> list[tuple[APIGroup, list[APIResourceList]]]: ...

    async def server_preferred_resources(self) -> list[APIResourceList]: ...


class RESTMapper(Protocol):
    async def resource_for(self, resource: GroupVersionResource) -> GroupVersionResource: ...

    async def kind_for(self, resource: GroupVersionResource) -> GroupVersionKind: ...

    async def rest_mapping(self, group_kind: GroupKind, *versions: str) -> RESTMapping: ...


class DynamicInterface(Protocol):
    async def get(self, api: APIResource, name: str, namespace: str = "") -> dict[str, Any]: ...

    async def list(
        self,
        api: APIResource,
        namespace: str = "",
        limit: int = 0,
        continue_token: str = "",
    ) -> ObjectList | None: ...
