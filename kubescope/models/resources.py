"""Resource descriptors and request shapes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from kubescope.models.schema import GroupVersionResource

ObjectRecord = dict[str, Any]


@dataclass(frozen=True)
class APIResource:
    """Resolved identity of an API resource type on a cluster.

    Only the five fields below are guaranteed; this is a minimal projection
    of the server's discovery metadata, enough to issue get/list calls.
    """

    group: str
    version: str
    kind: str
    name: str
    namespaced: bool

    @property
    def group_version(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version

    def group_version_resource(self) -> GroupVersionResource:
        return GroupVersionResource(group=self.group, version=self.version, resource=self.name)

    def __str__(self) -> str:
        if self.group:
            return f"{self.name}.{self.version}.{self.group}"
        return f"{self.name}.{self.version}"


@dataclass(frozen=True)
class GetRequest:
    """Fetch one object by name.

    ``namespace`` is ignored for cluster-scoped resources.
    """

    api_resource: APIResource
    name: str
    namespace: str = ""


@dataclass
class ListRequest:
    """List objects of several resource types across several namespaces.

    An empty ``api_resources`` means every listable resource the server
    advertises.  An empty ``namespaces`` means cluster scope; an empty-string
    entry among other namespaces adds a cluster-scope pass.
    """

    api_resources: list[APIResource] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)


@dataclass
class ObjectList:
    """One page of a list response."""

    items: list[ObjectRecord] = field(default_factory=list)
    continue_token: str = ""
