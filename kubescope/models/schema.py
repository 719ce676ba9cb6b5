"""Group / version / resource / kind identifiers and their string parsers.

The parsers follow kubectl's conventions for type arguments:

    pods                      -> resource "pods", any group
    deployments.apps          -> resource "deployments", group "apps"
    deployments.v1.apps       -> fully specified (resource.version.group)
    ingresses.networking.k8s.io
                              -> parsed both ways; the fully specified reading
                                 ("k8s.io" / "networking") is tried first and
                                 the group/resource reading is the fallback
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GroupVersion:
    """An API group and version, e.g. ``apps/v1`` or the core ``v1``."""

    group: str = ""
    version: str = ""

    def empty(self) -> bool:
        return not self.group and not self.version

    def __str__(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}"
        return self.version


@dataclass(frozen=True)
class GroupResource:
    """A resource name qualified only by its API group."""

    group: str = ""
    resource: str = ""

    def with_version(self, version: str) -> GroupVersionResource:
        return GroupVersionResource(group=self.group, version=version, resource=self.resource)

    def __str__(self) -> str:
        if self.group:
            return f"{self.resource}.{self.group}"
        return self.resource


@dataclass(frozen=True)
class GroupVersionResource:
    """A fully or partially specified resource identity."""

    group: str = ""
    version: str = ""
    resource: str = ""

    def empty(self) -> bool:
        return not self.group and not self.version and not self.resource

    def group_resource(self) -> GroupResource:
        return GroupResource(group=self.group, resource=self.resource)

    def group_version(self) -> GroupVersion:
        return GroupVersion(group=self.group, version=self.version)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Resource={self.resource}"


@dataclass(frozen=True)
class GroupKind:
    """A kind qualified by its API group; used for scope lookups."""

    group: str = ""
    kind: str = ""

    def __str__(self) -> str:
        if self.group:
            return f"{self.kind}.{self.group}"
        return self.kind


@dataclass(frozen=True)
class GroupVersionKind:
    group: str = ""
    version: str = ""
    kind: str = ""

    def empty(self) -> bool:
        return not self.group and not self.version and not self.kind

    def group_kind(self) -> GroupKind:
        return GroupKind(group=self.group, kind=self.kind)

    def __str__(self) -> str:
        return f"{self.group}/{self.version}, Kind={self.kind}"


def parse_group_version(value: str) -> GroupVersion:
    """Parse ``"v1"`` / ``"apps/v1"`` into a GroupVersion.

    An empty string (or a lone ``/``) yields the empty GroupVersion.

    Raises:
        ValueError: when the string contains more than one ``/``.
    """
    if not value or value == "/":
        return GroupVersion()
    slashes = value.count("/")
    if slashes == 0:
        return GroupVersion(group="", version=value)
    if slashes == 1:
        group, version = value.split("/", 1)
        return GroupVersion(group=group, version=version)
    raise ValueError(f"unexpected GroupVersion string: {value}")


def parse_group_resource(value: str) -> GroupResource:
    """Split ``resource.group`` at the first dot."""
    resource, sep, group = value.partition(".")
    if not sep:
        return GroupResource(resource=value)
    return GroupResource(group=group, resource=resource)


def parse_resource_arg(value: str) -> tuple[GroupVersionResource | None, GroupResource]:
    """Parse a type argument into its fully specified and group/resource readings.

    The first element is set only when *value* has at least two dots, in which
    case it is read as ``resource.version.group``.
    """
    gvr: GroupVersionResource | None = None
    if value.count(".") >= 2:
        resource, version, group = value.split(".", 2)
        gvr = GroupVersionResource(group=group, version=version, resource=resource)
    return gvr, parse_group_resource(value)
