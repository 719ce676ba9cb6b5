"""Discovery document structures (``/api``, ``/apis`` and per group-version lists)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class DiscoveredResource:
    """One entry of an APIResourceList as advertised by the server."""

    name: str
    kind: str
    namespaced: bool
    verbs: tuple[str, ...] = ()
    singular_name: str = ""
    short_names: tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> DiscoveredResource:
        return cls(
            name=str(raw.get("name", "")),
            kind=str(raw.get("kind", "")),
            namespaced=bool(raw.get("namespaced", False)),
            verbs=tuple(raw.get("verbs") or ()),
            singular_name=str(raw.get("singularName") or ""),
            short_names=tuple(raw.get("shortNames") or ()),
        )

    @property
    def is_subresource(self) -> bool:
        return "/" in self.name

    def has_verbs(self, *verbs: str) -> bool:
        return bool(self.verbs) and set(verbs).issubset(self.verbs)


@dataclass
class APIResourceList:
    """Resources served under one group version."""

    group_version: str
    resources: list[DiscoveredResource] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> APIResourceList:
        return cls(
            group_version=str(raw.get("groupVersion", "")),
            resources=[DiscoveredResource.from_dict(r) for r in raw.get("resources") or []],
        )


@dataclass(frozen=True)
class APIGroup:
    """An API group and its served versions, most preferred first."""

    name: str
    versions: tuple[str, ...] = ()
    preferred_version: str = ""

    def group_versions(self) -> list[str]:
        """Group-version strings in preference order."""
        ordered = list(self.versions)
        if self.preferred_version in ordered:
            ordered.remove(self.preferred_version)
            ordered.insert(0, self.preferred_version)
        if self.name:
            return [f"{self.name}/{v}" for v in ordered]
        return ordered
