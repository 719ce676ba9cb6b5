"""REST mapper built from discovery data.

Discovery is loaded lazily on first use and kept until ``reset()``.  Lookups
treat an empty group or version as a wildcard and rank candidates by group
order (core first, then server order) and version preference, so ``pods``
resolves to ``v1/pods`` rather than ``metrics.k8s.io/v1beta1/pods``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

from kubescope.client.protocols import DiscoveryInterface, NoMatchError, RESTMapping, Scope
from kubescope.models.schema import GroupKind, GroupVersionKind, GroupVersionResource
from kubescope.observability.logging import get_logger

_logger = get_logger("kube.mapper")


@dataclass(frozen=True)
class _Entry:
    group: str
    version: str
    plural: str
    singular: str
    short_names: tuple[str, ...]
    kind: str
    namespaced: bool
    group_rank: int
    version_rank: int

    def name_rank(self, name: str) -> int | None:
        """0 for a plural match, 1 for singular, 2 for a short name."""
        if name == self.plural:
            return 0
        if name == self.singular:
            return 1
        if name in self.short_names:
            return 2
        return None

    def resource(self) -> GroupVersionResource:
        return GroupVersionResource(group=self.group, version=self.version, resource=self.plural)

    def gvk(self) -> GroupVersionKind:
        return GroupVersionKind(group=self.group, version=self.version, kind=self.kind)


class DiscoveryRESTMapper:
    """RESTMapper answering from a one-time discovery snapshot."""

    def __init__(self, discovery: DiscoveryInterface) -> None:
        self._discovery = discovery
        self._entries: list[_Entry] | None = None
        self._lock = asyncio.Lock()

    def reset(self) -> None:
        """Forget the discovery snapshot; the next lookup reloads it."""
        self._entries = None

    async def _load(self) -> list[_Entry]:
        async with self._lock:
            if self._entries is not None:
                return self._entries
            entries: list[_Entry] = []
            for group_rank, (group, resource_lists) in enumerate(await self._discovery.server_group_resources()):
                for version_rank, resource_list in enumerate(resource_lists):
                    version = resource_list.group_version.rsplit("/", 1)[-1]
                    for resource in resource_list.resources:
                        if resource.is_subresource:
                            continue
                        entries.append(
                            _Entry(
                                group=group.name,
                                version=version,
                                plural=resource.name.lower(),
                                singular=(resource.singular_name or resource.kind).lower(),
                                short_names=tuple(s.lower() for s in resource.short_names),
                                kind=resource.kind,
                                namespaced=resource.namespaced,
                                group_rank=group_rank,
                                version_rank=version_rank,
                            )
                        )
            _logger.debug("rest_mapper_loaded", entries=len(entries))
            self._entries = entries
            return entries

    async def _candidates(self, resource: GroupVersionResource) -> list[_Entry]:
        name = resource.resource.lower()
        ranked: list[tuple[tuple[int, int, int], _Entry]] = []
        for entry in await self._load():
            if resource.group and entry.group != resource.group:
                continue
            if resource.version and entry.version != resource.version:
                continue
            name_rank = entry.name_rank(name)
            if name_rank is None:
                continue
            ranked.append(((entry.group_rank, entry.version_rank, name_rank), entry))
        ranked.sort(key=lambda pair: pair[0])
        return [entry for _, entry in ranked]

    async def resource_for(self, resource: GroupVersionResource) -> GroupVersionResource:
        """Complete a partial resource into the best matching GroupVersionResource."""
        candidates = await self._candidates(resource)
        if not candidates:
            raise NoMatchError(f"no matches for {resource}")
        return candidates[0].resource()

    async def kind_for(self, resource: GroupVersionResource) -> GroupVersionKind:
        candidates = await self._candidates(resource)
        if not candidates:
            raise NoMatchError(f"no matches for {resource}")
        return candidates[0].gvk()

    async def rest_mapping(self, group_kind: GroupKind, *versions: str) -> RESTMapping:
        """Return the mapping for *group_kind*, trying *versions* first when given."""
        matches = [e for e in await self._load() if e.group == group_kind.group and e.kind == group_kind.kind]
        if not matches:
            raise NoMatchError(f"no matches for kind {group_kind.kind!r} in group {group_kind.group!r}")

        chosen: _Entry | None = None
        for version in versions:
            chosen = next((e for e in matches if e.version == version), None)
            if chosen is not None:
                break
        if chosen is None:
            chosen = min(matches, key=lambda e: (e.group_rank, e.version_rank))

        scope = Scope.NAMESPACE if chosen.namespaced else Scope.ROOT
        return RESTMapping(resource=chosen.resource(), gvk=chosen.gvk(), scope=scope)
