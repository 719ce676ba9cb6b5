"""Discovery client reading ``/api`` and ``/apis``."""

from __future__ import annotations

import asyncio

import aiohttp
from kubernetes_asyncio.client import ApiException  # type: ignore[import-untyped]

from kubescope.client.errors import first_error
from kubescope.kube.transport import KubeTransport
from kubescope.models.discovery import APIGroup, APIResourceList
from kubescope.observability.logging import get_logger

_logger = get_logger("kube.discovery")


def _resource_list_path(group_version: str) -> str:
    if "/" in group_version:
        return f"/apis/{group_version}"
    return f"/api/{group_version}"


class DiscoveryClient:
    """Enumerates API groups and the resources each group version serves.

    Nothing is cached here; the REST mapper and the catalog decide how long
    discovery data lives.
    """

    def __init__(self, transport: KubeTransport) -> None:
        self._transport = transport

    async def server_groups(self) -> list[APIGroup]:
        """Return the core group followed by every named group, in server order."""
        core = await self._transport.get_json("/api")
        named = await self._transport.get_json("/apis")

        groups: list[APIGroup] = []
        core_versions = tuple(core.get("versions") or ())
        if core_versions:
            groups.append(APIGroup(name="", versions=core_versions, preferred_version=core_versions[0]))
        for raw in named.get("groups") or []:
            versions = tuple(str(v.get("version", "")) for v in raw.get("versions") or [])
            preferred = (raw.get("preferredVersion") or {}).get("version", "")
            groups.append(APIGroup(name=str(raw.get("name", "")), versions=versions, preferred_version=preferred))
        return groups

    async def server_resources_for_group_version(self, group_version: str) -> APIResourceList:
        raw = await self._transport.get_json(_resource_list_path(group_version))
        resource_list = APIResourceList.from_dict(raw)
        if not resource_list.group_version:
            resource_list.group_version = group_version
        return resource_list

    async def server_group_resources(self) -> list[tuple[APIGroup, list[APIResourceList]]]:
        """Return every group with the resource lists of all its versions.

        Versions are fetched concurrently and returned in preference order.  A
        group version that cannot be fetched (an unavailable
        aggregated API, or a network failure) is logged and left out.
        """
        groups = await self.server_groups()

        async def fetch(group_version: str) -> APIResourceList | None:
            try:
                return await self.server_resources_for_group_version(group_version)
            except ApiException as exc:
                _logger.warning("group_version_discovery_failed", group_version=group_version, status=exc.status)
                return None
            except (aiohttp.ClientError, TimeoutError) as exc:
                _logger.warning("group_version_discovery_failed", group_version=group_version, error=repr(exc))
                return None

        try:
            async with asyncio.TaskGroup() as tg:
                tasks = [[tg.create_task(fetch(gv)) for gv in group.group_versions()] for group in groups]
        except BaseExceptionGroup as errors:
            raise first_error(errors)  # noqa: B904

        result: list[tuple[APIGroup, list[APIResourceList]]] = []
        for group, group_tasks in zip(groups, tasks, strict=True):
            lists = [task.result() for task in group_tasks]
            result.append((group, [rl for rl in lists if rl is not None]))
        return result

    async def server_preferred_resources(self) -> list[APIResourceList]:
        """Return each resource once, under the most preferred version serving it.

        Subresources (``pods/log`` and the like) are dropped.
        """
        preferred: list[APIResourceList] = []
        for group, resource_lists in await self.server_group_resources():
            seen: set[str] = set()
            for resource_list in resource_lists:
                kept = APIResourceList(group_version=resource_list.group_version)
                for resource in resource_list.resources:
                    if resource.is_subresource or resource.name in seen:
                        continue
                    seen.add(resource.name)
                    kept.resources.append(resource)
                if kept.resources:
                    preferred.append(kept)
            _logger.debug("group_discovered", group=group.name or "core", versions=len(resource_lists))
        return preferred
