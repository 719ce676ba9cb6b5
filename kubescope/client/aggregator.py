"""Concurrent listing across (resource type x namespace) pairs.

One task per resource type runs inside an ``asyncio.TaskGroup``; a
namespaced resource that needs per-namespace passes spawns a nested group
with one task per namespace.  The first unsuppressed error cancels every
sibling and is raised on its own; partial results are discarded.

Forbidden results are suppressed only at these points:

* cluster-scope pass of a cluster-scoped resource (the resource yields
  nothing),
* per-namespace passes (other namespaces still complete).

A forbidden cluster-scope pass of a namespaced resource is not suppressed
as such: the branch falls back to the requested namespaces instead, since
listing inside a namespace needs narrower privileges.
"""

from __future__ import annotations

import asyncio
import time

from kubescope.client.catalog import fetch_api_resources
from kubescope.client.errors import AuthorizationError, first_error
from kubescope.client.lister import list_by_api
from kubescope.client.protocols import DiscoveryInterface, DynamicInterface
from kubescope.models.resources import APIResource, ListRequest, ObjectRecord
from kubescope.observability.logging import get_logger
from kubescope.observability.metrics import forbidden_suppressed_total, list_duration_seconds

_logger = get_logger("client.aggregator")


class _Accumulator:
    """Append-only result list shared by every branch of one call."""

    def __init__(self) -> None:
        self._lock = asyncio.Lock()
        self._items: list[ObjectRecord] = []

    async def extend(self, objects: list[ObjectRecord]) -> None:
        async with self._lock:
            self._items.extend(objects)

    @property
    def items(self) -> list[ObjectRecord]:
        return self._items


def plan_scopes(namespaces: list[str]) -> tuple[bool, list[str]]:
    """Return (cluster pass requested, distinct non-empty namespaces).

    No namespaces at all means cluster scope.  An empty string among
    namespaces adds a cluster pass alongside the namespace passes.
    """
    cluster_scope = not namespaces
    distinct: list[str] = []
    seen: set[str] = set()
    for namespace in namespaces:
        if not namespace:
            cluster_scope = True
        elif namespace not in seen:
            seen.add(namespace)
            distinct.append(namespace)
    return cluster_scope, distinct


async def list_many(
    dynamic: DynamicInterface,
    discovery: DiscoveryInterface,
    request: ListRequest,
) -> list[ObjectRecord]:
    """List objects for every resource in *request* across its scopes.

    An empty ``request.api_resources`` lists every resource the server
    advertises as listable.  Result order across resources is unspecified.
    """
    apis = list(request.api_resources)
    if not apis:
        apis = await fetch_api_resources(discovery)

    cluster_scope, namespaces = plan_scopes(request.namespaces)
    accumulator = _Accumulator()

    async def list_into(api: APIResource, namespace: str) -> None:
        objects = await list_by_api(dynamic, api, namespace)
        await accumulator.extend(objects)

    async def namespace_pass(api: APIResource, namespace: str) -> None:
        try:
            await list_into(api, namespace)
        except AuthorizationError:
            forbidden_suppressed_total.labels(scope="namespace").inc()
            _logger.debug("suppressed_forbidden", resource=str(api), namespace=namespace)

    async def branch(api: APIResource) -> None:
        # A cluster-scoped resource has a single scope however many
        # namespaces were requested, so it is listed exactly once. Listing it
        # per namespace would return every one of its objects once per namespace.
        if cluster_scope or not api.namespaced:
            try:
                await list_into(api, "")
                return
            except AuthorizationError:
                if not api.namespaced:
                    forbidden_suppressed_total.labels(scope="cluster").inc()
                    _logger.debug("suppressed_forbidden", resource=str(api), scope="cluster")
                    return
                _logger.debug("falling_back_to_namespaces", resource=str(api), namespaces=namespaces)
        if not namespaces:
            return
        async with asyncio.TaskGroup() as group:
            for namespace in namespaces:
                group.create_task(namespace_pass(api, namespace), name=f"list:{api}:{namespace}")

    started = time.monotonic()
    try:
        async with asyncio.TaskGroup() as group:
            for api in apis:
                group.create_task(branch(api), name=f"list:{api}")
    except BaseExceptionGroup as errors:
        raise first_error(errors)  # noqa: B904
    finally:
        list_duration_seconds.observe(time.monotonic() - started)

    _logger.debug("aggregated_objects", count=len(accumulator.items), resources=len(apis))
    return accumulator.items
