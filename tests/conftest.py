"""Shared fakes and factories for kubescope tests.

The fakes implement the client capability interfaces in memory so the
listing engine can be exercised without a Kubernetes cluster.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from kubernetes_asyncio.client import ApiException

from kubescope.models.discovery import APIGroup, APIResourceList, DiscoveredResource
from kubescope.models.resources import APIResource, ObjectList

# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


def make_api(
    name: str = "pods",
    kind: str = "Pod",
    group: str = "",
    version: str = "v1",
    namespaced: bool = True,
) -> APIResource:
    return APIResource(group=group, version=version, kind=kind, name=name, namespaced=namespaced)


PODS = make_api()
CONFIGMAPS = make_api(name="configmaps", kind="ConfigMap")
DEPLOYMENTS = make_api(name="deployments", kind="Deployment", group="apps")
NODES = make_api(name="nodes", kind="Node", namespaced=False)
CLUSTERROLES = make_api(
    name="clusterroles",
    kind="ClusterRole",
    group="rbac.authorization.k8s.io",
    namespaced=False,
)


def make_object(name: str, namespace: str = "", kind: str = "Pod") -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    return {"kind": kind, "metadata": metadata}


def forbidden() -> ApiException:
    return ApiException(status=403, reason="Forbidden")


def not_found() -> ApiException:
    return ApiException(status=404, reason="Not Found")


def server_error() -> ApiException:
    return ApiException(status=500, reason="Internal Server Error")


def names(objects: list[dict[str, Any]]) -> list[str]:
    return [o["metadata"]["name"] for o in objects]


def discovered(
    name: str,
    kind: str,
    namespaced: bool = True,
    verbs: tuple[str, ...] = ("create", "delete", "get", "list", "patch", "update", "watch"),
    singular: str = "",
    short_names: tuple[str, ...] = (),
) -> DiscoveredResource:
    return DiscoveredResource(
        name=name,
        kind=kind,
        namespaced=namespaced,
        verbs=verbs,
        singular_name=singular,
        short_names=short_names,
    )


# ---------------------------------------------------------------------------
# Fake dynamic provider
# ---------------------------------------------------------------------------


class FakeDynamic:
    """In-memory DynamicInterface.

    ``responses`` is keyed by ``(resource name, namespace)`` where the
    namespace is ``""`` for cluster scope.  A value is either a list of pages
    (each a list of objects), an exception to raise, or None for an absent
    response.  Unknown keys answer with a single empty page.

    ``blocked`` keys wait on ``release`` before answering, which lets tests
    observe cancellation of in-flight requests.
    """

    def __init__(self, responses: dict[tuple[str, str], Any] | None = None) -> None:
        self.responses: dict[tuple[str, str], Any] = responses or {}
        self.calls: list[tuple[str, str, str]] = []
        self.limits: list[int] = []
        self.objects: dict[tuple[str, str, str], dict[str, Any]] = {}
        self.get_errors: dict[tuple[str, str, str], BaseException] = {}
        self.get_calls: list[tuple[str, str, str]] = []
        self.blocked: set[tuple[str, str]] = set()
        self.release = asyncio.Event()
        self.cancelled: list[tuple[str, str]] = []

    async def get(self, api: APIResource, name: str, namespace: str = "") -> dict[str, Any]:
        key = (api.name, namespace, name)
        self.get_calls.append(key)
        if key in self.get_errors:
            raise self.get_errors[key]
        return self.objects[key]

    async def list(
        self,
        api: APIResource,
        namespace: str = "",
        limit: int = 0,
        continue_token: str = "",
    ) -> ObjectList | None:
        key = (api.name, namespace)
        self.calls.append((api.name, namespace, continue_token))
        self.limits.append(limit)
        if key in self.blocked:
            try:
                await self.release.wait()
            except asyncio.CancelledError:
                self.cancelled.append(key)
                raise
        else:
            await asyncio.sleep(0)

        behavior = self.responses.get(key, [[]])
        if isinstance(behavior, BaseException):
            raise behavior
        if behavior is None:
            return None
        index = int(continue_token or 0)
        next_token = str(index + 1) if index + 1 < len(behavior) else ""
        return ObjectList(items=list(behavior[index]), continue_token=next_token)

    def list_keys(self) -> list[tuple[str, str]]:
        """(resource, namespace) pairs whose first page was requested."""
        return [(name, ns) for name, ns, token in self.calls if not token]


# ---------------------------------------------------------------------------
# Fake discovery provider
# ---------------------------------------------------------------------------


class FakeDiscovery:
    """In-memory DiscoveryInterface over ``(APIGroup, [APIResourceList])`` pairs."""

    def __init__(self, groups: list[tuple[APIGroup, list[APIResourceList]]] | None = None) -> None:
        self.groups = groups or []
        self.preferred: list[APIResourceList] | None = None
        self.preferred_calls = 0
        self.group_resource_calls = 0

    async def server_groups(self) -> list[APIGroup]:
        return [group for group, _ in self.groups]

    async def server_resources_for_group_version(self, group_version: str) -> APIResourceList:
        for _, lists in self.groups:
            for resource_list in lists:
                if resource_list.group_version == group_version:
                    return resource_list
        raise not_found()

    async def server_group_resources(self) -> list[tuple[APIGroup, list[APIResourceList]]]:
        self.group_resource_calls += 1
        return self.groups

    async def server_preferred_resources(self) -> list[APIResourceList]:
        self.preferred_calls += 1
        if self.preferred is not None:
            return self.preferred
        return [lists[0] for _, lists in self.groups if lists]


def standard_discovery() -> FakeDiscovery:
    """A small cluster: core v1, apps v1, networking, metrics and a CRD group."""
    return FakeDiscovery(
        [
            (
                APIGroup(name="", versions=("v1",), preferred_version="v1"),
                [
                    APIResourceList(
                        group_version="v1",
                        resources=[
                            discovered("pods", "Pod", singular="pod", short_names=("po",)),
                            discovered("pods/log", "Pod", verbs=("get",)),
                            discovered("nodes", "Node", namespaced=False, singular="node", short_names=("no",)),
                            discovered("events", "Event", singular="event", short_names=("ev",)),
                            discovered("configmaps", "ConfigMap", singular="configmap", short_names=("cm",)),
                        ],
                    )
                ],
            ),
            (
                APIGroup(name="apps", versions=("v1",), preferred_version="v1"),
                [
                    APIResourceList(
                        group_version="apps/v1",
                        resources=[
                            discovered("deployments", "Deployment", singular="deployment", short_names=("deploy",)),
                        ],
                    )
                ],
            ),
            (
                APIGroup(name="networking.k8s.io", versions=("v1",), preferred_version="v1"),
                [
                    APIResourceList(
                        group_version="networking.k8s.io/v1",
                        resources=[discovered("ingresses", "Ingress", singular="ingress", short_names=("ing",))],
                    )
                ],
            ),
            (
                APIGroup(name="metrics.k8s.io", versions=("v1beta1",), preferred_version="v1beta1"),
                [
                    APIResourceList(
                        group_version="metrics.k8s.io/v1beta1",
                        resources=[discovered("pods", "PodMetrics", verbs=("get", "list"))],
                    )
                ],
            ),
            (
                APIGroup(name="stable.example.com", versions=("v2", "v1"), preferred_version="v2"),
                [
                    APIResourceList(
                        group_version="stable.example.com/v2",
                        resources=[discovered("crontabs", "CronTab", singular="crontab", short_names=("ct",))],
                    ),
                    APIResourceList(
                        group_version="stable.example.com/v1",
                        resources=[
                            discovered("crontabs", "CronTab", singular="crontab", short_names=("ct",)),
                            discovered("legacytabs", "LegacyTab", namespaced=False),
                        ],
                    ),
                ],
            ),
        ]
    )


@pytest.fixture
def dynamic() -> FakeDynamic:
    return FakeDynamic()


@pytest.fixture
def discovery() -> FakeDiscovery:
    return standard_discovery()


# ---------------------------------------------------------------------------
# Fake transport (an in-memory API server)
# ---------------------------------------------------------------------------


class FakeTransport:
    """Serves canned JSON documents by URL path, in place of KubeTransport.

    ``routes`` maps a concrete path to either a document, a list of
    documents (served in turn, keyed by the ``continue`` query value), an
    HTTP status code to fail with, or an exception to raise.  Unknown paths answer 404.
    """

    def __init__(self, routes: dict[str, Any] | None = None) -> None:
        self.routes: dict[str, Any] = routes or {}
        self.requests: list[tuple[str, list[tuple[str, Any]]]] = []

    async def get_json(
        self,
        path: str,
        path_params: dict[str, str] | None = None,
        query: list[tuple[str, Any]] | None = None,
    ) -> dict[str, Any]:
        concrete = path.format(**(path_params or {}))
        self.requests.append((concrete, list(query or [])))
        await asyncio.sleep(0)
        route = self.routes.get(concrete, 404)
        if isinstance(route, BaseException):
            raise route
        if isinstance(route, int):
            raise ApiException(status=route, reason="fake")
        if isinstance(route, list):
            token = dict(query or []).get("continue", "")
            return route[int(token or 0)]
        return route

    def paths(self) -> list[str]:
        return [path for path, _ in self.requests]


def list_document(kind: str, items: list[dict[str, Any]], api_version: str = "v1", continue_token: str = "") -> dict:
    """A list response envelope; items carry no kind/apiVersion, as the server sends them."""
    metadata: dict[str, Any] = {"resourceVersion": "100"}
    if continue_token:
        metadata["continue"] = continue_token
    return {"kind": f"{kind}List", "apiVersion": api_version, "metadata": metadata, "items": items}


def bare_object(name: str, namespace: str = "") -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name}
    if namespace:
        metadata["namespace"] = namespace
    return {"metadata": metadata}
