"""Untyped get/list access to any resource type."""

from __future__ import annotations

from typing import Any

from kubescope.kube.transport import KubeTransport
from kubescope.models.resources import APIResource, ObjectList, ObjectRecord


def resource_path(api: APIResource, namespace: str = "", with_name: bool = False) -> str:
    """Build the templated URL path for *api*.

    The path contains ``{namespace}``/``{name}`` placeholders; the transport
    fills and quotes them from ``path_params``.
    """
    prefix = f"/apis/{api.group}/{api.version}" if api.group else f"/api/{api.version}"
    if api.namespaced and namespace:
        prefix = f"{prefix}/namespaces/{{namespace}}"
    path = f"{prefix}/{api.name}"
    if with_name:
        path = f"{path}/{{name}}"
    return path


def _item_kind(list_kind: str) -> str:
    return list_kind[:-4] if list_kind.endswith("List") else list_kind


class DynamicClient:
    """Reads objects as plain dicts through a KubeTransport."""

    def __init__(self, transport: KubeTransport) -> None:
        self._transport = transport

    async def get(self, api: APIResource, name: str, namespace: str = "") -> ObjectRecord:
        path_params = {"name": name}
        if api.namespaced and namespace:
            path_params["namespace"] = namespace
        return await self._transport.get_json(resource_path(api, namespace, with_name=True), path_params)

    async def list(
        self,
        api: APIResource,
        namespace: str = "",
        limit: int = 0,
        continue_token: str = "",
    ) -> ObjectList | None:
        """Fetch one page.  List items get ``kind``/``apiVersion`` from the envelope."""
        path_params: dict[str, str] = {}
        if api.namespaced and namespace:
            path_params["namespace"] = namespace
        query: list[tuple[str, Any]] = []
        if limit > 0:
            query.append(("limit", limit))
        if continue_token:
            query.append(("continue", continue_token))

        raw = await self._transport.get_json(resource_path(api, namespace), path_params, query)
        if not raw:
            return None

        kind = _item_kind(str(raw.get("kind") or api.kind))
        api_version = str(raw.get("apiVersion") or api.group_version)
        items: list[ObjectRecord] = []
        for item in raw.get("items") or []:
            item.setdefault("kind", kind)
            item.setdefault("apiVersion", api_version)
            items.append(item)
        metadata = raw.get("metadata") or {}
        return ObjectList(items=items, continue_token=str(metadata.get("continue") or ""))
