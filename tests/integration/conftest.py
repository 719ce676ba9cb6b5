"""Shared fixtures for kubescope integration tests.

Provides a Client wired through the real discovery, REST mapper and dynamic
adapters on top of an in-memory API server, so whole operations can be
exercised without touching a real Kubernetes cluster.
"""

from __future__ import annotations

from typing import Any

import pytest

from kubescope.app import build_client
from kubescope.client.client import Client

from ..conftest import FakeTransport

# ---------------------------------------------------------------------------
# Discovery documents
# ---------------------------------------------------------------------------

_LISTABLE = ["get", "list", "watch"]


def api_resource(name: str, kind: str, namespaced: bool = True, short_names: list[str] | None = None) -> dict:
    return {
        "name": name,
        "singularName": kind.lower(),
        "namespaced": namespaced,
        "kind": kind,
        "verbs": list(_LISTABLE),
        "shortNames": short_names or [],
    }


def discovery_routes(
    core: list[dict[str, Any]],
    groups: dict[str, list[dict[str, Any]]] | None = None,
) -> dict[str, Any]:
    """Routes for ``/api``, ``/apis`` and each group version.

    ``groups`` maps a group version such as ``apps/v1`` to its resources.
    """
    groups = groups or {}
    routes: dict[str, Any] = {
        "/api": {"kind": "APIVersions", "versions": ["v1"]},
        "/api/v1": {"kind": "APIResourceList", "groupVersion": "v1", "resources": core},
        "/apis": {
            "kind": "APIGroupList",
            "groups": [
                {
                    "name": gv.split("/")[0],
                    "versions": [{"groupVersion": gv, "version": gv.split("/")[1]}],
                    "preferredVersion": {"groupVersion": gv, "version": gv.split("/")[1]},
                }
                for gv in groups
            ],
        },
    }
    for gv, resources in groups.items():
        routes[f"/apis/{gv}"] = {"kind": "APIResourceList", "groupVersion": gv, "resources": resources}
    return routes


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def make_client() -> Any:
    """Factory returning ``(client, transport)`` for a set of routes."""

    def _make(routes: dict[str, Any]) -> tuple[Client, FakeTransport]:
        transport = FakeTransport(routes)
        return build_client(transport), transport  # type: ignore[arg-type]

    return _make
