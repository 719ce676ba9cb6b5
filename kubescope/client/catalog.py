"""Catalog of listable API resources, built from server-preferred discovery."""

from __future__ import annotations

from kubescope.client.protocols import DiscoveryInterface
from kubescope.models.resources import APIResource
from kubescope.models.schema import GroupKind, parse_group_version
from kubescope.observability.logging import get_logger
from kubescope.observability.metrics import resources_discovered

_logger = get_logger("client.catalog")

REQUIRED_VERBS: tuple[str, ...] = ("watch", "list", "get")

# Resources served twice since Kubernetes v1.18, keyed by the legacy
# (group, kind) and mapped to the resource that supersedes it.
SUPERSEDED_RESOURCES: dict[GroupKind, str] = {
    GroupKind(group="", kind="Event"): "events.v1.events.k8s.io",
    GroupKind(group="extensions", kind="Ingress"): "ingresses.v1.networking.k8s.io",
}


async def fetch_api_resources(discovery: DiscoveryInterface) -> list[APIResource]:
    """Return every resource on the cluster that can be watched, listed and fetched.

    Legacy duplicates in SUPERSEDED_RESOURCES are left out so the same objects
    are not listed twice.  The result is not cached.
    """
    resource_lists = await discovery.server_preferred_resources()

    apis: list[APIResource] = []
    for resource_list in resource_lists:
        if not resource_list.resources:
            continue
        try:
            gv = parse_group_version(resource_list.group_version)
        except ValueError as exc:
            _logger.debug(
                "ignoring_invalid_discovered_resource",
                group_version=resource_list.group_version,
                error=str(exc),
            )
            continue
        for resource in resource_list.resources:
            if not resource.has_verbs(*REQUIRED_VERBS):
                continue
            api = APIResource(
                group=gv.group,
                version=gv.version,
                kind=resource.kind,
                name=resource.name,
                namespaced=resource.namespaced,
            )
            replacement = SUPERSEDED_RESOURCES.get(GroupKind(group=api.group, kind=api.kind))
            if replacement is not None:
                _logger.debug("excluding_duplicated_discovered_resource", resource=str(api), superseded_by=replacement)
                continue
            apis.append(api)

    resources_discovered.set(len(apis))
    _logger.debug("discovered_api_resources", count=len(apis))
    return apis
