"""Resolve a free-form type string (``pods``, ``deploy.apps``, ``jobs.v1.batch``)
into an APIResource.

Resolution runs in three stages, each with its own error message so the
caller can surface it verbatim:

1. resource  -- type string to GroupVersionResource (preferred version when
                the input does not name one)
2. kind      -- GroupVersionResource to GroupVersionKind
3. scope     -- GroupKind to a REST mapping (namespaced or cluster-scoped)
"""

from __future__ import annotations

from kubescope.client.errors import ResolutionError
from kubescope.client.protocols import RESTMapper, Scope
from kubescope.models.resources import APIResource
from kubescope.models.schema import GroupVersionKind, GroupVersionResource, parse_resource_arg
from kubescope.observability.logging import get_logger

_logger = get_logger("client.resolver")


def _in_group(message: str, group: str) -> str:
    if group:
        return f'{message} in group "{group}"'
    return message


async def resolve_api_resource(mapper: RESTMapper, type_string: str) -> APIResource:
    """Map *type_string* to an APIResource using *mapper*.

    Raises:
        ResolutionError: naming the stage that failed and the offending
            resource or kind (and its group, when it has one).
    """
    fully_specified, group_resource = parse_resource_arg(type_string.lower())

    gvr = GroupVersionResource()
    if fully_specified is not None:
        try:
            gvr = await mapper.resource_for(fully_specified)
        except Exception:
            # "ingresses.networking.k8s.io" also parses as resource.version.group;
            # any failure here falls through to the group-resource lookup.
            gvr = GroupVersionResource()
    if gvr.empty():
        try:
            gvr = await mapper.resource_for(group_resource.with_version(""))
        except Exception as exc:
            message = _in_group(
                f'the server doesn\'t have a resource type "{group_resource.resource}"',
                group_resource.group,
            )
            raise ResolutionError(message) from exc

    try:
        gvk = await mapper.kind_for(gvr)
    except Exception as exc:
        message = _in_group(
            f'the server couldn\'t identify a kind for resource type "{gvr.resource}"',
            gvr.group,
        )
        raise ResolutionError(message) from exc
    if gvk.empty():
        raise ResolutionError(
            _in_group(f'the server couldn\'t identify a kind for resource type "{gvr.resource}"', gvr.group)
        )

    try:
        mapping = await mapper.rest_mapping(gvk.group_kind(), gvk.version)
    except Exception as exc:
        message = _in_group(
            f'the server couldn\'t identify a group kind for resource type "{gvk.kind}"',
            gvk.group,
        )
        raise ResolutionError(message) from exc

    api = _to_api_resource(gvr, gvk, mapping.scope)
    _logger.debug("resolved_api_resource", type_string=type_string, resource=str(api), namespaced=api.namespaced)
    return api


def _to_api_resource(gvr: GroupVersionResource, gvk: GroupVersionKind, scope: Scope) -> APIResource:
    return APIResource(
        group=gvk.group,
        version=gvk.version,
        kind=gvk.kind,
        name=gvr.resource,
        namespaced=scope == Scope.NAMESPACE,
    )
