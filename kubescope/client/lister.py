"""List every object of one resource type in one scope, following continue tokens."""

from __future__ import annotations

from kubescope.client.errors import AuthorizationError, TransportError, is_forbidden, is_not_found
from kubescope.client.protocols import DynamicInterface
from kubescope.models.resources import APIResource, ObjectRecord
from kubescope.observability.logging import get_logger
from kubescope.observability.metrics import list_pages_total

_logger = get_logger("client.lister")

PAGE_SIZE = 250


async def list_by_api(dynamic: DynamicInterface, api: APIResource, namespace: str = "") -> list[ObjectRecord]:
    """Return all objects of *api* in *namespace*, or at cluster scope.

    Cluster scope is used when *namespace* is empty or *api* is not
    namespaced.  Pages are requested strictly in continue-token order, so the
    result keeps the order the server returned.

    A 404 or an absent page ends pagination with the objects gathered so far.

    Raises:
        AuthorizationError: on 403; suppressing it is the caller's decision.
        TransportError: on any other failure, with resource/scope context.
    """
    cluster_scope = not api.namespaced or not namespace
    scoped_namespace = "" if cluster_scope else namespace

    items: list[ObjectRecord] = []
    next_token = ""
    while True:
        try:
            page = await dynamic.list(api, namespace=scoped_namespace, limit=PAGE_SIZE, continue_token=next_token)
        except Exception as exc:
            if is_forbidden(exc):
                list_pages_total.labels(outcome="forbidden").inc()
                if cluster_scope:
                    _logger.debug("no_access_at_cluster_scope", resource=str(api))
                else:
                    _logger.debug("no_access_in_namespace", resource=str(api), namespace=namespace)
                raise AuthorizationError(api, scoped_namespace) from exc
            if is_not_found(exc):
                list_pages_total.labels(outcome="not_found").inc()
                break
            list_pages_total.labels(outcome="error").inc()
            if cluster_scope:
                message = (
                    f'failed to list resource type "{api.name}" in API group "{api.group}" '
                    f"at the cluster scope: {exc}"
                )
            else:
                message = (
                    f'failed to list resource type "{api.name}" in API group "{api.group}" '
                    f'in the namespace "{namespace}": {exc}'
                )
            raise TransportError(message, api, scoped_namespace) from exc

        if page is None:
            break
        list_pages_total.labels(outcome="ok").inc()
        items.extend(page.items)
        next_token = page.continue_token
        if not next_token:
            break

    if cluster_scope:
        _logger.debug("listed_objects", resource=str(api), scope="cluster", count=len(items))
    else:
        _logger.debug("listed_objects", resource=str(api), namespace=namespace, count=len(items))
    return items
