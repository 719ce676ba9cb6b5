"""Client facade: resolve resource types, get one object, list many."""

from __future__ import annotations

from kubescope.client.aggregator import list_many
from kubescope.client.errors import AuthorizationError, ObjectNotFoundError, TransportError, is_forbidden, is_not_found
from kubescope.client.protocols import DiscoveryInterface, DynamicInterface, RESTMapper
from kubescope.client.resolver import resolve_api_resource
from kubescope.models.resources import APIResource, GetRequest, ListRequest, ObjectRecord
from kubescope.observability.logging import get_logger

_logger = get_logger("client")


class Client:
    """Read-only access to API objects of any resource type.

    The collaborators are safe for concurrent use; the client holds no
    mutable state of its own.
    """

    def __init__(
        self,
        discovery: DiscoveryInterface,
        mapper: RESTMapper,
        dynamic: DynamicInterface,
    ) -> None:
        self._discovery = discovery
        self._mapper = mapper
        self._dynamic = dynamic

    async def resolve_api_resource(self, type_string: str) -> APIResource:
        """Resolve ``pods``, ``deployments.apps`` or ``jobs.v1.batch`` to an APIResource."""
        return await resolve_api_resource(self._mapper, type_string)

    async def get(self, request: GetRequest) -> ObjectRecord:
        """Fetch a single object; the namespace is dropped for cluster-scoped resources."""
        api = request.api_resource
        namespace = request.namespace if api.namespaced else ""
        _logger.debug("get", resource=str(api), namespace=namespace, name=request.name)
        try:
            return await self._dynamic.get(api, request.name, namespace=namespace)
        except Exception as exc:
            if is_forbidden(exc):
                raise AuthorizationError(api, namespace) from exc
            if is_not_found(exc):
                raise ObjectNotFoundError(api, request.name, namespace) from exc
            if namespace:
                message = (
                    f'failed to get "{request.name}" of resource type "{api.name}" in API group '
                    f'"{api.group}" in the namespace "{namespace}": {exc}'
                )
            else:
                message = (
                    f'failed to get "{request.name}" of resource type "{api.name}" in API group '
                    f'"{api.group}" at the cluster scope: {exc}'
                )
            raise TransportError(message, api, namespace) from exc

    async def list(self, request: ListRequest) -> list[ObjectRecord]:
        """List objects across resource types and namespaces.

        See :func:`kubescope.client.aggregator.list_many` for the scope and
        error-suppression rules.
        """
        _logger.debug(
            "list",
            resources=[str(api) for api in request.api_resources],
            namespaces=request.namespaces,
        )
        items = await list_many(self._dynamic, self._discovery, request)
        _logger.info(
            "listed_objects",
            count=len(items),
            resources=len(request.api_resources) or "all",
        )
        return items
