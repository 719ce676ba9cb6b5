"""Error taxonomy for resolution, get and list operations.

ResolutionError      -- a resource, kind or scope lookup failed.
AuthorizationError   -- the server answered 403 Forbidden.
TransportError       -- any other backend failure, with resource context.
ObjectNotFoundError  -- ``get`` of an object that does not exist.

Not-found during listing is not represented here: it ends pagination.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from kubernetes_asyncio.client import ApiException  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from kubescope.models.resources import APIResource

_FORBIDDEN = 403
_NOT_FOUND = 404


class KubeScopeError(Exception):
    """Base class for all kubescope errors."""


class ResolutionError(KubeScopeError):
    """A type string could not be mapped to an API resource."""


class _ScopedError(KubeScopeError):
    def __init__(self, message: str, api_resource: APIResource, namespace: str = "") -> None:
        super().__init__(message)
        self.api_resource = api_resource
        self.namespace = namespace

    @property
    def cluster_scope(self) -> bool:
        return not self.api_resource.namespaced or not self.namespace


class AuthorizationError(_ScopedError):
    """The caller is not allowed to read the resource in this scope."""

    def __init__(self, api_resource: APIResource, namespace: str = "") -> None:
        if not api_resource.namespaced or not namespace:
            message = f'no access to resource type "{api_resource.name}" in API group "{api_resource.group}" at the cluster scope'
        else:
            message = f'no access to resource type "{api_resource.name}" in API group "{api_resource.group}" in the namespace "{namespace}"'
        super().__init__(message, api_resource, namespace)


class TransportError(_ScopedError):
    """A backend call failed for a reason other than authorization."""


class ObjectNotFoundError(_ScopedError, LookupError):
    """The requested object does not exist."""

    def __init__(self, api_resource: APIResource, name: str, namespace: str = "") -> None:
        if api_resource.namespaced and namespace:
            message = f'{api_resource.name}.{api_resource.group or "core"} "{name}" not found in the namespace "{namespace}"'
        else:
            message = f'{api_resource.name}.{api_resource.group or "core"} "{name}" not found'
        super().__init__(message, api_resource, namespace)
        self.name = name


def _status(exc: BaseException | None) -> int | None:
    if isinstance(exc, AuthorizationError):
        return _FORBIDDEN
    if isinstance(exc, ObjectNotFoundError):
        return _NOT_FOUND
    if isinstance(exc, ApiException):
        return exc.status
    return None


def is_forbidden(exc: BaseException | None) -> bool:
    """True when *exc* is an authorization denial (raw 403 or AuthorizationError)."""
    return _status(exc) == _FORBIDDEN


def is_not_found(exc: BaseException | None) -> bool:
    """True when *exc* reports a missing object or resource (raw 404 or ObjectNotFoundError)."""
    return _status(exc) == _NOT_FOUND


def first_error(group: BaseExceptionGroup) -> BaseException:  # type: ignore[type-arg]
    """Return the first leaf exception of a (possibly nested) task-group failure."""
    error: BaseException = group.exceptions[0]
    while isinstance(error, BaseExceptionGroup):
        error = error.exceptions[0]
    return error
