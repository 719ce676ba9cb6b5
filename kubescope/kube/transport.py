"""Authenticated, rate-limited JSON GET transport over kubernetes-asyncio.

Every discovery and object request goes through ``KubeTransport.get_json``
so the client-side rate limit covers the whole fan-out.  Responses are read
raw (``_preload_content=False``) and decoded as plain dicts; no generated
model classes are involved, which is what lets the same path serve any
resource type including custom resources.
"""

from __future__ import annotations

import json
from typing import Any

from kubernetes_asyncio.client import ApiClient, ApiException  # type: ignore[import-untyped]

from kubescope.kube.ratelimit import TokenBucket
from kubescope.observability.logging import get_logger

_logger = get_logger("kube.transport")

_AUTH_SETTINGS = ["BearerToken"]


class KubeTransport:
    """Issues GET requests against the API server.

    Args:
        api_client:        Configured kubernetes-asyncio ApiClient (owns the
                           connection pool and credentials).
        qps:               Sustained request rate.
        burst:             Maximum requests admitted at once.
        suppress_warnings: Drop server ``Warning`` headers instead of logging
                           them.
        request_timeout:   Per-request timeout in seconds.
    """

    def __init__(
        self,
        api_client: ApiClient,
        qps: float = 200,
        burst: int = 400,
        suppress_warnings: bool = True,
        request_timeout: float = 30.0,
    ) -> None:
        self._api_client = api_client
        self._limiter = TokenBucket(qps, burst)
        self._suppress_warnings = suppress_warnings
        self._request_timeout = request_timeout

    @property
    def api_client(self) -> ApiClient:
        return self._api_client

    async def get_json(
        self,
        path: str,
        path_params: dict[str, str] | None = None,
        query: list[tuple[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """GET *path* and return the decoded JSON body.

        ``path`` may contain ``{placeholders}`` filled (and URL-quoted) from
        *path_params*.

        Raises:
            ApiException: for any non-2xx response, with ``status`` set.
        """
        await self._limiter.acquire()
        response = await self._api_client.call_api(
            path,
            "GET",
            path_params=path_params or {},
            query_params=query or [],
            header_params={"Accept": "application/json"},
            auth_settings=_AUTH_SETTINGS,
            _return_http_data_only=True,
            _preload_content=False,
            _request_timeout=self._request_timeout,
        )
        try:
            body = await response.read()
            status = response.status
            if not 200 <= status <= 299:
                error = ApiException(status=status, reason=response.reason)
                error.body = body.decode("utf-8", "replace")
                raise error
            self._handle_warnings(path, response.headers)
        finally:
            response.release()
        return json.loads(body) if body else {}

    def _handle_warnings(self, path: str, headers: Any) -> None:
        if self._suppress_warnings or headers is None:
            return
        for warning in headers.getall("Warning", []):
            _logger.warning("server_warning", path=path, warning=warning)
