"""Bootstrap for a connected kubescope Client.

Wiring order: config -> logging -> k8s configuration -> ApiClient
              -> transport -> discovery -> REST mapper -> dynamic -> Client

The ApiClient connection pool is closed when the context exits, even if a
later step fails.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from kubescope.client.client import Client
from kubescope.config import load_config
from kubescope.kube.discovery import DiscoveryClient
from kubescope.kube.dynamic import DynamicClient
from kubescope.kube.mapper import DiscoveryRESTMapper
from kubescope.kube.transport import KubeTransport
from kubescope.models.config import ClientConfig, KubeScopeConfig
from kubescope.observability.logging import get_logger, setup_logging


class BootstrapError(Exception):
    """Raised when a component needed by the client cannot be built."""

    def __init__(self, component: str, cause: Exception) -> None:
        super().__init__(f"Component '{component}' failed to start: {cause}")
        self.component = component
        self.cause = cause


async def _load_k8s_configuration(config: ClientConfig) -> Any:
    """Build a kubernetes-asyncio Configuration from in-cluster or kubeconfig credentials.

    An explicit kubeconfig path or context always selects kubeconfig loading.
    """
    # Import lazily; kubernetes-asyncio probes the environment on import in
    # some versions.
    from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]
    from kubernetes_asyncio import config as k8s_config  # type: ignore[import-untyped]

    log = get_logger("app")
    configuration = k8s_client.Configuration()
    if not config.kubeconfig and not config.context:
        try:
            # load_incluster_config() is synchronous in kubernetes-asyncio
            k8s_config.load_incluster_config(client_configuration=configuration)
            log.info("k8s client configured from in-cluster service account")
            return configuration
        except k8s_config.ConfigException:
            pass

    # load_kube_config() is async in kubernetes-asyncio
    await k8s_config.load_kube_config(
        config_file=config.kubeconfig or None,
        context=config.context or None,
        client_configuration=configuration,
    )
    log.info("k8s client configured from kubeconfig", context=config.context or "current")
    return configuration


def build_client(transport: KubeTransport) -> Client:
    """Wire the capability providers around *transport* into a Client."""
    discovery = DiscoveryClient(transport)
    return Client(
        discovery=discovery,
        mapper=DiscoveryRESTMapper(discovery),
        dynamic=DynamicClient(transport),
    )


@asynccontextmanager
async def open_client(config: KubeScopeConfig | None = None) -> AsyncIterator[Client]:
    """Yield a Client connected to the cluster described by *config*.

    With no *config*, configuration is read from KUBESCOPE_* environment
    variables and logging is set up from it.

    Raises:
        BootstrapError: if credentials or the API client cannot be set up.
    """
    if config is None:
        config = load_config()
        setup_logging(config.log.level)
    log = get_logger("app")

    try:
        configuration = await _load_k8s_configuration(config.client)
    except Exception as exc:
        raise BootstrapError("k8s_config", exc) from exc

    try:
        from kubernetes_asyncio import client as k8s_client  # type: ignore[import-untyped]

        api_client = k8s_client.ApiClient(configuration=configuration)
    except Exception as exc:
        raise BootstrapError("k8s_client", exc) from exc

    try:
        transport = KubeTransport(
            api_client,
            qps=config.client.qps,
            burst=config.client.burst,
            suppress_warnings=config.client.suppress_warnings,
            request_timeout=config.client.request_timeout_seconds,
        )
        log.debug("kubescope client ready", qps=config.client.qps, burst=config.client.burst)
        yield build_client(transport)
    finally:
        try:
            await api_client.close()
        except Exception as exc:
            log.debug("k8s client close raised (non-fatal)", error=str(exc))
