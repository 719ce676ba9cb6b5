"""kubescope: resolve Kubernetes resource types and list objects across scopes.

Typical use::

    from kubescope.app import open_client
    from kubescope.models.resources import ListRequest

    async with open_client() as client:
        pods = await client.resolve_api_resource("pods")
        objects = await client.list(ListRequest(api_resources=[pods], namespaces=["default"]))
"""

__version__ = "0.1.0"
