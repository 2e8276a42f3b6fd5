"""
Notes API client for the CLI.

Async httpx client bound to one server. It speaks both surfaces the
server exposes: the HTTP notes API under ``api_prefix`` and the
note_v1.NoteV1 RPC service under ``rpc_prefix``, both read from
application.yaml. Every request carries ``X-Frontend-ID: cli`` so server
logs can tell CLI traffic apart.

Usage:
    async with APIClient("http://127.0.0.1:8081") as client:
        response = await client.create_note({"title": "t", ...})
        response = await client.update_note(42, {"is_public": False})
        response = await client.rpc_update(42, {"title": {"value": ""}})
"""

from typing import Any

import httpx

from note_service.backend.api.rpc.note_v1 import SERVICE_NAME as RPC_SERVICE
from note_service.backend.core.config import get_app_config, get_server_base_url
from note_service.backend.core.logging import get_logger, log_with_source

logger = get_logger(__name__)

NOTES_RESOURCE = "/notes"
DEFAULT_TIMEOUT = 30.0
CONFIG_ERRORS = (RuntimeError, FileNotFoundError, ValueError)


class APIClient:
    """
    Thin wrapper over httpx.AsyncClient for the notes HTTP API and RPC service.

    Methods return the raw httpx.Response; status handling is left to
    the caller. Transport failures raise httpx.HTTPError.
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        """
        Args:
            base_url: Server base URL. Read from application.yaml when None.
            timeout: Request timeout in seconds. Taken from application.yaml
                together with the URL, else 30 seconds.

        Raises:
            RuntimeError: If application.yaml cannot be loaded
        """
        try:
            application = get_app_config().application
            if base_url is None:
                base_url, config_timeout = get_server_base_url()
                if timeout is None:
                    timeout = config_timeout
        except CONFIG_ERRORS as e:
            raise RuntimeError(
                "Could not read server settings from config/settings/application.yaml"
            ) from e

        self.base_url = base_url.rstrip("/")
        self.timeout = DEFAULT_TIMEOUT if timeout is None else timeout
        self.notes_path = application.api_prefix.rstrip("/") + NOTES_RESOURCE
        self.rpc_path = f"{application.rpc_prefix.rstrip('/')}/{RPC_SERVICE}"
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "APIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": "cli"},
            )
        return self._client

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        client = await self._get_client()
        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_with_source(
                logger, "cli", "error", "API request failed",
                method=method, path=path, error=str(e),
            )
            raise

        log_with_source(
            logger, "cli", "debug", "API request",
            method=method, path=path, status_code=response.status_code,
        )
        return response

    # HTTP notes API

    async def create_note(self, info: dict[str, Any]) -> httpx.Response:
        return await self.request("POST", self.notes_path, json=info)

    async def get_note(self, note_id: int) -> httpx.Response:
        return await self.request("GET", f"{self.notes_path}/{note_id}")

    async def list_notes(self, limit: int, offset: int) -> httpx.Response:
        return await self.request(
            "GET", self.notes_path, params={"limit": limit, "offset": offset}
        )

    async def update_note(self, note_id: int, changes: dict[str, Any]) -> httpx.Response:
        """PATCH with only ``changes``; fields not in the dict stay untouched."""
        return await self.request("PATCH", f"{self.notes_path}/{note_id}", json=changes)

    async def delete_note(self, note_id: int) -> httpx.Response:
        return await self.request("DELETE", f"{self.notes_path}/{note_id}")

    async def ping(self) -> httpx.Response:
        return await self.request("GET", "/health")

    # note_v1.NoteV1 RPC

    async def rpc_call(self, method: str, message: dict[str, Any]) -> httpx.Response:
        """POST one JSON-encoded note_v1 message to ``<rpc_path>/<method>``."""
        return await self.request("POST", f"{self.rpc_path}/{method}", json=message)

    async def rpc_create(self, info: dict[str, Any]) -> httpx.Response:
        return await self.rpc_call("Create", {"info": info})

    async def rpc_get(self, note_id: int) -> httpx.Response:
        return await self.rpc_call("Get", {"id": note_id})

    async def rpc_list(self, limit: int, offset: int) -> httpx.Response:
        return await self.rpc_call("List", {"limit": limit, "offset": offset})

    async def rpc_update(self, note_id: int, info: dict[str, Any]) -> httpx.Response:
        """
        ``info`` maps field names to wrapper messages, e.g.
        ``{"is_public": {"value": False}}``. Fields without a wrapper stay untouched.
        """
        return await self.rpc_call("Update", {"id": note_id, "info": info})

    async def rpc_delete(self, note_id: int) -> httpx.Response:
        return await self.rpc_call("Delete", {"id": note_id})


_client: APIClient | None = None


def get_api_client() -> APIClient:
    """Shared client, created from application.yaml on first use."""
    global _client
    if _client is None:
        _client = APIClient()
    return _client


def configure_api_client(base_url: str, timeout: float | None = None) -> APIClient:
    """Replace the shared client with one bound to ``base_url``."""
    global _client
    _client = APIClient(base_url=base_url, timeout=timeout)
    return _client


async def close_api_client() -> None:
    global _client
    if _client:
        await _client.close()
        _client = None
