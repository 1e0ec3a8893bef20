# =============================================================================
# core/blob_store.py  —  Posts Blob Store Accessors
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Fetches the raw posts CSV by key.  The query engine only needs one
#   operation, `await store.get(key) -> str | None`, and both backends here
#   implement exactly that:
#
#     CloudflareKVStore    — Cloudflare Workers KV, via its REST API
#     LocalDirectoryStore  — one file per key inside a local directory
#
#   `None` means "nothing stored under this key".  A store that cannot be
#   reached raises BlobStoreError.
#
# SELECTION:
#   blob_store_from_settings() picks the backend from BLOB_STORE (see
#   core/settings.py).  It returns None when no store is configured, which
#   the search reports as "KV storage not initialized".
# =============================================================================

from pathlib import Path
from typing import Optional, Union
from urllib.parse import quote

import httpx

from core.errors import BlobStoreError, ConfigError
from core.settings import PostsSettings

CLOUDFLARE_API_BASE = "https://api.cloudflare.com/client/v4"


# =============================================================================
# Cloudflare Workers KV
# =============================================================================
class CloudflareKVStore:
    """Read-only access to one Workers KV namespace.

    Values are read with
    GET /accounts/{account_id}/storage/kv/namespaces/{namespace_id}/values/{key},
    which returns the raw value as the body, or 404 if the key is absent.
    """

    def __init__(
        self,
        account_id: str,
        namespace_id: str,
        api_token: str,
        *,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not (account_id and namespace_id and api_token):
            raise ConfigError(
                "Cloudflare KV needs CLOUDFLARE_ACCOUNT_ID, "
                "CLOUDFLARE_KV_NAMESPACE_ID and CLOUDFLARE_API_TOKEN"
            )
        self._base_url = (
            f"{CLOUDFLARE_API_BASE}/accounts/{account_id}"
            f"/storage/kv/namespaces/{namespace_id}"
        )
        self._headers = {"Authorization": f"Bearer {api_token}"}
        self._timeout = timeout
        self._transport = transport

    def value_url(self, key: str) -> str:
        return f"{self._base_url}/values/{quote(key, safe='')}"

    async def get(self, key: str) -> Optional[str]:
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                response = await client.get(self.value_url(key), headers=self._headers)
        except httpx.HTTPError as exc:
            raise BlobStoreError(f"Cloudflare KV request failed: {exc}") from exc

        if response.status_code == 404:
            return None
        if response.status_code != 200:
            raise BlobStoreError(
                f"Cloudflare KV returned HTTP {response.status_code} for key {key!r}"
            )
        return response.content.decode("utf-8")


# =============================================================================
# Local directory (development / tests)
# =============================================================================
class LocalDirectoryStore:
    """Serves each key from a same-named UTF-8 file under `root`."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        # Keys are flat names; anything path-like is rejected.
        if not key or Path(key).name != key:
            raise BlobStoreError(f"Invalid blob key: {key!r}")
        return self.root / key

    async def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise BlobStoreError(f"Could not read {path}: {exc}") from exc


BlobStoreBackend = Union[CloudflareKVStore, LocalDirectoryStore]


def blob_store_from_settings(settings: PostsSettings) -> Optional[BlobStoreBackend]:
    """Build the configured blob store, or None if BLOB_STORE is unset."""
    if settings.backend == "cloudflare":
        return CloudflareKVStore(
            settings.cloudflare_account_id,
            settings.cloudflare_namespace_id,
            settings.cloudflare_api_token,
        )
    if settings.backend == "local":
        return LocalDirectoryStore(settings.data_dir)
    return None
