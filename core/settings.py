# =============================================================================
# core/settings.py  —  Environment-Driven Configuration
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Reads the environment (populated from .env by python-dotenv at process
#   start) into small frozen dataclasses.  Settings are read at CALL time,
#   not import time, so every tool call sees the current environment and
#   nothing is cached between calls.
#
# DATA SOURCE TOGGLE:
#   BLOB_STORE=cloudflare  → posts CSV comes from Cloudflare Workers KV
#   BLOB_STORE=local       → posts CSV comes from a file in POSTS_DATA_DIR
#   BLOB_STORE unset/none  → no store configured ("KV storage not initialized")
# =============================================================================

from dataclasses import dataclass
import os
from typing import Mapping, Optional

from core.errors import ConfigError


DEFAULT_POSTS_KEY = "posts_csv"
DEFAULT_DATA_DIR = "data"

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _env_flag(env: Mapping[str, str], name: str) -> bool:
    return env.get(name, "false").strip().lower() in _TRUE_VALUES


def _env_int(env: Mapping[str, str], name: str) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from exc


# -----------------------------------------------------------------------------
# PostsSettings — where the posts CSV lives and how to read it
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PostsSettings:
    """Configuration for the posts blob store and the CSV search."""

    backend: str                            # "cloudflare", "local" or "none"
    key: str = DEFAULT_POSTS_KEY            # Fixed blob key for the CSV export
    data_dir: str = DEFAULT_DATA_DIR        # Local backend only
    cloudflare_account_id: str = ""
    cloudflare_namespace_id: str = ""
    cloudflare_api_token: str = ""
    quoted_csv: bool = False                # Opt-in RFC-4180 quoting
    body_max_chars: Optional[int] = None    # None = bodies rendered in full

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "PostsSettings":
        env = os.environ if env is None else env

        backend = env.get("BLOB_STORE", "").strip().lower() or "none"
        if backend not in ("cloudflare", "local", "none"):
            raise ConfigError(
                f"BLOB_STORE must be 'cloudflare', 'local' or unset, got {backend!r}"
            )

        body_max_chars = _env_int(env, "POSTS_BODY_MAX_CHARS")
        if body_max_chars is not None and body_max_chars <= 0:
            body_max_chars = None

        return cls(
            backend=backend,
            key=env.get("POSTS_CSV_KEY", "").strip() or DEFAULT_POSTS_KEY,
            data_dir=env.get("POSTS_DATA_DIR", "").strip() or DEFAULT_DATA_DIR,
            cloudflare_account_id=env.get("CLOUDFLARE_ACCOUNT_ID", "").strip(),
            cloudflare_namespace_id=env.get("CLOUDFLARE_KV_NAMESPACE_ID", "").strip(),
            cloudflare_api_token=env.get("CLOUDFLARE_API_TOKEN", "").strip(),
            quoted_csv=_env_flag(env, "POSTS_CSV_QUOTED"),
            body_max_chars=body_max_chars,
        )


# -----------------------------------------------------------------------------
# AirtableSettings — credentials for the podcast table
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class AirtableSettings:
    """Airtable credentials.  Both values are required to make any request."""

    api_token: str
    base_id: str

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AirtableSettings":
        env = os.environ if env is None else env

        api_token = env.get("AIRTABLE_API_TOKEN", "").strip()
        base_id = env.get("AIRTABLE_BASE_ID", "").strip()
        if not api_token or not base_id:
            raise ConfigError("Airtable credentials not found in environment")
        return cls(api_token=api_token, base_id=base_id)
