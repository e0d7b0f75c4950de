"""Library configuration for fleetsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from fleetsync.exceptions import FleetSyncConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class FleetSyncConfig:
    """Backend configuration shared by every collection.

    Parameters
    ----------
    supabase_url : str or None
        Base URL of the Supabase project (e.g. ``"https://xyz.supabase.co"``).
        Without it (or without a key) every collection runs local-only.
    supabase_key : str or None
        Anonymous (or service) API key sent as ``apikey`` and bearer token.
    storage_dir : str
        Directory holding the local key/value store files.
    remote_enabled : bool
        Master switch for the remote store. When ``False`` collections
        stay local-only even if credentials are present.
    request_timeout : float
        Total timeout in seconds for a single remote request.
    schema : str
        PostgREST schema used for every table (``Accept-Profile``).
    """

    supabase_url: str | None = None
    supabase_key: str | None = None
    storage_dir: str = ".fleetsync"
    remote_enabled: bool = True
    request_timeout: float = 30.0
    schema: str = "public"

    def __post_init__(self) -> None:
        if self.request_timeout <= 0:
            raise FleetSyncConfigError("request_timeout must be positive")
        if self.supabase_url is not None:
            object.__setattr__(self, "supabase_url", self.supabase_url.rstrip("/"))

    @property
    def has_remote(self) -> bool:
        """Whether a remote store can be used at all."""
        return bool(self.remote_enabled and self.supabase_url and self.supabase_key)

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetSyncConfig:
        """Create configuration from environment variables.

        Reads ``SUPABASE_URL``, ``SUPABASE_ANON_KEY`` and the optional
        ``FLEETSYNC_*`` variables. Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SUPABASE_URL": "supabase_url",
            "SUPABASE_ANON_KEY": "supabase_key",
            "FLEETSYNC_STORAGE_DIR": "storage_dir",
            "FLEETSYNC_SCHEMA": "schema",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val:
                config_kwargs[field_name] = val

        if "remote_enabled" not in overrides:
            config_kwargs["remote_enabled"] = _env_bool(env.get("FLEETSYNC_REMOTE_ENABLED"), True)

        timeout_env = env.get("FLEETSYNC_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise FleetSyncConfigError(f"Invalid FLEETSYNC_REQUEST_TIMEOUT: {timeout_env!r}") from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
