"""Persistent configuration for the Canvas client.

The configuration lives in a small key-value store. The keys match the ones
used by the browser version of the tool, so a settings file can be shared:

    canvasDomain   Canvas hostname, without protocol
    canvasToken    API access token
    corsProxy      forwarding proxy prefix (empty to call Canvas directly)
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path

import platformdirs
from loguru import logger

DOMAIN_KEY = "canvasDomain"
TOKEN_KEY = "canvasToken"
PROXY_KEY = "corsProxy"

DEFAULT_PROXY_PREFIX = "https://corsproxy.io/?"

_PROTOCOL_RE = re.compile(r"^https?://", re.IGNORECASE)


@dataclass
class CanvasConfig:
    """Connection settings for a Canvas instance.

    Attributes:
        domain: Canvas hostname, e.g. "canvas.instructure.com"
        access_token: Bearer token used to authenticate API requests
        proxy_prefix: Forwarding proxy prefix; empty string disables the proxy
    """

    domain: str = ""
    access_token: str = ""
    proxy_prefix: str = DEFAULT_PROXY_PREFIX

    @property
    def is_complete(self) -> bool:
        """True if both domain and access token are set."""
        return bool(self.domain) and bool(self.access_token)

    def __repr__(self) -> str:
        # Keep the token out of logs and tracebacks
        return (
            f"CanvasConfig(domain={self.domain!r}, "
            f"access_token={'***' if self.access_token else ''!r}, "
            f"proxy_prefix={self.proxy_prefix!r})"
        )


class JsonFileStore:
    """A string key-value store persisted as a JSON object on disk."""

    @staticmethod
    def _default_path() -> Path:
        """Get the platform-appropriate default path for the settings file."""
        config_dir = Path(platformdirs.user_config_dir("canvasview"))
        return config_dir / "settings.json"

    def __init__(self, path: Path | None = None):
        if path is not None:
            self.path = path
        else:
            self.path = self._default_path()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read settings from {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed settings file {self.path}")
            return {}
        return data

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the stored value for `key`, or `default` if absent."""
        return self._read().get(key, default)

    def set(self, key: str, value: str) -> None:
        """Store a single value."""
        self.set_many({key: value})

    def set_many(self, values: dict[str, str]) -> None:
        """Store several values in one write."""
        data = self._read()
        data.update(values)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug(f"Wrote {', '.join(values)} to {self.path}")


def normalize_domain(domain: str) -> str:
    """Trim whitespace and strip a leading http:// or https:// from a domain."""
    return _PROTOCOL_RE.sub("", domain.strip(), count=1)


def load_config(store: JsonFileStore) -> CanvasConfig:
    """Read the configuration from the store.

    A missing proxy key falls back to the public forwarding service; a stored
    empty string is kept, since that is how the proxy is switched off.
    """
    return CanvasConfig(
        domain=store.get(DOMAIN_KEY) or "",
        access_token=store.get(TOKEN_KEY) or "",
        proxy_prefix=store.get(PROXY_KEY, DEFAULT_PROXY_PREFIX),
    )


def save_config(
    store: JsonFileStore, domain: str, token: str, proxy_prefix: str
) -> CanvasConfig:
    """Normalize and persist the configuration.

    No attempt is made to validate the token or reach the domain; a bad value
    shows up on the first API call.

    Args:
        store: The key-value store to write to
        domain: Canvas hostname, with or without protocol
        token: API access token
        proxy_prefix: Forwarding proxy prefix, or "" for direct requests

    Returns:
        The configuration as stored.
    """
    config = CanvasConfig(
        domain=normalize_domain(domain),
        access_token=token.strip(),
        proxy_prefix=proxy_prefix.strip(),
    )
    store.set_many(
        {
            DOMAIN_KEY: config.domain,
            TOKEN_KEY: config.access_token,
            PROXY_KEY: config.proxy_prefix,
        }
    )
    logger.success(f"Configuration saved for {config.domain or '(no domain)'}")
    return config
