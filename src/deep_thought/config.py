"""Process configuration loaded once from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

from .constants import (
    DEFAULT_FACILITATOR_URL,
    DEFAULT_KEYPAIR_PATH,
    DEFAULT_PORT,
    DEFAULT_RPC_URL,
    DEFAULT_SERVER_URL,
    SVM_NETWORK,
)
from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the resource server."""

    payee_address: str
    port: int = DEFAULT_PORT
    facilitator_url: str = DEFAULT_FACILITATOR_URL
    network: str = SVM_NETWORK
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build server config from environment variables.

        Args:
            environ: Mapping to read from. Defaults to ``os.environ``.

        Returns:
            ServerConfig instance.

        Raises:
            ConfigError: If SVM_PAYEE_ADDRESS is not set or PORT is not a number.
        """
        env = os.environ if environ is None else environ

        payee_address = env.get("SVM_PAYEE_ADDRESS", "").strip()
        if not payee_address:
            raise ConfigError("SVM_PAYEE_ADDRESS environment variable is required")

        return cls(
            payee_address=payee_address,
            port=_parse_port(env.get("PORT")),
            facilitator_url=env.get("FACILITATOR_URL") or DEFAULT_FACILITATOR_URL,
            network=env.get("SVM_NETWORK") or SVM_NETWORK,
            log_level=env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        )


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the paying client."""

    server_url: str = DEFAULT_SERVER_URL
    keypair_path: str = os.path.expanduser(DEFAULT_KEYPAIR_PATH)
    rpc_url: str = DEFAULT_RPC_URL
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def endpoint(self) -> str:
        return f"{self.server_url}/meaning-of-life"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Build client config from environment variables.

        A leading ``~`` in KEYPAIR_PATH is expanded to the user's home.
        """
        env = os.environ if environ is None else environ

        keypair_path = env.get("KEYPAIR_PATH") or DEFAULT_KEYPAIR_PATH
        return cls(
            server_url=(env.get("SERVER_URL") or DEFAULT_SERVER_URL).rstrip("/"),
            keypair_path=_expand_home(keypair_path, env),
            rpc_url=env.get("RPC_URL") or DEFAULT_RPC_URL,
            log_level=env.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        )


def _parse_port(value: str | None) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"PORT must be an integer, got {value!r}") from e


def _expand_home(path: str, env: Mapping[str, str]) -> str:
    if not path.startswith("~"):
        return path
    home = env.get("HOME")
    if home:
        return home + path[1:]
    return os.path.expanduser(path)


def configure_logging(level: str) -> None:
    """Configure root logging for an entry point."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level.upper())
