"""
config.py
─────────
Startup configuration read from the environment (a local .env file is
loaded by main.py through python-dotenv).

  NODE_ENV        required; "production" switches on production behaviour
  PORT            listen port, default 5000, must be 1-65535
  SESSION_SECRET  optional; generated (with a warning) in production if unset
  HOST            optional bind address override
"""
from __future__ import annotations
import os
import secrets
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_PORT = 5000

# Set by hosting platforms that route traffic from outside the container.
CLOUD_MARKERS = ("K_SERVICE", "RENDER", "REPL_ID", "DYNO")


class ConfigError(ValueError):
    """Raised when the environment cannot produce a usable Settings."""


@dataclass(frozen=True)
class Settings:
    node_env:                 str
    port:                     int
    host:                     str
    session_secret:           Optional[str]
    session_secret_generated: bool = False

    @property
    def is_production(self) -> bool:
        return self.node_env == "production"


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    node_env = env.get("NODE_ENV", "").strip()
    if not node_env:
        raise ConfigError("Missing required environment variables: NODE_ENV")

    port = parse_port(env.get("PORT") or str(DEFAULT_PORT))

    session_secret = env.get("SESSION_SECRET") or None
    generated = False
    if session_secret is None and node_env == "production":
        session_secret = "default-session-secret-" + secrets.token_hex(16)
        generated = True

    return Settings(
        node_env=node_env,
        port=port,
        host=resolve_host(env),
        session_secret=session_secret,
        session_secret_generated=generated,
    )


def parse_port(raw: str) -> int:
    try:
        port = int(raw.strip())
    except ValueError:
        port = 0
    if not 1 <= port <= 65535:
        raise ConfigError(
            "Invalid PORT value: {}. Port must be a number between 1 and 65535.".format(raw))
    return port


def resolve_host(env: Mapping[str, str]) -> str:
    explicit = env.get("HOST", "").strip()
    if explicit:
        return explicit
    if any(env.get(marker) for marker in CLOUD_MARKERS):
        return "0.0.0.0"
    return "127.0.0.1"
