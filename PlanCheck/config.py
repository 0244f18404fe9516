"""Runtime configuration and logging setup for PlanCheck."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, asdict
from typing import Mapping

logger = logging.getLogger(__name__)

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 5000
DEFAULT_MAX_BODY_BYTES = 1_000_000


@dataclass
class ServerConfig:
    """Configuration for the HTTP server."""
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    verbose: bool = True
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> ServerConfig:
        return cls(
            host=data.get("host", DEFAULT_HOST),
            port=data.get("port", DEFAULT_PORT),
            verbose=data.get("verbose", True),
            max_body_bytes=data.get("max_body_bytes", DEFAULT_MAX_BODY_BYTES),
        )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ServerConfig:
        """Build a config from PLANCHECK_* environment variables.

        ``PORT`` is honoured as well, since most hosting platforms set it.
        """
        env = os.environ if environ is None else environ
        port_value = env.get("PLANCHECK_PORT") or env.get("PORT")
        port = DEFAULT_PORT
        if port_value:
            try:
                port = int(port_value)
            except ValueError:
                logger.warning("Ignoring invalid port %r, using %d", port_value, DEFAULT_PORT)
        quiet = env.get("PLANCHECK_QUIET", "").strip().lower() in ("1", "true", "yes")
        return cls(
            host=env.get("PLANCHECK_HOST") or DEFAULT_HOST,
            port=port,
            verbose=not quiet,
        )


def setup_logging(verbose: bool = True) -> None:
    """Configure logging for PlanCheck.

    Args:
        verbose: If True (default), log at INFO level. If False, only WARNINGS+.
    """
    level = logging.INFO if verbose else logging.WARNING
    fmt = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
    datefmt = "%H:%M:%S"
    logging.basicConfig(level=level, format=fmt, datefmt=datefmt, stream=sys.stderr)
