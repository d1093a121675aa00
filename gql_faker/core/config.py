"""Server configuration.

Values come from CLI options, with the ``ENABLE_EDIT_MODE`` and ``PORT``
environment variables taking part as in:

    ENABLE_EDIT_MODE=false gql-faker serve       # read-only, env wins
    PORT=8080 gql-faker serve                     # port default from env
"""

import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field, field_validator

DEFAULT_PORT = 9002
DEFAULT_SCHEMA_DIR = "schemas"


def parse_boolean(value: str) -> bool:
    """Anything but "false", "0" or "no" (case-insensitive) is true."""
    return value.strip().lower() not in ("false", "0", "no")


def parse_header(value: str) -> tuple[str, str]:
    """Split ``"Name: value"`` into a lower-cased name and a stripped value."""
    name, sep, header_value = value.partition(":")
    if not sep:
        raise ValueError(f"Invalid header {value!r}, expected 'Name: value'")
    return name.strip().lower(), header_value.strip()


class ServerConfig(BaseModel):
    """Process-wide settings injected into the application."""

    schema_dir: Path = Path(DEFAULT_SCHEMA_DIR)
    edit_mode: bool = True
    port: int = DEFAULT_PORT
    forward_headers: list[str] = Field(default_factory=list)
    cors_origin: str | None = None
    open_browser: bool = False
    status_delay: float = 2.0

    @field_validator("forward_headers")
    @classmethod
    def _lower_header_names(cls, value: list[str]) -> list[str]:
        return [name.strip().lower() for name in value if name.strip()]

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "ServerConfig":
        """Build a config from CLI overrides and the environment.

        ``ENABLE_EDIT_MODE`` overrides the ``edit_mode`` option when set;
        ``PORT`` is only used when no port is given.
        """
        environ = os.environ if environ is None else environ
        values = {k: v for k, v in overrides.items() if v is not None}

        if "ENABLE_EDIT_MODE" in environ:
            values["edit_mode"] = parse_boolean(environ["ENABLE_EDIT_MODE"])
        if "port" not in values and environ.get("PORT"):
            values["port"] = int(environ["PORT"])

        return cls(**values)
