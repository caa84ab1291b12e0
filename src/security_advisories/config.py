"""Settings for the conflict builder.

Values are resolved in this order: explicit arguments, environment variables,
then built-in defaults.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

SOURCE_ENV_VAR = "SECURITY_ADVISORIES_SOURCE"
OUTPUT_ENV_VAR = "SECURITY_ADVISORIES_OUTPUT"
PACKAGE_NAME_ENV_VAR = "SECURITY_ADVISORIES_PACKAGE_NAME"

DEFAULT_OUTPUT_PATH = Path("build") / "composer.json"
DEFAULT_PACKAGE_NAME = "roave/security-advisories"


class ConfigError(RuntimeError):
    """Raised when the settings cannot be resolved."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved builder settings."""

    source: str
    output: Path
    package_name: str


def _resolve(explicit: str | None, env_var: str, default: str) -> str:
    if explicit:
        return explicit

    env_value = os.environ.get(env_var, "").strip()
    if env_value:
        return env_value

    return default


def load_settings(
    source: str | None = None,
    output: Path | str | None = None,
    package_name: str | None = None,
) -> Settings:
    """Resolve settings from arguments and the environment.

    Raises:
        ConfigError: If no advisory source is configured.
    """
    resolved_source = _resolve(source, SOURCE_ENV_VAR, "")
    if not resolved_source:
        raise ConfigError(
            f"No advisory source configured; pass --source or set {SOURCE_ENV_VAR}"
        )

    resolved_output = _resolve(
        str(output) if output is not None else None, OUTPUT_ENV_VAR, str(DEFAULT_OUTPUT_PATH)
    )
    resolved_name = _resolve(package_name, PACKAGE_NAME_ENV_VAR, DEFAULT_PACKAGE_NAME)

    return Settings(
        source=resolved_source,
        output=Path(resolved_output),
        package_name=resolved_name,
    )
