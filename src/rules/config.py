from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from unique_id.errors import ConfigError
from unique_id.options import DEFAULT_ID_LENGTH, IdOptions, conform_options

CONFIG_FILENAME = "unique-id.toml"
DEFAULT_OUTPUT_DIR = ".unique-id"


class IdsConfig(BaseModel):
    """The ``[ids]`` table: options passed to ``create_id`` for every file."""

    model_config = ConfigDict(extra="forbid", strict=True)

    root_path: str | None = Field(
        default=None,
        description="Package root, relative to the scanned root if not absolute",
    )
    is_package: bool = Field(
        default=False,
        description="Include package name and version in IDs",
    )
    package_name: str | None = Field(default=None, description="Package name")
    package_version: str | None = Field(default=None, description="Package version")
    id_length: int = Field(default=DEFAULT_ID_LENGTH, description="Length of IDs")
    plugin_name: str | None = Field(
        default=None,
        description="Prefix for error messages",
    )


class UniqueIdConfig(BaseModel):
    """Configuration for call ID generation over a source tree."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str = Field(
        default=DEFAULT_OUTPUT_DIR,
        description="Output directory for generated artifacts",
    )
    include: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to include (empty = all Python files)",
    )
    exclude: list[str] = Field(
        default_factory=list,
        description="Glob patterns for files to exclude",
    )
    nested_gitignore: bool = Field(
        default=False,
        description=(
            "Enable nested .gitignore composition (default: false for root-only)"
        ),
    )
    ids: IdsConfig = Field(
        default_factory=IdsConfig,
        description="Options for ID creation",
    )

    def id_options(self, root: Path) -> IdOptions:
        """Build validated ``create_id`` options, anchoring root_path at ``root``.

        Raises:
            ConfigError: If the ``[ids]`` table holds invalid options.
        """
        values = self.ids.model_dump()
        if values["root_path"]:
            values["root_path"] = str(root / values["root_path"])
        return conform_options(values)


def resolve_output_dir(root: Path, output_dir: str) -> Path:
    """Resolve a config-provided output_dir safely within the repo root.

    The config output_dir must be a non-empty relative path that remains
    within the repository root after resolution. Absolute paths and paths
    that escape the root are rejected.
    """
    if not output_dir:
        msg = "output_dir must be a non-empty relative path"
        raise ConfigError(msg)

    output_path = Path(output_dir)
    if output_dir.startswith("~") or output_path.is_absolute():
        msg = "output_dir must be a relative path within the repo root"
        raise ConfigError(msg)

    try:
        resolved_root = root.resolve()
        resolved_output = (resolved_root / output_path).resolve()
    except OSError as exc:
        msg = f"Failed to resolve output_dir '{output_dir}': {exc}"
        raise ConfigError(msg) from exc

    try:
        resolved_output.relative_to(resolved_root)
    except ValueError as exc:
        msg = f"output_dir '{output_dir}' escapes the repository root"
        raise ConfigError(msg) from exc

    return resolved_output


def load_config(root: Path) -> UniqueIdConfig:
    """Load configuration from unique-id.toml if it exists."""
    config_path = root / CONFIG_FILENAME

    if not config_path.is_file():
        return UniqueIdConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {config_path}: {e}"
        raise ConfigError(msg) from e

    try:
        config = UniqueIdConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {config_path}: {e}"
        raise ConfigError(msg) from e

    config.id_options(root)
    return config
