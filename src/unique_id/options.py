"""Option validation for ``create_id``."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from unique_id.errors import ConfigError
from unique_id.hashing import MAX_HASH_LENGTH

DEFAULT_ID_LENGTH = 8

# Session slot for the shared counter namespace. Callers wanting their own
# sequence of IDs pass a different ``counter_key``.
DEFAULT_COUNTER_KEY = "unique_id:counter"

# Session slot holding the memoized identity string of the file.
ID_STRING_KEY = "unique_id:id_string"


class IdOptions(BaseModel):
    """Options controlling how IDs are derived."""

    model_config = ConfigDict(extra="forbid", frozen=True, strict=True)

    root_path: str | None = Field(
        default=None,
        min_length=1,
        description="Package/app root, skips searching for package.json",
    )
    is_package: bool = Field(
        default=False,
        description="Include package name and version in IDs",
    )
    package_name: str | None = Field(
        default=None,
        min_length=1,
        description="Package name (must pair with package_version)",
    )
    package_version: str | None = Field(
        default=None,
        min_length=1,
        description="Package version (must pair with package_name)",
    )
    id_length: int = Field(
        default=DEFAULT_ID_LENGTH,
        ge=1,
        le=MAX_HASH_LENGTH,
        description="Length of IDs",
    )
    plugin_name: str | None = Field(
        default=None,
        min_length=1,
        description="Prefix for error messages",
    )
    counter_key: str = Field(
        default=DEFAULT_COUNTER_KEY,
        min_length=1,
        description="Session slot holding the counter to increment",
    )

    @field_validator("root_path")
    @classmethod
    def strip_trailing_separator(cls, v: str | None) -> str | None:
        if v and v != os.sep and v.endswith(os.sep):
            return v[:-1]
        return v

    @field_validator("counter_key")
    @classmethod
    def check_counter_key(cls, v: str) -> str:
        if v == ID_STRING_KEY:
            msg = f"counter_key must not be {ID_STRING_KEY!r}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def check_package_pair(self) -> IdOptions:
        if (self.package_name is None) != (self.package_version is None):
            msg = (
                "package_name and package_version must either be both "
                "provided or both omitted"
            )
            raise ValueError(msg)
        return self


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error["loc"])
        message = error["msg"]
        if loc:
            message = f"options.{loc}: {message} - got {error['input']!r}"
        parts.append(message)
    return "; ".join(parts)


def conform_options(
    options: IdOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> IdOptions:
    """Validate options and fill in defaults.

    Options set to None are treated as omitted. Validation failures are
    prefixed with ``plugin_name`` when a usable one was given.

    Raises:
        ConfigError: If any option is invalid.
    """
    if isinstance(options, IdOptions):
        if not overrides:
            return options
        raw: dict[str, Any] = options.model_dump()
    elif options is None or isinstance(options, Mapping):
        raw = dict(options or {})
    else:
        msg = f"options must be a mapping if provided - got {options!r}"
        raise ConfigError(msg)

    raw.update(overrides)
    raw = {key: value for key, value in raw.items() if value is not None}

    plugin_name = raw.get("plugin_name")
    prefix = f"{plugin_name}: " if isinstance(plugin_name, str) and plugin_name else ""

    try:
        return IdOptions.model_validate(raw)
    except ValidationError as exc:
        msg = f"{prefix}{_format_validation_error(exc)}"
        raise ConfigError(msg) from exc


__all__ = [
    "DEFAULT_COUNTER_KEY",
    "DEFAULT_ID_LENGTH",
    "ID_STRING_KEY",
    "IdOptions",
    "conform_options",
]
