"""Base classes for typed node configurations.

This module provides base classes that node configs inherit from to get:
- Strict validation (reject unknown fields)
- Factory methods with clear error messages
- Common validation patterns (path and encoding handling)

Example usage:
    class ReadFileConfig(EncodedPathConfig):
        mode: ReadMode = ReadMode.WHOLE

    cfg = ReadFileConfig.from_dict(config)
    path = cfg.resolved_path()  # Direct access, fails fast if missing
"""

import codecs
import os
from pathlib import Path
from typing import Any, Self

from pydantic import BaseModel, ValidationError, field_validator

from flowline.contracts import NodeConfigError
from flowline.nodes.encoding import DEFAULT_ENCODING, canonical_encoding_name, resolve_encoding


class NodeConfig(BaseModel):
    """Base class for typed node configurations.

    All node configs should inherit from this class.
    """

    model_config = {"extra": "forbid"}  # Reject unknown fields

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> Self:
        """Create config from dict with clear error on validation failure.

        Args:
            config: Dictionary of configuration values.

        Returns:
            Validated configuration instance.

        Raises:
            NodeConfigError: If configuration is invalid.
        """
        if not isinstance(config, dict):
            raise NodeConfigError(f"Invalid configuration for {cls.__name__}: config must be a dict, got {type(config).__name__}.")

        try:
            return cls.model_validate(dict(config))
        except ValidationError as e:
            raise NodeConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e
        except ValueError as e:
            raise NodeConfigError(f"Invalid configuration for {cls.__name__}: {e}") from e


class PathConfig(NodeConfig):
    """Base for configs that include a file path.

    The stored path is normalized (os.path.normpath) but otherwise kept as
    given, relative paths included, so it can be reported verbatim.
    """

    path: str

    @field_validator("path", mode="before")
    @classmethod
    def validate_path_not_none(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("path cannot be None")
        if isinstance(v, os.PathLike):
            return os.fspath(v)
        return v

    @field_validator("path")
    @classmethod
    def validate_path_not_empty(cls, v: str) -> str:
        """Validate that path is not empty or whitespace-only, then normalize it."""
        if not v or not v.strip():
            raise ValueError("path cannot be empty")
        return os.path.normpath(v)

    def resolved_path(self, base_dir: Path | None = None) -> Path:
        """Resolve path relative to base directory if provided.

        Args:
            base_dir: Base directory for relative path resolution.
                     If None, path is returned as-is.

        Returns:
            Resolved Path object.
        """
        p = Path(self.path)
        if base_dir and not p.is_absolute():
            return base_dir / p
        return p


class EncodedPathConfig(PathConfig):
    """Path config for text files, adding a resolved character encoding.

    encoding accepts a name or a codecs.CodecInfo and is stored as the
    codec's name ("utf-8", "iso8859-1", ...).
    """

    encoding: str = DEFAULT_ENCODING

    @field_validator("encoding", mode="before")
    @classmethod
    def validate_encoding_given(cls, v: Any) -> Any:
        if v is None:
            raise ValueError("encoding cannot be None")
        if isinstance(v, codecs.CodecInfo):
            return resolve_encoding(v).name
        return v

    @field_validator("encoding")
    @classmethod
    def validate_encoding_known(cls, v: str) -> str:
        try:
            return resolve_encoding(v).name
        except LookupError as e:
            raise ValueError(f"unknown encoding '{v}': {e}") from e

    @property
    def encoding_name(self) -> str:
        """Canonical display name, e.g. UTF-8."""
        return canonical_encoding_name(self.encoding)
