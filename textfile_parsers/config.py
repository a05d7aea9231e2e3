"""
Configuration models and YAML I/O for textfile-parsers.

This module defines the Pydantic models that map 1:1 to a parser YAML file,
plus helpers for loading and saving it.

Key models:
- ParserConfig: Top-level config (layout + source + culture + trimming).
- FixedWidthLayout / DelimitedLayout: The two field-layout disciplines.
  ``ParserConfig.layout`` is a tagged union on ``kind``, so a single
  ``make_splitter()`` call picks the right splitter.
- SourceConfig: How lines are read (encoding, comment tokens, blank lines).
- Culture (from culture.py): Locale used by typed accessors and joining.

Key functions:
- load_config(path) -> ParserConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

All models are frozen.  A splitter that must change its layout between
lines builds a new validated model and swaps it in, so a rejected update
never leaves a half-applied configuration behind.

Example YAML::

    layout:
      kind: delimited
      delimiters: ";"
      enclosed_in_quotes: true
    source:
      comment_tokens: ["#"]
    culture:
      name: es_AR
    trim_whitespace: true
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any, Literal, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from textfile_parsers.culture import Culture
from textfile_parsers.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

_LINE_BREAKS = ("\r", "\n")


class FixedWidthLayout(BaseModel):
    """Fixed-width field layout.

    Each width is a positive number of characters.  The last width may be
    ``<= 0``, meaning "the rest of the line".
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["fixed_width"] = "fixed_width"
    field_widths: tuple[int, ...] = Field(
        (0,), description="Field widths in characters; last may be <= 0 (open)"
    )

    @field_validator("field_widths")
    @classmethod
    def _check_widths(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        if not v:
            raise ValueError("field_widths cannot be empty")
        for position, width in enumerate(v[:-1]):
            if width <= 0:
                raise ValueError(
                    f"Only the last field width may be open (<= 0); "
                    f"got {width} at position {position}"
                )
        return v


class DelimitedLayout(BaseModel):
    """Delimiter-separated field layout."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["delimited"] = "delimited"
    delimiters: tuple[str, ...] = Field(
        (",",),
        description="Delimiter characters; a plain string is split into characters",
    )
    enclosed_in_quotes: bool = Field(
        False, description="If True, double quotes enclose fields that may contain delimiters"
    )
    squeeze_delimiters: bool = Field(
        False, description="If True, consecutive delimiters count as one"
    )

    @field_validator("delimiters", mode="before")
    @classmethod
    def _split_string(cls, v: Any) -> Any:
        if isinstance(v, str):
            return tuple(v)
        return v

    @field_validator("delimiters")
    @classmethod
    def _check_delimiters(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("delimiters cannot be empty")
        for delimiter in v:
            if len(delimiter) != 1:
                raise ValueError(f"Delimiter {delimiter!r} must be a single character")
            if delimiter in _LINE_BREAKS:
                raise ValueError(f"Delimiter {delimiter!r} is a line break")
        return v


Layout = Annotated[Union[FixedWidthLayout, DelimitedLayout], Field(discriminator="kind")]


class SourceConfig(BaseModel):
    """How lines are read from the underlying text source."""

    model_config = ConfigDict(frozen=True)

    encoding: str = Field("utf-8-sig", description="Encoding used when opening a path")
    comment_tokens: tuple[str, ...] = Field(
        (), description="Lines starting with any of these tokens are skipped"
    )
    ignore_blank_lines: bool = Field(
        False, description="If True, empty and whitespace-only lines are skipped"
    )

    @field_validator("comment_tokens")
    @classmethod
    def _check_tokens(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for token in v:
            if not token:
                raise ValueError("Comment tokens cannot be empty strings")
        return v


class ParserConfig(BaseModel):
    """Top-level configuration for a field reader."""

    model_config = ConfigDict(frozen=True)

    layout: Layout = Field(default_factory=DelimitedLayout)
    source: SourceConfig = Field(default_factory=SourceConfig)
    culture: Culture = Field(default_factory=Culture)
    trim_whitespace: bool = Field(
        False, description="If True, strip whitespace around every field"
    )


def load_config(path: str | Path) -> ParserConfig:
    """Read a parser YAML file and validate it into a ParserConfig.

    Missing sections fall back to their defaults, so a file holding only
    ``layout:`` is enough.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or its top level is not
            a mapping.
        pydantic.ValidationError: If a section fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file {path} must hold a mapping of sections, got {type(raw).__name__}"
        )
    config = ParserConfig.model_validate(raw)
    logger.info("Loaded %s layout config from %s", config.layout.kind, path)
    return config


def _header(config: ParserConfig) -> str:
    return (
        f"# textfile-parsers: {config.layout.kind} layout, "
        f"culture {config.culture.name}\n"
        "# Pass this path to textfile_parsers.open() or load_config().\n\n"
    )


def save_config(config: ParserConfig, path: str | Path) -> None:
    """Write *config* as YAML, every section spelled out.

    Delimiters are written as a list so whitespace delimiters survive
    hand editing.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    body = yaml.safe_dump(
        config.model_dump(mode="json"),
        allow_unicode=True,
        default_flow_style=False,
        sort_keys=False,
    )
    path.write_text(_header(config) + body, encoding="utf-8")
    logger.info("Saved %s layout config to %s", config.layout.kind, path)
