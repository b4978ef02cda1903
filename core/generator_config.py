"""Generator configuration loading and validation.

Settings come from (highest precedence first) explicit overrides such as CLI
flags, ``DOCGEN_*`` environment variables (a ``.env`` file is honoured), an
optional YAML file, and finally built-in defaults. YAML problems are warnings
in non-strict mode and ``ConfigValidationError`` in strict mode.
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from core.errors import ValidationFailure

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE: str = "docgen.yml"
DEFAULT_OUTPUT_FILE: str = "ClassSpecifications.docx"
DEFAULT_TITLE: str = "Class Specifications"


class ConfigValidationError(ValidationFailure):
    """Raised when strict configuration validation fails."""


@dataclass(frozen=True)
class StyleConfig:
    """Fonts, sizes (points) and colours used by the docx backend."""

    font_name: str = "Times New Roman"
    heading_sizes: tuple[int, int, int] = (16, 14, 13)
    body_size: int = 12
    table_size: int = 11
    header_fill: str = "FFE8E1"


@dataclass(frozen=True)
class GeneratorConfig:
    start_index: Optional[int] = None
    output_file: str = DEFAULT_OUTPUT_FILE
    title: str = DEFAULT_TITLE
    continue_on_error: bool = False
    strict_syntax: bool = False
    style: StyleConfig = field(default_factory=StyleConfig)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def resolve_strict_config_validation(default: bool = False) -> bool:
    """Resolve strict validation mode from ``STRICT_CONFIG_VALIDATION`` env."""
    return _env_flag("STRICT_CONFIG_VALIDATION", default=default)


def parse_start_index(raw: Any) -> int:
    """Validate a starting section index.

    Accepts ints and decimal strings; anything that is not a positive
    integer raises ``ValidationFailure``.
    """
    if isinstance(raw, bool):
        raise ValidationFailure(f"Starting index must be a positive integer, got {raw!r}")
    if isinstance(raw, str):
        text = raw.strip()
        if not text.lstrip("+").isdigit():
            raise ValidationFailure(
                f"Starting index must be a positive integer, got {raw!r}"
            )
        raw = int(text)
    if not isinstance(raw, int) or raw < 1:
        raise ValidationFailure(f"Starting index must be a positive integer, got {raw!r}")
    return raw


def load_config_file(config_path: str, strict: bool = False) -> dict[str, Any]:
    """Load and parse the YAML config file.

    In non-strict mode this returns an empty dict on read/parse failures.
    In strict mode this raises ``ConfigValidationError``.
    """
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            payload = yaml.safe_load(f)
    except FileNotFoundError as exc:
        msg = f"Config file not found: {config_path}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Failed to read config YAML at {config_path}: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; continuing with defaults", msg)
        return {}

    if payload is None:
        return {}

    if not isinstance(payload, dict):
        msg = f"Unexpected config payload type: {type(payload).__name__}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; continuing with defaults", msg)
        return {}

    return payload


def _style_from_mapping(raw: Any, strict: bool) -> StyleConfig:
    if raw is None:
        return StyleConfig()
    if not isinstance(raw, dict):
        msg = "'style' section must be a mapping"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; using default style", msg)
        return StyleConfig()

    style = StyleConfig()
    known = {"font_name", "heading_sizes", "body_size", "table_size", "header_fill"}
    unknown = sorted(set(raw) - known)
    if unknown:
        msg = f"Unknown style keys: {', '.join(unknown)}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring them", msg)

    try:
        if "font_name" in raw:
            style = replace(style, font_name=str(raw["font_name"]))
        if "heading_sizes" in raw:
            sizes = tuple(int(v) for v in raw["heading_sizes"])
            if len(sizes) != 3:
                raise ValueError("heading_sizes needs exactly three values")
            style = replace(style, heading_sizes=sizes)
        if "body_size" in raw:
            style = replace(style, body_size=int(raw["body_size"]))
        if "table_size" in raw:
            style = replace(style, table_size=int(raw["table_size"]))
        if "header_fill" in raw:
            style = replace(style, header_fill=str(raw["header_fill"]).lstrip("#").upper())
    except (TypeError, ValueError) as exc:
        msg = f"Invalid style configuration: {exc}"
        if strict:
            raise ConfigValidationError(msg) from exc
        logger.warning("%s; using default style", msg)
        return StyleConfig()
    return style


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def resolve_generator_config(
    config_path: Optional[str] = None,
    overrides: Optional[dict[str, Any]] = None,
    strict: Optional[bool] = None,
) -> GeneratorConfig:
    """Merge defaults, YAML file, environment and overrides into a config.

    Args:
        config_path: YAML file to read. When ``None`` the default
            ``docgen.yml`` is used if it exists in the working directory.
        overrides: Values that win over every other source; ``None`` values
            are ignored so unset CLI flags fall through.
        strict: Strict validation; defaults to ``STRICT_CONFIG_VALIDATION``.

    Returns:
        The resolved ``GeneratorConfig``. ``start_index`` is validated when
        present but may still be ``None``.
    """
    load_dotenv()
    if strict is None:
        strict = resolve_strict_config_validation()

    file_values: dict[str, Any] = {}
    if config_path is not None:
        file_values = load_config_file(config_path, strict=strict)
    elif os.path.isfile(DEFAULT_CONFIG_FILE):
        file_values = load_config_file(DEFAULT_CONFIG_FILE, strict=strict)

    known = {
        "start_index",
        "output_file",
        "title",
        "continue_on_error",
        "strict_syntax",
        "style",
    }
    unknown = sorted(set(file_values) - known)
    if unknown:
        msg = f"Unknown config keys: {', '.join(unknown)}"
        if strict:
            raise ConfigValidationError(msg)
        logger.warning("%s; ignoring them", msg)

    merged: dict[str, Any] = {k: v for k, v in file_values.items() if k in known}

    env_map = {
        "DOCGEN_START_INDEX": "start_index",
        "DOCGEN_OUTPUT_FILE": "output_file",
        "DOCGEN_CONTINUE_ON_ERROR": "continue_on_error",
        "DOCGEN_STRICT_SYNTAX": "strict_syntax",
    }
    for env_name, key in env_map.items():
        value = os.getenv(env_name)
        if value is not None and value.strip():
            merged[key] = value

    for key, value in (overrides or {}).items():
        if value is not None:
            merged[key] = value

    start_index = merged.get("start_index")
    if start_index is not None:
        start_index = parse_start_index(start_index)

    return GeneratorConfig(
        start_index=start_index,
        output_file=str(merged.get("output_file", DEFAULT_OUTPUT_FILE)),
        title=str(merged.get("title", DEFAULT_TITLE)),
        continue_on_error=_as_bool(merged.get("continue_on_error", False)),
        strict_syntax=_as_bool(merged.get("strict_syntax", False)),
        style=_style_from_mapping(merged.get("style"), strict),
    )
