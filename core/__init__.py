"""Core shared errors, configuration and logging utilities."""

from core.errors import (
    GenerationError,
    IOFailure,
    ParseFailure,
    ValidationFailure,
)
from core.structured_logging import (
    configure_structured_logging,
    get_run_id,
    phase_scope,
    set_run_id,
    source_scope,
)
from core.generator_config import (
    ConfigValidationError,
    GeneratorConfig,
    StyleConfig,
    load_config_file,
    parse_start_index,
    resolve_generator_config,
    resolve_strict_config_validation,
)

__all__ = [
    "GenerationError",
    "IOFailure",
    "ParseFailure",
    "ValidationFailure",
    "configure_structured_logging",
    "get_run_id",
    "phase_scope",
    "set_run_id",
    "source_scope",
    "ConfigValidationError",
    "GeneratorConfig",
    "StyleConfig",
    "load_config_file",
    "parse_start_index",
    "resolve_generator_config",
    "resolve_strict_config_validation",
]
