"""Job file schema and loading system for nesting runs.

Public API:
    - NestingJobConfiguration: Root job model
    - SheetConfigSchema, NestingOptionsSchema, PartConfigSchema,
      MaterialConfigSchema: Nested job models
    - load_config / load_config_from_dict: Load and validate a job
    - ConfigError: Exception for job loading errors
    - config_to_parts / config_to_nesting_config: Convert to domain objects
    - merge_cli_overrides: Apply command-line overrides to a job
    - ValidationResult, ValidationError, ValidationWarning, validate_config:
      Whole-job advisory checks

Example:
    >>> from pathlib import Path
    >>> from panelnest.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     job = load_config(Path("kitchen.json"))
    ...     print(f"{job.total_quantity} parts to cut")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from panelnest.application.config.adapter import (
    config_to_nesting_config,
    config_to_parts,
    merge_cli_overrides,
)
from panelnest.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from panelnest.application.config.schema import (
    SUPPORTED_VERSIONS,
    MaterialConfigSchema,
    NestingJobConfiguration,
    NestingOptionsSchema,
    PartConfigSchema,
    SheetConfigSchema,
)
from panelnest.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    # Schema
    "MaterialConfigSchema",
    "NestingJobConfiguration",
    "NestingOptionsSchema",
    "PartConfigSchema",
    "SUPPORTED_VERSIONS",
    "SheetConfigSchema",
    # Loading
    "ConfigError",
    "load_config",
    "load_config_from_dict",
    # Adapters
    "config_to_nesting_config",
    "config_to_parts",
    "merge_cli_overrides",
    # Validation
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate_config",
]
