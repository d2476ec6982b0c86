"""CLI command implementations for the panelnest application.

This package contains subcommands for the panelnest CLI, including:
- validate: Validate a nesting job file
"""

from panelnest.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
