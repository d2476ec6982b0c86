"""Validation structures and nesting advisory checks.

Structural validation is handled by Pydantic when the job is loaded. The
checks here look at the job as a whole and flag parts that can never be
placed, along with clearance settings that leave no usable sheet area.
"""

from dataclasses import dataclass, field, replace
from typing import Any

from panelnest.application.config.adapter import config_to_nesting_config
from panelnest.application.config.schema import NestingJobConfiguration
from panelnest.domain.orientation import fits_on_empty_sheet
from panelnest.domain.value_objects import GrainDirection, Part

# A clearance beyond this share of the sheet's short side is almost
# certainly a unit mistake (inches entered as mm or the reverse)
MAX_CLEARANCE_RATIO = 0.1


@dataclass
class ValidationError:
    """Represents a blocking validation error.

    Attributes:
        path: JSON path to the invalid field (e.g., "parts[0].width")
        message: Human-readable description of the error
        value: The invalid value that caused the error
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """Represents a non-blocking validation warning.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings.

    Attributes:
        errors: List of blocking validation errors
        warnings: List of non-blocking validation warnings
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if the job has no blocking errors."""
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        """Add a validation error and return self for chaining."""
        self.errors.append(ValidationError(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        """Add a validation warning and return self for chaining."""
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        """Merge another ValidationResult into this one."""
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_clearance_advisories(config: NestingJobConfiguration) -> ValidationResult:
    """Flag clearances that swallow the sheet or look like unit mistakes."""
    result = ValidationResult()
    nesting_config = config_to_nesting_config(config)
    sheet = nesting_config.sheet_size
    margin = nesting_config.effective_edge_margin
    margin_path = (
        "options.edge_margin"
        if config.options.edge_margin is not None
        else "options.cutting_tools_thick"
    )

    if 2 * margin >= sheet.width or 2 * margin >= sheet.height:
        result.add_error(
            path=margin_path,
            message=(
                f"Edge margin ({margin:g}) leaves no usable area on a "
                f"{sheet.display_label} sheet"
            ),
            value=margin,
        )
        return result

    short_side = min(sheet.width, sheet.height)
    spacing = nesting_config.cutting_tools_thick
    if spacing > short_side * MAX_CLEARANCE_RATIO:
        result.add_warning(
            path="options.cutting_tools_thick",
            message=(
                f"Clearance between parts ({spacing:g}) is more than "
                f"{MAX_CLEARANCE_RATIO:.0%} of the sheet's short side"
            ),
            suggestion="Check that all dimensions use the same unit",
        )

    return result


def check_part_fit_advisories(config: NestingJobConfiguration) -> ValidationResult:
    """Warn about parts that cannot fit a fresh sheet under any allowed rotation."""
    result = ValidationResult()
    nesting_config = config_to_nesting_config(config)

    for i, part_config in enumerate(config.parts):
        part = Part(
            id=part_config.id,
            width=part_config.width,
            height=part_config.height,
            grain_direction=part_config.grain_direction,
        )
        if fits_on_empty_sheet(part, nesting_config):
            continue

        unrestricted = replace(
            nesting_config, allow_rotation=True, grain_direction=GrainDirection.NONE
        )
        rotated_would_fit = fits_on_empty_sheet(
            replace(part, grain_direction=GrainDirection.NONE), unrestricted
        )
        suggestion = None
        if rotated_would_fit:
            if not nesting_config.allow_rotation:
                suggestion = "Enable allow_rotation; the part fits turned 90 degrees"
            else:
                suggestion = "The part only fits turned 90 degrees, which its grain forbids"

        result.add_warning(
            path=f"parts[{i}]",
            message=(
                f"Part '{part_config.id}' ({part_config.width:g} x "
                f"{part_config.height:g}) does not fit on a "
                f"{nesting_config.sheet_size.display_label} sheet and will be "
                f"left unplaced"
            ),
            suggestion=suggestion,
        )

    return result


def validate_config(config: NestingJobConfiguration) -> ValidationResult:
    """Perform full validation of a nesting job.

    Args:
        config: A NestingJobConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings
    """
    result = ValidationResult()

    if not config.parts:
        result.add_warning(path="parts", message="Job contains no parts")

    clearance = check_clearance_advisories(config)
    result.merge(clearance)
    if not clearance.is_valid:
        return result

    result.merge(check_part_fit_advisories(config))
    return result
