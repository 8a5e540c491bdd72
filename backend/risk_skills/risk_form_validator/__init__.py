"""
Risk Form Validator Skill

Field-level validation of hazard evaluation submissions.
"""

from .definition import (
    ERROR_AREA_REQUIRED,
    ERROR_LEVEL_OUT_OF_SCALE,
    ERROR_LEVEL_REQUIRED,
    ERROR_NAME_REQUIRED,
    LEVEL_LABELS,
    RiskFormInput,
    ValidationResult,
)

from .impl import (
    LEVEL_SCALES,
    validate,
)

__all__ = [
    # Models
    "RiskFormInput",
    "ValidationResult",
    # Functions
    "validate",
    # Constants
    "ERROR_AREA_REQUIRED",
    "ERROR_LEVEL_OUT_OF_SCALE",
    "ERROR_LEVEL_REQUIRED",
    "ERROR_NAME_REQUIRED",
    "LEVEL_LABELS",
    "LEVEL_SCALES",
]
