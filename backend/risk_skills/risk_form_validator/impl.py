"""
Risk Form Validator - Implementation

Pure validation of raw form input:
- Mandatory text fields (name, area) must be non-blank
- ND, NE and NC must be present, numeric and on their NTP 330 scale
- Every violation is collected, nothing short-circuits
- Malformed input produces errors, never exceptions
"""

import logging
import math
from collections.abc import Mapping
from typing import Any, Dict, Optional

from pydantic import BaseModel

from risk_skills.ntp330_calculator import (
    CONSEQUENCE_LEVELS,
    DEFICIENCY_LEVELS,
    EXPOSURE_LEVELS,
)

from .definition import (
    ERROR_AREA_REQUIRED,
    ERROR_LEVEL_OUT_OF_SCALE,
    ERROR_LEVEL_REQUIRED,
    ERROR_NAME_REQUIRED,
    LEVEL_LABELS,
    ValidationResult,
)

logger = logging.getLogger(__name__)


LEVEL_SCALES: Dict[str, Dict[int, str]] = {
    "deficiency_level": DEFICIENCY_LEVELS,
    "exposure_level": EXPOSURE_LEVELS,
    "consequence_level": CONSEQUENCE_LEVELS,
}

# snake_case field -> camelCase key used by the form binder
FIELD_ALIASES: Dict[str, str] = {
    "name": "name",
    "area": "area",
    "description": "description",
    "mitigations": "mitigations",
    "deficiency_level": "deficiencyLevel",
    "exposure_level": "exposureLevel",
    "consequence_level": "consequenceLevel",
}


def _as_mapping(raw: Any) -> Mapping:
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, Mapping):
        return raw
    return {}


def _read(data: Mapping, field: str) -> Any:
    """Lee un campo aceptando snake_case o camelCase."""
    if field in data:
        return data[field]
    return data.get(FIELD_ALIASES[field])


def _clean_text(value: Any) -> str:
    """Texto recortado; valores que no son texto ni número cuentan como vacíos."""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def _coerce_level(value: Any) -> Optional[int]:
    """Convierte un nivel a int; None si falta o no es numérico."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if math.isfinite(value) and value.is_integer():
            return int(value)
        return None
    if isinstance(value, str):
        text = value.strip()
        # isdigit() acepta "²" o "①", que int() rechaza
        if text.lstrip("-").isdecimal():
            try:
                return int(text)
            except ValueError:
                return None
    return None


def validate(raw: Any) -> ValidationResult:
    """
    Validate raw form input.

    Args:
        raw: Mapping (camelCase or snake_case keys) or a RiskFormInput.

    Returns:
        ValidationResult with every error found. When valid, `cleaned`
        holds the trimmed text fields and integer levels.
    """
    data = _as_mapping(raw)
    errors = []

    cleaned: Dict[str, Any] = {
        field: _clean_text(_read(data, field))
        for field in ("name", "area", "description", "mitigations")
    }

    if not cleaned["name"]:
        errors.append(ERROR_NAME_REQUIRED)

    if not cleaned["area"]:
        errors.append(ERROR_AREA_REQUIRED)

    for field, scale in LEVEL_SCALES.items():
        label = LEVEL_LABELS[field]
        level = _coerce_level(_read(data, field))

        if level is None:
            errors.append(ERROR_LEVEL_REQUIRED.format(label=label))
            continue

        if level not in scale:
            allowed = ", ".join(str(v) for v in sorted(scale))
            errors.append(ERROR_LEVEL_OUT_OF_SCALE.format(label=label, allowed=allowed))
            continue

        cleaned[field] = level

    if errors:
        logger.debug(f"Form rejected with {len(errors)} error(s)")
        return ValidationResult(is_valid=False, errors=errors)

    return ValidationResult(is_valid=True, errors=[], cleaned=cleaned)
