"""
Risk Form Validator - Data Definitions

Input contract produced by the form binder and the verdict returned
by the validator.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# Error messages (one per field)
ERROR_NAME_REQUIRED = "Risk name is required"
ERROR_AREA_REQUIRED = "Area is required"
ERROR_LEVEL_REQUIRED = "{label} must be selected"
ERROR_LEVEL_OUT_OF_SCALE = "{label} must be one of: {allowed}"

LEVEL_LABELS: Dict[str, str] = {
    "deficiency_level": "Deficiency level (ND)",
    "exposure_level": "Exposure level (NE)",
    "consequence_level": "Consequence level (NC)",
}


class RiskFormInput(BaseModel):
    """
    Datos crudos del formulario de evaluación.

    Los campos no se tipan de forma estricta: cualquier valor mal
    formado llega a `validate()`, que lo reporta en su lista de errores.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    name: Any = Field(default="", description="Nombre del riesgo.")
    area: Any = Field(default="", description="Área o puesto evaluado.")
    description: Any = Field(default="", description="Descripción opcional.")
    deficiency_level: Any = Field(default=None, description="ND")
    exposure_level: Any = Field(default=None, description="NE")
    consequence_level: Any = Field(default=None, description="NC")
    mitigations: Any = Field(default="", description="Medidas preventivas.")


class ValidationResult(BaseModel):
    """Veredicto del validador."""

    is_valid: bool = Field(..., description="True si no hay errores.")
    errors: List[str] = Field(default_factory=list)
    cleaned: Dict[str, Any] = Field(
        default_factory=dict,
        description="Valores normalizados (snake_case) cuando el input es válido."
    )
