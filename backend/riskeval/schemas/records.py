"""Modelo persistido de una evaluación de riesgo."""

from datetime import date
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, model_validator
from pydantic.alias_generators import to_camel

from risk_skills.ntp330_calculator import RiskInterpretation, classify, score

_LEVEL_FIELDS = ("deficiency_level", "exposure_level", "consequence_level")

# Misma coerción (modo lax) que aplican los campos int del modelo
_INT = TypeAdapter(int)


def format_display_date(day: Optional[date] = None) -> str:
    """Fecha en formato es-UY (d/m/aaaa, sin ceros a la izquierda)."""
    day = day or date.today()
    return f"{day.day}/{day.month}/{day.year}"


def _pop_field(data: dict, name: str, alias: str) -> Any:
    value = data.pop(alias, None)
    if name in data:
        value = data.pop(name)
    return value


class RiskRecord(BaseModel):
    """
    Evaluación de riesgo persistida.

    `risk_score` y `severity` se derivan siempre de ND, NE y NC al
    construir el modelo. Un payload con un par derivado inconsistente
    es rechazado. El modelo es inmutable: una edición construye un
    registro nuevo con el mismo id.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int = Field(..., ge=1, description="Identificador estable, clave de almacenamiento.")
    name: str = Field(..., min_length=1)
    area: str = Field(..., min_length=1)
    description: str = Field(default="")
    deficiency_level: int = Field(..., ge=1, description="ND")
    exposure_level: int = Field(..., ge=1, description="NE")
    consequence_level: int = Field(..., ge=1, description="NC")
    mitigations: str = Field(default="")
    risk_score: int = Field(..., ge=1, description="NR = ND x NE x NC")
    severity: RiskInterpretation = Field(..., alias="severityTier")
    created_date: str = Field(..., min_length=1)

    @model_validator(mode="before")
    @classmethod
    def _derive_risk_level(cls, data: Any) -> Any:
        """Calcula NR y el nivel; rechaza valores derivados obsoletos."""
        if not isinstance(data, Mapping):
            return data

        data = dict(data)
        levels = []
        for f in _LEVEL_FIELDS:
            raw = _pop_field(data, f, to_camel(f))
            try:
                level = _INT.validate_python(raw)
            except ValidationError:
                # El campo reporta el error; sin niveles no hay derivados
                data[f] = raw
                return data
            data[f] = level
            levels.append(level)

        nr = score(*levels)
        interpretation = classify(nr)

        supplied_score = _pop_field(data, "risk_score", "riskScore")
        if supplied_score is not None:
            try:
                supplied_score = _INT.validate_python(supplied_score)
            except ValidationError:
                raise ValueError(f"riskScore {supplied_score!r} is not an integer")
            if supplied_score != nr:
                raise ValueError(f"riskScore {supplied_score} does not match ND x NE x NC = {nr}")

        supplied_severity = _pop_field(data, "severity", "severityTier")
        if supplied_severity is not None:
            if not isinstance(supplied_severity, RiskInterpretation):
                supplied_severity = RiskInterpretation.model_validate(supplied_severity)
            if supplied_severity != interpretation:
                raise ValueError(
                    f"severityTier {supplied_severity.tier.value} does not match NR {nr}"
                )

        data["risk_score"] = nr
        data["severity"] = interpretation
        return data

    @classmethod
    def build(
        cls,
        record_id: int,
        fields: Mapping[str, Any],
        created_date: Optional[str] = None,
    ) -> "RiskRecord":
        """
        Construye un registro desde valores ya validados (snake_case).

        Args:
            record_id: Id asignado por el gestor.
            fields: name, area, description, mitigations y los tres niveles.
            created_date: Fecha original al editar; hoy si es None.
        """
        return cls(
            id=record_id,
            name=fields["name"],
            area=fields["area"],
            description=fields.get("description", ""),
            deficiency_level=fields["deficiency_level"],
            exposure_level=fields["exposure_level"],
            consequence_level=fields["consequence_level"],
            mitigations=fields.get("mitigations", ""),
            created_date=created_date or format_display_date(),
        )

    @property
    def calculation(self) -> str:
        """Representación ND×NE×NC para tablas e informes."""
        return f"{self.deficiency_level}×{self.exposure_level}×{self.consequence_level}"

    def to_form_values(self) -> dict:
        """Valores para que el form binder repueble el formulario."""
        return {
            "name": self.name,
            "area": self.area,
            "description": self.description,
            "deficiencyLevel": self.deficiency_level,
            "exposureLevel": self.exposure_level,
            "consequenceLevel": self.consequence_level,
            "mitigations": self.mitigations,
        }

    def to_storage(self) -> str:
        """Serializa todos los campos, incluidos los derivados."""
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_storage(cls, raw: str) -> "RiskRecord":
        return cls.model_validate_json(raw)
