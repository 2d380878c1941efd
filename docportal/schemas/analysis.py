"""
Typed view of the document analyzer response.

The analyzer answers in camelCase JSON. Every field has an explicit default so a
partial response still validates; negative or non-finite quantities do not.
"""
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator

UNKNOWN_CLIENT = "Desconocido"
READ_ERROR = "Error de lectura"

SENTINEL_CLIENT_NAMES = (UNKNOWN_CLIENT, READ_ERROR)


class Material(BaseModel):
    name: str = ""
    units: float = Field(default=0, ge=0, allow_inf_nan=False)

    @field_validator("name", mode="before")
    @classmethod
    def _name_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("units", mode="before")
    @classmethod
    def _units_default(cls, value: Any) -> Any:
        return 0 if value is None else value


class ExtractedData(BaseModel):
    """Technical data read from a work order."""
    hours: float = Field(default=0, ge=0, allow_inf_nan=False)
    is_resolved: bool = Field(default=False, validation_alias=AliasChoices("isResolved", "is_resolved"))
    materials: List[Material] = Field(default_factory=list)

    @field_validator("hours", mode="before")
    @classmethod
    def _hours_default(cls, value: Any) -> Any:
        return 0 if value is None else value

    @field_validator("is_resolved", mode="before")
    @classmethod
    def _resolved_default(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("materials", mode="before")
    @classmethod
    def _materials_default(cls, value: Any) -> Any:
        return [] if value is None else value


class AnalysisResult(BaseModel):
    """
    Analyzer output.

    Defaults: missing clientName -> "", missing confidence -> 0 (clamped to
    [0, 1]), missing data -> None.
    """
    client_name: str = Field(default="", validation_alias=AliasChoices("clientName", "client_name"))
    confidence: float = 0.0
    data: Optional[ExtractedData] = None

    @field_validator("client_name", mode="before")
    @classmethod
    def _client_name_default(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("confidence", mode="before")
    @classmethod
    def _clamp_confidence(cls, value: Any) -> Any:
        if value is None:
            return 0.0
        try:
            return min(1.0, max(0.0, float(value)))
        except (TypeError, ValueError):
            return value

    @classmethod
    def read_error(cls) -> "AnalysisResult":
        """The result reported when a document could not be analyzed."""
        return cls(client_name=READ_ERROR, confidence=0.0, data=ExtractedData())

    @property
    def is_sentinel(self) -> bool:
        return is_sentinel_name(self.client_name)


def is_sentinel_name(name: Optional[str]) -> bool:
    """True for empty names and the reserved "unknown" / "read error" markers."""
    cleaned = (name or "").strip().lower()
    if not cleaned:
        return True
    return cleaned in (s.lower() for s in SENTINEL_CLIENT_NAMES)
