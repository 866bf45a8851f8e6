from __future__ import annotations
from enum import Enum, IntEnum
from typing import Annotated, Any, Dict, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class FieldType(IntEnum):
    """Expected format of a form field. Values match the legacy TYPE_* constants."""
    STRING = 0
    INT = 1
    FLOAT = 2
    EMAIL = 11


class FieldSpec(BaseModel):
    """
    One expected form field.

    min_size / max_size bound the character length for STRING and EMAIL,
    and the numeric value itself for INT and FLOAT.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    label: str
    type: Optional[FieldType] = None
    required: bool = False
    min_size: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("min_size", "min-size", "minSize")
    )
    max_size: Optional[int] = Field(
        default=None, validation_alias=AliasChoices("max_size", "max-size", "maxSize")
    )

    @field_validator("type", mode="before")
    @classmethod
    def _type_by_name(cls, v: Any) -> Any:
        # accept "email" / "INT" besides members and raw ints
        if isinstance(v, str):
            try:
                return FieldType[v.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown field type: {v!r}") from None
        return v


class ErrorKind(str, Enum):
    WRONG_METHOD = "wrong_method"
    MISSING_REQUIRED = "missing_required"
    INVALID_FORMAT = "invalid_format"
    TOO_LARGE = "too_large"
    TOO_SMALL = "too_small"


class Ok(BaseModel):
    status: Literal["ok"] = "ok"
    cleaned: Dict[str, Any] = {}

    def __bool__(self) -> bool:
        return True

    def to_payload(self) -> dict:
        return {"ok": True}


class Err(BaseModel):
    status: Literal["err"] = "err"
    kind: ErrorKind
    message: str
    field: Optional[str] = None

    def __bool__(self) -> bool:
        return False

    def to_payload(self) -> dict:
        return {"ok": False, "err": self.message}


ValidationResult = Annotated[Union[Ok, Err], Field(discriminator="status")]
