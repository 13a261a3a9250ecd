"""Canonical, engine-agnostic record schema handed to the replication pipeline."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator


class FieldType(str, Enum):
    BOOLEAN = "boolean"
    INT = "int"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"
    STRING = "string"
    BYTES = "bytes"
    DATE = "date"
    TIME = "time"
    TIMESTAMP = "timestamp"
    DECIMAL = "decimal"


class SchemaField(BaseModel):
    name: str
    type: FieldType
    nullable: bool = False
    # Only set for DECIMAL fields
    precision: Optional[int] = None
    scale: Optional[int] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_decimal(self) -> "SchemaField":
        if self.type == FieldType.DECIMAL:
            if self.precision is None or self.precision < 1:
                raise ValueError(f"Decimal field '{self.name}' needs a positive precision")
            if self.scale is None or not 0 <= self.scale <= self.precision:
                raise ValueError(
                    f"Decimal field '{self.name}' needs a scale between 0 and {self.precision}"
                )
        elif self.precision is not None or self.scale is not None:
            raise ValueError(
                f"Field '{self.name}' of type {self.type.value} cannot carry precision or scale"
            )
        return self

    @classmethod
    def of(cls, name: str, type: FieldType, nullable: bool = False) -> "SchemaField":
        return cls(name=name, type=type, nullable=nullable)

    @classmethod
    def decimal_of(
        cls, name: str, precision: int, scale: int = 0, nullable: bool = False
    ) -> "SchemaField":
        return cls(
            name=name,
            type=FieldType.DECIMAL,
            precision=precision,
            scale=scale,
            nullable=nullable,
        )


class RecordSchema(BaseModel):
    name: str
    fields: tuple[SchemaField, ...] = ()

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_unique_names(self) -> "RecordSchema":
        seen = set()
        for field in self.fields:
            if field.name in seen:
                raise ValueError(f"Duplicate field '{field.name}' in record '{self.name}'")
            seen.add(field.name)
        return self

    @classmethod
    def record_of(cls, name: str, fields: list[SchemaField]) -> "RecordSchema":
        return cls(name=name, fields=tuple(fields))

    @property
    def field_names(self) -> list[str]:
        return [field.name for field in self.fields]

    def get_field(self, name: str) -> Optional[SchemaField]:
        return next((field for field in self.fields if field.name == name), None)
