from enum import Enum
from typing import Optional

from pydantic import BaseModel, model_validator

from datastream_registry.models.schema import SchemaField


class ColumnSupport(str, Enum):
    YES = "YES"
    # Replicable, but with a lossy or coarser target type
    PARTIAL = "PARTIAL"
    NO = "NO"


class ColumnSuggestion(BaseModel):
    message: str
    corrective_action: Optional[str] = None

    class Config:
        frozen = True


class ColumnAssessment(BaseModel):
    name: str
    type: str
    support: ColumnSupport = ColumnSupport.YES
    suggestion: Optional[ColumnSuggestion] = None

    class Config:
        frozen = True


class ColumnEvaluation(BaseModel):
    assessment: ColumnAssessment
    field: Optional[SchemaField] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_field(self) -> "ColumnEvaluation":
        if (self.assessment.support == ColumnSupport.NO) != (self.field is None):
            raise ValueError(
                f"Column '{self.assessment.name}' must carry a field exactly when it is supported"
            )
        return self

    @property
    def supported(self) -> bool:
        return self.assessment.support != ColumnSupport.NO


class TableAssessment(BaseModel):
    database: str
    schema_name: str
    table: str
    columns: tuple[ColumnAssessment, ...] = ()

    class Config:
        frozen = True

    @property
    def unsupported_columns(self) -> list[str]:
        return [c.name for c in self.columns if c.support == ColumnSupport.NO]

    @property
    def partially_supported_columns(self) -> list[str]:
        return [c.name for c in self.columns if c.support == ColumnSupport.PARTIAL]
