from pydantic import BaseModel

from datastream_registry.core.type_mapping import SQLType
from datastream_registry.models.schema import RecordSchema

PRECISION = "precision"
SCALE = "scale"


class TableSummary(BaseModel):
    database: str
    table: str
    number_columns: int
    schema_name: str

    class Config:
        frozen = True


class TableList(BaseModel):
    tables: tuple[TableSummary, ...] = ()

    class Config:
        frozen = True

    def __len__(self) -> int:
        return len(self.tables)

    def __iter__(self):
        return iter(self.tables)


class ColumnDetail(BaseModel):
    name: str
    type: SQLType
    nullable: bool = False
    properties: dict[str, str] = {}

    class Config:
        frozen = True


class TableDetail(BaseModel):
    database: str
    schema_name: str
    table: str
    columns: tuple[ColumnDetail, ...] = ()
    primary_key: tuple[str, ...] = ()

    class Config:
        frozen = True

    class Builder:
        """Collects columns and primary keys, then freezes them into a TableDetail."""

        def __init__(self, database: str, schema_name: str, table: str) -> None:
            self.database = database
            self.schema_name = schema_name
            self.table = table
            self.columns: list[ColumnDetail] = []
            self.primary_key: list[str] = []

        def add_column(self, column: ColumnDetail) -> "TableDetail.Builder":
            self.columns.append(column)
            return self

        def set_columns(self, columns: list[ColumnDetail]) -> "TableDetail.Builder":
            self.columns = list(columns)
            return self

        def add_primary_key(self, column_name: str) -> "TableDetail.Builder":
            self.primary_key.append(column_name)
            return self

        def set_primary_key(self, primary_key: list[str]) -> "TableDetail.Builder":
            self.primary_key = list(primary_key)
            return self

        def build(self) -> "TableDetail":
            column_names = {column.name for column in self.columns}
            missing = [key for key in self.primary_key if key not in column_names]
            if missing:
                raise ValueError(
                    f"Primary key columns {missing} are not columns of "
                    f"{self.schema_name}.{self.table}"
                )
            return TableDetail(
                database=self.database,
                schema_name=self.schema_name,
                table=self.table,
                columns=tuple(self.columns),
                primary_key=tuple(self.primary_key),
            )

    @classmethod
    def builder(cls, database: str, schema_name: str, table: str) -> "TableDetail.Builder":
        return cls.Builder(database, schema_name, table)

    @property
    def column_names(self) -> list[str]:
        return [column.name for column in self.columns]


class StandardizedTableDetail(BaseModel):
    """Terminal artifact of standardization.

    `primary_key` is copied from the TableDetail as is and may name columns
    that standardization dropped from `record_schema`.
    """

    database: str
    schema_name: str
    table: str
    primary_key: tuple[str, ...] = ()
    record_schema: RecordSchema

    class Config:
        frozen = True
