"""Decides which source columns can be replicated and what canonical field they become."""

from datastream_registry.core.type_mapping import SQLType
from datastream_registry.models.assessment import (
    ColumnAssessment,
    ColumnEvaluation,
    ColumnSuggestion,
    ColumnSupport,
    TableAssessment,
)
from datastream_registry.models.schema import FieldType, SchemaField
from datastream_registry.models.tables import PRECISION, SCALE, ColumnDetail, TableDetail

SIMPLE_TYPE_MAPPING: dict[SQLType, FieldType] = {
    SQLType.BIT: FieldType.BOOLEAN,
    SQLType.BOOLEAN: FieldType.BOOLEAN,
    SQLType.TINYINT: FieldType.INT,
    SQLType.SMALLINT: FieldType.INT,
    SQLType.INTEGER: FieldType.INT,
    SQLType.BIGINT: FieldType.LONG,
    SQLType.REAL: FieldType.FLOAT,
    SQLType.FLOAT: FieldType.FLOAT,
    SQLType.DOUBLE: FieldType.DOUBLE,
    SQLType.CHAR: FieldType.STRING,
    SQLType.VARCHAR: FieldType.STRING,
    SQLType.LONGVARCHAR: FieldType.STRING,
    SQLType.NCHAR: FieldType.STRING,
    SQLType.NVARCHAR: FieldType.STRING,
    SQLType.LONGNVARCHAR: FieldType.STRING,
    SQLType.CLOB: FieldType.STRING,
    SQLType.NCLOB: FieldType.STRING,
    SQLType.ROWID: FieldType.STRING,
    SQLType.SQLXML: FieldType.STRING,
    SQLType.DATE: FieldType.DATE,
    SQLType.TIME: FieldType.TIME,
    SQLType.TIMESTAMP: FieldType.TIMESTAMP,
    SQLType.TIMESTAMP_WITH_TIMEZONE: FieldType.TIMESTAMP,
    SQLType.BINARY: FieldType.BYTES,
    SQLType.VARBINARY: FieldType.BYTES,
    SQLType.LONGVARBINARY: FieldType.BYTES,
    SQLType.BLOB: FieldType.BYTES,
}

DECIMAL_TYPES = {SQLType.NUMERIC, SQLType.DECIMAL}


def _evaluate_decimal(detail: ColumnDetail) -> ColumnEvaluation:
    precision = int(detail.properties.get(PRECISION, "0"))
    scale = int(detail.properties.get(SCALE, "0"))
    if precision > 0 and 0 <= scale <= precision:
        return ColumnEvaluation(
            assessment=ColumnAssessment(name=detail.name, type=detail.type.value),
            field=SchemaField.decimal_of(
                detail.name, precision, scale, nullable=detail.nullable
            ),
        )

    # An unconstrained NUMBER, or a scale outside [0, precision], has no exact
    # decimal counterpart and is carried as its string representation.
    return ColumnEvaluation(
        assessment=ColumnAssessment(
            name=detail.name,
            type=detail.type.value,
            support=ColumnSupport.PARTIAL,
            suggestion=ColumnSuggestion(
                message=f"Column '{detail.name}' has no usable precision and scale "
                "and will be replicated as a string",
                corrective_action="Declare the column with an explicit precision and scale",
            ),
        ),
        field=SchemaField.of(detail.name, FieldType.STRING, nullable=detail.nullable),
    )


def evaluate_column(detail: ColumnDetail) -> ColumnEvaluation:
    if detail.type in DECIMAL_TYPES:
        return _evaluate_decimal(detail)

    field_type = SIMPLE_TYPE_MAPPING.get(detail.type)
    if field_type is None:
        return ColumnEvaluation(
            assessment=ColumnAssessment(
                name=detail.name,
                type=detail.type.value,
                support=ColumnSupport.NO,
                suggestion=ColumnSuggestion(
                    message=f"Columns of type {detail.type.value} are not supported "
                    "and will not be replicated",
                    corrective_action=f"Exclude column '{detail.name}' or change its type",
                ),
            )
        )
    return ColumnEvaluation(
        assessment=ColumnAssessment(name=detail.name, type=detail.type.value),
        field=SchemaField.of(detail.name, field_type, nullable=detail.nullable),
    )


def assess_table(detail: TableDetail, evaluator=evaluate_column) -> TableAssessment:
    return TableAssessment(
        database=detail.database,
        schema_name=detail.schema_name,
        table=detail.table,
        columns=tuple(evaluator(column).assessment for column in detail.columns),
    )
