import pytest

from datastream_registry.core.type_mapping import SQLType
from datastream_registry.models.assessment import ColumnSupport
from datastream_registry.models.schema import FieldType
from datastream_registry.models.tables import ColumnDetail, TableDetail
from datastream_registry.services.assessor import assess_table, evaluate_column


class TestEvaluateColumn:
    @pytest.mark.parametrize(
        "sql_type, field_type",
        [
            (SQLType.BIT, FieldType.BOOLEAN),
            (SQLType.SMALLINT, FieldType.INT),
            (SQLType.BIGINT, FieldType.LONG),
            (SQLType.FLOAT, FieldType.FLOAT),
            (SQLType.DOUBLE, FieldType.DOUBLE),
            (SQLType.NVARCHAR, FieldType.STRING),
            (SQLType.CLOB, FieldType.STRING),
            (SQLType.DATE, FieldType.DATE),
            (SQLType.TIMESTAMP_WITH_TIMEZONE, FieldType.TIMESTAMP),
            (SQLType.BLOB, FieldType.BYTES),
        ],
    )
    def test_supported_types(self, sql_type, field_type):
        evaluation = evaluate_column(ColumnDetail(name="C", type=sql_type))

        assert evaluation.assessment.support == ColumnSupport.YES
        assert evaluation.assessment.suggestion is None
        assert evaluation.field.type == field_type
        assert evaluation.field.name == "C"

    @pytest.mark.parametrize("sql_type", [SQLType.OTHER, SQLType.STRUCT, SQLType.ARRAY])
    def test_unsupported_types(self, sql_type):
        evaluation = evaluate_column(ColumnDetail(name="C", type=sql_type))

        assert evaluation.assessment.support == ColumnSupport.NO
        assert evaluation.field is None
        assert not evaluation.supported
        assert evaluation.assessment.suggestion is not None

    def test_nullability_carries_to_field(self):
        evaluation = evaluate_column(ColumnDetail(name="C", type=SQLType.VARCHAR, nullable=True))

        assert evaluation.field.nullable is True

    def test_decimal_with_precision_and_scale(self):
        detail = ColumnDetail(
            name="AMOUNT",
            type=SQLType.NUMERIC,
            properties={"precision": "12", "scale": "2"},
        )

        field = evaluate_column(detail).field

        assert (field.type, field.precision, field.scale) == (FieldType.DECIMAL, 12, 2)

    def test_decimal_without_scale_defaults_to_zero(self):
        detail = ColumnDetail(name="ID", type=SQLType.DECIMAL, properties={"precision": "9"})

        field = evaluate_column(detail).field

        assert (field.precision, field.scale) == (9, 0)

    @pytest.mark.parametrize(
        "properties",
        [{}, {"scale": "2"}, {"precision": "3", "scale": "5"}, {"precision": "5", "scale": "-2"}],
    )
    def test_unconstrained_number_is_partial_string(self, properties):
        detail = ColumnDetail(name="RATE", type=SQLType.NUMERIC, properties=properties)

        evaluation = evaluate_column(detail)

        assert evaluation.assessment.support == ColumnSupport.PARTIAL
        assert evaluation.field.type == FieldType.STRING
        assert evaluation.assessment.suggestion.corrective_action


class TestAssessTable:
    def test_one_assessment_per_column_in_order(self):
        detail = (
            TableDetail.builder("db", "APP", "ORDERS")
            .add_column(ColumnDetail(name="ID", type=SQLType.INTEGER))
            .add_column(ColumnDetail(name="DOC", type=SQLType.OTHER))
            .add_primary_key("ID")
            .build()
        )

        assessment = assess_table(detail)

        assert (assessment.database, assessment.schema_name, assessment.table) == (
            "db",
            "APP",
            "ORDERS",
        )
        assert [(c.name, c.support) for c in assessment.columns] == [
            ("ID", ColumnSupport.YES),
            ("DOC", ColumnSupport.NO),
        ]
        assert assessment.columns[1].type == "OTHER"
