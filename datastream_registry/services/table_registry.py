from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from google.api_core.exceptions import NotFound
from google.cloud import datastream_v1

from datastream_registry.core.profiles import build_oracle_connection_profile
from datastream_registry.core.type_mapping import (
    SQLType,
    convert_string_data_type_to_sql_type,
)
from datastream_registry.logging.client import Logger
from datastream_registry.logging.context import table_labels
from datastream_registry.models.assessment import (
    ColumnEvaluation,
    ColumnSupport,
    TableAssessment,
)
from datastream_registry.models.config import DatastreamConfig
from datastream_registry.models.discovery import DiscoveryResponse
from datastream_registry.models.schema import RecordSchema
from datastream_registry.models.tables import (
    PRECISION,
    SCALE,
    ColumnDetail,
    StandardizedTableDetail,
    TableDetail,
    TableList,
    TableSummary,
)
from datastream_registry.services import assessor
from datastream_registry.services.base import BaseService
from datastream_registry.services.datastream import DatastreamDiscoveryService

# TODO: replace with a per-version list once discovery reports whether a schema
#  is maintained by Oracle itself.
ORACLE_SYSTEM_SCHEMAS = frozenset(
    {"SYS", "SYSTEM", "CTXSYS", "XDB", "MDSYS", "FLOWS_FILES", "APEX_040000", "OUTLN"}
)

OUTPUT_SCHEMA_NAME = "outputSchema"

T = TypeVar("T")


class TableRegistryError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class TableNotFoundError(TableRegistryError):
    def __init__(
        self,
        database: str,
        schema: str,
        table: str,
        message: str,
        cause: BaseException | None = None,
    ) -> None:
        self.database = database
        self.schema = schema
        self.table = table
        self.reason = message
        self.cause = cause
        super().__init__(
            f"Table {schema}.{table} in database {database} was not found: {message}"
        )


class DiscoveryContractError(TableRegistryError):
    """A scoped discovery returned something other than exactly one schema and table."""

    def __init__(self, kind: str, expected: str, actual: int) -> None:
        self.kind = kind
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected exactly one {kind} '{expected}' in the discovery response, got {actual}"
        )


class DiscoveryTransport(Protocol):
    def discover(
        self,
        connection_profile: datastream_v1.ConnectionProfile,
        schema: str | None = None,
        table: str | None = None,
    ) -> DiscoveryResponse:
        ...

    def close(self) -> None:
        ...


def _only_element(items: list[T] | None, kind: str, expected: str) -> T:
    if not items or len(items) != 1:
        raise DiscoveryContractError(kind, expected, len(items or []))
    return items[0]


class DatastreamTableRegistry(BaseService):
    """Lists, describes and standardizes source tables through Datastream discovery.

    Holds no state between calls beyond its configuration, so a single instance
    may describe several tables concurrently when its transport allows it.

    Args:
        config: Connection parameters of the source database.
        discovery_service: Discovery transport. A `DatastreamDiscoveryService` is
            created, and owned by the registry, when omitted.
        system_schemas: Schema names never listed, compared case-insensitively.
        column_evaluator: Policy turning a column into a support verdict and a
            canonical field.
        type_mapping: Maps native type names to canonical SQL types.
    """

    def __init__(
        self,
        config: DatastreamConfig,
        discovery_service: DiscoveryTransport | None = None,
        system_schemas: Iterable[str] = ORACLE_SYSTEM_SCHEMAS,
        column_evaluator: Callable[[ColumnDetail], ColumnEvaluation] = assessor.evaluate_column,
        type_mapping: Callable[[str | None], SQLType] = convert_string_data_type_to_sql_type,
        logger: Logger | None = None,
    ) -> None:
        super().__init__(log_name="services.table_registry", logger=logger)
        self.config = config
        self._owns_discovery_service = discovery_service is None
        self.discovery_service = discovery_service or DatastreamDiscoveryService(
            region=config.region, project=config.project, logger=self.logger
        )
        self.system_schemas = frozenset(name.upper() for name in system_schemas)
        self.column_evaluator = column_evaluator
        self.type_mapping = type_mapping
        self.connection_profile = build_oracle_connection_profile(config)
        self._closed = False

    def list_tables(self) -> TableList:
        self.logger.log_debug("List tables...")
        response = self.discovery_service.discover(self.connection_profile)
        if response.schemas is None:
            return TableList()

        tables = []
        for schema in response.schemas:
            if schema.schema_name.upper() in self.system_schemas:
                continue
            if not schema.oracle_tables:
                continue
            for table in schema.oracle_tables:
                tables.append(
                    TableSummary(
                        database=self.config.sid,
                        table=table.table,
                        number_columns=len(table.oracle_columns or []),
                        schema_name=schema.schema_name,
                    )
                )
        return TableList(tables=tuple(tables))

    def describe_table(self, database: str, schema: str, table: str) -> TableDetail:
        with table_labels(database, schema, table):
            self.logger.log_debug(
                f"Describe table, db: {database}, table: {table}, schema: {schema}"
            )
            try:
                response = self.discovery_service.discover(
                    self.connection_profile, schema=schema, table=table
                )
            except NotFound as e:
                self.logger.log_error(f"Table {schema}.{table} not found: {e.message}")
                raise TableNotFoundError(database, schema, table, e.message, e) from e

            try:
                discovered_schema = _only_element(response.schemas, "schema", schema)
                discovered_table = _only_element(
                    discovered_schema.oracle_tables, "table", f"{schema}.{table}"
                )
            except DiscoveryContractError as e:
                self.logger.log_exception(e)
                raise

            builder = TableDetail.builder(database, schema, table)
            for column in discovered_table.oracle_columns or []:
                properties = {}
                if column.precision is not None:
                    properties[PRECISION] = str(column.precision)
                if column.scale is not None:
                    properties[SCALE] = str(column.scale)
                builder.add_column(
                    ColumnDetail(
                        name=column.column,
                        type=self.type_mapping(column.data_type),
                        nullable=column.nullable is True,
                        properties=properties,
                    )
                )
                if column.primary_key is True:
                    builder.add_primary_key(column.column)
            return builder.build()

    def standardize(self, table_detail: TableDetail) -> StandardizedTableDetail:
        """Filter and map the columns of a described table into the canonical schema.

        Makes no discovery request. Primary keys are copied as is; when a key
        column is dropped a warning is sent through the registry logger, which
        is a Cloud Logging call when the logger writes to Google Cloud.
        """
        fields = []
        for column in table_detail.columns:
            evaluation = self.column_evaluator(column)
            if evaluation.assessment.support == ColumnSupport.NO:
                continue
            fields.append(evaluation.field)
        record_schema = RecordSchema.record_of(OUTPUT_SCHEMA_NAME, fields)

        dropped_keys = [
            key for key in table_detail.primary_key if record_schema.get_field(key) is None
        ]
        if dropped_keys:
            self.logger.log_warning(
                f"Primary key columns {dropped_keys} of {table_detail.schema_name}."
                f"{table_detail.table} are not replicable and are missing from the output schema",
                labels={
                    "database": table_detail.database,
                    "schema": table_detail.schema_name,
                    "table": table_detail.table,
                },
            )

        return StandardizedTableDetail(
            database=table_detail.database,
            schema_name=table_detail.schema_name,
            table=table_detail.table,
            primary_key=table_detail.primary_key,
            record_schema=record_schema,
        )

    def assess_table(self, table_detail: TableDetail) -> TableAssessment:
        return assessor.assess_table(table_detail, evaluator=self.column_evaluator)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_discovery_service:
            self.discovery_service.close()

    def __enter__(self) -> "DatastreamTableRegistry":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
