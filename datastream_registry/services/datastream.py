"""Discovery transport over the Google Cloud Datastream API."""

from google.cloud import datastream_v1
from google.protobuf import json_format

from datastream_registry.core.profiles import default_project, parent_path
from datastream_registry.logging.client import Logger
from datastream_registry.models.discovery import DiscoveryResponse
from datastream_registry.services.base import BaseService


def to_discovery_response(
    response: datastream_v1.DiscoverConnectionProfileResponse,
) -> DiscoveryResponse:
    # Fields left at their proto default (0, false, empty) are omitted, so
    # unreported precision or scale never shows up as a value.
    payload = json_format.MessageToDict(
        type(response).pb(response), preserving_proto_field_name=True
    )
    return DiscoveryResponse.model_validate(payload)


class DatastreamDiscoveryService(BaseService):
    """
    Runs discover-connection-profile requests against Datastream.

    Args:
        region (str): Datastream region the discovery runs in.
        project (str | None): Google Cloud project. Inferred from the environment when omitted.
        datastream_client (datastream_v1.DatastreamClient | None): Client to use. One is
            created, and owned by this service, when omitted.

    Errors from the client are not caught: `google.api_core.exceptions.NotFound`
    for a missing schema or table, other `GoogleAPICallError`s otherwise.
    """

    def __init__(
        self,
        region: str,
        project: str | None = None,
        datastream_client: datastream_v1.DatastreamClient | None = None,
        logger: Logger | None = None,
    ) -> None:
        super().__init__(log_name="services.datastream", logger=logger)
        self._owns_client = datastream_client is None
        self.datastream_client = datastream_client or datastream_v1.DatastreamClient()
        self.parent = parent_path(project or default_project(), region)
        self._closed = False

    def discover(
        self,
        connection_profile: datastream_v1.ConnectionProfile,
        schema: str | None = None,
        table: str | None = None,
    ) -> DiscoveryResponse:
        """Discover the whole profile, or a single table when schema and table are given."""
        if (schema is None) != (table is None):
            raise ValueError("`schema` and `table` must be given together")

        request = datastream_v1.DiscoverConnectionProfileRequest(
            parent=self.parent,
            connection_profile=connection_profile,
        )
        if schema is None:
            request.full_hierarchy = True
            self.logger.log_debug(f"Discovering full hierarchy under {self.parent}")
        else:
            request.oracle_rdbms = datastream_v1.OracleRdbms(
                oracle_schemas=[
                    datastream_v1.OracleSchema(
                        schema=schema,
                        oracle_tables=[datastream_v1.OracleTable(table=table)],
                    )
                ]
            )
            self.logger.log_debug(
                f"Discovering table {schema}.{table} under {self.parent}"
            )
        response = self.datastream_client.discover_connection_profile(request=request)
        return to_discovery_response(response)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._owns_client:
            self.datastream_client.transport.close()
