"""
Tests for the Datastream discovery transport and connection profile builder.
"""

from unittest import mock

import pytest
from google.api_core.exceptions import NotFound
from google.cloud import datastream_v1
from pydantic import ValidationError

from datastream_registry.core.profiles import build_oracle_connection_profile, parent_path
from datastream_registry.models.config import DatastreamConfig
from datastream_registry.services.datastream import (
    DatastreamDiscoveryService,
    to_discovery_response,
)


def orders_response():
    return datastream_v1.DiscoverConnectionProfileResponse(
        oracle_rdbms=datastream_v1.OracleRdbms(
            oracle_schemas=[
                datastream_v1.OracleSchema(
                    schema="APP",
                    oracle_tables=[
                        datastream_v1.OracleTable(
                            table="ORDERS",
                            oracle_columns=[
                                datastream_v1.OracleColumn(
                                    column="ID",
                                    data_type="NUMBER",
                                    precision=10,
                                    primary_key=True,
                                ),
                                datastream_v1.OracleColumn(
                                    column="NOTE",
                                    data_type="VARCHAR2",
                                    length=200,
                                    nullable=True,
                                ),
                            ],
                        ),
                        datastream_v1.OracleTable(table="AUDIT"),
                    ],
                )
            ]
        )
    )


@pytest.fixture
def datastream_client():
    client = mock.MagicMock()
    client.discover_connection_profile.return_value = orders_response()
    return client


@pytest.fixture
def service(datastream_client, logger):
    return DatastreamDiscoveryService(
        region="us-central1",
        project="test-project",
        datastream_client=datastream_client,
        logger=logger,
    )


class TestToDiscoveryResponse:
    def test_unset_fields_are_absent(self):
        response = to_discovery_response(orders_response())

        (schema,) = response.schemas
        orders, audit = schema.oracle_tables
        id_column, note_column = orders.oracle_columns
        assert schema.schema_name == "APP"
        assert (id_column.precision, id_column.scale) == (10, None)
        assert id_column.primary_key is True
        assert id_column.nullable is None
        assert note_column.nullable is True
        assert note_column.primary_key is None
        assert audit.oracle_columns is None

    def test_empty_response(self):
        response = to_discovery_response(datastream_v1.DiscoverConnectionProfileResponse())

        assert response.schemas is None


class TestDatastreamDiscoveryService:
    def test_parent_path(self, service):
        assert service.parent == "projects/test-project/locations/us-central1"
        assert parent_path("p", "europe-west1") == "projects/p/locations/europe-west1"

    def test_full_hierarchy_request(self, service, datastream_client, config):
        profile = build_oracle_connection_profile(config)

        service.discover(profile)

        request = datastream_client.discover_connection_profile.call_args.kwargs["request"]
        assert request.parent == "projects/test-project/locations/us-central1"
        assert request.full_hierarchy is True
        assert len(request.oracle_rdbms.oracle_schemas) == 0
        assert request.connection_profile.oracle_profile.hostname == "oracle.internal"

    def test_scoped_request_names_one_schema_and_table(
        self, service, datastream_client, config
    ):
        response = service.discover(
            build_oracle_connection_profile(config), schema="APP", table="ORDERS"
        )

        request = datastream_client.discover_connection_profile.call_args.kwargs["request"]
        assert request.full_hierarchy is False
        (schema,) = request.oracle_rdbms.oracle_schemas
        assert schema.schema == "APP"
        assert [t.table for t in schema.oracle_tables] == ["ORDERS"]
        assert response.schemas[0].oracle_tables[0].table == "ORDERS"

    def test_schema_without_table_is_rejected(self, service, config):
        with pytest.raises(ValueError):
            service.discover(build_oracle_connection_profile(config), schema="APP")

    def test_client_errors_propagate(self, service, datastream_client, config):
        datastream_client.discover_connection_profile.side_effect = NotFound("gone")

        with pytest.raises(NotFound):
            service.discover(build_oracle_connection_profile(config), "APP", "GONE")

    def test_close_leaves_injected_client_open(self, service, datastream_client):
        service.close()

        datastream_client.transport.close.assert_not_called()

    def test_close_owned_client_once(self, logger):
        with mock.patch(
            "google.cloud.datastream_v1.DatastreamClient"
        ) as client_cls, mock.patch(
            "datastream_registry.services.datastream.default_project",
            return_value="inferred-project",
        ):
            service = DatastreamDiscoveryService(region="us-east1", logger=logger)

        service.close()
        service.close()

        assert service.parent == "projects/inferred-project/locations/us-east1"
        client_cls.return_value.transport.close.assert_called_once_with()


class TestConnectionProfile:
    def test_oracle_profile(self, config):
        profile = build_oracle_connection_profile(config)

        oracle = profile.oracle_profile
        assert (oracle.hostname, oracle.port, oracle.username) == (
            "oracle.internal",
            1521,
            "replicator",
        )
        assert oracle.password == "secret"
        assert oracle.database_service == "ORCL"
        assert "forward_ssh_connectivity" not in profile
        assert "private_connectivity" not in profile

    def test_forward_ssh_with_private_key(self, config):
        ssh_config = DatastreamConfig.model_validate(
            config.model_dump()
            | {
                "connectivity": {
                    "method": "forward_ssh",
                    "hostname": "bastion",
                    "username": "tunnel",
                    "private_key": "-----BEGIN KEY-----",
                }
            }
        )

        profile = build_oracle_connection_profile(ssh_config)

        tunnel = profile.forward_ssh_connectivity
        assert (tunnel.hostname, tunnel.username, tunnel.port) == ("bastion", "tunnel", 22)
        assert tunnel.private_key == "-----BEGIN KEY-----"
        assert tunnel.password == ""

    def test_private_connectivity(self, config):
        private_config = DatastreamConfig.model_validate(
            config.model_dump()
            | {
                "connectivity": {
                    "method": "private",
                    "private_connection": "projects/p/locations/r/privateConnections/pc",
                },
            }
        )

        profile = build_oracle_connection_profile(private_config)

        assert (
            profile.private_connectivity.private_connection
            == "projects/p/locations/r/privateConnections/pc"
        )
        assert "forward_ssh_connectivity" not in profile

    def test_forward_ssh_needs_exactly_one_credential(self, config):
        with pytest.raises(ValidationError):
            DatastreamConfig.model_validate(
                config.model_dump()
                | {
                    "connectivity": {
                        "method": "forward_ssh",
                        "hostname": "bastion",
                        "username": "tunnel",
                    },
                }
            )
