"""Shared fixtures for the registry tests."""

import pytest

from datastream_registry.logging.client import Logger
from datastream_registry.models.config import DatastreamConfig


@pytest.fixture
def config():
    return DatastreamConfig(
        project="test-project",
        region="us-central1",
        host="oracle.internal",
        user="replicator",
        password="secret",
        sid="ORCL",
    )


@pytest.fixture
def logger():
    return Logger(log_name="tests.datastream_registry", log_level="DEBUG", use_cloud=False)
