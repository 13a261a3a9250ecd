import google.auth
from google.cloud import datastream_v1

from datastream_registry.models.config import (
    DatastreamConfig,
    ForwardSshConnectivity,
    PrivateConnectivity,
)


def parent_path(project: str, region: str) -> str:
    """Parent of Datastream resources, `projects/{project}/locations/{region}`."""
    return f"projects/{project}/locations/{region}"


def default_project() -> str:
    _, project = google.auth.default()
    if not project:
        raise ValueError(
            "No Google Cloud project configured and none could be inferred from the environment"
        )
    return project


def build_oracle_connection_profile(
    config: DatastreamConfig,
) -> datastream_v1.ConnectionProfile:
    profile = datastream_v1.ConnectionProfile(
        oracle_profile=datastream_v1.OracleProfile(
            hostname=config.host,
            port=config.port,
            username=config.user,
            password=config.password.get_secret_value(),
            database_service=config.sid,
        )
    )

    connectivity = config.connectivity
    if isinstance(connectivity, ForwardSshConnectivity):
        tunnel = datastream_v1.ForwardSshTunnelConnectivity(
            hostname=connectivity.hostname,
            username=connectivity.username,
            port=connectivity.port,
        )
        if connectivity.private_key is not None:
            tunnel.private_key = connectivity.private_key.get_secret_value()
        else:
            tunnel.password = connectivity.password.get_secret_value()
        profile.forward_ssh_connectivity = tunnel
    elif isinstance(connectivity, PrivateConnectivity):
        profile.private_connectivity = datastream_v1.PrivateConnectivity(
            private_connection=connectivity.private_connection
        )
    else:
        profile.static_service_ip_connectivity = (
            datastream_v1.StaticServiceIpConnectivity()
        )
    return profile
