from pathlib import Path
from typing import Annotated, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, SecretStr, model_validator


class StaticServiceIpConnectivity(BaseModel):
    method: Literal["static_service_ip"] = "static_service_ip"

    class Config:
        frozen = True


class ForwardSshConnectivity(BaseModel):
    method: Literal["forward_ssh"] = "forward_ssh"
    hostname: str
    username: str
    port: int = 22
    password: Optional[SecretStr] = None
    private_key: Optional[SecretStr] = None

    class Config:
        frozen = True

    @model_validator(mode="after")
    def check_authentication(self) -> "ForwardSshConnectivity":
        if (self.password is None) == (self.private_key is None):
            raise ValueError(
                "Forward SSH connectivity needs exactly one of `password` or `private_key`"
            )
        return self


class PrivateConnectivity(BaseModel):
    method: Literal["private"] = "private"
    # projects/{project}/locations/{region}/privateConnections/{name}
    private_connection: str

    class Config:
        frozen = True


Connectivity = Annotated[
    Union[StaticServiceIpConnectivity, ForwardSshConnectivity, PrivateConnectivity],
    Field(discriminator="method"),
]


class DatastreamConfig(BaseModel):
    """Connection parameters for an Oracle source reached through Datastream.

    `project` falls back to the ambient Google Cloud default project when unset.
    `sid` is the Oracle database service and doubles as the source identifier
    reported on every table summary.
    """

    region: str
    host: str
    user: str
    password: SecretStr
    sid: str
    port: int = 1521
    project: Optional[str] = None
    connectivity: Connectivity = StaticServiceIpConnectivity()

    class Config:
        frozen = True

    @classmethod
    def from_yaml(cls, path: str | Path) -> "DatastreamConfig":
        with open(path, "r", encoding="utf-8") as fh:
            content = yaml.safe_load(fh) or {}
        return cls.model_validate(content)
