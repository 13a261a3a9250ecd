"""Typed view of a Datastream discover-connection-profile response.

Every collection is optional because Datastream omits empty repeated fields
rather than returning an empty list.
"""

from typing import Optional

from pydantic import BaseModel, Field


class DiscoveredColumn(BaseModel):
    column: str
    data_type: Optional[str] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    encoding: Optional[str] = None
    primary_key: Optional[bool] = None
    nullable: Optional[bool] = None
    ordinal_position: Optional[int] = None


class DiscoveredTable(BaseModel):
    table: str
    oracle_columns: Optional[list[DiscoveredColumn]] = None


class DiscoveredSchema(BaseModel):
    schema_name: str = Field(alias="schema")
    oracle_tables: Optional[list[DiscoveredTable]] = None

    class Config:
        populate_by_name = True


class OracleRdbms(BaseModel):
    oracle_schemas: Optional[list[DiscoveredSchema]] = None


class DiscoveryResponse(BaseModel):
    oracle_rdbms: Optional[OracleRdbms] = None

    @property
    def schemas(self) -> Optional[list[DiscoveredSchema]]:
        if self.oracle_rdbms is None:
            return None
        return self.oracle_rdbms.oracle_schemas
