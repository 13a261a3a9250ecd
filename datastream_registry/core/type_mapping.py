import re
from enum import Enum


class SQLType(str, Enum):
    """Canonical SQL type tags, named after the JDBC/ANSI type set."""

    BIT = "BIT"
    BOOLEAN = "BOOLEAN"
    TINYINT = "TINYINT"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    REAL = "REAL"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    NUMERIC = "NUMERIC"
    DECIMAL = "DECIMAL"
    CHAR = "CHAR"
    VARCHAR = "VARCHAR"
    LONGVARCHAR = "LONGVARCHAR"
    NCHAR = "NCHAR"
    NVARCHAR = "NVARCHAR"
    LONGNVARCHAR = "LONGNVARCHAR"
    CLOB = "CLOB"
    NCLOB = "NCLOB"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    TIMESTAMP_WITH_TIMEZONE = "TIMESTAMP_WITH_TIMEZONE"
    BINARY = "BINARY"
    VARBINARY = "VARBINARY"
    LONGVARBINARY = "LONGVARBINARY"
    BLOB = "BLOB"
    ROWID = "ROWID"
    SQLXML = "SQLXML"
    STRUCT = "STRUCT"
    ARRAY = "ARRAY"
    OTHER = "OTHER"


# Oracle data type names as reported by Datastream discovery
ORACLE_TYPE_MAPPING: dict[str, SQLType] = {
    "ANYDATA": SQLType.OTHER,
    "BFILE": SQLType.BINARY,
    "BINARY DOUBLE": SQLType.DOUBLE,
    "BINARY_DOUBLE": SQLType.DOUBLE,
    "BINARY FLOAT": SQLType.FLOAT,
    "BINARY_FLOAT": SQLType.FLOAT,
    "BLOB": SQLType.BLOB,
    "CHAR": SQLType.CHAR,
    "CLOB": SQLType.CLOB,
    "DATE": SQLType.TIMESTAMP,
    "FLOAT": SQLType.FLOAT,
    "INTERVAL DAY TO SECOND": SQLType.OTHER,
    "INTERVAL YEAR TO MONTH": SQLType.OTHER,
    "LONG": SQLType.LONGVARCHAR,
    "LONG RAW": SQLType.LONGVARBINARY,
    "NCHAR": SQLType.NCHAR,
    "NCLOB": SQLType.NCLOB,
    "NUMBER": SQLType.NUMERIC,
    "NVARCHAR2": SQLType.NVARCHAR,
    "RAW": SQLType.VARBINARY,
    "ROWID": SQLType.ROWID,
    "TIMESTAMP": SQLType.TIMESTAMP,
    "TIMESTAMP WITH LOCAL TIME ZONE": SQLType.TIMESTAMP_WITH_TIMEZONE,
    "TIMESTAMP WITH TIME ZONE": SQLType.TIMESTAMP_WITH_TIMEZONE,
    "UDT": SQLType.STRUCT,
    "UROWID": SQLType.ROWID,
    "VARCHAR": SQLType.VARCHAR,
    "VARCHAR2": SQLType.VARCHAR,
    "XMLTYPE": SQLType.SQLXML,
}

_SIZE_SUFFIX = re.compile(r"\s*\([^)]*\)")
_WHITESPACE = re.compile(r"\s+")


def normalize_type_name(data_type: str | None) -> str:
    """Upper-case a native type name and drop size suffixes.

    `timestamp(6) with time zone` becomes `TIMESTAMP WITH TIME ZONE`.
    """
    if not data_type:
        return ""
    name = _SIZE_SUFFIX.sub("", data_type)
    return _WHITESPACE.sub(" ", name).strip().upper()


def convert_string_data_type_to_sql_type(
    data_type: str | None, mapping: dict[str, SQLType] | None = None
) -> SQLType:
    """Map a native type name to a canonical SQL type, OTHER when unknown."""
    mapping = ORACLE_TYPE_MAPPING if mapping is None else mapping
    return mapping.get(normalize_type_name(data_type), SQLType.OTHER)
