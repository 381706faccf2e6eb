"""
Database Catalog

Names of the persistent tables, the row model stored in each, and the shape
of a full database export.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .base import CastleModel
from .rows import (
    DatapointControlLogRow,
    DatapointLogRow,
    SampleDataLogRow,
    SampleDatapointRow,
    SampleRow,
)


class TableName(str, Enum):
    SAMPLE = "sample"
    SAMPLE_DATAPOINT = "sampleDatapoint"
    SAMPLE_DATA_LOG = "sampleDataLog"
    DATAPOINT_LOG = "datapoint_log"
    DATAPOINT_CONTROL_LOG = "datapoint_control_log"


ALL_TABLE_NAMES: dict[TableName, str] = {
    TableName.SAMPLE: "Sample, pattern",
    TableName.SAMPLE_DATAPOINT: "Datapoints of samples",
    TableName.SAMPLE_DATA_LOG: "Data of samples",
    TableName.DATAPOINT_LOG: "Datapoint state",
    TableName.DATAPOINT_CONTROL_LOG: "Datapoint control state",
}

TABLE_ROWS: dict[TableName, type[BaseModel]] = {
    TableName.SAMPLE: SampleRow,
    TableName.SAMPLE_DATAPOINT: SampleDatapointRow,
    TableName.SAMPLE_DATA_LOG: SampleDataLogRow,
    TableName.DATAPOINT_LOG: DatapointLogRow,
    TableName.DATAPOINT_CONTROL_LOG: DatapointControlLogRow,
}


class ExportVersion(CastleModel):
    software: str
    db: str


class SampleTable(CastleModel):
    rows: list[SampleRow] = Field(default_factory=list)


class SampleDatapointTable(CastleModel):
    rows: list[SampleDatapointRow] = Field(default_factory=list)


class SampleDataLogTable(CastleModel):
    rows: list[SampleDataLogRow] = Field(default_factory=list)


class DatapointLogTable(CastleModel):
    rows: list[DatapointLogRow] = Field(default_factory=list)


class DatapointControlLogTable(CastleModel):
    rows: list[DatapointControlLogRow] = Field(default_factory=list)


class ExportTables(CastleModel):
    sample: SampleTable = Field(default_factory=SampleTable)
    sample_datapoint: SampleDatapointTable = Field(default_factory=SampleDatapointTable)
    sample_data_log: SampleDataLogTable = Field(default_factory=SampleDataLogTable)
    datapoint_log: DatapointLogTable = Field(default_factory=DatapointLogTable)
    datapoint_control_log: DatapointControlLogTable = Field(
        default_factory=DatapointControlLogTable
    )


class DbExportData(CastleModel):
    """Full export of the castle database."""
    version: ExportVersion
    tables: ExportTables = Field(default_factory=ExportTables)


class TableStatus(CastleModel):
    """Setup state of one table."""
    name: TableName
    exists: bool
    rows: Optional[int] = None


class DatabaseSetupStatus(CastleModel):
    name: str
    tables: dict[str, TableStatus] = Field(default_factory=dict)


class SystemSetupStatus(CastleModel):
    """Setup state of the database used by the system."""
    database: DatabaseSetupStatus
