from __future__ import annotations

from typing import Optional, Tuple

from pydantic import BaseModel, Field, field_validator

from .rules import DEFAULT_DELIMITER, DEFAULT_HEADER_MODE, DEFAULT_INPUT_FILE, DEFAULT_OUTPUT_FILE, Delimiter, HeaderMode

# One reconstructed record; always exactly expected_columns fields.
LogicalRow = Tuple[str, ...]


class RepairConfig(BaseModel):
    delimiter: Delimiter = DEFAULT_DELIMITER
    header_mode: HeaderMode = DEFAULT_HEADER_MODE
    input_file: str = DEFAULT_INPUT_FILE
    output_file: str = DEFAULT_OUTPUT_FILE
    expected_columns: Optional[int] = Field(default=None, gt=0)

    @field_validator("delimiter", mode="before")
    @classmethod
    def _parse_delimiter(cls, v):
        return Delimiter.parse(v) if isinstance(v, str) else v


class RepairedCsv(BaseModel):
    sha256: str
    encoding: str = Field(default="utf-8")
    content_b64: str


class RepairStats(BaseModel):
    total_rows: int = 0
    fixed_rows: int = 0
    removed_rows: int = 0
    success_rate: float = 0.0


class EncodingReport(BaseModel):
    detected: Optional[str] = None
    decode_used: str
    decode_fallback: bool = False


class RepairReport(BaseModel):
    stats: RepairStats
    records_written: int = Field(default=0, examples=[2])
    expected_columns: int
    delimiter: str
    header_mode: str


class RepairResponse(BaseModel):
    repaired_csv: RepairedCsv
    report: RepairReport
    encoding: EncodingReport


class HealthResponse(BaseModel):
    ok: bool = True
