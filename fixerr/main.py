import base64
import hashlib
import logging
from typing import Optional

from fastapi import FastAPI, File, HTTPException, Query, UploadFile

from .detect import resolve_column_count
from .errors import ConfigError, FormatError
from .models import HealthResponse, RepairResponse
from .normalize import decode_input
from .reconstruct import Stats, reconstruct_text
from .rules import TARGET_ENCODING, Delimiter, HeaderMode
from .writer import serialize_rows

logger = logging.getLogger(__name__)

app = FastAPI(
    title="csv-fixerr",
    description="Reconstruct CSV records broken by unescaped line breaks",
    version="0.1.0",
)


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.post("/repair", response_model=RepairResponse)
async def repair_csv(
    file: UploadFile = File(...),
    delimiter: str = Query("comma", description="comma, semicolon, tab or pipe"),
    has_headers: bool = Query(True),
    expected_columns: Optional[str] = Query(None, description="required when has_headers is false"),
):
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    header_mode = HeaderMode.from_bool(has_headers)
    try:
        delim = Delimiter.parse(delimiter)
        width = None if header_mode.as_bool() else resolve_column_count(expected_columns)
    except ConfigError as e:
        raise HTTPException(status_code=422, detail=str(e))

    raw = await file.read()
    text, enc_report = decode_input(raw)

    stats = Stats()
    try:
        records = reconstruct_text(text, header_mode, delim, stats, width)
    except FormatError as e:
        logger.warning("Rejected %s: %s", file.filename, e)
        raise HTTPException(status_code=422, detail=f"Malformed CSV: {e}")

    if width is None:
        width = len(records[0])

    out_bytes = serialize_rows(records, delim).encode(TARGET_ENCODING)

    return {
        "repaired_csv": {
            "sha256": hashlib.sha256(out_bytes).hexdigest(),
            "encoding": TARGET_ENCODING,
            "content_b64": base64.b64encode(out_bytes).decode("ascii"),
        },
        "report": {
            "stats": {
                "total_rows": stats.total_rows,
                "fixed_rows": stats.fixed_rows,
                "removed_rows": stats.removed_rows,
                "success_rate": stats.success_rate,
            },
            "records_written": len(records),
            "expected_columns": width,
            "delimiter": delim.name.lower(),
            "header_mode": header_mode.value,
        },
        "encoding": enc_report,
    }
