import logging

from fastapi import FastAPI, File, Form, HTTPException, UploadFile

from .config import settings
from .encode import encode_many
from .models import (
    BatchResult,
    ConvertResponse,
    EncodeRequest,
    EncodeResponse,
    HealthResponse,
    ParseResponse,
    Platform,
)
from .parse import ParseError, parse_batch

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

app = FastAPI(
    title="csv-listings",
    description=(
        "Convert marketplace product CSV exports into kind-30402 listing events. "
        "Numeric cells are decoded tolerantly: unparsable prices, quantities and "
        "weights become 0 instead of failing the upload."
    ),
    version="0.1.0",
)


async def _parse_upload(file: UploadFile, platform: Platform) -> BatchResult:
    if not (file.filename or "").lower().endswith(".csv"):
        raise HTTPException(status_code=422, detail="Only CSV files are supported")

    raw = await file.read()
    if len(raw) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="CSV file is too large")

    try:
        return parse_batch(raw, platform)
    except ParseError as exc:
        raise HTTPException(status_code=422, detail={"stage": exc.stage, "message": exc.message})


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}


@app.get("/platforms", response_model=list[str])
def platforms():
    return [p.value for p in Platform]


@app.post("/parse", response_model=ParseResponse)
async def parse_csv(file: UploadFile = File(...), platform: Platform = Form(...)):
    result = await _parse_upload(file, platform)
    return result.model_dump()


@app.post("/encode", response_model=EncodeResponse)
def encode_records(body: EncodeRequest):
    return {"events": encode_many(body.records, created_at=body.created_at)}


@app.post("/convert", response_model=ConvertResponse)
async def convert_csv(file: UploadFile = File(...), platform: Platform = Form(...)):
    result = await _parse_upload(file, platform)
    return {
        "platform": result.platform,
        "events": encode_many(result.records),
        "report": result.report,
    }
