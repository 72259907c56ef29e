# app/api/routes_prescriptions.py
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.core.llm_config import HF_MODEL_EXTRACT
from app.core.ocr_config import MAX_UPLOAD_BYTES
from app.schemas.models import (
    ErrorResponse,
    ExtractionResult,
    ExtractTextRequest,
    NormalizeRequest,
    NormalizeResponse,
    ProviderStatus,
)
from app.services.admin_times import detect_admin_times
from app.services.errors import UploadValidationError
from app.services.hf_client import hf_token_set
from app.services.normalization import normalize_text
from app.services.pipeline import PrescriptionPipeline

router = APIRouter(prefix="/prescriptions", tags=["prescriptions"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    422: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

@lru_cache(maxsize=1)
def get_pipeline() -> PrescriptionPipeline:
    return PrescriptionPipeline()

@router.post("/extract", response_model=ExtractionResult, responses=_ERROR_RESPONSES)
def extract_prescription(
    file: Optional[UploadFile] = File(None),
    pipeline: PrescriptionPipeline = Depends(get_pipeline),
):
    if file is None:
        raise UploadValidationError("No file provided")

    # one byte past the limit is enough to reject an oversized upload
    data = file.file.read(MAX_UPLOAD_BYTES + 1)
    return pipeline.process(data, file.content_type or "")

@router.post("/extract-text", response_model=ExtractionResult, responses=_ERROR_RESPONSES)
def extract_from_text(req: ExtractTextRequest, pipeline: PrescriptionPipeline = Depends(get_pipeline)):
    return pipeline.process_text(req.raw_text)

@router.post("/normalize", response_model=NormalizeResponse)
def normalize(req: NormalizeRequest):
    normalized = normalize_text(req.text)
    return NormalizeResponse(normalized_text=normalized, admin_times=detect_admin_times(normalized))

@router.get("/debug_providers", response_model=ProviderStatus)
def debug_providers(pipeline: PrescriptionPipeline = Depends(get_pipeline)):
    gateway = pipeline.ocr_gateway
    creds = {p.name: p.credential_set() for p in gateway.providers}
    return ProviderStatus(
        ocr_order=[p.name for p in gateway.order()],
        google_vision_key_set=creds.get("google", False),
        openai_key_set=creds.get("openai", False),
        hf_token_set=hf_token_set(),
        hf_model_extract=HF_MODEL_EXTRACT,
    )
