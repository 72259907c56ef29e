# app/services/pipeline.py
import logging
from typing import Any, Dict, Optional

from app.agent.graph import rx_graph
from app.schemas.models import ExtractionResult
from app.services.errors import NoTextFoundError, OCRFailure, UploadValidationError, UserFacingError
from app.services.llm.extraction import StructuredExtractor
from app.services.ocr.gateway import OCRGateway

logger = logging.getLogger(__name__)

_ERRORS = {
    "validation": UploadValidationError,
    "ocr": OCRFailure,
    "no_text": NoTextFoundError,
}

class PrescriptionPipeline:
    """
    upload -> OCR (with provider fallback) -> structured extraction -> result.
    Raises UserFacingError subclasses; extraction problems never surface here.
    """

    def __init__(self, ocr_gateway: Optional[OCRGateway] = None, extractor: Optional[StructuredExtractor] = None):
        self.ocr_gateway = ocr_gateway or OCRGateway()
        self.extractor = extractor or StructuredExtractor()

    def _config(self) -> Dict[str, Any]:
        return {"configurable": {"ocr_gateway": self.ocr_gateway, "extractor": self.extractor}}

    def _run(self, initial_state: Dict[str, Any]) -> ExtractionResult:
        final_state = rx_graph.invoke(initial_state, config=self._config())

        err = final_state.get("error")
        if err:
            logger.info("pipeline stopped kind=%s", err.get("kind"))
            raise _ERRORS.get(err.get("kind"), UserFacingError)(err.get("message", ""))

        result = final_state.get("result")
        if not result:
            raise RuntimeError("Result missing from pipeline state.")
        return ExtractionResult(**result)

    def process(self, image_bytes: bytes, mime_type: str) -> ExtractionResult:
        return self._run({"image_bytes": image_bytes or b"", "mime_type": mime_type or ""})

    def process_text(self, raw_text: str) -> ExtractionResult:
        return self._run({"raw_text": raw_text or ""})
