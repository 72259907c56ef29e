import json

import pytest

from app.schemas.models import EXTRACTION_FAILED
from app.services.errors import NoTextFoundError, OCRFailure, UploadValidationError
from app.services.llm.extraction import StructuredExtractor
from app.services.ocr.gateway import OCRGateway
from app.services.pipeline import PrescriptionPipeline

from fakes import PNG_BYTES, FakeGenerator, FakeProvider

def make_pipeline(google=None, openai=None, reply="", gen_error=None):
    google = google or FakeProvider("google", text="Metformin 500 mg tab qhs")
    openai = openai or FakeProvider("openai", text="unused")
    gen = FakeGenerator(reply, error=gen_error)
    pipeline = PrescriptionPipeline(OCRGateway([google, openai]), StructuredExtractor(gen))
    return pipeline, google, openai, gen

@pytest.mark.parametrize("mime_type", ["application/pdf", "text/plain", ""])
def test_non_image_rejected_before_any_network_call(mime_type):
    pipeline, google, openai, gen = make_pipeline()
    with pytest.raises(UploadValidationError):
        pipeline.process(PNG_BYTES, mime_type)
    assert (google.calls, openai.calls) == (0, 0)
    assert gen.prompts == []

def test_empty_upload_rejected():
    pipeline, google, _, _ = make_pipeline()
    with pytest.raises(UploadValidationError, match="No file provided"):
        pipeline.process(b"", "image/png")
    assert google.calls == 0

def test_oversized_upload_rejected(monkeypatch):
    monkeypatch.setattr("app.agent.nodes.MAX_UPLOAD_BYTES", 4)
    pipeline, google, _, _ = make_pipeline()
    with pytest.raises(UploadValidationError, match="too large"):
        pipeline.process(PNG_BYTES, "image/png")
    assert google.calls == 0

def test_ocr_failure_stops_before_extraction():
    pipeline, _, _, gen = make_pipeline(
        google=FakeProvider("google", error="Google Vision 403: forbidden"),
        openai=FakeProvider("openai", error="OpenAI 401: bad key"),
    )
    with pytest.raises(OCRFailure) as exc:
        pipeline.process(PNG_BYTES, "image/png")
    assert "Google Vision 403: forbidden" in exc.value.message
    assert not isinstance(exc.value, NoTextFoundError)
    assert gen.prompts == []

def test_blank_text_is_no_text_found():
    pipeline, _, _, gen = make_pipeline()
    with pytest.raises(NoTextFoundError):
        pipeline.process_text("   \n ")
    assert gen.prompts == []

def test_end_to_end_with_degraded_extraction():
    pipeline, google, openai, _ = make_pipeline(reply="definitely not json")
    result = pipeline.process(PNG_BYTES, "image/png")

    assert result.raw_text == "Metformin 500 mg tab qhs"
    assert "tablet" in result.normalized_text
    assert "at bedtime" in result.normalized_text
    assert result.admin_times == ["at bedtime"]
    assert result.medication_info.medicine_name == EXTRACTION_FAILED
    assert (google.calls, openai.calls) == (1, 0)

def test_end_to_end_with_model_record():
    reply = json.dumps({
        "medicineName": "Metformin",
        "medicineType": "tablet",
        "quantity": "500 milligrams",
        "frequency": "at bedtime",
        "takingMethod": "Not specified",
        "adminTimes": [],
        "fullText": "Metformin 500 milligrams tablet at bedtime",
    })
    pipeline, _, _, gen = make_pipeline(reply=reply)
    result = pipeline.process(PNG_BYTES, "image/jpeg")

    assert result.normalized_text == "Metformin 500 milligrams tablet at bedtime"
    # adminTimes come from the detector, not from the model record
    assert result.admin_times == ["at bedtime"]
    assert result.medication_info.medicine_name == "Metformin"
    assert "Metformin 500 mg tab qhs" in gen.prompts[0]

def test_fallback_provider_text_flows_through():
    pipeline, google, openai, _ = make_pipeline(
        google=FakeProvider("google", error="No text found in the image"),
        openai=FakeProvider("openai", text="Amlodipine 5 mg od"),
    )
    result = pipeline.process(PNG_BYTES, "image/png")
    assert result.raw_text == "Amlodipine 5 mg od"
    assert result.admin_times == ["once daily"]
    assert (google.calls, openai.calls) == (1, 1)

def test_model_paraphrase_does_not_replace_normalized_text():
    reply = json.dumps({
        "medicineName": "Metformin",
        "adminTimes": ["twice daily"],
        "fullText": "Metformin 500mg nightly",
    })
    pipeline, _, _, _ = make_pipeline(reply=reply)
    result = pipeline.process(PNG_BYTES, "image/png")

    assert result.raw_text == "Metformin 500 mg tab qhs"
    assert result.normalized_text == "Metformin 500 milligrams tablet at bedtime"
    assert result.admin_times == ["at bedtime"]
    assert result.medication_info.medicine_name == "Metformin"
