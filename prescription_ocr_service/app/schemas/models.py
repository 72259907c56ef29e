from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

NOT_SPECIFIED = "Not specified"
EXTRACTION_FAILED = "Extraction failed"

SAFETY_NOTE = (
    "Not medical advice. This service reads prescription images and organizes the text. "
    "Always confirm instructions with a doctor/pharmacist."
)

class CamelModel(BaseModel):
    # attributes stay snake_case, JSON on the wire is camelCase
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class MedicationInfo(CamelModel):
    medicine_name: str = NOT_SPECIFIED
    medicine_type: str = NOT_SPECIFIED
    quantity: str = NOT_SPECIFIED
    frequency: str = NOT_SPECIFIED
    taking_method: str = NOT_SPECIFIED

class MedicationRecord(MedicationInfo):
    admin_times: List[str] = Field(default_factory=list)
    full_text: str = NOT_SPECIFIED

    def info(self) -> MedicationInfo:
        return MedicationInfo(**self.model_dump(include=set(MedicationInfo.model_fields)))

class ExtractionResult(CamelModel):
    raw_text: str
    normalized_text: str
    admin_times: List[str] = Field(default_factory=list)
    medication_info: Optional[MedicationInfo] = None
    safety_note: str = SAFETY_NOTE

class ErrorResponse(BaseModel):
    error: str

class ExtractTextRequest(CamelModel):
    raw_text: str

class NormalizeRequest(BaseModel):
    text: str = ""

class NormalizeResponse(CamelModel):
    normalized_text: str
    admin_times: List[str] = Field(default_factory=list)

class ProviderStatus(CamelModel):
    ocr_order: List[str]
    google_vision_key_set: bool
    openai_key_set: bool
    hf_token_set: bool
    hf_model_extract: str
