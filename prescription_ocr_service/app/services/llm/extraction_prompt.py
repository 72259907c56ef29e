# app/services/llm/extraction_prompt.py
import json

from app.services.admin_times import ADMIN_TIMES
from app.services.normalization import NORMALIZATION_MAP

_EXAMPLE_INPUT = "Amoxicillin 500 mg cap tid pc x 7 days"
_EXAMPLE_OUTPUT = {
    "medicineName": "Amoxicillin",
    "medicineType": "capsule",
    "quantity": "500 milligrams",
    "frequency": "three times daily",
    "takingMethod": "by mouth after meals",
    "adminTimes": ["after meals", "three times daily"],
    "fullText": "Amoxicillin 500 milligrams capsule three times daily after meals x 7 days",
}

EXTRACT_PROMPT_TEMPLATE = (
    "You extract medication details from prescription text read by OCR.\n"
    "Hard rules:\n"
    "- Use ONLY what is explicitly present. Do NOT invent medicine names.\n"
    "- Return ONLY one JSON object with exactly these keys: {keys}.\n"
    "- Every value is a string except adminTimes, which is a list of strings.\n"
    "- If a value is not present in the text, use \"Not specified\" (adminTimes: []).\n"
    "- adminTimes may only contain phrases from this list: {admin_times}.\n"
    "- fullText is the whole instruction with abbreviations expanded using: {abbreviations}.\n"
    "- Do not include explanations. Do not include markdown.\n"
    "\n"
    "Example\n"
    "OCR_TEXT:\n{example_input}\n"
    "JSON:\n{example_output}\n"
    "\n"
    "OCR_TEXT:\n{raw_text}\n"
    "JSON:\n"
)

def build_extraction_prompt(raw_text: str, keys) -> str:
    abbreviations = ", ".join(f"{k} = {v}" for k, v in NORMALIZATION_MAP.items())
    return EXTRACT_PROMPT_TEMPLATE.format(
        keys=", ".join(keys),
        admin_times=", ".join(ADMIN_TIMES),
        abbreviations=abbreviations,
        example_input=_EXAMPLE_INPUT,
        example_output=json.dumps(_EXAMPLE_OUTPUT),
        raw_text=raw_text,
    )
