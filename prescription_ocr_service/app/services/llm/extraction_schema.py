# app/services/llm/extraction_schema.py

# JSON key -> MedicationRecord attribute
SCALAR_FIELDS = {
    "medicineName": "medicine_name",
    "medicineType": "medicine_type",
    "quantity": "quantity",
    "frequency": "frequency",
    "takingMethod": "taking_method",
}
LIST_FIELDS = {"adminTimes": "admin_times"}
TEXT_FIELDS = {"fullText": "full_text"}

RECORD_KEYS = [*SCALAR_FIELDS, *LIST_FIELDS, *TEXT_FIELDS]
