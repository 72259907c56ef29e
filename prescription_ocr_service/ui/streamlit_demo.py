from typing import Any, Dict, Optional

import pandas as pd
import requests
import streamlit as st
from dotenv import load_dotenv

load_dotenv()

st.set_page_config(page_title="Prescription OCR & Normalizer", layout="wide")

# ---------------------------
# Config
# ---------------------------
DEFAULT_API_BASE = "http://127.0.0.1:8000"
API_BASE = st.sidebar.text_input("API Base URL", value=DEFAULT_API_BASE)

INFO_LABELS = {
    "medicineName": "Medicine",
    "medicineType": "Type",
    "quantity": "Quantity",
    "frequency": "Frequency",
    "takingMethod": "How to take",
}

# ---------------------------
# Helpers (API)
# ---------------------------
def _error_text(r: requests.Response) -> str:
    try:
        return r.json().get("error") or r.text
    except ValueError:
        return r.text

def api_upload(path: str, name: str, data: bytes, mime_type: str) -> Dict[str, Any]:
    url = f"{API_BASE}{path}"
    r = requests.post(url, files={"file": (name, data, mime_type)}, timeout=120)
    if r.status_code >= 400:
        raise RuntimeError(_error_text(r))
    return r.json()

def api_get(path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    url = f"{API_BASE}{path}"
    r = requests.get(url, params=params or {}, timeout=20)
    if r.status_code >= 400:
        raise RuntimeError(_error_text(r))
    return r.json()

def medication_table(info: Dict[str, Any]) -> pd.DataFrame:
    rows = [{"Field": label, "Value": info.get(key, "Not specified")} for key, label in INFO_LABELS.items()]
    return pd.DataFrame(rows)

# ---------------------------
# Session state
# ---------------------------
if "result" not in st.session_state:
    st.session_state.result = None
if "error" not in st.session_state:
    st.session_state.error = None

# ---------------------------
# UI
# ---------------------------
st.title("Prescription OCR & Normalizer")
st.caption("Extract and normalize medication instructions from prescription images")

with st.sidebar:
    if st.button("Check providers"):
        try:
            st.json(api_get("/prescriptions/debug_providers"))
        except Exception as e:
            st.error(str(e))

col_left, col_right = st.columns([1, 1.2])

with col_left:
    st.subheader("1) Upload Prescription")
    uploaded = st.file_uploader(
        "Upload a prescription image (.png, .jpg, .jpeg)",
        type=["png", "jpg", "jpeg"],
    )

    if uploaded is not None:
        st.image(uploaded, caption=uploaded.name, use_container_width=True)

    if st.button("Extract & Normalize", disabled=uploaded is None, use_container_width=True):
        st.session_state.result = None
        st.session_state.error = None
        with st.spinner("Extracting..."):
            try:
                st.session_state.result = api_upload(
                    "/prescriptions/extract",
                    uploaded.name,
                    uploaded.getvalue(),
                    uploaded.type or "application/octet-stream",
                )
            except Exception as e:
                st.session_state.error = str(e)

    if st.session_state.error:
        st.error(st.session_state.error)

with col_right:
    st.subheader("2) Results")
    result = st.session_state.result
    if not result:
        st.caption("No result yet.")
    else:
        st.write("**Raw Extracted Text**")
        st.code(result.get("rawText") or "No text extracted", language=None)

        st.write("**Normalized Instructions**")
        st.code(result.get("normalizedText") or "No normalized text available", language=None)

        st.write("**Administration Times**")
        admin_times = result.get("adminTimes") or []
        if admin_times:
            for t in admin_times:
                st.success(t)
        else:
            st.info("No administration times detected")

        info = result.get("medicationInfo")
        if info:
            st.write("**Medication Information**")
            st.dataframe(medication_table(info), hide_index=True, use_container_width=True)

        if result.get("safetyNote"):
            st.caption(result["safetyNote"])
