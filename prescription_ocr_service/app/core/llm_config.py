import os

from app.core.env import load_env

load_env()

HF_MODEL_EXTRACT = os.getenv("HF_MODEL_EXTRACT", "meta-llama/Llama-3.1-8B-Instruct")

# low temperature + narrow nucleus keeps the JSON shape stable between calls
HF_TEMPERATURE = float(os.getenv("HF_TEMPERATURE", "0.1"))
HF_TOP_P = float(os.getenv("HF_TOP_P", "0.1"))
HF_MAX_TOKENS = int(os.getenv("HF_MAX_TOKENS", "1024"))
HF_TIMEOUT_S = int(os.getenv("HF_TIMEOUT_S", "90"))
