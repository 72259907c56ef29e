import os
from typing import Optional

from huggingface_hub import InferenceClient

from app.core.llm_config import (
    HF_MAX_TOKENS,
    HF_MODEL_EXTRACT,
    HF_TEMPERATURE,
    HF_TIMEOUT_S,
    HF_TOP_P,
)

class HFLLMError(RuntimeError):
    pass

def hf_token_set() -> bool:
    return bool(os.getenv("HF_TOKEN", "").strip())

def hf_generate_text(
    prompt: str,
    *,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    top_p: Optional[float] = None,
    max_tokens: Optional[int] = None,
    timeout_s: Optional[int] = None,
) -> str:
    """
    Sends a single user prompt to HF Inference Providers and returns the raw
    assistant text. Parsing is left to the caller.
    """
    # read token at runtime so a missing token fails the call, not startup
    token = os.getenv("HF_TOKEN", "").strip()
    if not token:
        raise HFLLMError("HF_TOKEN is missing. Set it in config.env and restart.")

    provider = os.getenv("HF_PROVIDER", "auto").strip() or "auto"

    client = InferenceClient(
        provider=provider,
        api_key=token,
        timeout=float(timeout_s or HF_TIMEOUT_S),
    )

    try:
        out = client.chat_completion(
            model=model or HF_MODEL_EXTRACT,
            messages=[{"role": "user", "content": prompt}],
            temperature=temperature if temperature is not None else HF_TEMPERATURE,
            top_p=top_p if top_p is not None else HF_TOP_P,
            max_tokens=max_tokens if max_tokens is not None else HF_MAX_TOKENS,
        )
    except Exception as e:
        raise HFLLMError(f"HF chat completion failed: {e}") from e

    if not out.choices:
        raise HFLLMError("HF returned no choices.")
    return out.choices[0].message.content or ""
