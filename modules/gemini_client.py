"""
Google Gemini API client.

Calls the Gemini REST ``generateContent`` endpoint in JSON mode. Requires a
GEMINI_API_KEY from the environment or the Streamlit sidebar.
"""

from __future__ import annotations

import requests
from loguru import logger

from config import (
    DEFAULT_TEMPERATURE,
    GEMINI_API_BASE,
    REQUEST_TIMEOUT,
    SYSTEM_INSTRUCTION,
)
from modules.errors import SummarizationError


def build_payload(
    prompt: str,
    schema: dict,
    system_instruction: str = SYSTEM_INSTRUCTION,
    temperature: float = DEFAULT_TEMPERATURE,
) -> dict:
    return {
        "contents": [{"parts": [{"text": prompt}]}],
        "systemInstruction": {"parts": [{"text": system_instruction}]},
        "generationConfig": {
            "temperature": temperature,
            "responseMimeType": "application/json",
            "responseSchema": schema,
        },
    }


def generate_json(
    prompt: str,
    model: str,
    api_key: str,
    schema: dict,
    system_instruction: str = SYSTEM_INSTRUCTION,
    temperature: float = DEFAULT_TEMPERATURE,
) -> str:
    """
    Call Gemini's generateContent endpoint and return the raw JSON text.

    Raises
    ------
    SummarizationError
        Missing key, network failure, non-200 status, or an empty reply.
        Never retried.
    """
    if not api_key:
        raise SummarizationError("API Key is missing. Set GEMINI_API_KEY to generate notes.")

    url = f"{GEMINI_API_BASE}/models/{model}:generateContent"
    payload = build_payload(prompt, schema, system_instruction, temperature)

    logger.info(f"Gemini request: model={model} prompt={len(prompt)} chars")
    try:
        resp = requests.post(
            url,
            params={"key": api_key},
            json=payload,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        logger.error(f"Cannot reach Gemini API: {type(exc).__name__}")
        raise SummarizationError(
            "Cannot reach the AI service. Check your internet connection."
        ) from exc

    if resp.status_code != 200:
        logger.error(f"Gemini returned HTTP {resp.status_code}: {resp.text[:300]}")
        if resp.status_code in (401, 403):
            raise SummarizationError("The AI service rejected the API key.")
        raise SummarizationError()

    try:
        body = resp.json()
    except ValueError as exc:
        raise SummarizationError("No response generated from AI.") from exc

    if not isinstance(body, dict):
        raise SummarizationError("No response generated from AI.")
    text = _response_text(body)
    if not text.strip():
        raise SummarizationError("No response generated from AI.")
    logger.info(f"Gemini response: {len(text)} chars")
    return text


def _response_text(body: dict) -> str:
    """Concatenate the text parts of the first candidate."""
    candidates = body.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts)
