"""
Module này chịu trách nhiệm gọi API Google Gemini cho một lượt dịch:
cấu hình API key, gửi prompt kèm response schema và trả về payload text thô.

Module không tự retry; việc retry do orchestrator đảm nhận.
"""
import asyncio
import logging
import os
from typing import Protocol

import google.generativeai as genai
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.generativeai.types import BlockedPromptException, StopCandidateException

from vide_translator.errors import BackendRequestError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "models/gemini-flash-latest"
DEFAULT_TEMPERATURE = 0.2

_TRANSIENT_ERRORS = (
    GoogleAPIError,
    GoogleAuthError,
    BlockedPromptException,
    StopCandidateException,
    asyncio.TimeoutError,
    OSError,
)


class Backend(Protocol):
    """Bất kỳ collaborator nào nhận instructions + schema và trả về text thô."""

    async def invoke(self, instructions: str, output_schema: dict) -> str:
        ...


def load_api_key() -> str | None:
    """Đọc API key Gemini từ biến môi trường GOOGLE_API_KEY (đã load từ .env)."""
    key = os.getenv("GOOGLE_API_KEY")
    return key.strip() if key and key.strip() else None


def configure_api(api_key: str):
    """Cấu hình API key cho google.generativeai."""
    genai.configure(api_key=api_key)


def get_available_models() -> list[str]:
    """Lấy danh sách các model name hỗ trợ generateContent."""
    return [m.name for m in genai.list_models() if 'generateContent' in m.supported_generation_methods]


def get_response_text(response) -> str:
    """Trích xuất text từ một response Gemini, an toàn cho cả multi-part.

    - Ưu tiên đọc qua `candidates[].content.parts`.
    - Fallback sang thuộc tính `.text` cho các đối tượng giả lập trong test.
    """
    if response is None:
        return ""

    candidates = getattr(response, "candidates", None)
    if candidates:
        parts_text = []
        for cand in candidates:
            content = getattr(cand, "content", None)
            if content is None:
                continue
            for part in getattr(content, "parts", []) or []:
                text = getattr(part, "text", None)
                if isinstance(text, str) and text:
                    parts_text.append(text)
        if parts_text:
            return "".join(parts_text)

    # Response bị chặn hoặc không có part nào: .text sẽ raise ValueError
    try:
        text_attr = response.text
    except (ValueError, AttributeError):
        text_attr = None

    return text_attr if isinstance(text_attr, str) else ""


class GeminiBackend:
    """Một lượt gọi (không retry) tới Gemini với response schema bắt buộc."""

    def __init__(self, model_name: str = DEFAULT_MODEL, temperature: float = DEFAULT_TEMPERATURE,
                 api_key: str | None = None):
        if api_key:
            configure_api(api_key)
        self.model_name = model_name
        self.temperature = temperature
        self._model = genai.GenerativeModel(model_name)

    def _generation_config(self, output_schema: dict) -> genai.GenerationConfig:
        return genai.GenerationConfig(
            temperature=self.temperature,
            response_mime_type="application/json",
            response_schema=output_schema,
        )

    async def invoke(self, instructions: str, output_schema: dict) -> str:
        logger.debug("Gọi Gemini model=%s temperature=%s", self.model_name, self.temperature)
        try:
            response = await self._model.generate_content_async(
                instructions,
                generation_config=self._generation_config(output_schema),
            )
        except _TRANSIENT_ERRORS as e:
            raise BackendRequestError(f"Gemini request failed: {e}") from e

        text = get_response_text(response)
        if not text.strip():
            raise BackendRequestError("Gemini returned an empty payload.")
        return text
