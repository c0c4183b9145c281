"""
vide-translator: trợ lý dịch Việt <-> Đức dùng Gemini, kèm ghi chú văn hoá và từ vựng liên quan.
"""
from vide_translator.errors import (
    BackendRequestError,
    InvalidInputError,
    MalformedResponseError,
    TranslationUnavailableError,
    TranslatorError,
)
from vide_translator.models import RelatedTerm, TranslationDirection, TranslationRequest, TranslationResult
from vide_translator.orchestrator import TranslationOrchestrator
