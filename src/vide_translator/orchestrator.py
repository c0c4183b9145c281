"""
Điều phối một lượt dịch: validate input, dựng prompt, gọi backend, chuẩn hoá
kết quả, tất cả được bọc trong vòng retry với exponential backoff.
"""
import asyncio
import logging
from typing import Awaitable, Callable

from vide_translator import backoff
from vide_translator.api import Backend, GeminiBackend
from vide_translator.errors import BackendRequestError, MalformedResponseError, TranslationUnavailableError
from vide_translator.models import TranslationResult
from vide_translator.normalizer import normalize
from vide_translator.prompts import build_prompt

logger = logging.getLogger(__name__)

RETRYABLE_ERRORS = (BackendRequestError, MalformedResponseError)


class TranslationOrchestrator:
    """Điểm vào duy nhất mà tầng hiển thị phụ thuộc vào.

    Không giữ state giữa các lượt gọi, nên có thể gọi đồng thời nhiều request.
    """

    def __init__(
        self,
        backend: Backend,
        *,
        max_attempts: int = backoff.DEFAULT_MAX_ATTEMPTS,
        base_delay: float = backoff.DEFAULT_BASE_DELAY,
        strict_terms: bool = False,
        glossary_size: int | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        on_retry: Callable[[int, BaseException, float], None] | None = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self.backend = backend
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self.strict_terms = strict_terms
        self.glossary_size = glossary_size
        self._sleep = sleep
        self._on_retry = on_retry

    @classmethod
    def from_config(cls, config: dict, api_key: str | None = None, **kwargs) -> "TranslationOrchestrator":
        """Tạo orchestrator cùng GeminiBackend từ dict cấu hình đã load."""
        backend = GeminiBackend(
            model_name=config["model"],
            temperature=config["temperature"],
            api_key=api_key,
        )
        return cls(
            backend,
            max_attempts=config["max_attempts"],
            base_delay=config["base_delay"],
            strict_terms=config["strict_terms"],
            glossary_size=config["glossary_size"],
            **kwargs,
        )

    async def translate_and_search(self, text: str, direction) -> TranslationResult:
        """Dịch `text` theo `direction` và trả về TranslationResult đã chuẩn hoá.

        Raise InvalidInputError ngay (không retry, không gọi backend) nếu input sai;
        raise TranslationUnavailableError khi đã hết số lần thử.
        """
        # InvalidInputError raise tại đây, trước vòng retry
        bundle = build_prompt(text, direction, glossary_size=self.glossary_size)

        async def attempt() -> TranslationResult:
            raw_text = await self.backend.invoke(bundle.instructions, bundle.output_schema)
            return normalize(raw_text, strict_terms=self.strict_terms, glossary_size=self.glossary_size)

        logger.info("Dịch %s -> %s (%d ký tự)", bundle.source_language, bundle.target_language, len(text.strip()))
        try:
            return await backoff.retry_async(
                attempt,
                max_attempts=self.max_attempts,
                base_delay=self.base_delay,
                retry_on=RETRYABLE_ERRORS,
                sleep=self._sleep,
                on_failure=self._on_retry,
            )
        except RETRYABLE_ERRORS as e:
            logger.error("Không thể dịch sau %d lượt thử: %s", self.max_attempts, e)
            raise TranslationUnavailableError(self.max_attempts, e) from e

    def translate_and_search_sync(self, text: str, direction) -> TranslationResult:
        """Phiên bản đồng bộ cho CLI."""
        return asyncio.run(self.translate_and_search(text, direction))
