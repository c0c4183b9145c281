"""
Mô hình dữ liệu cho một lượt dịch: hướng dịch, request, thuật ngữ liên quan và kết quả.

Các model dùng alias camelCase để khớp với schema JSON mà Gemini trả về.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from vide_translator.errors import InvalidInputError

MAX_INPUT_CHARS = 1000

LANGUAGE_NAMES = {
    "vi": "Vietnamese",
    "de": "German",
}


class TranslationDirection(str, Enum):
    VI_DE = "vi-de"
    DE_VI = "de-vi"

    @property
    def source_code(self) -> str:
        return self.value.split("-")[0]

    @property
    def target_code(self) -> str:
        return self.value.split("-")[1]

    @property
    def languages(self) -> tuple[str, str]:
        """Cặp (ngôn ngữ nguồn, ngôn ngữ đích) theo tên tiếng Anh."""
        return LANGUAGE_NAMES[self.source_code], LANGUAGE_NAMES[self.target_code]

    def opposite(self) -> "TranslationDirection":
        return TranslationDirection.DE_VI if self is TranslationDirection.VI_DE else TranslationDirection.VI_DE

    @classmethod
    def parse(cls, value) -> "TranslationDirection":
        """Chuyển chuỗi 'vi-de'/'de-vi' (hoặc enum sẵn có) thành TranslationDirection."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            raise InvalidInputError(f"Unknown translation direction: {value!r}") from e


class TranslationRequest(BaseModel):
    text: str
    direction: TranslationDirection

    @classmethod
    def create(cls, text, direction) -> "TranslationRequest":
        """Kiểm tra input của người dùng và dựng request. Text được trim hai đầu."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidInputError("Text to translate must not be empty.")
        cleaned = text.strip()
        if len(cleaned) > MAX_INPUT_CHARS:
            raise InvalidInputError(
                f"Text is too long ({len(cleaned)} characters, max {MAX_INPUT_CHARS})."
            )
        return cls(text=cleaned, direction=TranslationDirection.parse(direction))


class RelatedTerm(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Danh từ tiếng Đức phải kèm mạo từ, ví dụ "das Haus"
    term: str
    meaning: str = ""
    part_of_speech: str | None = Field(default=None, alias="partOfSpeech")


class TranslationResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    translated_text: str = Field(alias="translatedText")
    explanation: str | None = None
    related_terms: list[RelatedTerm] = Field(default_factory=list, alias="relatedTerms")
    main_part_of_speech: str | None = Field(default=None, alias="mainPartOfSpeech")

    def to_payload(self) -> dict:
        """Xuất lại dạng dict camelCase, bỏ các field optional đang trống."""
        return self.model_dump(by_alias=True, exclude_none=True)
