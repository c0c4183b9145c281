"""
Parse và chuẩn hoá payload JSON từ Gemini thành TranslationResult.

Ngoài việc kiểm tra cấu trúc tối thiểu, module còn đối chiếu các thuật ngữ
tiếng Đức được đánh dấu **...** trong phần giải thích với danh sách relatedTerms.
"""
import json
import logging
import re
from typing import NamedTuple

from pydantic import ValidationError

from vide_translator.errors import MalformedResponseError
from vide_translator.models import RelatedTerm, TranslationResult

logger = logging.getLogger(__name__)

_MARKED_TERM_RE = re.compile(r"\*\*(.+?)\*\*", re.DOTALL)
_CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL | re.IGNORECASE)


class TermConsistencyReport(NamedTuple):
    # Có trong explanation nhưng thiếu trong relatedTerms
    missing: list[str]
    # Có trong relatedTerms nhưng explanation không nhắc tới
    extra: list[str]
    duplicates: list[str]

    @property
    def is_consistent(self) -> bool:
        return not (self.missing or self.extra or self.duplicates)


def extract_marked_terms(explanation: str | None) -> list[str]:
    """Lấy các thuật ngữ được bọc trong **...**, giữ thứ tự, bỏ trùng."""
    if not explanation:
        return []
    seen = []
    for match in _MARKED_TERM_RE.findall(explanation):
        term = match.strip()
        if term and term not in seen:
            seen.append(term)
    return seen


def check_term_consistency(result: TranslationResult) -> TermConsistencyReport:
    """Đối chiếu explanation với relatedTerms (so khớp nguyên văn sau khi trim)."""
    marked = extract_marked_terms(result.explanation)
    listed = [t.term.strip() for t in result.related_terms]

    duplicates = []
    for term in listed:
        if listed.count(term) > 1 and term not in duplicates:
            duplicates.append(term)

    missing = [t for t in marked if t not in listed]
    extra = []
    for term in listed:
        if term not in marked and term not in extra:
            extra.append(term)

    return TermConsistencyReport(missing=missing, extra=extra, duplicates=duplicates)


def _strip_code_fence(raw_text: str) -> str:
    text = raw_text.strip()
    match = _CODE_FENCE_RE.match(text)
    return match.group(1) if match else text


def _coerce_optional_str(value) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _coerce_terms(raw_terms) -> list[RelatedTerm]:
    if not isinstance(raw_terms, list):
        return []

    terms = []
    for index, item in enumerate(raw_terms):
        if not isinstance(item, dict) or not isinstance(item.get("term"), str) or not item["term"].strip():
            logger.warning("Bỏ qua relatedTerms[%d] không hợp lệ: %r", index, item)
            continue
        meaning = item.get("meaning")
        terms.append(RelatedTerm(
            term=item["term"].strip(),
            meaning=meaning.strip() if isinstance(meaning, str) else "",
            part_of_speech=_coerce_optional_str(item.get("partOfSpeech")),
        ))
    return terms


def normalize(raw_text: str, *, strict_terms: bool = False, glossary_size: int | None = None) -> TranslationResult:
    """Chuyển payload thô thành TranslationResult.

    - Raise MalformedResponseError nếu payload rỗng, không phải JSON object
      hoặc thiếu translatedText.
    - Field optional vắng mặt: explanation -> None, relatedTerms -> [].
    - Thuật ngữ vi phạm quy tắc nhất quán không bị loại bỏ; chỉ ghi cảnh báo,
      hoặc raise MalformedResponseError khi strict_terms=True.
    """
    if not raw_text or not raw_text.strip():
        raise MalformedResponseError("Empty response payload.")

    try:
        data = json.loads(_strip_code_fence(raw_text))
    except json.JSONDecodeError as e:
        raise MalformedResponseError(f"Response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}.")

    translated = data.get("translatedText")
    if not isinstance(translated, str) or not translated.strip():
        raise MalformedResponseError("Response has no translatedText.")

    try:
        result = TranslationResult(
            translated_text=translated.strip(),
            explanation=_coerce_optional_str(data.get("explanation")),
            related_terms=_coerce_terms(data.get("relatedTerms")),
            main_part_of_speech=_coerce_optional_str(data.get("mainPartOfSpeech")),
        )
    except ValidationError as e:
        raise MalformedResponseError(f"Response does not match the schema: {e}") from e

    if glossary_size is not None:
        if len(result.related_terms) != glossary_size:
            logger.warning("Glossary có %d thuật ngữ, yêu cầu %d.", len(result.related_terms), glossary_size)
            if strict_terms:
                raise MalformedResponseError(
                    f"Expected exactly {glossary_size} related terms, got {len(result.related_terms)}."
                )
        return result

    # Không có explanation thì mọi thuật ngữ trong danh sách đều bị coi là thừa
    report = check_term_consistency(result)
    if not report.is_consistent:
        logger.warning(
            "Explanation và relatedTerms không khớp (thiếu=%s, thừa=%s, trùng=%s)",
            report.missing, report.extra, report.duplicates,
        )
        if strict_terms:
            raise MalformedResponseError(
                "Related terms do not match the terms mentioned in the explanation."
            )

    return result
