"""
Xây dựng prompt và schema đầu ra cho một lượt dịch Việt <-> Đức.
"""
from typing import NamedTuple

from vide_translator.models import TranslationDirection, TranslationRequest

EXPLANATORY_LANGUAGE = "Vietnamese"
GLOSSARY_LANGUAGE = "German"


class PromptBundle(NamedTuple):
    instructions: str
    output_schema: dict
    source_language: str
    target_language: str


def resolve_languages(direction) -> tuple[str, str]:
    """Trả về (ngôn ngữ nguồn, ngôn ngữ đích) cho một hướng dịch."""
    return TranslationDirection.parse(direction).languages


def build_output_schema(glossary_size: int | None = None) -> dict:
    """Schema JSON (định dạng OpenAPI-subset của Gemini) mà response bắt buộc phải khớp."""
    term_item = {
        "type": "OBJECT",
        "properties": {
            "term": {"type": "STRING", "description": "German word or phrase WITH article for nouns"},
            "meaning": {"type": "STRING", "description": "Vietnamese meaning"},
            "partOfSpeech": {"type": "STRING", "description": "Part of speech, in Vietnamese"},
        },
        "required": ["term", "meaning"],
    }
    related_terms = {
        "type": "ARRAY",
        "description": "German terms mentioned in the explanation",
        "items": term_item,
    }
    if glossary_size is not None:
        related_terms["min_items"] = glossary_size
        related_terms["max_items"] = glossary_size

    return {
        "type": "OBJECT",
        "properties": {
            "translatedText": {"type": "STRING"},
            "mainPartOfSpeech": {"type": "STRING", "description": "Part of speech of the translation, in Vietnamese"},
            "explanation": {"type": "STRING", "description": "Linguistic and cultural notes, in Vietnamese"},
            "relatedTerms": related_terms,
        },
        "required": ["translatedText", "relatedTerms"],
    }


def _glossary_task(glossary_size: int | None) -> str:
    if glossary_size is not None:
        return f"""
TASK 3: Provide EXACTLY {glossary_size} related {GLOSSARY_LANGUAGE} words/phrases in "relatedTerms".
- RULE: All {GLOSSARY_LANGUAGE} nouns MUST include their article (der/die/das).
- Provide the {EXPLANATORY_LANGUAGE} meaning and the part of speech (in {EXPLANATORY_LANGUAGE}) for each.
- Format as a list of {glossary_size} items.
"""
    return f"""
TASK 3: List in "relatedTerms" EVERY {GLOSSARY_LANGUAGE} word or phrase that appears in your explanation.
- RULE: All {GLOSSARY_LANGUAGE} nouns MUST include their article (der/die/das).
- Inside the explanation, wrap every {GLOSSARY_LANGUAGE} term in double asterisks, e.g. **das Haus**,
  spelled EXACTLY as in "relatedTerms".
- CONSISTENCY RULE: the number and the content of "relatedTerms" MUST match the marked terms of the
  explanation. Each marked term appears once in the list; the list contains no term that the
  explanation does not mention. Do not pad or truncate the list.
- Provide the {EXPLANATORY_LANGUAGE} meaning and the part of speech (in {EXPLANATORY_LANGUAGE}) for each.
"""


def build_prompt(text: str, direction, glossary_size: int | None = None) -> PromptBundle:
    """Dựng instructions + output schema cho một request.

    Raise InvalidInputError nếu text rỗng/quá dài hoặc direction không hợp lệ.
    """
    request = TranslationRequest.create(text, direction)
    source_lang, target_lang = request.direction.languages

    instructions = f"""
You are a Vietnamese-German language and culture expert.

TASK 1: Translate this text from {source_lang} to {target_lang}: "{request.text}"
Put the translation in "translatedText" and its part of speech (in {EXPLANATORY_LANGUAGE}) in "mainPartOfSpeech".

TASK 2: Write a brief "Linguistic & Cultural Note" in {EXPLANATORY_LANGUAGE} in "explanation",
whatever the translation direction is.
It should cover grammar, interesting idioms, cultural context, regional differences or usage nuances
of the {target_lang} rendering.
{_glossary_task(glossary_size)}"""

    return PromptBundle(
        instructions=instructions,
        output_schema=build_output_schema(glossary_size),
        source_language=source_lang,
        target_language=target_lang,
    )
