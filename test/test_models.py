import pytest

from vide_translator.errors import InvalidInputError
from vide_translator.models import (
    MAX_INPUT_CHARS,
    RelatedTerm,
    TranslationDirection,
    TranslationRequest,
    TranslationResult,
)


def test_direction_languages_are_symmetric():
    """Hai chiều dịch cho cặp ngôn ngữ đảo ngược của nhau."""
    for direction in TranslationDirection:
        source, target = direction.languages
        assert direction.opposite().languages == (target, source)
        assert direction.opposite().opposite() is direction


def test_direction_parse_accepts_strings_and_enum():
    assert TranslationDirection.parse("vi-de") is TranslationDirection.VI_DE
    assert TranslationDirection.parse(" DE-VI ") is TranslationDirection.DE_VI
    assert TranslationDirection.parse(TranslationDirection.VI_DE) is TranslationDirection.VI_DE


def test_direction_parse_rejects_unknown_value():
    with pytest.raises(InvalidInputError):
        TranslationDirection.parse("en-de")


def test_request_trims_text():
    request = TranslationRequest.create("  Xin chào  ", "vi-de")
    assert request.text == "Xin chào"
    assert request.direction is TranslationDirection.VI_DE


@pytest.mark.parametrize("text", ["", "   ", "\n\t ", None])
def test_request_rejects_blank_text(text):
    with pytest.raises(InvalidInputError):
        TranslationRequest.create(text, "vi-de")


def test_request_rejects_too_long_text():
    with pytest.raises(InvalidInputError):
        TranslationRequest.create("a" * (MAX_INPUT_CHARS + 1), "vi-de")
    assert TranslationRequest.create("a" * MAX_INPUT_CHARS, "vi-de").text


def test_result_accepts_camel_case_and_dumps_it_back():
    """TranslationResult đọc/ghi được dạng camelCase của Gemini."""
    result = TranslationResult.model_validate({
        "translatedText": "Hallo",
        "relatedTerms": [{"term": "das Haus", "meaning": "nhà", "partOfSpeech": "Danh từ"}],
        "unknownField": 1,
    })

    assert result.translated_text == "Hallo"
    assert result.related_terms == [RelatedTerm(term="das Haus", meaning="nhà", part_of_speech="Danh từ")]
    assert result.to_payload() == {
        "translatedText": "Hallo",
        "relatedTerms": [{"term": "das Haus", "meaning": "nhà", "partOfSpeech": "Danh từ"}],
    }
