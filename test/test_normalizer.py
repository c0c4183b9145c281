import json

import pytest

from vide_translator import normalizer
from vide_translator.errors import MalformedResponseError
from vide_translator.models import RelatedTerm


def test_normalize_well_formed_payload():
    """Payload chuẩn được giữ nguyên các field và danh sách thuật ngữ."""
    raw = json.dumps({
        "translatedText": "Hallo",
        "explanation": "note",
        "relatedTerms": [{"term": "das Haus", "meaning": "nhà"}],
    })

    result = normalizer.normalize(raw)

    assert result.translated_text == "Hallo"
    assert result.explanation == "note"
    assert result.related_terms == [RelatedTerm(term="das Haus", meaning="nhà")]
    assert result.main_part_of_speech is None


def test_normalize_missing_related_terms_gives_empty_list():
    result = normalizer.normalize('{"translatedText": "Hallo"}')

    assert result.related_terms == []
    assert result.explanation is None


@pytest.mark.parametrize("raw", ["", "   ", None])
def test_normalize_empty_payload_fails(raw):
    with pytest.raises(MalformedResponseError):
        normalizer.normalize(raw)


@pytest.mark.parametrize("raw", [
    "not json",
    "[1, 2, 3]",
    '{"explanation": "no translation"}',
    '{"translatedText": "   "}',
    '{"translatedText": 42}',
])
def test_normalize_rejects_malformed_payloads(raw):
    with pytest.raises(MalformedResponseError):
        normalizer.normalize(raw)


def test_normalize_ignores_extra_fields_and_bad_entries():
    """Field lạ bị bỏ qua; entry không có term bị bỏ, thiếu meaning thì thành chuỗi rỗng."""
    raw = json.dumps({
        "translatedText": "Hallo",
        "mainPartOfSpeech": "Thán từ",
        "groundingChunks": [],
        "relatedTerms": [
            {"term": "das Haus", "meaning": "nhà", "partOfSpeech": "Danh từ", "gender": "n"},
            {"term": "grüßen"},
            {"meaning": "no term"},
            "garbage",
        ],
    })

    result = normalizer.normalize(raw)

    assert result.main_part_of_speech == "Thán từ"
    assert [t.term for t in result.related_terms] == ["das Haus", "grüßen"]
    assert result.related_terms[0].part_of_speech == "Danh từ"
    assert result.related_terms[1].meaning == ""


def test_normalize_strips_markdown_code_fence():
    raw = '```json\n{"translatedText": "Hallo"}\n```'
    assert normalizer.normalize(raw).translated_text == "Hallo"


def test_extract_marked_terms_keeps_order_and_dedupes():
    text = "Dùng **das Haus** hoặc **die Wohnung**; **das Haus** trang trọng hơn."
    assert normalizer.extract_marked_terms(text) == ["das Haus", "die Wohnung"]
    assert normalizer.extract_marked_terms(None) == []


def test_check_term_consistency_reports_missing_extra_and_duplicates():
    raw = json.dumps({
        "translatedText": "Hallo",
        "explanation": "**das Haus** và **die Wohnung**",
        "relatedTerms": [
            {"term": "das Haus", "meaning": "nhà"},
            {"term": "das Haus", "meaning": "nhà"},
            {"term": "der Garten", "meaning": "vườn"},
        ],
    })
    result = normalizer.normalize(raw)

    report = normalizer.check_term_consistency(result)

    assert not report.is_consistent
    assert report.missing == ["die Wohnung"]
    assert report.extra == ["der Garten"]
    assert report.duplicates == ["das Haus"]
    # Không tự ý loại bỏ thuật ngữ
    assert len(result.related_terms) == 3


def test_strict_mode_rejects_inconsistent_terms():
    raw = json.dumps({
        "translatedText": "Hallo",
        "explanation": "**das Haus**",
        "relatedTerms": [{"term": "der Garten", "meaning": "vườn"}],
    })

    with pytest.raises(MalformedResponseError):
        normalizer.normalize(raw, strict_terms=True)


def test_strict_mode_accepts_consistent_terms():
    raw = json.dumps({
        "translatedText": "Hallo",
        "explanation": "**das Haus** là nhà.",
        "relatedTerms": [{"term": "das Haus", "meaning": "nhà"}],
    })

    result = normalizer.normalize(raw, strict_terms=True)
    assert normalizer.check_term_consistency(result).is_consistent


def test_fixed_glossary_size_checked_in_strict_mode():
    terms = [{"term": f"das Wort{i}", "meaning": "từ"} for i in range(9)]
    raw = json.dumps({"translatedText": "Hallo", "relatedTerms": terms})

    assert len(normalizer.normalize(raw, glossary_size=10).related_terms) == 9
    with pytest.raises(MalformedResponseError):
        normalizer.normalize(raw, strict_terms=True, glossary_size=10)


def test_terms_without_explanation_are_reported_as_extra():
    """Không có explanation nhưng có relatedTerms: mọi thuật ngữ đều là thừa."""
    raw = json.dumps({
        "translatedText": "Hallo",
        "relatedTerms": [{"term": "das Auto", "meaning": "xe"}],
    })

    result = normalizer.normalize(raw)
    report = normalizer.check_term_consistency(result)

    assert report.extra == ["das Auto"]
    assert not report.is_consistent
    with pytest.raises(MalformedResponseError):
        normalizer.normalize(raw, strict_terms=True)


def test_inconsistent_terms_are_logged(caplog):
    raw = json.dumps({
        "translatedText": "Hallo",
        "relatedTerms": [{"term": "das Auto", "meaning": "xe"}],
    })

    with caplog.at_level("WARNING", logger="vide_translator.normalizer"):
        normalizer.normalize(raw)

    assert "das Auto" in caplog.text
