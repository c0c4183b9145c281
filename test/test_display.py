import json

from rich.console import Console

from vide_translator import display
from vide_translator.models import RelatedTerm, TranslationDirection, TranslationResult


def _result(**kwargs):
    data = dict(
        translated_text="Hallo",
        explanation="Dùng **das Haus** khi nói về ngôi nhà.",
        related_terms=[RelatedTerm(term="das Haus", meaning="ngôi nhà", part_of_speech="Danh từ")],
        main_part_of_speech="Thán từ",
    )
    data.update(kwargs)
    return TranslationResult(**data)


def test_image_search_url_encodes_term():
    assert display.image_search_url("das Haus") == "https://www.google.com/search?tbm=isch&q=das%20Haus"
    assert display.image_search_url("die Küche/Bad").endswith("die%20K%C3%BCche%2FBad")


def test_print_result_renders_all_sections():
    console = Console(record=True, width=120)

    display.print_result(console, _result(), TranslationDirection.VI_DE, "vi")

    output = console.export_text()
    assert "Hallo" in output
    assert "Tiếng Đức" in output
    assert "Thán từ" in output
    assert "das Haus" in output
    assert "ngôi nhà" in output
    assert "Từ vựng liên quan" in output


def test_print_result_without_terms_or_explanation():
    console = Console(record=True, width=120)

    display.print_result(console, _result(explanation=None, related_terms=[]), TranslationDirection.DE_VI, "en")

    output = console.export_text()
    assert "Vietnamese" in output
    assert "No related terms." in output
    assert "Linguistic" not in output


def test_glossary_table_escapes_markup():
    result = _result(related_terms=[RelatedTerm(term="[bold]der Test[/bold]", meaning="bài kiểm tra")])
    console = Console(record=True, width=120)

    console.print(display.build_glossary_table(result, "vi"))

    assert "[bold]der Test[/bold]" in console.export_text()


def test_print_json_outputs_camel_case_payload():
    console = Console(record=True, width=200)

    display.print_json(console, _result())

    payload = json.loads(console.export_text())
    assert payload["translatedText"] == "Hallo"
    assert payload["relatedTerms"][0]["partOfSpeech"] == "Danh từ"


def test_print_models_lists_names():
    console = Console(record=True, width=120)

    display.print_models(console, ["models/gemini-flash-latest", "models/gemini-pro-latest"], "en")

    output = console.export_text()
    assert "Available Models" in output
    assert "models/gemini-flash-latest" in output
    assert "models/gemini-pro-latest" in output
