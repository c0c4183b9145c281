"""
Hiển thị TranslationResult ra terminal bằng rich.
"""
import json
from urllib.parse import quote

from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vide_translator import i18n
from vide_translator.models import TranslationDirection, TranslationResult

IMAGE_SEARCH_URL = "https://www.google.com/search?tbm=isch&q={query}"


def image_search_url(term: str) -> str:
    """Link Google Images cho một thuật ngữ."""
    return IMAGE_SEARCH_URL.format(query=quote(term, safe=""))


def language_label(language: str, code: str) -> str:
    return i18n.tr(language, f"lang_{code}")


def build_glossary_table(result: TranslationResult, language: str = "vi") -> Table:
    table = Table(title=i18n.tr(language, "glossary_title"))
    table.add_column(i18n.tr(language, "glossary_column_index"), style="dim", no_wrap=True)
    table.add_column(i18n.tr(language, "glossary_column_term"), style="bold cyan")
    table.add_column(i18n.tr(language, "glossary_column_pos"), style="magenta")
    table.add_column(i18n.tr(language, "glossary_column_meaning"), style="green")
    table.add_column(i18n.tr(language, "glossary_column_images"), no_wrap=True)

    for index, item in enumerate(result.related_terms, 1):
        url = image_search_url(item.term)
        table.add_row(
            str(index),
            escape(item.term),
            escape(item.part_of_speech or ""),
            escape(item.meaning),
            f"[link={url}]🔍[/link]",
        )
    return table


def print_result(console: Console, result: TranslationResult, direction: TranslationDirection,
                 language: str = "vi"):
    """In bản dịch, ghi chú và bảng từ vựng."""
    target = language_label(language, direction.target_code)
    title = f"{i18n.tr(language, 'panel_translation')} · {target}"
    console.print(Panel(
        escape(result.translated_text),
        title=f"[bold blue]{title}[/bold blue]",
        subtitle=escape(result.main_part_of_speech) if result.main_part_of_speech else None,
        border_style="blue",
    ))

    if result.explanation:
        console.print(Panel(
            Markdown(result.explanation),
            title=f"[bold magenta]{i18n.tr(language, 'panel_explanation')}[/bold magenta]",
            border_style="magenta",
        ))

    if result.related_terms:
        console.print(build_glossary_table(result, language))
    else:
        console.print(i18n.tr(language, "glossary_empty"))


def print_json(console: Console, result: TranslationResult):
    console.print(json.dumps(result.to_payload(), indent=2, ensure_ascii=False), markup=False, highlight=False, soft_wrap=True)


def print_models(console: Console, models: list[str], language: str = "vi"):
    """In bảng các model hỗ trợ generateContent."""
    table = Table(title=i18n.tr(language, "models_table_title"))
    table.add_column(i18n.tr(language, "glossary_column_index"), style="dim", no_wrap=True)
    table.add_column(i18n.tr(language, "models_column_name"), style="cyan", no_wrap=True)
    for index, name in enumerate(models, 1):
        table.add_row(str(index), escape(name))
    console.print(table)
