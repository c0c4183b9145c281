from typing import Dict

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "vi": {
        "error_no_api_key": "[bold red]Lỗi: Vui lòng thiết lập GOOGLE_API_KEY trong file .env[/bold red]",
        "error_invalid_input": "[bold red]Lỗi: {error}[/bold red]",
        "error_unavailable": "[bold red]Dịch vụ đang bận hoặc không thể kết nối. Vui lòng thử lại sau.[/bold red]",
        "error_unavailable_detail": "[dim]Lỗi cuối cùng: {error}[/dim]",
        "retry_notice": "[yellow]⚠️ Lượt thử {attempt} thất bại. Thử lại sau {delay:.1f}s...[/yellow]",
        "status_translating": "[bold green]Đang dịch {source} → {target}...[/bold green]",
        "interactive_intro": "[bold green]Chế độ dịch tương tác ({direction}). Gõ ':swap' để đổi chiều, 'exit' hoặc 'quit' để thoát.[/bold green]",
        "interactive_prompt": "\n[bold cyan]{source}:[/bold cyan] ",
        "direction_swapped": "[green]Đã đổi chiều dịch: {direction}[/green]",
        "interrupted_by_user": "\n[yellow]Đã dừng bởi người dùng.[/yellow]",
        "panel_translation": "Bản dịch",
        "panel_explanation": "Ghi chú ngôn ngữ & văn hoá",
        "glossary_title": "📚 Từ vựng liên quan",
        "glossary_column_index": "#",
        "glossary_column_term": "Thuật ngữ",
        "glossary_column_pos": "Từ loại",
        "glossary_column_meaning": "Nghĩa",
        "glossary_column_images": "Hình ảnh",
        "glossary_empty": "[dim]Không có từ vựng liên quan.[/dim]",
        "models_fetching": "[bold green]Đang lấy danh sách các model khả dụng...[/bold green]",
        "models_table_title": "✨ Danh sách Models Khả Dụng ✨",
        "models_column_name": "Model Name",
        "error_list_models": "[bold red]Lỗi khi lấy danh sách model: {error}[/bold red]",
        "lang_vi": "Tiếng Việt",
        "lang_de": "Tiếng Đức",
    },
    "en": {
        "error_no_api_key": "[bold red]Error: Please set GOOGLE_API_KEY in your .env file[/bold red]",
        "error_invalid_input": "[bold red]Error: {error}[/bold red]",
        "error_unavailable": "[bold red]The service is busy or unreachable. Please try again later.[/bold red]",
        "error_unavailable_detail": "[dim]Last error: {error}[/dim]",
        "retry_notice": "[yellow]⚠️ Attempt {attempt} failed. Retrying in {delay:.1f}s...[/yellow]",
        "status_translating": "[bold green]Translating {source} → {target}...[/bold green]",
        "interactive_intro": "[bold green]Interactive translation mode ({direction}). Type ':swap' to flip direction, 'exit' or 'quit' to leave.[/bold green]",
        "interactive_prompt": "\n[bold cyan]{source}:[/bold cyan] ",
        "direction_swapped": "[green]Direction switched: {direction}[/green]",
        "interrupted_by_user": "\n[yellow]Stopped by user.[/yellow]",
        "panel_translation": "Translation",
        "panel_explanation": "Linguistic & cultural note",
        "glossary_title": "📚 Related terms",
        "glossary_column_index": "#",
        "glossary_column_term": "Term",
        "glossary_column_pos": "Part of speech",
        "glossary_column_meaning": "Meaning",
        "glossary_column_images": "Images",
        "glossary_empty": "[dim]No related terms.[/dim]",
        "models_fetching": "[bold green]Fetching available models...[/bold green]",
        "models_table_title": "✨ Available Models ✨",
        "models_column_name": "Model Name",
        "error_list_models": "[bold red]Error while fetching models: {error}[/bold red]",
        "lang_vi": "Vietnamese",
        "lang_de": "German",
    },
}


def tr(language: str, key: str, **kwargs) -> str:
    """Dịch key theo ngôn ngữ, fallback sang tiếng Việt nếu thiếu.

    language: mã ngôn ngữ, ví dụ "vi" hoặc "en".
    key: khóa thông điệp.
    kwargs: tham số format chuỗi (ví dụ {error}).
    """
    lang = language if language in TRANSLATIONS else "vi"
    template = TRANSLATIONS.get(lang, {}).get(key) or TRANSLATIONS["vi"].get(key) or key
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError, ValueError):
        # Thiếu kwargs thì trả nguyên template để không làm vỡ flow.
        return template
