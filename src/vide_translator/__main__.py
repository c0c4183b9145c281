import os
import sys
import logging

from rich.console import Console
from dotenv import load_dotenv
from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError

from vide_translator import api, cli, display, i18n
from vide_translator.config import load_config, APP_DIR
from vide_translator.errors import InvalidInputError, TranslationUnavailableError
from vide_translator.models import TranslationDirection
from vide_translator.orchestrator import TranslationOrchestrator

EXIT_COMMANDS = ("exit", "quit")
SWAP_COMMAND = ":swap"


def _setup_logging(verbose: bool = False):
    """Cấu hình logging cho toàn bộ ứng dụng (console + file log)."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
    )
    logging.getLogger('google').setLevel(logging.ERROR)
    logging.getLogger('grpc').setLevel(logging.ERROR)
    logging.getLogger('absl').setLevel(logging.ERROR)

    # Log chi tiết ghi ra file; console chỉ giữ WARNING trở lên (INFO khi --verbose)
    log_dir = os.path.join(APP_DIR, "logs")
    try:
        os.makedirs(log_dir, exist_ok=True)
        root_logger = logging.getLogger()

        file_handler = logging.FileHandler(os.path.join(log_dir, "vide.log"), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s - %(message)s"))
        root_logger.addHandler(file_handler)

        for handler in root_logger.handlers:
            if isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler):
                handler.setLevel(logging.INFO if verbose else logging.WARNING)
    except OSError:
        # Không được để lỗi logging làm hỏng trải nghiệm CLI
        pass


def _apply_overrides(config: dict, args) -> dict:
    """Ghi đè tạm thời config bằng các flag dòng lệnh."""
    overrides = {
        "model": args.model,
        "max_attempts": args.max_attempts,
        "glossary_size": args.glossary_size,
        "language": args.language,
        "default_direction": args.direction,
    }
    merged = {**config, **{k: v for k, v in overrides.items() if v is not None}}
    if args.strict_terms:
        merged["strict_terms"] = True
    return merged


def list_models(console: Console, api_key: str, language: str) -> int:
    """In danh sách model Gemini khả dụng. Trả về exit code."""
    api.configure_api(api_key)
    try:
        with console.status(i18n.tr(language, "models_fetching"), spinner="dots"):
            models = api.get_available_models()
    except (GoogleAPIError, GoogleAuthError, OSError) as e:
        console.print(i18n.tr(language, "error_list_models", error=e))
        return 1
    display.print_models(console, models, language)
    return 0


def translate_once(console: Console, orchestrator: TranslationOrchestrator, text: str,
                   direction: TranslationDirection, language: str, as_json: bool = False) -> int:
    """Dịch một đoạn text và in kết quả. Trả về exit code."""
    source, target = (display.language_label(language, code) for code in (direction.source_code, direction.target_code))
    try:
        with console.status(i18n.tr(language, "status_translating", source=source, target=target), spinner="dots"):
            result = orchestrator.translate_and_search_sync(text, direction)
    except InvalidInputError as e:
        console.print(i18n.tr(language, "error_invalid_input", error=e))
        return 2
    except TranslationUnavailableError as e:
        console.print(i18n.tr(language, "error_unavailable"))
        if e.last_error is not None:
            console.print(i18n.tr(language, "error_unavailable_detail", error=e.last_error))
        return 1

    if as_json:
        display.print_json(console, result)
    else:
        display.print_result(console, result, direction, language)
    return 0


def run_interactive(console: Console, orchestrator: TranslationOrchestrator,
                    direction: TranslationDirection, language: str, as_json: bool = False):
    """Vòng lặp dịch tương tác, hỗ trợ ':swap' để đổi chiều dịch."""
    console.print(i18n.tr(language, "interactive_intro", direction=direction.value))
    while True:
        source = display.language_label(language, direction.source_code)
        try:
            text = console.input(i18n.tr(language, "interactive_prompt", source=source)).strip()
        except (KeyboardInterrupt, EOFError):
            console.print(i18n.tr(language, "interrupted_by_user"))
            break

        if not text:
            continue
        if text.lower() in EXIT_COMMANDS:
            break
        if text.lower() == SWAP_COMMAND:
            direction = direction.opposite()
            console.print(i18n.tr(language, "direction_swapped", direction=direction.value))
            continue

        translate_once(console, orchestrator, text, direction, language, as_json)


def main(argv=None, console: Console | None = None) -> int:
    load_dotenv()
    console = console or Console()
    parser = cli.create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    config = _apply_overrides(load_config(), args)
    language = config.get("language", "vi")

    api_key = api.load_api_key()
    if not api_key:
        console.print(i18n.tr(language, "error_no_api_key"))
        return 1

    if args.list_models:
        return list_models(console, api_key, language)

    def on_retry(attempt: int, error: BaseException, delay: float):
        console.print(i18n.tr(language, "retry_notice", attempt=attempt, delay=delay))

    orchestrator = TranslationOrchestrator.from_config(config, api_key=api_key, on_retry=on_retry)
    direction = TranslationDirection.parse(config["default_direction"])

    text = " ".join(args.text).strip()
    if not text and not sys.stdin.isatty():
        text = sys.stdin.read().strip()

    if text:
        return translate_once(console, orchestrator, text, direction, language, args.json)

    run_interactive(console, orchestrator, direction, language, args.json)
    return 0


if __name__ == "__main__":
    sys.exit(main())
