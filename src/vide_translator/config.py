import os
import json
from pathlib import Path

APP_DIR = Path(os.getenv("VIDE_HOME") or (Path.home() / ".vide-translator"))
CONFIG_PATH = APP_DIR / "config.json"

SUPPORTED_LANGUAGES = ("vi", "en")
SUPPORTED_DIRECTIONS = ("vi-de", "de-vi")

DEFAULTS = {
    "model": "models/gemini-flash-latest",
    # Nhiệt độ thấp để bản dịch và glossary ổn định giữa các lần gọi
    "temperature": 0.2,
    "max_attempts": 3,
    "base_delay": 1.0,
    # None = số thuật ngữ theo nội dung phần giải thích; số nguyên = cố định N thuật ngữ
    "glossary_size": None,
    "strict_terms": False,
    "default_direction": "vi-de",
    "language": "vi",
}


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def load_config() -> dict:
    """Tải cấu hình từ file config.json, merge với giá trị mặc định."""
    config_data = {}
    config_exists = CONFIG_PATH.exists()

    if config_exists:
        with open(CONFIG_PATH, 'r', encoding='utf-8') as f:
            try:
                config_data = json.load(f)
            except json.JSONDecodeError:
                # File hỏng: giữ nguyên để người dùng tự sửa, runtime chỉ dùng defaults.
                pass
        if not isinstance(config_data, dict):
            config_data = {}

    final_config = {**DEFAULTS, **config_data}

    if final_config.get("language") not in SUPPORTED_LANGUAGES:
        final_config["language"] = DEFAULTS["language"]
    if final_config.get("default_direction") not in SUPPORTED_DIRECTIONS:
        final_config["default_direction"] = DEFAULTS["default_direction"]

    # Giá trị số sai kiểu hoặc ngoài miền hợp lệ thì dùng lại giá trị mặc định
    if not _is_positive_int(final_config.get("max_attempts")):
        final_config["max_attempts"] = DEFAULTS["max_attempts"]
    glossary_size = final_config.get("glossary_size")
    if glossary_size is not None and not _is_positive_int(glossary_size):
        final_config["glossary_size"] = DEFAULTS["glossary_size"]
    if not _is_number(final_config.get("base_delay")) or final_config["base_delay"] < 0:
        final_config["base_delay"] = DEFAULTS["base_delay"]
    if not _is_number(final_config.get("temperature")) or final_config["temperature"] < 0:
        final_config["temperature"] = DEFAULTS["temperature"]
    if not isinstance(final_config.get("strict_terms"), bool):
        final_config["strict_terms"] = DEFAULTS["strict_terms"]
    if not isinstance(final_config.get("model"), str) or not final_config["model"].strip():
        final_config["model"] = DEFAULTS["model"]

    if not config_exists:
        try:
            save_config(final_config)
        except OSError:
            # Không để lỗi ghi file làm hỏng quá trình khởi động CLI.
            pass

    return final_config


def save_config(config: dict):
    """Lưu cấu hình vào file config.json."""
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    with open(CONFIG_PATH, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2, ensure_ascii=False)
