"""
Các exception của vide-translator.

Chỉ `InvalidInputError` và `TranslationUnavailableError` được phép thoát ra khỏi
orchestrator; hai loại còn lại là lỗi của từng lượt thử và sẽ được retry.
"""


class TranslatorError(Exception):
    """Lớp gốc cho mọi lỗi của vide-translator."""
    pass


class InvalidInputError(TranslatorError, ValueError):
    """Người gọi truyền text rỗng, quá dài hoặc hướng dịch không hợp lệ. Không retry."""
    pass


class BackendRequestError(TranslatorError):
    """Lỗi mạng, lỗi phía Gemini hoặc payload rỗng trong một lượt gọi."""
    pass


class MalformedResponseError(TranslatorError):
    """Payload trả về không parse được thành cấu trúc tối thiểu."""
    pass


class TranslationUnavailableError(TranslatorError):
    """Đã dùng hết số lần thử mà vẫn không có kết quả."""

    def __init__(self, attempts: int, last_error: Exception | None = None):
        self.attempts = attempts
        self.last_error = last_error
        message = f"Translation unavailable after {attempts} attempt(s)"
        if last_error is not None:
            message += f": {last_error}"
        super().__init__(message)
