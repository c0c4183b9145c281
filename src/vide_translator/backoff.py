"""
Chính sách retry với exponential backoff cho các lệnh gọi bất đồng bộ.

Một thao tác được thử tối đa `max_attempts` lần. Giữa hai lượt thử liên tiếp
sẽ chờ `base_delay * 2**attempt_index` giây; lượt thử cuối cùng nếu lỗi thì
raise ngay, không chờ thêm.
"""
import asyncio
import logging
import random
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_BASE_DELAY = 1.0


def compute_delay(attempt_index: int, base_delay: float, jitter: float = 0.0) -> float:
    """Tính thời gian chờ (giây) sau lượt thử thứ `attempt_index` (đếm từ 0)."""
    if attempt_index < 0:
        raise ValueError("attempt_index must be >= 0")
    delay = base_delay * (2 ** attempt_index)
    if jitter > 0:
        delay += random.uniform(0, jitter)
    return delay


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    *,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    base_delay: float = DEFAULT_BASE_DELAY,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    on_failure: Callable[[int, BaseException, float], None] | None = None,
    jitter: float = 0.0,
) -> T:
    """Chạy `operation` với cơ chế retry.

    - Lỗi nằm trong `retry_on` được coi là tạm thời: ghi log, gọi `on_failure`
      (nếu có) rồi `sleep` trước lượt thử kế tiếp.
    - Lỗi ở lượt thử cuối được raise lại nguyên vẹn, không có delay thừa.
    - Lỗi không nằm trong `retry_on` được raise ngay lập tức.
    - Huỷ (cancel) task trong lúc đang sleep sẽ dừng toàn bộ vòng lặp.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be >= 1")

    for attempt_index in range(max_attempts):
        try:
            return await operation()
        except retry_on as e:
            attempt_number = attempt_index + 1
            if attempt_number >= max_attempts:
                logger.warning("Lượt thử %d/%d thất bại, hết số lần thử: %s", attempt_number, max_attempts, e)
                raise

            delay = compute_delay(attempt_index, base_delay, jitter)
            logger.warning(
                "Lượt thử %d/%d thất bại (%s). Thử lại sau %.1fs...",
                attempt_number, max_attempts, e, delay,
            )
            if on_failure is not None:
                on_failure(attempt_number, e, delay)
            await sleep(delay)

    # Không thể tới đây vì vòng lặp luôn return hoặc raise
    raise RuntimeError("retry_async exited without result")
