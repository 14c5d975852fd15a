# pantryscan/log.py
import logging
import time

from fastapi import Request

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

http_logger = logging.getLogger("pantryscan.http")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once; later calls are no-ops."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


async def log_requests_middleware(request: Request, call_next):
    """One line per request: method, path, status and wall time."""
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000
    http_logger.info(
        "%s %s -> %s (%.1f ms)",
        request.method, request.url.path, response.status_code, elapsed_ms,
    )
    return response
