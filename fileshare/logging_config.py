# Filename: fileshare/logging_config.py
"""Logging setup and the per-request access log."""
import logging
import logging.config
import time

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .config import settings

access_logger = logging.getLogger("fileshare.access")


def setup_logging() -> None:
    log_path = settings.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)

    logging_config = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": {
            "default": {
                "level": settings.log_level,
                "class": "logging.StreamHandler",
                "formatter": "standard",
            },
            "file": {
                "level": settings.log_level,
                "class": "logging.FileHandler",
                "formatter": "standard",
                "filename": str(log_path),
                "encoding": "utf-8",
                "delay": True,
            },
        },
        "loggers": {
            "fileshare": {
                "handlers": ["default", "file"],
                "level": settings.log_level,
                "propagate": False,
            },
            "uvicorn.error": {
                "handlers": ["default", "file"],
                "level": settings.log_level,
                "propagate": False,
            },
        },
        "root": {
            "handlers": ["default"],
            "level": settings.log_level,
        },
    }
    logging.config.dictConfig(logging_config)


class AccessLogMiddleware:
    """One line per HTTP request: client, status, latency, method and path."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        start = time.perf_counter()
        status_code = 500

        async def send_wrapper(message: Message) -> None:
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message["status"]
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            latency_ms = (time.perf_counter() - start) * 1000
            client = scope.get("client")
            client_ip = client[0] if client else "-"
            path = scope.get("path", "")
            query = scope.get("query_string", b"").decode("latin-1")
            if query:
                path = f"{path}?{query}"
            access_logger.info(
                "%s | %d | %.2fms | %s %s",
                client_ip,
                status_code,
                latency_ms,
                scope.get("method", ""),
                path,
            )
