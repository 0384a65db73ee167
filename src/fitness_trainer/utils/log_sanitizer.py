"""Log sanitization filter to keep credentials and PII out of logs.

Redacts, before a record is emitted:
- JWTs and bearer authorization headers
- bcrypt password hashes
- password / secret / token fields in key=value or JSON form
- email addresses

Usage:
    from fitness_trainer.utils.log_sanitizer import configure_logging

    configure_logging("INFO")  # basicConfig + sanitizer on the root handlers
"""

import logging
import re
from typing import Any


class LogSanitizationFilter(logging.Filter):
    """Logging filter that redacts sensitive information from log messages."""

    # Order matters: JWTs before the generic bearer/token patterns
    PATTERNS: list[tuple[re.Pattern, str]] = [
        (re.compile(r'\beyJ[a-zA-Z0-9_-]+\.eyJ[a-zA-Z0-9_-]+\.[a-zA-Z0-9_-]+'), '[REDACTED_JWT]'),
        (re.compile(r'Bearer\s+[a-zA-Z0-9_\-\.]+', re.IGNORECASE), 'Bearer [REDACTED_TOKEN]'),
        (re.compile(r'\$2[aby]\$\d{2}\$[./A-Za-z0-9]{53}'), '[REDACTED_HASH]'),
        (re.compile(r'((?:password|password_hash|secret|token)["\']?\s*[:=]\s*["\']?)[^"\'&\s,}]+', re.IGNORECASE), r'\1[REDACTED]'),
        (re.compile(r'\b[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}\b'), '[REDACTED_EMAIL]'),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact the record in place. Never drops a record."""
        if record.msg:
            record.msg = self._sanitize(str(record.msg))
        if record.args:
            record.args = self._sanitize_args(record.args)
        return True

    def _sanitize(self, text: str) -> str:
        for pattern, replacement in self.PATTERNS:
            text = pattern.sub(replacement, text)
        return text

    def _sanitize_args(self, args: Any) -> Any:
        # Only strings are rewritten; numbers must survive for %d-style formats
        if isinstance(args, dict):
            return {key: self._sanitize_args(value) for key, value in args.items()}
        if isinstance(args, tuple):
            return tuple(map(self._sanitize_args, args))
        return self._sanitize(args) if isinstance(args, str) else args


def install_log_sanitizer(logger_name: str | None = None) -> LogSanitizationFilter:
    """Install the sanitization filter.

    Args:
        logger_name: If provided, install only on the named logger.
            Otherwise install on the root logger and all of its handlers.

    Returns:
        The installed filter.
    """
    sanitizer = LogSanitizationFilter()

    if logger_name:
        logging.getLogger(logger_name).addFilter(sanitizer)
        return sanitizer

    root_logger = logging.getLogger()
    root_logger.addFilter(sanitizer)
    # Records from child loggers skip the root logger's filters but not its handlers'
    for handler in root_logger.handlers:
        handler.addFilter(sanitizer)
    return sanitizer


def sanitize_string(text: str) -> str:
    """Sanitize a string outside the logging system."""
    return LogSanitizationFilter()._sanitize(text)


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging for the API process or the CLI."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    install_log_sanitizer()
