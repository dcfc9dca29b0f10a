"""
Logging module with sanitization for sensitive data.
Provides secure logging that masks API keys and other secrets.
"""

import logging
import re
from typing import Optional

from resource_finder.config import get_settings


# Patterns for sensitive data that should be masked in logs
SENSITIVE_PATTERNS = [
    (re.compile(r'(sk-ant-[a-zA-Z0-9-]{20,})'), 'sk-ant-***REDACTED***'),  # Anthropic keys
    (re.compile(r'(sk-[a-zA-Z0-9]{20,})'), 'sk-***REDACTED***'),  # OpenAI keys
    (re.compile(r'(gsk_[a-zA-Z0-9]{20,})'), 'gsk_***REDACTED***'),  # Groq keys
    (re.compile(r'(tvly-[a-zA-Z0-9-]{16,})'), 'tvly-***REDACTED***'),  # Tavily keys
    (re.compile(r'(ghp_[a-zA-Z0-9]{20,}|github_pat_[a-zA-Z0-9_]{20,})'), 'ghp_***REDACTED***'),  # GitHub tokens
    (re.compile(r'(api[_-]?key["\s:=]+)["\']?([a-zA-Z0-9-_]{20,})["\']?', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(token["\s:=]+)["\']?([a-zA-Z0-9-_]{20,})["\']?', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(secret["\s:=]+)["\']?([a-zA-Z0-9-_]{10,})["\']?', re.IGNORECASE), r'\1***REDACTED***'),
    (re.compile(r'(bearer\s+)([a-zA-Z0-9-_.]+)', re.IGNORECASE), r'\1***REDACTED***'),
]


def sanitize_message(message: str) -> str:
    """
    Sanitize a message by masking sensitive data patterns.

    Args:
        message: The message to sanitize

    Returns:
        The sanitized message with sensitive data masked
    """
    sanitized = message
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)
    return sanitized


def sanitize_error(error: Exception) -> str:
    """
    Sanitize an exception message for safe display/logging.

    Falls back to the exception type name when the message is empty.
    """
    error_str = str(error) or type(error).__name__
    return sanitize_message(error_str)


class SanitizingFormatter(logging.Formatter):
    """
    A logging formatter that sanitizes sensitive data from log messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        original_msg = record.getMessage()
        record.msg = sanitize_message(original_msg)
        record.args = ()
        return super().format(record)


def setup_logging(name: Optional[str] = None) -> logging.Logger:
    """
    Set up and return a logger with sanitization enabled.

    Args:
        name: The logger name. If None, returns the application logger.

    Returns:
        A configured logger instance with sanitization
    """
    settings = get_settings()

    logger = logging.getLogger(name or "resource_finder")

    # Avoid adding handlers multiple times
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(SanitizingFormatter(settings.log_format))
        logger.addHandler(handler)

    logger.setLevel(getattr(logging, settings.log_level))

    return logger


# Create a default application logger
logger = setup_logging("resource_finder")
