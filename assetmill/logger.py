"""Unified logger providing technical instrumentation and activity logging."""

from __future__ import annotations

import hashlib
import json
import logging
import os
from contextlib import contextmanager
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional, Tuple

import logfire

from assetmill import constants
from assetmill.runtime.paths import get_activity_log_path
from assetmill.settings import get_app_settings, logfire_enabled


_activity_logger: Optional[logging.Logger] = None
_activity_log_path: Optional[Path] = None
_activity_logger_lock = Lock()
_logfire_config_state: Optional[Tuple[bool, Optional[str]]] = None
_logfire_instrumented = False
_logger_internal = logging.getLogger(__name__)


def _token_fingerprint(token: Optional[str]) -> Optional[str]:
    """Create a stable fingerprint for secret comparison without storing raw values."""
    if not token:
        return None
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def refresh_logfire_configuration(force: bool = False) -> None:
    """
    Reconfigure the global Logfire client based on current settings and environment.

    Args:
        force: When True, always reapply configuration even if nothing changed.
    """
    global _logfire_config_state

    try:
        enabled = logfire_enabled()
    except Exception as exc:  # unreadable or unwritable settings leave logfire disabled
        _logger_internal.error("Failed to read logfire setting, defaulting to disabled: %s", exc)
        enabled = False

    token = get_app_settings().logfire_token
    fingerprint = _token_fingerprint(token)
    desired_state = (enabled, fingerprint)

    if token:
        os.environ["LOGFIRE_TOKEN"] = token

    if not force and _logfire_config_state == desired_state:
        return

    send_option: str | bool = "if-token-present" if enabled else False

    logfire.configure(
        send_to_logfire=send_option,
        console=False,
        scrubbing=False,
    )

    _logfire_config_state = desired_state


def _ensure_activity_logger() -> logging.Logger:
    """Create or return the process-wide activity logger."""

    global _activity_logger
    global _activity_log_path

    desired_path = get_activity_log_path()

    if _activity_logger and _activity_log_path == desired_path:
        return _activity_logger

    with _activity_logger_lock:
        if _activity_logger and _activity_log_path == desired_path:
            return _activity_logger

        logger = logging.getLogger("assetmill.activity")

        # Tear down existing handlers if the target path changes between runs
        if _activity_logger and _activity_log_path != desired_path:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            _activity_logger = None

        log_path = desired_path
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = RotatingFileHandler(
            log_path,
            maxBytes=constants.ACTIVITY_LOG_MAX_BYTES,
            backupCount=constants.ACTIVITY_LOG_BACKUP_COUNT,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))

        logger.setLevel(logging.INFO)
        logger.propagate = False

        # Avoid duplicate handlers if logger already configured externally
        if not logger.handlers:
            logger.addHandler(handler)
        else:
            handler.close()

        _activity_logger = logger
        _activity_log_path = log_path
        return logger


class UnifiedLogger:
    """Unified logger providing instrumentation and persistent activity logging."""

    def __init__(self, tag: str, scope: Optional[str] = None):
        """
        Initialize unified logger for a module or component.

        Args:
            tag: Module or component identifier
            scope: Default activity scope (e.g. "global" or "environment")
        """
        self.tag = tag
        self.scope = scope
        self._logfire_instance = None  # Lazy initialization

    @property
    def _logfire(self):
        """Lazy-loaded Logfire instance."""
        if self._logfire_instance is None:
            self._logfire_instance = self._setup_logfire()
        return self._logfire_instance

    def _setup_logfire(self):
        """Set up the Logfire client and pydantic instrumentation once per process."""
        refresh_logfire_configuration()
        global _logfire_instrumented
        if not _logfire_instrumented:
            logfire.instrument_pydantic()
            _logfire_instrumented = True
        return logfire

    # Technical Instrumentation Methods

    def info(self, message: str, **extra: Any) -> None:
        """Technical info logging."""
        self._logfire.info(message, **extra)

    def warning(self, message: str, **extra: Any) -> None:
        """Technical warning logging."""
        self._logfire.warning(message, **extra)

    def error(self, message: str, **extra: Any) -> None:
        """Technical error logging."""
        self._logfire.error(message, **extra)

    def debug(self, message: str, **extra: Any) -> None:
        """Technical debug logging."""
        self._logfire.debug(message, **extra)

    @contextmanager
    def span(self, operation: str, **span_data: Any):
        """
        Manual instrumentation span for critical code paths.

        Usage:
            with logger.span("bootstrap", source="settings.yaml"):
                # critical operation
                pass
        """
        with self._logfire.span(f"{self.tag}:{operation}", **span_data):
            yield

    def trace(self, func_name_template: Optional[str] = None):
        """
        Decorator for function instrumentation with sensible defaults.

        Args:
            func_name_template: Optional span name (defaults to "<tag>:<function name>")

        Usage:
            @logger.trace()
            def load_handlers(config: dict): pass

            @logger.trace("register_engine")
            def register_engine(self, ext, handle): pass
        """
        def decorator(func):
            span_name = func_name_template or f"{self.tag}:{func.__name__}"
            return self._logfire.instrument(
                span_name,
                extract_args=False,
            )(func)
        return decorator

    # Activity Logging

    def activity(
        self,
        message: str,
        *,
        scope: Optional[str] = None,
        level: str = "info",
        metadata: Optional[Dict[str, Any]] = None,
        **context: Any,
    ) -> None:
        """Record an operational activity entry and mirror it to Logfire.

        Args:
            message: Human-readable description of the activity.
            scope: Activity scope; falls back to the logger's default scope.
            level: Activity level; used for Logfire mirroring and stored payload.
            metadata: Optional structured payload persisted alongside the message.
            **context: Additional JSON-serializable context persisted with the entry.
        """

        resolved_scope = scope or self.scope
        if not resolved_scope:
            raise ValueError(
                f"Unable to determine scope for activity logging. "
                f"Provide explicit scope parameter. Tag: {self.tag}"
            )

        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            "level": level,
            "tag": self.tag,
            "scope": resolved_scope,
            "message": message,
        }

        if metadata:
            payload["metadata"] = metadata

        if context:
            payload["context"] = context

        # The activity file is best-effort; callers never see its I/O errors
        try:
            activity_logger = _ensure_activity_logger()
        except OSError as exc:
            self._logfire.warning(
                "Activity log unavailable",
                tag=self.tag,
                error=str(exc),
                error_type=type(exc).__name__,
            )
        else:
            activity_logger.info(json.dumps(payload, ensure_ascii=False, default=str))

        log_method = getattr(self._logfire, level)
        log_method(message, tag=self.tag, scope=resolved_scope, metadata=metadata, **context)

