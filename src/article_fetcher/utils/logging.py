import structlog
import hashlib
import logging
from typing import Any, Dict, Optional
import os


class AuditLogger:
    """
    Writes one JSON line per pipeline event to <log_dir>/audit.jsonl.
    URLs are hashed for correlation and truncated for readability.
    """

    def __init__(self, service_name: str, log_dir: str = "logs"):
        self.service_name = service_name
        self.log_dir = log_dir

        os.makedirs(log_dir, exist_ok=True)
        self.log_file = os.path.join(log_dir, "audit.jsonl")

        # One handler per log file, even if several AuditLoggers share it
        self._audit_logger = logging.getLogger(f"audit.{service_name}.{os.path.abspath(self.log_file)}")
        self._audit_logger.setLevel(logging.INFO)
        self._audit_logger.propagate = False

        if not self._audit_logger.handlers:
            handler = logging.FileHandler(self.log_file, encoding="utf-8")
            handler.setFormatter(logging.Formatter('%(message)s'))
            self._audit_logger.addHandler(handler)

        self._logger = structlog.wrap_logger(self._audit_logger, processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.JSONRenderer(ensure_ascii=False)
        ], wrapper_class=structlog.stdlib.BoundLogger)

    def _hash_url(self, url: str) -> str:
        return hashlib.sha256(url.encode()).hexdigest()

    def _preview(self, text: str, max_len: int = 120) -> str:
        return text[:max_len] + "..." if len(text) > max_len else text

    def log_event(self, event_type: str, severity: str, url: Optional[str] = None, details: Optional[Dict[str, Any]] = None) -> None:
        """
        Log an audit event.

        Args:
            event_type: e.g. "BATCH_START", "ARTICLE_STORED", "ARTICLE_FAILED"
            severity: "INFO", "WARN", "CRITICAL"
            url: Article URL the event is about (hashed and truncated)
            details: Extra metadata
        """
        entry: Dict[str, Any] = {
            "service_name": self.service_name,
            "event_type": event_type,
            "severity": severity,
        }

        if url:
            entry["url_hash"] = self._hash_url(url)
            entry["url_preview"] = self._preview(url)

        if details:
            entry.update(details)

        self._logger.info(event_type.lower(), **entry)

    def close(self) -> None:
        for handler in list(self._audit_logger.handlers):
            handler.close()
            self._audit_logger.removeHandler(handler)
