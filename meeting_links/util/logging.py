"""
Structured operation logging for the meeting links service.
Every line carries the operation name, its status and a details dict.
"""

import logging
from typing import Any, Dict, Optional


class StructuredLogger:
    """Structured logger for webhook, sequencing and store operations."""

    def __init__(self, name: str = "meeting_links"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_webhook_received(self, record_id: Optional[str], status: str = "received"):
        """Log an inbound webhook event."""
        level = logging.INFO if record_id else logging.WARNING
        self.log_operation("webhook", status, {"record_id": record_id}, level=level)

    def log_stage(self, record_id: str, stage: str, status: str = "success", details: Dict[str, Any] = None):
        """Log a sequencing pipeline stage transition."""
        log_details = {"record_id": record_id}
        if details:
            log_details.update(details)

        level = logging.ERROR if status == "failed" else logging.INFO
        self.log_operation(f"sequence.{stage}", status, log_details, level=level)

    def log_relations_written(self, record_id: str, previous_id: Optional[str], next_id: Optional[str]):
        """Log the pointer update applied to a record."""
        self.log_operation("sequence.written", "success", {
            "record_id": record_id,
            "previous_id": previous_id,
            "next_id": next_id,
        })

    def log_store_request(self, method: str, path: str, status: str, details: Dict[str, Any] = None):
        """Log a request issued to the external record store."""
        log_details = {"method": method, "path": path}
        if details:
            log_details.update(details)

        level = logging.WARNING if status == "failed" else logging.DEBUG
        self.log_operation("store.request", status, log_details, level=level)

    def set_debug(self, enabled: bool) -> None:
        """Toggle debug-level output."""
        self.logger.setLevel(logging.DEBUG if enabled else logging.INFO)

    # Standard logging methods for compatibility
    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def exception(self, message: str) -> None:
        """Log an error message with the active traceback."""
        self.logger.exception(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
