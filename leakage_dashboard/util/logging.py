"""
Structured logging for dashboard operations.
Event dispatch, reconciliation, mission and proposal application diagnostics.
"""

import logging
import os
from typing import Any, Dict, List


class StructuredLogger:
    """Structured logger for dashboard events, merges and operator actions."""

    def __init__(self, name: str = "leakage_dashboard"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        if status in ("failed", "error"):
            self.logger.error(message)
        else:
            self.logger.info(message)

    def log_dashboard_event(self, tool_name: str, intent: str, status: str = "success", details: Dict[str, Any] = None):
        """Log the handling of one agent tool-call event."""
        log_details = {"tool_name": tool_name, "intent": intent}
        if details:
            log_details.update(details)

        self.log_operation("dashboard.event", status, log_details)

    def log_batch_reconciled(self, collection: str, incoming: int, total: int, replace: bool = False):
        """Log a merge of a normalized batch into a collection."""
        log_details = {
            "collection": collection,
            "incoming": incoming,
            "total": total,
            "mode": "replace" if replace else "merge"
        }
        self.log_operation(f"reconcile.{collection}", "success", log_details)

    def log_unhandled_tool(self, tool_name: str, params: Any = None):
        """Log a tool call that matched no dashboard intent."""
        log_details = {"tool_name": tool_name}
        if params is not None:
            log_details["params"] = sanitize_payload(params)

        self.log_operation("dashboard.unhandled_tool", "ignored", log_details)

    def log_proposal_application(self, proposal_id: str, status: str, details: Dict[str, Any] = None):
        """Log an operator-approved proposal application."""
        log_details = {"proposal_id": proposal_id}
        if details:
            log_details.update(details)

        self.log_operation("proposal.apply", status, log_details)

    def log_mission_event(self, action: str, mission_type: str = None, status: str = "success"):
        """Log mission launch and reset."""
        log_details = {"action": action}
        if mission_type:
            log_details["mission_type"] = mission_type

        self.log_operation("mission", status, log_details)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)


# Global logger instance
logger = StructuredLogger()


def sanitize_payload(payload: Any, reveal_sensitive: bool = False, sensitive_fields: List[str] = None) -> Any:
    """Sanitize payloads for diagnostic logging."""
    if sensitive_fields is None:
        sensitive_fields = ['secret', 'password', 'token', 'api_key', 'access_token', 'authorization']

    if isinstance(payload, dict):
        sanitized = {}
        for k, v in payload.items():
            if reveal_sensitive or str(k).lower() not in sensitive_fields:
                sanitized[k] = sanitize_payload(v, reveal_sensitive, sensitive_fields)
            else:
                sanitized[k] = "[REDACTED]"
        return sanitized
    elif isinstance(payload, str):
        # Truncate long strings
        return payload[:100] + "..." if len(payload) > 100 else payload
    elif isinstance(payload, list):
        return [sanitize_payload(item, reveal_sensitive, sensitive_fields) for item in payload]
    else:
        return payload
