"""
Audit logging for logins and stock-changing operations.

Emits one JSON line per event on the "audit" logger so it can be shipped
separately from application logs. Passwords and tokens are never logged.
"""
import logging
import json
from datetime import datetime, timezone
from typing import Any, Optional, Dict

from sunatstock.models.user import User

audit_logger = logging.getLogger("audit")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AuditLog:
    """Central audit logging for security and stock events."""

    @staticmethod
    def log_authentication(
        action: str,  # "login", "failed_login"
        username: str,
        ip_address: str,
        success: bool,
        reason: str = "",
    ):
        """
        Usage:
            AuditLog.log_authentication("login", "admin", "192.168.1.1", True)
            AuditLog.log_authentication("failed_login", "admin", "192.168.1.1", False, reason="Invalid credentials")
        """
        log_entry = {
            "timestamp": _now(),
            "event_type": f"auth.{action}",
            "username": username,
            "ip_address": ip_address,
            "success": success,
        }

        if reason and not success:
            log_entry["reason"] = reason

        audit_logger.info(json.dumps(log_entry))

    @staticmethod
    def log_action(
        action: str,  # "create", "update", "restock"
        resource_type: str,  # "medical_item", "procedure"
        resource_id: int,
        user: Optional[User],
        changes: Optional[Dict[str, Any]] = None,
    ):
        """
        Log a stock-affecting action with who made it and what changed.

        Usage:
            AuditLog.log_action("restock", "medical_item", 12, current_user, changes={"quantity": 50})
        """
        log_entry = {
            "timestamp": _now(),
            "event_type": f"{resource_type}.{action}",
            "user_id": user.id if user else None,
            "username": user.username if user else None,
            "resource_id": resource_id,
        }

        if changes:
            log_entry["changes"] = changes

        audit_logger.info(json.dumps(log_entry, default=str))

    @staticmethod
    def log_rejected(
        action: str,
        resource_type: str,
        user: Optional[User],
        reason: str,
    ):
        """
        Log a workflow rejected by a stock rule (missing item, insufficient stock).
        """
        log_entry = {
            "timestamp": _now(),
            "event_severity": "WARNING",
            "event_type": f"{resource_type}.{action}_rejected",
            "user_id": user.id if user else None,
            "reason": reason,
        }

        audit_logger.warning(json.dumps(log_entry))
