"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger

from interest_calc.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_field_edit(
    request_id: str,
    field_id: str,
    outcome: str,
    error: Optional[str] = None,
) -> None:
    """Log structured outcome of one field input event"""
    logging.info(
        "Field edit handled",
        extra={
            "request_id": request_id,
            "step": "field_edit",
            "field_id": field_id,
            "edit_outcome": outcome,
            "evaluation_error": error,
        },
    )


def log_rate_refresh(outcome: str, rate_count: int, duration_ms: float) -> None:
    """Log structured outcome of a rate-table refresh"""
    logging.info(
        "Rate refresh completed",
        extra={
            "step": "rate_refresh",
            "refresh_outcome": outcome,
            "rate_count": rate_count,
            "duration_ms": duration_ms,
        },
    )
