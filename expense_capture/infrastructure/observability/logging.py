"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger

from expense_capture.config import settings


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

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_sms_parse(
    request_id: str,
    message_count: int,
    candidate_count: int,
    duration_ms: float,
) -> None:
    """Log how much of a pasted batch was recognized"""
    logging.info(
        "SMS batch parsed",
        extra={
            "request_id": request_id,
            "step": "sms_parse_complete",
            "message_count": message_count,
            "candidate_count": candidate_count,
            "rejected_count": message_count - candidate_count,
            "duration_ms": duration_ms,
        },
    )


def log_suggestions(
    request_id: str,
    history_size: int,
    suggestion_count: int,
    duration_ms: float,
) -> None:
    """Log suggestion outcome for tuning the score threshold"""
    logging.info(
        "Suggestions computed",
        extra={
            "request_id": request_id,
            "step": "suggestions_complete",
            "history_size": history_size,
            "suggestion_count": suggestion_count,
            "duration_ms": duration_ms,
        },
    )
