"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from roundup_gateway.config import settings


class CustomJsonFormatter(JsonFormatter):
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


def log_credit_score(
    request_id: str,
    user_id: str,
    score: int,
    breakdown: Dict[str, int],
    duration_ms: float,
) -> None:
    """Log structured credit score outcome for analysis"""
    logging.info(
        "Credit score calculated",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "credit_score_complete",
            "score": score,
            "breakdown": breakdown,
            "duration_ms": duration_ms,
        },
    )


def log_prediction(
    request_id: str,
    user_id: str,
    historical_count: int,
    forecast_count: int,
    trend: str,
    duration_ms: float,
) -> None:
    """Log structured income prediction outcome"""
    logging.info(
        "Income prediction completed",
        extra={
            "request_id": request_id,
            "user_id": user_id,
            "step": "prediction_complete",
            "historical_count": historical_count,
            "forecast_count": forecast_count,
            "trend": trend,
            "duration_ms": duration_ms,
        },
    )
