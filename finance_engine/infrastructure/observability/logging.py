"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from finance_engine.config import settings


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: Optional[str] = None) -> None:
    """Configure structured JSON logging, at ``settings.log_level`` unless overridden"""
    logger = logging.getLogger()
    logger.setLevel(level or settings.log_level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_summary(
    month: str,
    transaction_count: int,
    anomaly_count: int,
    recommendation_count: int,
    overdraft_risk: bool,
    duration_ms: float,
) -> None:
    """Log structured summary outcome for analysis"""
    logging.info(
        "Summary completed",
        extra={
            "step": "summary_complete",
            "month": month,
            "transaction_count": transaction_count,
            "anomaly_count": anomaly_count,
            "recommendation_count": recommendation_count,
            "overdraft_risk": overdraft_risk,
            "duration_ms": duration_ms,
        },
    )
