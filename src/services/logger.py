"""Structured JSON logging."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger import jsonlogger


# Run ID for correlating the log entries of one planner invocation
RUN_ID = str(uuid.uuid4())


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter that adds run_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        )
        log_record["run_id"] = RUN_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Logs go to stderr so that stdout carries only the plan report.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stderr)
    formatter = CustomJsonFormatter(
        "%(message)s",
        timestamp=True,
    )
    json_handler.setFormatter(formatter)
    logger.addHandler(json_handler)

    return logger


def log_zone_planned(cidr: str, zone_name: str, kind: str) -> None:
    """Log a reverse zone derived from a CIDR block.

    Args:
        cidr: Declared CIDR block.
        zone_name: Computed zone FQDN.
        kind: Zone kind (Master or Slave).
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "Reverse zone planned",
        extra={"cidr": cidr, "zone_name": zone_name, "kind": kind},
    )


def log_ptr_planned(
    ip_address: str, record_name: str, zone_name: str, inferred: bool
) -> None:
    """Log a PTR record placed into a zone.

    Args:
        ip_address: Host address.
        record_name: PTR owner name.
        zone_name: Zone holding the record.
        inferred: True if the zone was chosen by the planner.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "PTR record planned",
        extra={
            "ip_address": ip_address,
            "record_name": record_name,
            "zone_name": zone_name,
            "zone_inferred": inferred,
        },
    )


def log_ptr_delete_planned(ip_address: str, record_name: str, zone_name: str) -> None:
    """Log a PTR record scheduled for removal."""
    logger = logging.getLogger(__name__)
    logger.info(
        "PTR record delete planned",
        extra={
            "ip_address": ip_address,
            "record_name": record_name,
            "zone_name": zone_name,
        },
    )


def log_import_resolved(source: str, resolved: str) -> None:
    """Log an existing zone or record mapped back to a CIDR or address.

    Args:
        source: Zone name or record id.
        resolved: CIDR or address it maps to.
    """
    logger = logging.getLogger(__name__)
    logger.debug("Import resolved", extra={"source": source, "resolved": resolved})


def log_plan_summary(
    zones: int,
    ptr_records: int,
    imports: int,
    errors: int,
    duration_sec: float,
) -> None:
    """Log plan completion summary.

    Args:
        zones: Reverse zones planned.
        ptr_records: PTR RRsets planned.
        imports: Imports resolved.
        errors: Entries rejected.
        duration_sec: Total planning time in seconds.
    """
    logger = logging.getLogger(__name__)
    log = logger.warning if errors else logger.info
    log(
        "Plan completed",
        extra={
            "zones": zones,
            "ptr_records": ptr_records,
            "imports": imports,
            "errors": errors,
            "duration_sec": duration_sec,
        },
    )
