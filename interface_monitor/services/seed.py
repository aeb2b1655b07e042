"""Realistic sample data for local development and demos."""

import random
import uuid
from datetime import timedelta
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from interface_monitor.core.datetime_utils import utc_now
from interface_monitor.core.logging import get_logger
from interface_monitor.models.interface_log import LogSeverity, LogStatus
from interface_monitor.services import log_store

logger = get_logger(__name__)

# (interface name, integration key)
INTERFACES = [
    ("SAP SuccessFactors Employee Sync", "SF-ECP-EMP-001"),
    ("SAP ECP Payroll Integration", "ECP-PAYROLL-002"),
    ("Workday HR Data Export", "WD-EXPORT-003"),
    ("AD User Provisioning", "AD-USER-004"),
    ("Benefits Enrollment Sync", "BENEFITS-005"),
    ("Time Tracking Integration", "TIME-TRACK-006"),
    ("Performance Management Export", "PERF-MGMT-007"),
    ("Learning Management Sync", "LEARN-SYNC-008"),
    ("Recruitment Data Import", "RECRUIT-IMP-009"),
    ("Compensation Update Feed", "COMP-FEED-010"),
]

MESSAGES = {
    LogStatus.SUCCESS: [
        "Successfully processed 1,247 employee records",
        "Payroll data synchronized with 99.8% accuracy",
        "User provisioning completed for 45 new hires",
        "Benefits enrollment updated for the current quarter",
        "Performance ratings exported to external system",
    ],
    LogStatus.FAILED: [
        "Connection timeout to SAP SuccessFactors API",
        "Invalid data format in employee records",
        "Authentication failed for Workday integration",
        "Database connection pool exhausted",
        "Required field missing in payroll data",
    ],
    LogStatus.WARNING: [
        "Partial data sync completed with 3 skipped records",
        "API rate limit approaching threshold",
        "Duplicate employee ID detected and handled",
        "Slow response times detected from external system",
        "Data validation warnings for 12 records",
    ],
    LogStatus.RUNNING: [
        "Processing employee data batch 3 of 5",
        "Synchronizing benefits enrollment changes",
        "Validating payroll calculation results",
        "Exporting performance review data",
        "Updating user access permissions",
    ],
}


def _source_system(name: str) -> str:
    if "SAP" in name:
        return "SAP"
    if "Workday" in name:
        return "Workday"
    return "External"


def generate_log(days: int = 30, rng: random.Random | None = None) -> dict[str, Any]:
    """Build one random log payload with a timestamp in the last `days` days."""
    rng = rng or random.Random()
    status = rng.choice(list(LogStatus))
    name, key = rng.choice(INTERFACES)
    timestamp = utc_now() - timedelta(seconds=rng.randint(0, max(days, 1) * 24 * 60 * 60))

    return {
        "interfaceName": name,
        "integrationKey": key,
        "status": status.value,
        "message": rng.choice(MESSAGES[status]),
        "severity": rng.choice(list(LogSeverity)).value,
        "duration": rng.randint(1000, 30999),
        "recordsProcessed": rng.randint(100, 5099),
        "timestamp": timestamp.isoformat(),
        "metadata": {
            "sourceSystem": _source_system(name),
            "targetSystem": "SAP ECP" if "ECP" in name else "Downstream System",
            "jobId": f"JOB-{uuid.uuid4().hex[:12]}",
            "userId": f"admin{rng.randint(1, 5)}",
        },
    }


async def seed_logs(
    db: AsyncSession,
    count: int,
    days: int = 30,
    batch_size: int = 1000,
    clear: bool = False,
    rng: random.Random | None = None,
) -> int:
    """Insert `count` random logs in batches. Returns the number inserted."""
    if clear:
        removed = await log_store.delete_all_logs(db)
        logger.bind(removed=removed).info("seed_cleared_logs")

    inserted = 0
    while inserted < count:
        size = min(batch_size, count - inserted)
        batch = [generate_log(days, rng) for _ in range(size)]
        await log_store.create_logs(db, batch)
        await db.commit()
        inserted += size
        logger.bind(inserted=inserted, total=count).info("seed_batch_inserted")

    return inserted
