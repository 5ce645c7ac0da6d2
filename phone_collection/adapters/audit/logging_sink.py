"""Audit sink that emits one structured log record per assignment run."""

from __future__ import annotations

import logging

from phone_collection.application.ports.audit_sink import AuditSink
from phone_collection.domain.entities.assignment import AssignmentSummary

logger = logging.getLogger("phone_collection.audit")


class LoggingAuditSink(AuditSink):
    async def publish(self, summary: AssignmentSummary) -> None:
        record = summary.to_audit_record()
        logger.info(
            "Daily case assignment completed: date=%s cases=%d agents=%d assigned_by=%s",
            record["assignmentDate"], record["totalCases"],
            record["totalAgents"], record["assignedBy"],
            extra={"audit": record},
        )
