"""Port interface for report rendering."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from phone_collection.domain.entities.report_row import ReportRow
from phone_collection.domain.value_objects.enums import ReportLayout


class ReportSink(ABC):
    @abstractmethod
    async def write(
        self, title: str, layout: ReportLayout, rows: Sequence[ReportRow]
    ) -> str:
        """Render *rows* and return a locator (e.g. file path) for the output."""
        ...
