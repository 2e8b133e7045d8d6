"""Import executor interface."""

from abc import ABC, abstractmethod
from typing import Sequence

from ..models import ImportItem, ImportSummary


class IImportExecutor(ABC):
    """Interface for committing reviewed folders into the catalog."""

    @abstractmethod
    async def import_batch(self, items: Sequence[ImportItem]) -> ImportSummary:
        """Import folders, creating catalog records and relocating content.

        Item failures are reported in the summary and never abort the batch.

        Args:
            items: Folders to import.

        Returns:
            Import summary with one outcome per item, in processing order.
        """
        pass
