"""Import orchestrator interface."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Optional, Sequence

from ..models import ImportItem, ImportSummary, ParsedCandidate

if TYPE_CHECKING:
    from ..services.review_session import ReviewSession


class IImportOrchestrator(ABC):
    """Interface for the guided import workflow used by the presentation layer."""

    @abstractmethod
    async def list_import_candidate_folders(self) -> List[str]:
        """List folder names waiting in the import root.

        Raises:
            OrchestratorError: If the import root cannot be read.
        """
        pass

    @abstractmethod
    def parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name in strict ``[Studio][Model]Title`` form."""
        pass

    @abstractmethod
    def smart_parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name with the full heuristic pipeline."""
        pass

    @abstractmethod
    async def create_review_session(
        self, folder_names: Optional[Sequence[str]] = None
    ) -> "ReviewSession":
        """Build a review session for the given (or all pending) folders."""
        pass

    @abstractmethod
    async def import_selected_albums(self, items: Sequence[ImportItem]) -> ImportSummary:
        """Import operator-approved items."""
        pass

    @abstractmethod
    async def import_all_pending_albums(self) -> ImportSummary:
        """Import every folder of the import root that follows the strict format."""
        pass

    @abstractmethod
    async def validate_prerequisites(self) -> List[str]:
        """Validate that all prerequisites are met.

        Returns:
            List of validation errors (empty if all valid).
        """
        pass
