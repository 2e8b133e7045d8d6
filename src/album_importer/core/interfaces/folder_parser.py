"""Folder name parser interface."""

from abc import ABC, abstractmethod

from ..models import ParsedCandidate


class IFolderNameParser(ABC):
    """Interface for folder name parsing services."""

    @abstractmethod
    def parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name in strict ``[Studio][Model]Title`` form.

        Args:
            folder_name: Folder name to parse.

        Returns:
            Parsed candidate; ``valid`` is False when the name does not follow
            the format or the studio segment is empty.
        """
        pass

    @abstractmethod
    def smart_parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name using the strict format, then heuristics.

        Args:
            folder_name: Folder name to parse.

        Returns:
            Parsed candidate with per-field confidence and tier. The
            heuristic path always returns ``valid=True``.
        """
        pass
