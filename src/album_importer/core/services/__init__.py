"""Core service implementations."""

from .confidence import ConfidenceClassifier
from .folder_parser import FolderNameParser
from .import_executor import ImportExecutor
from .import_orchestrator import ImportOrchestrator
from .review_session import ReviewSession

__all__ = [
    "ConfidenceClassifier",
    "FolderNameParser",
    "ImportExecutor",
    "ImportOrchestrator",
    "ReviewSession",
]
