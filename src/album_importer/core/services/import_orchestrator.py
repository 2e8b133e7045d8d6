"""Import orchestrator service implementation."""

from pathlib import Path
from typing import List, Optional, Sequence

import click

from ...config.models import Config
from ...infrastructure.logging import LoggerMixin
from ...utils import FileSystemError, OrchestratorError
from ..interfaces import (
    ICatalogStore,
    IFileSystem,
    IFolderNameParser,
    IImportExecutor,
    IImportOrchestrator,
)
from ..models import (
    ImportItem,
    ImportOutcome,
    ImportStatus,
    ImportSummary,
    ItemAction,
    ParsedCandidate,
    ReviewItem,
)
from .review_session import ReviewSession


class ImportOrchestrator(IImportOrchestrator, LoggerMixin):
    """Guided import workflow.

    Implements the flow used by the command line:
    - List the folders waiting in the import root
    - Parse each folder name into a studio/model candidate
    - Let the operator confirm, edit or skip candidates in a review session
    - Import the ready items and report a summary
    """

    def __init__(
        self,
        config: Config,
        folder_parser: IFolderNameParser,
        catalog_store: ICatalogStore,
        file_system: IFileSystem,
        import_executor: IImportExecutor,
    ):
        """Initialize import orchestrator.

        Args:
            config: Application configuration.
            folder_parser: Folder name parser.
            catalog_store: Catalog store.
            file_system: Filesystem access.
            import_executor: Import executor.
        """
        self._config = config
        self._folder_parser = folder_parser
        self._catalog_store = catalog_store
        self._file_system = file_system
        self._import_executor = import_executor

    async def list_import_candidate_folders(self) -> List[str]:
        """List folder names waiting in the import root.

        Returns:
            Visible subdirectory names sorted by name; empty if the import
            root does not exist.

        Raises:
            OrchestratorError: If the import root cannot be read.
        """
        import_root = Path(self._config.paths.import_root)
        if not await self._file_system.path_exists(import_root):
            self.logger.warning(f"Import root does not exist: {import_root}")
            return []

        try:
            folders = await self._file_system.list_directories(import_root)
        except FileSystemError as e:
            raise OrchestratorError(f"Cannot list import root: {e}") from e

        self.logger.info(f"Found {len(folders)} folder(s) in {import_root}")
        return folders

    def parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name in strict ``[Studio][Model]Title`` form."""
        return self._folder_parser.parse_folder_name(folder_name)

    def smart_parse_folder_name(self, folder_name: str) -> ParsedCandidate:
        """Parse a folder name with the full heuristic pipeline."""
        return self._folder_parser.smart_parse_folder_name(folder_name)

    async def create_review_session(
        self, folder_names: Optional[Sequence[str]] = None
    ) -> ReviewSession:
        """Build a review session.

        Args:
            folder_names: Folders to review. Defaults to every folder of the
                import root.

        Returns:
            Review session with every item pending.
        """
        if folder_names is None:
            folder_names = await self.list_import_candidate_folders()

        return ReviewSession.from_folders(folder_names, self._folder_parser, self._config)

    async def import_selected_albums(self, items: Sequence[ImportItem]) -> ImportSummary:
        """Import operator-approved items."""
        if not items:
            self.logger.info("Nothing to import")
            return ImportSummary()

        return await self._import_executor.import_batch(items)

    async def import_all_pending_albums(self) -> ImportSummary:
        """Import every folder of the import root that follows the strict format.

        Folders whose names do not parse are reported as failed with the
        parse error. If the import root cannot be listed at all, a summary
        with ``success=False`` and zero counts is returned.

        Returns:
            Import summary with one outcome per folder, in folder order.
        """
        try:
            folder_names = await self.list_import_candidate_folders()
        except Exception as e:
            self.logger.error(f"Failed to list import folders: {e}")
            return ImportSummary.failed_summary()

        parse_failures = {}
        items = []
        for folder_name in folder_names:
            candidate = self._folder_parser.parse_folder_name(folder_name)
            if candidate.valid:
                items.append(
                    ImportItem(
                        folder_name=folder_name,
                        studio=candidate.studio,
                        model=candidate.model,
                        title=candidate.title,
                    )
                )
            else:
                self.logger.warning(f"Cannot parse '{folder_name}': {candidate.error}")
                parse_failures[folder_name] = ImportOutcome(
                    source_folder=folder_name,
                    status=ImportStatus.FAILED,
                    reason=candidate.error,
                    title=folder_name,
                )

        executed = await self.import_selected_albums(items)
        executed_outcomes = iter(executed.details)

        summary = ImportSummary(total=len(folder_names))
        for folder_name in folder_names:
            if folder_name in parse_failures:
                summary.add_outcome(parse_failures[folder_name])
            else:
                summary.add_outcome(next(executed_outcomes))
        summary.processing_time_seconds = executed.processing_time_seconds

        return summary

    async def validate_prerequisites(self) -> List[str]:
        """Validate that all prerequisites are met.

        Returns:
            List of validation errors (empty if all valid).
        """
        errors = []

        try:
            import_root = Path(self._config.paths.import_root)
            if not await self._file_system.path_exists(import_root):
                errors.append(f"Import root does not exist: {import_root}")

            storage_parent = Path(self._config.paths.storage_root).parent
            if not await self._file_system.path_exists(storage_parent):
                errors.append(f"Storage root parent does not exist: {storage_parent}")

            if not await self._catalog_store.ping():
                errors.append("Catalog store is not reachable")

            return errors

        except Exception as e:
            errors.append(f"Validation error: {e}")
            return errors

    def review_interactively(self, session: ReviewSession) -> None:
        """Walk the operator through every pending item.

        Each item can be confirmed, edited or skipped; quitting leaves the
        remaining items pending, which excludes them from the import.

        Args:
            session: Review session to update.
        """
        pending = session.pending_items()
        if not pending:
            return

        click.echo(f"\n{len(pending)} item(s) need review")
        click.echo("=" * 70)

        for i, item in enumerate(pending, 1):
            click.echo(f"\n[{i}/{len(pending)}] {item.folder_name}")
            click.echo("-" * 70)
            self._display_candidate(item)

            try:
                choice = click.prompt(
                    "[c]onfirm, [e]dit, [s]kip or [q]uit",
                    type=click.Choice(["c", "e", "s", "q"]),
                    default="c",
                )
                if choice == "q":
                    break
                if choice == "c":
                    session.item_action(item.id, ItemAction.CONFIRM)
                elif choice == "s":
                    session.item_action(item.id, ItemAction.SKIP)
                else:
                    studio = click.prompt("Studio", default=item.candidate.studio)
                    model = click.prompt("Model", default=item.candidate.model)
                    session.edit_item(item.id, studio, model)
            except (EOFError, KeyboardInterrupt, click.Abort):
                click.echo("\nReview stopped; remaining items stay pending.")
                break

    def display_summary(self, summary: ImportSummary) -> None:
        """Display import summary.

        Args:
            summary: Import summary to display.
        """
        click.echo("\n" + "=" * 70)
        click.echo("IMPORT SUMMARY")
        click.echo("=" * 70)

        if not summary.success:
            click.echo("✗ Import could not run")
            return

        for outcome in summary.details:
            if outcome.status == ImportStatus.SUCCESS:
                click.echo(f"✓ {outcome.source_folder} -> album {outcome.album_id}")
            elif outcome.status == ImportStatus.SKIPPED:
                click.echo(f"⊘ {outcome.source_folder}: {outcome.reason}")
            else:
                suffix = f" (album {outcome.album_id})" if outcome.album_id is not None else ""
                click.echo(f"✗ {outcome.source_folder}: {outcome.reason}{suffix}")

        click.echo(f"\nTotal: {summary.total}")
        click.echo(f"Imported: {summary.imported}")
        click.echo(f"Skipped: {summary.skipped}")
        click.echo(f"Failed: {summary.failed}")
        if summary.total > 0:
            click.echo(f"Success Rate: {summary.success_rate:.1%}")
        click.echo(f"Total Time: {summary.processing_time_seconds:.1f}s")

    def _display_candidate(self, item: ReviewItem) -> None:
        candidate = item.candidate
        confidence = candidate.confidence
        click.echo(f"  Studio: {candidate.studio or '-'} ({confidence.studio}%)")
        click.echo(f"  Model:  {candidate.model or '-'} ({confidence.model}%)")
        tier = candidate.tier.value if candidate.tier else "-"
        click.echo(f"  Overall: {confidence.overall}% [{tier}] via {candidate.method.value}")
