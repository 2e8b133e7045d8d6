"""Main CLI entry point."""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click

from .. import __version__
from ..config import Config, ConfigManager
from ..core.interfaces import ICatalogStore, IFolderNameParser, IImportOrchestrator
from ..core.models import ConfidenceTier, ImportSummary, ParsedCandidate, TierAction
from ..core.services import ReviewSession
from ..infrastructure import Container, setup_logging
from ..utils import AlbumImporterError, ConfigurationError

TIER_CHOICE = click.Choice([tier.value for tier in ConfidenceTier])


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    help="Path to configuration file",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(version=__version__, prog_name="album-importer")
@click.pass_context
def cli(ctx: click.Context, config: Optional[Path], verbose: bool) -> None:
    """Album Importer - Turn loosely named folders into catalog albums."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config

    # Skip configuration loading for commands that don't need it
    if ctx.invoked_subcommand == "init":
        return

    try:
        config_manager = ConfigManager(config)
        app_config = config_manager.load_config()

        if verbose:
            app_config.logging.level = "DEBUG"
        setup_logging(app_config.logging)

        container = Container(config_manager)
        container.configure_default_services()

        ctx.obj["config"] = app_config
        ctx.obj["container"] = container

    except (ConfigurationError, FileNotFoundError, ValueError) as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        click.echo(f"Initialization error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=Path.cwd() / "config" / "config.yaml",
    help="Output path for configuration file",
)
def init(output: Path) -> None:
    """Initialize configuration file."""
    try:
        if output.exists():
            if not click.confirm(f"Configuration file {output} already exists. Overwrite?"):
                return

        output.parent.mkdir(parents=True, exist_ok=True)

        ConfigManager.create_default_config(output)
        click.echo(f"Configuration file created at: {output}")
        click.echo("Please edit the import and storage paths before importing.")

    except Exception as e:
        click.echo(f"Failed to create configuration: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration and catalog status."""
    config: Config = ctx.obj["config"]
    container: Container = ctx.obj["container"]

    click.echo("Album Importer Status")
    click.echo("=" * 40)
    click.echo(f"Import Root: {config.paths.import_root}")
    click.echo(f"Storage Root: {config.paths.storage_root}")
    click.echo(f"Catalog: {config.catalog.url}")
    click.echo(
        f"Tiers: high >= {config.tiers.high_threshold}, medium >= {config.tiers.medium_threshold}"
    )
    click.echo(f"Batch Size: {config.import_config.batch_size}")
    click.echo(f"Dry Run: {'✓' if config.app.dry_run else '✗'}")

    try:
        asyncio.run(_show_catalog_status(container))
    except Exception as e:
        click.echo(f"Catalog check failed: {e}")


@cli.command()
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Validate configuration and prerequisites."""
    container: Container = ctx.obj["container"]

    try:
        asyncio.run(_validate_setup(container))
        click.echo("All prerequisites validated successfully")
    except Exception as e:
        click.echo(f"Validation failed: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.argument("names", nargs=-1, required=True)
@click.option("--exact", is_flag=True, help="Only accept the [Studio][Model]Title format")
@click.pass_context
def parse(ctx: click.Context, names: Tuple[str, ...], exact: bool) -> None:
    """Show what would be inferred from folder NAMES."""
    container: Container = ctx.obj["container"]
    parser = container.get(IFolderNameParser)  # type: ignore

    for name in names:
        candidate = (
            parser.parse_folder_name(name) if exact else parser.smart_parse_folder_name(name)
        )
        click.echo(f"\n{name}")
        _display_candidate(candidate)


@cli.command()
@click.pass_context
def scan(ctx: click.Context) -> None:
    """List the import root grouped by confidence tier."""
    container: Container = ctx.obj["container"]

    try:
        asyncio.run(_run_scan(container))
    except AlbumImporterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.group()
def studio() -> None:
    """Manage catalog studios."""


@studio.command("add")
@click.argument("name")
@click.pass_context
def studio_add(ctx: click.Context, name: str) -> None:
    """Add studio NAME to the catalog."""
    container: Container = ctx.obj["container"]

    try:
        studio_id = asyncio.run(_add_studio(container, name))
        click.echo(f"Studio '{name.strip()}' has ID {studio_id}")
    except AlbumImporterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@studio.command("list")
@click.pass_context
def studio_list(ctx: click.Context) -> None:
    """List catalog studios."""
    container: Container = ctx.obj["container"]

    try:
        asyncio.run(_list_studios(container))
    except AlbumImporterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--confirm-tier",
    "confirm_tiers",
    multiple=True,
    type=TIER_CHOICE,
    help="Confirm every item of a tier (repeatable)",
)
@click.option(
    "--skip-tier",
    "skip_tiers",
    multiple=True,
    type=TIER_CHOICE,
    help="Skip every item of a tier (repeatable)",
)
@click.option("--dry-run", is_flag=True, help="Report what would be imported")
@click.pass_context
def review(
    ctx: click.Context,
    confirm_tiers: Tuple[str, ...],
    skip_tiers: Tuple[str, ...],
    dry_run: bool,
) -> None:
    """Review parsed folders and import the accepted ones."""
    config: Config = ctx.obj["config"]
    container: Container = ctx.obj["container"]

    if dry_run:
        config.app.dry_run = True

    orchestrator = container.get(IImportOrchestrator)  # type: ignore

    try:
        session = asyncio.run(
            _build_review_session(
                container=container,
                confirm_tiers=[ConfidenceTier(tier) for tier in confirm_tiers],
                skip_tiers=[ConfidenceTier(tier) for tier in skip_tiers],
            )
        )
        if not session.items:
            click.echo("No folders waiting for import")
            return

        # Prompts block, so they run between event loops
        if config.app.interactive:
            orchestrator.review_interactively(session)

        stats = session.stats()
        click.echo(
            f"\nReviewed {stats['total']} folder(s): {stats['confirmed']} confirmed, "
            f"{stats['edited']} edited, {stats['skipped']} skipped, {stats['pending']} pending"
        )

        summary = asyncio.run(_import_reviewed(container, session))
        orchestrator.display_summary(summary)
    except KeyboardInterrupt:
        click.echo("\nOperation cancelled by user.")
        sys.exit(1)
    except AlbumImporterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command("import-all")
@click.option("--dry-run", is_flag=True, help="Report what would be imported")
@click.pass_context
def import_all(ctx: click.Context, dry_run: bool) -> None:
    """Import every folder named [Studio][Model]Title without review."""
    config: Config = ctx.obj["config"]
    container: Container = ctx.obj["container"]

    if dry_run:
        config.app.dry_run = True

    try:
        summary = asyncio.run(_run_import_all(container))
    except AlbumImporterError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if not summary.success:
        sys.exit(1)


async def _show_catalog_status(container: Container) -> None:
    """Print catalog counts."""
    store = container.get(ICatalogStore)  # type: ignore
    try:
        studios = await store.list_studios()
        models = await store.list_models()
        albums = await store.count_albums()
        click.echo(f"Studios: {len(studios)}")
        click.echo(f"Models: {len(models)}")
        click.echo(f"Albums: {albums}")
    finally:
        await container.aclose()


async def _validate_setup(container: Container) -> None:
    """Validate setup and prerequisites."""
    orchestrator = container.get(IImportOrchestrator)  # type: ignore
    try:
        errors = await orchestrator.validate_prerequisites()
    finally:
        await container.aclose()

    if errors:
        for error in errors:
            click.echo(f"✗ {error}")
        raise AlbumImporterError("Validation failed")


async def _run_scan(container: Container) -> None:
    """Print the import root grouped by tier."""
    orchestrator = container.get(IImportOrchestrator)  # type: ignore
    try:
        session = await orchestrator.create_review_session()
    finally:
        await container.aclose()

    if not session.items:
        click.echo("No folders waiting for import")
        return

    for tier in ConfidenceTier:
        items = session.items_in_tier(tier)
        click.echo(f"\n{tier.value.upper()} ({len(items)})")
        click.echo("-" * 70)
        for item in items:
            candidate = item.candidate
            click.echo(
                f"  {item.folder_name}: studio={candidate.studio or '-'} "
                f"model={candidate.model or '-'} ({candidate.confidence.overall}%)"
            )


async def _add_studio(container: Container, name: str) -> int:
    store = container.get(ICatalogStore)  # type: ignore
    try:
        return await store.create_studio(name)
    finally:
        await container.aclose()


async def _list_studios(container: Container) -> None:
    store = container.get(ICatalogStore)  # type: ignore
    try:
        studios = await store.list_studios()
    finally:
        await container.aclose()

    if not studios:
        click.echo("No studios in the catalog")
        return

    for studio_info in studios:
        click.echo(f"{studio_info.id:>5}  {studio_info.name}")


async def _build_review_session(
    container: Container,
    confirm_tiers: List[ConfidenceTier],
    skip_tiers: List[ConfidenceTier],
) -> ReviewSession:
    """Parse the waiting folders and apply the bulk tier actions."""
    orchestrator = container.get(IImportOrchestrator)  # type: ignore

    try:
        session = await orchestrator.create_review_session()
    finally:
        await container.aclose()

    for tier in confirm_tiers:
        session.apply_tier_action(tier, TierAction.CONFIRM_ALL)
    for tier in skip_tiers:
        session.apply_tier_action(tier, TierAction.SKIP_ALL)
    return session


async def _import_reviewed(container: Container, session: ReviewSession) -> ImportSummary:
    orchestrator = container.get(IImportOrchestrator)  # type: ignore
    try:
        return await orchestrator.import_selected_albums(session.to_import_items())
    finally:
        await container.aclose()


async def _run_import_all(container: Container) -> ImportSummary:
    orchestrator = container.get(IImportOrchestrator)  # type: ignore
    try:
        summary = await orchestrator.import_all_pending_albums()
    finally:
        await container.aclose()

    orchestrator.display_summary(summary)
    return summary


def _display_candidate(candidate: ParsedCandidate) -> None:
    if not candidate.valid:
        click.echo(f"  ✗ {candidate.error}")
        return

    confidence = candidate.confidence
    tier = candidate.tier.value if candidate.tier else "-"
    click.echo(f"  Studio: {candidate.studio or '-'} ({confidence.studio}%)")
    click.echo(f"  Model:  {candidate.model or '-'} ({confidence.model}%)")
    click.echo(f"  Title:  {candidate.title}")
    click.echo(f"  Overall: {confidence.overall}% [{tier}] via {candidate.method.value}")


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
