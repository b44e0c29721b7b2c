"""
Commandes CLI de ReelSort : configure, scan, status, items, check-key.
"""

import asyncio
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.panel import Panel
from rich.table import Table

from reelsort.adapters.api.tmdb_client import check_api_key
from reelsort.adapters.cli.helpers import console, with_container
from reelsort.core.entities import ItemStatus, JobStatus, LibrarySettings, ScanJob
from reelsort.core.exceptions import ScanAlreadyRunningError


# Dernieres lignes du journal affichees par status
LOG_LINES_SHOWN = 10


class StatusFilter(str, Enum):
    """Filtre par statut de rangement."""

    ORGANIZED = "organized"
    UNCATEGORIZED = "uncategorized"


def _mask(api_key: Optional[str]) -> str:
    if not api_key:
        return "[dim]non definie[/dim]"
    return f"{api_key[:4]}...{api_key[-4:]}" if len(api_key) > 8 else "****"


def _print_job(job: ScanJob) -> None:
    """Affiche l'etat d'un scan dans un panneau Rich."""
    color = {"running": "yellow", "completed": "green", "failed": "red"}[job.status.value]
    lines = [
        f"Statut : [{color}]{job.status.value}[/{color}]"
        + ("  [dim](dry-run)[/dim]" if job.dry_run else ""),
        f"Progression : {job.processed_files}/{job.total_files}",
        f"Films : {job.stats.movies}  Series : {job.stats.tv}  "
        f"En attente : {job.stats.uncategorized}  Erreurs : {job.stats.errors}",
        f"Debut : {job.started_at:%Y-%m-%d %H:%M:%S}",
    ]
    if job.finished_at:
        lines.append(f"Fin : {job.finished_at:%Y-%m-%d %H:%M:%S}")
    console.print(Panel("\n".join(lines), title=f"Scan {job.id}"))

    if job.logs:
        journal = Table(title="Journal", show_header=False)
        journal.add_column("Heure", style="dim")
        journal.add_column("Etape")
        for entry in job.logs[-LOG_LINES_SHOWN:]:
            journal.add_row(f"{entry.ts:%H:%M:%S}", entry.message)
        console.print(journal)

    if job.errors:
        table = Table(title="Erreurs")
        table.add_column("Chemin", style="cyan")
        table.add_column("Erreur", style="red")
        for error in job.errors:
            table.add_row(error.path, error.error)
        console.print(table)


def configure(
    root: Annotated[
        Optional[Path],
        typer.Option("--root", "-r", help="Racine de la bibliotheque"),
    ] = None,
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="Cle TMDB (v3) ou token (v4)"),
    ] = None,
    copy_mode: Annotated[
        Optional[bool],
        typer.Option("--copy/--move", help="Copier au lieu de deplacer"),
    ] = None,
    library_id: Annotated[
        Optional[str],
        typer.Option("--library-id", help="Identifiant de la bibliotheque"),
    ] = None,
    dry_run: Annotated[
        Optional[bool],
        typer.Option("--dry-run/--no-dry-run", help="Mode simulation par defaut"),
    ] = None,
    mount_safety: Annotated[
        Optional[bool],
        typer.Option(
            "--mount-safety/--no-mount-safety",
            help="Interrompre le scan si la racine change de volume",
        ),
    ] = None,
) -> None:
    """Enregistre ou affiche les reglages de la bibliotheque."""
    asyncio.run(
        _configure_async(root, api_key, copy_mode, library_id, dry_run, mount_safety)
    )


@with_container()
async def _configure_async(
    container,
    root: Optional[Path],
    api_key: Optional[str],
    copy_mode: Optional[bool],
    library_id: Optional[str],
    dry_run: Optional[bool],
    mount_safety: Optional[bool],
) -> None:
    repo = container.settings_repository()
    settings = repo.get() or LibrarySettings()

    if root is not None:
        settings.library_root = root.expanduser().resolve()
    if api_key is not None:
        settings.tmdb_api_key = api_key or None
    if copy_mode is not None:
        settings.is_copy_mode = copy_mode
    if library_id is not None:
        settings.library_id = library_id
    if dry_run is not None:
        settings.dry_run = dry_run
    if mount_safety is not None:
        settings.mount_safety = mount_safety

    options = (root, api_key, copy_mode, library_id, dry_run, mount_safety)
    if any(v is not None for v in options):
        settings = repo.save(settings)
        console.print("[green]Reglages enregistres.[/green]")

    table = Table(title="Reglages de la bibliotheque", show_header=False)
    table.add_column("Cle", style="cyan")
    table.add_column("Valeur")
    table.add_row("Racine", str(settings.library_root or "[dim]non definie[/dim]"))
    table.add_row("Mode", "copie" if settings.is_copy_mode else "deplacement")
    table.add_row("Cle TMDB", _mask(settings.tmdb_api_key))
    table.add_row("Bibliotheque", settings.library_id or "-")
    table.add_row("Dry-run", "oui" if settings.dry_run else "non")
    table.add_row("Securite montage", "oui" if settings.mount_safety else "non")
    console.print(table)


def scan(
    dry_run: Annotated[
        Optional[bool],
        typer.Option("--dry-run/--no-dry-run", help="Simule sans deplacer les fichiers"),
    ] = None,
) -> None:
    """Scanne la bibliotheque, identifie et range les fichiers."""
    asyncio.run(_scan_async(dry_run))


@with_container()
async def _scan_async(container, dry_run: Optional[bool]) -> None:
    orchestrator = container.scan_orchestrator()
    try:
        job = orchestrator.create_job(dry_run)
    except ScanAlreadyRunningError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    with console.status(f"Scan {job.id} en cours..."):
        job = await orchestrator.run(job.id)

    _print_job(job)
    if job.status is JobStatus.FAILED:
        raise typer.Exit(1)


def status(
    job_id: Annotated[
        Optional[int],
        typer.Argument(help="ID du scan (defaut: le plus recent)"),
    ] = None,
) -> None:
    """Affiche l'etat d'un scan."""
    asyncio.run(_status_async(job_id))


@with_container()
async def _status_async(container, job_id: Optional[int]) -> None:
    repo = container.scan_job_repository()
    job = repo.get_by_id(job_id) if job_id is not None else repo.get_latest()
    if job is None:
        console.print("[yellow]Aucun scan trouve.[/yellow]")
        raise typer.Exit(1)
    _print_job(job)


def items(
    status_filter: Annotated[
        StatusFilter,
        typer.Option("--status", "-s", help="Statut des fichiers a lister"),
    ] = StatusFilter.UNCATEGORIZED,
) -> None:
    """Liste les fichiers de la bibliotheque par statut."""
    asyncio.run(_items_async(status_filter))


@with_container()
async def _items_async(container, status_filter: StatusFilter) -> None:
    repo = container.library_item_repository()
    found = repo.list_by_status(ItemStatus(status_filter.value))
    if not found:
        console.print(f"[yellow]Aucun fichier {status_filter.value}.[/yellow]")
        return

    table = Table(title=f"Fichiers {status_filter.value} ({len(found)})")
    table.add_column("Fichier", style="cyan")
    table.add_column("Type")
    table.add_column("Action")
    table.add_column("Detail")
    for item in found:
        if item.status is ItemStatus.ORGANIZED:
            detail = item.identification.title if item.identification else ""
        else:
            detail = item.reason or ""
            if item.destination_path:
                detail = f"-> {item.destination_path}"
        table.add_row(str(item.effective_path), item.media_type.value, item.action, detail)
    console.print(table)


def check_key(
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="Cle a verifier (defaut: cle enregistree)"),
    ] = None,
) -> None:
    """Verifie la cle TMDB aupres de l'API."""
    asyncio.run(_check_key_async(api_key))


@with_container()
async def _check_key_async(container, api_key: Optional[str]) -> None:
    if api_key is None:
        stored = container.settings_repository().get()
        api_key = stored.tmdb_api_key if stored else None

    result = await check_api_key(api_key)
    color = "green" if result.ok else "red"
    key_type = f" ({result.key_type})" if result.key_type else ""
    console.print(f"[{color}]{result.status}[/{color}]{key_type} : {result.message}")
    if not result.ok:
        raise typer.Exit(1)
