#!/usr/bin/env python3
"""
Site Build and Verification CLI

Builds the static site, checks content, lists documents and scaffolds posts.

Commands:
    build   - Verify and render the site to the output directory
    check   - Verify content without writing anything
    list    - List pages and posts with their URLs
    new     - Create a draft post
    history - Show recent builds and verification runs

Examples:\n

    build_site.py build                         # Build with site.yaml

    build_site.py build --drafts                # Include drafts

    build_site.py check                         # Verify links, images, math

    build_site.py new "Robust circle fitting"   # Scaffold a draft post
"""

import os
from datetime import date
from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from folio.contexts.authoring import load_site, new_post
from folio.contexts.rendering import build_site
from folio.contexts.verification import verify_site
from folio.utils.event_logging import get_recent_events
from folio.utils.report_formatter import Column, TableFormatter
from folio.utils.site_config import SiteConfig, SiteConfigError, load_site_config
from folio.utils.timestamp import format_timestamp

load_dotenv()
FOLIO_SITE_CONFIG = Path(os.getenv("FOLIO_SITE_CONFIG", "site.yaml"))

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Site config file (default: FOLIO_SITE_CONFIG or site.yaml)"),
]
DraftsOption = Annotated[
    bool,
    typer.Option("--drafts", "-d", help="Include posts marked draft: true"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Show every warning and per-document debug logging"),
]


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def _load_config(config_path: Optional[Path]) -> SiteConfig:
    try:
        return load_site_config(config_path or FOLIO_SITE_CONFIG)
    except SiteConfigError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


app = typer.Typer(
    help="Build and verify the static site",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("build")
def build_command(
    config_path: ConfigOption = None,
    drafts: DraftsOption = False,
    no_clean: Annotated[
        bool,
        typer.Option("--no-clean", help="Keep existing files in the output directory"),
    ] = False,
    skip_verify: Annotated[
        bool,
        typer.Option("--skip-verify", help="Do not check links, images and math before building"),
    ] = False,
    verbose: VerboseOption = False,
):
    """
    Verify content and render the site.

    Nothing is written when verification finds errors.

    Examples:\n

        $ build_site.py build                   # Build the site

        $ build_site.py build --drafts          # Preview drafts

        $ build_site.py build --no-clean        # Keep stale output files
    """
    config = _load_config(config_path)
    typer.secho(f"\nBuilding: {config.title}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        result = build_site(
            config,
            include_drafts=drafts,
            clean=not no_clean,
            verify=not skip_verify,
            config_path=config_path or FOLIO_SITE_CONFIG,
            verbose=verbose,
        )
    except ValueError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.success:
        typer.secho("✓ Build succeeded", fg=typer.colors.GREEN, bold=True)
        typer.echo(f"  Pages: {result.pages_written}")
        typer.echo(f"  Assets: {result.assets_copied}")
        typer.echo(f"  Warnings: {len(result.warnings)}")
        typer.echo(f"  Output: {display_path(result.output_dir)}")
    else:
        typer.secho(
            f"✗ Build failed with {len(result.errors)} errors", fg=typer.colors.RED, bold=True
        )
        for error in result.errors[:10]:
            typer.secho(f"  - {error}", fg=typer.colors.RED)
        if len(result.errors) > 10:
            typer.echo(f"  ... and {len(result.errors) - 10} more")

    if result.log_dir:
        typer.echo(f"  Log: {display_path(result.log_dir / 'build.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if result.success else 1)


@app.command("check")
def check_command(
    config_path: ConfigOption = None,
    drafts: DraftsOption = False,
    verbose: VerboseOption = False,
):
    """
    Verify front-matter, markdown/LaTeX, internal links and images.

    Exits with code 1 when any error is found; warnings do not fail the check.

    Examples:\n

        $ build_site.py check

        $ build_site.py check --drafts --verbose
    """
    config = _load_config(config_path)
    typer.secho(f"\nChecking: {config.title}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    report = verify_site(
        config,
        include_drafts=drafts,
        config_path=config_path or FOLIO_SITE_CONFIG,
        verbose=verbose,
    )

    typer.echo("")
    if report.is_valid:
        typer.secho("✓ Verification passed", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho("✗ Verification failed", fg=typer.colors.RED, bold=True)
        for issue in report.errors:
            typer.secho(f"  - {issue}", fg=typer.colors.RED)

    typer.echo(f"  Documents: {report.documents_checked}")
    typer.echo(f"  Errors: {len(report.errors)}")
    typer.echo(f"  Warnings: {len(report.warnings)}")
    warning_limit = len(report.warnings) if verbose else 5
    for issue in report.warnings[:warning_limit]:
        typer.secho(f"  - {issue}", fg=typer.colors.YELLOW)
    if len(report.warnings) > warning_limit:
        typer.echo(f"  ... and {len(report.warnings) - warning_limit} more (use --verbose)")

    if report.log_dir:
        typer.echo(f"  Log: {display_path(report.log_dir / 'verify.log')}")
    typer.echo("")

    raise typer.Exit(code=0 if report.is_valid else 1)


@app.command("list")
def list_command(
    config_path: ConfigOption = None,
    drafts: DraftsOption = False,
):
    """
    List pages and posts (posts newest first).

    Examples:\n

        $ build_site.py list

        $ build_site.py list --drafts
    """
    config = _load_config(config_path)
    site = load_site(config, include_drafts=drafts)

    formatter = TableFormatter(
        [
            Column("Kind", 6),
            Column("Date", 10),
            Column("URL", 44),
            Column("Title", 36),
        ]
    )
    formatter.add_section_header(config.title).add_table_header().add_separator()

    for doc in site.pages + site.posts:
        date_text = doc.date.isoformat() if doc.date else ""
        title = f"{doc.title} (draft)" if doc.front_matter.draft else doc.title
        formatter.add_row([doc.kind, date_text, doc.url, title])

    formatter.add_summary(
        f"{len(site.pages)} pages, {len(site.posts)} posts, {len(site.assets)} static assets"
    )
    typer.echo(formatter.render())

    if site.load_errors:
        typer.secho(f"\n{len(site.load_errors)} files failed to load:", fg=typer.colors.RED)
        for error in site.load_errors:
            typer.secho(f"  - {error.source_path}: {error.message}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command("new")
def new_command(
    title: Annotated[str, typer.Argument(help="Post title")],
    config_path: ConfigOption = None,
    on_date: Annotated[
        Optional[str],
        typer.Option("--date", help="Publication date, YYYY-MM-DD (default: today)"),
    ] = None,
    description: Annotated[
        Optional[str],
        typer.Option("--description", help="One-sentence summary"),
    ] = None,
    keywords: Annotated[
        Optional[List[str]],
        typer.Option("--keyword", "-k", help="Keyword (repeatable)"),
    ] = None,
):
    """
    Create a draft post in the posts directory.

    Examples:\n

        $ build_site.py new "Robust circle fitting"

        $ build_site.py new "Ridge regression" --date 2026-11-01 -k regression -k regularization
    """
    config = _load_config(config_path)

    try:
        post_date = date.fromisoformat(on_date) if on_date else None
        path = new_post(
            config, title, on_date=post_date, description=description, keywords=keywords or []
        )
    except (ValueError, FileExistsError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"✓ Created {display_path(path)}", fg=typer.colors.GREEN, bold=True)
    typer.echo("  Remove 'draft: true' from the front-matter to publish it.")


@app.command("history")
def history_command(
    n: Annotated[int, typer.Option("-n", help="Number of events to show", min=1)] = 10,
    event_type: Annotated[
        Optional[str],
        typer.Option("--type", "-t", help="Only show this event type (e.g., build_failed)"),
    ] = None,
):
    """
    Show recent builds and verification runs from the site event log.

    Examples:\n

        $ build_site.py history

        $ build_site.py history -n 20 --type build_failed
    """
    events = get_recent_events(n, event_type=event_type)
    if not events:
        typer.echo("No site events recorded yet.")
        raise typer.Exit()

    formatter = TableFormatter(
        [
            Column("When", 10),
            Column("Event", 24),
            Column("Errors", 6, ">"),
            Column("Warnings", 8, ">"),
        ],
        total_width=51,
    )
    formatter.add_table_header().add_separator()
    for event in events:
        formatter.add_row(
            [
                format_timestamp(event["timestamp"], relative=True),
                event["event_type"],
                event.get("error_count", ""),
                event.get("warning_count", ""),
            ]
        )
    typer.echo(formatter.render())


if __name__ == "__main__":
    app()
