# cli.py - Command-line interface for LinkFix
"""
LinkFix CLI - Repair SharePoint "Link to a Document" items

COMMANDS:
    Setup:
        linkfix init [--force]                    Write a linkfix.yaml template
        linkfix info                              Show resolved configuration

    Remediation (run in this order):
        linkfix export [--output FILE]            Inventory link items to CSV
        linkfix purge [--csv FILE] [--apply]      Delete the broken link items
        linkfix recreate [--csv FILE]             Recreate links from the template

    Other:
        linkfix version                           Show version information

EXAMPLES:
    # Save the current links, then fix them
    linkfix export --output links.csv
    linkfix purge --csv links.csv --apply
    linkfix recreate --csv links.csv

    # Recreate into another library with a different template
    linkfix recreate --library "/sites/Team/Policies" --template good-link.aspx
"""

import sys
from pathlib import Path
from typing import Callable, Optional

import click

from linkfix import __version__
from linkfix.config_utils import (
    LinkFixConfig,
    apply_overrides,
    create_config_template,
    get_config,
)
from linkfix.errors import ConfigurationError, LinkFixError
from linkfix.export_links import export_links
from linkfix.purge_links import purge_links
from linkfix.recreate import run_recreate
from linkfix.resource_client import ResourceClient
from linkfix.run_log import RunLogger
from linkfix.security_utils import mask_sensitive


# ============================================================================
# Configuration & Utilities
# ============================================================================

def _default_client_factory(config: LinkFixConfig) -> ResourceClient:
    from linkfix.sharepoint_client import make_sharepoint_client
    return make_sharepoint_client(config)


class LinkFixContext:
    """Shared context for CLI commands"""

    def __init__(
        self,
        work_dir: Optional[Path] = None,
        client_factory: Optional[Callable[[LinkFixConfig], ResourceClient]] = None,
    ):
        self.work_dir = Path(work_dir) if work_dir else Path.cwd()
        self.client_factory = client_factory or _default_client_factory

    def load_config(self, **overrides) -> LinkFixConfig:
        config = apply_overrides(get_config(self.work_dir), **overrides)
        if not config.library:
            raise ConfigurationError(
                message="Library not configured",
                suggestion=(
                    "Add the library to linkfix.yaml:\n"
                    "  library: /sites/Team/Shared Documents\n\n"
                    "Or pass --library, or set LINKFIX_LIBRARY"
                ),
            )
        return config

    def make_client(self, config: LinkFixConfig) -> ResourceClient:
        return self.client_factory(config)


def _fail(error: Exception, logger: Optional[RunLogger] = None) -> None:
    click.echo(str(error), err=True)
    if logger:
        click.echo(f"Error log:  {logger.error_log_path}", err=True)
        click.echo(f"Transcript: {logger.transcript_path}", err=True)
    sys.exit(1)


# ============================================================================
# Click Group Setup
# ============================================================================

@click.group()
@click.pass_context
def cli(ctx):
    """
    LinkFix - Repair SharePoint link items

    Recreates "Link to a Document" items from a UI-created template so
    browsers follow them instead of downloading them.
    """
    if ctx.obj is None:
        ctx.obj = LinkFixContext()


# ============================================================================
# Remediation Commands
# ============================================================================

@cli.command()
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), help='Input CSV (Title,URL,Description)')
@click.option('--library', help='Server-relative library path')
@click.option('--template', 'template_name', help='Template item name, e.g. test.aspx')
@click.option('--hidden-folder', help='Folder that keeps the template hidden')
@click.option('--log-dir', type=click.Path(file_okay=False), help='Directory for run logs')
@click.pass_obj
def recreate(ctx: LinkFixContext, csv_path: Optional[str], library: Optional[str],
             template_name: Optional[str], hidden_folder: Optional[str], log_dir: Optional[str]):
    """
    Recreate link items from the template

    For every CSV row: copy the template to a free name in the library,
    then set Title, name and link target from the row.

    Examples:
        linkfix recreate
        linkfix recreate --csv links.csv
        linkfix recreate --template good-link.aspx --hidden-folder _tpl
    """
    try:
        config = ctx.load_config(
            input_csv=csv_path,
            library=library,
            template_name=template_name,
            hidden_folder=hidden_folder,
            log_dir=log_dir,
        )
    except LinkFixError as e:
        _fail(e)

    logger = RunLogger(config.resolve_path(config.log_dir), "recreate")
    try:
        with logger:
            client = ctx.make_client(config)
            summary = run_recreate(config, logger, client)
    except LinkFixError as e:
        _fail(e, logger)

    if summary.failed:
        click.echo(f"\n[!] {summary.failed} link(s) failed - see {summary.error_log_path}", err=True)
        sys.exit(1)

    click.echo("\n[v] Recreate complete!")


@cli.command()
@click.option('--output', type=click.Path(dir_okay=False), help='CSV file to write')
@click.option('--library', help='Server-relative library path')
@click.pass_obj
def export(ctx: LinkFixContext, output: Optional[str], library: Optional[str]):
    """
    Export link items to CSV

    The CSV can be used as input to `linkfix recreate`.

    Examples:
        linkfix export
        linkfix export --output before-fix.csv
    """
    try:
        config = ctx.load_config(export_csv=output, library=library)
    except LinkFixError as e:
        _fail(e)

    logger = RunLogger(config.resolve_path(config.log_dir), "export")
    try:
        with logger:
            client = ctx.make_client(config)
            export_links(
                client,
                config.library,
                config.resolve_path(config.export_csv),
                logger,
                hidden_folder=config.hidden_folder,
            )
    except LinkFixError as e:
        _fail(e, logger)

    click.echo("\n[v] Export complete!")


@cli.command()
@click.option('--csv', 'csv_path', type=click.Path(dir_okay=False), help='Export CSV listing items to delete')
@click.option('--library', help='Server-relative library path')
@click.option('--apply', is_flag=True, help='Actually delete (default is a dry run)')
@click.option('--yes', '-y', is_flag=True, help='Do not ask for confirmation')
@click.pass_obj
def purge(ctx: LinkFixContext, csv_path: Optional[str], library: Optional[str], apply: bool, yes: bool):
    """
    Delete broken link items listed in an export CSV

    Items go to the site recycle bin. The template folder is never touched.

    Examples:
        linkfix purge                       # Preview
        linkfix purge --apply               # Delete
        linkfix purge --csv old.csv --apply --yes
    """
    try:
        config = ctx.load_config(export_csv=csv_path, library=library)
    except LinkFixError as e:
        _fail(e)

    if apply and not yes:
        click.confirm("[!] This will delete link items from SharePoint. Continue?", abort=True)

    logger = RunLogger(config.resolve_path(config.log_dir), "purge")
    try:
        with logger:
            client = ctx.make_client(config)
            result = purge_links(
                client,
                config.library,
                config.resolve_path(config.export_csv),
                config.hidden_folder,
                logger,
                apply=apply,
            )
    except LinkFixError as e:
        _fail(e, logger)

    if result.failed:
        sys.exit(1)


# ============================================================================
# Setup Commands
# ============================================================================

@cli.command()
@click.option('--force', is_flag=True, help='Overwrite an existing linkfix.yaml')
@click.pass_obj
def init(ctx: LinkFixContext, force: bool):
    """
    Write a linkfix.yaml template in the current directory

    Examples:
        linkfix init
        linkfix init --force
    """
    yaml_path = ctx.work_dir / "linkfix.yaml"
    if yaml_path.exists() and not force:
        click.echo("[!] linkfix.yaml already exists (use --force to overwrite)")
        return

    yaml_path.write_text(create_config_template(), encoding="utf-8")
    click.echo(f"[v] Created {yaml_path}")
    click.echo()
    click.echo("Next steps:")
    click.echo("  1. Edit linkfix.yaml: site_url, library, credentials")
    click.echo("  2. Create the template link item in the library through the SharePoint UI")
    click.echo("  3. Run: linkfix export")


@cli.command()
@click.pass_obj
def info(ctx: LinkFixContext):
    """Show resolved configuration and where each value came from"""
    config = get_config(ctx.work_dir)
    sources = config._sources

    click.echo("[list] LinkFix Configuration\n")
    click.echo("=" * 60)
    rows = [
        ("site_url", config.site_url),
        ("library", config.library),
        ("template_name", config.template_name),
        ("hidden_folder", config.hidden_folder),
        ("input_csv", config.resolve_path(config.input_csv)),
        ("export_csv", config.resolve_path(config.export_csv)),
        ("log_dir", config.resolve_path(config.log_dir)),
        ("client_id", mask_sensitive(config.client_id) if config.client_id else None),
        ("username", config.username),
    ]
    for key, value in rows:
        source = sources.get(key, "default")
        click.echo(f"{key:14} {value if value is not None else 'Not set'}  ({source})")

    issues = config.validate()
    click.echo("\n[*] Quick Check")
    click.echo("-" * 60)
    if issues:
        for issue in issues:
            click.echo(f"[!]  {issue}")
    else:
        click.echo("[v] All checks passed")


# ============================================================================
# Version
# ============================================================================

@cli.command()
def version():
    """Show LinkFix version"""
    click.echo(f"LinkFix CLI v{__version__}")
    click.echo("Link item repair for SharePoint Online")


# ============================================================================
# Entry Point
# ============================================================================

if __name__ == '__main__':
    cli()
