"""Main CLI entry point using Typer."""

import logging
import sys
from typing import Optional

import typer
from rich.console import Console

from ..aws.client import create_boto_client
from ..aws.credentials import CredentialValidationError, validate_credentials
from ..cleanup.audit import AuditStorage
from ..cleanup.cleaner import RetentionCleaner
from ..cleanup.deleter import ResourceDeleter
from ..cleanup.reporter import CleanupReporter
from ..collectors.base import BaseResourceCollector, ResourceCollectionError
from ..collectors.image_collector import ImageCollector
from ..collectors.volume_collector import VolumeCollector
from ..models.resource import IMAGE_RESOURCE_TYPE, VOLUME_RESOURCE_TYPE
from ..utils.logging import setup_logging
from .config import DEFAULT_CONFIG_PATH, Config, ConfigError

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="ec2janitor",
    help="EC2 Janitor - delete AMIs and EBS volumes older than a retention period",
    add_completion=False,
)

# Create Rich console for output
console = Console()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """EC2 Janitor - delete AMIs and EBS volumes older than a retention period."""
    ctx.obj = {"verbose": verbose, "quiet": quiet}

    # Disable colors if requested
    if no_color:
        console.no_color = True


@app.command()
def version():
    """Show version information."""
    import boto3

    from .. import __version__

    console.print(f"ec2janitor version {__version__}")
    console.print(f"Python {sys.version.split()[0]}")
    console.print(f"boto3 {boto3.__version__}")


@app.command()
def images(
    ctx: typer.Context,
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Config file path"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--execute", help="Override the config file's dryrun setting"
    ),
):
    """Deregister AMIs older than the retention period.

    Only images owned by aws_user_id (default: the calling account) are listed.
    """
    _run_cleanup(ctx, IMAGE_RESOURCE_TYPE, config_path, dry_run)


@app.command()
def volumes(
    ctx: typer.Context,
    config_path: str = typer.Option(DEFAULT_CONFIG_PATH, "--config", "-c", help="Config file path"),
    dry_run: Optional[bool] = typer.Option(
        None, "--dry-run/--execute", help="Override the config file's dryrun setting"
    ),
):
    """Delete unattached EBS volumes older than the retention period."""
    _run_cleanup(ctx, VOLUME_RESOURCE_TYPE, config_path, dry_run)


def _run_cleanup(ctx: typer.Context, resource_type: str, config_path: str, dry_run: Optional[bool]) -> None:
    options = ctx.obj or {}
    verbose = options.get("verbose", False)
    quiet = options.get("quiet", False)

    try:
        try:
            config = Config.load(config_path)
        except ConfigError as e:
            console.print(f"✗ Configuration error: {e}", style="bold red")
            raise typer.Exit(code=1)

        # Setup logging
        log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
        setup_logging(level=log_level, verbose=verbose, log_file=config.log_location)

        run_config = config.to_run_config(dry_run=dry_run)

        try:
            identity = validate_credentials(
                profile_name=config.aws_credential_profile,
                credentials_file=config.aws_credential_file,
                region_name=config.aws_region,
            )
        except CredentialValidationError as e:
            console.print(f"✗ AWS credential error: {e}", style="bold red")
            raise typer.Exit(code=1)

        client = create_boto_client(
            "ec2",
            region_name=config.aws_region,
            profile_name=config.aws_credential_profile,
            credentials_file=config.aws_credential_file,
        )

        collector: BaseResourceCollector
        if resource_type == IMAGE_RESOURCE_TYPE:
            collector = ImageCollector(client, owner_id=config.aws_user_id or identity["account_id"])
        else:
            collector = VolumeCollector(client)

        audit_storage = AuditStorage(config.audit_dir) if config.audit_dir else None
        cleaner = RetentionCleaner(
            collector=collector,
            delete_fn=ResourceDeleter(client, resource_type),
            config=run_config,
            audit_storage=audit_storage,
        )

        if not quiet:
            mode = "dry-run" if run_config.dry_run else "execute"
            console.print(f"🔍 Checking {resource_type} resources in account {identity['account_id']} ({mode})")

        try:
            run, records = cleaner.run()
        except ResourceCollectionError as e:
            console.print(f"✗ Failed to list resources: {e}", style="bold red")
            raise typer.Exit(code=3)

        if not quiet:
            CleanupReporter(console).display(run, records, show_skipped=verbose)

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"✗ Error during cleanup: {e}", style="bold red")
        logger.exception("Error in cleanup command")
        raise typer.Exit(code=2)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
