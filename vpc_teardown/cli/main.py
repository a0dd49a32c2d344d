"""Main CLI entry point using Typer."""

import logging
from typing import Optional

import typer
from rich.console import Console

from .. import __version__
from ..aws.credentials import CredentialValidationError, validate_credentials
from ..aws.gateway import ProviderGateway
from ..teardown.errors import RegionDiscoveryError
from ..teardown.orchestrator import TeardownOrchestrator
from ..teardown.reporter import TeardownReporter
from ..utils.logging import setup_logging
from .config import Config

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="vpc-teardown",
    help="Delete the default VPC and its networking resources in every AWS region",
    add_completion=False,
)

# Create Rich consoles for output
console = Console()
error_console = Console(stderr=True)

# Global config
config: Optional[Config] = None


@app.callback()
def main(
    profile: Optional[str] = typer.Option(None, "--profile", "-p", help="AWS profile name"),
    config_file: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to config file (default: ~/.vpc-teardown/config.yaml or $VPC_TEARDOWN_CONFIG)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress log output except errors"),
    no_color: bool = typer.Option(False, "--no-color", help="Disable colored output"),
):
    """Default VPC teardown across all regions of an AWS account."""
    global config

    # Load configuration
    try:
        config = Config.load(config_file)
    except ValueError as e:
        error_console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=2)

    # Override with CLI options
    if profile:
        config.aws_profile = profile

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    # Disable colors if requested
    if no_color:
        console.no_color = True
        error_console.no_color = True


@app.command()
def version():
    """Show version information."""
    console.print(f"vpc-teardown version {__version__}")


@app.command()
def run(
    bootstrap_region: Optional[str] = typer.Option(
        None, "--bootstrap-region", help="Region used to discover all other regions (default: us-east-1)"
    ),
    fail_on_error: Optional[bool] = typer.Option(
        None,
        "--fail-on-error/--no-fail-on-error",
        help="Exit with code 1 if any resource deletion or lookup failed",
    ),
    summary: Optional[bool] = typer.Option(
        None, "--summary/--no-summary", help="Print a per-region summary table after the run"
    ),
):
    """Delete every default VPC and its dependent resources, in all regions.

    For each region: internet gateways (detached first), subnets, route
    tables, network ACLs and security groups are deleted in that order, then
    the VPC itself. Failures are reported and never stop other resources or
    regions. There is no dry run and no confirmation prompt.

    Examples:
        vpc-teardown run
        vpc-teardown --profile sandbox run --fail-on-error
        vpc-teardown run --bootstrap-region eu-west-1 --no-summary
    """
    if bootstrap_region:
        config.bootstrap_region = bootstrap_region
    if fail_on_error is not None:
        config.fail_on_error = fail_on_error
    if summary is not None:
        config.show_summary = summary

    try:
        identity = validate_credentials(config.aws_profile, region_name=config.bootstrap_region)
        logger.info(f"Tearing down default VPCs in account {identity['account_id']}")

        gateway = ProviderGateway(config.gateway_config())
        reporter = TeardownReporter(console=console, error_console=error_console)
        teardown_run = TeardownOrchestrator(gateway, reporter).run()

        if config.show_summary:
            reporter.summary(teardown_run)

        if config.fail_on_error and teardown_run.has_failures:
            raise typer.Exit(code=1)

    except typer.Exit:
        raise
    except CredentialValidationError as e:
        error_console.print(f"✗ Error: {e}", style="bold red")
        raise typer.Exit(code=3)
    except RegionDiscoveryError as e:
        error_console.print(f"✗ {e}", style="bold red")
        raise typer.Exit(code=2)
    except Exception as e:
        error_console.print(f"✗ Error during teardown: {e}", style="bold red")
        logger.exception("Error in run command")
        raise typer.Exit(code=2)


def cli_main():
    """Entry point for console script."""
    app()


if __name__ == "__main__":
    cli_main()
