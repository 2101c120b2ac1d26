#!/usr/bin/env python
"""
Azure Resource Manager cmdlets CLI

Data Lake Analytics jobs, Azure Monitor metric dimensions, Intune locations
and network security group removal from the command line.
"""

import os
import sys
from datetime import datetime
from typing import Dict, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table
from prompt_toolkit import PromptSession
from prompt_toolkit.styles import Style

from .azure_client import (
    DataLakeAnalyticsJobClient,
    ExtendedJobData,
    InsightsClient,
    IntuneClient,
    NetworkClient,
    SubscriptionManager,
)
from .models import ModelValidationError
from .odata_filter import JobResult, JobState, build_job_filter
from .output_classes import DimensionCollection
from . import __version__

term = Console()

# Track current subscription
current_subscription = None
verbose_output = False

PROMPT_STYLE = Style.from_dict({"prompt": "#00aa00 bold"})
PROMPT_SESSION = PromptSession(
    style=PROMPT_STYLE,
    complete_while_typing=False,
)


# ============================================================================
# HELPER FUNCTIONS - Output Formatting & Validation
# ============================================================================


def error(message: str, exit_code: int = 1):
    """Print error message and exit."""
    term.print(f"[red]✗ Error:[/red] {message}")
    sys.exit(exit_code)


def success(message: str):
    """Print success message."""
    term.print(f"[green]✓[/green] {message}")


def warn(message: str):
    """Print warning message."""
    term.print(f"[yellow]⚠[/yellow] {message}")


def info(message: str):
    """Print info message."""
    term.print(f"[cyan]ℹ[/cyan] {message}")


def verbose(message: str):
    """Print a timestamped message when --verbose is set."""
    if verbose_output:
        timestamp = datetime.now().strftime("%H:%M:%S")
        term.print(f"[dim]{timestamp} {message}[/dim]")


def prompt_confirm(message: str, default: bool = False) -> bool:
    """Read yes/no confirmation using prompt_toolkit when interactive.

    Falls back to click.confirm for non-interactive environments (e.g., tests).
    """
    if sys.stdin.isatty() and sys.stdout.isatty():
        default_hint = "Y/n" if default else "y/N"

        while True:
            try:
                response = PROMPT_SESSION.prompt(f"{message} [{default_hint}]: ").strip()
            except (KeyboardInterrupt, EOFError):
                return False

            if not response:
                return default

            normalized = response.lower()
            if normalized in {"y", "yes"}:
                return True
            if normalized in {"n", "no"}:
                return False

            term.print("[yellow]Please answer 'y' or 'n'.[/yellow]")

    return click.confirm(message, default=default)


def resolve_single_argument(
    option_value: Optional[str],
    positional_value: Optional[str],
    option_name: str,
    description: str,
) -> str:
    """Resolve a command's primary argument from option or positional input."""
    if option_value and positional_value and option_value != positional_value:
        error(
            f"Conflicting values provided. Use either --{option_name} or positional {description}, not both."
        )

    value = option_value or positional_value
    if not value:
        error(f"Missing {description}. Use --{option_name} or pass it as positional argument.")

    return value


def require_subscription(subscription_id: Optional[str] = None) -> str:
    """Validate that a subscription is available.

    Args:
        subscription_id: Optional subscription ID to use instead of current

    Returns:
        str: The effective subscription ID

    Raises:
        SystemExit: If no subscription is available
    """
    effective_id = (
        subscription_id or current_subscription or os.getenv("AZURE_SUBSCRIPTION_ID")
    )
    if not effective_id:
        error(
            "No subscription selected. Use 'use-subscription' or provide --subscription-id"
        )
    return effective_id


def subscription_from_resource_id(resource_id: str) -> Optional[str]:
    """Extract the subscription ID from an ARM resource ID, if present."""
    parts = [p for p in resource_id.split("/") if p]
    for index, part in enumerate(parts[:-1]):
        if part.lower() == "subscriptions":
            return parts[index + 1]
    return None


def _display(value) -> str:
    if value is None:
        return "-"
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


class TimestampParamType(click.ParamType):
    """ISO 8601 timestamp; a trailing 'Z' means UTC."""

    name = "timestamp"

    def convert(self, value, param, ctx):
        if isinstance(value, datetime):
            return value

        text = value.strip()
        if text[-1:] in ("Z", "z"):
            text = text[:-1] + "+00:00"

        try:
            return datetime.fromisoformat(text)
        except ValueError:
            self.fail(f"{value!r} is not an ISO 8601 timestamp", param, ctx)


TIMESTAMP = TimestampParamType()


# ============================================================================


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="azure-rm-cmdlets")
@click.option("--verbose", "verbose_flag", is_flag=True, help="Show timestamped progress messages")
@click.pass_context
def cli(ctx, verbose_flag: bool):
    """Azure Resource Manager cmdlets - jobs, metrics, Intune and network."""
    global verbose_output
    verbose_output = verbose_flag

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@cli.command("get-job")
@click.argument("account_arg", required=False)
@click.option("--account", default=None, help="Data Lake Analytics account name")
@click.option("--job-id", type=click.UUID, default=None, help="ID of a specific job to return")
@click.option(
    "--include",
    type=click.Choice([e.value for e in ExtendedJobData], case_sensitive=False),
    default=ExtendedJobData.NONE.value,
    help="Additional job data to include with --job-id",
)
@click.option("--name", default=None, help="Only jobs with this friendly name")
@click.option("--submitter", default=None, help="Only jobs submitted by this user")
@click.option(
    "--submitted-after", type=TIMESTAMP, default=None, help="Only jobs submitted at or after this time"
)
@click.option(
    "--submitted-before", type=TIMESTAMP, default=None, help="Only jobs submitted before this time"
)
@click.option(
    "--state",
    "states",
    multiple=True,
    type=click.Choice([s.value for s in JobState], case_sensitive=False),
    help="Only jobs in this state (repeatable)",
)
@click.option(
    "--result",
    "results",
    multiple=True,
    type=click.Choice([r.value for r in JobResult], case_sensitive=False),
    help="Only jobs with this result (repeatable)",
)
@click.option("--top", type=click.IntRange(min=1), default=None, help="Maximum number of jobs")
@click.option("--order-by", default=None, help="OData orderby clause (e.g., 'submitTime desc')")
@click.option(
    "--escape-quotes",
    is_flag=True,
    help="Double single quotes in --name/--submitter before building the filter",
)
@click.option("--resource-group", default=None, help="Resource group of the account")
def get_job(
    account_arg: Optional[str],
    account: Optional[str],
    job_id,
    include: str,
    name: Optional[str],
    submitter: Optional[str],
    submitted_after: Optional[datetime],
    submitted_before: Optional[datetime],
    states: Tuple[str, ...],
    results: Tuple[str, ...],
    top: Optional[int],
    order_by: Optional[str],
    escape_quotes: bool,
    resource_group: Optional[str],
):
    """Get a Data Lake Analytics job, or list jobs matching filters.

    With --job-id a single job is returned, optionally with --include data.
    Without it, jobs are listed and the filter options apply.
    """
    try:
        account = resolve_single_argument(account, account_arg, "account", "account name")
        include_data = ExtendedJobData(include)

        if job_id is not None and job_id.int == 0:
            job_id = None

        filter_options = [
            name, submitter, submitted_after, submitted_before, states, results, top, order_by,
        ]
        if job_id is not None and any(option for option in filter_options):
            error("Filter options cannot be combined with --job-id")
        if job_id is None and include_data != ExtendedJobData.NONE:
            error("--include requires --job-id")

        scope = f"account '{account}'"
        if resource_group:
            scope += f" in resource group '{resource_group}'"

        if job_id is not None:
            verbose(f"Getting job {job_id} from {scope}")
            with term.status("[bold blue]Fetching job...[/bold blue]"):
                client = DataLakeAnalyticsJobClient()
                job = client.get_job(account, str(job_id))

            if include_data != ExtendedJobData.NONE:
                if not client.supports_extended_data(job):
                    warn(
                        f"Additional job data is only available for USql jobs. The job type is: {job['type']}"
                    )
                else:
                    with term.status("[bold blue]Fetching extended job data...[/bold blue]"):
                        client.attach_extended_data(account, job, include_data)

            print_job_details(job)
            return

        job_filter = build_job_filter(
            submitter=submitter,
            submitted_after=submitted_after,
            submitted_before=submitted_before,
            name=name,
            states=[JobState(s) for s in states],
            results=[JobResult(r) for r in results],
            escape_quotes=escape_quotes,
        )
        verbose(f"Listing jobs in {scope} with filter: {job_filter or '(none)'}")

        with term.status("[bold blue]Fetching jobs...[/bold blue]"):
            client = DataLakeAnalyticsJobClient()
            jobs = client.list_jobs(account, job_filter=job_filter, top=top, orderby=order_by)

        if not jobs:
            term.print("No jobs found")
            return

        table = Table(title=f"Data Lake Analytics Jobs ({account})")
        table.add_column("Name", style="cyan", no_wrap=False)
        table.add_column("Job ID", style="magenta")
        table.add_column("State", style="yellow")
        table.add_column("Result", style="green")
        table.add_column("Submitter")
        table.add_column("Submitted")

        for job in jobs:
            table.add_row(
                _display(job["name"]),
                _display(job["job_id"]),
                _display(job["state"]),
                _display(job["result"]),
                _display(job["submitter"]),
                _display(job["submit_time"]),
            )

        term.print(table)

    except Exception as e:
        error(str(e))


def print_job_details(job: Dict):
    """Print a job and any attached extended data."""
    term.print(f"\n[bold]Job Details[/bold]")
    term.print(f"  Name: {_display(job['name'])}")
    term.print(f"  Job ID: {_display(job['job_id'])}")
    term.print(f"  Type: {_display(job['type'])}")
    term.print(f"  Submitter: {_display(job['submitter'])}")
    term.print(f"  State: {_display(job['state'])}")
    term.print(f"  Result: {_display(job['result'])}")
    term.print(f"  Degree of Parallelism: {_display(job['degree_of_parallelism'])}")
    term.print(f"  Priority: {_display(job['priority'])}")
    term.print(f"  Submitted: {_display(job['submit_time'])}")
    term.print(f"  Started: {_display(job['start_time'])}")
    term.print(f"  Ended: {_display(job['end_time'])}")

    if "debug_data" in job:
        paths = (job["debug_data"] or {}).get("paths") or []
        term.print("\n[bold]Debug Data Paths:[/bold]")
        if not paths:
            term.print("  [dim]None[/dim]")
        for path in paths:
            term.print(f"  • {path}", soft_wrap=True)

    if "statistics" in job:
        stats = job["statistics"] or {}
        term.print("\n[bold]Statistics:[/bold]")
        term.print(f"  Last Updated: {_display(stats.get('last_update_time_utc'))}")
        term.print(f"  Finalizing Time: {_display(stats.get('finalizing_time_utc'))}")

        stages = stats.get("stages") or []
        if stages:
            table = Table(title="Vertex Stages")
            table.add_column("Stage", style="cyan")
            table.add_column("Succeeded", style="green")
            table.add_column("Failed", style="red")
            table.add_column("Total")
            for stage in stages:
                table.add_row(
                    _display(stage.get("stage_name")),
                    _display(stage.get("succeeded_count")),
                    _display(stage.get("failed_count")),
                    _display(stage.get("total_count")),
                )
            term.print(table)


@cli.command("get-metric-dimensions")
@click.argument("resource_id")
@click.option("--metric", "metrics", multiple=True, help="Metric name (repeatable; default: all)")
@click.option("--with-values", is_flag=True, help="Also query the values seen for each dimension")
@click.option(
    "--timespan",
    default=None,
    help="ISO 8601 interval for --with-values (e.g., '2024-01-01T00:00:00Z/2024-01-02T00:00:00Z')",
)
@click.option("--subscription-id", default=None, help="Azure subscription ID")
def get_metric_dimensions(
    resource_id: str,
    metrics: Tuple[str, ...],
    with_values: bool,
    timespan: Optional[str],
    subscription_id: Optional[str],
):
    """Show the dimensions of a resource's metric definitions."""
    try:
        effective_subscription_id = require_subscription(
            subscription_id or subscription_from_resource_id(resource_id)
        )

        with term.status("[bold blue]Fetching metric definitions...[/bold blue]"):
            client = InsightsClient(subscription_id=effective_subscription_id)
            definitions = client.list_metric_definitions(resource_id, list(metrics))

        if not definitions:
            term.print("No metric definitions found")
            return

        for definition in definitions:
            dimensions = definition["dimensions"]

            if with_values and dimensions:
                verbose(f"Querying dimension values for {definition['name']}")
                with term.status("[bold blue]Fetching dimension values...[/bold blue]"):
                    values = client.list_dimension_values(
                        resource_id,
                        definition["name"],
                        [d.Name for d in dimensions],
                        timespan=timespan,
                    )
                for dimension in dimensions:
                    dimension.Values = values.get(dimension.Name, [])

            term.print(
                f"\n[bold cyan]{definition['localized_name'] or definition['name']}[/bold cyan]"
                f" ({definition['name']}, unit: {_display(definition['unit'])})"
            )
            collection = DimensionCollection(dimensions)
            if len(collection):
                term.print(str(collection), markup=False, highlight=False)
            else:
                term.print("  [dim]No dimensions[/dim]")

    except Exception as e:
        error(str(e))


@cli.command("get-intune-locations")
@click.option("--endpoint", default=None, help="Resource Manager endpoint")
def get_intune_locations(endpoint: Optional[str]):
    """List Intune locations."""
    try:
        with term.status("[bold blue]Fetching Intune locations...[/bold blue]"):
            client = IntuneClient(endpoint=endpoint)
            locations = client.list_locations()

        if not locations:
            term.print("No Intune locations found")
            return

        table = Table(title="Intune Locations")
        table.add_column("Name", style="cyan")
        table.add_column("Host Name", style="green")
        table.add_column("ID", style="magenta", no_wrap=False)

        for location in locations:
            host_name = location.Properties.HostName if location.Properties else None
            table.add_row(_display(location.Name), _display(host_name), _display(location.Id))

        term.print(table)

    except ModelValidationError as e:
        error(f"Invalid response from Intune: {e}")
    except Exception as e:
        error(str(e))


@cli.command("remove-nsg")
@click.argument("name_arg", required=False)
@click.option("--name", default=None, help="Name of the network security group to remove")
@click.option("--resource-group", required=True, help="Resource group of the network security group")
@click.option("--force", is_flag=True, help="Skip confirmation prompt")
@click.option("--passthru", is_flag=True, help="Print True when the removal succeeds")
@click.option("--subscription-id", default=None, help="Azure subscription ID")
def remove_nsg(
    name_arg: Optional[str],
    name: Optional[str],
    resource_group: str,
    force: bool,
    passthru: bool,
    subscription_id: Optional[str],
):
    """Remove a network security group."""
    try:
        name = resolve_single_argument(name, name_arg, "name", "network security group name")
        effective_subscription_id = require_subscription(subscription_id)

        client = NetworkClient(subscription_id=effective_subscription_id)
        nsg = client.get_network_security_group(resource_group, name)

        if not force:
            warn(
                f"Remove network security group '{nsg['name']}' "
                f"({nsg['security_rules']} rule(s)) from resource group '{resource_group}'?"
            )
            if not prompt_confirm("Are you sure?", default=False):
                term.print("[dim]Removal cancelled[/dim]")
                return

        with term.status("[bold blue]Removing network security group...[/bold blue]"):
            client.remove_network_security_group(resource_group, name)

        verbose(f"Removed network security group {name}")
        success(f"Removed network security group '[bold]{name}[/bold]'")

        if passthru:
            click.echo("True")

    except Exception as e:
        error(str(e))


@cli.command()
def subscriptions():
    """List available Azure subscriptions."""
    try:
        with term.status("[bold blue]Fetching subscriptions...[/bold blue]"):
            sub_manager = SubscriptionManager()
            subs = sub_manager.list_subscriptions()

        if not subs:
            term.print("No subscriptions found")
            return

        table = Table(title="Available Subscriptions")
        table.add_column("Subscription ID", style="cyan")
        table.add_column("Display Name", style="green")
        table.add_column("State", style="yellow")

        for sub in subs:
            marker = (
                " ✓"
                if current_subscription
                and sub["subscription_id"] == current_subscription
                else ""
            )
            table.add_row(
                sub["subscription_id"], sub["display_name"] + marker, _display(sub["state"])
            )

        term.print(table)

    except Exception as e:
        error(str(e))


@cli.command("use-subscription")
@click.argument("subscription")
def use_subscription(subscription: str):
    """Switch to a different Azure subscription (by ID or display name)."""
    global current_subscription

    try:
        sub = SubscriptionManager().find_subscription(subscription)
        if not sub:
            error(f"Subscription not found: {subscription}")

        current_subscription = sub["subscription_id"]
        os.environ["AZURE_SUBSCRIPTION_ID"] = current_subscription

        success(f"Switched to subscription: [bold]{sub['display_name']}[/bold]")
        term.print(f"  ID: {sub['subscription_id']}")

    except Exception as e:
        error(str(e))


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
