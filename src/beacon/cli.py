"""Command-line interface for the Beacon agent."""

import asyncio
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .agent import AgentConfig, AuthError, ConfigError, MetricSampler, run_agent
from .utils import get_logger, setup_logging

app = typer.Typer(
    name="beacon",
    help="Host telemetry agent: samples CPU and disk usage and reports them to a collector",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def run_async(coro):
    """Run async function in sync context."""
    return asyncio.run(coro)


def load_config(config_path: Optional[Path]) -> AgentConfig:
    """Load YAML config when given, otherwise BEACON_* environment variables."""
    try:
        if config_path:
            return AgentConfig.from_yaml(str(config_path))
        return AgentConfig.from_env()
    except (OSError, yaml.YAMLError, ConfigError) as e:
        console.print(f"[red]Cannot load configuration: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def run(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Override log level"),
):
    """Authenticate and report samples until SIGINT/SIGTERM."""
    config = load_config(config_path)
    if log_level:
        config.log_level = log_level

    setup_logging(config.log_level, config.log_file)

    try:
        config.validate()
    except ConfigError as e:
        logger.critical(f"Invalid configuration: {e}")
        raise typer.Exit(1)

    try:
        run_agent(config)
    except AuthError as e:
        logger.critical(f"Cannot obtain authentication token, agent stopping: {e}")
        raise typer.Exit(1)


@app.command()
def sample(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML configuration file"),
):
    """Take one sample and print it without contacting the collector."""
    config = load_config(config_path)
    try:
        config.validate(require_secret=False)
    except ConfigError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)

    setup_logging(config.log_level, config.log_file)

    sampler = MetricSampler(config.sampling)
    result = run_async(sampler.collect())

    table = Table(title=f"Sample ({config.sampling.strategy} samplers)")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_column("Error", style="red")

    table.add_row("cpu_usage", f"{result.cpu_usage:.1f}%", result.errors.get("cpu_usage", ""))
    table.add_row("disk_usage", f"{result.disk_usage:.1f}%", result.errors.get("disk_usage", ""))
    console.print(table)

    console.print(Panel(result.to_json(), title="Payload", border_style="green"))

    if not result.complete:
        raise typer.Exit(1)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(..., help="Where to write the YAML file"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write the default configuration as YAML."""
    if path.exists() and not force:
        console.print(f"[red]{path} already exists, use --force to overwrite[/red]")
        raise typer.Exit(1)

    path.parent.mkdir(parents=True, exist_ok=True)
    AgentConfig().to_yaml(str(path))
    console.print(f"[green]Configuration written to: {path}[/green]")


if __name__ == "__main__":
    app()
