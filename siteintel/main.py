"""CLI interface for the website intelligence pipeline."""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import typer

# Load environment variables from .env file
load_dotenv()
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from siteintel.acquisition.detector import DETECTION_RULES_VERSION, detect_signals
from siteintel.acquisition.engine import FetchOrchestrator
from siteintel.errors import AcquisitionError, InvalidUrl
from siteintel.models.acquisition import AcquisitionResult
from siteintel.models.config import PipelineConfig
from siteintel.models.profile import ExtractedProfile
from siteintel.pipeline import WebsiteIntelligencePipeline

# Initialize CLI app
app = typer.Typer(
    name="siteintel",
    help="Build a structured business profile from a company website",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Set up logging with rich formatting."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


@app.command()
def profile(
    url: str = typer.Argument(..., help="Business website URL to profile"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Output file path for the profile (JSON)"
    ),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Overall time budget in seconds"
    ),
    headless: bool = typer.Option(
        True, "--headless/--no-headless", help="Run browser in headless mode"
    ),
    fallback: bool = typer.Option(
        False, "--fallback", help="Print a domain-based placeholder profile if the site can't be read"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """
    Extract a business profile from a website.

    Fetches the page cheaply when possible, renders it in a headless browser
    when it relies on JavaScript, then mines name, description, contacts,
    product headings and industry from the markup.

    Example:
        siteintel profile acme-widgets.com --output acme.json
    """
    setup_logging(verbose)

    console.print(Panel.fit(
        f"[bold blue]Website Intelligence[/bold blue]\n"
        f"Profiling: {url}",
        title="siteintel",
    ))

    config = PipelineConfig.from_env()
    config.browser.headless = headless

    async def run_profile() -> ExtractedProfile:
        async with WebsiteIntelligencePipeline(config) as pipeline:
            return await pipeline.analyze(url, timeout_seconds=timeout)

    try:
        result = asyncio.run(run_profile())
    except InvalidUrl as e:
        console.print(f"\n[red]{e}[/red]")
        sys.exit(1)
    except AcquisitionError as e:
        if not fallback:
            console.print(f"\n[red]Profiling failed: {e}[/red]")
            if verbose:
                console.print_exception()
            sys.exit(1)
        console.print(f"\n[yellow]Profiling failed ({e}), using placeholder profile[/yellow]")
        result = ExtractedProfile.fallback_for(url)
    except KeyboardInterrupt:
        console.print("\n[yellow]Profiling cancelled by user[/yellow]")
        sys.exit(1)

    display_profile(result)

    if output:
        output_path = Path(output)
        with open(output_path, "w") as f:
            json.dump(result.to_payload(), f, indent=2)
        console.print(f"\n[green]Profile saved to: {output_path}[/green]")


@app.command()
def fetch(
    url: str = typer.Argument(..., help="Website URL to acquire"),
    output: Optional[str] = typer.Option(
        None, "--output", "-o", help="Write the acquired markup to this file"
    ),
    headless: bool = typer.Option(
        True, "--headless/--no-headless", help="Run browser in headless mode"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose logging"
    ),
) -> None:
    """
    Acquire a page's markup without extracting a profile.

    Shows which tier produced the markup, which is useful for checking how
    a site is built before profiling it.

    Example:
        siteintel fetch https://example.com --output page.html
    """
    setup_logging(verbose)

    config = PipelineConfig.from_env()
    config.browser.headless = headless

    async def run_fetch() -> AcquisitionResult:
        async with FetchOrchestrator(config) as orchestrator:
            return await orchestrator.acquire(url)

    try:
        result = asyncio.run(run_fetch())
    except AcquisitionError as e:
        console.print(f"\n[red]Fetch failed: {e}[/red]")
        if verbose:
            console.print_exception()
        sys.exit(1)

    table = Table(title="Acquisition Result")
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Method", str(result.method))
    table.add_row("Status Code", str(result.metadata.status_code or "-"))
    table.add_row("Content Type", result.metadata.content_type or "-")
    table.add_row("JavaScript Heavy", str(result.metadata.is_javascript_heavy))
    table.add_row("Processing Time", f"{result.metadata.processing_time_ms}ms")
    table.add_row("Content Size", f"{len(result.content):,} chars")

    console.print(table)

    if output:
        output_path = Path(output)
        output_path.write_text(result.content, encoding="utf-8")
        console.print(f"\n[green]Markup saved to: {output_path}[/green]")


@app.command()
def detect(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Local HTML file"),
) -> None:
    """
    Check whether saved markup looks like a JavaScript-rendered shell.

    Example:
        siteintel detect page.html
    """
    signals = detect_signals(path.read_text(encoding="utf-8", errors="replace"))

    if signals:
        console.print(f"[yellow]JavaScript-heavy[/yellow] (rules v{DETECTION_RULES_VERSION})")
        for signal in signals:
            console.print(f"  • {signal}")
    else:
        console.print(f"[green]Static content[/green] (rules v{DETECTION_RULES_VERSION})")


def display_profile(result: ExtractedProfile) -> None:
    """Display an extracted profile in a formatted way."""
    console.print("\n")

    table = Table(title="Business Profile")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Business Name", result.business_name)
    table.add_row("Description", result.description or "-")
    table.add_row("Industry", result.industry or "-")
    table.add_row("Location", result.location or "-")
    table.add_row("Email", result.contact_info.email or "-")
    table.add_row("Phone", result.contact_info.phone or "-")
    table.add_row("Address", result.contact_info.address or "-")
    table.add_row("Source", result.source_url or "-")

    console.print(table)

    if result.products:
        products_table = Table(title="Products (from headings)")
        products_table.add_column("#", style="dim")
        products_table.add_column("Name", style="green")
        for i, product in enumerate(result.products, 1):
            products_table.add_row(str(i), product.name)
        console.print(products_table)
    else:
        console.print("[dim]No product headings found[/dim]")


@app.callback()
def main():
    """
    Website Intelligence

    Turn a business website into a structured profile: name, description,
    contact details, candidate products and industry.
    """
    pass


if __name__ == "__main__":
    app()
