# src/cli/runner.py

"""Headless crawl runner: wires the client, ledger and walker together."""

import logging
import time

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.scrapers.buyback_client import BuybackClient
from src.services.tree_walker import (
    BranchOutcome,
    BranchStatus,
    CrawlSummary,
    TreeWalker,
)
from src.storage.ledger import CsvLedger

logger = logging.getLogger("buyback_tracker.cli")

# Stderr console so the summary never mixes with piped output
_err = Console(stderr=True)


def _print_summary(
    summary: CrawlSummary, ledger: CsvLedger, elapsed: float
) -> None:
    """Render a Rich table of crawl counters to stderr."""
    table = Table(
        title="Crawl Summary",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Requests", str(summary.requests))
    table.add_row("Priced leaves", str(summary.leaves))
    table.add_row("Records written", f"[green]{summary.records_written}[/green]")
    table.add_row("Rejected leaves", str(summary.rejected_leaves))
    table.add_row("Fetch failures", str(summary.fetch_failures))
    table.add_row("Empty responses", str(summary.empty_responses))
    table.add_row("Write failures", str(summary.write_failures))
    table.add_row("Depth limit hits", str(summary.depth_exceeded))
    table.add_row("Ledger", str(ledger.path))
    table.add_row("Elapsed", f"{elapsed:.1f}s")

    _err.print(table)


async def run_crawl(
    client: BuybackClient | None = None,
    ledger: CsvLedger | None = None,
) -> int:
    """Crawl from the seed path and return an exit code (0=ok, 1=fail).

    Only a failure of the seed request itself counts as a failed run;
    lost branches further down are reported in the summary.
    """
    client = client or BuybackClient()
    ledger = ledger or CsvLedger()
    walker = TreeWalker(client, ledger)

    logger.info("Starting script...")
    _err.print(
        f"[bold]Crawling:[/bold] {' > '.join(Settings.SEED_PATH)}  "
        f"[dim]ledger={ledger.path}[/dim]"
    )
    start = time.monotonic()
    try:
        outcome: BranchOutcome = await walker.walk(Settings.SEED_PATH)
    finally:
        client.close()
    elapsed = time.monotonic() - start

    logger.info("Script completed in %.3f seconds.", elapsed)
    _print_summary(walker.summary, ledger, elapsed)

    if outcome.status in (
        BranchStatus.FETCH_FAILED,
        BranchStatus.NO_DATA,
    ):
        _err.print("[red]Seed request returned no data.[/red]")
        return 1
    return 0
