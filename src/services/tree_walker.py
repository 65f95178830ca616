# src/services/tree_walker.py

"""Depth-first walk of the vendor's product-option tree."""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.config.settings import Settings
from src.filters.record_extractor import RecordExtractor
from src.models.condition import TOP_PRICE_KEY
from src.models.price_record import AttributePath
from src.scrapers.buyback_client import BuybackClient
from src.storage.ledger import CsvLedger

logger = logging.getLogger("buyback_tracker.walker")


class BranchStatus(Enum):
    """How a single node of the walk ended."""

    INTERNAL = "internal"
    LEAF = "leaf"
    REJECTED = "rejected"
    FETCH_FAILED = "fetch_failed"
    NO_DATA = "no_data"
    MAX_DEPTH_EXCEEDED = "max_depth_exceeded"


@dataclass
class BranchOutcome:
    """Result of walking one attribute path, including its subtree."""

    path: AttributePath
    status: BranchStatus
    records_emitted: int = 0
    children: list["BranchOutcome"] = field(
        default_factory=lambda: list["BranchOutcome"]()
    )

    @property
    def total_records(self) -> int:
        return self.records_emitted + sum(
            child.total_records for child in self.children
        )


@dataclass
class CrawlSummary:
    """Counters accumulated over a whole crawl."""

    requests: int = 0
    leaves: int = 0
    records_written: int = 0
    write_failures: int = 0
    fetch_failures: int = 0
    empty_responses: int = 0
    rejected_leaves: int = 0
    depth_exceeded: int = 0


def is_leaf(data: dict[str, Any]) -> bool:
    """A node is priced when its first product exposes the top tier key."""
    products = data.get("productList") or []
    return (
        bool(products)
        and isinstance(products[0], dict)
        and TOP_PRICE_KEY in products[0]
    )


class TreeWalker:
    """Visits option nodes one at a time and records every priced leaf.

    Children are walked strictly in API order, each descent preceded by
    ``request_delay`` seconds of suspension. Branch failures are returned
    as :class:`BranchOutcome` statuses and never raised; anything else
    (a response of the wrong shape) propagates to the caller.
    """

    def __init__(
        self,
        client: BuybackClient,
        ledger: CsvLedger,
        *,
        request_delay: float | None = None,
        max_depth: int | None = None,
    ) -> None:
        self.client = client
        self.ledger = ledger
        self.request_delay: float = (
            Settings.REQUEST_DELAY if request_delay is None else request_delay
        )
        self.max_depth: int = (
            Settings.MAX_DEPTH if max_depth is None else max_depth
        )
        self.summary = CrawlSummary()

    async def walk(
        self, path: AttributePath = Settings.SEED_PATH
    ) -> BranchOutcome:
        """Walk the subtree rooted at *path* and return its outcome tree."""
        path = tuple(path)
        if len(path) > self.max_depth:
            self.summary.depth_exceeded += 1
            logger.error(
                "Max depth %d exceeded at %s; abandoning branch",
                self.max_depth,
                " > ".join(path),
            )
            return BranchOutcome(path, BranchStatus.MAX_DEPTH_EXCEEDED)

        self.summary.requests += 1
        data = await asyncio.to_thread(self.client.fetch, path)
        if data is None:
            self.summary.fetch_failures += 1
            return BranchOutcome(path, BranchStatus.FETCH_FAILED)
        if not data or data.get("productList") is None:
            self.summary.empty_responses += 1
            logger.warning("No data for %s", " > ".join(path))
            return BranchOutcome(path, BranchStatus.NO_DATA)

        if is_leaf(data):
            return self._record_leaf(path, data)

        outcome = BranchOutcome(path, BranchStatus.INTERNAL)
        for option in data["productList"]:
            await asyncio.sleep(self.request_delay)
            outcome.children.append(
                await self.walk(path + (option["url"],))
            )
        return outcome

    def _record_leaf(
        self, path: AttributePath, data: dict[str, Any]
    ) -> BranchOutcome:
        """Extract records from a priced leaf and append them to the ledger."""
        self.summary.leaves += 1
        result = RecordExtractor.extract(data)
        if result.rejected:
            self.summary.rejected_leaves += 1
            return BranchOutcome(path, BranchStatus.REJECTED)

        written = 0
        for record in result.records:
            if self.ledger.append(record):
                written += 1
                logger.info(
                    "Logged: %s | %s | %s | %s | $%s",
                    record.phone_model,
                    record.carrier,
                    record.storage,
                    record.condition,
                    record.price,
                )
            else:
                self.summary.write_failures += 1
        self.summary.records_written += written
        return BranchOutcome(path, BranchStatus.LEAF, records_emitted=written)
