# src/filters/record_extractor.py

"""Derive validated price records from a leaf API response."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.config.settings import Settings
from src.models.condition import CONDITION_TABLE
from src.models.price_record import PriceRecord

logger = logging.getLogger("buyback_tracker.extractor")


@dataclass
class ExtractionResult:
    """Records derived from one leaf, or the reason the leaf was dropped."""

    records: list[PriceRecord] = field(
        default_factory=lambda: list[PriceRecord]()
    )
    skip_reason: str | None = None

    @property
    def rejected(self) -> bool:
        return self.skip_reason is not None


def _option_names(options: list[dict[str, Any]]) -> list[str]:
    return [option["option_name"] for option in options]


def resolve_model(options: list[dict[str, Any]]) -> str:
    """Pick the most specific model name among the selected options.

    Every option prefixed with the product family is a candidate; the
    longest name wins, so "iPhone 16 Pro Max" beats a bare "iPhone".
    """
    candidates = [
        name
        for name in _option_names(options)
        if name.startswith(Settings.PRODUCT_FAMILY)
    ]
    if not candidates:
        return Settings.UNKNOWN_MODEL
    return max(candidates, key=len)


def resolve_carrier(options: list[dict[str, Any]]) -> str:
    """Return the first selected option naming a known carrier."""
    for name in _option_names(options):
        if name in Settings.KNOWN_CARRIERS:
            return name
    return Settings.UNKNOWN_CARRIER


def resolve_storage(options: list[dict[str, Any]]) -> str | None:
    """Return the first selected option carrying a capacity unit."""
    for name in _option_names(options):
        if is_valid_storage(name):
            return name
    return None


def is_valid_storage(storage: str | None) -> bool:
    """True when *storage* is non-empty and mentions GB or TB."""
    if not storage:
        return False
    return any(unit in storage for unit in Settings.CAPACITY_UNITS)


def reject_reason(
    phone_model: str, carrier: str, storage: str | None
) -> str | None:
    """Return why a resolved leaf must be dropped, or None if it is usable."""
    if not is_valid_storage(storage):
        return f"invalid storage option: {storage}"
    if not phone_model or phone_model == Settings.UNKNOWN_MODEL:
        return f"unresolved phone model: {phone_model!r}"
    if not carrier or carrier == Settings.UNKNOWN_CARRIER:
        return f"unresolved carrier: {carrier!r}"
    return None


class RecordExtractor:
    """Turn a priced leaf into one record per (product, priced condition)."""

    @staticmethod
    def extract(leaf: dict[str, Any]) -> ExtractionResult:
        """Resolve model, carrier and storage, then fan out over conditions.

        No I/O happens here; the caller decides where records go. A leaf
        failing validation yields no records and a ``skip_reason``.
        """
        options: list[dict[str, Any]] = leaf.get("selectedOptionList") or []
        phone_model = resolve_model(options)
        carrier = resolve_carrier(options)
        storage = resolve_storage(options)

        reason = reject_reason(phone_model, carrier, storage)
        if reason is not None:
            logger.warning(
                "Skipping leaf (%s): model=%s, carrier=%s, storage=%s",
                reason,
                phone_model,
                carrier,
                storage,
            )
            return ExtractionResult(skip_reason=reason)

        logger.info(
            "Parsed data: phoneModel=%s, carrier=%s, storage=%s",
            phone_model,
            carrier,
            storage,
        )

        result = ExtractionResult()
        for product in leaf.get("productList") or []:
            for condition in CONDITION_TABLE:
                price = product.get(condition.price_key)
                if not price:
                    logger.debug(
                        "No price found for condition: %s", condition.name
                    )
                    continue
                logger.debug(
                    "Found price for condition %s: $%s",
                    condition.name,
                    price,
                )
                result.records.append(
                    PriceRecord(
                        timestamp=datetime.now().strftime(
                            Settings.TIMESTAMP_FORMAT
                        ),
                        phone_model=phone_model,
                        carrier=carrier,
                        storage=storage,
                        condition=condition.name,
                        price=price,
                    )
                )
        return result
