# src/models/condition.py

"""Device condition tiers quoted by the buyback API."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Condition:
    """One price tier: API identifier, display name and price field."""

    id: str
    name: str
    price_key: str


# Iteration order is also the ledger emission order.
CONDITION_TABLE: tuple[Condition, ...] = (
    Condition("6", "Brand New", "price_6"),
    Condition("5", "Flawless", "price_5"),
    Condition("4", "Good", "price_4"),
    Condition("11", "Average", "price_11"),
    Condition("3", "Fair", "price_3"),
    Condition("1", "Faulty", "price_1"),
)

TOP_PRICE_KEY: str = CONDITION_TABLE[0].price_key
