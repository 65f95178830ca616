# src/models/price_record.py

"""Price record model written to the daily ledger."""

from dataclasses import dataclass

AttributePath = tuple[str, ...]


@dataclass(frozen=True)
class PriceRecord:
    """A single trade-in quote for one phone configuration and condition."""

    timestamp: str
    phone_model: str
    carrier: str
    storage: str
    condition: str
    price: float | int | str

    def as_row(self) -> list[str]:
        """Return the fields in ledger column order."""
        return [
            self.timestamp,
            self.phone_model,
            self.carrier,
            self.storage,
            self.condition,
            str(self.price),
        ]
