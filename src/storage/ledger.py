# src/storage/ledger.py

"""Append-only daily CSV ledger of price records."""

import csv
import logging
from datetime import date
from pathlib import Path

from src.config.settings import Settings
from src.models.price_record import PriceRecord

logger = logging.getLogger("buyback_tracker.ledger")


def ledger_path_for(day: date, directory: Path) -> Path:
    """Return the ledger file holding records captured on *day*."""
    return directory / f"{Settings.LEDGER_PREFIX}_{day:%Y-%m-%d}.csv"


class CsvLedger:
    """Appends price records to the ledger for the day the run started."""

    def __init__(
        self,
        directory: Path | None = None,
        run_date: date | None = None,
    ) -> None:
        self.directory: Path = directory or Settings.RESULTS_DIR
        self.run_date: date = run_date or date.today()
        self.rows_written = 0
        logger.debug(
            "CsvLedger initialised (path=%s)", self.path
        )

    @property
    def path(self) -> Path:
        return ledger_path_for(self.run_date, self.directory)

    def append(self, record: PriceRecord) -> bool:
        """Append one record, writing the header first for a new file.

        Returns False when the write failed; the record is then lost.
        """
        filepath = self.path
        row = record.as_row()
        try:
            filepath.parent.mkdir(parents=True, exist_ok=True)
            is_new = not filepath.exists()
            with open(filepath, "a", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)
                if is_new:
                    writer.writerow(Settings.LEDGER_HEADER)
                writer.writerow(row)
        except OSError as exc:
            logger.error(
                "Failed to write to CSV %s: %s",
                filepath,
                exc,
                exc_info=True,
            )
            return False

        self.rows_written += 1
        logger.debug("Writing row to CSV: %s", ",".join(row))
        return True
