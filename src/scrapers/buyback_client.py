# src/scrapers/buyback_client.py

"""HTTP client for the buybackboss.com product-option API."""

import logging
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.price_record import AttributePath


class BuybackClient:
    """Fetch one node of the product-option tree per call.

    The API answers every ``POST`` with either a list of child options or,
    once model, carrier and storage are all selected, a priced product
    list. A failed call is reported as ``None`` and never retried.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger("buyback_tracker.client")
        self.settings = Settings()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    def build_payload(self, path: AttributePath) -> dict[str, Any]:
        """Return the JSON body selecting *path* in the option tree."""
        return {
            "product_group": self.settings.PRODUCT_GROUP,
            "attr_options": list(path),
        }

    def fetch(self, path: AttributePath) -> Any | None:
        """POST the attribute path and return the decoded JSON, or None."""
        current_step = " > ".join(path)
        self.logger.info("Fetching data for: %s", current_step)
        try:
            resp = self.session.post(
                self.settings.API_ENDPOINT,
                headers=self.settings.DEFAULT_HEADERS,
                json=self.build_payload(path),
                timeout=self._request_timeout,
            )
        except Exception as exc:
            self.logger.error(
                "Error fetching data for %s: %s",
                current_step,
                exc,
                exc_info=True,
            )
            return None

        if resp.status_code != 200:
            self.logger.error(
                "Error fetching data for %s: HTTP %d",
                current_step,
                resp.status_code,
            )
            return None

        try:
            return resp.json()
        except ValueError as exc:
            self.logger.error(
                "Undecodable response for %s: %s",
                current_step,
                exc,
            )
            return None

    def close(self) -> None:
        self.session.close()
