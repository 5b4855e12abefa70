"""
GSA per-diem rate lookup.

Input: city/state or ZIP, month abbreviation, fiscal year
Output: DailyRates (lodging + M&IE per day)

Calls the GSA Per Diem API directly, or the deployment's proxy when
PER_DIEM_PROXY_URL is set. Both return the same rate schedule JSON.

Graceful fallback: any failure (network, HTTP status, empty result,
no matching month, malformed payload) returns the GSA standard rate.
A calculation NEVER fails because the lookup is down.
"""

import json
import logging
import urllib.parse
import urllib.request
from typing import Optional

from .config import settings
from .schemas import DailyRates
from .wage_tables import STANDARD_LODGING_RATE, STANDARD_MEALS_RATE, month_number

logger = logging.getLogger(__name__)

STANDARD_RATES = DailyRates(
    daily_lodging=STANDARD_LODGING_RATE,
    daily_meals=STANDARD_MEALS_RATE,
    is_standard_rate=True,
)


class PerDiemLookup:
    """
    Resolves daily lodging and meal rates for a work location and month.

    ZIP takes precedence over city/state. The GSA schedule lists lodging
    per month; meals are a flat daily M&IE amount per location.
    """

    def __init__(self, api_url: Optional[str] = None, api_key: Optional[str] = None,
                 proxy_url: Optional[str] = None, timeout_seconds: Optional[float] = None):
        self.api_url = (api_url if api_url is not None else settings.GSA_API_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.GSA_API_KEY
        self.proxy_url = proxy_url if proxy_url is not None else settings.PER_DIEM_PROXY_URL
        self.timeout_seconds = (
            timeout_seconds if timeout_seconds is not None else settings.PER_DIEM_TIMEOUT_SECONDS
        )

    def fetch_daily_rates(self, city: str, state: str, zip_code: Optional[str],
                          month: str, year: str) -> DailyRates:
        """
        Main entry point. Never raises: returns STANDARD_RATES on any failure.
        """
        month = (month or "").strip().title()
        if not month_number(month):
            logger.warning("Unknown month %r; using standard per-diem rate", month)
            return STANDARD_RATES

        try:
            request = self._build_request(city, state, zip_code, month, year)
        except ValueError as e:
            logger.warning("Bad per-diem endpoint: %s; using standard rate", e)
            return STANDARD_RATES
        if request is None:
            logger.warning("No ZIP or city/state given; using standard per-diem rate")
            return STANDARD_RATES

        try:
            payload = self._fetch_json(request)
            rates = self._extract_rates(payload, month)
        except Exception as e:
            logger.warning("Per-diem lookup failed: %s; using standard rate", e)
            return STANDARD_RATES

        if rates is None:
            logger.warning(
                "No per-diem data for %s %s (zip=%s) in %s %s; using standard rate",
                city, state, zip_code, month, year,
            )
            return STANDARD_RATES
        return rates

    def _build_request(self, city, state, zip_code, month, year) -> Optional[urllib.request.Request]:
        """Proxy URL with query params, or the GSA REST path. None if no location given."""
        zip_code = (zip_code or "").strip()
        city = (city or "").strip()
        state = (state or "").strip().upper()
        if not zip_code and not (city and state):
            return None

        headers = {"Accept": "application/json"}

        if self.proxy_url:
            params = {"year": year, "month": month_number(month)}
            if zip_code:
                params["zip"] = zip_code
            else:
                params["city"] = city
                params["state"] = state
            url = f"{self.proxy_url}?{urllib.parse.urlencode(params)}"
        else:
            if zip_code:
                path = f"/rates/zip/{urllib.parse.quote(zip_code)}/year/{urllib.parse.quote(str(year))}"
            else:
                path = (
                    f"/rates/city/{urllib.parse.quote(city)}"
                    f"/state/{urllib.parse.quote(state)}/year/{urllib.parse.quote(str(year))}"
                )
            url = f"{self.api_url}{path}"
            if self.api_key:
                headers["X-API-KEY"] = self.api_key

        logger.info("Per-diem lookup: %s", url)
        return urllib.request.Request(url, headers=headers, method="GET")

    def _fetch_json(self, request: urllib.request.Request) -> dict:
        """GET and decode. Raises on HTTP/network/JSON errors (caller handles fallback)."""
        with urllib.request.urlopen(request, timeout=self.timeout_seconds) as response:
            return json.loads(response.read())

    def _extract_rates(self, payload, month: str) -> Optional[DailyRates]:
        """
        Pull the requested month out of a GSA schedule.

        Shape: {"rates": [{"rate": [{"months": {"month": [{"short": "Jan", "value": 110}, ...]},
                                     "meals": 68, "standardRate": "false"}, ...]}]}

        First entry whose month list has the abbreviation wins. Returns None when
        nothing matches; raises on malformed amounts.
        """
        if not isinstance(payload, dict):
            return None
        results = payload.get("rates") or []
        if not results:
            return None

        for entry in results[0].get("rate") or []:
            months = (entry.get("months") or {}).get("month") or []
            match = next((m for m in months if m.get("short") == month), None)
            if match is None:
                continue

            lodging = match.get("value") or entry.get("rate") or 0
            meals = entry.get("mie") or entry.get("meals") or 0
            return DailyRates(
                daily_lodging=float(lodging),
                daily_meals=float(meals),
                is_standard_rate=_is_true(entry.get("standardRate")),
            )
        return None


def _is_true(value) -> bool:
    # GSA sends "true"/"false" strings
    return str(value).strip().lower() == "true"
