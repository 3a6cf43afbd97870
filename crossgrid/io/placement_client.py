"""Lightweight HTTP client for a remote placement service."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Sequence

import requests

from ..core.constants import PlacementMode
from ..core.exceptions import PlacementError
from ..core.models import PlacedWord
from ..utils.logger import get_logger
from .placement import parse_placed_words

LOGGER = get_logger(__name__)


class PlacementServiceError(PlacementError):
    """Raised when the placement service responds with an error or is unreachable."""


class PlacementServiceClient:
    """Minimal client posting candidate words to a placement service."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        url_env: str = "CROSSGRID_PLACEMENT_URL",
        token_env: str = "CROSSGRID_PLACEMENT_TOKEN",
        timeout_seconds: float = 30.0,
    ) -> None:
        self.base_url = base_url or os.environ.get(url_env)
        if not self.base_url:
            raise PlacementServiceError(
                f"Missing placement service URL; pass base_url or set {url_env}"
            )
        self.base_url = self.base_url.rstrip("/")
        self.url_env = url_env
        self.token_env = token_env
        self.timeout_seconds = timeout_seconds
        self._token = os.environ.get(token_env)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    def place(self, words: Sequence[str], mode: PlacementMode) -> List[PlacedWord]:
        """Request a layout for ``words`` and parse the returned records."""
        if not words:
            return []
        url = f"{self.base_url}/place"
        payload: Dict[str, Any] = {"words": list(words), "mode": mode.value}
        try:
            response = requests.post(
                url,
                json=payload,
                headers=self._headers(),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            raise PlacementServiceError(f"Placement request failed: {exc}") from exc

        try:
            data = response.json()
        except ValueError as exc:
            LOGGER.warning("Placement service returned non-JSON body: %.200s", response.text)
            raise PlacementServiceError("Placement service response is not JSON") from exc

        placed = parse_placed_words(data)
        LOGGER.info("Placement service placed %s/%s words", len(placed), len(words))
        return placed
