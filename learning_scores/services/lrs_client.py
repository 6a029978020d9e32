"""
LRS Client - Learning Scores
learning_scores/services/lrs_client.py

Forwards raw xAPI statement batches to the Learning Record Store, which
records them and updates the gradebook. Single attempt, no retry: a failure
is reported to the caller and nothing has been committed.
"""

import logging
from typing import Dict, Optional

import httpx

from learning_scores.config import Settings, get_settings
from learning_scores.core.exceptions import EventIngestionError

logger = logging.getLogger(__name__)


class LRSClient:
    """Synchronous xAPI statement forwarder."""

    def __init__(self, settings: Optional[Settings] = None, client: Optional[httpx.Client] = None):
        self.settings = settings or get_settings()
        self._client = client

    @property
    def statements_url(self) -> str:
        if not self.settings.LRS_URL:
            raise EventIngestionError("LRS_URL is not configured")
        return f"{self.settings.LRS_URL}/statements"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Experience-API-Version": self.settings.XAPI_VERSION,
        }
        if self.settings.LRS_AUTH:
            headers["Authorization"] = self.settings.LRS_AUTH.get_secret_value()
        return headers

    def post_statements(self, payload: str) -> None:
        """
        POST the payload unchanged to {LRS_URL}/statements.

        Raises:
            EventIngestionError: LRS unreachable or responded with an error status.
        """
        url = self.statements_url
        params = {"component": self.settings.XAPI_COMPONENT}
        try:
            if self._client is not None:
                resp = self._client.post(url, content=payload, headers=self._headers(), params=params)
            else:
                resp = httpx.post(
                    url,
                    content=payload,
                    headers=self._headers(),
                    params=params,
                    timeout=self.settings.LRS_TIMEOUT_SECONDS,
                )
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.warning(f"LRS rejected statements with status {e.response.status_code}")
            raise EventIngestionError(
                f"LRS rejected statements: HTTP {e.response.status_code}",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Failed to forward xAPI statements: {e}")
            raise EventIngestionError(f"Failed to forward xAPI statements: {e}") from e

        logger.info(f"Forwarded xAPI statements to LRS ({resp.status_code})")
