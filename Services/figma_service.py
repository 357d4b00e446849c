import logging
import os
from typing import Any, Optional

import requests
from dotenv import load_dotenv

from errors import (
    InvalidFigmaTokenError,
    ResourceAccessDeniedError,
    ResourceNotFoundError,
    TransportError,
)

load_dotenv()

FIGMA_API_BASE_URL = os.getenv("FIGMA_API_BASE_URL", "https://api.figma.com/v1")
FIGMA_REQUEST_TIMEOUT = float(os.getenv("FIGMA_REQUEST_TIMEOUT", "30"))


def load_figma_token() -> str:
    token = os.getenv("FIGMA_ACCESS_TOKEN") or os.getenv("FIGMA_TOKEN")
    if not token:
        raise InvalidFigmaTokenError()
    return token


class FigmaClient:
    """
    Thin wrapper over the Figma REST API.

    Every call is a single GET: no retries and no caching. Upstream 404/403
    become ResourceNotFoundError/ResourceAccessDeniedError; any other failure
    becomes TransportError.
    """

    def __init__(
        self,
        token: str,
        base_url: str = FIGMA_API_BASE_URL,
        timeout: float = FIGMA_REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = {"X-Figma-Token": token}
        self.log = logger or logging.getLogger(__name__)

    def request(self, path: str, params: Optional[dict] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, headers=self.headers, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            self.log.error("[FIGMA] Request to %s failed: %s", path, e)
            raise TransportError(None, str(e)) from e

        if not response.ok:
            self.log.error("[FIGMA] %s -> %s %s", path, response.status_code, response.reason)
            if response.status_code == 404:
                raise ResourceNotFoundError("Figma resource not found")
            if response.status_code == 403:
                raise ResourceAccessDeniedError("Access to Figma resource denied")
            raise TransportError(response.status_code, response.reason)

        try:
            return response.json()
        except (ValueError, RecursionError) as e:
            self.log.error("[FIGMA] %s -> undecodable body: %s", path, e)
            raise TransportError(response.status_code, f"invalid JSON: {e}") from e

    # ------------------------------------------------------------------
    # ENDPOINTS
    # ------------------------------------------------------------------

    def get_file(self, file_key: str) -> dict:
        return self.request(f"/files/{file_key}")

    def get_file_nodes(self, file_key: str, node_ids: str) -> dict:
        return self.request(f"/files/{file_key}/nodes", params={"ids": node_ids})

    def get_file_collection(self, file_key: str, collection: str) -> dict:
        """images, comments, versions, components, styles or variables/local."""
        return self.request(f"/files/{file_key}/{collection}")

    def list_my_files(self) -> dict:
        return self.request("/me/files")

    def search_files(self, query: str) -> dict:
        return self.request("/search", params={"query": query})
