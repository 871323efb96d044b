"""Figma REST client for the raw variable graph."""

from typing import Any

import httpx

from .errors import FetchError
from .tokens_logging import LogCategory, get_category_logger

logger = get_category_logger(LogCategory.FETCH)

DEFAULT_BASE_URL = "https://api.figma.com/v1"


class FigmaClient:
    """Minimal authenticated client for the local variables endpoint."""

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            access_token: Figma personal access token.
            base_url: API root.
            timeout: Request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        self.base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                "X-Figma-Token": access_token,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def __enter__(self) -> "FigmaClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(self, endpoint: str) -> dict[str, Any]:
        """GET an endpoint and decode its JSON body.

        Raises:
            FetchError: On transport errors, non-2xx responses, or a body
                that is not a JSON object.
        """
        url = f"{self.base_url}{endpoint}"
        try:
            response = self._client.get(endpoint)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch from {url}: {e}", url=url) from e

        if response.is_error:
            raise FetchError(
                f"Figma API error: {response.status_code} {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise FetchError(f"Figma API returned invalid JSON: {e}", url=url) from e

        if not isinstance(data, dict):
            raise FetchError("Figma API returned an unexpected payload", url=url)
        return data

    def fetch_local_variables(self, file_key: str) -> dict[str, Any]:
        """Fetch the raw variable graph of a file."""
        logger.info(f"Fetching local variables for file {file_key}")
        return self.get(f"/files/{file_key}/variables/local")


def summarize_raw_graph(data: dict[str, Any]) -> dict[str, Any]:
    """Counts and collection modes of a raw graph, for display."""
    meta = data.get("meta") if isinstance(data.get("meta"), dict) else {}
    variables = meta.get("variables") or {}
    collections = meta.get("variableCollections") or {}

    return {
        "variable_count": len(variables),
        "collection_count": len(collections),
        "collections": {
            collection.get("name", collection_id): [
                mode.get("name", "") for mode in collection.get("modes") or []
            ]
            for collection_id, collection in collections.items()
            if isinstance(collection, dict)
        },
        "error": data.get("error") if data.get("error") not in (None, False) else None,
    }
