"""
Render Service Clients (HTTP)
=============================
Thin wrappers around the two endpoints of the render service.

Why is this file needed?
------------------------
1. Contract: Both JSON shapes (`{"values": [...]}` and `{"base64_image": ...}`)
   are checked here, so the rest of the client only sees typed results.
2. Failure policy: The catalog client raises `CatalogError`; the render
   client never raises and folds every problem into a failed RenderResult.

Classes:
    CatalogClient: GET /scenarios
    RenderClient: POST /render/{scenario_id}
"""
import logging
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from renderclient import config
from renderclient.model.geometry import RenderRequest
from renderclient.model.results import RenderResult

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class CatalogError(RuntimeError):
    """Scenario discovery endpoint unreachable or answered nonsense."""


def _excerpt(text: str, limit: int = 200) -> str:
    text = " ".join((text or "").split())
    return text if len(text) <= limit else text[:limit] + "..."


class _ServiceClient:
    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = config.REQUEST_TIMEOUT,
    ) -> None:
        self.base_url = (base_url or config.SERVER_URL).rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    def url(self, path: str) -> str:
        return f"{self.base_url}{path}"


class CatalogClient(_ServiceClient):

    def fetch(self) -> List[str]:
        """
        Fetch the ordered scenario identifiers.

        Raises:
            CatalogError: on network failure, non-success status or a body
                that is not `{"values": [str, ...]}`.
        """
        url = self.url(config.SCENARIOS_ENDPOINT)
        logger.info(f"Fetching scenario catalog from: {url}")

        try:
            response = self.session.get(url, headers={"Accept": "application/json"}, timeout=self.timeout)
        except requests.RequestException as e:
            raise CatalogError(f"Could not reach {url}: {e}") from e

        if not response.ok:
            raise CatalogError(f"{url} answered HTTP {response.status_code}: {_excerpt(response.text)}")

        try:
            body: Any = response.json()
        except ValueError as e:
            raise CatalogError(f"{url} did not return JSON: {e}") from e

        values = body.get("values") if isinstance(body, dict) else None
        if not isinstance(values, list):
            raise CatalogError(f"{url} response has no 'values' list.")
        if not all(isinstance(v, str) for v in values):
            raise CatalogError(f"{url} response 'values' must contain only strings.")

        logger.info(f"Catalog loaded: {len(values)} scenario(s).")
        return values


class RenderClient(_ServiceClient):

    def render_url(self, scenario_id: str) -> str:
        # Server ids may contain spaces ("Three Spheres")
        return self.url(config.RENDER_ENDPOINT.format(scenario_id=quote(scenario_id, safe="")))

    def render(self, scenario_id: str, request: RenderRequest) -> RenderResult:
        """Submit one render request. Never raises."""
        url = self.render_url(scenario_id)
        logger.info(f"Submitting render of '{scenario_id}' to: {url}")

        try:
            response = self.session.post(
                url,
                json=request.to_dict(),
                headers=JSON_HEADERS,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Render request failed: {e}")
            return RenderResult.failure(f"Could not reach the render service: {e}")

        if not response.ok:
            message = f"Render service answered HTTP {response.status_code}"
            detail = _excerpt(response.text)
            if detail:
                message += f": {detail}"
            logger.error(message)
            return RenderResult.failure(message)

        try:
            body: Any = response.json()
        except ValueError:
            return RenderResult.failure("Render service did not return JSON.")

        encoded = body.get("base64_image") if isinstance(body, dict) else None
        if not isinstance(encoded, str):
            return RenderResult.failure("Render response has no 'base64_image' string.")

        try:
            result = RenderResult.success(encoded)
        except ValueError as e:
            return RenderResult.failure(f"Render response is malformed: {e}")

        logger.info(f"Render of '{scenario_id}' finished ({len(result.image)} bytes).")
        return result
