"""HTTP client for the FeaturePulse MCP API.

Wraps httpx.AsyncClient with the x-api-key header, error-body parsing, and
the one-shot project disambiguation retry.
"""
import logging
from pathlib import Path
from typing import Any, Optional

import httpx

from . import resolver
from .config import Settings
from .models import ProjectEntry

logger = logging.getLogger("featurepulse-mcp.client")

API_PREFIX = "/api/mcp"
API_KEY_HEADER = "x-api-key"


class FeaturePulseAPIError(Exception):
    """Raised when the API answers with a non-success status."""

    def __init__(self, message: str, status_code: int, payload: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = payload


class ProjectAmbiguityError(FeaturePulseAPIError):
    """Raised when the key spans several projects and none could be inferred."""

    def __init__(
        self,
        message: str,
        status_code: int,
        payload: Any = None,
        projects: Optional[list[ProjectEntry]] = None
    ):
        super().__init__(message, status_code, payload)
        self.projects = projects or []


def _clean_params(params: Optional[dict]) -> dict[str, str]:
    return {k: str(v) for k, v in (params or {}).items() if v is not None and v != ""}


def _error_from_response(response: httpx.Response) -> tuple[str, Any]:
    """Return (message, parsed body) for a failed response."""
    try:
        payload = response.json()
    except ValueError:
        payload = None

    message = None
    if isinstance(payload, dict):
        message = payload.get("error")
    if not message:
        message = f"HTTP {response.status_code} {response.reason_phrase}".strip()
    return str(message), payload


class FeaturePulseClient:
    """Authenticated access to /api/mcp endpoints.

    Use as an async context manager; the underlying connection pool is
    closed on exit.

    Args:
        settings: Startup configuration (base URL, API key, timeout)
        context_name: Name matched against project names on a multi-project
            error. Defaults to the basename of the working directory.
        transport: Optional httpx transport, mainly for tests
    """

    def __init__(
        self,
        settings: Settings,
        *,
        context_name: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.context_name = context_name if context_name is not None else Path.cwd().name
        self._http = httpx.AsyncClient(
            base_url=f"{settings.base_url}{API_PREFIX}",
            headers={API_KEY_HEADER: settings.api_key.get_secret_value()},
            timeout=settings.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "FeaturePulseClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def get(
        self,
        endpoint: str,
        params: Optional[dict] = None,
        *,
        resolve_project: bool = True
    ) -> Any:
        """GET an endpoint and return the decoded JSON body.

        If the API reports that several projects match and resolve_project is
        set, the project is inferred from context_name and the request is
        re-issued once with project_id added.

        Raises:
            ProjectAmbiguityError: Several projects match and none could be inferred
            FeaturePulseAPIError: Any other non-success response
            httpx.RequestError: Network failure
        """
        query = _clean_params(params)
        response = await self._http.get(endpoint, params=query)
        if response.is_success:
            return response.json()

        message, payload = _error_from_response(response)
        self._log_error("GET", response, message)

        if resolver.is_ambiguity_error(response.status_code, message):
            if resolve_project:
                project_id = resolver.resolve_ambiguity(message, self.context_name)
                if project_id:
                    return await self.get(
                        endpoint, {**query, "project_id": project_id}, resolve_project=False
                    )
            raise ProjectAmbiguityError(
                message,
                response.status_code,
                payload,
                projects=resolver.parse_project_entries(message),
            )

        raise FeaturePulseAPIError(message, response.status_code, payload)

    async def patch(self, endpoint: str, body: dict, params: Optional[dict] = None) -> Any:
        """PATCH an endpoint with a JSON body and return the decoded response.

        Mutations are never retried with an inferred project.
        """
        response = await self._http.patch(endpoint, params=_clean_params(params), json=body)
        if response.is_success:
            return response.json()

        message, payload = _error_from_response(response)
        self._log_error("PATCH", response, message)
        raise FeaturePulseAPIError(message, response.status_code, payload)

    @staticmethod
    def _log_error(method: str, response: httpx.Response, message: str) -> None:
        logger.warning(f"{method} {response.request.url} failed with {response.status_code}: {message}")
