"""MCP tool handlers for FeaturePulse.

All handlers follow a consistent pattern:
- Accept: arguments dict and a FeaturePulseClient
- Coerce recognized arguments and drop absent or empty optional ones
- Make exactly one API call (plus at most one project disambiguation retry
  inside the client)
- Return formatted text built by the formatters module

dispatch() is the only entry point used by the transport. It never raises:
every failure is returned as a ToolResult with is_error set.
"""
import enum
import logging
import traceback
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional
from urllib.parse import quote

import httpx

from . import formatters
from .client import FeaturePulseAPIError, FeaturePulseClient, ProjectAmbiguityError
from .models import FeaturePriority, FeatureStatus, GroupBy, SortBy

logger = logging.getLogger("featurepulse-mcp.handlers")

SEARCH_DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: text plus whether it represents a failure."""

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text)

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=True)


# ============================================================================
# Argument coercion
# ============================================================================

def _string_arg(arguments: dict, key: str) -> Optional[str]:
    value = arguments.get(key)
    if value is None or value == "":
        return None
    return str(value)


def _number_arg(arguments: dict, key: str) -> Optional[str]:
    """Coerce a numeric argument to its query-string form; 0 and absent are omitted."""
    value = arguments.get(key)
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number, got {value!r}")
    if not number:
        return None
    return str(int(number)) if number.is_integer() else str(number)


def _enum_arg(arguments: dict, key: str, enum_cls: type[enum.Enum]) -> Optional[str]:
    value = _string_arg(arguments, key)
    if value is None:
        return None
    try:
        return enum_cls(value).value
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValueError(f"Invalid {key} '{value}'. Allowed values: {allowed}")


def _project_params(arguments: dict) -> dict[str, str]:
    project_id = _string_arg(arguments, "project_id")
    return {"project_id": project_id} if project_id else {}


def _drop_empty(params: dict) -> dict:
    return {k: v for k, v in params.items() if v is not None}


# ============================================================================
# Project Handlers
# ============================================================================

async def handle_list_projects(arguments: dict, client: FeaturePulseClient) -> str:
    """List the projects reachable with the configured API key.

    A single-project key answers /stats directly, as does a multi-project key
    whose project can be inferred from the working directory. Otherwise the
    400 lists every project, and that list is shown.
    """
    try:
        data = await client.get("/stats")
    except ProjectAmbiguityError as e:
        logger.info(f"API key spans {len(e.projects)} projects")
        return formatters.format_project_choices(e.projects, e.message)
    except (FeaturePulseAPIError, httpx.RequestError) as e:
        logger.warning(f"Could not fetch projects: {e}")
        return "Could not fetch projects. Make sure your API key is valid."

    logger.info(f"API key is scoped to project {(data.get('project') or {}).get('id')}")
    return formatters.format_project_overview(data)


async def handle_get_project_stats(arguments: dict, client: FeaturePulseClient) -> str:
    """Overview totals, per-status and per-priority breakdowns, top-10 lists."""
    data = await client.get("/stats", _project_params(arguments))
    logger.info(f"Retrieved stats for project {(data.get('project') or {}).get('name')}")
    return formatters.format_stats(data)


async def handle_analyze_feedback_by_group(arguments: dict, client: FeaturePulseClient) -> str:
    """Group aggregates from /stats by status or priority."""
    group_by = _enum_arg(arguments, "group_by", GroupBy)
    if group_by is None:
        raise ValueError("group_by is required (status or priority)")

    data = await client.get("/stats", _project_params(arguments))
    return formatters.format_group_analysis(data, GroupBy(group_by))


# ============================================================================
# Feature Request Handlers
# ============================================================================

async def handle_list_feature_requests(arguments: dict, client: FeaturePulseClient) -> str:
    """List feature requests with optional filters, search, sort and pagination."""
    params = _drop_empty({
        **_project_params(arguments),
        "status": _enum_arg(arguments, "status", FeatureStatus),
        "priority": _enum_arg(arguments, "priority", FeaturePriority),
        "sort_by": _enum_arg(arguments, "sort_by", SortBy),
        "q": _string_arg(arguments, "q"),
        "limit": _number_arg(arguments, "limit"),
        "offset": _number_arg(arguments, "offset"),
    })
    data = await client.get("/feature-requests", params)
    logger.info(f"Listed {len(data.get('feature_requests') or [])} of {data.get('total')} feature requests")
    return formatters.format_feature_request_list(data)


async def handle_search_feedback(arguments: dict, client: FeaturePulseClient) -> str:
    """Text search over feature requests; limit defaults to 20."""
    q = _string_arg(arguments, "q")
    if q is None:
        raise ValueError("q is required")

    params = {
        **_project_params(arguments),
        "q": q,
        "limit": _number_arg(arguments, "limit") or str(SEARCH_DEFAULT_LIMIT),
    }
    data = await client.get("/feature-requests", params)
    logger.info(f"Search '{q}' matched {data.get('total')} feature requests")
    return formatters.format_feature_request_list(data)


async def handle_update_feature_status(arguments: dict, client: FeaturePulseClient) -> str:
    """Change status, priority and/or the user-facing status message."""
    feature_request_id = _string_arg(arguments, "feature_request_id")
    if feature_request_id is None:
        raise ValueError("feature_request_id is required")

    body = _drop_empty({
        "status": _enum_arg(arguments, "status", FeatureStatus),
        "priority": _enum_arg(arguments, "priority", FeaturePriority),
        "status_message": _string_arg(arguments, "status_message"),
    })
    if not body:
        raise ValueError("Provide at least one of status, priority or status_message")

    try:
        updated = await client.patch(
            f"/feature-requests/{quote(feature_request_id, safe='')}", body, _project_params(arguments)
        )
    except FeaturePulseAPIError as e:
        raise FeaturePulseAPIError(
            f"Failed to update feature request: {e.message}", e.status_code, e.payload
        ) from e

    logger.info(f"Updated feature request {feature_request_id}: {body}")
    return formatters.format_updated_feature_request(updated)


Handler = Callable[[dict, FeaturePulseClient], Awaitable[str]]

HANDLERS: dict[str, Handler] = {
    "list_projects": handle_list_projects,
    "list_feature_requests": handle_list_feature_requests,
    "get_project_stats": handle_get_project_stats,
    "search_feedback": handle_search_feedback,
    "analyze_feedback_by_group": handle_analyze_feedback_by_group,
    "update_feature_status": handle_update_feature_status,
}


# ============================================================================
# Dispatch
# ============================================================================

async def dispatch(name: str, arguments: Any, client: FeaturePulseClient) -> ToolResult:
    """Route a tool call to its handler and wrap the outcome in a ToolResult."""
    handler = HANDLERS.get(name)
    if handler is None:
        logger.warning(f"Unknown tool requested: {name}")
        return ToolResult.error(f"Error: Unknown tool: {name}")

    try:
        arguments = dict(arguments or {})
        return ToolResult.ok(await handler(arguments, client))

    except ProjectAmbiguityError as e:
        logger.warning(f"Could not infer project for {name} from '{client.context_name}'")
        return ToolResult.error(
            formatters.format_project_ambiguity(e.projects, e.message, client.context_name)
        )

    except FeaturePulseAPIError as e:
        logger.error(f"API error during {name} call:")
        logger.error(f"  Status: {e.status_code}")
        logger.error(f"  Response body: {e.payload}")
        return ToolResult.error(f"Error: {e.message}")

    except httpx.RequestError as e:
        logger.error(f"Request error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Error message: {e}")
        return ToolResult.error(f"Error: Connection failed - {e}")

    except Exception as e:
        logger.error(f"Unexpected error during {name} call:")
        logger.error(f"  Error type: {type(e).__name__}")
        logger.error(f"  Arguments: {arguments}")
        logger.error(f"  Traceback:\n{traceback.format_exc()}")
        return ToolResult.error(f"Error: {e}")
