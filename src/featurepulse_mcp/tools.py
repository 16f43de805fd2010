"""MCP tool definitions for FeaturePulse.

This module provides the definitive, ordered list of tools exposed by the server.
Handlers for each tool live in handlers.py under the same name.
"""

from mcp.types import Tool

from .models import FeaturePriority, FeatureStatus, GroupBy, SortBy, enum_values

PROJECT_ID_PROPERTY = {
    "project_id": {
        "type": "string",
        "description": "Project UUID. Required if your API key has multiple projects. "
                       "Use list_projects to see available projects."
    }
}


def get_tools() -> list[Tool]:
    """Get the list of all MCP tools for FeaturePulse feedback management."""
    return [
        Tool(
            name="list_projects",
            description="List all projects accessible with your API key. Use this to find the project_id "
                       "needed for other tools when you have multiple projects.",
            inputSchema={
                "type": "object",
                "properties": {}
            }
        ),
        Tool(
            name="list_feature_requests",
            description="List feature requests from FeaturePulse. Supports filtering by status and priority, "
                       "full-text search, and sorting. Each result includes MRR data (revenue at risk) and "
                       "vote breakdown so you can prioritize development by business impact.",
            inputSchema={
                "type": "object",
                "properties": {
                    **PROJECT_ID_PROPERTY,
                    "status": {
                        "type": "string",
                        "enum": enum_values(FeatureStatus),
                        "description": "Filter by status"
                    },
                    "priority": {
                        "type": "string",
                        "enum": enum_values(FeaturePriority),
                        "description": "Filter by priority"
                    },
                    "sort_by": {
                        "type": "string",
                        "enum": enum_values(SortBy),
                        "description": "Sort order: vote_count (most votes first), mrr (highest revenue impact "
                                       "first), created_at (newest first). Default: vote_count"
                    },
                    "q": {
                        "type": "string",
                        "description": "Search term to filter by title"
                    },
                    "limit": {
                        "type": "number",
                        "description": "Max results to return (1-200, default 50)"
                    },
                    "offset": {
                        "type": "number",
                        "description": "Pagination offset (default 0)"
                    }
                }
            }
        ),
        Tool(
            name="get_project_stats",
            description="Get a high-level statistical overview of your FeaturePulse project: total requests, "
                       "votes, and MRR grouped by status and priority. Includes top-10 requests by votes and "
                       "by revenue impact (MRR). Use this before diving into individual requests to understand "
                       "the overall landscape.",
            inputSchema={
                "type": "object",
                "properties": {
                    **PROJECT_ID_PROPERTY
                }
            }
        ),
        Tool(
            name="search_feedback",
            description="Search feature requests by a text query. Returns the most relevant matching requests "
                       "with their vote counts and MRR. Useful for finding related feedback before opening a "
                       "new request or exploring a specific feature area.",
            inputSchema={
                "type": "object",
                "properties": {
                    **PROJECT_ID_PROPERTY,
                    "q": {
                        "type": "string",
                        "description": "Search term"
                    },
                    "limit": {
                        "type": "number",
                        "description": "Max results (default 20)"
                    }
                },
                "required": ["q"]
            }
        ),
        Tool(
            name="analyze_feedback_by_group",
            description="Analyze and group all feature requests by a chosen dimension (status or priority), "
                       "returning counts and aggregated MRR for each group. Ideal for questions like "
                       "'how much revenue is waiting on planned features?' or 'what is the MRR impact of "
                       "unaddressed high-priority requests?'",
            inputSchema={
                "type": "object",
                "properties": {
                    **PROJECT_ID_PROPERTY,
                    "group_by": {
                        "type": "string",
                        "enum": enum_values(GroupBy),
                        "description": "Dimension to group by"
                    }
                },
                "required": ["group_by"]
            }
        ),
        Tool(
            name="update_feature_status",
            description="Update the status or priority of a feature request. Use this to move requests through "
                       "the workflow (e.g., pending → approved → in_progress → completed) or to set/change priority.",
            inputSchema={
                "type": "object",
                "properties": {
                    **PROJECT_ID_PROPERTY,
                    "feature_request_id": {
                        "type": "string",
                        "description": "UUID of the feature request to update"
                    },
                    "status": {
                        "type": "string",
                        "enum": enum_values(FeatureStatus),
                        "description": "New status"
                    },
                    "priority": {
                        "type": "string",
                        "enum": enum_values(FeaturePriority),
                        "description": "New priority"
                    },
                    "status_message": {
                        "type": "string",
                        "description": "Optional message shown to users explaining the status change"
                    }
                },
                "required": ["feature_request_id"]
            }
        ),
    ]
