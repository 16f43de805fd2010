"""Formatting functions for MCP tool responses.

All functions are pure: they take decoded API JSON and return text.
Optional fields fall back to placeholders instead of raising.
"""
from datetime import datetime
from typing import Optional

from .models import GroupBy, ProjectEntry

DESCRIPTION_EXCERPT_LENGTH = 200
NO_FEATURE_REQUESTS = "No feature requests found matching the given filters."


def format_money(amount: Optional[float]) -> str:
    """Format an MRR amount as dollars with two decimals."""
    return f"${float(amount or 0):.2f}"


def pluralize(count: int, noun: str) -> str:
    """Return "1 request" / "3 requests"."""
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def format_date(value: Optional[str]) -> str:
    """Render an ISO timestamp as a local date in the locale's format."""
    if not value:
        return "unknown"
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except (TypeError, ValueError):
        return str(value)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%x")


def _excerpt(text: str) -> str:
    if len(text) > DESCRIPTION_EXCERPT_LENGTH:
        return text[:DESCRIPTION_EXCERPT_LENGTH] + "…"
    return text


def _vote_value(value) -> str:
    return "?" if value is None else str(value)


def format_feature_request(fr: dict) -> str:
    """Format one feature request as a Markdown section."""
    lines = [
        f"### {fr.get('title', '(untitled)')}",
        f"- **ID**: {fr.get('id')}",
        f"- **Status**: {fr.get('status', 'unknown')} | **Priority**: {fr.get('priority', 'unknown')}",
        f"- **Votes**: {fr.get('vote_count', 0)} "
        f"({_vote_value(fr.get('paying_customer_votes'))} paying, {_vote_value(fr.get('free_votes'))} free)",
        f"- **MRR impact**: {format_money(fr.get('total_mrr'))}/mo",
    ]
    if fr.get("description"):
        lines.append(f"- **Description**: {_excerpt(fr['description'])}")
    if fr.get("status_message"):
        lines.append(f"- **Status note**: {fr['status_message']}")
    lines.append(f"- **Created**: {format_date(fr.get('created_at'))}\n")
    return "\n".join(lines)


def format_feature_request_list(data: dict) -> str:
    """Format a /feature-requests response."""
    feature_requests = data.get("feature_requests") or []
    if not feature_requests:
        return NO_FEATURE_REQUESTS

    project_name = (data.get("project") or {}).get("name", "Project")
    total = data.get("total", len(feature_requests))
    header = f"## {project_name} — Feature Requests ({len(feature_requests)} of {total} total)\n"

    return "\n".join([header] + [format_feature_request(fr) for fr in feature_requests])


def _format_category_line(category: str, bucket: dict) -> str:
    count = bucket.get("count", 0)
    return f"- **{category}**: {pluralize(count, 'request')} — {format_money(bucket.get('total_mrr'))}/mo MRR"


def format_stats(data: dict) -> str:
    """Format a /stats response as an overview with breakdowns and top-10 lists."""
    overview = data.get("overview") or {}
    project_name = (data.get("project") or {}).get("name", "Project")

    lines = [
        f"## {project_name} — Feedback Overview\n",
        f"**Total requests**: {overview.get('total_feature_requests', 0)}",
        f"**Total votes**: {overview.get('total_votes', 0)}",
        f"**Total MRR at stake**: {format_money(overview.get('total_mrr'))}/mo\n",
        "### By Status",
    ]
    for status, bucket in (data.get("by_status") or {}).items():
        lines.append(_format_category_line(status, bucket))

    lines.append("\n### By Priority")
    for priority, bucket in (data.get("by_priority") or {}).items():
        lines.append(_format_category_line(priority, bucket))

    lines.append("\n### Top 10 by Votes")
    for fr in data.get("top_by_votes") or []:
        lines.append(
            f"- [{fr.get('status')}/{fr.get('priority')}] **{fr.get('title')}** — {fr.get('vote_count', 0)} votes"
        )

    lines.append("\n### Top 10 by MRR Impact")
    for fr in data.get("top_by_mrr") or []:
        lines.append(
            f"- [{fr.get('status')}/{fr.get('priority')}] **{fr.get('title')}** — {format_money(fr.get('total_mrr'))}/mo"
        )

    return "\n".join(lines)


def format_group_analysis(data: dict, group_by: GroupBy) -> str:
    """Format the by_status or by_priority aggregates of a /stats response."""
    group_by = GroupBy(group_by)
    groups = data.get("by_status") if group_by is GroupBy.STATUS else data.get("by_priority")

    lines = [f"## Feature Requests Grouped by {group_by.value.capitalize()}\n"]
    for category, bucket in (groups or {}).items():
        lines.append(f"### {category} ({pluralize(bucket.get('count', 0), 'request')})")
        lines.append(f"- Total MRR at stake: {format_money(bucket.get('total_mrr'))}/mo\n")

    return "\n".join(lines)


def format_project_overview(data: dict) -> str:
    """Format the single project behind an API key, from a /stats response."""
    project = data.get("project") or {}
    overview = data.get("overview") or {}
    return (
        f"## Your Project\n\n"
        f"- **{project.get('name')}** (ID: `{project.get('id')}`)\n"
        f"  - {overview.get('total_feature_requests', 0)} feature requests, "
        f"{overview.get('total_votes', 0)} votes, {format_money(overview.get('total_mrr'))}/mo MRR"
    )


def format_project_choices(projects: list[ProjectEntry], message: str) -> str:
    """Format the candidate projects of a multi-project API key."""
    if projects:
        body = "\n".join(f"- **{p.name}** (ID: `{p.id}`)" for p in projects)
    else:
        body = message
    return f"## Your Projects\n\n{body}\n\nPass a `project_id` to other tools to target a specific project."


def format_project_ambiguity(projects: list[ProjectEntry], message: str, context_name: str) -> str:
    """Explain a multi-project error that could not be resolved automatically."""
    text = (
        f"Error: {message}\n\n"
        f"No project name matches the working directory '{context_name}'. "
        f"Call the tool again with an explicit `project_id`"
    )
    if not projects:
        return text + "."
    choices = "\n".join(f"- **{p.name}** (ID: `{p.id}`)" for p in projects)
    return f"{text}, one of:\n\n{choices}"


def format_updated_feature_request(fr: dict) -> str:
    """Format the confirmation for a PATCHed feature request."""
    text = (
        f"Successfully updated feature request \"{fr.get('title')}\".\n"
        f"Status: {fr.get('status')} | Priority: {fr.get('priority')}"
    )
    if fr.get("status_message"):
        text += f"\nStatus note: {fr['status_message']}"
    return text
