"""Project auto-detection for API keys that span several projects.

When a key has access to more than one project and no project_id is sent,
the API answers 400 with a message such as:

    Multiple projects found. Specify project_id: Web App (2f1c...), Mobile (9ab0...)

The helpers here recover those candidates and pick the one whose name
matches the caller's working directory. This scrapes free text, so callers
should only depend on resolve_ambiguity(); if the API starts returning a
structured candidate list, only this module needs to change.
"""
import logging
import re
from typing import Optional, Sequence

from .models import ProjectEntry

logger = logging.getLogger("featurepulse-mcp.resolver")

MULTIPLE_PROJECTS_MARKER = "Multiple projects"

# "<name> (<uuid>)", names may contain spaces but not commas or parentheses
_PROJECT_ENTRY_RE = re.compile(r"([^,(]+?)\s+\(([0-9a-f-]{36})\)", re.IGNORECASE)
_LABEL_SEPARATOR_RE = re.compile(r":\s+")
_SEPARATORS_RE = re.compile(r"[\s\-_]+")


def _strip_label(name: str) -> str:
    """Drop a leading "Multiple projects found ...:" label from the first entry."""
    if MULTIPLE_PROJECTS_MARKER not in name:
        return name
    parts = _LABEL_SEPARATOR_RE.split(name, maxsplit=1)
    return parts[1] if len(parts) == 2 else name


def is_ambiguity_error(status_code: int, message: str) -> bool:
    """Return True if an API error means the project could not be chosen."""
    return status_code == 400 and MULTIPLE_PROJECTS_MARKER in (message or "")


def parse_project_entries(message: str) -> list[ProjectEntry]:
    """Extract every "<name> (<id>)" pair from an error message, in order."""
    projects = []
    for match in _PROJECT_ENTRY_RE.finditer(message or ""):
        name = match.group(1).strip()
        if not projects:
            name = _strip_label(name).strip()
        projects.append(ProjectEntry(name=name, id=match.group(2)))
    return projects


def normalize(text: str) -> str:
    """Lower-case and drop whitespace, hyphens and underscores.

    >>> normalize("My Cool App") == normalize("my-cool-app") == normalize("MyCoolApp")
    True
    """
    return _SEPARATORS_RE.sub("", text.lower())


def infer_project_id(projects: Sequence[ProjectEntry], context_name: str) -> Optional[str]:
    """Pick the project whose name best matches context_name.

    An exact normalized match wins over everything else. Otherwise the first
    project (in the given order) whose name contains, or is contained in,
    the context name is returned. Returns None when nothing matches.

    An empty context (e.g. a working directory of "/") is contained in every
    name, so the first project wins.
    """
    context = normalize(context_name)

    for project in projects:
        if normalize(project.name) == context:
            return project.id

    for project in projects:
        name = normalize(project.name)
        if name in context or context in name:
            return project.id

    return None


def resolve_ambiguity(error_text: str, context_name: str) -> Optional[str]:
    """Return the project id to retry with, or None if it cannot be inferred."""
    projects = parse_project_entries(error_text)
    project_id = infer_project_id(projects, context_name)
    if project_id:
        logger.info(f"Inferred project {project_id} for '{context_name}' from {len(projects)} candidates")
    else:
        logger.info(f"No project among {len(projects)} candidates matches '{context_name}'")
    return project_id
