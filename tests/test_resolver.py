"""Tests for project auto-detection from multi-project errors."""
from featurepulse_mcp.models import ProjectEntry
from featurepulse_mcp.resolver import (
    infer_project_id,
    is_ambiguity_error,
    normalize,
    parse_project_entries,
    resolve_ambiguity,
)

from conftest import MOBILE_APP_ID, MULTIPLE_PROJECTS_ERROR, WEB_APP_ID


class TestParseProjectEntries:
    """Test extraction of "<name> (<id>)" pairs."""

    def test_extracts_entries_in_order(self):
        """Names are trimmed and ids kept verbatim, in document order."""
        projects = parse_project_entries(MULTIPLE_PROJECTS_ERROR)

        assert projects == [
            ProjectEntry(name="Web App", id=WEB_APP_ID),
            ProjectEntry(name="Mobile App", id=MOBILE_APP_ID),
        ]

    def test_uppercase_ids_preserved(self):
        upper_id = "ABCDEF12-3456-7890-ABCD-EF1234567890"
        projects = parse_project_entries(f"Multiple projects found: Billing ({upper_id})")

        assert len(projects) == 1
        assert projects[0].id == upper_id
        assert projects[0].name == "Billing"

    def test_colon_in_later_name_kept(self):
        """Only the leading label is stripped; colons inside project names survive."""
        message = (
            f"Multiple projects found. Specify project_id: Web App ({WEB_APP_ID}), "
            f"Acme: Mobile ({MOBILE_APP_ID})"
        )

        projects = parse_project_entries(message)

        assert [p.name for p in projects] == ["Web App", "Acme: Mobile"]
        assert infer_project_id(projects, "mobile-tools") is None

    def test_colon_in_first_name_kept(self):
        message = f"Multiple projects found. Specify project_id: Acme: Web ({WEB_APP_ID})"

        assert parse_project_entries(message) == [ProjectEntry(name="Acme: Web", id=WEB_APP_ID)]

    def test_message_without_label(self):
        message = f"Web App ({WEB_APP_ID}), Acme: Mobile ({MOBILE_APP_ID})"

        assert [p.name for p in parse_project_entries(message)] == ["Web App", "Acme: Mobile"]

    def test_duplicates_are_kept(self):
        message = f"Multiple projects found: Web App ({WEB_APP_ID}), Web App ({WEB_APP_ID})"

        assert len(parse_project_entries(message)) == 2

    def test_ignores_malformed_ids(self):
        """Identifiers that are not 36 characters long are not entries."""
        message = "Multiple projects found: Short (1234), Web App (" + WEB_APP_ID + ")"

        projects = parse_project_entries(message)

        assert [p.name for p in projects] == ["Web App"]

    def test_no_entries(self):
        assert parse_project_entries("Multiple projects found.") == []
        assert parse_project_entries("") == []


class TestNormalize:
    """Test name normalization used for matching."""

    def test_case_and_separator_insensitive(self):
        assert normalize("My Cool App") == normalize("my-cool-app") == normalize("MyCoolApp")
        assert normalize("my_cool_app") == "mycoolapp"

    def test_idempotent(self):
        for value in ["My Cool App", "  spaced - out _ name ", "already"]:
            assert normalize(normalize(value)) == normalize(value)


class TestInferProjectId:
    """Test selection of a project for the working directory name."""

    def test_exact_match(self):
        projects = parse_project_entries(MULTIPLE_PROJECTS_ERROR)

        assert infer_project_id(projects, "mobile-app") == MOBILE_APP_ID
        assert infer_project_id(projects, "WebApp") == WEB_APP_ID

    def test_exact_match_beats_earlier_partial_match(self):
        """An exact match wins even when an earlier entry would partially match."""
        projects = [
            ProjectEntry(name="App", id=WEB_APP_ID),
            ProjectEntry(name="Mobile App", id=MOBILE_APP_ID),
        ]

        assert infer_project_id(projects, "mobile_app") == MOBILE_APP_ID

    def test_partial_match_context_contains_name(self):
        projects = [ProjectEntry(name="Checkout", id=WEB_APP_ID)]

        assert infer_project_id(projects, "checkout-service") == WEB_APP_ID

    def test_partial_match_name_contains_context(self):
        projects = [ProjectEntry(name="Acme Checkout Service", id=WEB_APP_ID)]

        assert infer_project_id(projects, "checkout") == WEB_APP_ID

    def test_first_partial_match_wins(self):
        projects = [
            ProjectEntry(name="Web", id=WEB_APP_ID),
            ProjectEntry(name="App", id=MOBILE_APP_ID),
        ]

        assert infer_project_id(projects, "web-app-frontend") == WEB_APP_ID

    def test_no_match(self):
        projects = parse_project_entries(MULTIPLE_PROJECTS_ERROR)

        assert infer_project_id(projects, "billing") is None
        assert infer_project_id([], "web-app") is None

    def test_empty_context_matches_first_project(self):
        """A working directory of "/" has an empty name, contained in every project name."""
        projects = parse_project_entries(MULTIPLE_PROJECTS_ERROR)

        assert infer_project_id(projects, "") == WEB_APP_ID
        assert infer_project_id([], "") is None


class TestResolveAmbiguity:
    """Test the combined parse + infer entry point."""

    def test_resolves(self):
        assert resolve_ambiguity(MULTIPLE_PROJECTS_ERROR, "web-app") == WEB_APP_ID

    def test_unresolvable(self):
        assert resolve_ambiguity(MULTIPLE_PROJECTS_ERROR, "billing") is None

    def test_is_ambiguity_error(self):
        assert is_ambiguity_error(400, MULTIPLE_PROJECTS_ERROR)
        assert not is_ambiguity_error(404, MULTIPLE_PROJECTS_ERROR)
        assert not is_ambiguity_error(400, "Invalid status")
