"""Enumerations and value types shared by the tool catalog and handlers."""
import enum

from pydantic import BaseModel, ConfigDict


class FeatureStatus(str, enum.Enum):
    """Feature request workflow status."""

    PENDING = "pending"
    APPROVED = "approved"
    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    REJECTED = "rejected"


class FeaturePriority(str, enum.Enum):
    """Feature request priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SortBy(str, enum.Enum):
    """Sort orders accepted by the feature request listing endpoint.

    - vote_count: most votes first (server default)
    - mrr: highest revenue impact first
    - created_at: newest first
    """

    VOTE_COUNT = "vote_count"
    MRR = "mrr"
    CREATED_AT = "created_at"


class GroupBy(str, enum.Enum):
    """Dimensions available to analyze_feedback_by_group."""

    STATUS = "status"
    PRIORITY = "priority"


class ProjectEntry(BaseModel):
    """A candidate project recovered from a multi-project error message."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str


def enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    """Return the wire values of an enum, in declaration order."""
    return [member.value for member in enum_cls]
