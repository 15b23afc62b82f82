"""Semantic versions and the exact/caret/tilde constraint model."""

from sealpack.core.semver.constraints import (
    Constraint,
    ConstraintKind,
    MatchResult,
    MatchStatus,
    find_latest,
    find_max_satisfying,
    is_valid_constraint,
    satisfies,
)
from sealpack.core.semver.version import Version, compare

__all__ = [
    "Constraint",
    "ConstraintKind",
    "MatchResult",
    "MatchStatus",
    "Version",
    "compare",
    "find_latest",
    "find_max_satisfying",
    "is_valid_constraint",
    "satisfies",
]
