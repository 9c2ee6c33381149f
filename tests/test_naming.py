from __future__ import annotations

import pytest

from dorgpatch.models import Branch, PatchWaypoint
from dorgpatch.waypoints import PatchNamingEngine, interdiff_filename, patch_filename

BASE = Branch(name="main", exists=True, is_current=False, tip="A")
FEATURE = Branch(name="12345-fix-thing", exists=True, is_current=True, tip="B")


def _waypoint(comment_index: int | None) -> PatchWaypoint:
    return PatchWaypoint(sha="C", filename="12345-2.patch", comment_index=comment_index, ordinal=0)


def test_first_patch_has_no_interdiff() -> None:
    plan = PatchNamingEngine().plan(
        base=BASE, feature=FEATURE, waypoint=None, issue_number="12345", next_index=3
    )

    assert "12345" in plan.patch.filename
    assert plan.patch.filename == "12345-3.patch"
    assert (plan.patch.diff_from, plan.patch.diff_to) == ("A", "B")
    assert plan.interdiff is None
    assert plan.changelog_from == "A"


def test_interdiff_range_from_known_comment_index() -> None:
    plan = PatchNamingEngine().plan(
        base=BASE, feature=FEATURE, waypoint=_waypoint(2), issue_number="12345", next_index=5
    )

    assert plan.interdiff is not None
    assert plan.interdiff.filename == "interdiff.12345.2-5.txt"
    assert (plan.interdiff.diff_from, plan.interdiff.diff_to) == ("C", "B")
    assert plan.changelog_from == "C"


def test_interdiff_without_comment_index_names_only_next() -> None:
    plan = PatchNamingEngine().plan(
        base=BASE, feature=FEATURE, waypoint=_waypoint(None), issue_number="12345", next_index=5
    )

    assert plan.interdiff is not None
    assert plan.interdiff.filename == "interdiff.12345.5.txt"


def test_naming_is_stable_for_same_inputs() -> None:
    engine = PatchNamingEngine()
    first = engine.plan(base=BASE, feature=FEATURE, waypoint=_waypoint(2), issue_number="12345", next_index=5)
    second = engine.plan(base=BASE, feature=FEATURE, waypoint=_waypoint(2), issue_number="12345", next_index=5)

    assert first == second


def test_patch_filename_includes_description() -> None:
    assert patch_filename("12345", 3, "fix-thing") == "12345-3.fix-thing.patch"
    assert interdiff_filename("12345", 7, None) == "interdiff.12345.7.txt"


@pytest.mark.parametrize("issue_number,next_index", [("", 3), ("12345", 0)])
def test_invalid_inputs_are_rejected(issue_number: str, next_index: int) -> None:
    with pytest.raises(ValueError):
        PatchNamingEngine().plan(
            base=BASE, feature=FEATURE, waypoint=None, issue_number=issue_number, next_index=next_index
        )


def test_unresolved_tip_falls_back_to_branch_name() -> None:
    base = Branch(name="main", exists=True, is_current=False)
    feature = Branch(name="12345-fix-thing", exists=True, is_current=True)

    plan = PatchNamingEngine().plan(
        base=base, feature=feature, waypoint=_waypoint(2), issue_number="12345", next_index=5
    )

    assert (plan.patch.diff_from, plan.patch.diff_to) == ("main", "12345-fix-thing")
    assert plan.interdiff is not None
    assert plan.interdiff.diff_to == "12345-fix-thing"
