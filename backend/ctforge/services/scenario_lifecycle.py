# backend/ctforge/services/scenario_lifecycle.py
"""Scenario lifecycle state machine.

States: draft -> pending_review -> published -> archived
draft and pending_review may be published directly or reverted to draft.
Any non-archived state may be archived. archived is terminal.

Transitions and edits never mutate their input. They return a copy with
``metadata.version`` incremented and ``metadata.updated_at`` moved forward.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from ctforge.models.scenario_enums import EDITABLE_STATUSES, ScenarioStatus
from ctforge.schemas.scenario import CTFScenario, ScenarioUpdate

logger = logging.getLogger(__name__)


class InvalidTransitionError(Exception):
    """Raised when a lifecycle operation is not allowed from the current status."""

    def __init__(self, scenario_id: str, current: ScenarioStatus, operation: str):
        self.scenario_id = scenario_id
        self.current = current
        self.operation = operation
        super().__init__(
            f"Cannot {operation} scenario {scenario_id} from status '{current.value}'"
        )


# Target status -> statuses it may be entered from
ALLOWED_SOURCES: Dict[ScenarioStatus, FrozenSet[ScenarioStatus]] = {
    ScenarioStatus.PENDING_REVIEW: frozenset({ScenarioStatus.DRAFT}),
    ScenarioStatus.PUBLISHED: frozenset({ScenarioStatus.DRAFT, ScenarioStatus.PENDING_REVIEW}),
    ScenarioStatus.ARCHIVED: frozenset({
        ScenarioStatus.DRAFT,
        ScenarioStatus.PENDING_REVIEW,
        ScenarioStatus.PUBLISHED,
    }),
    ScenarioStatus.DRAFT: EDITABLE_STATUSES,
}

# Fields an edit may never touch
PROTECTED_FIELDS = frozenset({"scenario_id", "scenario_type", "metadata"})
REQUIRED_BLOCKS = frozenset({"basic_info", "game_content"})


def can_transition(current: ScenarioStatus, target: ScenarioStatus) -> bool:
    """Check if a status transition is allowed."""
    return current in ALLOWED_SOURCES.get(target, frozenset())


def is_editable(scenario: CTFScenario) -> bool:
    """Content fields may only change while in draft or pending_review."""
    return scenario.metadata.status in EDITABLE_STATUSES


def _to_millis(value: datetime) -> datetime:
    # BSON dates keep millisecond precision
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def utc_now() -> datetime:
    """Current UTC time at the precision MongoDB stores."""
    return _to_millis(datetime.now(timezone.utc))


def _next_timestamp(previous: datetime, now: Optional[datetime] = None) -> datetime:
    """Current UTC time, nudged past ``previous`` if the clock has not advanced."""
    now = _to_millis(now or datetime.now(timezone.utc))
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=timezone.utc)
    if now <= previous:
        now = _to_millis(previous + timedelta(milliseconds=1))
    return now


def _bump(scenario: CTFScenario, changes: Mapping[str, Any], status: Optional[ScenarioStatus] = None) -> CTFScenario:
    """Copy of ``scenario`` with ``changes`` applied and version/updated_at advanced."""
    metadata_changes = {
        "version": scenario.metadata.version + 1,
        "updated_at": _next_timestamp(scenario.metadata.updated_at),
    }
    if status is not None:
        metadata_changes["status"] = status

    metadata = scenario.metadata.model_copy(update=metadata_changes)
    return scenario.model_copy(update={**changes, "metadata": metadata}, deep=True)


def _transition(scenario: CTFScenario, target: ScenarioStatus, operation: str) -> CTFScenario:
    current = scenario.metadata.status
    if not can_transition(current, target):
        logger.warning(
            f"Rejected {operation} for scenario {scenario.scenario_id}: status is '{current.value}'"
        )
        raise InvalidTransitionError(scenario.scenario_id, current, operation)

    updated = _bump(scenario, {}, status=target)
    logger.info(
        f"Scenario {scenario.scenario_id}: {current.value} -> {target.value} "
        f"(version {updated.metadata.version})"
    )
    return updated


def submit_for_review(scenario: CTFScenario) -> CTFScenario:
    return _transition(scenario, ScenarioStatus.PENDING_REVIEW, "submit for review")


def publish(scenario: CTFScenario) -> CTFScenario:
    return _transition(scenario, ScenarioStatus.PUBLISHED, "publish")


def archive(scenario: CTFScenario) -> CTFScenario:
    return _transition(scenario, ScenarioStatus.ARCHIVED, "archive")


def save_draft(scenario: CTFScenario) -> CTFScenario:
    """Return an editable scenario to draft (a save when already in draft)."""
    return _transition(scenario, ScenarioStatus.DRAFT, "save as draft")


def apply_edit(scenario: CTFScenario, changes: Union[ScenarioUpdate, Mapping[str, Any]]) -> CTFScenario:
    """Apply a content edit to an editable scenario.

    Args:
        scenario: Scenario in draft or pending_review
        changes: ScenarioUpdate or mapping of top-level content blocks to
            replace. Identity and metadata keys are ignored.

    Returns:
        Edited copy with version incremented

    Raises:
        InvalidTransitionError: If the scenario is published or archived
        pydantic.ValidationError: If ``changes`` is structurally malformed
    """
    if not is_editable(scenario):
        logger.warning(
            f"Rejected edit for scenario {scenario.scenario_id}: "
            f"status is '{scenario.metadata.status.value}'"
        )
        raise InvalidTransitionError(scenario.scenario_id, scenario.metadata.status, "edit")

    if not isinstance(changes, ScenarioUpdate):
        changes = ScenarioUpdate.model_validate(
            {k: v for k, v in changes.items() if k not in PROTECTED_FIELDS}
        )
    # Records must not share submodels with the caller's input
    changes = changes.model_copy(deep=True)

    # Keep validated submodels, not their dumps. Required blocks cannot be cleared.
    update = {
        name: getattr(changes, name)
        for name in changes.model_fields_set
        if getattr(changes, name) is not None or name not in REQUIRED_BLOCKS
    }
    updated = _bump(scenario, update)
    logger.info(
        f"Scenario {scenario.scenario_id} edited: {', '.join(sorted(update)) or 'no fields'} "
        f"(version {updated.metadata.version})"
    )
    return updated
