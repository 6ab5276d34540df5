# backend/ctforge/services/scenario_validator.py
"""Content validation for CTF scenarios.

Validation never raises for bad input. Every check runs and every failure is
collected, in a fixed order:

1. Description length
2. Flag format
3. Hint count
4. Solution count
5. Learning objective count
6. Background story length
7. Flag regex (when flag validation is "regex")
8. Title length
9. Topic
10. Estimated time
11. Feedback template keys
12. Custom instructions length

Text fields are trimmed before length and pattern checks, as they are
trimmed when a record is built.

Two modes are offered. ``validate_scenario`` treats a missing required field
as an error. ``validate_scenario_data`` only checks the fields that are
present, for partial payloads that will be validated again on save.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, List, Mapping, Optional, Tuple

from pydantic import BaseModel

from ctforge.models.scenario_enums import FlagValidationType

logger = logging.getLogger(__name__)

# Inclusive bounds
DESCRIPTION_LENGTH = (300, 600)
BACKGROUND_STORY_LENGTH = (100, 300)
TITLE_LENGTH = (1, 200)
HINT_COUNT = (3, 7)
MIN_SOLUTIONS = 1
MIN_LEARNING_OBJECTIVES = 1
MIN_ESTIMATED_TIME = 1
MAX_CUSTOM_INSTRUCTIONS_LENGTH = 2000

FLAG_PATTERN = re.compile(r"CTF\{[^}]+\}")
REQUIRED_FEEDBACK_KEYS = ("correct", "invalid_format")


@dataclass
class ScenarioValidation:
    """Validation verdict with human-readable errors in check order."""
    valid: bool
    errors: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def is_valid_flag(flag: Any) -> bool:
    """Check a flag against the CTF{...} format."""
    return isinstance(flag, str) and FLAG_PATTERN.fullmatch(flag) is not None


def _as_mapping(value: Any) -> Optional[Mapping]:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", exclude_none=True)
    if isinstance(value, Mapping):
        return value
    return None


def _get(block: Optional[Mapping], key: str) -> Any:
    """Field value, or None when the block or the field is absent."""
    if block is None:
        return None
    return block.get(key)


def _text(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _count(value: Any) -> Optional[int]:
    if isinstance(value, (list, tuple)):
        return len(value)
    return None


def _check_description(game: Optional[Mapping], basic: Optional[Mapping], doc: Mapping, partial: bool) -> Optional[str]:
    description = _text(_get(game, "description"))
    if description is None:
        return None if partial else "Description is required"
    low, high = DESCRIPTION_LENGTH
    if not isinstance(description, str):
        return f"Description must be a string of {low}-{high} characters"
    if not low <= len(description) <= high:
        return f"Description must be {low}-{high} characters (current: {len(description)})"
    return None


def _check_flag(game, basic, doc, partial):
    flag = _text(_get(game, "flag"))
    if flag is None:
        return None if partial else "Flag is required"
    if not is_valid_flag(flag):
        return "Flag must match format CTF{...}"
    return None


def _check_hints(game, basic, doc, partial):
    hints = _get(game, "hints")
    if hints is None:
        return None if partial else "Hints are required"
    low, high = HINT_COUNT
    count = _count(hints)
    if count is None:
        return f"Hints must be a list of {low}-{high} hints"
    if not low <= count <= high:
        return f"Must have {low}-{high} hints (current: {count})"
    return None


def _check_solutions(game, basic, doc, partial):
    solutions = _get(game, "solutions")
    if solutions is None:
        return None if partial else "Solutions are required"
    count = _count(solutions)
    if count is None or count < MIN_SOLUTIONS:
        return f"Must have at least {MIN_SOLUTIONS} solution (current: {count or 0})"
    return None


def _check_learning_objectives(game, basic, doc, partial):
    objectives = _get(basic, "learning_objectives")
    if objectives is None:
        return None if partial else "Learning objectives are required"
    count = _count(objectives)
    if count is None or count < MIN_LEARNING_OBJECTIVES:
        return f"Must have at least {MIN_LEARNING_OBJECTIVES} learning objective (current: {count or 0})"
    return None


def _check_background_story(game, basic, doc, partial):
    story = _text(_get(game, "background_story"))
    if story is None:
        return None
    low, high = BACKGROUND_STORY_LENGTH
    if not isinstance(story, str) or not low <= len(story) <= high:
        current = len(story) if isinstance(story, str) else 0
        return f"Background story must be {low}-{high} characters (current: {current})"
    return None


def _check_flag_regex(game, basic, doc, partial):
    mode = _get(game, "flag_validation")
    if mode != FlagValidationType.REGEX.value:
        return None
    pattern = _get(game, "flag_regex")
    if not isinstance(pattern, str) or not pattern:
        return "Flag regex is required when flag validation is 'regex'"
    try:
        re.compile(pattern)
    except re.error as e:
        return f"Flag regex is not a valid regular expression: {e}"
    return None


def _check_title(game, basic, doc, partial):
    title = _text(_get(basic, "title"))
    if title is None:
        return None if partial else "Title is required"
    low, high = TITLE_LENGTH
    if not isinstance(title, str) or not low <= len(title) <= high:
        return f"Title must be {low}-{high} characters"
    return None


def _check_topic(game, basic, doc, partial):
    topic = _text(_get(basic, "topic"))
    if topic is None:
        return None if partial else "Topic is required"
    if not isinstance(topic, str) or not topic:
        return "Topic must not be empty"
    return None


def _check_estimated_time(game, basic, doc, partial):
    minutes = _get(basic, "estimated_time")
    if minutes is None:
        return None if partial else "Estimated time is required"
    if isinstance(minutes, bool) or not isinstance(minutes, (int, float)) or minutes < MIN_ESTIMATED_TIME:
        return f"Estimated time must be at least {MIN_ESTIMATED_TIME} minute"
    return None


def _check_feedback_templates(game, basic, doc, partial):
    raw = _get(game, "feedback_templates")
    if raw is None:
        return None if partial else "Feedback templates are required"
    templates = _as_mapping(raw)
    if templates is None:
        return "Feedback templates must be a mapping of names to text"
    missing = [key for key in REQUIRED_FEEDBACK_KEYS if not isinstance(templates.get(key), str)]
    if missing:
        return f"Feedback templates missing required keys: {', '.join(missing)}"
    return None


def _check_custom_instructions(game, basic, doc, partial):
    instructions = doc.get("custom_instructions")
    if instructions is None:
        return None
    if not isinstance(instructions, str) or len(instructions) > MAX_CUSTOM_INSTRUCTIONS_LENGTH:
        return f"Custom instructions must be at most {MAX_CUSTOM_INSTRUCTIONS_LENGTH} characters"
    return None


Check = Callable[[Optional[Mapping], Optional[Mapping], Mapping, bool], Optional[str]]

# Order is part of the contract: callers assert on error positions
CHECKS: Tuple[Check, ...] = (
    _check_description,
    _check_flag,
    _check_hints,
    _check_solutions,
    _check_learning_objectives,
    _check_background_story,
    _check_flag_regex,
    _check_title,
    _check_topic,
    _check_estimated_time,
    _check_feedback_templates,
    _check_custom_instructions,
)


def _run_checks(scenario: Any, partial: bool) -> ScenarioValidation:
    doc = _as_mapping(scenario) or {}
    game = _as_mapping(doc.get("game_content"))
    basic = _as_mapping(doc.get("basic_info"))

    errors = []
    for check in CHECKS:
        message = check(game, basic, doc, partial)
        if message:
            errors.append(message)

    if errors:
        logger.debug(f"Scenario validation failed with {len(errors)} error(s): {errors}")
    return ScenarioValidation(valid=not errors, errors=errors)


def validate_scenario(scenario: Any) -> ScenarioValidation:
    """Validate a complete scenario record or document.

    Args:
        scenario: CTFScenario, or a mapping shaped like its serialized form

    Returns:
        ScenarioValidation; missing required fields are reported as errors
    """
    return _run_checks(scenario, partial=False)


def validate_scenario_data(data: Any) -> ScenarioValidation:
    """Validate only the fields present in a (possibly partial) payload."""
    return _run_checks(data, partial=True)
