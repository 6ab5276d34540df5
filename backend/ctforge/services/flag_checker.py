# backend/ctforge/services/flag_checker.py
"""Matching of submitted flags against a scenario's flag settings."""
import logging
import re

from ctforge.models.scenario_enums import FlagValidationType
from ctforge.schemas.scenario import CTFGameContent

logger = logging.getLogger(__name__)


def check_flag(game_content: CTFGameContent, submitted: str) -> bool:
    """Check a learner's submission using the scenario's flag_validation mode.

    Surrounding whitespace in the submission is ignored. In regex mode the
    whole submission must match ``flag_regex``; a pattern that does not
    compile matches nothing.
    """
    candidate = submitted.strip()
    mode = game_content.flag_validation

    if mode == FlagValidationType.CASE_INSENSITIVE:
        return candidate.casefold() == game_content.flag.casefold()

    if mode == FlagValidationType.REGEX:
        if not game_content.flag_regex:
            logger.warning("Regex flag validation configured without flag_regex")
            return False
        try:
            return re.fullmatch(game_content.flag_regex, candidate) is not None
        except re.error as e:
            logger.warning(f"Invalid flag_regex {game_content.flag_regex!r}: {e}")
            return False

    return candidate == game_content.flag
