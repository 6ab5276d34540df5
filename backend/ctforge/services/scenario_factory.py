# backend/ctforge/services/scenario_factory.py
"""Construction of new CTF scenario records."""
import logging
from typing import Any, Mapping, Union

from bson import ObjectId

from ctforge.models.scenario_enums import ScenarioStatus, ScenarioType
from ctforge.schemas.scenario import CTFScenario, ScenarioContent, ScenarioMetadata
from ctforge.services.scenario_lifecycle import utc_now

logger = logging.getLogger(__name__)


def new_scenario_id() -> str:
    return str(ObjectId())


def create_ctf_scenario(
    data: Union[ScenarioContent, Mapping[str, Any]],
    instructor_id: str,
) -> CTFScenario:
    """Build a new draft scenario from caller-supplied content.

    Content rules (description length, hint count, ...) are not checked here;
    run ``validate_scenario`` on the result or let the repository do it on
    insert.

    Args:
        data: ScenarioContent, or a mapping with the same keys. Any
            scenario_id, scenario_type or metadata keys are ignored.
        instructor_id: Creator identity stored in metadata.created_by

    Returns:
        CTFScenario in draft status with version 1

    Raises:
        pydantic.ValidationError: If ``data`` is structurally malformed
    """
    if isinstance(data, ScenarioContent):
        # Records must not share submodels with the caller's input
        data = data.model_copy(deep=True)
    else:
        data = ScenarioContent.model_validate(data)

    now = utc_now()
    scenario = CTFScenario(
        scenario_id=new_scenario_id(),
        scenario_type=ScenarioType.CTF,
        basic_info=data.basic_info,
        game_content=data.game_content,
        llm_config=data.llm_config,
        custom_instructions=data.custom_instructions,
        gamification_config=data.gamification_config,
        metadata=ScenarioMetadata(
            created_at=now,
            updated_at=now,
            created_by=instructor_id,
            version=1,
            status=ScenarioStatus.DRAFT,
            llm_generated=data.llm_config is not None,
        ),
    )

    logger.info(f"Scenario created: {scenario.full_title} [{scenario.scenario_id}] by {instructor_id}")
    return scenario
