# backend/ctforge/models/__init__.py
from ctforge.models.scenario_enums import (
    ScenarioType,
    ScenarioStatus,
    ScenarioDifficulty,
    FlagValidationType,
    EnvironmentType,
    HintLevel,
    SolutionDifficulty,
    CollaborationMode,
    LLMPreset,
    NarrativeStyle,
    CommunicationStyle,
    EDITABLE_STATUSES,
)

__all__ = [
    "ScenarioType", "ScenarioStatus", "ScenarioDifficulty",
    "FlagValidationType", "EnvironmentType",
    "HintLevel", "SolutionDifficulty",
    "CollaborationMode", "LLMPreset", "NarrativeStyle", "CommunicationStyle",
    "EDITABLE_STATUSES",
]
