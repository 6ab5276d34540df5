# backend/ctforge/schemas/__init__.py
from ctforge.schemas.scenario import (
    BasicInfo,
    CTFGameContent,
    CTFHint,
    CTFSolution,
    CTFFeedbackTemplates,
    CTFEnvironment,
    CTFFile,
    Credentials,
    EducationalContent,
    LLMConfig,
    GamificationConfig,
    ScenarioMetadata,
    ScenarioContent,
    ScenarioUpdate,
    CTFScenario,
    is_ctf_scenario,
)

__all__ = [
    "BasicInfo", "CTFGameContent", "CTFHint", "CTFSolution", "CTFFeedbackTemplates",
    "CTFEnvironment", "CTFFile", "Credentials", "EducationalContent",
    "LLMConfig", "GamificationConfig",
    "ScenarioMetadata", "ScenarioContent", "ScenarioUpdate", "CTFScenario",
    "is_ctf_scenario",
]
