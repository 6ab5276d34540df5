# backend/ctforge/schemas/scenario.py
"""Pydantic shapes for CTF scenario records.

These models describe structure only: field types, enumerations, numeric
lower bounds and whitespace trimming of content text. Length and
cardinality rules (description length, hint count, flag pattern, ...) are
checked by ``ctforge.services.scenario_validator`` so
that a structurally well-formed record can always be constructed.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ctforge.models.scenario_enums import (
    EDITABLE_STATUSES,
    CollaborationMode,
    CommunicationStyle,
    EnvironmentType,
    FlagValidationType,
    HintLevel,
    LLMPreset,
    NarrativeStyle,
    ScenarioDifficulty,
    ScenarioStatus,
    ScenarioType,
    SolutionDifficulty,
)


# ============ Basic Info ============

class BasicInfo(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str
    topic: str
    subtopic: Optional[str] = None
    difficulty: ScenarioDifficulty
    estimated_time: int = Field(..., description="Estimated completion time in minutes")
    learning_objectives: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)


# ============ Environment ============

class Credentials(BaseModel):
    username: str
    password: str


class CTFFile(BaseModel):
    """A file handed to learners (PCAP, config dump, binary, ...)."""
    name: str
    url: str = Field(..., description="Direct download link or path")
    size: Optional[str] = None  # e.g. "2.5 MB"
    description: Optional[str] = None
    checksum: Optional[str] = None  # MD5 or SHA256


class CTFEnvironment(BaseModel):
    type: EnvironmentType
    description: Optional[str] = None
    required_tools: List[str] = Field(default_factory=list)
    # Deliberately unconstrained: any JSON value
    access_info: Optional[Any] = None
    url: Optional[str] = None
    credentials: Optional[Credentials] = None
    files: List[CTFFile] = Field(default_factory=list)
    tech_stack: List[str] = Field(default_factory=list)


# ============ Game Content ============

class CTFHint(BaseModel):
    id: int = Field(..., description="Sequential: 1, 2, 3, ...")
    level: HintLevel
    content: str
    suggested_cost: float = Field(..., ge=0, description="Points deducted when the hint is used")
    unlock_condition: Optional[str] = None  # e.g. "after 2 attempts"


class CTFFeedbackTemplates(BaseModel):
    """Feedback strings; any additional string-valued key is kept."""
    model_config = ConfigDict(extra="allow", str_strip_whitespace=True)
    __pydantic_extra__: Dict[str, str] = Field(init=False)

    correct: str
    invalid_format: str
    close: Optional[str] = None
    wrong_approach: Optional[str] = None
    time_warning: Optional[str] = None


class CTFSolution(BaseModel):
    method: str
    difficulty: SolutionDifficulty
    steps: List[str] = Field(default_factory=list)
    payload: Optional[str] = None
    explanation: str
    prerequisites: List[str] = Field(default_factory=list)


class EducationalContent(BaseModel):
    what_is: str
    how_it_works: str
    prevention: str
    real_world_examples: List[str] = Field(default_factory=list)
    related_topics: List[str] = Field(default_factory=list)
    references: List[str] = Field(default_factory=list)


class CTFGameContent(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    description: str
    background_story: Optional[str] = None

    flag: str
    flag_format: str = "CTF{...}"
    flag_validation: FlagValidationType = FlagValidationType.EXACT_MATCH
    flag_regex: Optional[str] = None

    max_score: float = Field(100, ge=0)
    environment: Optional[CTFEnvironment] = None
    hints: List[CTFHint] = Field(default_factory=list)
    feedback_templates: CTFFeedbackTemplates
    solutions: List[CTFSolution] = Field(default_factory=list)
    educational_content: Optional[EducationalContent] = None


# ============ Optional configuration blocks ============

class LLMConfig(BaseModel):
    """Generation settings recorded when content came from the LLM service."""
    preset: Optional[LLMPreset] = None
    creativity: Optional[float] = Field(None, ge=0, le=1)
    hint_detail_level: Optional[float] = Field(None, ge=0, le=1)
    feedback_detail_level: Optional[float] = Field(None, ge=0, le=1)
    explanation_depth: Optional[float] = Field(None, ge=0, le=1)
    hint_count: Optional[int] = Field(None, ge=3, le=7)
    narrative_style: Optional[NarrativeStyle] = None
    communication_style: Optional[CommunicationStyle] = None


class GamificationConfig(BaseModel):
    show_leaderboard: bool = True
    allow_retries: bool = True
    retry_penalty: float = Field(5, ge=0)
    time_bonus_enabled: bool = False
    collaboration_mode: CollaborationMode = CollaborationMode.INDIVIDUAL


# ============ Record ============

class ScenarioMetadata(BaseModel):
    created_at: datetime
    updated_at: datetime
    created_by: str
    version: int = Field(1, ge=1)
    status: ScenarioStatus = ScenarioStatus.DRAFT
    llm_generated: bool = False


class ScenarioContent(BaseModel):
    """Caller-supplied content for a new scenario."""
    basic_info: BasicInfo
    game_content: CTFGameContent
    llm_config: Optional[LLMConfig] = None
    custom_instructions: Optional[str] = None
    gamification_config: Optional[GamificationConfig] = None


class ScenarioUpdate(BaseModel):
    """Content edit; each block given replaces the stored block."""
    basic_info: Optional[BasicInfo] = None
    game_content: Optional[CTFGameContent] = None
    llm_config: Optional[LLMConfig] = None
    custom_instructions: Optional[str] = None
    gamification_config: Optional[GamificationConfig] = None


class CTFScenario(ScenarioContent):
    scenario_id: str
    scenario_type: ScenarioType = ScenarioType.CTF
    metadata: ScenarioMetadata

    @property
    def full_title(self) -> str:
        return f"{self.basic_info.title} ({self.basic_info.difficulty.value})"

    @property
    def is_editable(self) -> bool:
        return self.metadata.status in EDITABLE_STATUSES

    @property
    def is_published(self) -> bool:
        return self.metadata.status == ScenarioStatus.PUBLISHED


def is_ctf_scenario(scenario: Any) -> bool:
    """Check whether a record or raw document is a CTF scenario."""
    if isinstance(scenario, CTFScenario):
        return scenario.scenario_type == ScenarioType.CTF
    if isinstance(scenario, dict):
        return scenario.get("scenario_type") == ScenarioType.CTF.value
    return False
