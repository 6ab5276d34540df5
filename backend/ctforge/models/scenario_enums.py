# backend/ctforge/models/scenario_enums.py
"""
Scenario enums.

Values are the canonical serialization strings stored in MongoDB documents.
"""
from enum import Enum


class ScenarioType(str, Enum):
    CTF = "ctf"


class ScenarioStatus(str, Enum):
    """Publication lifecycle status."""
    DRAFT = "draft"
    PENDING_REVIEW = "pending_review"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ScenarioDifficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class FlagValidationType(str, Enum):
    """How a submitted flag is compared against the stored one."""
    EXACT_MATCH = "exact_match"
    REGEX = "regex"                        # flag_regex must be set
    CASE_INSENSITIVE = "case_insensitive"


class EnvironmentType(str, Enum):
    WEB_APPLICATION = "web_application"
    PCAP_FILE = "pcap_file"
    SSH_ACCESS = "ssh_access"
    VIRTUAL_NETWORK = "virtual_network"
    DOCKER_CONTAINER = "docker_container"
    CLOUD_ENVIRONMENT = "cloud_environment"
    OTHER = "other"  # described free-form in environment.description


class HintLevel(str, Enum):
    MINIMAL = "minimal"
    GUIDED = "guided"
    DETAILED = "detailed"


class SolutionDifficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class CollaborationMode(str, Enum):
    INDIVIDUAL = "individual"
    TEAM = "team"


class LLMPreset(str, Enum):
    BEGINNER_FRIENDLY = "beginner-friendly"
    BALANCED = "balanced"
    CHALLENGE = "challenge"
    CUSTOM = "custom"


class NarrativeStyle(str, Enum):
    REALISTIC = "realistic"
    GAMIFIED = "gamified"
    ACADEMIC = "academic"


class CommunicationStyle(str, Enum):
    PROFESSIONAL = "professional"
    FRIENDLY = "friendly"
    MENTOR = "mentor"
    PEER = "peer"


# Content fields may only be changed while in one of these states
EDITABLE_STATUSES = frozenset({ScenarioStatus.DRAFT, ScenarioStatus.PENDING_REVIEW})
