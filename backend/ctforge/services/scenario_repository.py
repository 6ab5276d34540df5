# backend/ctforge/services/scenario_repository.py
"""MongoDB storage for CTF scenarios.

Every write is validated in full. ``save`` uses ``metadata.version`` as an
optimistic lock: a record whose version is N replaces the stored document
only while the stored version is still N - 1.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from pymongo.collection import Collection

from ctforge.database import get_scenario_collection
from ctforge.models.ctf_scenario import (
    CREATED_BY,
    DEFAULT_SORT,
    DIFFICULTY,
    EXCLUDE_MONGO_ID,
    INDEXES,
    SCENARIO_ID,
    STATUS,
    TOPIC,
    VERSION,
    from_document,
    to_document,
)
from ctforge.models.scenario_enums import ScenarioDifficulty, ScenarioStatus
from ctforge.schemas.scenario import CTFScenario
from ctforge.services.scenario_validator import validate_scenario

logger = logging.getLogger(__name__)


class ScenarioRepositoryError(Exception):
    """Base class for scenario storage errors."""


class ScenarioValidationError(ScenarioRepositoryError):
    """Raised when a record fails content validation on write."""

    def __init__(self, scenario_id: str, errors: List[str]):
        self.scenario_id = scenario_id
        self.errors = errors
        super().__init__(f"Scenario {scenario_id} failed validation: {'; '.join(errors)}")


class ScenarioNotFoundError(ScenarioRepositoryError):
    def __init__(self, scenario_id: str):
        self.scenario_id = scenario_id
        super().__init__(f"Scenario {scenario_id} not found")


class ScenarioVersionConflictError(ScenarioRepositoryError):
    """Raised when the stored version is not the one the record was based on."""

    def __init__(self, scenario_id: str, base_version: int, stored_version: int):
        self.scenario_id = scenario_id
        self.base_version = base_version
        self.stored_version = stored_version
        super().__init__(
            f"Scenario {scenario_id} was modified concurrently: "
            f"based on version {base_version}, stored version is {stored_version}"
        )


class ScenarioRepository:
    """Insert, optimistic-lock replace and indexed lookups for scenarios."""

    def __init__(self, collection: Collection):
        self.collection = collection

    def ensure_indexes(self) -> List[str]:
        """Create the lookup indexes (no-op for indexes that already exist)."""
        names = self.collection.create_indexes(INDEXES)
        logger.info(f"Ensured scenario indexes: {', '.join(names)}")
        return names

    def _validate(self, scenario: CTFScenario) -> None:
        result = validate_scenario(scenario)
        if not result.valid:
            logger.warning(f"Rejected write for scenario {scenario.scenario_id}: {result.errors}")
            raise ScenarioValidationError(scenario.scenario_id, result.errors)

    def create(self, scenario: CTFScenario) -> CTFScenario:
        """Insert a newly created scenario.

        Raises:
            ValueError: If the record is not at version 1
            ScenarioValidationError: If content validation fails
            pymongo.errors.DuplicateKeyError: If the scenario_id already exists
        """
        if scenario.metadata.version != 1:
            raise ValueError(
                f"New scenarios must start at version 1, got {scenario.metadata.version}"
            )
        self._validate(scenario)

        self.collection.insert_one(to_document(scenario))
        logger.info(f"Scenario stored: {scenario.scenario_id} by {scenario.metadata.created_by}")
        return scenario

    def save(self, scenario: CTFScenario) -> CTFScenario:
        """Replace the stored document with an updated record.

        The record must carry the version produced by a lifecycle transition
        or edit, i.e. exactly one more than the stored version.

        Raises:
            ScenarioValidationError: If content validation fails
            ScenarioNotFoundError: If no document exists for the scenario_id
            ScenarioVersionConflictError: If the stored version has moved on
        """
        self._validate(scenario)

        base_version = scenario.metadata.version - 1
        result = self.collection.replace_one(
            {SCENARIO_ID: scenario.scenario_id, VERSION: base_version},
            to_document(scenario),
        )
        if result.matched_count == 0:
            stored = self.collection.find_one({SCENARIO_ID: scenario.scenario_id}, {VERSION: 1, "_id": 0})
            if stored is None:
                raise ScenarioNotFoundError(scenario.scenario_id)
            stored_version = stored["metadata"]["version"]
            logger.warning(
                f"Version conflict on scenario {scenario.scenario_id}: "
                f"base {base_version}, stored {stored_version}"
            )
            raise ScenarioVersionConflictError(scenario.scenario_id, base_version, stored_version)

        logger.info(
            f"Scenario saved: {scenario.scenario_id} "
            f"(version {scenario.metadata.version}, status {scenario.metadata.status.value})"
        )
        return scenario

    def get(self, scenario_id: str) -> Optional[CTFScenario]:
        doc = self.collection.find_one({SCENARIO_ID: scenario_id}, EXCLUDE_MONGO_ID)
        return from_document(doc) if doc else None

    def _find(self, query: Dict[str, Any]) -> List[CTFScenario]:
        cursor = self.collection.find(query, EXCLUDE_MONGO_ID).sort(DEFAULT_SORT)
        return [from_document(doc) for doc in cursor]

    def find_by_status(self, status: Union[ScenarioStatus, str]) -> List[CTFScenario]:
        return self._find({STATUS: ScenarioStatus(status).value})

    def find_published(self) -> List[CTFScenario]:
        return self.find_by_status(ScenarioStatus.PUBLISHED)

    def find_by_instructor(self, instructor_id: str) -> List[CTFScenario]:
        return self._find({CREATED_BY: instructor_id})

    def find_by_topic(self, topic: str) -> List[CTFScenario]:
        return self._find({TOPIC: topic})

    def find_by_difficulty(self, difficulty: Union[ScenarioDifficulty, str]) -> List[CTFScenario]:
        return self._find({DIFFICULTY: ScenarioDifficulty(difficulty).value})


_scenario_repository: Optional[ScenarioRepository] = None


def get_scenario_repository() -> ScenarioRepository:
    """Get the singleton ScenarioRepository bound to the configured collection."""
    global _scenario_repository
    if _scenario_repository is None:
        _scenario_repository = ScenarioRepository(get_scenario_collection())
    return _scenario_repository
