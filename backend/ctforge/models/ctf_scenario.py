# backend/ctforge/models/ctf_scenario.py
"""MongoDB document mapping for CTF scenarios."""
from typing import Any, Dict, List, Mapping, Tuple

from pymongo import ASCENDING, DESCENDING, IndexModel

from ctforge.schemas.scenario import CTFScenario

# Dotted field paths used in queries
SCENARIO_ID = "scenario_id"
TOPIC = "basic_info.topic"
DIFFICULTY = "basic_info.difficulty"
STATUS = "metadata.status"
CREATED_BY = "metadata.created_by"
CREATED_AT = "metadata.created_at"
VERSION = "metadata.version"

# Newest first
DEFAULT_SORT: List[Tuple[str, int]] = [(CREATED_AT, DESCENDING)]

INDEXES = [
    IndexModel([(SCENARIO_ID, ASCENDING)], unique=True, name="scenario_id_unique"),
    IndexModel([(TOPIC, ASCENDING)], name="topic"),
    IndexModel([(DIFFICULTY, ASCENDING)], name="difficulty"),
    IndexModel([(STATUS, ASCENDING)], name="status"),
    IndexModel([(CREATED_BY, ASCENDING)], name="created_by"),
    IndexModel([(CREATED_AT, DESCENDING)], name="created_at_desc"),
]

# Never returned to callers
EXCLUDE_MONGO_ID = {"_id": 0}


def to_document(scenario: CTFScenario) -> Dict[str, Any]:
    """Serialize a record into the stored document shape.

    Enums become their string values and absent optional fields are omitted.
    Timestamps stay datetimes so MongoDB stores them as dates.
    """
    doc = scenario.model_dump(mode="json", exclude_none=True)
    doc["metadata"]["created_at"] = scenario.metadata.created_at
    doc["metadata"]["updated_at"] = scenario.metadata.updated_at
    return doc


def from_document(doc: Mapping[str, Any]) -> CTFScenario:
    doc = {k: v for k, v in doc.items() if k != "_id"}
    return CTFScenario.model_validate(doc)
