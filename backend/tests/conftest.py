# backend/tests/conftest.py
import copy

import pytest

from ctforge.services.scenario_factory import create_ctf_scenario

DESCRIPTION = (
    "A small bookstore runs its catalog search on a PHP application backed by MySQL. "
    "The search box passes your input straight into a SQL query. Your goal is to read "
    "the contents of a hidden table that stores staff secrets. Enumerate the columns "
    "returned by the query, find the right table name, and extract the flag stored in it."
)

CONTENT = {
    "basic_info": {
        "title": "Bookstore Search Injection",
        "topic": "sql_injection",
        "subtopic": "union_based",
        "difficulty": "beginner",
        "estimated_time": 30,
        "learning_objectives": ["Identify an injectable parameter", "Use UNION SELECT"],
        "tags": ["web", "sqli"],
    },
    "game_content": {
        "description": DESCRIPTION,
        "flag": "CTF{un10n_s3l3ct_w1ns}",
        "hints": [
            {"id": 1, "level": "minimal", "content": "Try a single quote.", "suggested_cost": 5},
            {"id": 2, "level": "guided", "content": "Count the columns with ORDER BY.", "suggested_cost": 10},
            {
                "id": 3,
                "level": "detailed",
                "content": "UNION SELECT from the staff_secrets table.",
                "suggested_cost": 20,
                "unlock_condition": "after 3 attempts",
            },
        ],
        "feedback_templates": {
            "correct": "Well done, the catalog gave up its secrets.",
            "invalid_format": "Flags look like CTF{...}.",
            "sql_error": "The database is complaining, which is a good sign.",
        },
        "solutions": [
            {
                "method": "Union-based SQL Injection",
                "difficulty": "easy",
                "steps": ["Find column count", "UNION SELECT secret FROM staff_secrets"],
                "payload": "' UNION SELECT secret, NULL FROM staff_secrets-- -",
                "explanation": "User input is concatenated into the query.",
            }
        ],
    },
}


@pytest.fixture
def content_data():
    """A fresh, valid scenario content payload."""
    return copy.deepcopy(CONTENT)


@pytest.fixture
def scenario(content_data):
    """A freshly created draft scenario."""
    return create_ctf_scenario(content_data, "instructor-1")
