# backend/tests/services/test_scenario_validator.py
"""Unit tests for scenario content validation."""
import pytest

from ctforge.services.scenario_validator import (
    ScenarioValidation,
    is_valid_flag,
    validate_scenario,
    validate_scenario_data,
)


def _hints(count):
    return [
        {"id": i + 1, "level": "minimal", "content": f"Hint {i + 1}", "suggested_cost": 5}
        for i in range(count)
    ]


class TestScenarioValidation:
    """Tests for the ScenarioValidation result."""

    def test_defaults(self):
        result = ScenarioValidation(valid=True)
        assert result.valid is True
        assert result.errors == []

    def test_truthiness_follows_valid(self):
        assert ScenarioValidation(valid=True)
        assert not ScenarioValidation(valid=False, errors=["x"])


class TestFullValidation:
    """Tests for validate_scenario on complete records."""

    def test_valid_document(self, content_data):
        result = validate_scenario(content_data)
        assert result.valid is True
        assert result.errors == []

    def test_valid_record(self, scenario):
        """A CTFScenario instance is accepted as input."""
        assert validate_scenario(scenario).valid is True

    @pytest.mark.parametrize("length", [300, 450, 600])
    def test_description_length_inside_bounds(self, content_data, length):
        content_data["game_content"]["description"] = "d" * length
        assert validate_scenario(content_data).valid is True

    @pytest.mark.parametrize("length", [299, 601])
    def test_description_length_outside_bounds(self, content_data, length):
        content_data["game_content"]["description"] = "d" * length
        result = validate_scenario(content_data)
        assert result.valid is False
        assert result.errors == [f"Description must be 300-600 characters (current: {length})"]

    @pytest.mark.parametrize("flag", ["CTF{a}", "CTF{un10n_s3l3ct}", "CTF{with space}", "CTF{{nested}"])
    def test_flag_accepted(self, content_data, flag):
        content_data["game_content"]["flag"] = flag
        assert validate_scenario(content_data).valid is True

    @pytest.mark.parametrize("flag", [
        "CTF{}",
        "CTF[x]",
        "flag{abc}",
        "CTF{abc",
        "abc}",
        "CTF{abc}trailing",
        "CTF{a}b}",
        "ctf{abc}",
    ])
    def test_flag_rejected(self, content_data, flag):
        content_data["game_content"]["flag"] = flag
        result = validate_scenario(content_data)
        assert result.errors == ["Flag must match format CTF{...}"]

    @pytest.mark.parametrize("count", [3, 5, 7])
    def test_hint_count_inside_bounds(self, content_data, count):
        content_data["game_content"]["hints"] = _hints(count)
        assert validate_scenario(content_data).valid is True

    @pytest.mark.parametrize("count", [2, 8])
    def test_hint_count_outside_bounds(self, content_data, count):
        content_data["game_content"]["hints"] = _hints(count)
        result = validate_scenario(content_data)
        assert result.errors == [f"Must have 3-7 hints (current: {count})"]

    def test_no_solutions(self, content_data):
        content_data["game_content"]["solutions"] = []
        result = validate_scenario(content_data)
        assert result.errors == ["Must have at least 1 solution (current: 0)"]

    def test_no_learning_objectives(self, content_data):
        content_data["basic_info"]["learning_objectives"] = []
        result = validate_scenario(content_data)
        assert result.errors == ["Must have at least 1 learning objective (current: 0)"]

    def test_error_order_is_fixed(self, content_data):
        """Description, flag and hint errors are reported in that order."""
        content_data["game_content"]["hints"] = _hints(1)
        content_data["game_content"]["flag"] = "CTF{}"
        content_data["game_content"]["description"] = "too short"
        content_data["game_content"]["solutions"] = []
        content_data["basic_info"]["learning_objectives"] = []

        result = validate_scenario(content_data)

        assert result.errors == [
            "Description must be 300-600 characters (current: 9)",
            "Flag must match format CTF{...}",
            "Must have 3-7 hints (current: 1)",
            "Must have at least 1 solution (current: 0)",
            "Must have at least 1 learning objective (current: 0)",
        ]

    def test_missing_fields_are_errors(self):
        result = validate_scenario({})
        assert result.valid is False
        assert result.errors == [
            "Description is required",
            "Flag is required",
            "Hints are required",
            "Solutions are required",
            "Learning objectives are required",
            "Title is required",
            "Topic is required",
            "Estimated time is required",
            "Feedback templates are required",
        ]

    @pytest.mark.parametrize("length,valid", [(99, False), (100, True), (300, True), (301, False)])
    def test_background_story_bounds(self, content_data, length, valid):
        content_data["game_content"]["background_story"] = "s" * length
        result = validate_scenario(content_data)
        assert result.valid is valid
        if not valid:
            assert result.errors == [f"Background story must be 100-300 characters (current: {length})"]

    def test_regex_mode_requires_flag_regex(self, content_data):
        content_data["game_content"]["flag_validation"] = "regex"
        result = validate_scenario(content_data)
        assert result.errors == ["Flag regex is required when flag validation is 'regex'"]

    def test_regex_mode_with_invalid_pattern(self, content_data):
        content_data["game_content"]["flag_validation"] = "regex"
        content_data["game_content"]["flag_regex"] = "CTF\\{(unclosed"
        result = validate_scenario(content_data)
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Flag regex is not a valid regular expression")

    def test_regex_mode_with_pattern(self, content_data):
        content_data["game_content"]["flag_validation"] = "regex"
        content_data["game_content"]["flag_regex"] = r"CTF\{un10n_s3l3ct_w1ns?\}"
        assert validate_scenario(content_data).valid is True

    @pytest.mark.parametrize("title,valid", [("", False), ("t", True), ("t" * 200, True), ("t" * 201, False)])
    def test_title_bounds(self, content_data, title, valid):
        content_data["basic_info"]["title"] = title
        assert validate_scenario(content_data).valid is valid

    @pytest.mark.parametrize("topic", ["", "   "])
    def test_empty_topic_rejected(self, content_data, topic):
        content_data["basic_info"]["topic"] = topic

        result = validate_scenario(content_data)

        assert result.errors == ["Topic must not be empty"]

    def test_missing_topic_partial_mode(self):
        assert validate_scenario_data({"basic_info": {"title": "x"}}).valid is True
        assert validate_scenario_data({"basic_info": {"topic": ""}}).errors == ["Topic must not be empty"]

    def test_text_trimmed_before_checks(self, content_data):
        """Surrounding whitespace does not count toward lengths or the flag format."""
        content_data["game_content"]["flag"] = " CTF{abc}\n"
        content_data["game_content"]["description"] = "  " + "d" * 299 + "  "
        content_data["basic_info"]["title"] = "   "

        result = validate_scenario(content_data)

        assert result.errors == [
            "Description must be 300-600 characters (current: 299)",
            "Title must be 1-200 characters",
        ]

    @pytest.mark.parametrize("minutes", [0, -5, True, "30"])
    def test_estimated_time_rejected(self, content_data, minutes):
        content_data["basic_info"]["estimated_time"] = minutes
        result = validate_scenario(content_data)
        assert result.errors == ["Estimated time must be at least 1 minute"]

    def test_feedback_templates_missing_required_keys(self, content_data):
        content_data["game_content"]["feedback_templates"] = {"close": "Almost."}
        result = validate_scenario(content_data)
        assert result.errors == ["Feedback templates missing required keys: correct, invalid_format"]

    def test_custom_instructions_too_long(self, content_data):
        content_data["custom_instructions"] = "x" * 2001
        result = validate_scenario(content_data)
        assert result.errors == ["Custom instructions must be at most 2000 characters"]

    def test_unknown_fields_ignored(self, content_data):
        content_data["unexpected"] = {"anything": 1}
        content_data["game_content"]["extra_field"] = "ignored"
        assert validate_scenario(content_data).valid is True

    @pytest.mark.parametrize("garbage", [None, "scenario", 42, [], {"game_content": "oops", "basic_info": 7}])
    def test_never_raises_on_malformed_input(self, garbage):
        result = validate_scenario(garbage)
        assert result.valid is False
        assert result.errors

    def test_wrong_types_reported(self, content_data):
        content_data["game_content"]["description"] = 12345
        content_data["game_content"]["hints"] = "three hints"
        result = validate_scenario(content_data)
        assert result.errors == [
            "Description must be a string of 300-600 characters",
            "Hints must be a list of 3-7 hints",
        ]


class TestPartialValidation:
    """Tests for validate_scenario_data on partial payloads."""

    def test_empty_payload_is_valid(self):
        result = validate_scenario_data({})
        assert result.valid is True

    def test_only_present_fields_checked(self):
        result = validate_scenario_data({"game_content": {"hints": _hints(8)}})
        assert result.errors == ["Must have 3-7 hints (current: 8)"]

    def test_reports_current_values(self):
        data = {
            "game_content": {"description": "short", "solutions": []},
            "basic_info": {"learning_objectives": []},
        }
        result = validate_scenario_data(data)
        assert result.errors == [
            "Description must be 300-600 characters (current: 5)",
            "Must have at least 1 solution (current: 0)",
            "Must have at least 1 learning objective (current: 0)",
        ]

    def test_valid_full_payload(self, content_data):
        assert validate_scenario_data(content_data).valid is True


class TestIsValidFlag:
    def test_non_string(self):
        assert is_valid_flag(None) is False
        assert is_valid_flag(123) is False

    def test_valid(self):
        assert is_valid_flag("CTF{x}") is True
