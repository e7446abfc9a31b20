"""
Unit tests for test case parsing.

Every field is untrusted; anything unusable collapses to the placeholder.
"""

import json

import pytest

from generation_layer.models.enums import PriorityEnum
from generation_layer.parsing import TestCaseParser, parse_test_cases, placeholder_test_case


def test_parses_valid_array(valid_test_cases_json):
    """Well-formed output maps field by field."""
    test_cases = parse_test_cases(valid_test_cases_json)

    assert len(test_cases) == 2
    first = test_cases[0]
    assert first.title == "Valid login"
    assert [s.description for s in first.steps] == [
        "Enter a registered email",
        "Enter the matching password",
        "Click Sign in",
    ]
    assert first.expected_result == "User lands on the dashboard"
    assert first.priority is PriorityEnum.HIGH


def test_fenced_output_matches_unfenced(valid_test_cases_json):
    fenced = f"```json\n{valid_test_cases_json}\n```"
    assert parse_test_cases(fenced) == parse_test_cases(valid_test_cases_json)


def test_array_embedded_in_prose(valid_test_cases_json):
    text = f"Sure! Here are the test cases:\n{valid_test_cases_json}\nLet me know if you need more."
    assert len(parse_test_cases(text)) == 2


def test_object_wrapping_array(valid_test_cases_data):
    text = json.dumps({"testCases": valid_test_cases_data})
    assert [tc.title for tc in parse_test_cases(text)] == ["Valid login", "Empty password"]


def test_single_object_is_wrapped():
    text = json.dumps({"title": "Only one", "steps": [{"description": "Do it"}]})
    test_cases = parse_test_cases(text)
    assert len(test_cases) == 1
    assert test_cases[0].title == "Only one"


@pytest.mark.parametrize("priority", ["critical", "urgent", "", None, 3, ["high"]])
def test_unknown_priority_coerced_to_medium(priority):
    text = json.dumps([{"title": "T", "priority": priority}])
    assert parse_test_cases(text)[0].priority is PriorityEnum.MEDIUM


def test_priority_case_insensitive():
    text = json.dumps([{"title": "T", "priority": "HIGH"}])
    assert parse_test_cases(text)[0].priority is PriorityEnum.HIGH


def test_missing_fields_get_defaults():
    test_cases = parse_test_cases("[{}]")

    tc = test_cases[0]
    assert tc.title == "Generated Test Case"
    assert tc.description == ""
    assert [s.description for s in tc.steps] == ["No steps provided"]
    assert tc.expected_result == "Test should pass"
    assert tc.priority is PriorityEnum.MEDIUM


def test_wrong_field_types_treated_as_missing():
    text = json.dumps([
        {"title": 42, "description": {"x": 1}, "steps": "click", "expectedResult": False}
    ])
    tc = parse_test_cases(text)[0]
    assert tc.title == "Generated Test Case"
    assert tc.description == ""
    assert tc.steps[0].description == "No steps provided"
    assert tc.expected_result == "Test should pass"


def test_string_steps_accepted_and_junk_steps_dropped():
    text = json.dumps([{"title": "T", "steps": ["Open page", {"description": "Click"}, 7, {"text": "x"}]}])
    assert [s.description for s in parse_test_cases(text)[0].steps] == ["Open page", "Click"]


def test_non_object_elements_skipped():
    text = json.dumps(["junk", 1, {"title": "Kept"}])
    assert [tc.title for tc in parse_test_cases(text)] == ["Kept"]


@pytest.mark.parametrize(
    "text",
    [
        "",
        "   ",
        "I cannot help with that.",
        '[{"title": "truncated", "steps": [{"descr',
        "[]",
        '["a", "b"]',
        '{"unexpected": true}',
        "null",
        "42",
        "[" * 300,
    ],
)
def test_unusable_output_returns_placeholder(text):
    """Parser never raises; it returns exactly the placeholder."""
    assert parse_test_cases(text) == [placeholder_test_case()]


def test_non_string_input_returns_placeholder():
    assert TestCaseParser().parse(None) == [placeholder_test_case()]


def test_placeholder_content():
    placeholder = placeholder_test_case()
    assert placeholder.title == "AI Generated Test Case"
    assert placeholder.description == "Failed to parse AI response, manual review needed"
    assert placeholder.steps[0].description == "Review the generated content manually"
    assert placeholder.expected_result == "Manual verification required"
    assert placeholder.priority is PriorityEnum.MEDIUM


def test_no_regex_salvage_of_partial_fields():
    """A test case is never assembled from fragments of broken JSON."""
    text = 'garbage "title": "Half a test case", "priority": "high" garbage'
    assert parse_test_cases(text) == [placeholder_test_case()]


def test_truncated_array_never_promotes_nested_steps():
    """Output cut at the token limit yields the placeholder, not the first steps array."""
    text = (
        '[{"title": "Login works", "description": "Happy path", '
        '"steps": [{"description": "Open the login page"}, {"description": "Submit valid credentials"}], '
        '"expectedResult": "Dashboard shown", "priority": "high"}, '
        '{"title": "Logout", "desc'
    )
    assert parse_test_cases(text) == [placeholder_test_case()]


def test_long_unbalanced_output_returns_placeholder():
    assert parse_test_cases("[" * 20000) == [placeholder_test_case()]
