"""Tests for parse_advice — tolerant extraction of JSON and questions from model text."""

from decision_twin.core.parse_advice import (
    FALLBACK_GUIDED_OPTIONS, FALLBACK_GUIDED_QUESTIONS, extract_json_array,
    extract_question_lines, parse_extracted_decisions, parse_guided_options,
    parse_guided_questions, parse_reflection_questions,
)


def test_extract_json_array_from_bare_text():
    assert extract_json_array('[1, 2]') == [1, 2]


def test_extract_json_array_from_fenced_block():
    text = 'Here you go:\n```json\n["a", "b"]\n```\nThanks'
    assert extract_json_array(text) == ["a", "b"]


def test_extract_json_array_from_embedded_span():
    assert extract_json_array('Sure! ["q1?"] hope that helps') == ["q1?"]


def test_extract_json_array_returns_none_for_objects_and_junk():
    assert extract_json_array('{"a": 1}') is None
    assert extract_json_array("no json here") is None
    assert extract_json_array("") is None


def test_question_lines_strip_list_markers():
    text = "Intro\n1. What went well?\n- Why did it?\nNot a question\n* What next?\n4. Extra?"
    assert extract_question_lines(text) == ["What went well?", "Why did it?", "What next?"]


def test_reflection_questions_from_json_strings_and_objects():
    text = '["One?", {"question": "Two?"}, 3]'
    assert parse_reflection_questions(text) == ["One?", "Two?"]


def test_reflection_questions_fall_back_to_lines():
    assert parse_reflection_questions("1. Why?\n2. How?") == ["Why?", "How?"]


def test_guided_questions_assign_ids_and_drop_invalid():
    text = '[{"question": "Budget?"}, {"id": 7, "question": "When?", "placeholder": "soon"}, {"nope": 1}]'
    questions = parse_guided_questions(text)
    assert [(q.id, q.question) for q in questions] == [("1", "Budget?"), ("7", "When?")]
    assert questions[1].placeholder == "soon"


def test_guided_options_parse_pros_and_cons():
    text = '```json\n[{"title": "Rent", "pros": ["flexible"], "cons": []}]\n```'
    options = parse_guided_options(text)
    assert options[0].title == "Rent"
    assert options[0].pros == ["flexible"]


def test_guided_parsers_return_empty_on_garbage():
    assert parse_guided_questions("I cannot help with that") == []
    assert parse_guided_options("") == []


def test_extracted_decisions_clamp_confidence():
    text = '[{"title": "Move", "choice": "Lisbon", "confidence": 140}, {"choice": "no title"}]'
    decisions = parse_extracted_decisions(text)
    assert len(decisions) == 1
    assert decisions[0].confidence == 100
    assert decisions[0].category == "Other"


def test_fallback_sets():
    assert [q.id for q in FALLBACK_GUIDED_QUESTIONS] == ["1", "2", "3", "4"]
    assert len(FALLBACK_GUIDED_OPTIONS) == 3
