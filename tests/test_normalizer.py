"""
Tests for turning raw model output into AnalysisResult / quiz batches.
"""

import json

import pytest

from schemas.analysis import ReliabilityRating, SuggestedSource
from services.errors import InvalidQuizDataError, MalformedPayloadError
from services.normalizer import (
    MISSING_EXPLANATION,
    normalize_analysis,
    normalize_quiz_batch,
    strip_fence,
)

SCENARIO_B = '{"reliability":"LIKELY_ACCURATE","explanation":"ok","keywords_for_fact_check":["x"]}'


def test_strip_fence_with_language_tag():
    assert strip_fence('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_fence_without_language_tag():
    assert strip_fence('```\n[1, 2]\n```') == "[1, 2]"


def test_strip_fence_leaves_bare_text_alone():
    assert strip_fence('  {"a": 1}  ') == '{"a": 1}'


def test_scenario_b_fields():
    result = normalize_analysis(SCENARIO_B)
    assert result.rating == ReliabilityRating.LIKELY_ACCURATE
    assert result.explanation == "ok"
    assert result.factCheckKeywords == ("x",)
    assert result.suggestedSources == ()
    assert result.rawResponse == SCENARIO_B


def test_fenced_and_bare_payloads_normalize_the_same():
    fenced = normalize_analysis(f"```json\n{SCENARIO_B}\n```")
    bare = normalize_analysis(SCENARIO_B)
    assert fenced.model_dump(exclude={"rawResponse"}) == bare.model_dump(exclude={"rawResponse"})


def test_normalizing_twice_gives_identical_results():
    raw = json.dumps({
        "reliability": "HIGHLY_SUSPICIOUS",
        "explanation": "Urgent tone, no source.",
        "keywords_for_fact_check": ["earthquake", "warning"],
        "suggested_sources": [{"title": "Agency", "url": "https://example.org"}],
    })
    assert normalize_analysis(raw) == normalize_analysis(raw)


@pytest.mark.parametrize("reliability", ["likely_accurate", "TOTALLY_FAKE", "", None, 3, ["LIKELY_ACCURATE"]])
def test_unrecognised_reliability_is_unknown(reliability):
    result = normalize_analysis(json.dumps({"reliability": reliability, "explanation": "e"}))
    assert result.rating == ReliabilityRating.UNKNOWN


def test_missing_fields_get_defaults():
    result = normalize_analysis("{}")
    assert result.rating == ReliabilityRating.UNKNOWN
    assert result.explanation == MISSING_EXPLANATION
    assert result.factCheckKeywords == ()
    assert result.suggestedSources == ()


def test_empty_explanation_gets_placeholder():
    result = normalize_analysis('{"reliability": "NEEDS_VERIFICATION", "explanation": ""}')
    assert result.explanation == MISSING_EXPLANATION


def test_unknown_fields_are_ignored():
    result = normalize_analysis('{"reliability": "NEEDS_VERIFICATION", "explanation": "e", "confidence": 0.4}')
    assert result.rating == ReliabilityRating.NEEDS_VERIFICATION


def test_sources_without_url_dropped_and_capped_at_two():
    raw = json.dumps({
        "reliability": "POTENTIALLY_MISLEADING",
        "explanation": "e",
        "suggested_sources": [
            {"title": "No link"},
            {"title": "", "url": "https://a.example"},
            {"title": "B", "url": "https://b.example"},
            {"title": "C", "url": "https://c.example"},
        ],
    })
    result = normalize_analysis(raw)
    assert result.suggestedSources == (
        SuggestedSource(title=None, url="https://a.example"),
        SuggestedSource(title="B", url="https://b.example"),
    )


def test_invalid_json_raises_with_raw_text():
    with pytest.raises(MalformedPayloadError) as exc_info:
        normalize_analysis("this is not json")
    assert exc_info.value.raw == "this is not json"


def test_non_object_analysis_is_malformed():
    with pytest.raises(MalformedPayloadError):
        normalize_analysis('["LIKELY_ACCURATE"]')


def test_wrong_field_type_is_malformed():
    with pytest.raises(MalformedPayloadError):
        normalize_analysis('{"reliability": "LIKELY_ACCURATE", "keywords_for_fact_check": "x"}')


def test_quiz_batch_decodes_questions(quiz_json):
    questions = normalize_quiz_batch(f"```json\n{quiz_json}\n```")
    assert [q.id for q in questions] == ["q1", "q2", "q3"]
    assert questions[0].options[1].isCorrect is True


@pytest.mark.parametrize("raw", ["[]", "{}", '{"questions": []}', '"quiz"', "null"])
def test_empty_or_non_array_quiz_is_invalid(raw):
    with pytest.raises(InvalidQuizDataError):
        normalize_quiz_batch(raw)


def test_quiz_element_with_wrong_shape_is_invalid():
    with pytest.raises(InvalidQuizDataError):
        normalize_quiz_batch('[{"id": "q1", "options": []}]')


def test_quiz_numeric_id_becomes_text():
    questions = normalize_quiz_batch(
        '[{"id": 7, "questionText": "Q?", "options": [{"text": "a", "isCorrect": true}], "explanation": "e"}]'
    )
    assert questions[0].id == "7"


def test_quiz_invalid_json_is_malformed():
    with pytest.raises(MalformedPayloadError):
        normalize_quiz_batch("The AI client is not initialised.")


@pytest.mark.parametrize("rating", list(ReliabilityRating))
def test_every_known_reliability_is_kept(rating):
    result = normalize_analysis(json.dumps({"reliability": rating.value, "explanation": "e"}))
    assert result.rating is rating


def test_option_without_correct_flag_rejects_the_batch():
    raw = json.dumps([{
        "id": "q1",
        "questionText": "Q?",
        "options": [{"text": "a"}, {"text": "b", "isCorrect": True}],
        "explanation": "e",
    }])
    with pytest.raises(InvalidQuizDataError):
        normalize_quiz_batch(raw)


def test_analysis_result_lists_cannot_be_changed_in_place():
    result = normalize_analysis(SCENARIO_B)
    with pytest.raises(AttributeError):
        result.factCheckKeywords.append("y")
    assert result.factCheckKeywords == ("x",)
