"""Tests for chatcompat.response: the read-only response view."""

from __future__ import annotations

import pytest

from chatcompat.errors import DecodeError
from chatcompat.models import Part, PromptFeedback
from chatcompat.payloads import parse_delta
from chatcompat.response import GenerateContentResponse
from helpers import completion_body, delta_chunk


class TestCandidates:
    def test_candidates_projected_from_choices(self) -> None:
        response = GenerateContentResponse.from_dict(
            {
                "choices": [
                    {"index": 0, "message": {"content": "one"}, "finish_reason": "stop"},
                    {"index": 1, "message": {"content": "two"}, "finish_reason": "length"},
                ]
            }
        )
        candidates = response.candidates
        assert len(candidates) == 2
        assert candidates[1].index == 1
        assert candidates[1].content.role == "model"
        assert candidates[1].content.parts == [Part(text="two")]
        assert candidates[1].finish_reason == "length"
        assert candidates[0].citation_metadata.citation_sources == []

    def test_every_candidate_has_exactly_one_text_part(self) -> None:
        response = GenerateContentResponse.from_dict(
            {"choices": [{"index": 0, "message": {"content": None}}]}
        )
        assert response.candidates[0].content.parts == [Part(text="")]

    def test_candidates_list_is_a_copy(self) -> None:
        response = GenerateContentResponse.from_dict(completion_body())
        response.candidates.clear()
        assert len(response.candidates) == 1


class TestText:
    def test_text_is_first_choice_content(self) -> None:
        response = GenerateContentResponse.from_dict(completion_body("hi"))
        assert response.text == "hi"

    def test_text_is_none_without_choices(self) -> None:
        response = GenerateContentResponse.from_dict({"choices": []})
        assert response.text is None
        assert response.candidates == []

    def test_stream_event_text(self) -> None:
        response = GenerateContentResponse(parse_delta(delta_chunk("He")))
        assert response.text == "He"
        assert response.raw["choices"][0]["message"] == {"content": "He"}


class TestNeutralFields:
    def test_unsupported_surfaces_are_empty(self) -> None:
        response = GenerateContentResponse.from_dict(completion_body())
        assert response.function_calls == []
        assert response.executable_code == ""
        assert response.code_execution_result == ""
        assert response.prompt_feedback == PromptFeedback(block_reason=None, safety_ratings=[])
        assert response.usage_metadata is None

    def test_usage_metadata_when_reported(self) -> None:
        body = completion_body()
        body["usage"] = {"prompt_tokens": 4, "completion_tokens": 1}
        response = GenerateContentResponse.from_dict(body)
        assert response.usage_metadata is not None
        assert response.usage_metadata.total_token_count == 5


class TestIteration:
    def test_iterates_over_itself_once(self) -> None:
        response = GenerateContentResponse.from_dict(completion_body())
        assert list(response) == [response]
        iterator = iter(response)
        assert next(iterator) is response
        with pytest.raises(StopIteration):
            next(iterator)


class TestValidation:
    def test_from_dict_rejects_malformed_payload(self) -> None:
        with pytest.raises(DecodeError):
            GenerateContentResponse.from_dict({"choices": [{"index": 0}]})
