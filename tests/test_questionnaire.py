# tests/test_questionnaire.py
import copy

import pytest
from pydantic import ValidationError

from profreport.models import questionnaire
from profreport.models.questionnaire import Question, QuestionType

from conftest import SMALL_CONFIG_DATA


def test_total_questions_sums_all_sections(small_config):
    """문항 수는 모든 섹션 문항 수의 합."""
    assert small_config.total_questions == 3
    assert [q.id for q in small_config.all_questions()] == ["values_1", "riasec_2", "klimov_3"]


def test_camel_case_keys_are_accepted(small_config):
    assert small_config.test_type == "graduate"
    assert small_config.info_banner is None


def test_duplicate_question_ids_rejected():
    data = copy.deepcopy(SMALL_CONFIG_DATA)
    data["sections"][1]["questions"][0]["id"] = "values_1"
    with pytest.raises(ValidationError, match="values_1"):
        questionnaire.TestConfiguration.model_validate(data)


def test_question_id_must_have_numeric_suffix():
    with pytest.raises(ValidationError):
        Question(
            id="values_one",
            question="?",
            type="single-choice",
            options=[{"label": "A", "value": "a"}, {"label": "B", "value": "b"}],
        )


def test_question_needs_two_options():
    with pytest.raises(ValidationError):
        Question(id="riasec_1", question="?", type="single-choice", options=[{"label": "A", "value": "a"}])


@pytest.mark.parametrize(
    "legacy, expected",
    [
        ("likert", QuestionType.SINGLE_SCALE),
        ("radio", QuestionType.SINGLE_CHOICE),
        ("checkbox", QuestionType.MULTI_CHOICE),
    ],
)
def test_legacy_type_names(legacy, expected):
    q = Question(
        id="klimov_4",
        question="?",
        type=legacy,
        options=[{"label": "A", "value": "a"}, {"label": "B", "value": "b"}],
    )
    assert q.type == expected


def test_question_category_and_number():
    q = Question(
        id="personality_12",
        question="?",
        type="single-scale",
        options=[{"label": "1", "value": 1}, {"label": "2", "value": 2}],
    )
    assert q.category == "personality"
    assert q.number == 12


def test_find_question_and_section(small_config):
    assert small_config.find_question("riasec_2").question == "Что ближе?"
    assert small_config.find_question("riasec_99") is None
    assert small_config.section_of("klimov_3").id == "second"
    assert small_config.section_of("nope_1") is None
