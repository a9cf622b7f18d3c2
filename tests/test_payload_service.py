# tests/test_payload_service.py
import copy
import logging

from profreport.models.answer_store import AnswerStore
from profreport.models import questionnaire
from profreport.models.questionnaire import Question
from profreport.services.payload_service import (
    build_questionnaire_payload,
    build_standard_payload,
    find_dropped_answers,
    resolve_answer_label,
)
from profreport.content.catalog import get_test

from conftest import SMALL_CONFIG_DATA


def _multi_question():
    return Question(
        id="klimov_1",
        question="?",
        type="multi-choice",
        options=[
            {"label": "A", "value": "a"},
            {"label": "B", "value": "b"},
            {"label": "C", "value": "c"},
        ],
    )


def test_scenario_payload(small_config):
    """3문항 구성: 척도, 단일 선택, 복수 선택이 각 카테고리 배열로 분류된다."""
    answers = AnswerStore({"values_1": 5, "riasec_2": "y", "klimov_3": ["p", "q"]})

    payload = build_questionnaire_payload("Анна", "anna@example.com", answers, small_config)
    body = payload.model_dump(by_alias=True)

    assert body["user"] == {"name": "Анна", "email": "anna@example.com"}
    assert body["values"] == [{"number": 1, "question": "Насколько важен доход?", "answer": "5"}]
    assert body["RIASEC"] == [{"number": 2, "question": "Что ближе?", "answer": "Y"}]
    assert body["objectsOfActivityKlimov"] == [
        {"number": 3, "question": "С чем интересно работать?", "answer": "P, Q"}
    ]
    assert body["personalQualities"] == []


def test_multi_labels_follow_option_order():
    """선택 순서가 아니라 보기 리스트 순서로 라벨을 연결한다."""
    assert resolve_answer_label(_multi_question(), ["c", "a"]) == "A, C"


def test_scalar_label_falls_back_to_value():
    question = _multi_question().model_copy(update={"type": "single-choice"})
    assert resolve_answer_label(question, "b") == "B"
    assert resolve_answer_label(question, "zzz") == "zzz"


def test_arrays_sorted_by_numeric_suffix():
    config = get_test("adult")
    answers = AnswerStore()
    # 역순으로 입력해도 배열은 번호 오름차순
    for q in reversed(config.all_questions()):
        answers.set(q.id, q.options[0].value)

    payload = build_questionnaire_payload("Олег", "oleg@example.com", answers, config)

    for entries in (payload.values, payload.riasec, payload.objects_of_activity_klimov,
                    payload.personal_qualities):
        numbers = [e.number for e in entries]
        assert numbers == sorted(numbers)
    total = (len(payload.values) + len(payload.riasec)
             + len(payload.objects_of_activity_klimov) + len(payload.personal_qualities))
    assert total == config.total_questions


def test_unmatched_answers_dropped_and_logged(small_config, caplog):
    answers = AnswerStore({"values_1": 2, "riasec_99": "x"})

    with caplog.at_level(logging.WARNING):
        payload = build_questionnaire_payload("Анна", "anna@example.com", answers, small_config)

    assert len(payload.values) == 1
    assert payload.riasec == []
    assert "riasec_99" in caplog.text
    assert find_dropped_answers(answers, small_config) == ["riasec_99"]


def test_unknown_prefix_dropped():
    data = copy.deepcopy(SMALL_CONFIG_DATA)
    data["sections"][0]["questions"].append(
        {
            "id": "hobby_4",
            "question": "Хобби?",
            "type": "single-choice",
            "options": [{"label": "Да", "value": "yes"}, {"label": "Нет", "value": "no"}],
        }
    )
    extra = questionnaire.TestConfiguration.model_validate(data)
    answers = AnswerStore({"values_1": 1, "hobby_4": "yes"})

    payload = build_questionnaire_payload("Анна", "anna@example.com", answers, extra)

    body = payload.model_dump(by_alias=True)
    assert sum(len(body[k]) for k in ("values", "RIASEC", "objectsOfActivityKlimov",
                                      "personalQualities")) == 1
    assert find_dropped_answers(answers, extra) == ["hobby_4"]


def test_standard_payload(small_config):
    answers = AnswerStore({"values_1": 5, "klimov_3": ["q"]})

    payload = build_standard_payload(small_config, "anna@example.com", answers)

    assert payload.model_dump(by_alias=True) == {
        "testType": "graduate",
        "email": "anna@example.com",
        "tariff": "recommended",
        "answers": {"values_1": 5, "klimov_3": ["q"]},
        "consent": True,
    }
