"""
services/payload_service.py

답안지 → 원격 제출 페이로드 변환 비즈니스 로직.
입력 AnswerStore는 변경하지 않는다.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from profreport.models.answer_store import AnswerStore, AnswerValue
from profreport.models.payload import (
    AnswerEntry,
    QuestionnairePayload,
    StandardPayload,
    UserInfo,
)
from profreport.models.questionnaire import Question, TestConfiguration

logger = logging.getLogger(__name__)

# 문항 ID 접두사 → QuestionnairePayload 필드. 순서가 매칭 우선순위다.
CATEGORY_BUCKETS: List[Tuple[str, str]] = [
    ("values_", "values"),
    ("riasec_", "riasec"),
    ("klimov_", "objects_of_activity_klimov"),
    ("personality_", "personal_qualities"),
]

LABEL_SEPARATOR = ", "


def resolve_answer_label(question: Question, value: AnswerValue) -> str:
    """
    저장된 답안 값을 사람이 읽을 수 있는 라벨로 변환한다.

    - 스칼라 값: 일치하는 보기 라벨. 없으면 str(value).
    - 리스트 값(multi-choice): 선택된 보기 라벨을 보기 리스트 순서대로 ", "로 연결.
      보기에 없는 값은 str(value)로 뒤에 붙인다.
    """
    if isinstance(value, list):
        selected = set(value)
        labels = [opt.label for opt in question.options if opt.value in selected]
        known = set(question.option_values())
        labels.extend(str(v) for v in value if v not in known)
        return LABEL_SEPARATOR.join(labels)

    option = question.find_option(value)
    return option.label if option else str(value)


def _bucket_for(question_id: str) -> Optional[str]:
    for prefix, field in CATEGORY_BUCKETS:
        if question_id.startswith(prefix):
            return field
    return None


def find_dropped_answers(answers: AnswerStore, config: TestConfiguration) -> List[str]:
    """
    페이로드에 포함되지 못하는 답안의 문항 ID 목록.
    (구성에 없는 문항, 또는 인식되지 않는 카테고리 접두사)
    """
    return [
        qid
        for qid, _ in answers.items()
        if config.find_question(qid) is None or _bucket_for(qid) is None
    ]


def build_questionnaire_payload(
    name: str,
    email: str,
    answers: AnswerStore,
    config: TestConfiguration,
) -> QuestionnairePayload:
    """
    직접 제출 경로의 페이로드를 생성한다.

    Args:
        name:    사용자 이름
        email:   보고서 수신 이메일
        answers: 답안지
        config:  테스트 구성

    Returns:
        카테고리별 4개 배열이 각각 number 오름차순으로 정렬된 QuestionnairePayload.
        매칭되지 않는 답안은 제외되며 WARNING 로그를 남긴다.
    """
    buckets: Dict[str, List[AnswerEntry]] = defaultdict(list)

    for qid, value in answers.items():
        question = config.find_question(qid)
        if question is None:
            logger.warning(f"페이로드 제외: 구성에 없는 문항 '{qid}'")
            continue

        field = _bucket_for(qid)
        if field is None:
            logger.warning(f"페이로드 제외: 알 수 없는 카테고리 접두사 '{qid}'")
            continue

        buckets[field].append(
            AnswerEntry(
                number=question.number,
                question=question.question,
                answer=resolve_answer_label(question, value),
            )
        )

    sorted_buckets = {
        field: sorted(buckets[field], key=lambda entry: entry.number)
        for _, field in CATEGORY_BUCKETS
    }
    return QuestionnairePayload(user=UserInfo(name=name, email=email), **sorted_buckets)


def build_standard_payload(
    config: TestConfiguration,
    email: str,
    answers: AnswerStore,
) -> StandardPayload:
    """일반 결제 경로의 페이로드. 답안지는 가공 없이 그대로 전달된다."""
    return StandardPayload(
        test_type=config.test_type,
        email=email,
        tariff=config.tariff,
        answers=answers.to_dict(),
        consent=True,
    )
