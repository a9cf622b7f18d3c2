"""
models/wizard_state.py

테스트 진행 상태를 담는 마법사(wizard) 상태 모델.
단일 컨트롤러가 소유하며 전역 싱글턴이 아니다.
UI 코드 없음.
"""

from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field

from profreport.models.answer_store import AnswerStore


class Stage(str, Enum):
    START = "start"
    TEST = "test"
    PAYMENT = "payment"
    SUCCESS = "success"


class WizardState(BaseModel):
    """
    사용자의 테스트 세션 전체 상태를 표현하는 모델.

    Attributes:
        stage:                 현재 단계 (start → test → payment → success).
        current_question_index: 현재 문항 인덱스 (0-based). test 단계에서만 의미가 있다.
        answers:               답안지 (AnswerStore).
        consent:               개인정보 처리 동의 여부. start → test 전이의 조건.
        is_submitting:         결제/제출 요청 진행 중 여부. 중복 제출 차단 플래그.
        last_error:            마지막 제출 실패 메시지 (배너 표시용).
    """

    stage: Stage = Field(default=Stage.START, description="현재 단계")
    current_question_index: int = Field(
        default=0,
        ge=0,
        description="현재 풀고 있는 문항 인덱스 (0-based)"
    )
    answers: AnswerStore = Field(
        default_factory=AnswerStore,
        description="답안지. key: question.id, value: 답안 값"
    )
    consent: bool = Field(default=False, description="개인정보 처리 동의")
    is_submitting: bool = Field(default=False, description="제출 진행 중 여부")
    last_error: Optional[str] = Field(default=None, description="마지막 제출 오류")

    model_config = {"arbitrary_types_allowed": True, "validate_assignment": False}


class StepResult(BaseModel):
    """
    사용자 동작 하나의 처리 결과.
    표시 방식(알림창, 배너, 인라인 오류)은 프레젠테이션 계층이 결정한다.
    """

    ok: bool
    message: Optional[str] = None
    field_errors: Dict[str, str] = Field(default_factory=dict)

    @classmethod
    def success(cls) -> "StepResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, message: str, field_errors: Optional[Dict[str, str]] = None) -> "StepResult":
        return cls(ok=False, message=message, field_errors=field_errors or {})
