"""
models/payload.py

외부 제출 엔드포인트로 전송되는 페이로드 모델.
직렬화 시 반드시 by_alias=True 사용 (원격 API 계약의 필드명).
"""

from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from profreport.models.answer_store import AnswerValue
from profreport.models.questionnaire import Tariff, TestType


class UserInfo(BaseModel):
    name: str
    email: str


class AnswerEntry(BaseModel):
    number: int = Field(..., description="문항 ID의 숫자 접미사 (정렬 키)")
    question: str = Field(..., description="문항 본문")
    answer: str = Field(..., description="사람이 읽을 수 있는 답안 라벨")


class QuestionnairePayload(BaseModel):
    """
    직접 제출 경로의 요청 본문.
    네 개의 카테고리 배열은 각각 number 오름차순으로 정렬된 상태여야 한다.
    """

    model_config = ConfigDict(populate_by_name=True)

    user: UserInfo
    values: List[AnswerEntry] = Field(default_factory=list)
    riasec: List[AnswerEntry] = Field(default_factory=list, alias="RIASEC")
    objects_of_activity_klimov: List[AnswerEntry] = Field(
        default_factory=list, alias="objectsOfActivityKlimov"
    )
    personal_qualities: List[AnswerEntry] = Field(
        default_factory=list, alias="personalQualities"
    )


class StandardPayload(BaseModel):
    """일반 결제 경로의 요청 본문."""

    model_config = ConfigDict(populate_by_name=True)

    test_type: TestType = Field(..., alias="testType")
    email: str
    tariff: Tariff
    answers: Dict[str, AnswerValue]
    consent: Literal[True] = True


class SubmissionResult(BaseModel):
    success: bool
    error: Optional[str] = None
