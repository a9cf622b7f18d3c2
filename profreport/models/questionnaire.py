"""
models/questionnaire.py

테스트 구성(TestConfiguration) 모델.
섹션 → 문항 → 보기의 고정 트리 구조이며, 외부에서 주어지는 신뢰된 입력이다.
Pydantic v2: 웹 프런트엔드용 JSON(camelCase)도 그대로 로드된다.
"""

import re
from enum import Enum
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TestType = Literal["school", "graduate", "adult"]
Tariff = Literal["basic", "recommended", "pro"]

OptionValue = Union[int, str]

_QUESTION_ID_RE = re.compile(r"^([A-Za-z][A-Za-z0-9]*)_(\d+)$")

# 구 프런트엔드 문항 타입명 → 현재 타입명
_LEGACY_TYPE_NAMES = {
    "likert": "single-scale",
    "radio": "single-choice",
    "checkbox": "multi-choice",
}


class QuestionType(str, Enum):
    SINGLE_SCALE = "single-scale"
    SINGLE_CHOICE = "single-choice"
    MULTI_CHOICE = "multi-choice"


class Option(BaseModel):
    label: str = Field(..., description="화면에 표시되는 보기 문구")
    value: OptionValue = Field(..., description="답안으로 저장되는 값")


class Question(BaseModel):
    """
    단일 문항.

    id 형식은 '<카테고리>_<번호>' (예: values_3, riasec_12).
    번호는 제출 페이로드에서 정렬 키로 사용된다.
    """

    id: str = Field(..., description="문항 식별자 (구성 전체에서 고유)")
    question: str = Field(..., min_length=1, description="문항 본문")
    subtitle: Optional[str] = Field(None, description="보조 설명")
    type: QuestionType = Field(..., description="문항 타입")
    options: List[Option] = Field(..., description="보기 리스트 (표시 순서 유지)")

    @field_validator("id")
    @classmethod
    def validate_id_format(cls, v: str) -> str:
        if not _QUESTION_ID_RE.match(v):
            raise ValueError(f"문항 ID '{v}'는 '<카테고리>_<번호>' 형식이어야 합니다.")
        return v

    @field_validator("type", mode="before")
    @classmethod
    def accept_legacy_type(cls, v):
        if isinstance(v, str):
            return _LEGACY_TYPE_NAMES.get(v, v)
        return v

    @field_validator("options")
    @classmethod
    def validate_options_length(cls, v: List[Option]) -> List[Option]:
        if len(v) < 2:
            raise ValueError("보기(options)는 최소 2개 이상의 항목이 필요합니다.")
        return v

    @property
    def category(self) -> str:
        return self.id.rsplit("_", 1)[0]

    @property
    def number(self) -> int:
        return int(self.id.rsplit("_", 1)[1])

    @property
    def is_multi(self) -> bool:
        return self.type == QuestionType.MULTI_CHOICE

    def option_values(self) -> List[OptionValue]:
        return [opt.value for opt in self.options]

    def find_option(self, value: OptionValue) -> Optional[Option]:
        return next((opt for opt in self.options if opt.value == value), None)


class Section(BaseModel):
    id: str
    title: str
    subtitle: str = ""
    questions: List[Question] = Field(default_factory=list)


class TestConfiguration(BaseModel):
    """
    테스트 한 종류의 전체 구성.

    검증 로직: 모든 섹션을 통틀어 문항 ID는 고유해야 한다.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    test_type: TestType = Field(..., alias="testType")
    title: str
    subtitle: str = ""
    price: int = Field(..., ge=0, description="가격 (루블)")
    tariff: Tariff
    sections: List[Section]
    instructions: List[str] = Field(default_factory=list)
    info_banner: Optional[str] = Field(None, alias="infoBanner")

    @model_validator(mode="after")
    def validate_unique_question_ids(self) -> "TestConfiguration":
        seen = set()
        for q in self.all_questions():
            if q.id in seen:
                raise ValueError(f"중복된 문항 ID: '{q.id}'")
            seen.add(q.id)
        return self

    def all_questions(self) -> List[Question]:
        return [q for section in self.sections for q in section.questions]

    @property
    def total_questions(self) -> int:
        return sum(len(section.questions) for section in self.sections)

    def find_question(self, question_id: str) -> Optional[Question]:
        return next((q for q in self.all_questions() if q.id == question_id), None)

    def section_of(self, question_id: str) -> Optional[Section]:
        for section in self.sections:
            if any(q.id == question_id for q in section.questions):
                return section
        return None
