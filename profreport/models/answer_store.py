"""
models/answer_store.py

문항 ID → 답안 값 인메모리 저장소.
삭제 연산은 없다. 덮어쓰기(set)와 조회(get)만 제공.
"""

from typing import Dict, Iterator, List, Optional, Tuple, Union

from profreport.models.questionnaire import OptionValue

AnswerValue = Union[int, str, List[OptionValue]]


class AnswerStore:
    """
    답안지.

    값 형태:
      - single-scale / single-choice : 스칼라 (int 또는 str)
      - multi-choice                 : 선택한 보기 값 리스트 (중복 제거, 선택 순서 유지)
    """

    def __init__(self, answers: Optional[Dict[str, AnswerValue]] = None) -> None:
        self._answers: Dict[str, AnswerValue] = {}
        for question_id, value in (answers or {}).items():
            self.set(question_id, value)

    def set(self, question_id: str, value: AnswerValue) -> None:
        if isinstance(value, (list, tuple, set, frozenset)):
            value = list(dict.fromkeys(value))
        self._answers[question_id] = value

    def get(self, question_id: str) -> Optional[AnswerValue]:
        """저장된 값. 미응답이면 None."""
        return self._answers.get(question_id)

    def has_answer(self, question_id: str) -> bool:
        """
        응답 존재 여부.
        빈 문자열, 빈 선택 리스트는 미응답으로 본다. 0은 유효한 응답이다.
        """
        value = self._answers.get(question_id)
        if value is None:
            return False
        if isinstance(value, (str, list)) and len(value) == 0:
            return False
        return True

    def items(self) -> Iterator[Tuple[str, AnswerValue]]:
        return iter(list(self._answers.items()))

    def to_dict(self) -> Dict[str, AnswerValue]:
        return {
            qid: list(value) if isinstance(value, list) else value
            for qid, value in self._answers.items()
        }

    def __len__(self) -> int:
        return len(self._answers)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._answers
