"""
services/wizard_service.py

테스트 진행 마법사 컨트롤러.
단계: start → test → payment → success (선형)

상태 관리:
  - WizardState 하나를 컨트롤러 인스턴스가 단독 소유한다.
  - 모든 상태 변경은 사용자 동작(동의, 응답, 이동, 제출)에서만 발생한다.
  - 가드 실패는 StepResult(ok=False)로 반환되며 상태를 변경하지 않는다.
"""

import logging
from typing import Any, List, Mapping, Optional

import config
from profreport.models.answer_store import AnswerValue
from profreport.models.payload import SubmissionResult
from profreport.models.questionnaire import OptionValue, Question, Section, TestConfiguration
from profreport.models.wizard_state import Stage, StepResult, WizardState
from profreport.services.submission_service import GENERIC_ERROR_MESSAGE, SubmissionGateway
from profreport.services.validator import validate

logger = logging.getLogger(__name__)

CONSENT_REQUIRED_MESSAGE = "Необходимо дать согласие на обработку персональных данных"
ANSWER_REQUIRED_MESSAGE = "Пожалуйста, выберите ответ"
NO_QUESTIONS_MESSAGE = "Тест не содержит вопросов"
WRONG_STAGE_MESSAGE = "Действие недоступно на текущем этапе"
ALREADY_SUBMITTING_MESSAGE = "Отправка уже выполняется"
FORM_INVALID_MESSAGE = "Проверьте правильность заполнения формы"


class WizardController:
    """단일 테스트 응시 흐름을 구동한다."""

    def __init__(
        self,
        test_config: TestConfiguration,
        gateway: Optional[SubmissionGateway] = None,
    ) -> None:
        self.config = test_config
        self.gateway = gateway or SubmissionGateway()
        self._state = WizardState()
        self._questions: List[Question] = test_config.all_questions()

    # ── 파생 값 ──────────────────────────────────────────────────────────────

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def stage(self) -> Stage:
        return self._state.stage

    @property
    def total_questions(self) -> int:
        return len(self._questions)

    @property
    def current_index(self) -> int:
        return self._state.current_question_index

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self.current_index < self.total_questions:
            return self._questions[self.current_index]
        return None

    @property
    def current_section(self) -> Optional[Section]:
        question = self.current_question
        return self.config.section_of(question.id) if question else None

    @property
    def is_last_question(self) -> bool:
        return self.current_index == self.total_questions - 1

    @property
    def progress(self) -> int:
        """진행률 (%). 마지막 문항에서 100."""
        if not self.total_questions:
            return 0
        return round((self.current_index + 1) / self.total_questions * 100)

    def current_answer(self) -> Optional[AnswerValue]:
        question = self.current_question
        return self._state.answers.get(question.id) if question else None

    # ── start ────────────────────────────────────────────────────────────────

    def set_consent(self, consent: bool) -> None:
        self._state.consent = bool(consent)

    def start(self) -> StepResult:
        if self._state.stage != Stage.START:
            return StepResult.failure(WRONG_STAGE_MESSAGE)
        if not self._state.consent:
            return StepResult.failure(CONSENT_REQUIRED_MESSAGE)
        if not self.total_questions:
            return StepResult.failure(NO_QUESTIONS_MESSAGE)

        self._state.stage = Stage.TEST
        self._state.current_question_index = 0
        logger.info(f"테스트 시작: {self.config.test_type} ({self.total_questions}문항)")
        return StepResult.success()

    # ── test ─────────────────────────────────────────────────────────────────

    def answer(self, value: Any) -> StepResult:
        """
        현재 문항의 답안을 저장한다 (덮어쓰기).

        Raises:
            ValueError: 값이 현재 문항의 보기에 없거나 타입이 맞지 않는 경우.
        """
        if self._state.stage != Stage.TEST:
            return StepResult.failure(WRONG_STAGE_MESSAGE)

        question = self.current_question
        if question.is_multi:
            if not isinstance(value, (list, tuple, set)):
                raise ValueError(f"{question.id}: 복수 선택 문항의 답안은 리스트여야 합니다.")
            normalized: AnswerValue = [_match_option(question, v) for v in value]
        else:
            if isinstance(value, (list, tuple, set)):
                raise ValueError(f"{question.id}: 단일 선택 문항의 답안은 스칼라여야 합니다.")
            normalized = _match_option(question, value)

        self._state.answers.set(question.id, normalized)
        return StepResult.success()

    def advance(self) -> StepResult:
        """다음 문항으로 이동. 마지막 문항이면 결제 단계로 전이."""
        if self._state.stage != Stage.TEST:
            return StepResult.failure(WRONG_STAGE_MESSAGE)

        question = self.current_question
        if not self._state.answers.has_answer(question.id):
            return StepResult.failure(ANSWER_REQUIRED_MESSAGE)

        if self.current_index < self.total_questions - 1:
            self._state.current_question_index += 1
        else:
            self._state.stage = Stage.PAYMENT
            logger.info(f"모든 문항 응답 완료, 결제 단계로 이동: {self.config.test_type}")
        return StepResult.success()

    def retreat(self) -> bool:
        """이전 문항으로 이동. 첫 문항이면 아무것도 하지 않는다."""
        if self._state.stage != Stage.TEST or self.current_index == 0:
            return False
        self._state.current_question_index -= 1
        return True

    def exit(self) -> Optional[str]:
        """
        흐름 강제 종료. 모든 상태를 폐기하고 테스트 목록 URL을 반환한다.
        ("나중에 저장"은 저장하지 않는다)

        test 단계에서만 허용된다. 그 외 단계에서는 상태를 건드리지 않고 None을 반환한다.
        """
        if self._state.stage != Stage.TEST:
            logger.warning(f"테스트 중단 거부: 현재 단계 {self._state.stage.value}")
            return None
        logger.info(
            f"테스트 중단: {self.config.test_type}, "
            f"{len(self._state.answers)}/{self.total_questions} 응답 폐기"
        )
        self._state = WizardState()
        return config.TESTS_INDEX_URL

    # ── payment ──────────────────────────────────────────────────────────────

    async def submit_payment(self, values: Mapping[str, Any]) -> StepResult:
        """
        결제 폼 제출: 검증 → 페이로드 변환 → 게이트웨이 호출.

        is_submitting 플래그는 네트워크 호출 직전에 켜지고
        모든 종료 경로(성공, 실패 응답, 예외)에서 반드시 꺼진다.
        """
        if self._state.stage != Stage.PAYMENT:
            return StepResult.failure(WRONG_STAGE_MESSAGE)
        if self._state.is_submitting:
            return StepResult.failure(ALREADY_SUBMITTING_MESSAGE)

        form_result = validate("payment", values)
        if not form_result.ok:
            return StepResult.failure(FORM_INVALID_MESSAGE, form_result.errors)

        # 결과는 제출을 시작한 상태에만 기록한다
        state = self._state
        state.is_submitting = True
        state.last_error = None
        try:
            result = await self.gateway.submit(self.config, form_result.data, state.answers)
        except Exception as e:
            logger.error(f"제출 중 예상치 못한 오류: {type(e).__name__}: {e}")
            result = SubmissionResult(success=False, error=GENERIC_ERROR_MESSAGE)
        finally:
            state.is_submitting = False

        if state is not self._state:
            logger.warning(f"제출 중 마법사 상태가 교체됨, 결과 폐기: {self.config.test_type}")
            return StepResult.failure(WRONG_STAGE_MESSAGE)

        if not result.success:
            state.last_error = result.error or GENERIC_ERROR_MESSAGE
            return StepResult.failure(state.last_error)

        state.stage = Stage.SUCCESS
        logger.info(f"제출 완료: {self.config.test_type}")
        return StepResult.success()


def _match_option(question: Question, value: Any) -> OptionValue:
    """보기 값과 일치하는 값을 반환. JSON 경유 문자열 숫자("5")도 허용."""
    # True == 1 이므로 bool은 먼저 거른다
    if isinstance(value, bool):
        raise ValueError(f"{question.id}: 불리언은 답안 값이 될 수 없습니다 ({value!r}).")
    option = question.find_option(value)
    if option is None:
        option = next((opt for opt in question.options if str(opt.value) == str(value)), None)
    if option is None:
        raise ValueError(f"{question.id}: 보기에 없는 값입니다 ({value!r}).")
    return option.value
