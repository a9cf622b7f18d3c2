"""
services/submission_service.py

완료된 설문 제출 게이트웨이.
Public API:
  - SubmissionGateway.submit(test_config, form, answers) -> SubmissionResult
  - mock_submit_payload(payload) -> SubmissionResult : 일반 경로 기본 전송 함수 (목업)

경로 선택:
- 접근 코드 == DIRECT_SUBMIT_CODE : 직접 제출 (POST {PUBLIC_API_URL}/questionnaire)
- 그 외                          : 일반 결제 경로 (주입된 submit_payload 함수)

접근 코드 비교는 서버에서만 이루어지며 인증 수단이 아니다. 경로 전환 스위치일 뿐이다.
"""

import asyncio
import hmac
import logging
from typing import Awaitable, Callable, Optional

import httpx

import config
from profreport.models.answer_store import AnswerStore
from profreport.models.forms import PaymentForm
from profreport.models.payload import StandardPayload, SubmissionResult
from profreport.models.questionnaire import TestConfiguration
from profreport.services.payload_service import (
    build_questionnaire_payload,
    build_standard_payload,
)

logger = logging.getLogger(__name__)

SEND_FAILED_MESSAGE = "Ошибка при отправке данных"
GENERIC_ERROR_MESSAGE = "Ошибка при отправке"

SubmitPayloadFn = Callable[[StandardPayload], Awaitable[SubmissionResult]]


async def mock_submit_payload(payload: StandardPayload) -> SubmissionResult:
    """결제 백엔드 연동 전 임시 전송 함수. 지연 후 항상 성공."""
    logger.info(
        f"[mock] 결제 페이로드 전송: test_type={payload.test_type}, "
        f"tariff={payload.tariff}, answers={len(payload.answers)}개"
    )
    await asyncio.sleep(config.MOCK_SUBMIT_DELAY)
    return SubmissionResult(success=True)


class SubmissionGateway:
    """원격 제출 엔드포인트 호출기."""

    def __init__(
        self,
        base_url: str = config.PUBLIC_API_URL,
        direct_code: str = config.DIRECT_SUBMIT_CODE,
        submit_payload: Optional[SubmitPayloadFn] = None,
        timeout: float = config.SUBMIT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.direct_code = direct_code
        self.submit_payload = submit_payload or mock_submit_payload
        self.timeout = timeout
        self._transport = transport

    @property
    def questionnaire_url(self) -> str:
        return f"{self.base_url}/questionnaire"

    def uses_direct_path(self, code: Optional[str]) -> bool:
        if not code or not self.direct_code:
            return False
        return hmac.compare_digest(code.encode("utf-8"), self.direct_code.encode("utf-8"))

    async def submit(
        self,
        test_config: TestConfiguration,
        form: PaymentForm,
        answers: AnswerStore,
    ) -> SubmissionResult:
        if self.uses_direct_path(form.code):
            return await self._submit_direct(test_config, form, answers)
        return await self._submit_standard(test_config, form, answers)

    async def _submit_direct(
        self,
        test_config: TestConfiguration,
        form: PaymentForm,
        answers: AnswerStore,
    ) -> SubmissionResult:
        payload = build_questionnaire_payload(form.name, form.email, answers, test_config)
        body = payload.model_dump(mode="json", by_alias=True)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    self.questionnaire_url,
                    json=body,
                    headers={"Content-Type": "application/json"},
                )
        except httpx.HTTPError as e:
            logger.error(f"직접 제출 전송 실패: {type(e).__name__}: {e}")
            return SubmissionResult(success=False, error=GENERIC_ERROR_MESSAGE)

        if not response.is_success:
            logger.error(f"직접 제출 실패: HTTP {response.status_code}")
            return SubmissionResult(success=False, error=SEND_FAILED_MESSAGE)

        logger.info(f"직접 제출 완료: test_type={test_config.test_type}")
        return SubmissionResult(success=True)

    async def _submit_standard(
        self,
        test_config: TestConfiguration,
        form: PaymentForm,
        answers: AnswerStore,
    ) -> SubmissionResult:
        payload = build_standard_payload(test_config, form.email, answers)
        try:
            result = await self.submit_payload(payload)
        except Exception as e:
            logger.error(f"결제 경로 전송 중 예외: {type(e).__name__}: {e}")
            return SubmissionResult(success=False, error=GENERIC_ERROR_MESSAGE)

        if not result.success:
            logger.warning(f"결제 경로 제출 실패: {result.error}")
            return SubmissionResult(success=False, error=result.error or GENERIC_ERROR_MESSAGE)
        return result
