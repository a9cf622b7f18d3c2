"""
services/contact_service.py

연락처(문의) 폼 처리.
허니팟 필드가 채워진 요청은 봇으로 간주하여 조용히 폐기한다 (성공처럼 응답).
실제 메일/CRM 전송은 아직 없음. 목업 지연 후 성공한다.
"""

import asyncio
import logging
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

import config
from profreport.services.validator import validate

logger = logging.getLogger(__name__)

HONEYPOT_FIELD = "website"
CONTACT_SENT_MESSAGE = "Сообщение отправлено!"
CONTACT_FAILED_MESSAGE = "Ошибка при отправке сообщения. Попробуйте позже."


class ContactOutcome(BaseModel):
    ok: bool
    delivered: bool = False
    message: Optional[str] = None
    field_errors: Dict[str, str] = Field(default_factory=dict)


def is_honeypot_filled(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


async def _deliver(values: Mapping[str, Any]) -> None:
    await asyncio.sleep(config.MOCK_SUBMIT_DELAY)
    logger.info(f"[mock] 문의 전달: subject={values.get('subject')}")


async def submit_contact(values: Mapping[str, Any], deliver=_deliver) -> ContactOutcome:
    """
    문의 폼을 검증하고 전달한다.

    Args:
        values:  폼 필드 값
        deliver: 전달 함수 (async). 테스트에서 교체 가능.

    Returns:
        ContactOutcome. 검증 실패 시 field_errors가 채워진다.
    """
    if is_honeypot_filled(values.get(HONEYPOT_FIELD)):
        logger.warning("문의 폼: 봇 감지 (허니팟 필드 입력됨), 요청 폐기")
        return ContactOutcome(ok=True, delivered=False)

    form_result = validate("contact", values)
    if not form_result.ok:
        return ContactOutcome(ok=False, field_errors=form_result.errors)

    try:
        await deliver(form_result.data.model_dump())
    except Exception as e:
        logger.error(f"문의 전달 실패: {type(e).__name__}: {e}")
        return ContactOutcome(ok=False, message=CONTACT_FAILED_MESSAGE)

    return ContactOutcome(ok=True, delivered=True, message=CONTACT_SENT_MESSAGE)
