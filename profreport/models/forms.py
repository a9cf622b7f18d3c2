"""
models/forms.py

사용자 입력 폼 스키마 (연락처 폼, 결제 폼, 동의 체크).
검증 메시지는 services/validator.py에서 필드 단위로 매핑한다.
"""

from typing import Literal, Optional

from pydantic import BaseModel, EmailStr, Field

CONTACT_SUBJECTS = {
    "test": "Вопрос о тестировании",
    "report": "Проблема с отчетом",
    "refund": "Возврат средств",
    "support": "Техническая поддержка",
    "partnership": "Сотрудничество",
    "other": "Другое",
}


class ContactForm(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    subject: Literal["test", "report", "refund", "support", "partnership", "other"]
    message: str = Field(..., min_length=10)
    consent: Literal[True]
    # 허니팟: 사람에게는 보이지 않는 필드. 비어 있어야 한다.
    website: Optional[str] = Field(None, max_length=0)


class PaymentForm(BaseModel):
    name: str = Field(..., min_length=2)
    email: EmailStr
    code: Optional[str] = None
    consent: Literal[True]


class TestConsentForm(BaseModel):
    consent: Literal[True]
