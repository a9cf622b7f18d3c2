"""
services/validator.py

폼 검증 서비스.
스키마 이름 + 입력 값 → 검증된 모델 또는 {필드명: 오류 메시지} 매핑.
스키마별 pydantic 모델로 검증하고 필드당 첫 오류 메시지만 남긴다.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import BaseModel, Field, ValidationError

from profreport.models.forms import ContactForm, PaymentForm, TestConsentForm

logger = logging.getLogger(__name__)

SCHEMAS: Dict[str, Type[BaseModel]] = {
    "contact": ContactForm,
    "payment": PaymentForm,
    "consent": TestConsentForm,
}

_NAME_MESSAGE = "Имя должно содержать минимум 2 символа"
_EMAIL_MESSAGE = "Неверный формат email"
_DATA_CONSENT_MESSAGE = "Необходимо дать согласие на обработку данных"

# 스키마별 필드 오류 메시지 (필드당 하나)
_FIELD_MESSAGES: Dict[str, Dict[str, str]] = {
    "contact": {
        "name": _NAME_MESSAGE,
        "email": _EMAIL_MESSAGE,
        "subject": "Выберите тему",
        "message": "Сообщение должно содержать минимум 10 символов",
        "consent": _DATA_CONSENT_MESSAGE,
        "website": "Поле должно быть пустым",
    },
    "payment": {
        "name": _NAME_MESSAGE,
        "email": _EMAIL_MESSAGE,
        "code": "Неверный код",
        "consent": "Необходимо дать согласие с условиями оферты",
    },
    "consent": {
        "consent": _DATA_CONSENT_MESSAGE,
    },
}


class FormResult(BaseModel):
    """검증 결과. data 또는 errors 중 하나만 채워진다."""

    data: Optional[Any] = None
    errors: Dict[str, str] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def validate(schema: str, values: Mapping[str, Any]) -> FormResult:
    """
    입력 값을 이름이 지정된 스키마로 검증한다.

    Args:
        schema: "contact" | "payment" | "consent"
        values: 폼 필드 값

    Returns:
        성공 시 FormResult(data=<스키마 모델>),
        실패 시 FormResult(errors={필드명: 메시지}).

    Raises:
        ValueError: 등록되지 않은 스키마 이름.
    """
    model_cls = SCHEMAS.get(schema)
    if model_cls is None:
        raise ValueError(f"알 수 없는 폼 스키마: '{schema}'")

    try:
        return FormResult(data=model_cls.model_validate(dict(values)))
    except ValidationError as e:
        messages = _FIELD_MESSAGES[schema]
        errors: Dict[str, str] = {}
        for err in e.errors():
            field = str(err["loc"][0]) if err["loc"] else "__root__"
            # 필드당 첫 번째 오류만 유지
            errors.setdefault(field, messages.get(field, err["msg"]))
        logger.debug(f"{schema} 폼 검증 실패: {sorted(errors)}")
        return FormResult(errors=errors)
