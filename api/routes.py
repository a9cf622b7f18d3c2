"""
api/routes.py — FastAPI 엔드포인트
"""

from typing import List, Optional, Union

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, StrictInt, StrictStr

import api.session as session
from profreport.content.faq import FAQ_ITEMS
from profreport.content.catalog import get_test, list_tests
from profreport.models.forms import CONTACT_SUBJECTS
from profreport.models.questionnaire import TestType
from profreport.models.wizard_state import Stage
from profreport.services.contact_service import submit_contact
from profreport.services.wizard_service import (
    ALREADY_SUBMITTING_MESSAGE,
    WRONG_STAGE_MESSAGE,
    WizardController,
)

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class ConsentBody(BaseModel):
    consent: bool


class AnswerBody(BaseModel):
    value: Union[StrictInt, StrictStr, List[Union[StrictInt, StrictStr]]]


class PaymentBody(BaseModel):
    name: str = ""
    email: str = ""
    code: Optional[str] = None
    consent: bool = False


class ContactBody(BaseModel):
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""
    consent: bool = False
    website: Optional[str] = None


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _require_wizard(request: Request) -> WizardController:
    wizard = session.get_wizard(request.state.session_id)
    if wizard is None:
        raise HTTPException(status_code=404, detail="Тест не открыт.")
    return wizard


def _wizard_to_dict(wizard: WizardController) -> dict:
    state = wizard.state
    return {
        "test_type": wizard.config.test_type,
        "stage": state.stage.value,
        "consent": state.consent,
        "current_question_index": state.current_question_index,
        "total": wizard.total_questions,
        "progress": wizard.progress,
        "answered_count": len(state.answers),
        "answers": state.answers.to_dict(),
        "is_submitting": state.is_submitting,
        "error": state.last_error,
    }


def _check(result) -> None:
    if not result.ok:
        raise HTTPException(status_code=400, detail=result.message)


# ── 테스트 카탈로그 ──────────────────────────────────────────────────────────

@router.get("/api/tests")
async def get_tests():
    return [
        {
            "testType": cfg.test_type,
            "title": cfg.title,
            "subtitle": cfg.subtitle,
            "price": cfg.price,
            "tariff": cfg.tariff,
            "total": cfg.total_questions,
        }
        for cfg in list_tests()
    ]


@router.get("/api/tests/{test_type}")
async def get_test_config(test_type: TestType):
    return get_test(test_type).model_dump(mode="json", by_alias=True)


@router.post("/api/tests/{test_type}/open")
async def open_test(test_type: TestType, request: Request):
    wizard = WizardController(get_test(test_type), gateway=request.app.state.gateway)
    session.set_wizard(request.state.session_id, wizard)
    return _wizard_to_dict(wizard)


# ── 마법사 ───────────────────────────────────────────────────────────────────

@router.get("/api/wizard")
async def get_wizard_state(request: Request):
    return _wizard_to_dict(_require_wizard(request))


@router.post("/api/wizard/consent")
async def set_consent(body: ConsentBody, request: Request):
    wizard = _require_wizard(request)
    wizard.set_consent(body.consent)
    return {"consent": wizard.state.consent, "ok": True}


@router.post("/api/wizard/start")
async def start_test(request: Request):
    wizard = _require_wizard(request)
    _check(wizard.start())
    return _wizard_to_dict(wizard)


@router.get("/api/wizard/question")
async def get_current_question(request: Request):
    wizard = _require_wizard(request)
    if wizard.stage != Stage.TEST:
        raise HTTPException(status_code=400, detail="Тест не начат.")

    question = wizard.current_question
    section = wizard.current_section
    return {
        "index": wizard.current_index,
        "total": wizard.total_questions,
        "progress": wizard.progress,
        "is_last": wizard.is_last_question,
        "section": {"title": section.title, "subtitle": section.subtitle} if section else None,
        "question": question.model_dump(mode="json"),
        "saved_answer": wizard.current_answer(),
    }


@router.post("/api/wizard/answer")
async def save_answer(body: AnswerBody, request: Request):
    wizard = _require_wizard(request)
    try:
        result = wizard.answer(body.value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    _check(result)
    return {"ok": True, "answered_count": len(wizard.state.answers)}


@router.post("/api/wizard/next")
async def next_question(request: Request):
    wizard = _require_wizard(request)
    _check(wizard.advance())
    return _wizard_to_dict(wizard)


@router.post("/api/wizard/back")
async def previous_question(request: Request):
    wizard = _require_wizard(request)
    wizard.retreat()
    return _wizard_to_dict(wizard)


@router.post("/api/wizard/exit")
async def exit_test(request: Request):
    wizard = _require_wizard(request)
    redirect = wizard.exit()
    if redirect is None:
        raise HTTPException(status_code=400, detail=WRONG_STAGE_MESSAGE)
    session.discard_wizard(request.state.session_id)
    return {"redirect": redirect, "ok": True}


@router.post("/api/wizard/payment")
async def submit_payment(body: PaymentBody, request: Request):
    wizard = _require_wizard(request)
    result = await wizard.submit_payment(body.model_dump())
    if result.ok:
        return _wizard_to_dict(wizard)

    if result.field_errors:
        raise HTTPException(
            status_code=422,
            detail={"message": result.message, "field_errors": result.field_errors},
        )
    if result.message == ALREADY_SUBMITTING_MESSAGE:
        raise HTTPException(status_code=409, detail=result.message)
    if wizard.stage != Stage.PAYMENT:
        raise HTTPException(status_code=400, detail=result.message)
    raise HTTPException(status_code=502, detail=result.message)


# ── 문의 / FAQ ───────────────────────────────────────────────────────────────

@router.get("/api/contact/subjects")
async def get_contact_subjects():
    return CONTACT_SUBJECTS


@router.post("/api/contact")
async def contact(body: ContactBody):
    outcome = await submit_contact(body.model_dump())
    if outcome.field_errors:
        raise HTTPException(status_code=422, detail={"field_errors": outcome.field_errors})
    if not outcome.ok:
        raise HTTPException(status_code=502, detail=outcome.message)
    return {"ok": True, "message": outcome.message}


@router.get("/api/faq")
async def get_faq():
    return [item.model_dump() for item in FAQ_ITEMS]
