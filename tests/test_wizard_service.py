# tests/test_wizard_service.py
import asyncio

import pytest

from profreport.models.payload import SubmissionResult
from profreport.models.wizard_state import Stage, WizardState
from profreport.services.submission_service import SubmissionGateway
from profreport.services.wizard_service import (
    ALREADY_SUBMITTING_MESSAGE,
    ANSWER_REQUIRED_MESSAGE,
    CONSENT_REQUIRED_MESSAGE,
    FORM_INVALID_MESSAGE,
    WRONG_STAGE_MESSAGE,
    WizardController,
)

from conftest import VALID_PAYMENT, FakeSubmit


def _wizard_with(small_config, submit):
    return WizardController(
        small_config,
        gateway=SubmissionGateway(base_url="https://api.test/v1", submit_payload=submit),
    )


# ── start ────────────────────────────────────────────────────────────────────

def test_start_requires_consent(wizard):
    result = wizard.start()

    assert not result.ok
    assert result.message == CONSENT_REQUIRED_MESSAGE
    assert wizard.stage == Stage.START


def test_start_enters_test_stage(wizard):
    wizard.set_consent(True)

    assert wizard.start().ok
    assert wizard.stage == Stage.TEST
    assert wizard.current_index == 0
    assert wizard.current_question.id == "values_1"
    assert wizard.current_section.id == "first"


def test_start_twice_is_rejected(wizard):
    wizard.set_consent(True)
    wizard.start()

    result = wizard.start()

    assert result.message == WRONG_STAGE_MESSAGE


# ── test ─────────────────────────────────────────────────────────────────────

def test_advance_without_answer_keeps_state(wizard):
    wizard.set_consent(True)
    wizard.start()

    result = wizard.advance()

    assert not result.ok
    assert result.message == ANSWER_REQUIRED_MESSAGE
    assert wizard.current_index == 0
    assert wizard.stage == Stage.TEST


def test_empty_multi_choice_blocks_advance(wizard):
    wizard.set_consent(True)
    wizard.start()
    wizard.answer(1)
    wizard.advance()
    wizard.answer("x")
    wizard.advance()

    wizard.answer([])

    assert wizard.advance().message == ANSWER_REQUIRED_MESSAGE
    assert wizard.stage == Stage.TEST


def test_answer_accepts_numeric_string_for_scale(wizard):
    wizard.set_consent(True)
    wizard.start()

    wizard.answer("6")

    assert wizard.current_answer() == 6


def test_answer_rejects_unknown_value(wizard):
    wizard.set_consent(True)
    wizard.start()

    with pytest.raises(ValueError):
        wizard.answer(42)
    assert wizard.current_answer() is None


def test_answer_rejects_list_for_single_question(wizard):
    wizard.set_consent(True)
    wizard.start()

    with pytest.raises(ValueError):
        wizard.answer([1, 2])


def test_answer_outside_test_stage(wizard):
    assert wizard.answer(1).message == WRONG_STAGE_MESSAGE


def test_retreat_on_first_question_is_noop(wizard):
    wizard.set_consent(True)
    wizard.start()

    assert wizard.retreat() is False
    assert wizard.current_index == 0


def test_retreat_keeps_answers(wizard):
    wizard.set_consent(True)
    wizard.start()
    wizard.answer(3)
    wizard.advance()

    assert wizard.retreat() is True
    assert wizard.current_index == 0
    assert wizard.current_answer() == 3


def test_progress_reaches_100_on_last_question(wizard):
    wizard.set_consent(True)
    wizard.start()
    assert wizard.progress == 33

    wizard.answer(1)
    wizard.advance()
    wizard.answer("x")
    wizard.advance()

    assert wizard.is_last_question
    assert wizard.progress == 100


def test_last_advance_moves_to_payment(payment_wizard):
    assert payment_wizard.stage == Stage.PAYMENT
    assert len(payment_wizard.state.answers) == 3


def test_exit_discards_state(wizard):
    wizard.set_consent(True)
    wizard.start()
    wizard.answer(2)

    url = wizard.exit()

    assert url == "/tests"
    assert wizard.stage == Stage.START
    assert len(wizard.state.answers) == 0
    assert wizard.state.consent is False


# ── payment ──────────────────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_payment_outside_payment_stage(wizard):
    result = await wizard.submit_payment(VALID_PAYMENT)
    assert result.message == WRONG_STAGE_MESSAGE


@pytest.mark.asyncio
async def test_payment_field_errors(payment_wizard, fake_submit):
    result = await payment_wizard.submit_payment({"name": "", "email": "bad", "consent": False})

    assert not result.ok
    assert result.message == FORM_INVALID_MESSAGE
    assert set(result.field_errors) == {"name", "email", "consent"}
    assert fake_submit.calls == []
    assert payment_wizard.stage == Stage.PAYMENT


@pytest.mark.asyncio
async def test_payment_success(payment_wizard, fake_submit):
    result = await payment_wizard.submit_payment(VALID_PAYMENT)

    assert result.ok
    assert payment_wizard.stage == Stage.SUCCESS
    assert payment_wizard.state.is_submitting is False
    assert fake_submit.calls[0].answers == {"values_1": 5, "riasec_2": "y", "klimov_3": ["p", "q"]}


@pytest.mark.asyncio
async def test_submitting_flag_is_set_during_call(small_config):
    ref = {}
    submit = FakeSubmit(wizard_ref=ref)
    wizard = _wizard_with(small_config, submit)
    ref["wizard"] = wizard
    wizard.set_consent(True)
    wizard.start()
    for value in (1, "x", ["q"]):
        wizard.answer(value)
        wizard.advance()

    await wizard.submit_payment(VALID_PAYMENT)

    assert submit.flag_during_call == [True]
    assert wizard.state.is_submitting is False


@pytest.mark.asyncio
async def test_failure_then_retry_keeps_answers(small_config):
    submit = FakeSubmit(results=[
        SubmissionResult(success=False, error="Платеж отклонен"),
        SubmissionResult(success=True),
    ])
    wizard = _wizard_with(small_config, submit)
    wizard.set_consent(True)
    wizard.start()
    for value in (7, "y", ["p"]):
        wizard.answer(value)
        wizard.advance()

    first = await wizard.submit_payment(VALID_PAYMENT)

    assert not first.ok
    assert first.message == "Платеж отклонен"
    assert wizard.stage == Stage.PAYMENT
    assert wizard.state.last_error == "Платеж отклонен"
    assert wizard.state.is_submitting is False

    second = await wizard.submit_payment(VALID_PAYMENT)

    assert second.ok
    assert wizard.stage == Stage.SUCCESS
    assert wizard.state.last_error is None
    assert submit.calls[0].answers == submit.calls[1].answers


@pytest.mark.asyncio
async def test_duplicate_submit_is_rejected(small_config):
    release = asyncio.Event()

    class SlowSubmit(FakeSubmit):
        async def __call__(self, payload):
            self.calls.append(payload)
            await release.wait()
            return SubmissionResult(success=True)

    submit = SlowSubmit()
    wizard = _wizard_with(small_config, submit)
    wizard.set_consent(True)
    wizard.start()
    for value in (1, "x", ["p"]):
        wizard.answer(value)
        wizard.advance()

    first = asyncio.ensure_future(wizard.submit_payment(VALID_PAYMENT))
    await asyncio.sleep(0)
    assert wizard.state.is_submitting is True

    second = await wizard.submit_payment(VALID_PAYMENT)
    release.set()
    first_result = await first

    assert second.message == ALREADY_SUBMITTING_MESSAGE
    assert first_result.ok
    assert len(submit.calls) == 1


@pytest.mark.asyncio
async def test_gateway_exception_clears_flag(payment_wizard, mocker):
    mocker.patch.object(payment_wizard.gateway, "submit", side_effect=RuntimeError("boom"))

    result = await payment_wizard.submit_payment(VALID_PAYMENT)

    assert not result.ok
    assert result.message == "Ошибка при отправке"
    assert payment_wizard.state.is_submitting is False
    assert payment_wizard.stage == Stage.PAYMENT


@pytest.mark.asyncio
async def test_submitting_flag_is_set_during_failed_call(small_config):
    ref = {}
    submit = FakeSubmit(results=[SubmissionResult(success=False)], wizard_ref=ref)
    wizard = _wizard_with(small_config, submit)
    ref["wizard"] = wizard
    wizard.set_consent(True)
    wizard.start()
    for value in (1, "x", ["q"]):
        wizard.answer(value)
        wizard.advance()

    result = await wizard.submit_payment(VALID_PAYMENT)

    assert not result.ok
    assert submit.flag_during_call == [True]
    assert wizard.state.is_submitting is False


def test_answer_rejects_bool(wizard):
    wizard.set_consent(True)
    wizard.start()

    with pytest.raises(ValueError):
        wizard.answer(True)
    assert wizard.current_answer() is None


@pytest.mark.parametrize("stage_setup", ["start", "payment"])
def test_exit_only_allowed_during_test(wizard, stage_setup):
    if stage_setup == "payment":
        wizard.set_consent(True)
        wizard.start()
        for value in (1, "x", ["p"]):
            wizard.answer(value)
            wizard.advance()
    expected_stage = wizard.stage

    assert wizard.exit() is None
    assert wizard.stage == expected_stage


@pytest.mark.asyncio
async def test_exit_refused_while_payment_in_flight(small_config):
    release = asyncio.Event()

    class SlowSubmit(FakeSubmit):
        async def __call__(self, payload):
            self.calls.append(payload)
            await release.wait()
            return SubmissionResult(success=True)

    wizard = _wizard_with(small_config, SlowSubmit())
    wizard.set_consent(True)
    wizard.start()
    for value in (2, "y", ["q"]):
        wizard.answer(value)
        wizard.advance()

    pending = asyncio.ensure_future(wizard.submit_payment(VALID_PAYMENT))
    await asyncio.sleep(0)

    assert wizard.exit() is None
    release.set()
    result = await pending

    assert result.ok
    assert wizard.stage == Stage.SUCCESS
    assert len(wizard.state.answers) == 3


@pytest.mark.asyncio
async def test_replaced_state_does_not_receive_late_result(small_config):
    release = asyncio.Event()

    class SlowSubmit(FakeSubmit):
        async def __call__(self, payload):
            self.calls.append(payload)
            await release.wait()
            return SubmissionResult(success=True)

    wizard = _wizard_with(small_config, SlowSubmit())
    wizard.set_consent(True)
    wizard.start()
    for value in (2, "y", ["q"]):
        wizard.answer(value)
        wizard.advance()

    pending = asyncio.ensure_future(wizard.submit_payment(VALID_PAYMENT))
    await asyncio.sleep(0)
    wizard._state = WizardState()
    release.set()
    result = await pending

    assert not result.ok
    assert wizard.stage == Stage.START
    assert wizard.state.is_submitting is False
    assert len(wizard.state.answers) == 0
