# tests/conftest.py
import pytest

from profreport.models import questionnaire
from profreport.models.payload import SubmissionResult
from profreport.services.submission_service import SubmissionGateway
from profreport.services.wizard_service import WizardController


# values_1 (척도 1–7), riasec_2 (단일 선택 x/y), klimov_3 (복수 선택 p/q)
SMALL_CONFIG_DATA = {
    "testType": "graduate",
    "title": "Тестовый тест",
    "subtitle": "Для проверки",
    "price": 1490,
    "tariff": "recommended",
    "instructions": ["Отвечайте честно"],
    "sections": [
        {
            "id": "first",
            "title": "Первая секция",
            "subtitle": "",
            "questions": [
                {
                    "id": "values_1",
                    "question": "Насколько важен доход?",
                    "type": "single-scale",
                    "options": [{"label": str(n), "value": n} for n in range(1, 8)],
                },
                {
                    "id": "riasec_2",
                    "question": "Что ближе?",
                    "type": "single-choice",
                    "options": [{"label": "X", "value": "x"}, {"label": "Y", "value": "y"}],
                },
            ],
        },
        {
            "id": "second",
            "title": "Вторая секция",
            "subtitle": "",
            "questions": [
                {
                    "id": "klimov_3",
                    "question": "С чем интересно работать?",
                    "type": "multi-choice",
                    "options": [{"label": "P", "value": "p"}, {"label": "Q", "value": "q"}],
                },
            ],
        },
    ],
}

VALID_PAYMENT = {
    "name": "Анна",
    "email": "anna@example.com",
    "code": None,
    "consent": True,
}


class FakeSubmit:
    """일반 결제 경로용 주입 함수. 호출 시점의 마법사 제출 플래그를 기록한다."""

    def __init__(self, results=None, wizard_ref=None):
        self.results = list(results or [SubmissionResult(success=True)])
        self.calls = []
        self.wizard_ref = wizard_ref
        self.flag_during_call = []

    async def __call__(self, payload):
        self.calls.append(payload)
        if self.wizard_ref is not None and self.wizard_ref.get("wizard") is not None:
            self.flag_during_call.append(self.wizard_ref["wizard"].state.is_submitting)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def small_config():
    return questionnaire.TestConfiguration.model_validate(SMALL_CONFIG_DATA)


@pytest.fixture
def fake_submit():
    return FakeSubmit()


@pytest.fixture
def gateway(fake_submit):
    return SubmissionGateway(base_url="https://api.test/v1", submit_payload=fake_submit)


@pytest.fixture
def wizard(small_config, gateway):
    return WizardController(small_config, gateway=gateway)


@pytest.fixture
def payment_wizard(wizard):
    """모든 문항에 응답하고 결제 단계에 도달한 마법사."""
    wizard.set_consent(True)
    wizard.start()
    for value in (5, "y", ["p", "q"]):
        wizard.answer(value)
        wizard.advance()
    return wizard
