"""
content/catalog.py

기본 제공 테스트 구성 (school / graduate / adult).
문항 ID 접두사가 제출 페이로드의 카테고리를 결정한다:
  values_ → 가치관, riasec_ → RIASEC, klimov_ → 클리모프 활동 대상, personality_ → 성격 특성
"""

from typing import Dict, List

from profreport.models.questionnaire import Question, Section, TestConfiguration, TestType

# ── 보기 세트 ────────────────────────────────────────────────────────────────

_IMPORTANCE_SCALE = [
    {"label": str(n), "value": n} for n in range(1, 8)
]

_AGREEMENT_SCALE = [
    {"label": "Совсем не про меня", "value": 1},
    {"label": "Скорее не про меня", "value": 2},
    {"label": "Затрудняюсь ответить", "value": 3},
    {"label": "Скорее про меня", "value": 4},
    {"label": "Точно про меня", "value": 5},
]

_KLIMOV_OPTIONS = [
    {"label": "Человек — природа", "value": "nature"},
    {"label": "Человек — техника", "value": "technique"},
    {"label": "Человек — человек", "value": "human"},
    {"label": "Человек — знаковая система", "value": "sign"},
    {"label": "Человек — художественный образ", "value": "art"},
]

# ── 문항 원본 ────────────────────────────────────────────────────────────────

_VALUES = [
    "Насколько для вас важен высокий доход?",
    "Насколько для вас важна возможность помогать людям?",
    "Насколько для вас важна свобода в выборе задач и графика?",
    "Насколько для вас важна стабильность и предсказуемость работы?",
    "Насколько для вас важно постоянно узнавать новое?",
    "Насколько для вас важно признание и статус?",
]

_RIASEC = [
    ("Что вам ближе?", [("Собрать или починить устройство", "R"), ("Разобраться, почему оно работает", "I")]),
    ("Как вы предпочли бы провести выходной?", [("Нарисовать или сочинить что-то", "A"), ("Помочь другу с переездом", "S")]),
    ("Какая роль в проекте вам интереснее?", [("Убедить команду и вести её за собой", "E"), ("Навести порядок в документах и сроках", "C")]),
    ("Что вы выберете?", [("Провести эксперимент", "I"), ("Организовать мероприятие", "E")]),
    ("Какое задание вам приятнее?", [("Составить подробную таблицу", "C"), ("Придумать оформление", "A")]),
    ("Где вам комфортнее работать?", [("На улице или в мастерской", "R"), ("Среди людей, в команде", "S")]),
]

_KLIMOV = [
    "С чем вам интереснее работать?",
    "О чём вы охотнее читаете или смотрите видео?",
    "Какие школьные или учебные задания давались вам легче всего?",
]

_PERSONALITY = [
    "Я легко знакомлюсь с новыми людьми",
    "Я довожу начатое до конца, даже если стало скучно",
    "Я спокойно переношу неопределённость",
    "Мне нравится брать ответственность за результат",
    "Я часто предлагаю необычные идеи",
]


def _values_section(count: int) -> Section:
    return Section(
        id="values",
        title="Ценности",
        subtitle="Оцените, насколько важен каждый пункт: 1 — совсем не важно, 7 — очень важно",
        questions=[
            Question(id=f"values_{i}", question=text, type="single-scale", options=_IMPORTANCE_SCALE)
            for i, text in enumerate(_VALUES[:count], start=1)
        ],
    )


def _riasec_section(count: int) -> Section:
    return Section(
        id="riasec",
        title="Интересы",
        subtitle="Выберите вариант, который вам ближе",
        questions=[
            Question(
                id=f"riasec_{i}",
                question=text,
                type="single-choice",
                options=[{"label": label, "value": value} for label, value in options],
            )
            for i, (text, options) in enumerate(_RIASEC[:count], start=1)
        ],
    )


def _klimov_section(count: int) -> Section:
    return Section(
        id="klimov",
        title="Сферы деятельности",
        subtitle="Можно выбрать несколько вариантов",
        questions=[
            Question(id=f"klimov_{i}", question=text, type="multi-choice", options=_KLIMOV_OPTIONS)
            for i, text in enumerate(_KLIMOV[:count], start=1)
        ],
    )


def _personality_section(count: int) -> Section:
    return Section(
        id="personality",
        title="Личные качества",
        subtitle="Насколько утверждение описывает вас?",
        questions=[
            Question(id=f"personality_{i}", question=text, type="single-scale", options=_AGREEMENT_SCALE)
            for i, text in enumerate(_PERSONALITY[:count], start=1)
        ],
    )


_INSTRUCTIONS = [
    "Отвечайте честно — правильных и неправильных ответов нет",
    "Не задумывайтесь надолго: первый вариант обычно самый точный",
    "До оплаты можно вернуться и изменить любой ответ",
]

TEST_CATALOG: Dict[str, TestConfiguration] = {
    "school": TestConfiguration(
        test_type="school",
        title="Профориентация для школьников",
        subtitle="Для учеников 8–11 классов",
        price=990,
        tariff="basic",
        sections=[
            _values_section(4),
            _riasec_section(4),
            _klimov_section(2),
            _personality_section(3),
        ],
        instructions=_INSTRUCTIONS,
        info_banner="Рекомендуем пройти тест вместе с родителями и обсудить отчет",
    ),
    "graduate": TestConfiguration(
        test_type="graduate",
        title="Выбор направления для выпускников",
        subtitle="Для студентов и выпускников вузов и колледжей",
        price=1490,
        tariff="recommended",
        sections=[
            _values_section(6),
            _riasec_section(6),
            _klimov_section(3),
            _personality_section(4),
        ],
        instructions=_INSTRUCTIONS,
    ),
    "adult": TestConfiguration(
        test_type="adult",
        title="Смена профессии для взрослых",
        subtitle="Для тех, кто задумывается о новой карьере",
        price=1990,
        tariff="pro",
        sections=[
            _values_section(6),
            _riasec_section(6),
            _klimov_section(3),
            _personality_section(5),
        ],
        instructions=_INSTRUCTIONS,
    ),
}


def list_tests() -> List[TestConfiguration]:
    return list(TEST_CATALOG.values())


def get_test(test_type: TestType) -> TestConfiguration:
    """
    Raises:
        KeyError: 등록되지 않은 테스트 종류.
    """
    return TEST_CATALOG[test_type]
