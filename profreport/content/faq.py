"""content/faq.py — 자주 묻는 질문"""

from profreport.services.faq_service import FaqItem

FAQ_ITEMS = [
    FaqItem(
        question="Сколько времени занимает тест?",
        answer="В среднем 5–7 минут. Ограничения по времени нет, но лучше пройти тест за один раз.",
    ),
    FaqItem(
        question="Когда придет отчет?",
        answer="Обычно в течение 10 минут после оплаты, максимум — 12 часов. Проверьте папку «Спам».",
    ),
    FaqItem(
        question="Можно ли изменить ответы?",
        answer="Да, до перехода к оплате можно вернуться к любому вопросу и изменить ответ.",
    ),
    FaqItem(
        question="Сохраняется ли прогресс, если закрыть страницу?",
        answer="Нет. Ответы хранятся только до закрытия страницы, после выхода тест нужно пройти заново.",
    ),
    FaqItem(
        question="Как вернуть деньги?",
        answer="Напишите нам через форму на странице контактов, выбрав тему «Возврат средств».",
    ),
]
