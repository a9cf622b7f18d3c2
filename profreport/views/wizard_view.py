"""
views/wizard_view.py — 테스트 응시 화면

단계별 화면:
  - start   : 안내문 + 동의 체크 + 시작 버튼
  - test    : 진행률 + 문항 카드 + 이전/다음 + 중단(확인 다이얼로그)
  - payment : 이름/이메일/접근 코드/약관 동의 폼
  - success : 완료 안내

상태 관리:
  - st.session_state.wizard          (WizardController)
  - st.session_state.payment_errors  (필드 오류 매핑)
  - 위젯 값 ↔ wizard.state.answers 동기화는 렌더링마다 수행
"""

from __future__ import annotations

import asyncio

import streamlit as st

from profreport.models.wizard_state import Stage
from profreport.services.wizard_service import WizardController
from profreport.views.components import progress_bar as pbar
from profreport.views.components import question_card as qcard


def _go_home() -> None:
    """마법사 상태를 폐기하고 홈으로 이동."""
    for key in ["wizard", "confirm_exit", "payment_errors", "start_consent"]:
        if key in st.session_state:
            del st.session_state[key]
    # 문항 위젯, 결제 폼 위젯 값도 다음 테스트로 넘어가지 않게 제거
    widget_keys = [k for k in st.session_state if k.startswith(("answer_", "pay_"))]
    for k in widget_keys:
        del st.session_state[k]
    st.session_state.page = "home"
    st.rerun()


def _render_start(wizard: WizardController) -> None:
    cfg = wizard.config
    st.markdown(f'<p class="pr-title">{cfg.title}</p>', unsafe_allow_html=True)
    st.markdown(f'<p class="pr-subtitle">{cfg.subtitle}</p>', unsafe_allow_html=True)

    st.markdown("#### Тест займет примерно 5–7 минут")
    st.markdown("**Инструкции:**")
    for instruction in cfg.instructions:
        st.markdown(f"- {instruction}")

    if cfg.info_banner:
        st.info(cfg.info_banner)

    consent = st.checkbox(
        "Я согласен на обработку персональных данных",
        value=wizard.state.consent,
        key="start_consent",
    )
    wizard.set_consent(consent)

    if st.button("Начать тест", type="primary", disabled=not consent, use_container_width=True):
        result = wizard.start()
        if result.ok:
            st.rerun()
        else:
            st.warning(result.message)


def _render_exit_confirm(wizard: WizardController) -> None:
    st.warning("**Вы уверены?** Несохранённые ответы будут потеряны")
    col_cancel, col_exit = st.columns(2)
    with col_cancel:
        if st.button("Отмена", key="exit_cancel", use_container_width=True):
            st.session_state.confirm_exit = False
            st.rerun()
    with col_exit:
        if st.button("Выйти", key="exit_confirm", type="primary", use_container_width=True):
            wizard.exit()
            _go_home()


def _render_test(wizard: WizardController) -> None:
    # ── 헤더: 중단 버튼 ────────────────────────────────────────────────────
    _, exit_col = st.columns([3, 1])
    with exit_col:
        if st.button("Выйти / Сохранить на потом", key="exit_btn"):
            st.session_state.confirm_exit = True
            st.rerun()

    if st.session_state.get("confirm_exit"):
        _render_exit_confirm(wizard)
        return

    pbar.render(wizard)

    # ── 문항 카드 ─────────────────────────────────────────────────────────
    question = wizard.current_question
    selected = qcard.render(
        question=question,
        question_number=wizard.current_index + 1,
        total=wizard.total_questions,
        saved_answer=wizard.current_answer(),
    )

    # 선택한 답을 즉시 답안지에 저장
    if selected is not None:
        wizard.answer(selected)

    st.caption("💡 Можно вернуться и изменить ответ до оплаты")

    # ── 이전 / 다음 ───────────────────────────────────────────────────────
    nav_left, nav_right = st.columns(2)
    with nav_left:
        if st.button("Назад", key="prev_btn", disabled=wizard.current_index == 0,
                     use_container_width=True):
            wizard.retreat()
            st.rerun()
    with nav_right:
        label = "Перейти к оплате" if wizard.is_last_question else "Далее"
        if st.button(label, key="next_btn", type="primary", use_container_width=True):
            result = wizard.advance()
            if result.ok:
                st.rerun()
            else:
                st.warning(result.message)


def _render_payment(wizard: WizardController) -> None:
    cfg = wizard.config
    errors: dict = st.session_state.get("payment_errors", {})

    st.markdown("## Оплата и получение отчета")
    st.markdown(f"### {cfg.title}")
    st.markdown(f"<p class='pr-price'>{cfg.price} ₽</p>", unsafe_allow_html=True)

    with st.form("payment_form"):
        name = st.text_input("Имя *", placeholder="Ваше имя", key="pay_name")
        if "name" in errors:
            st.error(errors["name"])
        email = st.text_input("Email для получения отчета *", placeholder="example@mail.com",
                              key="pay_email")
        if "email" in errors:
            st.error(errors["email"])
        code = st.text_input("Код доступа (опционально)", placeholder="Введите код", key="pay_code")
        consent = st.checkbox("Я согласен с условиями договора оферты *", key="pay_consent")
        if "consent" in errors:
            st.error(errors["consent"])

        st.caption("🔒 Данные защищены и используются только для формирования отчета")

        if wizard.state.last_error:
            st.error(wizard.state.last_error)

        submitted = st.form_submit_button(
            "Обработка..." if wizard.state.is_submitting else "Оплатить и получить отчет",
            type="primary",
            disabled=wizard.state.is_submitting,
            use_container_width=True,
        )

    if submitted:
        values = {"name": name, "email": email, "code": code or None, "consent": consent}
        with st.spinner("Обработка..."):
            result = asyncio.run(wizard.submit_payment(values))
        st.session_state.payment_errors = result.field_errors
        st.rerun()


def _render_success() -> None:
    st.markdown("<div class='icon-circle'>✅</div>", unsafe_allow_html=True)
    st.markdown("## Спасибо!")
    st.markdown("Отчет придет на указанный email")
    st.caption("Обычно — 10 минут, максимум — 12 часов")

    home_col, contact_col = st.columns(2)
    with home_col:
        if st.button("На главную", type="primary", use_container_width=True):
            _go_home()
    with contact_col:
        if st.button("Задать вопрос", use_container_width=True):
            st.session_state.page = "contact"
            st.rerun()


def render() -> None:
    """테스트 화면 렌더링."""

    # ── 세션 가드 ──────────────────────────────────────────────────────────
    wizard: WizardController | None = st.session_state.get("wizard")
    if wizard is None:
        st.warning("Тест не выбран. Вернитесь на главную страницу.")
        if st.button("На главную", type="primary"):
            _go_home()
        return

    _, col, _ = st.columns([1, 2.4, 1])
    with col:
        if wizard.stage == Stage.START:
            _render_start(wizard)
        elif wizard.stage == Stage.TEST:
            _render_test(wizard)
        elif wizard.stage == Stage.PAYMENT:
            _render_payment(wizard)
        else:
            _render_success()
