"""
views/home_view.py — 홈 / 테스트 목록 화면

기능:
  - 테스트 카탈로그 카드 (가격, 문항 수, 응시 버튼)
  - FAQ 아코디언
  - 문의 페이지 이동
"""

from __future__ import annotations

import streamlit as st

from profreport.content.faq import FAQ_ITEMS
from profreport.content.catalog import list_tests
from profreport.models.questionnaire import TestConfiguration
from profreport.services.faq_service import FaqAccordion
from profreport.services.wizard_service import WizardController
from profreport.views.components import faq_accordion


def _open_test(test_config: TestConfiguration) -> None:
    """새 마법사를 마운트하고 test 페이지로 이동."""
    st.session_state.wizard = WizardController(test_config)
    st.session_state.confirm_exit = False
    st.session_state.payment_errors = {}
    st.session_state.page = "test"


def render() -> None:
    """홈 화면 렌더링."""

    _, col, _ = st.columns([1, 2.6, 1])

    with col:
        st.markdown('<p class="pr-title">ProfReport</p>', unsafe_allow_html=True)
        st.markdown(
            '<p class="pr-subtitle">Профориентационные тесты с подробным отчетом на email</p>',
            unsafe_allow_html=True,
        )

        # ── 테스트 카드 ──────────────────────────────────────────────────
        for cfg in list_tests():
            with st.container(border=True):
                st.markdown(f"### {cfg.title}")
                st.caption(cfg.subtitle)
                info_left, info_right = st.columns(2)
                with info_left:
                    st.markdown(f"**{cfg.price} ₽**")
                with info_right:
                    st.markdown(f"{cfg.total_questions} вопросов")
                st.button(
                    "Пройти тест",
                    key=f"open_{cfg.test_type}",
                    type="primary",
                    on_click=_open_test,
                    args=(cfg,),
                    use_container_width=True,
                )

        # ── FAQ ──────────────────────────────────────────────────────────
        st.markdown('<hr class="pr-divider">', unsafe_allow_html=True)
        st.markdown("## Частые вопросы")
        if "faq" not in st.session_state:
            st.session_state.faq = FaqAccordion(FAQ_ITEMS)
        faq_accordion.render(st.session_state.faq)

        # ── 문의 ─────────────────────────────────────────────────────────
        st.markdown('<hr class="pr-divider">', unsafe_allow_html=True)
        if st.button("Задать вопрос", key="go_contact", use_container_width=True):
            st.session_state.page = "contact"
            st.rerun()
