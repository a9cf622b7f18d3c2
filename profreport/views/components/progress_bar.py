"""
views/components/progress_bar.py

테스트 진행률 표시 컴포넌트.
진행률은 저장하지 않고 컨트롤러에서 매번 계산한다.
"""

from __future__ import annotations

import streamlit as st

from profreport.services.wizard_service import WizardController


def render(wizard: WizardController) -> None:
    """진행률 막대 + '질문 n / 전체' 표시."""
    progress = wizard.progress
    section = wizard.current_section

    st.markdown(
        f"""
        <div style="display:flex; justify-content:space-between;
                    font-size:0.85rem; color:#6b7280; margin-bottom:4px;">
            <span>Прогресс</span>
            <span style="color:#4a7fcb; font-weight:600;">{progress}%</span>
        </div>
        """,
        unsafe_allow_html=True,
    )
    st.progress(progress / 100)
    st.markdown(
        f"<p style='text-align:center; font-size:0.85rem; color:#9ca3af;'>"
        f"Вопрос {wizard.current_index + 1} из {wizard.total_questions}</p>",
        unsafe_allow_html=True,
    )

    # ── 현재 섹션 ─────────────────────────────────────────────────────────
    if section:
        st.markdown(
            f"<h2 style='text-align:center; font-size:1.4rem; margin-bottom:4px;'>{section.title}</h2>"
            f"<p style='text-align:center; color:#6b7280;'>{section.subtitle}</p>",
            unsafe_allow_html=True,
        )
