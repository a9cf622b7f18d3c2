"""
views/components/faq_accordion.py

FAQ 아코디언. 질문 버튼을 누르면 답변이 펼쳐지고, 다른 항목은 접힌다.
"""

from __future__ import annotations

import streamlit as st

from profreport.services.faq_service import FaqAccordion


def render(accordion: FaqAccordion) -> None:
    for i, item in enumerate(accordion.items):
        arrow = "▲" if accordion.is_open(i) else "▼"
        if st.button(f"{item.question}  {arrow}", key=f"faq_{i}", use_container_width=True):
            accordion.toggle(i)
            st.rerun()
        if accordion.is_open(i):
            st.markdown(
                f"<div class='faq-answer'>{item.answer}</div>",
                unsafe_allow_html=True,
            )
