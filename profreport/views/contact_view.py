"""
views/contact_view.py — 문의 폼 화면
"""

from __future__ import annotations

import asyncio

import streamlit as st

from profreport.models.forms import CONTACT_SUBJECTS
from profreport.services.contact_service import submit_contact


def render() -> None:
    errors: dict = st.session_state.get("contact_errors", {})

    _, col, _ = st.columns([1, 2.2, 1])
    with col:
        st.markdown("## Связаться с нами")

        if st.session_state.pop("contact_sent", None):
            st.toast(st.session_state.pop("contact_message", "Сообщение отправлено!"), icon="✅")

        with st.form("contact_form", clear_on_submit=False):
            name = st.text_input("Имя *", placeholder="Ваше имя")
            if "name" in errors:
                st.error(errors["name"])
            email = st.text_input("Email *", placeholder="example@mail.com")
            if "email" in errors:
                st.error(errors["email"])
            subject = st.selectbox(
                "Тема *",
                options=[""] + list(CONTACT_SUBJECTS),
                format_func=lambda s: CONTACT_SUBJECTS.get(s, "Выберите тему"),
            )
            if "subject" in errors:
                st.error(errors["subject"])
            message = st.text_area("Сообщение *", placeholder="Опишите ваш вопрос или проблему",
                                   height=160)
            if "message" in errors:
                st.error(errors["message"])
            consent = st.checkbox("Я согласен на обработку персональных данных *")
            if "consent" in errors:
                st.error(errors["consent"])

            submitted = st.form_submit_button("Отправить", type="primary", use_container_width=True)

        if submitted:
            values = {
                "name": name,
                "email": email,
                "subject": subject,
                "message": message,
                "consent": consent,
            }
            with st.spinner("Отправка..."):
                outcome = asyncio.run(submit_contact(values))
            st.session_state.contact_errors = outcome.field_errors
            if outcome.ok:
                st.session_state.contact_sent = True
                st.session_state.contact_message = outcome.message or "Сообщение отправлено!"
                st.rerun()
            elif outcome.message:
                st.error(outcome.message)
            else:
                st.rerun()

        if st.button("← На главную", key="contact_home"):
            st.session_state.contact_errors = {}
            st.session_state.page = "home"
            st.rerun()
