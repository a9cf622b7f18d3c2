"""
streamlit_app.py — ProfReport Streamlit 프런트엔드 진입점

실행: streamlit run streamlit_app.py
페이지 라우팅은 st.session_state.page ("home" | "test" | "contact")로 처리한다.
"""

import logging
import os
import sys

_BASE_DIR = os.path.dirname(os.path.abspath(__file__))
if _BASE_DIR not in sys.path:
    sys.path.insert(0, _BASE_DIR)

import streamlit as st

from config import SITE_NAME
from profreport.views import contact_view, home_view, wizard_view

logger = logging.getLogger(__name__)
if not logger.handlers:
    logging.basicConfig(level=logging.INFO)

_CSS = """
<style>
.pr-title { text-align:center; font-size:2rem; font-weight:700; color:#1a1a2e; margin-bottom:4px; }
.pr-subtitle { text-align:center; font-size:1rem; color:#6b7280; margin-bottom:24px; }
.pr-price { font-size:2.6rem; font-weight:700; color:#4a7fcb; }
.pr-divider { border:none; border-top:1px solid #e5e7eb; margin:24px 0; }
.question-card { background:#f8fafc; border:1px solid #e5e7eb; border-radius:10px; padding:20px; margin:12px 0; }
.question-number-badge { background:#eef2ff; color:#4a7fcb; border-radius:999px; padding:4px 12px; font-size:0.8rem; }
.faq-answer { color:#4b5563; line-height:1.7; padding:8px 12px 16px 12px; }
.icon-circle { text-align:center; font-size:3rem; margin:16px 0; }
</style>
"""

_PAGES = {
    "home": home_view.render,
    "test": wizard_view.render,
    "contact": contact_view.render,
}


def main() -> None:
    st.set_page_config(page_title=SITE_NAME, page_icon="🧭", layout="wide")
    st.markdown(_CSS, unsafe_allow_html=True)

    if "page" not in st.session_state:
        st.session_state.page = "home"

    _PAGES.get(st.session_state.page, home_view.render)()


main()
