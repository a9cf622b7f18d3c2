"""
views/components/question_card.py

단일 문항(Question)을 카드 형태로 렌더링하고
사용자의 선택을 반환하는 컴포넌트.
문항 타입별 위젯:
  - single-scale  : 가로 라디오 (척도)
  - single-choice : 세로 라디오
  - multi-choice  : 보기별 체크박스
"""

from __future__ import annotations

from typing import Optional

import streamlit as st

from profreport.models.answer_store import AnswerValue
from profreport.models.questionnaire import Question, QuestionType


def _widget_key(question: Question, suffix: str = "") -> str:
    return f"answer_{question.id}{suffix}"


def _render_single(question: Question, saved_answer: Optional[AnswerValue]) -> Optional[AnswerValue]:
    values = question.option_values()
    labels = {opt.value: opt.label for opt in question.options}
    radio_key = _widget_key(question)

    # 위젯 키가 없을 때만 saved_answer로 초기화 (재렌더 시 기존 값 유지)
    if radio_key not in st.session_state and saved_answer in values:
        st.session_state[radio_key] = saved_answer

    current_val = st.session_state.get(radio_key, saved_answer)
    default_index = values.index(current_val) if current_val in values else None

    return st.radio(
        "Выберите ответ",
        options=values,
        index=default_index,
        format_func=lambda v: labels[v],
        key=radio_key,
        horizontal=question.type == QuestionType.SINGLE_SCALE,
        label_visibility="collapsed",
    )


def _render_multi(question: Question, saved_answer: Optional[AnswerValue]) -> list:
    saved = saved_answer if isinstance(saved_answer, list) else []
    selected = []
    for i, opt in enumerate(question.options):
        checked = st.checkbox(
            opt.label,
            value=opt.value in saved,
            key=_widget_key(question, f"_{i}"),
        )
        if checked:
            selected.append(opt.value)
    return selected


def render(
    question: Question,
    question_number: int,
    total: int,
    saved_answer: Optional[AnswerValue] = None,
) -> Optional[AnswerValue]:
    """
    문항 카드를 렌더링하고 사용자가 선택한 값을 반환한다.

    Args:
        question:        렌더링할 Question 객체
        question_number: 전체 문항 중 몇 번째인지 (1-based 표시용)
        total:           전체 문항 수
        saved_answer:    이미 저장된 이전 선택 (없으면 None)

    Returns:
        단일 선택: 선택된 보기 값, 미선택이면 None
        복수 선택: 선택된 보기 값 리스트 (보기 순서)
    """

    # ── 문항 헤더 ──────────────────────────────────────────────────────────
    st.markdown(
        f'<span class="question-number-badge">Вопрос {question_number} из {total}</span>',
        unsafe_allow_html=True,
    )

    # ── 문항 본문 ──────────────────────────────────────────────────────────
    st.markdown(
        f"""
        <div class="question-card">
            <p style="font-size:1.15rem; font-weight:600; color:#1a1a2e;
                      line-height:1.6; margin:0;">
                {question.question}
            </p>
        </div>
        """,
        unsafe_allow_html=True,
    )
    if question.subtitle:
        st.caption(question.subtitle)

    # ── 보기 선택 ─────────────────────────────────────────────────────────
    if question.is_multi:
        return _render_multi(question, saved_answer)
    return _render_single(question, saved_answer)
