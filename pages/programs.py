"""
Programs page - preset workout library and activation into the current plan
"""

from datetime import time

import streamlit as st

from nofat.profile import PlanRequestError
from nofat.programs import CATEGORY_LABELS, filter_programs
from nofat.schedule_builder import WEEKDAYS
from nofat.ui_utils import get_plan_state, program_card, render_page_header


def format_detail(item):
    """One-line description of a program detail item."""
    if item.get('sets'):
        text = f"{item['name']} · {item['sets']} × {item.get('reps', '')}"
        if item.get('rest'):
            text += f" · 休息 {item['rest']}"
        return text
    text = f"{item['name']} · {item.get('duration', '')}"
    if item.get('description'):
        text += f"（{item['description']}）"
    return text


def _activation_form(program):
    key = f"program_{program['id']}"
    days = st.multiselect("安排在", WEEKDAYS, key=f"{key}_days")
    preferred_time = st.time_input("训练时间", value=time(7, 0), key=f"{key}_time").strftime("%H:%M")

    if st.button("➕ 加入我的计划", key=f"{key}_activate", type="primary", disabled=not days):
        try:
            plan = get_plan_state().activate_program(program, days, preferred_time)
        except PlanRequestError as e:
            st.error(f"❌ {e}")
            return
        st.success(f"✅ 已加入「{plan['name']}」")


def show():
    """Render the program library"""
    render_page_header("训练库", "选择适合你的训练", "📚")

    category = st.radio(
        "分类",
        list(CATEGORY_LABELS.keys()),
        format_func=lambda c: CATEGORY_LABELS[c],
        horizontal=True,
        label_visibility="collapsed",
    )

    for program in filter_programs(category):
        program_card(program)
        with st.expander("查看详情"):
            for item in program['details']:
                st.markdown(f"- {format_detail(item)}")
            st.markdown("---")
            _activation_form(program)
