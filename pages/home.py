"""
Home page - today's session and a quick overview of the current plan
"""

import re
from datetime import datetime

import streamlit as st

from nofat.schedule_builder import WEEKDAYS, is_rest_day
from nofat.ui_utils import (
    day_card,
    empty_state,
    get_chat_assistant,
    get_plan_state,
    metric_card,
    nav_button,
    render_page_header,
)


MINUTES_RE = re.compile(r"(\d+)")


def today_label(now=None):
    """Weekday label for today, e.g. '周三'."""
    now = now or datetime.now()
    return WEEKDAYS[now.weekday()]


def summarize_week(plan):
    """
    Training days, planned minutes and exercise count for a plan.

    Durations like "30分钟" or "20-30分钟" count by their first number.
    """
    summary = {'training_days': 0, 'minutes': 0, 'exercises': 0}
    for day_plan in (plan or {}).get('workouts') or []:
        if is_rest_day(day_plan):
            continue
        summary['training_days'] += 1
        summary['exercises'] += len(day_plan.get('exercises') or [])
        match = MINUTES_RE.search(str(day_plan.get('duration') or ''))
        if match:
            summary['minutes'] += int(match.group(1))
    return summary


def todays_sessions(plan, label):
    return [
        day_plan for day_plan in (plan or {}).get('workouts') or []
        if day_plan.get('day') == label and not is_rest_day(day_plan)
    ]


def show():
    """Render the home page"""
    render_page_header("Nofat", "今天也要动起来", "🔥")

    plan = get_plan_state().plan
    if not plan:
        empty_state("📋", "还没有训练计划", "生成一份 AI 专属计划，或从训练库选择一个预设计划。")
        col1, col2 = st.columns(2)
        with col1:
            nav_button("AI 定制计划", "generate", icon="🤖", use_container_width=True, type="primary")
        with col2:
            nav_button("浏览训练库", "programs", icon="📚", use_container_width=True)
        return

    summary = summarize_week(plan)
    st.markdown(f"### {plan.get('name', '')}")

    col1, col2, col3 = st.columns(3)
    with col1:
        metric_card("每周训练", f"{summary['training_days']} 天", "📅")
    with col2:
        metric_card("计划时长", f"{summary['minutes']} 分钟", "⏱️")
    with col3:
        metric_card("动作总数", summary['exercises'], "💪")

    label = today_label()
    st.markdown(f"### 今日训练 · {label}")
    sessions = todays_sessions(plan, label)
    if sessions:
        for session in sessions:
            day_card(session, is_today=True)
    else:
        day_card({'day': label, 'name': '休息', 'exercises': []}, is_today=True)

    st.markdown("---")
    if st.button("💡 获取今日建议", use_container_width=True):
        assistant = get_chat_assistant()
        if assistant is None:
            st.warning("⚠️ 未配置 API Key，无法获取 AI 建议。")
        else:
            goal = plan.get('goal')
            with st.spinner("Nofat 思考中..."):
                advice = assistant.get_fitness_advice({
                    'weeklyWorkouts': summary['training_days'],
                    'weeklyMinutes': summary['minutes'],
                    'goal': goal.get('name') if isinstance(goal, dict) else goal,
                })
            st.info(advice)
