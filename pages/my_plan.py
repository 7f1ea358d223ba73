"""
My Plan page - the current weekly plan as cards and a table
"""

import pandas as pd
import streamlit as st

from nofat.fallback_plan import is_fallback_plan
from nofat.plan_validator import validate_plan
from nofat.schedule_builder import WEEKDAYS
from nofat.ui_utils import day_card, empty_state, get_plan_state, nav_button, render_page_header


TABLE_COLUMNS = ["星期", "时间", "训练", "动作", "组数", "次数/时长", "休息"]


def plan_to_dataframe(plan):
    """One row per exercise; rest days get a single row with no exercise."""
    rows = []
    for day_plan in (plan or {}).get('workouts') or []:
        exercises = day_plan.get('exercises') or []
        base = {
            "星期": day_plan.get('day', ''),
            "时间": day_plan.get('time') or '',
            "训练": day_plan.get('name', ''),
        }
        if not exercises:
            rows.append({**base, "动作": '', "组数": '', "次数/时长": '', "休息": ''})
            continue
        for exercise in exercises:
            rows.append({
                **base,
                "动作": exercise.get('name', ''),
                "组数": exercise.get('sets') or '',
                "次数/时长": exercise.get('reps') or '',
                "休息": exercise.get('rest') or '',
            })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def days_by_weekday(plan):
    """Group DayPlans by weekday label (appended programs can share a day)."""
    grouped = {day: [] for day in WEEKDAYS}
    for day_plan in (plan or {}).get('workouts') or []:
        grouped.setdefault(day_plan.get('day'), []).append(day_plan)
    return grouped


def show():
    """Render the current plan"""
    render_page_header("我的计划", None, "📋")

    state = get_plan_state()
    plan = state.plan
    if not plan:
        empty_state("🗓️", "暂无计划", "去生成一份 AI 计划或添加预设训练吧。")
        nav_button("AI 定制计划", "generate", icon="🤖", type="primary")
        return

    goal = plan.get('goal')
    goal_name = goal.get('name') if isinstance(goal, dict) else goal
    st.markdown(f"### {plan.get('name', '')}")
    st.caption(" · ".join(str(v) for v in [goal_name, plan.get('level'), plan.get('frequency')] if v))
    if isinstance(goal, dict) and goal.get('focus'):
        st.markdown(f"🎯 {goal['focus']}")

    if is_fallback_plan(plan):
        st.warning("⚠️ 这是离线版计划，AI 恢复后可以重新生成。")

    grouped = days_by_weekday(plan)
    columns = st.columns(len(WEEKDAYS))
    for column, day in zip(columns, WEEKDAYS):
        with column:
            sessions = grouped.get(day) or [{'day': day, 'name': '休息', 'exercises': []}]
            for session in sessions:
                day_card(session)

    st.markdown("### 训练明细")
    st.dataframe(plan_to_dataframe(plan), use_container_width=True, hide_index=True)

    tips = plan.get('tips') or []
    if tips:
        st.markdown("### 💡 小贴士")
        for tip in tips:
            st.markdown(f"- {tip}")

    validation = validate_plan(plan)
    if validation['violations']:
        with st.expander("计划检查"):
            st.caption(validation['summary'])
            for violation in validation['violations']:
                st.markdown(f"- `{violation['code']}` {violation['message']}")

    st.markdown("---")
    if st.button("🗑️ 删除计划", type="secondary"):
        state.clear()
        st.rerun()
