"""
Generate Plan page - profile form and AI weekly plan generation
"""

from datetime import time

import streamlit as st

from nofat.config import get_db_path
from nofat.fallback_plan import generate_fallback_plan, is_fallback_plan
from nofat.plan_generator import PlanGenerator, build_plan_request
from nofat.profile import PlanRequestError, normalize_profile
from nofat.prompt_builder import GENDER_LABELS, GOAL_LABELS, LEVEL_LABELS, PREFERENCE_LABELS
from nofat.schedule_builder import WEEKDAYS, build_weekly_plan, toggle_day
from nofat.ui_utils import (
    get_api_key,
    get_config,
    get_database,
    get_identity,
    get_plan_state,
    nav_button,
    render_page_header,
)


DURATION_OPTIONS = ["20分钟", "30分钟", "45分钟", "60分钟"]
DEFAULT_TIME = time(7, 0)


def should_start_plan_generation(generate_clicked, generation_in_progress, has_selected_days=True):
    """Gate plan generation so repeated clicks do not launch duplicate runs."""
    return bool(generate_clicked and not generation_in_progress and has_selected_days)


def is_generate_disabled(generation_in_progress, selected_days):
    """The generate button stays disabled mid-run and until a weekday is picked."""
    return bool(generation_in_progress or not selected_days)


def _select(label, options, current, key):
    keys = list(options.keys())
    index = keys.index(current) if current in keys else 0
    return st.selectbox(label, keys, index=index, format_func=lambda k: options[k], key=key)


def _day_picker(selected):
    st.markdown("**训练日**")
    columns = st.columns(len(WEEKDAYS))
    for column, day in zip(columns, WEEKDAYS):
        with column:
            checked = st.checkbox(day, value=day in selected, key=f"day_{day}")
        if checked != (day in selected):
            selected = toggle_day(selected, day)
    return selected


def show():
    """Render the generate plan page"""
    render_page_header("AI 定制计划", "填写你的身体数据，Nofat 为你安排一周训练", "🤖")

    if 'plan_generation_in_progress' not in st.session_state:
        st.session_state.plan_generation_in_progress = False
    if 'selected_days' not in st.session_state:
        st.session_state.selected_days = []

    config = get_config()
    db = get_database(get_db_path(config))
    identity = get_identity(config)
    saved = db.get_profile(identity['id']) or {}

    st.markdown("### 📋 身体数据")
    col1, col2 = st.columns(2)
    with col1:
        age = st.number_input("年龄", min_value=0, max_value=120, value=int(saved.get('age') or 0))
        height = st.number_input("身高 (cm)", min_value=0.0, max_value=260.0,
                                 value=float(saved.get('height') or 0), step=0.5)
        waist = st.number_input("腰围 (cm，可选)", min_value=0.0, max_value=200.0,
                                value=float(saved.get('waistCircumference') or 0), step=0.5)
    with col2:
        gender = _select("性别", GENDER_LABELS, saved.get('gender'), "gender")
        weight = st.number_input("体重 (kg)", min_value=0.0, max_value=300.0,
                                 value=float(saved.get('weight') or 0), step=0.5)

    injury_history = st.text_input("伤病史 (可选)", value=saved.get('injuryHistory', ''))
    notes = st.text_area("特殊说明 (可选)", value=saved.get('notes', ''))

    st.markdown("### 🎯 训练偏好")
    col1, col2 = st.columns(2)
    with col1:
        goal = _select("目标", GOAL_LABELS, saved.get('goal'), "goal")
        level = _select("水平", LEVEL_LABELS, saved.get('level'), "level")
    with col2:
        duration = st.selectbox("单次时长", DURATION_OPTIONS, key="duration")
        preference = _select("训练场景", PREFERENCE_LABELS, saved.get('preference'), "preference")

    st.markdown("### 📅 训练时间")
    st.session_state.selected_days = _day_picker(st.session_state.selected_days)
    preferred_time = st.time_input("每天训练时间", value=DEFAULT_TIME).strftime("%H:%M")

    st.markdown("---")
    selected_days = st.session_state.selected_days
    if not selected_days:
        st.caption("请至少选择一天训练日")

    generate_clicked = st.button(
        "🚀 生成我的计划",
        type="primary",
        use_container_width=True,
        disabled=is_generate_disabled(st.session_state.plan_generation_in_progress, selected_days),
    )

    if not should_start_plan_generation(
        generate_clicked,
        st.session_state.plan_generation_in_progress,
        has_selected_days=bool(selected_days),
    ):
        return

    st.session_state.plan_generation_in_progress = True
    try:
        fitness_profile = {
            'age': age or None,
            'gender': gender,
            'height': height or None,
            'weight': weight or None,
            'waistCircumference': waist or None,
            'injuryHistory': injury_history.strip() or None,
            'notes': notes.strip() or None,
            'goal': goal,
            'level': level,
            'preference': preference,
        }
        profile = normalize_profile(identity, fitness_profile)

        try:
            request = build_plan_request(
                profile,
                selected_days,
                preferred_time,
                goal=goal,
                level=level,
                duration=duration,
                preference=preference,
            )
        except PlanRequestError as e:
            st.error(f"❌ {e}")
            return

        db.save_profile(identity['id'], fitness_profile)

        api_key = get_api_key(config)
        with st.spinner("Nofat 正在为你定制计划..."):
            if api_key:
                generator = PlanGenerator(api_key=api_key, config=config)
                plan = generator.generate_weekly_plan(request, selected_days, preferred_time)
            else:
                st.warning("⚠️ 未配置 API Key，使用离线计划模板。")
                plan = build_weekly_plan(
                    generate_fallback_plan(request, selected_days=selected_days),
                    selected_days,
                    preferred_time,
                    is_ai_mode=True,
                )

        get_plan_state().set_plan(plan)

        if is_fallback_plan(plan):
            st.warning("⚠️ AI 暂时不可用，已为你生成离线版计划。")
        else:
            st.success("✅ 计划生成成功！")
            st.balloons()

        nav_button("查看我的计划", "my_plan", icon="📋", type="primary", use_container_width=True)
    finally:
        st.session_state.plan_generation_in_progress = False
