"""
Design tokens and HTML snippets for the Streamlit pages.
Dark purple palette, rounded cards, mobile-first widths.
"""

import html

import streamlit as st


COLORS = {
    'accent': '#A855F7',
    'accent_secondary': '#EC4899',
    'background': '#0F172A',
    'surface': '#1E293B',
    'surface_muted': '#334155',
    'success': '#22C55E',
    'warning': '#F59E0B',
    'error': '#EF4444',
    'text_primary': '#F8FAFC',
    'text_secondary': '#94A3B8',
    'border': 'rgba(168, 85, 247, 0.25)',
}

# Light variant for users who switch the theme off
COLORS_LIGHT = {
    'accent': '#9333EA',
    'accent_secondary': '#DB2777',
    'background': '#F8FAFC',
    'surface': '#FFFFFF',
    'surface_muted': '#F1F5F9',
    'success': '#16A34A',
    'warning': '#D97706',
    'error': '#DC2626',
    'text_primary': '#0F172A',
    'text_secondary': '#64748B',
    'border': '#E2E8F0',
}

CATEGORY_EMOJI = {
    'cardio': '🏃',
    'strength': '🏋️',
    'yoga': '🧘',
}


def get_colors():
    """Current palette based on the light_mode session flag"""
    light_mode = st.session_state.get('light_mode', False)
    return COLORS_LIGHT if light_mode else COLORS


def get_metric_card_html(label, value, icon="", color_scheme=None):
    """Compact stat tile"""
    if color_scheme is None:
        color_scheme = get_colors()

    icon_html = f'<span style="font-size: 1.25rem;">{html.escape(str(icon))}</span>' if icon else ''
    return f"""
    <div style="
        background: {color_scheme['surface']};
        border: 1px solid {color_scheme['border']};
        padding: 0.9rem;
        border-radius: 14px;
    " class="metric-card">
        <div style="display: flex; align-items: center; gap: 0.5rem; margin-bottom: 0.35rem;">
            {icon_html}
            <div style="font-size: 0.75rem; color: {color_scheme['text_secondary']};">{html.escape(str(label))}</div>
        </div>
        <div style="font-size: 1.6rem; font-weight: 700; color: {color_scheme['text_primary']};">{html.escape(str(value))}</div>
    </div>
    """.strip()


def get_empty_state_html(icon, title, description, color_scheme=None):
    if color_scheme is None:
        color_scheme = get_colors()

    icon_block = ""
    if icon:
        icon_block = f'<div style="font-size: 3rem; margin-bottom: 1rem;">{icon}</div>'

    return f"""
    <div style="
        text-align: center;
        padding: 2.5rem 1.5rem;
        background: {color_scheme['surface']};
        border: 1px dashed {color_scheme['border']};
        border-radius: 16px;
        margin: 1.5rem 0;
    ">
        {icon_block}
        <div style="font-size: 1.2rem; font-weight: 600; margin-bottom: 0.5rem; color: {color_scheme['text_primary']};">{html.escape(str(title))}</div>
        <div style="color: {color_scheme['text_secondary']}; line-height: 1.5;">{html.escape(str(description))}</div>
    </div>
    """.strip()


def get_day_card_html(day_plan, is_today=False, color_scheme=None):
    """
    Card for one DayPlan in the weekly view.

    Rest days render muted with a moon; training days show time, session
    name, duration and exercise count.
    """
    if color_scheme is None:
        color_scheme = get_colors()

    is_rest = day_plan.get('name') == '休息'
    exercises = day_plan.get('exercises') or []

    border_color = color_scheme['accent'] if is_today else color_scheme['border']
    border_width = '2px' if is_today else '1px'
    card_class = "day-card today" if is_today else "day-card"
    if is_rest:
        card_class += " rest"

    safe_day = html.escape(str(day_plan.get('day', '')))
    safe_time = html.escape(str(day_plan.get('time') or ''))
    safe_name = html.escape(str(day_plan.get('name') or ''))

    if is_rest:
        emoji = '🌙'
        detail = '休息恢复'
    else:
        emoji = '💪'
        duration = html.escape(str(day_plan.get('duration') or ''))
        detail = f"{duration} · {len(exercises)} 个动作" if duration else f"{len(exercises)} 个动作"

    time_block = ""
    if safe_time and not is_rest:
        time_block = f'<div style="font-size: 0.7rem; color: {color_scheme["text_secondary"]};">⏰ {safe_time}</div>'

    background = color_scheme['surface_muted'] if is_rest else color_scheme['surface']

    return f"""<div class="{card_class}" style="
        background: {background};
        border: {border_width} solid {border_color};
        border-radius: 14px;
        padding: 0.75rem 0.5rem;
        text-align: center;
        min-height: 120px;
    ">
        <div style="
            font-size: 0.8rem;
            font-weight: 700;
            color: {color_scheme['text_secondary']};
            margin-bottom: 0.25rem;
        ">{safe_day}</div>
        {time_block}
        <div style="font-size: 1.8rem; margin: 0.4rem 0;">{emoji}</div>
        <div style="
            font-size: 0.85rem;
            font-weight: 600;
            color: {color_scheme['text_primary']};
            margin-bottom: 0.2rem;
        ">{safe_name}</div>
        <div style="font-size: 0.7rem; color: {color_scheme['text_secondary']};">{detail}</div>
    </div>""".strip()


def get_program_card_html(program, color_scheme=None):
    """Summary card for a preset program"""
    if color_scheme is None:
        color_scheme = get_colors()

    emoji = CATEGORY_EMOJI.get(program.get('category'), '🔥')
    stats = " · ".join(
        html.escape(str(program.get(key)))
        for key in ('level', 'duration', 'calories')
        if program.get(key)
    )

    return f"""
    <div style="
        background: linear-gradient(135deg, {color_scheme['surface']} 0%, {color_scheme['surface_muted']} 100%);
        border: 1px solid {color_scheme['border']};
        border-radius: 16px;
        padding: 1rem 1.1rem;
        margin-bottom: 0.5rem;
    " class="program-card">
        <div style="font-size: 1.1rem; font-weight: 700; color: {color_scheme['text_primary']};">{emoji} {html.escape(str(program.get('title', '')))}</div>
        <div style="font-size: 0.8rem; color: {color_scheme['text_secondary']}; margin-top: 0.3rem;">{stats}</div>
    </div>
    """.strip()


def get_chat_bubble_html(role, content, color_scheme=None):
    """Chat message bubble; user messages align right"""
    if color_scheme is None:
        color_scheme = get_colors()

    is_user = role == 'user'
    align = 'flex-end' if is_user else 'flex-start'
    background = color_scheme['accent'] if is_user else color_scheme['surface']
    text_color = '#FFFFFF' if is_user else color_scheme['text_primary']
    safe_content = html.escape(str(content or '')).replace('\n', '<br>')

    return f"""
    <div style="display: flex; justify-content: {align}; margin: 0.4rem 0;">
        <div class="chat-bubble {role}" style="
            max-width: 80%;
            background: {background};
            color: {text_color};
            padding: 0.6rem 0.9rem;
            border-radius: 14px;
            line-height: 1.5;
        ">{safe_content}</div>
    </div>
    """.strip()
