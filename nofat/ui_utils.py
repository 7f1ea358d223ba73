"""
UI utility functions shared by the Streamlit pages: app services held in
session state and rendering helpers built on the design system.
"""

import os

import streamlit as st
from streamlit.errors import StreamlitAPIException

from nofat.chat_assistant import ChatAssistant
from nofat.config import (
    DEFAULT_API_KEY_ENV,
    DEFAULT_AUTH_TOKEN_ENV,
    get_db_path,
    load_config,
    load_env,
)
from nofat.design_system import (
    get_chat_bubble_html,
    get_colors,
    get_day_card_html,
    get_empty_state_html,
    get_metric_card_html,
    get_program_card_html,
)
from nofat.llm_client import ChatCompletionClient
from nofat.local_db import FitnessDB
from nofat.plan_api import RemotePlanClient
from nofat.plan_store import PlanState, PlanStore


# ── Services ────────────────────────────────────────────────────────

def get_config():
    """config.yaml, loaded once per session (.env is read first)."""
    if 'app_config' not in st.session_state:
        load_env()
        st.session_state.app_config = load_config()
    return st.session_state.app_config


def get_secret(env_name):
    """Streamlit secrets first (deployed), then the environment (local)."""
    try:
        if env_name in st.secrets:
            return st.secrets[env_name]
    except (FileNotFoundError, StreamlitAPIException):
        # No secrets.toml at all
        pass
    return os.getenv(env_name)


def get_api_key(config):
    env_name = (config.get('llm', {}) or {}).get('api_key_env', DEFAULT_API_KEY_ENV)
    return get_secret(env_name)


def get_auth_token(config):
    env_name = (config.get('backend', {}) or {}).get('auth_token_env', DEFAULT_AUTH_TOKEN_ENV)
    return get_secret(env_name)


@st.cache_resource
def get_database(db_path):
    db = FitnessDB(db_path)
    db.init_schema()
    return db


def get_identity(config):
    """Signed-in identity; a single local user unless the session set one."""
    if st.session_state.get('user'):
        return st.session_state.user
    app = config.get('app', {}) or {}
    return {'id': app.get('user_id', 'local'), 'name': app.get('user_name')}


def get_plan_state():
    """PlanState for this session, loaded from the store on first use."""
    if 'plan_state' not in st.session_state:
        config = get_config()
        db = get_database(get_db_path(config))
        remote = RemotePlanClient.from_config(get_auth_token(config), config)
        store = PlanStore(db, get_identity(config)['id'], remote=remote)
        state = PlanState(store)
        state.load()
        st.session_state.plan_state = state
    return st.session_state.plan_state


def get_chat_assistant():
    """ChatAssistant with history in the local DB, or None without an API key."""
    config = get_config()
    api_key = get_api_key(config)
    if not api_key:
        return None
    db = get_database(get_db_path(config))
    client = ChatCompletionClient.from_config(api_key, config)
    return ChatAssistant(client, db=db, user_id=get_identity(config)['id'])


# ── Rendering ───────────────────────────────────────────────────────

def render_page_header(title, subtitle=None, title_icon=""):
    """
    Render standardized page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle text
        title_icon: Optional emoji before title
    """
    icon_text = f"{title_icon} " if title_icon else ""
    st.markdown(
        f'<div class="main-header">{icon_text}{title}</div>',
        unsafe_allow_html=True
    )
    if subtitle:
        st.markdown(
            f'<div class="sub-header">{subtitle}</div>',
            unsafe_allow_html=True
        )


def nav_button(label, page_name, icon="", **kwargs):
    """
    Navigation button that switches st.session_state.current_page.

    Returns:
        bool: True if button was clicked
    """
    button_text = f"{icon} {label}".strip() if icon else label
    if st.button(button_text, **kwargs):
        st.session_state.current_page = page_name
        st.rerun()
        return True
    return False


def metric_card(label, value, icon=""):
    st.markdown(get_metric_card_html(label, value, icon, get_colors()), unsafe_allow_html=True)


def empty_state(icon, title, description):
    st.markdown(get_empty_state_html(icon, title, description, get_colors()), unsafe_allow_html=True)


def day_card(day_plan, is_today=False):
    st.markdown(get_day_card_html(day_plan, is_today, get_colors()), unsafe_allow_html=True)


def program_card(program):
    st.markdown(get_program_card_html(program, get_colors()), unsafe_allow_html=True)


def chat_bubble(role, content):
    st.markdown(get_chat_bubble_html(role, content, get_colors()), unsafe_allow_html=True)
