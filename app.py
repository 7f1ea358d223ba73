#!/usr/bin/env python3
"""
Nofat Fitness - Streamlit Web Interface
Main entry point for the web application.
"""

import importlib
import os
import sys

import streamlit as st

# Ensure pages directory is in Python path
sys.path.insert(0, os.path.dirname(__file__))

# Only reload page modules in development mode (set DEV_MODE=1 in environment)
DEV_MODE = os.environ.get('DEV_MODE', '0') == '1'

PAGES = [
    ('home', 'pages.home', '🏠 首页'),
    ('generate', 'pages.generate_plan', '🤖 AI 定制计划'),
    ('programs', 'pages.programs', '📚 训练库'),
    ('my_plan', 'pages.my_plan', '📋 我的计划'),
    ('chat', 'pages.ai_chat', '💬 AI 教练'),
]

try:
    page_modules = {}
    for page_name, module_name, _ in PAGES:
        module = importlib.import_module(module_name)
        if DEV_MODE:
            module = importlib.reload(module)
        page_modules[page_name] = module
except ImportError as e:
    st.error(f"Critical error loading pages: {e}")
    st.code(f"Python path: {sys.path}")
    st.stop()

st.set_page_config(
    page_title="Nofat Fitness",
    page_icon="🔥",
    layout="wide",
    initial_sidebar_state="expanded"
)

st.markdown("""
    <style>
    .main-header {
        font-size: 2.25rem;
        font-weight: 700;
        margin-bottom: 0.5rem;
    }

    .sub-header {
        font-size: 1.05rem;
        opacity: 0.7;
        margin-bottom: 1.5rem;
    }

    div[data-testid="stSidebar"] button[kind="primary"] {
        background: linear-gradient(135deg, #A855F7 0%, #EC4899 100%) !important;
        border: none !important;
    }

    @media (max-width: 768px) {
        .main-header {
            font-size: 1.6rem;
        }

        .stButton button {
            width: 100% !important;
        }

        .stTextInput input,
        .stNumberInput input {
            font-size: 16px !important; /* Prevents zoom on iOS */
        }
    }
    </style>
""", unsafe_allow_html=True)

if 'current_page' not in st.session_state:
    st.session_state.current_page = 'home'
if 'light_mode' not in st.session_state:
    st.session_state.light_mode = False

with st.sidebar:
    st.markdown("# 🔥 Nofat")
    st.markdown("---")

    for page_name, _, label in PAGES:
        if st.button(label, use_container_width=True, key=f"nav_{page_name}",
                     type="primary" if st.session_state.current_page == page_name else "secondary"):
            st.session_state.current_page = page_name
            st.rerun()

    st.markdown("---")
    st.session_state.light_mode = st.toggle("浅色卡片", value=st.session_state.light_mode)

page = page_modules.get(st.session_state.current_page, page_modules['home'])
page.show()
