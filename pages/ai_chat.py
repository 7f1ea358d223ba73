"""
AI Chat page - talk to Nofat about training, diet and recovery
"""

import streamlit as st

from nofat.ui_utils import chat_bubble, empty_state, get_chat_assistant, get_plan_state, render_page_header


HISTORY_LIMIT = 50


def build_user_context(plan):
    """Level and goal of the current plan, or None without a plan."""
    if not plan:
        return None
    goal = plan.get('goal')
    return {
        'level': plan.get('level'),
        'goal': goal.get('name') if isinstance(goal, dict) else goal,
    }


def show():
    """Render the chat page"""
    render_page_header("AI 教练", "有问题就问 Nofat", "💬")

    assistant = get_chat_assistant()
    if assistant is None:
        empty_state("🔑", "未配置 API Key", "在 .env 或 Streamlit secrets 中设置 OPENROUTER_API_KEY 后即可聊天。")
        return

    history = assistant.history(limit=HISTORY_LIMIT)
    if not history:
        chat_bubble("assistant", "嗨，我是 Nofat 👋 训练、饮食、恢复的问题都可以问我！")
    for message in history:
        chat_bubble(message['role'], message['content'])
        if message.get('imageUrl'):
            st.image(message['imageUrl'], width=200)

    with st.expander("📷 附带图片"):
        image_url = st.text_input("图片链接", key="chat_image_url").strip() or None

    question = st.chat_input("问点什么...")
    if question:
        context = build_user_context(get_plan_state().plan)
        chat_bubble("user", question)
        with st.spinner("思考中..."):
            chunks = assistant.stream_question(question, user_context=context, image_url=image_url)
            st.write_stream(chunks)
        st.rerun()

    if history and st.button("🧹 清空聊天记录"):
        assistant.clear_history()
        st.rerun()
