"""
"Nofat" chat assistant: persona Q&A, image questions and short advice lines.
"""

import re

from nofat.llm_client import LLMRequestError


CHAT_MAX_TOKENS = 800
ADVICE_MAX_TOKENS = 200
STREAM_CHUNK_SIZE = 5

CHAT_FALLBACK_REPLY = "抱歉，Nofat 暂时有点累，请稍后再试 😴"
ADVICE_FALLBACK = "坚持就是胜利！保持训练节奏，你正在变得更强！💪"
IMAGE_DEFAULT_QUESTION = "请分析这张图片。"

PERSONA_PROMPT = """你叫 "Nofat"，是用户的健身AI朋友。

【回复规则】
1. 使用 Emoji (🎯, 🔍, 🍎, 🏃‍♂️, 💪, ⚠️) 作为列表头，如需分点请用 1️⃣, 2️⃣。
2. 严禁使用 Markdown 的星号 (*, **) 进行加粗或列表，回答中不要出现 "*" 符号。
3. 回答要简明扼要，不要太啰嗦，除非用户追问。
4. 语气轻松，像朋友一样交流，不要显示"Gemini"或"机器人"身份。"""

_BOLD_RE = re.compile(r"\*\*")
_STAR_RE = re.compile(r"\*")
_HEADING_RE = re.compile(r"^#+\s", re.MULTILINE)
_BACKTICK_RE = re.compile(r"`")


def sanitize_reply(text):
    """Strip Markdown emphasis, heading markers and backticks from a reply."""
    text = _BOLD_RE.sub("", text or "")
    text = _STAR_RE.sub("", text)
    text = _HEADING_RE.sub("", text)
    return _BACKTICK_RE.sub("", text)


def build_system_prompt(user_context=None):
    prompt = PERSONA_PROMPT
    if user_context:
        prompt += f"\n【用户数据】等级:{user_context.get('level')} | 目标:{user_context.get('goal')}"
    return prompt


def build_user_message(question, image_url=None):
    """User turn; with an image the content becomes a text + image_url part list."""
    if image_url:
        return {
            "role": "user",
            "content": [
                {"type": "text", "text": question or IMAGE_DEFAULT_QUESTION},
                {"type": "image_url", "image_url": {"url": image_url}},
            ],
        }
    return {"role": "user", "content": question}


def build_advice_prompt(user_status):
    status = user_status or {}
    return (
        f"基于用户数据：本周训练{status.get('weeklyWorkouts') or 0}次，"
        f"时长{status.get('weeklyMinutes') or 0}分钟，"
        f"消耗{status.get('weeklyCalories') or 0}kcal。"
        f"体重{status.get('weight') or 0}kg，目标{status.get('goal') or '健康'}。\n"
        "请用一句话给出鼓励建议（带Emoji）。"
    )


class ChatAssistant:
    """Question answering on top of ChatCompletionClient with optional history."""

    def __init__(self, client, db=None, user_id=None):
        self.client = client
        self.db = db
        self.user_id = user_id

    def _can_save(self):
        return self.db is not None and self.user_id is not None

    def ask_question(self, question, user_context=None, image_url=None, save=True):
        """
        Ask Nofat a question.

        Args:
            question: User text (may be empty when an image is attached)
            user_context: Optional dict with level / goal
            image_url: Optional image URL or data URL
            save: Record both turns in chat history (only when the model replies)

        Returns:
            Sanitized reply text; the fallback reply if the model call fails
        """
        messages = [
            {"role": "system", "content": build_system_prompt(user_context)},
            build_user_message(question, image_url),
        ]

        try:
            reply = sanitize_reply(self.client.complete(messages, max_tokens=CHAT_MAX_TOKENS))
        except LLMRequestError as e:
            print(f"⚠ Chat request failed: {e}")
            return CHAT_FALLBACK_REPLY

        if save and self._can_save():
            self.db.add_chat_message(self.user_id, "user", question or "", image_url=image_url)
            self.db.add_chat_message(self.user_id, "assistant", reply)
        return reply

    def stream_question(self, question, user_context=None, image_url=None, save=True,
                        chunk_size=STREAM_CHUNK_SIZE):
        """Yield the reply in fixed-size chunks for incremental display."""
        reply = self.ask_question(question, user_context=user_context, image_url=image_url, save=save)
        for start in range(0, len(reply), chunk_size):
            yield reply[start:start + chunk_size]

    def get_fitness_advice(self, user_status):
        """One encouraging sentence based on this week's numbers."""
        messages = [{"role": "user", "content": build_advice_prompt(user_status)}]
        try:
            return self.client.complete(messages, max_tokens=ADVICE_MAX_TOKENS)
        except LLMRequestError:
            return ADVICE_FALLBACK

    def history(self, limit=None):
        if not self._can_save():
            return []
        return self.db.get_chat_history(self.user_id, limit=limit)

    def clear_history(self):
        if self._can_save():
            self.db.clear_chat_history(self.user_id)
