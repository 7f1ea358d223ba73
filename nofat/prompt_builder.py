"""
Prompt construction for AI weekly plan generation.
"""

GOAL_LABELS = {
    "weight-loss": "减脂塑形",
    "muscle-gain": "增肌强壮",
    "endurance": "提升耐力",
    "flexibility": "柔韧灵活",
}

LEVEL_LABELS = {
    "beginner": "初级",
    "intermediate": "中级",
    "advanced": "高级",
}

PREFERENCE_LABELS = {
    "home": "在家 (无器械或小器械)",
    "gym": "健身房 (器械齐全)",
}

GENDER_LABELS = {
    "male": "男性",
    "female": "女性",
}

SYSTEM_PROMPT = "你是一个只输出 JSON 的 API。不要输出任何解释性文字。"


def calculate_bmi(height_cm, weight_kg):
    """Return BMI formatted to one decimal place, e.g. '22.9'."""
    height_m = float(height_cm) / 100
    bmi = float(weight_kg) / (height_m * height_m)
    return f"{bmi:.1f}"


def level_label(level):
    return LEVEL_LABELS.get(level) or level


def _format_personal_info(request):
    gender_text = GENDER_LABELS.get(request.get("gender"), "女性")
    bmi = calculate_bmi(request["height"], request["weight"])

    lines = [
        f"请为一名{gender_text}客户生成私人定制训练计划。",
        "【客户档案】",
        f"- 年龄：{request['age']}岁",
        f"- 身体数据：{request['height']}cm / {request['weight']}kg (BMI: {bmi})",
    ]
    if request.get("waistCircumference"):
        lines.append(f"- 腰围：{request['waistCircumference']}cm")
    if request.get("injuryHistory"):
        lines.append(f"- ⚠️ 伤病史：{request['injuryHistory']}")
    if request.get("notes"):
        lines.append(f"- 📝 特殊说明：{request['notes']}")
    return "\n".join(lines)


def build_plan_prompt(request):
    """
    Build the user prompt for weekly plan generation.

    The frequency string is echoed verbatim and the output schema is spelled
    out literally; the parser only has best-effort recovery for anything else.

    Args:
        request: Validated plan request (profile fields plus goal, level,
            duration, preference and frequency)

    Returns:
        Complete prompt string
    """
    goal = GOAL_LABELS.get(request.get("goal")) or request.get("goal")
    level = level_label(request.get("level"))
    preference = PREFERENCE_LABELS.get(request.get("preference")) or request.get("preference")
    duration = request.get("duration")
    frequency = request.get("frequency")

    personal_info = _format_personal_info(request)

    return f"""{personal_info}

【训练目标与限制】
- 核心目标：{goal}
- 训练水平：{level}
- 训练场地：{preference}
- 单次时长：{duration}
- 📅 时间安排：{frequency}
  (请严格按照上方指定的时间安排生成日程。只有列出的星期几安排训练，未列出的日子必须标记为"休息"，exercises 为空数组)

【输出要求】
请只输出一个纯 JSON 对象，不要使用 Markdown 代码块 (不要出现 ```json)，不要输出任何解释性文字。结构如下：
{{
  "name": "给计划起个响亮的名字",
  "goal": {{ "name": "目标名称", "focus": "一句话重点" }},
  "level": "{level}",
  "frequency": "{frequency}",
  "duration": "{duration}",
  "workouts": [
    {{
      "day": "周一",
      "name": "训练日标题 (休息日填'休息')",
      "duration": "{duration} (休息日填'0')",
      "exercises": [
        {{"name": "动作名称", "sets": "组数", "reps": "次数/时间", "rest": "休息时间"}}
      ]
    }}
  ],
  "nutritionTips": ["3条简短的饮食建议 (带Emoji)"],
  "tips": ["3条简短的恢复建议 (带Emoji)"]
}}
workouts 必须包含从"周一"到"周日"完整的7天数据，day 字段只能使用 周一、周二、周三、周四、周五、周六、周日。"""


def build_plan_messages(request):
    """Chat messages for the plan request: JSON-only system role plus the prompt."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_plan_prompt(request)},
    ]
