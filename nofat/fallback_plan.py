"""
Deterministic offline plan used when AI generation fails or is unparsable.
"""

from nofat.prompt_builder import GOAL_LABELS, LEVEL_LABELS
from nofat.schedule_builder import (
    DEFAULT_REST,
    DEFAULT_SETS,
    DEFAULT_TRAINING_DAY_NAME,
    WEEKDAYS,
    rest_day,
)


DEFAULT_GOAL = "weight-loss"
DEFAULT_GOAL_INFO = {"name": "健身目标", "focus": "提升身体素质"}
OFFLINE_SUFFIX = "(离线版)"
STAGE_DURATION = "5-10分钟"

GOAL_FOCUS = {
    "weight-loss": "有氧为主，力量为辅",
    "muscle-gain": "力量训练为主",
    "endurance": "有氧耐力训练",
    "flexibility": "瑜伽拉伸为主",
}

# (stage name, movements) for warm-up / main set / cool-down.
# The main set runs for the requested session duration.
WORKOUT_STAGES = {
    "weight-loss": [
        ("热身训练", ["动态拉伸", "关节活动", "轻度有氧"]),
        ("主要训练", ["开合跳", "高抬腿", "跳绳", "山地爬行", "波比跳"]),
        ("放松整理", ["静态拉伸", "深呼吸", "肌肉放松"]),
    ],
    "muscle-gain": [
        ("热身训练", ["动态拉伸", "关节活动", "轻度有氧"]),
        ("主要训练", ["卧推", "深蹲", "硬拉", "划船", "肩推"]),
        ("放松整理", ["静态拉伸", "深呼吸", "肌肉放松"]),
    ],
    "endurance": [
        ("热身训练", ["动态拉伸", "关节活动", "轻度跑步"]),
        ("主要训练", ["有氧跑步", "交替冲刺", "负重行走", "阶梯训练"]),
        ("放松整理", ["静态拉伸", "深呼吸", "肌肉放松"]),
    ],
    "flexibility": [
        ("热身运动", ["关节转动", "轻度活动"]),
        ("主要训练", ["前屈", "侧伸", "猫式伸展", "婴儿式", "蛇式"]),
        ("放松整理", ["深呼吸", "冥想"]),
    ],
}

FALLBACK_TIPS = [
    "⚠️ AI 连接超时，这是为您生成的默认计划模板",
    "训练前请充分热身，避免受伤",
    "注意动作标准，质量优于数量",
    "配合合理饮食，效果更佳",
    "训练后进行充分放松和恢复",
]


def goal_info(goal):
    """Display name and focus for a goal code."""
    if goal in GOAL_LABELS:
        return {"name": GOAL_LABELS[goal], "focus": GOAL_FOCUS[goal]}
    return dict(DEFAULT_GOAL_INFO)


def build_stage_exercises(goal, duration):
    """Warm-up / main / cool-down entries for one training day."""
    stages = WORKOUT_STAGES.get(goal) or WORKOUT_STAGES[DEFAULT_GOAL]
    exercises = []
    for index, (name, movements) in enumerate(stages):
        stage_duration = duration if index == 1 else STAGE_DURATION
        exercises.append({
            "name": name,
            "sets": DEFAULT_SETS,
            "reps": stage_duration,
            "rest": DEFAULT_REST,
            "movements": list(movements),
        })
    return exercises


def _is_training_day(day, frequency, selected_days):
    if selected_days is not None:
        return day in selected_days
    return bool(frequency) and day in frequency


def generate_fallback_plan(request, selected_days=None):
    """
    Synthesize a full 7-day plan without calling the model.

    Training days are recovered from the request's frequency label by
    substring match unless the structured selection is passed in.

    Args:
        request: Plan request with goal, level, duration and frequency
        selected_days: Optional weekday labels; overrides frequency matching

    Returns:
        WorkoutPlan dictionary
    """
    goal = request.get("goal")
    duration = request.get("duration")
    frequency = request.get("frequency") or ""
    if selected_days is not None:
        selected_days = set(selected_days)

    workouts = []
    for day in WEEKDAYS:
        if _is_training_day(day, frequency, selected_days):
            workouts.append({
                "day": day,
                "name": DEFAULT_TRAINING_DAY_NAME,
                "duration": duration,
                "exercises": build_stage_exercises(goal, duration),
            })
        else:
            workouts.append(rest_day(day))

    goal_name = GOAL_LABELS.get(goal) or "定制"

    return {
        "name": f"{goal_name}计划 {OFFLINE_SUFFIX}",
        "level": LEVEL_LABELS.get(request.get("level")) or "定制",
        "goal": goal_info(goal),
        "frequency": request.get("frequency"),
        "duration": duration,
        "workouts": workouts,
        "tips": list(FALLBACK_TIPS),
    }


def is_fallback_plan(plan):
    return str((plan or {}).get("name", "")).endswith(OFFLINE_SUFFIX)
