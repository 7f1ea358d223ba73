"""
Built-in workout programs and their activation into the current plan.
"""

import copy

from nofat.profile import PlanRequestError
from nofat.schedule_builder import build_weekly_workouts, validate_schedule


CATEGORY_LABELS = {
    "all": "全部",
    "cardio": "有氧",
    "strength": "力量",
    "yoga": "瑜伽",
}

DEFAULT_PLAN_NAMES = ("", "AI 定制计划")


PRESET_PROGRAMS = [
    {
        "id": 1,
        "title": "全身燃脂训练",
        "category": "cardio",
        "level": "中级",
        "duration": "30分钟",
        "calories": "350 kcal",
        "exercises": 12,
        "details": [
            {"name": "热身", "duration": "5分钟", "description": "动态拉伸，如高抬腿、开合跳"},
            {"name": "波比跳", "sets": "3组", "reps": "15次", "rest": "60秒"},
            {"name": "跳绳", "sets": "5组", "reps": "1分钟", "rest": "30秒"},
            {"name": "深蹲跳", "sets": "3组", "reps": "20次", "rest": "60秒"},
            {"name": "登山跑", "sets": "3组", "reps": "45秒", "rest": "45秒"},
            {"name": "平板支撑", "sets": "3组", "reps": "1分钟", "rest": "30秒"},
            {"name": "放松拉伸", "duration": "5分钟", "description": "静态拉伸主要肌群"},
        ],
    },
    {
        "id": 2,
        "title": "瑜伽放松",
        "category": "yoga",
        "level": "初级",
        "duration": "25分钟",
        "calories": "120 kcal",
        "exercises": 8,
        "details": [
            {"name": "呼吸冥想", "duration": "3分钟", "description": "调整呼吸，进入状态"},
            {"name": "猫牛式", "sets": "2组", "reps": "10次呼吸", "rest": "30秒"},
            {"name": "下犬式", "sets": "3组", "reps": "保持30秒", "rest": "30秒"},
            {"name": "战士二式", "sets": "2组", "reps": "每侧保持30秒", "rest": "30秒"},
            {"name": "三角式", "sets": "2组", "reps": "每侧保持30秒", "rest": "30秒"},
            {"name": "婴儿式", "duration": "2分钟", "description": "放松背部和臀部"},
            {"name": "摊尸式", "duration": "5分钟", "description": "完全放松"},
        ],
    },
    {
        "id": 3,
        "title": "力量增肌",
        "category": "strength",
        "level": "高级",
        "duration": "45分钟",
        "calories": "400 kcal",
        "exercises": 15,
        "details": [
            {"name": "杠铃深蹲", "sets": "4组", "reps": "8-12次", "rest": "90秒"},
            {"name": "卧推", "sets": "4组", "reps": "8-12次", "rest": "90秒"},
            {"name": "硬拉", "sets": "3组", "reps": "6-8次", "rest": "120秒"},
            {"name": "引体向上", "sets": "3组", "reps": "至力竭", "rest": "90秒"},
            {"name": "哑铃推举", "sets": "3组", "reps": "10-15次", "rest": "60秒"},
            {"name": "腹肌轮", "sets": "3组", "reps": "15-20次", "rest": "60秒"},
        ],
    },
    {
        "id": 4,
        "title": "有氧跑步",
        "category": "cardio",
        "level": "中级",
        "duration": "20分钟",
        "calories": "250 kcal",
        "exercises": 6,
        "details": [
            {"name": "慢跑热身", "duration": "5分钟", "description": "心率提升至120-130 bpm"},
            {"name": "匀速跑", "duration": "10分钟", "description": "保持在最大心率的60-70%"},
            {"name": "冲刺", "sets": "3组", "reps": "30秒", "rest": "60秒慢走"},
            {"name": "慢走冷却", "duration": "5分钟", "description": "心率逐渐恢复"},
        ],
    },
]


def filter_programs(category="all"):
    """Programs in one category; "all" (or nothing) returns every program."""
    if not category or category == "all":
        return list(PRESET_PROGRAMS)
    return [program for program in PRESET_PROGRAMS if program["category"] == category]


def get_program(program_id):
    for program in PRESET_PROGRAMS:
        if program["id"] == program_id:
            return program
    return None


def new_base_plan(program):
    """Empty plan that a first activated program is appended to."""
    return {
        "name": "我的健身计划",
        "level": program.get("level"),
        "goal": {"name": "综合训练"},
        "duration": "多变",
        "frequency": "自定义",
        "workouts": [],
        "tips": [],
    }


def merge_into_plan(current_plan, program, selected_days, preferred_time):
    """
    Append a program's days to the current plan (or a new base plan).

    Existing workouts are kept; the program's days go after them. A plan with
    no name or the default AI name takes the program title.

    Raises:
        PlanRequestError: if no day is selected or the time is malformed
    """
    if not program:
        raise PlanRequestError("未选择训练计划")
    validate_schedule(selected_days, preferred_time)

    new_days = build_weekly_workouts(program, selected_days, preferred_time, is_ai_mode=False)

    plan = copy.deepcopy(current_plan) if current_plan else new_base_plan(program)
    plan["workouts"] = list(plan.get("workouts") or []) + new_days

    if (plan.get("name") or "") in DEFAULT_PLAN_NAMES:
        plan["name"] = program["title"]

    return plan
