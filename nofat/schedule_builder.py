"""
Weekly schedule expansion.

Turns a base plan (model output or a preset program template) plus the
user's selected weekdays into the DayPlan list that gets stored. AI mode is
always dense (one entry per weekday, rest days included); template mode is
sparse (selected days only) and is merged into an existing plan by the caller.
"""

import copy
import re

from nofat.profile import PlanRequestError


WEEKDAYS = ["周一", "周二", "周三", "周四", "周五", "周六", "周日"]

REST_DAY_NAME = "休息"
REST_DAY_DURATION = "0"
DEFAULT_SETS = "1组"
DEFAULT_REST = "无"
DEFAULT_TRAINING_DAY_NAME = "训练日"

TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def rest_day(day):
    """Rest-day placeholder for one weekday."""
    return {
        "day": day,
        "name": REST_DAY_NAME,
        "duration": REST_DAY_DURATION,
        "exercises": [],
    }


def is_rest_day(day_plan):
    return (day_plan or {}).get("name") == REST_DAY_NAME


def sort_days(days):
    """
    Return the selection in canonical Monday-first order without duplicates.

    Raises:
        PlanRequestError: if a label is not one of WEEKDAYS
    """
    days = list(days or [])
    unknown = [day for day in days if day not in WEEKDAYS]
    if unknown:
        raise PlanRequestError(f"未知的训练日: {', '.join(map(str, unknown))}")
    selected = set(days)
    return [day for day in WEEKDAYS if day in selected]


def toggle_day(selected_days, day):
    """Add or remove one weekday, keeping canonical order."""
    current = list(selected_days or [])
    if day in current:
        current = [d for d in current if d != day]
    else:
        current.append(day)
    return sort_days(current)


def validate_schedule(selected_days, preferred_time=None):
    """Reject an empty selection or a malformed time before anything is sent."""
    if not selected_days:
        raise PlanRequestError("请至少选择一天训练日")
    sort_days(selected_days)

    if preferred_time is not None and not TIME_RE.match(str(preferred_time)):
        raise PlanRequestError(f"训练时间格式应为 HH:MM: {preferred_time}")


def format_frequency(selected_days, preferred_time):
    """
    Render the request frequency label.

    The weekday labels appear verbatim; the fallback generator recovers the
    schedule from this string by substring match.
    """
    days = sort_days(selected_days)
    return f"每周 {len(days)} 天：[{'、'.join(days)}]，时间：{preferred_time}"


def _template_exercise(item):
    return {
        "name": item.get("name"),
        "sets": item.get("sets") or DEFAULT_SETS,
        "reps": item.get("reps") or item.get("duration"),
        "rest": item.get("rest") or DEFAULT_REST,
    }


def _exercise_list(entry):
    exercises = entry.get("exercises")
    if not isinstance(exercises, list):
        return []
    return [copy.deepcopy(item) for item in exercises if isinstance(item, dict)]


def _ai_training_day(base_plan, day, preferred_time):
    workouts = base_plan.get("workouts")
    workouts = [w for w in workouts if isinstance(w, dict)] if isinstance(workouts, list) else []

    for entry in workouts:
        if entry.get("day") == day:
            day_plan = copy.deepcopy(entry)
            day_plan["day"] = day
            day_plan["time"] = preferred_time
            day_plan["exercises"] = _exercise_list(entry)
            return day_plan

    # Model skipped this day: reuse the first day's exercises as a generic session.
    return {
        "day": day,
        "time": preferred_time,
        "name": base_plan.get("name") or DEFAULT_TRAINING_DAY_NAME,
        "duration": base_plan.get("duration"),
        "exercises": _exercise_list(workouts[0]) if workouts else [],
    }


def _template_training_day(template, day, preferred_time):
    return {
        "day": day,
        "time": preferred_time,
        "name": template.get("title"),
        "duration": template.get("duration"),
        "exercises": [_template_exercise(item) for item in template.get("details", [])],
    }


def build_weekly_workouts(base_plan, selected_days, preferred_time, is_ai_mode=False):
    """
    Expand a base plan into DayPlans in canonical weekday order.

    Args:
        base_plan: Parsed model plan (AI mode) or a program template with
            title/duration/details (template mode)
        selected_days: Weekday labels the user trains on
        preferred_time: "HH:MM" stamped on every training day
        is_ai_mode: Dense 7-day output with rest placeholders when True,
            selected days only when False

    Returns:
        List of DayPlan dictionaries
    """
    selected = set(sort_days(selected_days))
    base_plan = base_plan or {}
    workouts = []

    for day in WEEKDAYS:
        if day in selected:
            if is_ai_mode:
                workouts.append(_ai_training_day(base_plan, day, preferred_time))
            else:
                workouts.append(_template_training_day(base_plan, day, preferred_time))
        elif is_ai_mode:
            workouts.append(rest_day(day))

    return workouts


def build_weekly_plan(base_plan, selected_days, preferred_time, is_ai_mode=False):
    """Return a copy of base_plan with expanded workouts and a schedule label."""
    plan = dict(base_plan or {})
    plan["workouts"] = build_weekly_workouts(
        base_plan, selected_days, preferred_time, is_ai_mode=is_ai_mode
    )
    plan["frequency"] = f"{' '.join(sort_days(selected_days))} {preferred_time}"
    return plan
