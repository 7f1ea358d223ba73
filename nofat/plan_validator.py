"""
Validation utilities for generated workout plans.

Used for reporting only: accepted model output is never rejected here.
"""

from nofat.schedule_builder import WEEKDAYS, is_rest_day


REQUIRED_PLAN_FIELDS = ["name", "goal", "level", "frequency", "duration", "workouts", "tips"]
REQUIRED_DAY_FIELDS = ["day", "name", "duration", "exercises"]


def _add_violation(violations, code, message, day=None, exercise=None):
    violations.append(
        {
            "code": code,
            "message": message,
            "day": day or "",
            "exercise": exercise or "",
        }
    )


def validate_plan(plan):
    """
    Check a WorkoutPlan for weekday coverage and rest-day consistency.

    Returns:
        dict with keys: violations, summary
    """
    plan = plan or {}
    violations = []

    for field in REQUIRED_PLAN_FIELDS:
        if field not in plan:
            _add_violation(violations, "missing_field", f"Plan is missing '{field}'.")

    workouts = plan.get("workouts") if isinstance(plan.get("workouts"), list) else []
    seen = {}

    for entry in workouts:
        if not isinstance(entry, dict):
            _add_violation(violations, "missing_field", "Workout entry is not an object.")
            continue

        day = entry.get("day")
        for field in REQUIRED_DAY_FIELDS:
            if field not in entry:
                _add_violation(
                    violations,
                    "missing_field",
                    f"Day entry is missing '{field}'.",
                    day=day,
                )

        if day not in WEEKDAYS:
            _add_violation(violations, "unknown_day", f"Unknown weekday label: {day!r}.", day=day)
            continue

        seen[day] = seen.get(day, 0) + 1
        exercises = entry.get("exercises") or []
        if not isinstance(exercises, list):
            _add_violation(
                violations,
                "invalid_field",
                f"'exercises' should be a list, got {type(exercises).__name__}.",
                day=day,
            )
            continue
        if is_rest_day(entry) and exercises:
            _add_violation(
                violations,
                "rest_day_has_exercises",
                f"Rest day lists {len(exercises)} exercise(s).",
                day=day,
            )
        elif not is_rest_day(entry) and not exercises:
            _add_violation(
                violations,
                "training_day_empty",
                "Training day has no exercises.",
                day=day,
            )

    for day in WEEKDAYS:
        count = seen.get(day, 0)
        if count == 0:
            _add_violation(violations, "missing_day", f"{day} is not covered.", day=day)
        elif count > 1:
            _add_violation(violations, "duplicate_day", f"{day} appears {count} times.", day=day)

    summary = (
        f"Validation: {len(workouts)} day(s) checked, {len(violations)} violation(s)."
        if workouts
        else "Validation: no workouts in plan."
    )

    return {
        "violations": violations,
        "summary": summary,
    }
