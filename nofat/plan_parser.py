"""
Recovery of structured plans from free-text model output.

Models are told to return bare JSON but regularly wrap it in Markdown fences
or add prose around it. Parsing is best effort: strip fences, take the
outermost brace span, and map known fields onto the plan shape. Anything that
does not deserialize goes to the offline fallback plan instead of raising.
"""

import json
import re

from nofat.fallback_plan import DEFAULT_GOAL_INFO, generate_fallback_plan
from nofat.prompt_builder import LEVEL_LABELS


FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)

DEFAULT_PLAN_NAME = "AI 定制计划"
DEFAULT_LEVEL = "定制"


class ParseResult:
    """Outcome of parsing model output: status plus the plan it produced."""

    VALID = "valid"
    MALFORMED = "malformed"
    NO_JSON_FOUND = "no_json_found"

    def __init__(self, status, plan=None, error=None):
        self.status = status
        self.plan = plan
        self.error = error

    @property
    def is_valid(self):
        return self.status == self.VALID

    def __repr__(self):
        return f"ParseResult(status={self.status!r}, error={self.error!r})"


def strip_code_fences(text):
    """Remove every ```json / ``` marker, wherever it appears."""
    return FENCE_RE.sub("", text or "").strip()


def extract_json_candidate(text):
    """Return the first '{' through the last '}' inclusive, or None."""
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return text[start:end + 1]


def _as_list(value):
    return list(value) if isinstance(value, list) else []


def _normalize_goal(goal):
    if isinstance(goal, dict) and goal:
        return goal
    if isinstance(goal, str) and goal.strip():
        return {"name": goal.strip(), "focus": DEFAULT_GOAL_INFO["focus"]}
    return dict(DEFAULT_GOAL_INFO)


def build_plan_from_response(parsed, request):
    """
    Map a deserialized model object onto the canonical plan shape.

    frequency and duration always come from the request; the model's echo of
    them is not trusted. Workouts are kept as returned, even if fewer than
    seven days.
    """
    workouts = _as_list(parsed.get("workouts"))
    tips = _as_list(parsed.get("nutritionTips")) + _as_list(parsed.get("tips"))

    return {
        "name": parsed.get("name") or DEFAULT_PLAN_NAME,
        "level": LEVEL_LABELS.get(request.get("level")) or parsed.get("level") or DEFAULT_LEVEL,
        "goal": _normalize_goal(parsed.get("goal")),
        "frequency": request.get("frequency"),
        "duration": request.get("duration"),
        "workouts": workouts,
        "tips": tips,
    }


def parse_plan_response(content, request, selected_days=None):
    """
    Parse raw model content into a ParseResult. Never raises.

    Args:
        content: Completion text from the model
        request: The plan request the prompt was built from
        selected_days: Optional structured selection handed to the fallback

    Returns:
        ParseResult whose plan is the mapped model plan when VALID and the
        fallback plan otherwise
    """
    cleaned = strip_code_fences(content)
    candidate = extract_json_candidate(cleaned)

    if candidate is None:
        return ParseResult(
            ParseResult.NO_JSON_FOUND,
            plan=generate_fallback_plan(request, selected_days=selected_days),
            error="no JSON object found in model output",
        )

    try:
        parsed = json.loads(candidate)
    except (ValueError, RecursionError) as exc:
        # RecursionError: nesting deeper than the decoder can follow
        return ParseResult(
            ParseResult.MALFORMED,
            plan=generate_fallback_plan(request, selected_days=selected_days),
            error=str(exc),
        )

    if not isinstance(parsed, dict):
        return ParseResult(
            ParseResult.MALFORMED,
            plan=generate_fallback_plan(request, selected_days=selected_days),
            error="model output is not a JSON object",
        )

    return ParseResult(ParseResult.VALID, plan=build_plan_from_response(parsed, request))


def parse_plan(content, request, selected_days=None):
    """Return a WorkoutPlan for the content, falling back when unparsable."""
    return parse_plan_response(content, request, selected_days=selected_days).plan
