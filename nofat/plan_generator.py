"""
AI-powered weekly plan generation with an offline fallback.
"""

from nofat.fallback_plan import generate_fallback_plan
from nofat.llm_client import ChatCompletionClient, LLMRequestError
from nofat.plan_parser import parse_plan_response
from nofat.plan_validator import validate_plan
from nofat.profile import validate_plan_request
from nofat.prompt_builder import build_plan_messages
from nofat.schedule_builder import build_weekly_plan, format_frequency, sort_days, validate_schedule


def build_plan_request(profile, selected_days, preferred_time, **choices):
    """
    Combine the normalized profile, schedule and form choices into a request.

    Args:
        profile: Output of normalize_profile
        selected_days: Weekday labels in any order
        preferred_time: "HH:MM"
        **choices: goal, level, duration, preference and optionally
            injuryHistory / notes

    Returns:
        Validated plan request dictionary

    Raises:
        PlanRequestError: on missing metrics, choices or days
    """
    validate_schedule(selected_days, preferred_time)

    request = dict(profile or {})
    for key, value in choices.items():
        if value is not None:
            request[key] = value
    request["frequency"] = format_frequency(selected_days, preferred_time)

    validate_plan_request(request)
    return request


class PlanGenerator:
    """Generates weekly workout plans through an OpenAI-compatible model."""

    def __init__(self, api_key, config, model=None, max_tokens=None, timeout=None, client=None):
        """
        Initialize the plan generator.

        Args:
            api_key: LLM provider API key
            config: Full configuration dictionary
            model: Model override (defaults to config value)
            max_tokens: Completion limit override (defaults to config value)
            timeout: Request timeout override in seconds (defaults to config value)
            client: Pre-built ChatCompletionClient (tests inject a mock)
        """
        self.config = config or {}
        self.client = client or ChatCompletionClient.from_config(api_key, self.config)
        if model:
            self.client.model = model
        if max_tokens:
            self.client.max_tokens = max_tokens
        if timeout:
            self.client.timeout = timeout
        self.last_result = None
        self.last_error = None

    def _request_plan_text(self, request):
        messages = build_plan_messages(request)
        return self.client.complete(messages)

    def generate_plan(self, request, selected_days=None):
        """
        Generate a plan for a validated request.

        Transport and parse failures never reach the caller: they are logged
        and replaced by the offline fallback plan.

        Args:
            request: Plan request (see build_plan_request)
            selected_days: Optional structured selection for the fallback

        Returns:
            WorkoutPlan dictionary (model plan or fallback plan)

        Raises:
            PlanRequestError: if the request fails pre-flight validation
        """
        validate_plan_request(request)
        if selected_days is not None:
            selected_days = sort_days(selected_days)

        print("\n🤖 Generating your personalized workout plan with AI...")

        self.last_result = None
        self.last_error = None

        try:
            content = self._request_plan_text(request)
        except LLMRequestError as e:
            print(f"⚠ AI request failed ({e}), using offline plan.")
            self.last_error = str(e)
            return generate_fallback_plan(request, selected_days=selected_days)

        result = parse_plan_response(content, request, selected_days=selected_days)
        self.last_result = result

        if not result.is_valid:
            self.last_error = result.error
            print(f"⚠ Could not parse AI plan ({result.status}: {result.error}), using offline plan.")
            return result.plan

        validation = validate_plan(result.plan)
        if validation["violations"]:
            print(f"⚠ {validation['summary']}")

        print("✓ Workout plan generated successfully!\n")
        return result.plan

    def generate_weekly_plan(self, request, selected_days, preferred_time):
        """
        Generate a plan and expand it to the full 7-day week.

        The schedule is checked before any network call.
        """
        validate_schedule(selected_days, preferred_time)
        plan = self.generate_plan(request, selected_days=selected_days)
        return build_weekly_plan(plan, selected_days, preferred_time, is_ai_mode=True)
