"""
Profile normalization and pre-flight validation for plan requests.
"""

VALID_GENDERS = ("male", "female")
REQUIRED_CHOICES = ("goal", "level", "duration", "preference")


class PlanRequestError(ValueError):
    """Raised when a plan request is rejected before any network call."""


def normalize_profile(identity, fitness_profile):
    """
    Merge the signed-in identity with the stored fitness profile.

    Name and avatar come from the identity when it has them, body metrics
    always come from the fitness profile. The identity id wins when both
    records carry one.

    Args:
        identity: Authenticated user record (id, name, avatar) or None
        fitness_profile: Stored fitness profile (age, height, weight, ...) or None

    Returns:
        New profile dictionary; inputs are not modified
    """
    profile = dict(fitness_profile or {})
    if not identity:
        return profile

    profile["name"] = identity.get("name") or profile.get("name") or "用户"

    avatar = identity.get("avatar") or profile.get("avatar")
    if avatar:
        profile["avatar"] = avatar

    user_id = identity.get("id") or profile.get("id")
    if user_id:
        profile["id"] = user_id

    return profile


def _is_positive_number(value):
    if isinstance(value, bool):
        return False
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def validate_profile(profile):
    """Reject a profile that is missing any body metric the prompt needs."""
    profile = profile or {}
    missing = [
        field for field in ("age", "height", "weight")
        if not _is_positive_number(profile.get(field))
    ]
    if profile.get("gender") not in VALID_GENDERS:
        missing.append("gender")

    if missing:
        raise PlanRequestError(
            "缺少必要的个人信息：年龄、性别、身高、体重 (missing: "
            + ", ".join(missing) + ")"
        )


def validate_plan_request(request):
    """
    Validate a full plan request before it is turned into a prompt.

    Raises:
        PlanRequestError: when body metrics or plan choices are missing
    """
    validate_profile(request)

    missing = [key for key in REQUIRED_CHOICES if not request.get(key)]
    if missing:
        raise PlanRequestError(f"计划选项不完整: {', '.join(missing)}")

    if not request.get("frequency"):
        raise PlanRequestError("请至少选择一天训练日")
