"""
REST client for the Nofat backend plan collection.
"""

import requests


DEFAULT_TIMEOUT = 15


class RemotePlanError(Exception):
    """Raised when the plan backend cannot be reached or rejects a call."""


class RemotePlanClient:
    """Thin wrapper over /plans on the Nofat backend (bearer auth)."""

    def __init__(self, base_url, token, timeout=DEFAULT_TIMEOUT, session=None):
        self.base_url = (base_url or "").rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, token, config):
        """Build a client from the backend section, or None if it is disabled."""
        backend = (config or {}).get("backend", {}) or {}
        base_url = backend.get("api_base_url")
        if not base_url or not token:
            return None
        return cls(base_url, token, timeout=backend.get("timeout", DEFAULT_TIMEOUT))

    def _headers(self):
        return {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.token}",
        }

    def _request(self, method, path, payload=None):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            raise RemotePlanError(f"{method} {path} failed: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise RemotePlanError(f"{method} {path} returned invalid JSON") from e

    @staticmethod
    def build_plan_payload(plan):
        """Map a WorkoutPlan onto the backend's plan document."""
        goal = plan.get("goal")
        goal_name = goal.get("name") if isinstance(goal, dict) else goal
        return {
            "name": plan.get("name"),
            "goal": goal_name or plan.get("name"),
            "level": plan.get("level"),
            "frequency": plan.get("frequency"),
            "duration": plan.get("duration"),
            "planData": plan,
        }

    def list_plans(self):
        """Return the user's saved plan documents, newest first."""
        data = self._request("GET", "/plans")
        return data.get("plans", []) if isinstance(data, dict) else []

    def latest_plan(self):
        """Return the newest saved WorkoutPlan, or None."""
        for doc in self.list_plans():
            plan = doc.get("planData")
            if isinstance(plan, dict):
                plan = dict(plan)
                if doc.get("_id"):
                    plan["remoteId"] = doc["_id"]
                return plan
        return None

    def save_plan(self, plan):
        """POST a plan; returns the backend's response body."""
        return self._request("POST", "/plans", self.build_plan_payload(plan))

    def delete_plan(self, plan_id):
        self._request("DELETE", f"/plans/{plan_id}")
