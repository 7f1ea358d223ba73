"""
Current-plan persistence (local SQLite plus the optional backend) and the
observable plan state that pages subscribe to.
"""

from nofat.plan_api import RemotePlanError
from nofat.programs import merge_into_plan


class PlanStore:
    """One current-plan slot per user, mirrored to the backend when configured."""

    def __init__(self, db, user_id, remote=None):
        self.db = db
        self.user_id = user_id
        self.remote = remote

    def save(self, plan):
        """Replace the current plan locally, then push it to the backend."""
        stored = self.db.save_current_plan(self.user_id, plan)

        if self.remote is not None:
            try:
                self.remote.save_plan(stored)
                print("✓ Plan synced to backend")
            except RemotePlanError as e:
                print(f"⚠ Plan saved locally only: {e}")

        return stored

    def load(self):
        """Newest backend plan if available (cached locally), else the local one."""
        if self.remote is not None:
            try:
                plan = self.remote.latest_plan()
            except RemotePlanError as e:
                print(f"⚠ Could not load plan from backend: {e}")
                plan = None
            if plan:
                return self.db.save_current_plan(self.user_id, plan)

        return self.db.get_current_plan(self.user_id)

    def clear(self):
        """Delete the local plan and the newest backend plan."""
        self.db.clear_current_plan(self.user_id)

        if self.remote is None:
            return
        try:
            plans = self.remote.list_plans()
            if plans and plans[0].get("_id"):
                self.remote.delete_plan(plans[0]["_id"])
        except RemotePlanError as e:
            print(f"⚠ Could not delete plan on backend: {e}")


class PlanState:
    """Holds the current plan and notifies subscribers whenever it changes."""

    def __init__(self, store):
        self.store = store
        self.plan = None
        self._subscribers = []

    def subscribe(self, callback):
        """Register callback(plan); returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def notify(self):
        for callback in list(self._subscribers):
            callback(self.plan)

    def load(self):
        self.plan = self.store.load()
        self.notify()
        return self.plan

    def set_plan(self, plan):
        self.plan = self.store.save(plan)
        self.notify()
        return self.plan

    def clear(self):
        self.store.clear()
        self.plan = None
        self.notify()

    def activate_program(self, program, selected_days, preferred_time):
        """Append a preset program to the current plan and persist it."""
        merged = merge_into_plan(self.plan, program, selected_days, preferred_time)
        return self.set_plan(merged)
