import os
import tempfile
import unittest
from unittest.mock import MagicMock

from nofat.local_db import FitnessDB
from nofat.plan_api import RemotePlanError
from nofat.plan_store import PlanState, PlanStore
from nofat.programs import get_program


class PlanStoreTests(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.db = FitnessDB(os.path.join(self.tmpdir.name, "nofat.db"))
        self.db.init_schema()
        self.remote = MagicMock()

    def tearDown(self):
        self.db.close()
        self.tmpdir.cleanup()

    def test_save_writes_local_then_remote(self):
        store = PlanStore(self.db, "u1", remote=self.remote)
        stored = store.save({"name": "A"})

        self.assertEqual(self.db.get_current_plan("u1")["name"], "A")
        self.remote.save_plan.assert_called_once_with(stored)

    def test_remote_failure_keeps_local_copy(self):
        self.remote.save_plan.side_effect = RemotePlanError("offline")
        store = PlanStore(self.db, "u1", remote=self.remote)

        store.save({"name": "A"})

        self.assertEqual(self.db.get_current_plan("u1")["name"], "A")

    def test_load_prefers_remote_and_syncs_local(self):
        self.db.save_current_plan("u1", {"name": "local"})
        self.remote.latest_plan.return_value = {"name": "remote"}
        store = PlanStore(self.db, "u1", remote=self.remote)

        self.assertEqual(store.load()["name"], "remote")
        self.assertEqual(self.db.get_current_plan("u1")["name"], "remote")

    def test_load_falls_back_to_local(self):
        self.db.save_current_plan("u1", {"name": "local"})
        self.remote.latest_plan.side_effect = RemotePlanError("offline")
        store = PlanStore(self.db, "u1", remote=self.remote)

        self.assertEqual(store.load()["name"], "local")

    def test_load_without_remote(self):
        store = PlanStore(self.db, "u1")
        self.assertIsNone(store.load())

    def test_clear_deletes_local_and_newest_remote(self):
        self.db.save_current_plan("u1", {"name": "A"})
        self.remote.list_plans.return_value = [{"_id": "p2"}, {"_id": "p1"}]
        store = PlanStore(self.db, "u1", remote=self.remote)

        store.clear()

        self.assertIsNone(self.db.get_current_plan("u1"))
        self.remote.delete_plan.assert_called_once_with("p2")


class PlanStateTests(unittest.TestCase):
    def setUp(self):
        self.store = MagicMock()
        self.store.save.side_effect = lambda plan: dict(plan, id="plan_1")
        self.state = PlanState(self.store)

    def test_set_plan_persists_and_notifies(self):
        seen = []
        self.state.subscribe(seen.append)

        self.state.set_plan({"name": "A"})

        self.store.save.assert_called_once_with({"name": "A"})
        self.assertEqual(seen, [{"name": "A", "id": "plan_1"}])
        self.assertEqual(self.state.plan["id"], "plan_1")

    def test_unsubscribe_stops_notifications(self):
        seen = []
        unsubscribe = self.state.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        self.state.set_plan({"name": "A"})

        self.assertEqual(seen, [])

    def test_clear_notifies_none(self):
        seen = []
        self.state.subscribe(seen.append)
        self.state.set_plan({"name": "A"})

        self.state.clear()

        self.store.clear.assert_called_once_with()
        self.assertIsNone(self.state.plan)
        self.assertEqual(seen[-1], None)

    def test_load_notifies_with_stored_plan(self):
        self.store.load.return_value = {"name": "stored"}
        seen = []
        self.state.subscribe(seen.append)

        self.assertEqual(self.state.load(), {"name": "stored"})
        self.assertEqual(seen, [{"name": "stored"}])

    def test_activate_program_appends_to_current_plan(self):
        self.state.set_plan({"name": "我的计划", "workouts": [{"day": "周一", "name": "A"}]})

        plan = self.state.activate_program(get_program(4), ["周五"], "19:00")

        self.assertEqual(plan["name"], "我的计划")
        self.assertEqual([w["day"] for w in plan["workouts"]], ["周一", "周五"])
        self.assertEqual(plan["workouts"][1]["name"], "有氧跑步")


if __name__ == "__main__":
    unittest.main()
