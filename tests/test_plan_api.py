import unittest
from unittest.mock import MagicMock

import requests

from nofat.plan_api import RemotePlanClient, RemotePlanError


PLAN = {
    "name": "七日燃脂",
    "goal": {"name": "减脂塑形", "focus": "有氧为主"},
    "level": "初级",
    "frequency": "周一 周三 07:00",
    "duration": "30分钟",
    "workouts": [],
    "tips": [],
}


def _response(body=None, content=b"{}"):
    response = MagicMock()
    response.content = content
    response.json.return_value = body
    return response


class RemotePlanClientTests(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.client = RemotePlanClient("https://api.example/api/", "tok", timeout=5, session=self.session)

    def test_save_posts_plan_document(self):
        self.session.request.return_value = _response({"_id": "p1"})

        self.client.save_plan(PLAN)

        args, kwargs = self.session.request.call_args
        self.assertEqual(args, ("POST", "https://api.example/api/plans"))
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer tok")
        self.assertEqual(kwargs["timeout"], 5)
        self.assertEqual(
            kwargs["json"],
            {
                "name": "七日燃脂",
                "goal": "减脂塑形",
                "level": "初级",
                "frequency": "周一 周三 07:00",
                "duration": "30分钟",
                "planData": PLAN,
            },
        )

    def test_goal_falls_back_to_plan_name(self):
        payload = RemotePlanClient.build_plan_payload(dict(PLAN, goal=None))
        self.assertEqual(payload["goal"], "七日燃脂")

    def test_latest_plan_returns_newest_plan_data(self):
        self.session.request.return_value = _response(
            {"plans": [{"_id": "p2", "planData": {"name": "新"}}, {"_id": "p1", "planData": {"name": "旧"}}]}
        )
        self.assertEqual(self.client.latest_plan(), {"name": "新", "remoteId": "p2"})

    def test_latest_plan_none_when_empty(self):
        self.session.request.return_value = _response({"plans": []})
        self.assertIsNone(self.client.latest_plan())

    def test_delete_plan(self):
        self.session.request.return_value = _response(content=b"")
        self.client.delete_plan("p1")
        args, _ = self.session.request.call_args
        self.assertEqual(args, ("DELETE", "https://api.example/api/plans/p1"))

    def test_http_errors_become_remote_plan_error(self):
        response = _response()
        response.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
        self.session.request.return_value = response
        with self.assertRaises(RemotePlanError):
            self.client.list_plans()

    def test_from_config_disabled_without_url_or_token(self):
        config = {"backend": {"api_base_url": "https://api.example/api"}}
        self.assertIsNone(RemotePlanClient.from_config(None, config))
        self.assertIsNone(RemotePlanClient.from_config("tok", {"backend": {"api_base_url": ""}}))
        self.assertIsInstance(RemotePlanClient.from_config("tok", config), RemotePlanClient)


if __name__ == "__main__":
    unittest.main()
