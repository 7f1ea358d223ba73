import unittest
from unittest.mock import MagicMock

import requests

from nofat.llm_client import ChatCompletionClient, LLMRequestError


MESSAGES = [{"role": "system", "content": "json only"}, {"role": "user", "content": "hi"}]


def _response(body=None, status_error=None):
    response = MagicMock()
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    response.json.return_value = body
    return response


class ChatCompletionClientTests(unittest.TestCase):
    def setUp(self):
        self.session = MagicMock()
        self.client = ChatCompletionClient(
            api_key="sk-test",
            api_url="https://llm.example/v1/chat/completions",
            model="test-model",
            max_tokens=4000,
            timeout=30,
            app_title="Nofat Fitness",
            session=self.session,
        )

    def test_returns_first_choice_content(self):
        self.session.post.return_value = _response(
            {"choices": [{"message": {"content": "{\"name\": \"x\"}"}}]}
        )
        self.assertEqual(self.client.complete(MESSAGES), "{\"name\": \"x\"}")

    def test_posts_openai_compatible_body_with_bearer_auth(self):
        self.session.post.return_value = _response({"choices": [{"message": {"content": "ok"}}]})

        self.client.complete(MESSAGES, max_tokens=800)

        args, kwargs = self.session.post.call_args
        self.assertEqual(args[0], "https://llm.example/v1/chat/completions")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer sk-test")
        self.assertEqual(kwargs["headers"]["X-Title"], "Nofat Fitness")
        self.assertNotIn("HTTP-Referer", kwargs["headers"])
        self.assertEqual(kwargs["timeout"], 30)
        self.assertEqual(
            kwargs["json"],
            {"model": "test-model", "messages": MESSAGES, "temperature": 0.7, "max_tokens": 800},
        )

    def test_omits_max_tokens_when_unset(self):
        client = ChatCompletionClient(api_key="k", session=self.session)
        payload = client.build_payload(MESSAGES)
        self.assertNotIn("max_tokens", payload)
        self.assertEqual(client.timeout, 60)

    def test_non_2xx_raises(self):
        self.session.post.return_value = _response(status_error=requests.HTTPError("500 Server Error"))
        with self.assertRaises(LLMRequestError):
            self.client.complete(MESSAGES)

    def test_network_error_raises(self):
        self.session.post.side_effect = requests.ConnectionError("down")
        with self.assertRaises(LLMRequestError):
            self.client.complete(MESSAGES)

    def test_timeout_raises(self):
        self.session.post.side_effect = requests.Timeout("slow")
        with self.assertRaises(LLMRequestError):
            self.client.complete(MESSAGES)

    def test_missing_content_path_raises(self):
        for body in ({}, {"choices": []}, {"choices": [{"message": {}}]}, {"choices": [{"message": {"content": "  "}}]}):
            self.session.post.return_value = _response(body)
            with self.assertRaises(LLMRequestError):
                self.client.complete(MESSAGES)

    def test_non_json_body_raises(self):
        response = _response()
        response.json.side_effect = ValueError("Expecting value")
        self.session.post.return_value = response
        with self.assertRaises(LLMRequestError):
            self.client.complete(MESSAGES)

    def test_content_parts_are_joined(self):
        self.session.post.return_value = _response(
            {"choices": [{"message": {"content": [{"type": "text", "text": "a"}, {"type": "text", "text": "b"}]}}]}
        )
        self.assertEqual(self.client.complete(MESSAGES), "ab")

    def test_content_parts_with_null_text_are_skipped(self):
        self.session.post.return_value = _response(
            {"choices": [{"message": {"content": [{"type": "text", "text": None}, {"type": "text", "text": "ok"}]}}]}
        )
        self.assertEqual(self.client.complete(MESSAGES), "ok")

    def test_content_parts_without_text_raise(self):
        self.session.post.return_value = _response(
            {"choices": [{"message": {"content": [{"type": "text", "text": None}]}}]}
        )
        with self.assertRaises(LLMRequestError):
            self.client.complete(MESSAGES)

    def test_from_config_reads_llm_section(self):
        client = ChatCompletionClient.from_config(
            "k",
            {"llm": {"model": "m", "temperature": 0.2, "max_tokens": 100, "timeout": 9}},
        )
        self.assertEqual(client.model, "m")
        self.assertEqual(client.temperature, 0.2)
        self.assertEqual(client.max_tokens, 100)
        self.assertEqual(client.timeout, 9)


if __name__ == "__main__":
    unittest.main()
