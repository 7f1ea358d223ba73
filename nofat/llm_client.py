"""
Client for OpenAI-compatible chat-completion endpoints (OpenRouter by default).
"""

import requests


DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "google/gemini-2.5-flash-lite"
DEFAULT_TIMEOUT = 60


class LLMRequestError(Exception):
    """Any failure to obtain completion text: HTTP status, transport, or envelope."""


class ChatCompletionClient:
    """Sends one chat-completion request per call. No retries."""

    def __init__(
        self,
        api_key,
        api_url=None,
        model=None,
        temperature=0.7,
        max_tokens=None,
        timeout=None,
        app_url=None,
        app_title=None,
        session=None,
    ):
        """
        Initialize the client.

        Args:
            api_key: Bearer token for the provider
            api_url: Full chat/completions URL
            model: Model identifier sent in the request body
            temperature: Default sampling temperature
            max_tokens: Default completion limit (omitted from the body when None)
            timeout: Request timeout in seconds
            app_url: Optional HTTP-Referer attribution header
            app_title: Optional X-Title attribution header
            session: Optional requests.Session (tests inject a mock)
        """
        self.api_key = api_key
        self.api_url = api_url or DEFAULT_API_URL
        self.model = model or DEFAULT_MODEL
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout or DEFAULT_TIMEOUT
        self.app_url = app_url
        self.app_title = app_title
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, api_key, config):
        llm = (config or {}).get("llm", {}) or {}
        return cls(
            api_key=api_key,
            api_url=llm.get("api_url"),
            model=llm.get("model"),
            temperature=llm.get("temperature", 0.7),
            max_tokens=llm.get("max_tokens"),
            timeout=llm.get("timeout"),
            app_url=llm.get("app_url"),
            app_title=llm.get("app_title"),
        )

    def _headers(self):
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        if self.app_url:
            headers["HTTP-Referer"] = self.app_url
        if self.app_title:
            headers["X-Title"] = self.app_title
        return headers

    def build_payload(self, messages, temperature=None, max_tokens=None):
        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature if temperature is None else temperature,
        }
        limit = self.max_tokens if max_tokens is None else max_tokens
        if limit is not None:
            payload["max_tokens"] = int(limit)
        return payload

    def complete(self, messages, temperature=None, max_tokens=None):
        """
        Return the text of the first completion choice.

        Raises:
            LLMRequestError: on non-2xx status, network/timeout failure, or a
                body without choices[0].message.content
        """
        payload = self.build_payload(messages, temperature=temperature, max_tokens=max_tokens)

        try:
            response = self.session.post(
                self.api_url,
                headers=self._headers(),
                json=payload,
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as exc:
            raise LLMRequestError(f"API 请求失败: {exc}") from exc
        except ValueError as exc:
            raise LLMRequestError(f"API 返回的不是 JSON: {exc}") from exc

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as exc:
            raise LLMRequestError("AI 未返回内容") from exc

        if isinstance(content, list):
            # Some providers return content parts instead of a plain string.
            content = "".join(
                part["text"] for part in content
                if isinstance(part, dict) and isinstance(part.get("text"), str)
            )

        if not isinstance(content, str) or not content.strip():
            raise LLMRequestError("AI 未返回内容")

        return content
