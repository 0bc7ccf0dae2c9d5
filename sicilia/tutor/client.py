"""
Tutor chat client.

Sends the running conversation to an OpenAI-compatible chat-completion
endpoint (Groq by default) and returns one assistant message.
"""

import logging
from typing import Optional, Sequence

import requests

from sicilia.config import DEFAULT_TUTOR_BASE_URL, DEFAULT_TUTOR_MODEL, Settings
from sicilia.errors import TutorError
from sicilia.schemas import ChatMessage
from sicilia.utils import load_prompt


logger = logging.getLogger(__name__)

FALLBACK_REPLY = "（応答を取得できませんでした）"
ERROR_SNIPPET_CHARS = 300


class TutorClient:
    """Wrapper for the chat-completion API."""

    def __init__(
        self,
        api_key: Optional[str],
        model: str = DEFAULT_TUTOR_MODEL,
        base_url: str = DEFAULT_TUTOR_BASE_URL,
        temperature: float = 0.3,
        timeout: int = 30,
    ):
        if not api_key:
            raise TutorError("GROQ_API_KEY not set. Configure it to use the tutor.")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.temperature = temperature
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "TutorClient":
        return cls(
            api_key=settings.groq_api_key,
            model=settings.tutor_model,
            base_url=settings.tutor_base_url,
        )

    @property
    def url(self) -> str:
        return f"{self.base_url}/chat/completions"

    def reply(self, messages: Sequence[ChatMessage]) -> ChatMessage:
        """
        Get the assistant's next message for a conversation.

        Raises:
            TutorError: On transport failure or a non-2xx response
        """
        body = {
            "model": self.model,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
            "temperature": self.temperature,
        }

        try:
            response = requests.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                    "Accept": "application/json",
                },
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Tutor request failed: {e}")
            raise TutorError(f"Tutor request failed: {e}") from e

        if not response.ok:
            snippet = response.text[:ERROR_SNIPPET_CHARS] if response.text else "no response body"
            logger.error(f"Tutor API error - Status: {response.status_code}, Model: {self.model}, Response: {snippet}")
            raise TutorError(f"HTTP {response.status_code}: {snippet}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            content = None

        return ChatMessage(role="assistant", content=content or FALLBACK_REPLY)


class TutorConversation:
    """Running conversation: system prompt, greeting, then user/assistant turns."""

    def __init__(self, prompt_name: str = "tutor"):
        prompt = load_prompt(prompt_name)
        self.messages: list[ChatMessage] = [
            ChatMessage(role="system", content=prompt["system"].strip()),
            ChatMessage(role="assistant", content=prompt["greeting"]),
        ]

    def visible_messages(self) -> list[ChatMessage]:
        return [m for m in self.messages if m.role != "system"]

    def send(self, client: TutorClient, text: str) -> Optional[ChatMessage]:
        """
        Append a user message and the tutor's reply.

        Blank input is ignored (returns None). On failure the user message
        is removed again and the error re-raised.
        """
        text = text.strip()
        if not text:
            return None

        user_message = ChatMessage(role="user", content=text)
        self.messages.append(user_message)
        try:
            reply = client.reply(list(self.messages))
        except TutorError:
            self.messages.pop()
            raise

        self.messages.append(reply)
        return reply
