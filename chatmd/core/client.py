"""OpenAI client wrapper producing assistant turns."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import openai
from openai import OpenAI  # type: ignore

from ..utils import ASSISTANT_LABEL, Spinner
from .conversation import Role, Turn

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """The completion request failed; the conversation is left unchanged."""


class OpenAIClientWrapper:
    """Thin wrapper around the OpenAI Python SDK hiding streaming details."""

    def __init__(self, client: OpenAI):
        self.client = client

    def complete(self, model: str, turns: List[Turn]) -> Turn:
        """Send the whole conversation and return the assistant's reply.

        Tokens are echoed to the terminal as they stream in. Raises
        :class:`CompletionError` on any API failure or an empty reply.
        """
        params: Dict[str, Any] = {
            "model": model,
            "messages": [turn.to_message() for turn in turns],
            "stream": True,
        }

        accumulator: List[str] = []
        spinner = Spinner(prefix=f"{ASSISTANT_LABEL}> ")
        first_token_received = False

        logger.debug("requesting completion from %s with %d turns", model, len(turns))
        spinner.start()
        try:
            response = self.client.chat.completions.create(**params)  # type: ignore[arg-type]
            for chunk in response:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                if not delta.content:
                    continue

                if not first_token_received:
                    spinner.stop()
                    first_token_received = True

                print(delta.content, end="", flush=True)
                accumulator.append(delta.content)
        except openai.OpenAIError as exc:
            raise CompletionError(f"OpenAI API error: {exc}") from exc
        finally:
            spinner.stop()
            if first_token_received:
                print()  # new line after stream ends

        content = "".join(accumulator)
        if not content:
            raise CompletionError(f"model '{model}' returned an empty reply")
        return Turn(Role.ASSISTANT, content)
