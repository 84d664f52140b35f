"""
Productivity advice for new tasks
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import httpx
from openai import AsyncOpenAI

from taskchain.config import AdvisorConfig, config
from taskchain.exceptions import AdvisoryError, ConfigMissingError
from taskchain.logging import init_logger
from taskchain.types import AdviceRequest

logger = init_logger("advice")

SYSTEM_PROMPT = (
    "You are a productivity coach. Given a task, reply with two or three short, "
    "concrete suggestions for getting it done on time. Plain text, no preamble."
)


@runtime_checkable
class Advisor(Protocol):
    """Anything that can turn a task's fields into advice text"""

    async def get_productivity_advice(self, request: AdviceRequest) -> str: ...


def format_advice_prompt(request: AdviceRequest) -> str:
    return (
        f"Title: {request.title}\n"
        f"Description: {request.description}\n"
        f"Priority: {request.priority}\n"
        f"Progress: {request.progress}%\n"
        f"Deadline: {request.deadline}"
    )


class OpenAIAdvisor:
    """
    Advisor backed by an OpenAI-compatible chat completion endpoint.

    SDK retries are disabled: a failed call fails :meth:`.TaskGateway.create_task`
    rather than delaying it.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        max_tokens: int = 300,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @classmethod
    def from_config(cls, advisor: AdvisorConfig | None = None) -> OpenAIAdvisor:
        """
        Raises:
            :class:`.ConfigMissingError` if no api key is configured
        """
        if advisor is None:
            advisor = config.advisor
        if advisor.api_key is None or not advisor.api_key.get_secret_value().strip():
            raise ConfigMissingError(["api_key"], section="advisor")

        client = AsyncOpenAI(
            api_key=advisor.api_key.get_secret_value(),
            base_url=advisor.base_url,
            timeout=httpx.Timeout(advisor.timeout, connect=5.0),
            max_retries=0,
        )
        return cls(client=client, model=advisor.model, max_tokens=advisor.max_tokens)

    async def get_productivity_advice(self, request: AdviceRequest) -> str:
        logger.debug("Requesting advice from model=%s for %r", self.model, request.title)
        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": format_advice_prompt(request)},
                ],
            )
        except Exception as e:
            logger.error("Advice request to model=%s failed: %r", self.model, e)
            raise
        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise AdvisoryError(f"Model {self.model} returned no advice for {request.title!r}")
        return content.strip()
