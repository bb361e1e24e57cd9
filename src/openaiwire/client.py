"""
Client entry points: one attribute per resource, all sharing one transport.
"""

import logging
from typing import Optional

import httpx

from ._http import AsyncTransport, SyncTransport
from .assistants import Assistants
from .audio import Audio
from .chat import ChatCompletions
from .config import Configuration
from .fine_tuning import FineTuningJobs
from .images import Images
from .moderations import Moderations
from .run_steps import RunSteps
from .runs import Runs
from .threads import Messages, Threads

logger = logging.getLogger("openaiwire")


class _ClientBase:
    def _attach_resources(self, transport) -> None:
        self.chat_completions = ChatCompletions(transport)
        self.assistants = Assistants(transport)
        self.threads = Threads(transport)
        self.messages = Messages(transport)
        self.runs = Runs(transport)
        self.run_steps = RunSteps(transport)
        self.images = Images(transport)
        self.audio = Audio(transport)
        self.fine_tuning_jobs = FineTuningJobs(transport)
        self.moderations = Moderations(transport)


class OpenAIClient(_ClientBase):
    """Blocking client.

    Example:
        client = OpenAIClient.create(Configuration.builder().api_key(key).build())
        completion = client.chat_completions.create(request)
    """

    def __init__(self, configuration: Configuration, http_client: Optional[httpx.Client] = None):
        self.configuration = configuration
        self._transport = SyncTransport(configuration, http_client)
        self._attach_resources(self._transport)
        logger.debug(f"Client created for {configuration.base_url}")

    @classmethod
    def create(cls, configuration: Configuration) -> "OpenAIClient":
        return cls(configuration)

    @classmethod
    def from_env(cls) -> "OpenAIClient":
        return cls(Configuration.from_env())

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> "OpenAIClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncOpenAIClient(_ClientBase):
    """Awaitable client; every resource method returns a coroutine."""

    def __init__(self, configuration: Configuration, http_client: Optional[httpx.AsyncClient] = None):
        self.configuration = configuration
        self._transport = AsyncTransport(configuration, http_client)
        self._attach_resources(self._transport)
        logger.debug(f"Async client created for {configuration.base_url}")

    @classmethod
    def create(cls, configuration: Configuration) -> "AsyncOpenAIClient":
        return cls(configuration)

    @classmethod
    def from_env(cls) -> "AsyncOpenAIClient":
        return cls(Configuration.from_env())

    async def aclose(self) -> None:
        await self._transport.aclose()

    async def __aenter__(self) -> "AsyncOpenAIClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
