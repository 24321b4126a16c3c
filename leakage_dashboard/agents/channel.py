"""
Agent control channel.
Outbound requests from the dashboard to the investigation agent: mission briefs,
thread resets and operator custom actions such as apply_proposal.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import requests


class AgentControlError(Exception):
    """Raised when the agent control channel rejects or fails a request."""


class AgentControlChannel(ABC):
    """
    Abstract control channel to the agent.
    Implementations must raise AgentControlError on failure.
    """

    @abstractmethod
    async def send_custom_action(self, action: Dict[str, Any]) -> None:
        """Deliver an operator action, e.g. {"type": "apply_proposal", "payload": {...}}."""

    @abstractmethod
    async def send_user_message(self, text: str, new_thread: bool = False) -> None:
        """Send a user-visible message to the agent."""

    @abstractmethod
    async def reset_thread(self) -> None:
        """Detach from the current conversation thread."""


class HttpAgentControlChannel(AgentControlChannel):
    """Control channel over HTTP JSON endpoints, using requests off the event loop."""

    def __init__(self, base_url: str, timeout: float = 30.0, token: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers["Content-Type"] = "application/json"
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    async def send_custom_action(self, action: Dict[str, Any]) -> None:
        await self._post("/actions", action)

    async def send_user_message(self, text: str, new_thread: bool = False) -> None:
        await self._post("/messages", {"text": text, "newThread": new_thread})

    async def reset_thread(self) -> None:
        await self._post("/threads/reset", {})

    async def _post(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return await asyncio.to_thread(self._post_sync, path, body)

    def _post_sync(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=body, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise AgentControlError(f"Agent control request to {path} failed: {e}") from e

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {}
