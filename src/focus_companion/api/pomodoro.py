"""Pomodoro session API endpoints."""

from focus_companion.api.client import APIClient
from focus_companion.models.focus.session import CompletedSession

SESSIONS_PATH = "/api/pomodoro"


class PomodoroAPI:
    """Pomodoro sessions API client."""

    def __init__(self, client: APIClient):
        self.client = client

    async def create_session(self, session: CompletedSession) -> dict:
        """Store a completed session. Returns the record with its assigned id."""
        response = await self.client.post(SESSIONS_PATH, json=session.to_payload())
        return response.json()

    async def list_sessions(self) -> list[dict]:
        """List stored sessions. The server answers 204 when there are none."""
        response = await self.client.get(SESSIONS_PATH)
        if response.status_code == 204 or not response.content:
            return []
        return response.json()

    async def get_session(self, session_id: int) -> dict:
        """Get a specific session by ID."""
        response = await self.client.get(f"{SESSIONS_PATH}/{session_id}")
        return response.json()

    async def update_session(self, session_id: int, session: CompletedSession) -> dict:
        """Replace a stored session."""
        response = await self.client.put(
            f"{SESSIONS_PATH}/{session_id}", json=session.to_payload()
        )
        return response.json()

    async def delete_session(self, session_id: int) -> None:
        """Delete a session."""
        await self.client.delete(f"{SESSIONS_PATH}/{session_id}")
