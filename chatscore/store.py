"""Backend store for conversations, messages and analyses.

Talks to a Supabase (PostgREST) REST API over HTTP.
"""

from datetime import datetime
from typing import Any

import httpx
from aiolimiter import AsyncLimiter
from loguru import logger
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from .config import Settings
from .constants import (
    ANALYSES_TABLE,
    CONVERSATIONS_TABLE,
    DEFAULT_STORE_MAX_RETRIES,
    DEFAULT_STORE_RATE_LIMIT,
    DEFAULT_STORE_TIMEOUT_SECONDS,
    MESSAGES_TABLE,
    REST_API_PATH,
    AnalysisKey,
    ConversationKey,
    ErrorMessage,
    LogMessage,
    MessageKey,
)
from .exceptions import StoreError
from .models import AnalysisResult, Conversation, Message


class SupabaseStore:
    """Message, analysis and conversation store over the Supabase REST API.

    Attributes:
        base_url: Project URL, e.g. ``https://xyz.supabase.co``.
        max_retries: Attempts per request on transport errors.
        rate_limiter: AsyncLimiter bounding requests per second.
        client: Shared httpx client with auth headers applied.
    """

    retry_wait = wait_exponential(multiplier=1, min=2, max=10)

    def __init__(
        self,
        *,
        base_url: str,
        api_key: str,
        max_retries: int = DEFAULT_STORE_MAX_RETRIES,
        timeout: float = DEFAULT_STORE_TIMEOUT_SECONDS,
        rate_limit: int = DEFAULT_STORE_RATE_LIMIT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the store.

        Args:
            base_url: Project URL.
            api_key: Service role key, sent as ``apikey`` and bearer token.
            max_retries: Attempts per request on transport errors.
            timeout: Per-request timeout in seconds.
            rate_limit: Maximum requests per second.
            transport: Optional httpx transport (used by tests).
        """
        self.base_url = base_url.rstrip("/")
        self.max_retries = max_retries
        self.rate_limiter = AsyncLimiter(max_rate=rate_limit, time_period=1)
        self.client = httpx.AsyncClient(
            base_url=f"{self.base_url}{REST_API_PATH}",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None
    ) -> "SupabaseStore":
        """Build a store from settings.

        Raises:
            StoreError: If the backend URL or key is not configured.
        """
        if not settings.has_backend:
            raise StoreError(ErrorMessage.MISSING_CONFIG)

        return cls(
            base_url=settings.SUPABASE_URL,
            api_key=settings.SUPABASE_SERVICE_ROLE_KEY,
            max_retries=settings.STORE_MAX_RETRIES,
            timeout=settings.STORE_TIMEOUT_SECONDS,
            rate_limit=settings.STORE_RATE_LIMIT,
            transport=transport,
        )

    async def __aenter__(self) -> "SupabaseStore":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Send a request, retrying transport errors, and raise on HTTP errors.

        Raises:
            StoreError: If the backend returns an error status or cannot be
                reached after all retries.
        """
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.max_retries),
                wait=self.retry_wait,
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    async with self.rate_limiter:
                        response = await self.client.request(
                            method, path, params=params, json=json, headers=headers
                        )
        except httpx.TransportError as e:
            raise StoreError(f"Backend request failed: {e}") from e

        if response.is_error:
            raise StoreError(
                self._error_message(response=response),
                status_code=response.status_code,
            )

        return response

    @staticmethod
    def _error_message(*, response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"

        if isinstance(data, dict):
            return str(data.get("message") or data.get("error") or data)
        return str(data)

    async def fetch_messages(self, *, conversation_id: str) -> list[Message]:
        """Fetch a conversation's messages ordered by creation time.

        Args:
            conversation_id: ID of the conversation.

        Returns:
            list[Message]: Messages, oldest first. Empty if there are none.
        """
        logger.debug(LogMessage.FETCHING_MESSAGES.format(conversation_id))
        response = await self._request(
            "GET",
            f"/{MESSAGES_TABLE}",
            params={
                "select": f"{MessageKey.SENDER},{MessageKey.CONTENT}",
                ConversationKey.CONVERSATION_ID: f"eq.{conversation_id}",
                "order": "created_at.asc",
            },
        )

        messages = [Message.from_dict(data=row) for row in response.json() or []]
        logger.debug(LogMessage.FETCHED_MESSAGES.format(len(messages), conversation_id))
        return messages

    async def upsert_analysis(
        self, *, conversation_id: str, result: AnalysisResult
    ) -> None:
        """Insert or replace the analysis for a conversation.

        Args:
            conversation_id: ID of the analyzed conversation.
            result: Scorecard to store.
        """
        await self._request(
            "POST",
            f"/{ANALYSES_TABLE}",
            params={"on_conflict": AnalysisKey.CONVERSATION_ID},
            json=result.to_record(conversation_id=conversation_id),
            headers={"Prefer": "resolution=merge-duplicates,return=minimal"},
        )
        logger.debug(LogMessage.UPSERTED_ANALYSIS.format(conversation_id))

    async def get_analysis(self, *, conversation_id: str) -> AnalysisResult | None:
        response = await self._request(
            "GET",
            f"/{ANALYSES_TABLE}",
            params={
                "select": "*",
                AnalysisKey.CONVERSATION_ID: f"eq.{conversation_id}",
                "limit": 1,
            },
        )
        rows = response.json() or []
        if not rows:
            return None
        return AnalysisResult.from_dict(data=rows[0])

    async def mark_analyzed(
        self, *, conversation_id: str, analyzed_at: datetime
    ) -> None:
        await self._request(
            "PATCH",
            f"/{CONVERSATIONS_TABLE}",
            params={ConversationKey.ID: f"eq.{conversation_id}"},
            json={ConversationKey.ANALYZED_AT: analyzed_at.isoformat()},
            headers={"Prefer": "return=minimal"},
        )
        logger.debug(
            LogMessage.MARKED_ANALYZED.format(conversation_id, analyzed_at.isoformat())
        )

    async def list_conversations(self, *, user_id: str) -> list[Conversation]:
        """List a user's conversations, newest first."""
        response = await self._request(
            "GET",
            f"/{CONVERSATIONS_TABLE}",
            params={
                "select": "*",
                ConversationKey.USER_ID: f"eq.{user_id}",
                "order": "created_at.desc",
            },
        )
        return [Conversation.from_dict(data=row) for row in response.json() or []]

    async def create_conversation(self, *, title: str, user_id: str) -> str:
        """Create a conversation and return its ID."""
        response = await self._request(
            "POST",
            f"/{CONVERSATIONS_TABLE}",
            params={"select": ConversationKey.ID},
            json={ConversationKey.TITLE: title, ConversationKey.USER_ID: user_id},
            headers={"Prefer": "return=representation"},
        )
        rows = response.json() or []
        if not rows:
            raise StoreError("Backend did not return the created conversation")
        return str(rows[0][ConversationKey.ID])

    async def insert_messages(
        self, *, conversation_id: str, messages: list[Message]
    ) -> None:
        await self._request(
            "POST",
            f"/{MESSAGES_TABLE}",
            json=[
                {ConversationKey.CONVERSATION_ID: conversation_id, **msg.to_dict()}
                for msg in messages
            ],
            headers={"Prefer": "return=minimal"},
        )
