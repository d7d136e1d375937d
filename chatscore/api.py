"""HTTP endpoint for triggering conversation analysis."""

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI, Header, Request, Response
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from .config import get_settings
from .constants import ANALYZE_ENDPOINT, CORS_HEADERS, ErrorMessage, LogMessage
from .exceptions import ChatScoreError, EmptyConversationError
from .service import AnalysisService
from .store import SupabaseStore

ServiceFactory = Callable[[], AbstractAsyncContextManager[AnalysisService]]


class AnalysisRequest(BaseModel):
    """Body of an analysis request."""

    conversation_id: str = Field(min_length=1, description="Conversation to analyze")


@asynccontextmanager
async def default_service_factory() -> AsyncIterator[AnalysisService]:
    """Yield a service backed by a store built from the environment."""
    async with SupabaseStore.from_settings(get_settings()) as store:
        yield AnalysisService(store=store)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=CORS_HEADERS
    )


def create_app(*, service_factory: ServiceFactory = default_service_factory) -> FastAPI:
    """Build the API application.

    Args:
        service_factory: Produces an AnalysisService per request. Only invoked
            once the caller is authorized and the request is well formed.

    Returns:
        FastAPI: The configured application.
    """
    app = FastAPI(title="chatscore", description="Chat transcript quality scoring")

    @app.options(ANALYZE_ENDPOINT)
    async def preflight() -> Response:
        return Response(status_code=200, headers=CORS_HEADERS)

    @app.post(ANALYZE_ENDPOINT)
    async def analyze_conversation(
        request: Request, authorization: str | None = Header(default=None)
    ) -> JSONResponse:
        if not authorization:
            return _error_response(401, ErrorMessage.UNAUTHORIZED)

        try:
            payload = AnalysisRequest.model_validate_json(await request.body())
        except ValidationError as e:
            logger.debug(f"Rejected analysis request: {e}")
            return _error_response(400, ErrorMessage.MISSING_CONVERSATION_ID)

        try:
            async with service_factory() as service:
                result = await service.analyze_conversation(
                    conversation_id=payload.conversation_id
                )
        except EmptyConversationError as e:
            return _error_response(404, str(e))
        except ChatScoreError as e:
            logger.error(LogMessage.ERROR_OCCURRED.format(e))
            return _error_response(500, str(e) or ErrorMessage.UNKNOWN)
        except Exception as e:
            logger.exception(LogMessage.ERROR_OCCURRED.format(e))
            return _error_response(500, str(e) or ErrorMessage.UNKNOWN)

        return JSONResponse(
            content=result.to_record(conversation_id=payload.conversation_id),
            headers=CORS_HEADERS,
        )

    return app


app = create_app()
