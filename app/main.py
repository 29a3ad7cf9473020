from __future__ import annotations

from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from bridge import BridgeError, ChatFailure, ChatRequest, MalformedRequestError, generate_reply
from bridge.bridge import describe_errors
from bridge.core.errors import redact
from config.settings import get_settings


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
logger = logging.getLogger("vbcapital")

app = FastAPI(title="VB Capital AI", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.app_env.lower() in {"dev", "development", "local"}:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def _failure(body: ChatFailure) -> JSONResponse:
    # Every failure kind shares status 500; the error text tells them apart.
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))


@app.exception_handler(RequestValidationError)
async def malformed_request_handler(request: Request, exc: RequestValidationError):
    """Bodies that fail ChatRequest validation get the malformed-request envelope."""
    error = MalformedRequestError("request body does not match schema", details=describe_errors(exc.errors()))
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, error.details)
    return _failure(ChatFailure(**error.envelope()))


@app.post("/api/chat")
def chat(req: ChatRequest) -> Any:
    turns = list(req.messages)
    try:
        logger.info("Incoming chat: turns=%s latest_len=%s", len(turns), len(turns[-1].content))
        reply = generate_reply(turns)
        return reply.model_dump()
    except BridgeError as exc:
        logger.warning("Chat request failed (%s): %s", type(exc).__name__, exc)
        return _failure(ChatFailure(**exc.envelope()))
    except Exception as exc:
        message = redact(str(exc), get_settings().google_api_key)
        logger.error("Chat processing failed (%s): %s", type(exc).__name__, message)
        return _failure(ChatFailure(error="Error processing your request", details=message))


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}
