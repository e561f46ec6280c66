"""
FastAPI Application

Main entry point for the WePadel Coach API.
"""

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, Response
from typing import Optional, Dict, Any
import json
import logging

from config.settings import MAX_BODY_BYTES, SERVICE_NAME, Settings, get_settings
from ..context.assembler import PromptAssembler
from ..context.prompts import SystemPrompts
from ..context.schema import parse_chat_request
from ..errors import CoachError, ConfigurationError, PayloadTooLargeError, UnexpectedError
from ..llm.gemini import GeminiClient
from ..llm.reply import build_debug_meta, extract_reply

# Setup logging
logging.basicConfig(level=get_settings().log_level.upper())
# httpx logs request URLs at INFO, and the Gemini URL carries the API key
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="WePadel Coach API",
    description="Relays coaching chats to Gemini",
    version="1.0.0"
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


@app.middleware("http")
async def cors(request: Request, call_next):
    """Allow every origin and answer any preflight with an empty 204"""
    if request.method == "OPTIONS":
        response = Response(status_code=204)
    else:
        response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


@app.exception_handler(CoachError)
async def coach_error_handler(request: Request, exc: CoachError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ====================
# Dependencies
# ====================

def get_gemini_client(settings: Settings = Depends(get_settings)) -> GeminiClient:
    return GeminiClient(settings)


async def _read_json_body(request: Request) -> Any:
    """
    Decoded body, or an empty object when it is missing or not JSON.

    Raises PayloadTooLargeError as soon as the declared length or the bytes
    read so far pass MAX_BODY_BYTES.
    """
    content_length = request.headers.get("content-length", "")
    if content_length.isdigit() and int(content_length) > MAX_BODY_BYTES:
        raise PayloadTooLargeError("Request body too large")

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > MAX_BODY_BYTES:
            raise PayloadTooLargeError("Request body too large")

    if not body:
        return {}
    try:
        return json.loads(body)
    except ValueError:
        return {}


def _is_debug(flag: Optional[str]) -> bool:
    return (flag or "").lower() in {"1", "true"}


# ====================
# Startup
# ====================

@app.on_event("startup")
async def startup():
    settings = get_settings()
    logger.info(f"WePadel Coach Backend starting (model={settings.gemini_model}, port={settings.port})")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set, /coach/chat will answer 500")


# ====================
# API Endpoints
# ====================

@app.get("/")
async def root():
    """Service info"""
    return {
        "ok": True,
        "service": SERVICE_NAME,
        "endpoints": ["POST /coach/chat", "GET /health"],
        "tip": SystemPrompts.USAGE_TIP,
    }


@app.get("/health")
async def health():
    """Health check"""
    return {"ok": True}


@app.post("/coach/chat")
async def coach_chat(
    request: Request,
    debug: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: GeminiClient = Depends(get_gemini_client)
) -> Dict[str, Any]:
    """
    Main chat endpoint.

    Builds the prompt from the context pack and thread, asks Gemini and
    returns the reply. With ?debug=1 the model, finish reason, token usage
    and the raw upstream envelope are included.
    """
    try:
        if not settings.gemini_api_key:
            raise ConfigurationError("Missing GEMINI_API_KEY")

        chat_request = parse_chat_request(await _read_json_body(request))
        debug_enabled = _is_debug(debug)

        history = len(chat_request.thread.turns) if chat_request.thread else 0
        logger.info(f"Chat request: history_turns={history} debug={debug_enabled}")

        payload = PromptAssembler.from_settings(settings).assemble_request(chat_request)
        envelope = await client.generate(payload)
        reply = extract_reply(envelope)

        if debug_enabled:
            return {
                "reply": reply,
                "meta": build_debug_meta(envelope, client.model),
                "raw": envelope,
            }

        return {"reply": reply}

    except CoachError:
        raise
    except Exception as e:
        logger.exception(f"Chat error: {e}")
        raise UnexpectedError() from e


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.port)
