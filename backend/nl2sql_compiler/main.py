"""
Application entry point.

Run with:
    uvicorn nl2sql_compiler.main:app --reload
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from nl2sql_compiler.api.routes import APP_VERSION, router
from nl2sql_compiler.api.web import router as web_router
from nl2sql_compiler.core.config import get_settings
from nl2sql_compiler.llm.client import GeminiClient, GeminiConfig
from nl2sql_compiler.presentation.highlight import Highlighter
from nl2sql_compiler.services.compiler_service import CompilerSession, CompletionClient

settings = get_settings()

# ── Logging ───────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
)
logger = logging.getLogger(__name__)


# ── App factory ───────────────────────────────────────────────────────────────

def create_app(
    client: Optional[CompletionClient] = None,
    highlighter: Optional[Highlighter] = None,
) -> FastAPI:
    # Raises ConfigurationError when no API key is configured
    if client is None:
        client = GeminiClient(GeminiConfig.from_settings(settings))

    application = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Compiles natural-language questions into SQL against a user-supplied "
            "schema.\n\nThe translation is performed by an external generative "
            "model; results are shown as six compilation stages."
        ),
        version=APP_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    application.state.session = CompilerSession(client)
    application.state.highlighter = highlighter

    # ── CORS ──────────────────────────────────────────────────────────────────
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ── Routes ────────────────────────────────────────────────────────────────
    application.include_router(router, prefix="/api/v1")
    application.include_router(web_router)

    logger.info("%s started (model=%s, debug=%s)", settings.APP_NAME, settings.GEMINI_MODEL, settings.DEBUG)
    return application


app = create_app()
