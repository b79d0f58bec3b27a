"""
HTML routes: the compiler page and its form submit.

The form submit redirects back to the page (post/redirect/get) so a reload
or a double submit always shows the session's current state.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Form, status
from fastapi.responses import HTMLResponse, RedirectResponse

from nl2sql_compiler.api.dependencies import get_highlighter, get_session
from nl2sql_compiler.core.config import get_settings
from nl2sql_compiler.presentation.highlight import Highlighter
from nl2sql_compiler.presentation.page import render_page
from nl2sql_compiler.services.compiler_service import CompilerSession

router = APIRouter(tags=["Web"], include_in_schema=False)


@router.get("/", response_class=HTMLResponse)
def index(
    session: CompilerSession = Depends(get_session),
    highlighter: Optional[Highlighter] = Depends(get_highlighter),
) -> HTMLResponse:
    return HTMLResponse(render_page(session, highlighter, title=get_settings().APP_NAME))


@router.post("/compile")
async def compile_form(
    query: str = Form(""),
    schema_text: str = Form("", alias="schema"),
    session: CompilerSession = Depends(get_session),
) -> RedirectResponse:
    await session.compile(query=query, schema=schema_text)
    return RedirectResponse("/", status_code=status.HTTP_303_SEE_OTHER)
