from __future__ import annotations

from typing import Optional

from fastapi import Request

from nl2sql_compiler.presentation.highlight import Highlighter
from nl2sql_compiler.services.compiler_service import CompilerSession


def get_session(request: Request) -> CompilerSession:
    return request.app.state.session


def get_highlighter(request: Request) -> Optional[Highlighter]:
    return getattr(request.app.state, "highlighter", None)
