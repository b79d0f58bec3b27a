"""
Server-side HTML for the compiler page.

The page shows exactly one of: a loading placeholder, an error banner, the
six compilation stages, or an empty placeholder. While a compile is in
flight the page reloads itself until the result or error is available.

Empty inputs are rejected by the browser through ``required`` and again by
``CompilerSession.compile``.
"""
from __future__ import annotations

from html import escape
from typing import Optional

from nl2sql_compiler.presentation.highlight import Highlighter, render_code
from nl2sql_compiler.presentation.stages import Stage, build_stages
from nl2sql_compiler.services.compiler_service import CompilerSession

_PAGE_TEMPLATE = """\
<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
{refresh}  <title>{title}</title>
</head>
<body>
  <header><h1>NL-to-SQL Compiler</h1></header>
  <main>
    <form method="post" action="/compile">
      <label for="schema">Database schema</label>
      <textarea id="schema" name="schema" rows="16" required{input_disabled}>{schema}</textarea>
      <label for="nl-query">Enter your query in Controlled English:</label>
      <textarea id="nl-query" name="query" rows="4" required{input_disabled}
        placeholder="e.g., 'Find all employees in the Sales department with a salary greater than 60000'">{query}</textarea>
      <button type="submit"{button_disabled}>{button_label}</button>
    </form>
{banner}
    <section id="output">
{output}
    </section>
  </main>
  <footer><p>Powered by Gemini API</p></footer>
</body>
</html>
"""

_REFRESH_TAG = '  <meta http-equiv="refresh" content="2">\n'

_STAGE_TEMPLATE = """\
      <article class="stage">
        <h3>{title}</h3>
        {body}
      </article>"""


def render_page(session: CompilerSession, highlighter: Optional[Highlighter] = None, title: str = "NL-to-SQL Compiler") -> str:
    loading = session.is_loading
    return _PAGE_TEMPLATE.format(
        title=escape(title),
        refresh=_REFRESH_TAG if loading else "",
        schema=escape(session.schema),
        query=escape(session.query),
        input_disabled=" disabled" if loading else "",
        button_disabled=" disabled" if loading else "",
        button_label="Compiling..." if loading else "Compile to SQL",
        banner=_render_banner(session.error),
        output=_render_output(session, highlighter),
    )


def _render_banner(error: Optional[str]) -> str:
    if not error:
        return ""
    return (
        '    <div class="error" role="alert">'
        f"<strong>Error: </strong><span>{escape(error)}</span></div>"
    )


def _render_output(session: CompilerSession, highlighter: Optional[Highlighter]) -> str:
    if session.is_loading:
        return '      <p class="loading">Compiling...</p>'
    if session.result is None:
        return '      <p class="placeholder">The compilation results will appear here.</p>'
    return "\n".join(
        _STAGE_TEMPLATE.format(title=escape(stage.title), body=_render_stage_body(stage, highlighter))
        for stage in build_stages(session.result)
    )


def _render_stage_body(stage: Stage, highlighter: Optional[Highlighter]) -> str:
    if stage.kind == "tokens":
        chips = "".join(f'<span class="token">{escape(t)}</span>' for t in stage.tokens)
        return f'<div class="tokens">{chips}</div>'
    if stage.kind == "code":
        language = stage.language or "plaintext"
        code = render_code(stage.content, language, highlighter)
        return f'<pre><code class="language-{language}">{code}</code></pre>'
    return f"<p>{escape(stage.content)}</p>"
