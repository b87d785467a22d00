"""Preview compositor: inline the stylesheet and script into the entry HTML.

Splicing is pattern based, not a DOM transform. Exactly one reference syntax
is understood per canonical file and only its first occurrence is replaced;
any further occurrences stay byte-identical:

    <link ... href="style.css" ...>        ->  <style>{css}</style>
    <script ... src="app.js" ...></script> ->  <script>\\n{js}\\n</script>
"""

import re
from collections.abc import Mapping

from devspace.schemas.preview import CompositionReport, PreviewDocument
from devspace.templates.init_project import ENTRY_FILE, SCRIPT_FILE, STYLESHEET_FILE


def _link_pattern(stylesheet: str) -> re.Pattern[str]:
    return re.compile(
        r"<link[^>]*href=[\"']" + re.escape(stylesheet) + r"[\"'][^>]*>",
        re.IGNORECASE,
    )


def _script_pattern(script: str) -> re.Pattern[str]:
    return re.compile(
        r"<script[^>]*src=[\"']" + re.escape(script) + r"[\"'][^>]*></script>",
        re.IGNORECASE,
    )


def _read(files: Mapping[str, str] | None, name: str) -> str:
    if not files:
        return ""
    content = files.get(name)
    return content if isinstance(content, str) else ""


def compose(
    files: Mapping[str, str] | None,
    *,
    entry: str = ENTRY_FILE,
    stylesheet: str = STYLESHEET_FILE,
    script: str = SCRIPT_FILE,
) -> str:
    """Return the entry document with the stylesheet and script inlined.

    Missing files read as empty text, so this never raises for absent inputs.
    """
    html = _read(files, entry)
    css = _read(files, stylesheet)
    js = _read(files, script)

    # Callables keep the file text verbatim (no backslash or group expansion)
    html = _link_pattern(stylesheet).sub(lambda _m: f"<style>{css}</style>", html, count=1)
    html = _script_pattern(script).sub(lambda _m: f"<script>\n{js}\n</script>", html, count=1)
    return html


def inspect(
    files: Mapping[str, str] | None,
    *,
    entry: str = ENTRY_FILE,
    stylesheet: str = STYLESHEET_FILE,
    script: str = SCRIPT_FILE,
) -> CompositionReport:
    """Describe what ``compose`` will do with these files."""
    available = set(files or {})
    html = _read(files, entry)
    has_link = _link_pattern(stylesheet).search(html) is not None
    has_script = _script_pattern(script).search(html) is not None

    missing = [name for name in (entry, stylesheet, script) if name not in available]
    warnings = []
    if entry not in available:
        warnings.append(f"Entry file not found: {entry}; composing an empty document")
    else:
        if not has_link:
            warnings.append(f"No stylesheet reference to {stylesheet} in {entry}")
        if not has_script:
            warnings.append(f"No script reference to {script} in {entry}")
    if has_link and stylesheet not in available:
        warnings.append(f"Referenced file not found: {stylesheet}; inlining empty styles")
    if has_script and script not in available:
        warnings.append(f"Referenced file not found: {script}; inlining empty script")

    return CompositionReport(
        entry_found=entry in available,
        stylesheet_reference=has_link,
        script_reference=has_script,
        missing_files=missing,
        warnings=warnings,
    )


def render(
    files: Mapping[str, str] | None,
    revision: int,
    *,
    entry: str = ENTRY_FILE,
    stylesheet: str = STYLESHEET_FILE,
    script: str = SCRIPT_FILE,
) -> PreviewDocument:
    """Compose the document and tag it with the revision that instantiates it."""
    document = compose(files, entry=entry, stylesheet=stylesheet, script=script)
    return PreviewDocument(revision=revision, document=document)
