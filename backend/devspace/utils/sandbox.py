SANDBOX_CSP = "default-src 'none'; script-src 'unsafe-inline'; style-src 'unsafe-inline'; img-src data: blob:;"

# Scripts may run, but without allow-same-origin the document gets an opaque origin
SANDBOX_ATTRS = "allow-scripts"

MIME_TYPES = {
    ".html": "text/html",
    ".htm": "text/html",
    ".css": "text/css",
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".json": "application/json",
    ".svg": "image/svg+xml",
    ".md": "text/markdown",
    ".txt": "text/plain",
}


def get_mime_type(file_path: str) -> str:
    lowered = file_path.lower()
    for ext, mime in MIME_TYPES.items():
        if lowered.endswith(ext):
            return mime
    return "text/plain"


def preview_headers(revision: int) -> dict[str, str]:
    return {
        "Content-Security-Policy": f"{SANDBOX_CSP} sandbox {SANDBOX_ATTRS}",
        "Cache-Control": "no-store",
        "X-Preview-Revision": str(revision),
    }
