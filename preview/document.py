"""Assemble the preview document from the three editor buffers.

Trust boundary: html, css and js are inserted verbatim. Nothing is escaped
or sanitised, so a stray ``</style>`` or ``</script>`` in the sources ends
its block early exactly as it would in a hand-written page. The playground
is a single-user local tool; isolation comes from the sandboxed frame the
document is rendered in, not from the document itself.
"""
from __future__ import annotations

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <style>{css}</style>
</head>
<body>
{html}
<script>{js}</script>
</body>
</html>
"""


def build_document(html: str, css: str, js: str) -> str:
    # str.format would choke on braces inside css/js, so splice by hand
    head, rest = DOCUMENT_TEMPLATE.split("{css}")
    middle, rest = rest.split("{html}")
    between, tail = rest.split("{js}")
    return "".join([head, css, middle, html, between, js, tail])
