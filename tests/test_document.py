import unittest

from preview.document import build_document


class TestBuildDocument(unittest.TestCase):
    def test_sources_are_placed_in_order(self) -> None:
        document = build_document("<h1>Title</h1>", "h1 { color: red; }", "console.log('ran');")

        self.assertTrue(document.startswith("<!DOCTYPE html>"))
        self.assertIn('<meta charset="UTF-8">', document)
        self.assertIn("<style>h1 { color: red; }</style>", document)
        self.assertIn("<script>console.log('ran');</script>", document)
        style_at = document.index("<style>")
        body_at = document.index("<body>")
        markup_at = document.index("<h1>Title</h1>")
        script_at = document.index("<script>")
        self.assertLess(style_at, body_at)
        self.assertLess(body_at, markup_at)
        self.assertLess(markup_at, script_at)
        self.assertLess(script_at, document.index("</body>"))

    def test_sources_are_not_escaped(self) -> None:
        html = '<a href="?a=1&b=2">&amp; {html}</a>'
        css = "a::after { content: '{css}'; }"
        js = "const t = `${1}`; if (1 < 2) { document.title = '{js}'; }"

        document = build_document(html, css, js)
        self.assertIn(html, document)
        self.assertIn(css, document)
        self.assertIn(js, document)

    def test_empty_sources(self) -> None:
        document = build_document("", "", "")
        self.assertIn("<style></style>", document)
        self.assertIn("<script></script>", document)
