import asyncio
import unittest

from preview.renderer import FrameHost, PreviewRenderer

DELAY = 0.05


class FakeFrame:
    def __init__(self, document: str) -> None:
        self.document = document
        self.discarded = False


class FakeHost(FrameHost):
    def __init__(self) -> None:
        self.frames = []

    def mount(self, document: str) -> FakeFrame:
        frame = FakeFrame(document)
        self.frames.append(frame)
        return frame

    def discard(self, frame: FakeFrame) -> None:
        frame.discarded = True

    @property
    def live(self):
        return [frame for frame in self.frames if not frame.discarded]


class TestRender(unittest.TestCase):
    def test_each_render_gets_a_fresh_frame(self) -> None:
        host = FakeHost()
        renderer = PreviewRenderer(host, delay=DELAY)

        first = renderer.render("<p>one</p>", "", "var leaked = 1;")
        second = renderer.render("<p>two</p>", "", "console.log(typeof leaked);")

        self.assertIsNot(first.frame, second.frame)
        self.assertTrue(first.frame.discarded)
        self.assertEqual(host.live, [second.frame])
        self.assertNotIn("var leaked", second.document)
        self.assertIn("typeof leaked", second.document)
        self.assertEqual((first.generation, second.generation), (1, 2))
        self.assertIs(renderer.current, second)

    def test_same_sources_still_replace_the_frame(self) -> None:
        host = FakeHost()
        renderer = PreviewRenderer(host, delay=DELAY)

        renderer.render("<p>x</p>", "", "")
        renderer.render("<p>x</p>", "", "")
        self.assertEqual(len(host.frames), 2)
        self.assertEqual(len(host.live), 1)
        self.assertEqual(renderer.render_count, 2)


class TestScheduledRender(unittest.IsolatedAsyncioTestCase):
    async def test_burst_renders_last_state_once(self) -> None:
        host = FakeHost()
        renderer = PreviewRenderer(host, delay=DELAY)
        buffers = {"html": "", "css": "", "js": ""}
        source = lambda: (buffers["html"], buffers["css"], buffers["js"])

        for index in range(1, 8):
            buffers["html"] = f"<p>edit {index}</p>"
            renderer.schedule(source)

        self.assertTrue(renderer.pending)
        self.assertEqual(renderer.render_count, 0)
        await asyncio.sleep(DELAY * 4)

        self.assertEqual(renderer.render_count, 1)
        self.assertIn("<p>edit 7</p>", renderer.current.document)
        self.assertNotIn("<p>edit 6</p>", renderer.current.document)

    async def test_explicit_render_cancels_pending(self) -> None:
        host = FakeHost()
        renderer = PreviewRenderer(host, delay=DELAY)

        renderer.schedule(lambda: ("<p>later</p>", "", ""))
        renderer.render("<p>now</p>", "", "")
        self.assertFalse(renderer.pending)

        await asyncio.sleep(DELAY * 4)
        self.assertEqual(renderer.render_count, 1)
        self.assertIn("<p>now</p>", renderer.current.document)

    async def test_cancel_drops_scheduled_render(self) -> None:
        host = FakeHost()
        renderer = PreviewRenderer(host, delay=DELAY)

        renderer.schedule(lambda: ("<p>never</p>", "", ""))
        renderer.cancel()
        await asyncio.sleep(DELAY * 4)
        self.assertEqual(host.frames, [])
