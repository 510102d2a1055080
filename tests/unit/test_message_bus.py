import pytest

import stubsmith.common
from stubsmith.common import MessageBus
from stubsmith.needle import L
from stubsmith.test_utils import MockNeedle, SpyBus


class ListRenderer:
    def __init__(self):
        self.lines = []

    def render(self, message: str, level: str) -> None:
        self.lines.append((level, message))


def test_bus_forwards_to_renderer_with_spy(monkeypatch):
    spy_bus = SpyBus()

    with spy_bus.patch(monkeypatch):
        stubsmith.common.bus.info(L.greeting, name="World")
        stubsmith.common.bus.success(L.greeting, name="Stubsmith")

    messages = spy_bus.get_messages()
    assert messages == [
        {"level": "info", "id": "greeting", "params": {"name": "World"}},
        {"level": "success", "id": "greeting", "params": {"name": "Stubsmith"}},
    ]
    spy_bus.assert_id_called(L.greeting, level="success")


def test_spy_reports_missing_ids(monkeypatch):
    spy_bus = SpyBus()
    with spy_bus.patch(monkeypatch):
        stubsmith.common.bus.info(L.stub.written, path="x")

    with pytest.raises(AssertionError, match="stub.error"):
        spy_bus.assert_id_called(L.stub.error)


def test_bus_formats_templates():
    renderer = ListRenderer()
    bus = MessageBus(needle_instance=MockNeedle({"greeting": "Hello {name}"}))
    bus.set_renderer(renderer)

    bus.warning(L.greeting, name="World")

    assert renderer.lines == [("warning", "Hello World")]


def test_mock_needle_patches_the_global_bus(monkeypatch):
    with MockNeedle({"greeting": "Hi"}).patch(monkeypatch) as needle:
        assert stubsmith.common.bus._needle is needle


def test_bus_identity_fallback_and_formatting_errors():
    renderer = ListRenderer()
    bus = MessageBus(
        needle_instance=MockNeedle(
            {"needs.arg": "Value: {value}", "unclosed": "Saved {path"}
        )
    )
    bus.set_renderer(renderer)

    bus.info(L.nonexistent.key)
    bus.error(L.needs.arg)
    bus.warning(L.unclosed, path="out.py")

    assert renderer.lines == [
        ("info", "nonexistent.key"),
        ("error", "<formatting_error for 'needs.arg'>"),
        ("warning", "<formatting_error for 'unclosed'>"),
    ]


def test_render_to_string_without_renderer():
    bus = MessageBus(needle_instance=MockNeedle({"greeting": "Hello {name}"}))

    assert bus.render_to_string(L.greeting, name="World") == "Hello World"
    assert bus.render_to_string(L.greeting) == "<formatting_error for 'greeting'>"


def test_bus_does_not_fail_without_renderer():
    bus = MessageBus(needle_instance=MockNeedle({}))
    bus.info("some.id")


def test_packaged_messages_are_available():
    assert stubsmith.common.stubsmith_needle.get(L.stub.written) == "Wrote stub to {path}."
