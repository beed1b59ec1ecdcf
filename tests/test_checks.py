from __future__ import annotations

import asyncio

import pytest

from checks import CHECK_MODULES, CheckContext, all_verifications, verification
from checks.accessibility import keyboard_focus, touch_targets
from checks.content import find_terms
from checks.resilience import backend_outage, is_backend_request
from checks.responsive import orientation
from projects import PROJECTS


def test_every_check_module_registers_something():
    verifications = all_verifications()
    modules = {v.func.__module__ for v in verifications}
    assert modules == set(CHECK_MODULES)


def test_titles_are_unique_and_projects_known():
    verifications = all_verifications()
    titles = [v.title for v in verifications]
    assert len(titles) == len(set(titles))
    for v in verifications:
        assert v.projects is None or set(v.projects) <= set(PROJECTS)


def test_duplicate_title_is_rejected():
    all_verifications()
    with pytest.raises(ValueError):
        verification("Mental health content is present")(lambda ctx: None)


def test_find_terms_is_case_insensitive():
    assert find_terms("Welcome back! Track your MOOD and start therapy.") == ["Therapy", "Mood", "Welcome"]
    assert find_terms("") == []


def test_screenshot_paths_are_numbered_per_check(tmp_path):
    ctx = CheckContext(page=None, base_url="http://x", project="mobile-ios", screenshots_dir=tmp_path)
    ctx.check_title = "Tapping navigation elements keeps the app alive"
    first = ctx.screenshot_path("after-tap Home")
    assert first == tmp_path / "tapping_navigation_elements_keeps_the_app_alive_01_after_tap_home.png"
    ctx.shots.append(first)
    assert ctx.screenshot_path("after-tap Chat").name.endswith("_02_after_tap_chat.png")


def test_project_context_options_from_device_descriptor():
    devices = {"iPhone 12": {"viewport": {"width": 390, "height": 664}, "is_mobile": True, "default_browser_type": "webkit"}}
    options = PROJECTS["mobile-ios"].context_options(devices)
    assert options == {"viewport": {"width": 390, "height": 664}, "is_mobile": True}
    assert PROJECTS["comprehensive"].context_options({}) == {
        "viewport": {"width": 375, "height": 812},
        "is_mobile": True,
        "has_touch": True,
    }


class ScriptedPage:
    """Answers page.evaluate from a queue and records what the check did."""

    def __init__(self, evaluations=(), body="Solace", bodies=None):
        self.evaluations = list(evaluations)
        self.body = body
        self.bodies = list(bodies or [])
        self.keys: list[str] = []
        self.viewports: list[dict] = []
        self.routes: list[tuple] = []
        self.goto_calls: list[tuple] = []
        self.keyboard = self

    async def goto(self, url, wait_until="load", timeout=None):
        self.goto_calls.append((url, wait_until))

    async def wait_for_timeout(self, ms):
        return None

    async def evaluate(self, script):
        return self.evaluations.pop(0)

    async def press(self, key):
        self.keys.append(key)

    async def set_viewport_size(self, size):
        self.viewports.append(size)

    async def route(self, pattern, handler):
        self.routes.append((pattern, handler))

    async def text_content(self, selector):
        return self.bodies.pop(0) if self.bodies else self.body


def scripted_ctx(tmp_path, page):
    return CheckContext(page=page, base_url="http://127.0.0.1:8083", project="comprehensive", screenshots_dir=tmp_path, settle_ms=0)


def test_touch_targets_need_half_at_44px(tmp_path):
    page = ScriptedPage(evaluations=[[[48, 48], [44, 60], [20, 20]]])
    asyncio.run(touch_targets(scripted_ctx(tmp_path, page)))

    page = ScriptedPage(evaluations=[[[48, 48], [30, 44], [20, 20]]])
    with pytest.raises(AssertionError, match="Only 1 of 3"):
        asyncio.run(touch_targets(scripted_ctx(tmp_path, page)))


def test_keyboard_focus_passes_when_tab_reaches_an_element(tmp_path):
    page = ScriptedPage(evaluations=[None, "BUTTON||button|Start Therapy", None, None, None])
    asyncio.run(keyboard_focus(scripted_ctx(tmp_path, page)))
    assert page.keys == ["Tab"] * 5


def test_keyboard_focus_fails_when_focus_stays_on_body(tmp_path):
    page = ScriptedPage(evaluations=[None] * 5)
    with pytest.raises(AssertionError, match="Focus never left"):
        asyncio.run(keyboard_focus(scripted_ctx(tmp_path, page)))


def test_orientation_checks_portrait_then_landscape(tmp_path):
    page = ScriptedPage()
    asyncio.run(orientation(scripted_ctx(tmp_path, page)))
    assert page.viewports == [{"width": 375, "height": 667}, {"width": 667, "height": 375}]

    page = ScriptedPage(bodies=["Solace", "   "])
    with pytest.raises(AssertionError, match="landscape"):
        asyncio.run(orientation(scripted_ctx(tmp_path, page)))


class FakeRoute:
    def __init__(self, url):
        self.request = type("Request", (), {"url": url})()
        self.outcome = ""

    async def abort(self):
        self.outcome = "aborted"

    async def continue_(self):
        self.outcome = "continued"


def test_backend_outage_blocks_only_backend_requests(tmp_path):
    page = ScriptedPage()
    asyncio.run(backend_outage(scripted_ctx(tmp_path, page)))
    pattern, handler = page.routes[0]
    assert pattern == "**/*"

    api, bundle = FakeRoute("http://127.0.0.1:8083/api/mood"), FakeRoute("http://127.0.0.1:8083/index.bundle")
    asyncio.run(handler(api))
    asyncio.run(handler(bundle))
    assert (api.outcome, bundle.outcome) == ("aborted", "continued")


def test_backend_outage_fails_on_blank_page(tmp_path):
    page = ScriptedPage(body="")
    with pytest.raises(AssertionError, match="backend requests are blocked"):
        asyncio.run(backend_outage(scripted_ctx(tmp_path, page)))


def test_is_backend_request():
    assert is_backend_request("http://localhost:8083/api/v1/journal")
    assert is_backend_request("http://localhost:8083/fetchMood")
    assert not is_backend_request("http://localhost:8083/static/js/bundle.js")
