"""Unit tests for the form_client package."""

import asyncio
import json

import httpx
import pytest

from form_client import (
    ContactForm,
    EventBus,
    InMemoryStore,
    JsonFileStore,
    SubmissionFlow,
    SubmissionState,
    UiState,
)
from form_client.submission import GENERIC_FAILURE_MESSAGE, SENDING_MESSAGE
from form_client.ui_state import THEME_STORAGE_KEY
from infrastructure.http_client import HttpClient

ENDPOINT = "http://relay.test/api/contact"


# ── Helpers ───────────────────────────────────────────────────────────────────


def _filled_form(**values) -> ContactForm:
    form = ContactForm()
    data = {"name": "A", "email": "a@b.com", "message": "hi"}
    data.update(values)
    for name, value in data.items():
        form.edit(name, value)
    return form


def _client(handler) -> HttpClient:
    return HttpClient(transport=httpx.MockTransport(handler))


def _respond(status_code: int, body: dict):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status_code, json=body)

    return handler, requests


# ── EventBus ──────────────────────────────────────────────────────────────────


class TestEventBus:
    def test_handlers_receive_payload_for_their_pair_only(self):
        bus = EventBus()
        seen = []
        bus.subscribe("email", "invalid", seen.append)
        bus.subscribe("name", "invalid", lambda p: seen.append(("name", p)))
        assert bus.emit("email", "invalid", "bad") == 1
        assert seen == ["bad"]

    def test_unsubscribe(self):
        bus = EventBus()
        seen = []
        unsubscribe = bus.subscribe("document", "themeChanged", seen.append)
        unsubscribe()
        unsubscribe()
        assert bus.emit("document", "themeChanged", {}) == 0
        assert seen == []

    def test_failing_handler_does_not_stop_others(self):
        bus = EventBus()
        seen = []

        def broken(_):
            raise RuntimeError("boom")

        bus.subscribe("form", "state", broken)
        bus.subscribe("form", "state", seen.append)
        assert bus.emit("form", "state", "idle") == 2
        assert seen == ["idle"]


# ── ContactForm ───────────────────────────────────────────────────────────────


class TestContactForm:
    def test_blur_marks_invalid_email(self):
        form = ContactForm()
        form.edit("email", "not-an-email")
        assert form.blur("email") is False
        assert form["email"].error == "Please enter a valid email address."
        assert form["email"].css_classes == {"error"}

    def test_edit_clears_error_immediately(self):
        form = ContactForm()
        events = []
        form.bus.subscribe("email", "cleared", lambda _: events.append("cleared"))
        form.edit("email", "not-an-email")
        form.blur("email")
        form.edit("email", "not-an-email2")
        assert form["email"].has_error is False
        assert form["email"].css_classes == set()
        assert events == ["cleared"]

    def test_edit_does_not_revalidate(self):
        form = ContactForm()
        form.edit("email", "still-wrong")
        assert form["email"].error is None

    def test_blur_required_field(self):
        form = ContactForm()
        messages = []
        form.bus.subscribe("name", "invalid", messages.append)
        form.edit("name", "   ")
        assert form.blur("name") is False
        assert messages == ["This field is required."]

    def test_validate_all_marks_every_failing_field(self):
        form = _filled_form(name="", email="x")
        assert form.validate_all() is False
        assert set(form.errors()) == {"name", "email"}

    def test_payload_uses_wire_names(self):
        form = _filled_form(name="  A  ")
        assert form.payload("tok") == {
            "name": "A",
            "email": "a@b.com",
            "message": "hi",
            "token": "tok",
        }

    def test_reset_clears_values_and_errors(self):
        form = _filled_form(email="x")
        form.validate_all()
        form.reset()
        assert all(f.value == "" and f.error is None for f in form.fields.values())


# ── SubmissionFlow ────────────────────────────────────────────────────────────


class TestSubmissionFlow:
    async def test_success_clears_form(self):
        handler, requests = _respond(
            200, {"success": True, "message": "Form submitted successfully!"}
        )
        form = _filled_form()
        async with _client(handler) as http:
            flow = SubmissionFlow(form, http, ENDPOINT)
            outcome = await flow.submit("valid")
        assert outcome.success is True
        assert flow.state is SubmissionState.SUCCESS
        assert flow.status_message == "Form submitted successfully!"
        assert flow.status_class == "success"
        assert flow.submit_enabled is True
        assert form["name"].value == ""
        assert json.loads(requests[0].content)["token"] == "valid"

    async def test_rejection_shows_server_message_and_keeps_values(self):
        handler, _ = _respond(
            400,
            {
                "success": False,
                "message": "Failed CAPTCHA verification.",
                "code": "captcha_rejected",
            },
        )
        form = _filled_form()
        async with _client(handler) as http:
            flow = SubmissionFlow(form, http, ENDPOINT)
            outcome = await flow.submit("bad")
        assert outcome.success is False
        assert flow.state is SubmissionState.FAILURE
        assert flow.status_message == "Failed CAPTCHA verification."
        assert form["email"].value == "a@b.com"

    async def test_transport_error_uses_generic_message(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        form = _filled_form()
        async with _client(handler) as http:
            flow = SubmissionFlow(form, http, ENDPOINT)
            outcome = await flow.submit("tok")
        assert outcome.message == GENERIC_FAILURE_MESSAGE
        assert flow.state is SubmissionState.FAILURE
        assert flow.submit_enabled is True
        assert form["message"].value == "hi"

    async def test_unreadable_response_uses_generic_message(self):
        def handler(request):
            return httpx.Response(502, text="<html>Bad Gateway</html>")

        async with _client(handler) as http:
            flow = SubmissionFlow(_filled_form(), http, ENDPOINT)
            outcome = await flow.submit("tok")
        assert outcome.message == GENERIC_FAILURE_MESSAGE

    async def test_invalid_form_is_not_sent(self):
        handler, requests = _respond(200, {"success": True, "message": "ok"})
        form = _filled_form(email="not-an-email")
        async with _client(handler) as http:
            flow = SubmissionFlow(form, http, ENDPOINT)
            outcome = await flow.submit("tok")
        assert outcome is None
        assert requests == []
        assert flow.state is SubmissionState.IDLE
        assert form["email"].error == "Please enter a valid email address."

    async def test_submit_while_in_flight_is_ignored(self):
        release = asyncio.Event()
        calls = []

        async def handler(request):
            calls.append(request)
            await release.wait()
            return httpx.Response(200, json={"success": True, "message": "ok"})

        form = _filled_form()
        states = []
        form.bus.subscribe("form", "state", states.append)
        async with _client(handler) as http:
            flow = SubmissionFlow(form, http, ENDPOINT)
            first = asyncio.create_task(flow.submit("tok"))
            while flow.state is not SubmissionState.SUBMITTING:
                await asyncio.sleep(0)
            assert flow.submit_enabled is False
            assert flow.status_message == SENDING_MESSAGE
            assert await flow.submit("tok") is None
            release.set()
            await first
        assert len(calls) == 1
        assert states == [SubmissionState.SUBMITTING, SubmissionState.SUCCESS]

    async def test_failure_then_resubmit_reenters_submitting(self):
        responses = iter(
            [
                httpx.Response(500, json={"success": False, "message": "Server error verifying CAPTCHA"}),
                httpx.Response(200, json={"success": True, "message": "ok"}),
            ]
        )

        def handler(request):
            return next(responses)

        async with _client(handler) as http:
            flow = SubmissionFlow(_filled_form(), http, ENDPOINT)
            await flow.submit("tok")
            assert flow.state is SubmissionState.FAILURE
            await flow.submit("tok")
        assert flow.state is SubmissionState.SUCCESS


# ── Storage ───────────────────────────────────────────────────────────────────


class TestStorage:
    def test_in_memory_round_trip(self):
        store = InMemoryStore()
        assert store.load("k") is None
        store.save("k", "v")
        assert store.load("k") == "v"

    def test_json_file_store_persists(self, tmp_path):
        path = tmp_path / "prefs" / "ui.json"
        JsonFileStore(path).save(THEME_STORAGE_KEY, "light")
        assert JsonFileStore(path).load(THEME_STORAGE_KEY) == "light"

    def test_json_file_store_tolerates_corrupt_file(self, tmp_path):
        path = tmp_path / "ui.json"
        path.write_text("{not json", encoding="utf-8")
        store = JsonFileStore(path)
        assert store.load(THEME_STORAGE_KEY) is None
        store.save(THEME_STORAGE_KEY, "dark")
        assert store.load(THEME_STORAGE_KEY) == "dark"


# ── UiState ───────────────────────────────────────────────────────────────────


class TestUiState:
    def test_defaults_to_dark(self):
        ui = UiState(InMemoryStore())
        assert ui.load() == "dark"
        assert ui.body_class is None

    def test_restores_saved_theme(self):
        ui = UiState(InMemoryStore({THEME_STORAGE_KEY: "custom-light"}))
        assert ui.load() == "custom-light"
        assert ui.body_class == "custom-light-mode"
        assert ui.toggle_label == "Custom"

    def test_ignores_unknown_saved_theme(self):
        ui = UiState(InMemoryStore({THEME_STORAGE_KEY: "neon"}))
        assert ui.load() == "dark"

    def test_cycle_wraps_and_persists(self):
        store = InMemoryStore()
        ui = UiState(store)
        ui.load()
        assert [ui.cycle_theme() for _ in range(3)] == ["light", "custom-light", "dark"]
        assert store.load(THEME_STORAGE_KEY) == "dark"

    def test_theme_change_is_announced(self):
        ui = UiState(InMemoryStore())
        seen = []
        ui.bus.subscribe("document", "themeChanged", seen.append)
        ui.set_theme("light")
        assert seen == [{"theme": "light"}]
        assert ui.toggle_icon == "fa-sun"

    def test_unknown_theme_rejected(self):
        with pytest.raises(ValueError):
            UiState(InMemoryStore()).set_theme("neon")

    def test_active_section(self):
        ui = UiState(InMemoryStore())
        seen = []
        ui.bus.subscribe("navigation", "activeLinkChanged", seen.append)
        ui.set_active_section("projects")
        ui.set_active_section("projects")
        assert ui.is_section_link_active("#projects") is True
        assert ui.is_section_link_active("#about") is False
        assert seen == [{"section": "projects"}]

    @pytest.mark.parametrize(
        "path, page",
        [("/", "index.html"), ("/about.html", "about.html"), ("", "index.html")],
    )
    def test_current_page(self, path, page):
        ui = UiState(InMemoryStore())
        assert ui.set_current_page(path) == page
        assert ui.is_page_link_active(page) is True
