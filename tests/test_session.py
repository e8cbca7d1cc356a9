"""Tests for the session collaborator, the session context and export."""

from __future__ import annotations

import threading

import pytest

from conftest import StubEngine
from webcraft.core.errors import GenerationInProgressError, ProviderError, ValidationError
from webcraft.core.models import GenerationResult
from webcraft.core.pipeline import GenerationPipeline
from webcraft.storage.artifact_store import MemoryArtifactStore
from webcraft.storage.session_store import (
    ACTIVE_USER_FILENAME,
    JsonSessionStore,
    StaticSessionStore,
    User,
)
from webcraft.utils.export import export_artifact, export_filename
from webcraft.utils.state import SessionContext


class TestJsonSessionStore:
    def test_signup_logs_in(self, tmp_path):
        store = JsonSessionStore(tmp_path)
        user = store.signup("Ada", "ada@example.com", "secret")
        assert user.name == "Ada"
        assert store.current_user() == user
        assert store.display_name() == "Ada"

    def test_duplicate_email_rejected(self, tmp_path):
        store = JsonSessionStore(tmp_path)
        store.signup("Ada", "ada@example.com", "secret")
        assert store.signup("Other", "ada@example.com", "x") is None

    def test_login_and_logout(self, tmp_path):
        store = JsonSessionStore(tmp_path)
        store.signup("Ada", "ada@example.com", "secret")
        store.logout()
        assert store.current_user() is None

        assert store.login("ada@example.com", "wrong") is None
        assert store.login("ada@example.com", "secret").email == "ada@example.com"
        assert JsonSessionStore(tmp_path).display_name() == "Ada"

    def test_active_session_has_no_password(self, tmp_path):
        store = JsonSessionStore(tmp_path)
        store.signup("Ada", "ada@example.com", "secret")
        assert "secret" not in (tmp_path / ACTIVE_USER_FILENAME).read_text(encoding="utf-8")

    def test_malformed_session_ignored(self, tmp_path):
        (tmp_path / ACTIVE_USER_FILENAME).write_text("{oops", encoding="utf-8")
        assert JsonSessionStore(tmp_path).current_user() is None


class FallbackGenerator:
    """Generator that leaves the title to the caller's fallback."""

    def run(self, raw_prompt, fallback_title=None):
        return GenerationResult.create(prompt=raw_prompt, title=fallback_title, code="<p></p>")


def make_context(generator=None, **kwargs) -> SessionContext:
    context = SessionContext(
        generator=generator or GenerationPipeline(engine=StubEngine(reply="```html\n<h1>hi</h1>\n```")),
        artifacts=MemoryArtifactStore(**kwargs),
        sessions=StaticSessionStore(User(id="1", name="Ada", email="ada@example.com")),
    )
    context.start()
    return context


class TestSessionContext:
    def test_generate_records_and_selects(self):
        context = make_context()
        result = context.generate("my portfolio")

        assert context.history() == [result]
        assert context.selected == result
        assert result.code == "<h1>hi</h1>"
        assert context.display_name == "Ada"

    def test_positional_fallback_title(self):
        context = make_context(generator=FallbackGenerator())
        context.generate("first")
        second = context.generate("second")
        assert second.title == "Website 2"

    def test_failed_generation_leaves_history_alone(self):
        context = make_context(generator=GenerationPipeline(engine=StubEngine(error=ProviderError("down"))))
        with pytest.raises(ProviderError):
            context.generate("a blog")
        assert context.history() == []
        assert not context.is_generating

    def test_blank_prompt(self):
        context = make_context()
        with pytest.raises(ValidationError):
            context.generate("  ")

    def test_single_flight(self):
        started = threading.Event()
        release = threading.Event()

        class SlowGenerator(FallbackGenerator):
            def run(self, raw_prompt, fallback_title=None):
                started.set()
                release.wait(timeout=5)
                return super().run(raw_prompt, fallback_title)

        context = make_context(generator=SlowGenerator())
        worker = threading.Thread(target=context.generate, args=("slow",))
        worker.start()
        assert started.wait(timeout=5)

        assert context.is_generating
        with pytest.raises(GenerationInProgressError):
            context.generate("second")

        release.set()
        worker.join(timeout=5)
        assert not context.is_generating
        assert len(context.history()) == 1

    def test_result_after_close_is_discarded(self):
        context = make_context()

        class ClosingGenerator(FallbackGenerator):
            def run(self, raw_prompt, fallback_title=None):
                context.close()
                return super().run(raw_prompt, fallback_title)

        context.generator = ClosingGenerator()
        assert context.generate("bye") is None
        assert context.history() == []

    def test_selection_cleared_after_eviction(self):
        context = make_context(capacity=1)
        first = context.generate("first")
        context.select(first.id)
        context.generate("second")
        context.selected_id = first.id

        assert context.selected is None
        assert context.selected_id is None

    def test_select_unknown(self):
        context = make_context()
        context.generate("a blog")
        assert context.select("nope") is None
        assert context.selected is None

    def test_clear_history(self):
        context = make_context()
        context.generate("a blog")
        context.clear_history()
        assert context.history() == []
        assert context.export_selected() is None

    def test_export_selected(self):
        context = make_context()
        context.generate("restaurant site")
        exported = context.export_selected()
        assert exported.filename == "restaurant-website.html"
        assert exported.content == "<h1>hi</h1>"
        assert exported.media_type == "text/html"


class TestExport:
    @pytest.mark.parametrize(
        ("title", "expected"),
        [
            ("Portfolio Website", "portfolio-website.html"),
            ("My   Cool\tSite", "my-cool-site.html"),
            ("E-commerce Website", "e-commerce-website.html"),
        ],
    )
    def test_filename(self, title, expected):
        assert export_filename(title) == expected

    def test_write_to(self, tmp_path, make_result):
        artifact = make_result(1, title="Landing Page")
        target = export_artifact(artifact).write_to(tmp_path / "out")
        assert target.name == "landing-page.html"
        assert target.read_text(encoding="utf-8") == artifact.code
