"""Streamlit dashboard: sign in, describe a website, preview and download it.

Run with: streamlit run webcraft/dashboard.py
"""

from __future__ import annotations

import streamlit as st
import streamlit.components.v1 as components

from webcraft.client import RemoteGenerator
from webcraft.config import settings
from webcraft.core.errors import (
    ConfigurationError,
    DuplicateArtifactError,
    GenerationInProgressError,
    ProviderError,
    ValidationError,
)
from webcraft.core.pipeline import GenerationPipeline
from webcraft.storage.artifact_store import JsonArtifactStore
from webcraft.storage.session_store import JsonSessionStore
from webcraft.utils.logger import logger
from webcraft.utils.state import SessionContext

PAGE_TITLE = settings.app.name


def _build_generator():
    if settings.app.api_url:
        return RemoteGenerator(settings.app.api_url)
    return GenerationPipeline()


def init_session_state() -> None:
    if "auth" not in st.session_state:
        st.session_state.auth = JsonSessionStore(settings.storage.data_dir)
    if "webcraft" not in st.session_state:
        context = SessionContext(
            generator=_build_generator(),
            artifacts=JsonArtifactStore.in_directory(
                settings.storage.data_dir, capacity=settings.storage.history_limit
            ),
            sessions=st.session_state.auth,
        )
        context.start()
        st.session_state.webcraft = context
    if "generation_error" not in st.session_state:
        st.session_state.generation_error = ""


def end_session() -> None:
    st.session_state.auth.logout()
    st.session_state.webcraft.close()
    del st.session_state.webcraft


def render_auth() -> None:
    auth: JsonSessionStore = st.session_state.auth
    login_tab, signup_tab = st.tabs(["Sign in", "Create account"])

    with login_tab, st.form("login"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        if st.form_submit_button("Sign in", use_container_width=True):
            if auth.login(email, password):
                st.rerun()
            st.error("Invalid email or password")

    with signup_tab, st.form("signup"):
        name = st.text_input("Name")
        email = st.text_input("Email", key="signup_email")
        password = st.text_input("Password", type="password", key="signup_password")
        if st.form_submit_button("Create account", use_container_width=True):
            if not (name.strip() and email.strip() and password):
                st.error("All fields are required")
            elif auth.signup(name.strip(), email.strip(), password):
                st.rerun()
            else:
                st.error("An account with this email already exists")


def handle_generate(context: SessionContext, prompt: str) -> None:
    st.session_state.generation_error = ""
    try:
        with st.spinner("Generating your website..."):
            context.generate(prompt)
    except ValidationError as exc:
        st.session_state.generation_error = str(exc)
    except ConfigurationError as exc:
        logger.error("Dashboard generation blocked: {}", exc)
        st.session_state.generation_error = str(exc)
    except (ProviderError, GenerationInProgressError) as exc:
        logger.warning("Dashboard generation failed: {}", exc)
        st.session_state.generation_error = str(exc)
    except (OSError, DuplicateArtifactError) as exc:
        logger.error("Could not save generated website: {}", exc)
        st.session_state.generation_error = f"The website was generated but could not be saved: {exc}"


def render_sidebar(context: SessionContext) -> None:
    st.sidebar.header(f"Welcome back, {context.display_name}")
    st.sidebar.caption(f"{len(context.artifacts)} / {context.artifacts.capacity} websites stored")

    st.sidebar.header("History")
    history = context.history()
    if not history:
        st.sidebar.info("No websites yet")
    for artifact in history:
        label = f"{artifact.title} · {artifact.created_at[:10]}"
        if st.sidebar.button(label, key=f"select_{artifact.id}", use_container_width=True):
            context.select(artifact.id)
            st.rerun()

    st.sidebar.divider()
    if history:
        st.sidebar.button("Clear history", on_click=context.clear_history, type="secondary")
    st.sidebar.button("Sign out", on_click=end_session, type="secondary")


def render_preview(context: SessionContext) -> None:
    artifact = context.selected
    if artifact is None:
        st.info("No website selected. Generate one or pick it from the history.")
        return

    st.subheader(f"Preview: {artifact.title}")
    st.caption(artifact.prompt)

    exported = context.export_selected()
    st.download_button(
        "Download HTML",
        data=exported.content,
        file_name=exported.filename,
        mime=exported.media_type,
        key=f"download_{artifact.id}",
    )
    preview_tab, code_tab = st.tabs(["Preview", "Code"])
    with preview_tab:
        components.html(artifact.code, height=640, scrolling=True)
    with code_tab:
        st.code(artifact.code, language="html")


def main() -> None:
    st.set_page_config(page_title=PAGE_TITLE, layout="wide")
    init_session_state()

    if st.session_state.auth.current_user() is None:
        st.title(PAGE_TITLE)
        render_auth()
        return

    context: SessionContext = st.session_state.webcraft
    render_sidebar(context)

    st.title("AI Website Builder")
    with st.form("generate", clear_on_submit=True):
        prompt = st.text_area(
            "Describe your website",
            placeholder="Create a modern portfolio website for a developer",
            height=120,
        )
        submitted = st.form_submit_button(
            "Generate website", disabled=context.is_generating, use_container_width=True
        )
    if submitted:
        handle_generate(context, prompt)

    if st.session_state.generation_error:
        st.error(st.session_state.generation_error)

    render_preview(context)


if __name__ == "__main__":
    main()
