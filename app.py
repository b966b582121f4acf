"""
PDF Notes
=========
A Streamlit application that turns an uploaded PDF into structured notes:
the document text is cleaned, summarized by Gemini into titled sections and
keywords, and the result can be highlighted, charted, read aloud, saved to
a local library, and exported as PDF, Word, text or JSON.
"""

from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path

import streamlit as st
import streamlit.components.v1 as components

# ── Ensure project root is on sys.path for imports ──────────────────────
PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.storage import BlobStore, NoteLibrary
from config import (
    DEFAULT_MODEL,
    GEMINI_API_KEY,
    GEMINI_MODELS,
    MAX_PDF_SIZE_MB,
    SPEECH_RATE_MAX,
    SPEECH_RATE_MIN,
    SPEECH_RATE_STEP,
    configure_logging,
)
from modules.analytics import keyword_stats, reading_time_minutes
from modules.charts import keyword_chart
from modules.errors import NotesError
from modules.exporters import EXPORT_FORMATS, export_filename
from modules.keywords import annotate
from modules.models import AppSettings, ProcessingOptions
from modules.pipeline import NotePipeline
from modules.rendering import HIGHLIGHT_CSS, segments_to_html
from modules.session import AppSession
from modules.speech import cancel_speech_html, speech_html, speech_text
from modules.summarizer import GeminiSummarizer


# ═══════════════════════════════════════════════════════════════════════════
# Page config
# ═══════════════════════════════════════════════════════════════════════════
st.set_page_config(
    page_title="PDF Notes | Structured Notes from any PDF",
    page_icon="📝",
    layout="wide",
)
st.markdown(HIGHLIGHT_CSS, unsafe_allow_html=True)


@st.cache_resource
def _get_library() -> NoteLibrary:
    configure_logging()
    return NoteLibrary(BlobStore())


library = _get_library()

# ═══════════════════════════════════════════════════════════════════════════
# Session-state defaults
# ═══════════════════════════════════════════════════════════════════════════
_VIEWS = ["Generator", "Library", "Settings"]

_DEFAULTS: dict = {
    "view": "Generator",
    "_goto": None,
    "upload_id": None,
    "pending_delete": None,
}

if "app_session" not in st.session_state:
    _new_session = AppSession()
    _new_session.load(library)
    st.session_state["app_session"] = _new_session

for key, val in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = val

session: AppSession = st.session_state["app_session"]

# Navigation requested by a button on the previous run.
if st.session_state["_goto"]:
    st.session_state["view"] = st.session_state["_goto"]
    st.session_state["_goto"] = None


# ═══════════════════════════════════════════════════════════════════════════
# Sign in (stub: any email + password)
# ═══════════════════════════════════════════════════════════════════════════
def _render_auth() -> None:
    st.markdown("## PDF to Notes Converter")
    tab_login, tab_signup, tab_reset = st.tabs(["Sign in", "Sign up", "Forgot password"])

    with tab_login:
        with st.form("login"):
            email = st.text_input("Email")
            password = st.text_input("Password", type="password")
            if st.form_submit_button("Sign in", type="primary"):
                if session.login(email, password):
                    st.rerun()
                st.error("Enter your email and password.")

    with tab_signup:
        with st.form("signup"):
            name = st.text_input("Full name")
            email = st.text_input("Email", key="signup_email")
            password = st.text_input("Password", type="password", key="signup_password")
            if st.form_submit_button("Create account", type="primary"):
                if name.strip() and session.login(email, password, name):
                    st.rerun()
                st.error("Fill in your name, email and password.")

    with tab_reset:
        with st.form("reset"):
            email = st.text_input("Email", key="reset_email")
            if st.form_submit_button("Send reset link") and email.strip():
                st.info(f"Password reset link sent to {email.strip()}")


if not session.signed_in:
    _render_auth()
    st.stop()


# ═══════════════════════════════════════════════════════════════════════════
# Sidebar
# ═══════════════════════════════════════════════════════════════════════════
with st.sidebar:
    st.markdown("### 📝 PDF Notes")
    st.radio("Navigate", _VIEWS, key="view", label_visibility="collapsed")

    st.divider()
    gemini_key = st.text_input(
        "Gemini API Key",
        value=GEMINI_API_KEY,
        type="password",
        help="Get your key at https://aistudio.google.com/apikey",
    )
    _model_index = GEMINI_MODELS.index(DEFAULT_MODEL) if DEFAULT_MODEL in GEMINI_MODELS else 0
    selected_model = st.selectbox("Model", GEMINI_MODELS, index=_model_index)
    if not gemini_key:
        st.warning("Enter your Gemini API key to generate notes.")

    st.divider()
    st.caption(f"Signed in as **{session.user.name}**")
    if st.button("Sign out", use_container_width=True):
        session.logout()
        st.rerun()


# ═══════════════════════════════════════════════════════════════════════════
# Generator
# ═══════════════════════════════════════════════════════════════════════════
def _read_options() -> ProcessingOptions:
    st.markdown("#### Options")
    col1, col2, col3 = st.columns(3)
    intro = col1.checkbox("Introduction", value=True)
    summary = col2.checkbox("Abstract / Summary", value=True)
    conclusion = col3.checkbox("Conclusion", value=True)
    keywords = st.text_input(
        "Custom keywords (comma-separated)",
        key="custom_keywords",
        placeholder="e.g. OSI Model, TCP handshake",
        help="Topics to search the whole document for. They get their own sections.",
    )
    level = st.radio(
        "Summarization level",
        ["brief", "detailed"],
        index=1,
        horizontal=True,
        format_func=str.title,
    )
    return ProcessingOptions(
        extract_introduction=intro,
        extract_summary=summary,
        extract_conclusion=conclusion,
        custom_keywords=keywords,
        summarization_level=level,
    )


def _generate(uploaded, options: ProcessingOptions) -> None:
    token = session.begin_generation()
    status = st.status("Processing...", expanded=True)

    def _on_state(_state, label: str) -> None:
        if label:
            status.update(label=label)
            status.write(label)

    pipeline = NotePipeline(
        GeminiSummarizer(api_key=gemini_key, model=selected_model),
        on_state=_on_state,
    )
    try:
        result = pipeline.run(uploaded.getvalue(), options, filename=uploaded.name)
    except NotesError as exc:
        status.update(label="Failed", state="error")
        st.error(exc.user_message)
        return

    if not session.complete_generation(token, result):
        return
    status.update(label="Notes ready", state="complete", expanded=False)

    settings = library.get_settings()
    session.settings = settings
    if settings.auto_save:
        library.save_note(result, reading_time_minutes(result))
        session.is_saved = True


def _render_speech_controls() -> None:
    with st.popover("🔊 Read aloud"):
        rate = st.slider(
            "Reading speed",
            min_value=SPEECH_RATE_MIN,
            max_value=SPEECH_RATE_MAX,
            value=1.0,
            step=SPEECH_RATE_STEP,
            key="speech_rate",
        )
        spell = st.checkbox(
            "Enhanced pronunciation",
            key="spell_acronyms",
            help='Spell out acronyms when reading (e.g. "O S I").',
        )
        st.checkbox(
            "Visual guides",
            key="show_guides",
            help="Underline acronyms and show how to pronounce them.",
        )
        col_play, col_stop = st.columns(2)
        if col_play.button("▶ Play", use_container_width=True):
            components.html(speech_html(speech_text(session.result, spell), rate), height=0)
        if col_stop.button("■ Stop", use_container_width=True):
            components.html(cancel_speech_html(), height=0)


def _render_result(user_keywords: list[str]) -> None:
    result = session.result
    minutes = reading_time_minutes(result)

    st.markdown("---")
    head_col, save_col = st.columns([4, 1])
    head_col.markdown(f"## {result.title}")
    head_col.caption(f"⏱ {minutes} min read")
    if save_col.button(
        "✓ Saved" if session.is_saved else "Save to Library",
        disabled=session.is_saved,
        use_container_width=True,
    ):
        library.save_note(result, minutes)
        session.is_saved = True
        st.rerun()

    tool_cols = st.columns(len(EXPORT_FORMATS) + 1)
    with tool_cols[0]:
        _render_speech_controls()
    for col, spec in zip(tool_cols[1:], EXPORT_FORMATS.values()):
        col.download_button(
            spec.label,
            data=spec.render(result),
            file_name=export_filename(result, spec.ext),
            mime=spec.mime,
            use_container_width=True,
        )

    stats = keyword_stats(result, user_keywords)
    fig = keyword_chart(stats)
    if fig is not None:
        st.plotly_chart(fig, use_container_width=True)

    show_guides = st.session_state.get("show_guides", False)
    for section in result.sections:
        st.markdown(f"### {section.heading}")
        segments = annotate(section.content, user_keywords, result.keywords_found)
        st.markdown(
            f'<div class="note-body">{segments_to_html(segments, show_guides)}</div>',
            unsafe_allow_html=True,
        )
        with st.expander("Copy section", expanded=False):
            st.code(section.content, language=None)


def _render_generator() -> None:
    st.markdown("## Generate Notes")
    uploaded = st.file_uploader(
        "Upload a PDF",
        type=["pdf"],
        help=f"Max {MAX_PDF_SIZE_MB} MB",
    )
    # A new upload discards whatever is on display.
    upload_id = getattr(uploaded, "file_id", None) if uploaded is not None else None
    if uploaded is not None and upload_id != st.session_state["upload_id"]:
        st.session_state["upload_id"] = upload_id
        session.clear_result()

    options = _read_options()
    if st.button(
        "Generate Notes",
        type="primary",
        use_container_width=True,
        disabled=uploaded is None or not gemini_key,
    ):
        _generate(uploaded, options)

    if session.result is not None:
        _render_result(options.user_keywords)
    elif uploaded is None:
        st.info(
            "Upload a document to generate structured, intelligent notes. "
            "Access your saved notes in the Library at any time."
        )


# ═══════════════════════════════════════════════════════════════════════════
# Library
# ═══════════════════════════════════════════════════════════════════════════
def _render_library() -> None:
    st.markdown("## My Library")
    st.caption("Manage your saved notes and summaries.")
    term = st.text_input("Search notes...", label_visibility="collapsed", placeholder="Search notes...")
    notes = library.search_notes(term)

    if not notes:
        st.info("Try a different search term." if term else "Generate and save some notes to see them here.")
        return

    cols = st.columns(3)
    for i, note in enumerate(notes):
        with cols[i % 3].container(border=True):
            st.markdown(f"**{note.title}**")
            tags = " ".join(f"`#{k}`" for k in note.keywords_found[:3])
            if len(note.keywords_found) > 3:
                tags += f" `+{len(note.keywords_found) - 3}`"
            if tags:
                st.markdown(tags)
            created = datetime.fromtimestamp(note.created_at / 1000).strftime("%Y-%m-%d")
            st.caption(f"📅 {created} · ⏱ {note.reading_time_minutes} min read")

            view_col, del_col = st.columns(2)
            if view_col.button("View Note", key=f"view_{note.id}", use_container_width=True):
                session.show_saved(note)
                st.session_state["_goto"] = "Generator"
                st.rerun()
            if st.session_state["pending_delete"] == note.id:
                if del_col.button("Confirm", key=f"confirm_{note.id}", type="primary", use_container_width=True):
                    library.delete_note(note.id)
                    st.session_state["pending_delete"] = None
                    st.rerun()
            elif del_col.button("Delete", key=f"del_{note.id}", use_container_width=True):
                st.session_state["pending_delete"] = note.id
                st.rerun()


# ═══════════════════════════════════════════════════════════════════════════
# Settings
# ═══════════════════════════════════════════════════════════════════════════
def _render_settings() -> None:
    st.markdown("## Settings")
    st.caption("Manage your account preferences and data.")

    with st.container(border=True):
        st.markdown("#### Account")
        col1, col2 = st.columns(2)
        col1.text_input("Full Name", value=session.user.name, disabled=True)
        col2.text_input("Email Address", value=session.user.email, disabled=True)

    with st.container(border=True):
        st.markdown("#### Preferences")
        auto_save = st.toggle(
            "Auto-save Notes",
            value=session.settings.auto_save,
            help="Automatically save generated notes to your library.",
        )
        if st.button("Save Preferences"):
            settings = AppSettings(auto_save=auto_save, theme=session.settings.theme)
            library.save_settings(settings)
            session.settings = settings
            st.success("Settings saved successfully.")

    with st.container(border=True):
        st.markdown("#### Data Management")
        st.download_button(
            "Backup Data",
            data=library.export_data(),
            file_name=f"PDF_Notes_Backup_{datetime.now().strftime('%Y-%m-%d')}.json",
            mime="application/json",
            help="Download a JSON file of all your saved notes.",
        )
        confirm = st.checkbox("I understand this permanently deletes ALL saved notes.")
        if st.button("Clear All", disabled=not confirm):
            library.clear_all_notes()
            st.success("All data has been cleared.")


# ═══════════════════════════════════════════════════════════════════════════
# Router
# ═══════════════════════════════════════════════════════════════════════════
_view = st.session_state["view"]
if _view == "Library":
    _render_library()
elif _view == "Settings":
    _render_settings()
else:
    _render_generator()
