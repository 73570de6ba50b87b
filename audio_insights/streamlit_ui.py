"""Streamlit web UI for AudioInsights."""

import asyncio

import streamlit as st

from audio_insights.assets import DEVELOPER_ASSETS
from audio_insights.inference import DEFAULT_MODEL, AudioAnalysisService
from audio_insights.ingestion import AUDIO_EXTENSIONS, MAX_UPLOAD_MB, format_file_size
from audio_insights.models import AppState, Sentiment
from audio_insights.pipeline import run_analysis
from audio_insights.report import REPORT_MIME_TYPE, build_markdown_report, report_file_name
from audio_insights.state import AppSession, Failed, Reset, is_busy, transition


SENTIMENT_BADGES = {
    Sentiment.POSITIVE: ("🟢", "success"),
    Sentiment.NEUTRAL: ("⚪", "info"),
    Sentiment.NEGATIVE: ("🔴", "error"),
}

PROGRESS_TITLES = {
    AppState.UPLOADING: "Reading Audio...",
    AppState.ANALYZING: "AI Analysis in Progress...",
}


def init_session_state(analysis_service: AudioAnalysisService):
    """Initialize Streamlit session state."""
    if 'analysis_service' not in st.session_state:
        st.session_state.analysis_service = analysis_service
    if 'app_session' not in st.session_state:
        st.session_state.app_session = AppSession()
    if 'uploader_key' not in st.session_state:
        st.session_state.uploader_key = 0
    if 'selected_model' not in st.session_state:
        st.session_state.selected_model = DEFAULT_MODEL


def dispatch(event) -> AppSession:
    """Apply an event to the stored session and keep the result."""
    session = transition(st.session_state.app_session, event)
    st.session_state.app_session = session
    if isinstance(event, Reset):
        # A new key gives a fresh, empty uploader
        st.session_state.uploader_key += 1
    return session


def blockquote(text: str) -> str:
    """Quote every line of text, not just the first."""
    return "\n".join(f"> {line}" for line in text.splitlines()) or "> "


def render_api_key_settings():
    """Sidebar key entry. The key only lives on this session's service."""
    analysis_service = st.session_state.analysis_service

    with st.sidebar.expander("🔑 OpenAI API Key", expanded=not analysis_service.is_configured()):
        st.caption("Kept for this browser session only, never written to disk.")
        with st.form("api_key_form", clear_on_submit=True, border=False):
            api_key_input = st.text_input(
                "OpenAI API Key",
                type="password",
                placeholder="sk-...",
                help="Enter your OpenAI API key (starts with 'sk-')",
            )
            submitted = st.form_submit_button("Use Key", use_container_width=True)

        if submitted:
            success, message = analysis_service.set_api_key(api_key_input)
            if success:
                st.rerun()
            st.error(f"✗ {message}")

        if analysis_service.is_configured():
            if st.button("Forget Key", use_container_width=True, disabled=is_busy(st.session_state.app_session)):
                analysis_service.clear_api_key()
                st.rerun()


def render_sidebar():
    """Settings and model selection."""
    analysis_service = st.session_state.analysis_service

    st.sidebar.title("🧠 AudioInsights AI")
    st.sidebar.markdown("Transcribe and analyze meetings with a hosted audio model.")

    render_api_key_settings()

    st.sidebar.markdown("---")

    choices = analysis_service.get_model_choices()
    labels = [label for label, _ in choices]
    model_ids = [model_id for _, model_id in choices]
    current = st.session_state.selected_model
    selected_label = st.sidebar.selectbox(
        "Analysis Model",
        options=labels,
        index=model_ids.index(current) if current in model_ids else 0,
        disabled=is_busy(st.session_state.app_session),
    )
    st.session_state.selected_model = model_ids[labels.index(selected_label)]

    if analysis_service.is_configured():
        st.sidebar.success("✓ API key configured")
    else:
        st.sidebar.warning("⚠ API key not configured")


def render_developer_assets():
    """Download buttons for the offline processing script bundle."""
    with st.expander("🧑‍💻 Developer Assets (Python Script)", expanded=False):
        st.markdown("Need to run this locally? Download the Python script using Whisper and the OpenAI API.")
        cols = st.columns(len(DEVELOPER_ASSETS))
        for col, asset in zip(cols, DEVELOPER_ASSETS):
            with col:
                st.download_button(
                    asset.label,
                    data=asset.content,
                    file_name=asset.file_name,
                    mime=asset.mime,
                    key=f"asset_{asset.file_name}",
                    use_container_width=True,
                )


def page_upload(session: AppSession):
    """IDLE: upload prompt."""
    analysis_service = st.session_state.analysis_service
    page = st.empty()

    with page.container():
        st.header("Transcribe & Analyze Meetings in Seconds")
        st.markdown(
            "Upload your audio files to get instant executive summaries, "
            "action items, and sentiment analysis."
        )

        configured = analysis_service.is_configured()
        if not configured:
            st.warning("⚠ Set your OpenAI API key in the sidebar before uploading.")

        uploaded_file = st.file_uploader(
            f"Choose an audio file (MP3 or WAV up to {MAX_UPLOAD_MB}MB)",
            type=AUDIO_EXTENSIONS,
            key=f"audio_upload_{st.session_state.uploader_key}",
            disabled=not configured,
        )

        render_developer_assets()

    if uploaded_file is None:
        return

    def show_progress(updated: AppSession):
        st.session_state.app_session = updated
        if is_busy(updated):
            with page.container():
                page_progress(updated)

    page.empty()
    asyncio.run(run_analysis(
        session,
        uploaded_file,
        analysis_service,
        model=st.session_state.selected_model,
        on_change=show_progress,
    ))
    st.rerun()


def page_progress(session: AppSession):
    """UPLOADING / ANALYZING: progress indicator."""
    st.subheader(f"⏳ {PROGRESS_TITLES.get(session.state, 'Working...')}")
    st.markdown("We're transcribing your file and extracting insights. This usually takes 15-30 seconds.")
    st.info(f"🎵 {session.file_name}")
    step = 1 if session.state == AppState.UPLOADING else 2
    st.progress((step - 0.5) / 2, text=f"Step {step} of 2")


def page_error(session: AppSession):
    """ERROR: message and a way back to the upload prompt."""
    st.subheader("❌ Something went wrong")
    st.error(session.error)
    if st.button("🔄 Try Again", type="primary"):
        dispatch(Reset())
        st.rerun()


def page_dashboard(session: AppSession):
    """COMPLETED: results dashboard."""
    result = session.result

    col_title, col_export = st.columns([4, 1])
    with col_title:
        st.header("📊 Analysis Results")
    with col_export:
        st.download_button(
            "📥 Export Report",
            data=build_markdown_report(result, session.file_name),
            file_name=report_file_name(session.file_name),
            mime=REPORT_MIME_TYPE,
            type="primary",
            use_container_width=True,
        )

    col_main, col_side = st.columns([2, 1])

    with col_main:
        with st.container(border=True):
            st.markdown("### 📋 Executive Summary")
            st.markdown(blockquote(result.executive_summary))

        with st.container(border=True):
            st.markdown("### 🎯 Action Items")
            if result.action_items:
                for item in result.action_items:
                    st.markdown(f"☐ **{item.task}**  \nAssignee: `{item.assignee}`")
            else:
                st.caption("No specific action items identified.")

        with st.container(border=True):
            st.markdown("### 💬 Transcript")
            st.text_area(
                "Transcript",
                value=result.transcription,
                height=400,
                disabled=True,
                label_visibility="collapsed",
            )

    with col_side:
        with st.container(border=True):
            st.markdown("### Sentiment Analysis")
            icon, style = SENTIMENT_BADGES[result.sentiment]
            getattr(st, style)(f"{icon} **{result.sentiment.value}**")
            st.caption(result.sentiment_reasoning)

        with st.container(border=True):
            st.markdown("**PROCESSED FILE**")
            st.markdown(f"**{session.file_name}**")
            details = []
            if session.file_size is not None:
                details.append(format_file_size(session.file_size))
            if session.mime_type:
                details.append(session.mime_type)
            if details:
                st.caption(" | ".join(details))
            st.caption(f"Model: {st.session_state.selected_model}")
            st.markdown("Analysis complete")
            if st.button("Upload New File ➜", use_container_width=True):
                dispatch(Reset())
                st.rerun()


STATE_RENDERERS = {
    AppState.IDLE: page_upload,
    AppState.UPLOADING: page_progress,
    AppState.ANALYZING: page_progress,
    AppState.COMPLETED: page_dashboard,
    AppState.ERROR: page_error,
}


def renderer_for(state: AppState):
    """Page function for a state."""
    try:
        return STATE_RENDERERS[state]
    except KeyError:
        raise ValueError(f"No page for state {state.value}") from None


def render_current_state():
    """Draw the page for the stored session's state."""
    session = st.session_state.app_session
    if is_busy(session):
        # A rerun landed mid-analysis, so the earlier run was interrupted
        session = dispatch(Failed("The previous analysis was interrupted. Please try again."))
    renderer_for(session.state)(session)


def create_streamlit_app(analysis_service: AudioAnalysisService):
    """Create and run Streamlit app."""

    st.set_page_config(
        page_title="AudioInsights AI",
        page_icon="🧠",
        layout="wide",
        initial_sidebar_state="expanded"
    )

    init_session_state(analysis_service)
    render_sidebar()
    render_current_state()
