"""
Sheet Chat - Streamlit UI

Upload Excel workbooks, pick a sheet and ask questions about it.
Run with: streamlit run src/sheet_chat/ui/app.py
"""

import sys
from pathlib import Path

import streamlit as st

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

# Configure logging ONCE at entry point
from sheet_chat.ui.logging_config import configure_logging

configure_logging()

# Imports after logging config (intentional - logging must be configured first)
import structlog  # noqa: E402

from sheet_chat.core.config_loader import load_query_config, load_ui_config  # noqa: E402
from sheet_chat.core.conversation_manager import ConversationManager  # noqa: E402
from sheet_chat.core.formatting import format_markdown  # noqa: E402
from sheet_chat.core.profiling import profile_table  # noqa: E402
from sheet_chat.core.query_engine import QueryEngine  # noqa: E402
from sheet_chat.core.record_store import RecordStore, WorkbookLoadError  # noqa: E402
from sheet_chat.ui.helpers import (  # noqa: E402
    history_download_payload,
    pending_uploads,
    profile_sample_frame,
    result_to_frame,
)

logger = structlog.get_logger()

ui_config = load_ui_config()

st.set_page_config(page_title=ui_config["page_title"], page_icon="📊", layout="wide")


@st.cache_resource(show_spinner=False)
def get_engine() -> QueryEngine:
    """Engine is stateless apart from its config, so one instance serves every session."""
    return QueryEngine(load_query_config())


def get_store() -> RecordStore:
    if "record_store" not in st.session_state:
        st.session_state["record_store"] = RecordStore()
    return st.session_state["record_store"]


def get_history() -> ConversationManager:
    if "history" not in st.session_state:
        st.session_state["history"] = ConversationManager()
    return st.session_state["history"]


def render_sidebar(store: RecordStore) -> None:
    """File upload, file/sheet selection and file removal."""
    st.sidebar.header("Files")
    uploads = st.sidebar.file_uploader(
        "Upload Excel files",
        type=["xlsx"],
        accept_multiple_files=True,
        help=f"Maximum file size: {ui_config['max_upload_size_mb']}MB",
        key="file_uploader",
    )
    seen: set[str] = st.session_state.setdefault("seen_uploads", set())
    for upload in pending_uploads(uploads, seen):
        if upload.size > ui_config["max_upload_size_mb"] * 1024 * 1024:
            st.sidebar.error(f"{upload.name} is larger than {ui_config['max_upload_size_mb']}MB")
            continue
        try:
            store.add_file(upload.name, upload.getvalue())
        except WorkbookLoadError as e:
            st.sidebar.error(str(e))

    if not store.file_names:
        st.sidebar.info("Upload a workbook to get started.")
        return

    selected = st.sidebar.selectbox(
        "File", store.file_names, index=store.file_names.index(store.selected_file), key="file_select"
    )
    if selected != store.selected_file:
        store.select_file(selected)

    sheet = st.sidebar.selectbox(
        "Sheet", store.sheet_names, index=store.sheet_names.index(store.selected_sheet), key="sheet_select"
    )
    if sheet != store.selected_sheet:
        store.select_sheet(sheet)

    if st.sidebar.button("Remove file", key="remove_file"):
        store.remove_file(store.selected_file)
        st.rerun()


def render_overview(store: RecordStore) -> None:
    table = store.active_table
    if table is None:
        return
    profile = profile_table(table)
    with st.expander("📋 Dataset Overview", expanded=False):
        st.caption(profile.summary)
        st.dataframe(profile_sample_frame(profile), use_container_width=True)


def render_history(history: ConversationManager) -> None:
    for exchange in history.get_transcript():
        with st.chat_message("user"):
            st.markdown(exchange.query)
        with st.chat_message("assistant"):
            st.markdown(exchange.response)


def render_history_controls(history: ConversationManager) -> None:
    col1, col2 = st.columns(2)
    data, file_name, mime = history_download_payload(history)
    with col1:
        st.download_button("Export chat history", data=data, file_name=file_name, mime=mime)
    with col2:
        if st.button("Clear chat history"):
            history.clear()
            st.rerun()


def main() -> None:
    st.title("📊 " + ui_config["page_title"])
    store = get_store()
    history = get_history()
    engine = get_engine()

    render_sidebar(store)
    render_overview(store)
    render_history(history)

    table = store.active_table
    question = st.chat_input("Ask a question about the active sheet", disabled=table is None)
    if question:
        query = history.normalize_query(question)
        if not query:
            return
        result = engine.interpret(query, table)
        response = format_markdown(result, max_rows=ui_config["preview_rows"])
        history.add_exchange(query, response, file_name=store.selected_file, sheet_name=store.selected_sheet)
        logger.info("question_answered", query=query, rows=result.row_count)

        with st.chat_message("user"):
            st.markdown(query)
        with st.chat_message("assistant"):
            st.markdown(response)
            if result.row_count > ui_config["preview_rows"]:
                st.dataframe(result_to_frame(result), use_container_width=True)

    if history.get_transcript():
        render_history_controls(history)


main()
