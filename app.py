"""
SALSA Dance Festival participant registration desk
"""
import logging

import streamlit as st

from festival_registration.ui.registration_form import get_store, render_registration_form
from festival_registration.utils.config import get_log_level
from festival_registration.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


st.set_page_config(
    page_title="SALSA Dance Festival - Participant Registration System",
    page_icon="💃",
    layout="wide",
    initial_sidebar_state="collapsed"
)


def configure_logging():
    """Configure root logging once from LOG_LEVEL."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main():
    """Application entry point."""
    configure_logging()

    if st.session_state.get("reg_exited"):
        st.info("Registration desk closed. Reload the page to start again.")
        st.stop()

    try:
        store = get_store()
    except StoreError as e:
        logger.error(f"Startup aborted: {e}")
        st.error(f"❌ {e}")
        st.stop()

    try:
        render_registration_form(store)
    except Exception as e:
        logger.exception("Unhandled exception during app execution")
        st.error("Application error, please reload the page")
        st.code(str(e))

        if st.button("🔄 Reload"):
            st.session_state.clear()
            st.rerun()


if __name__ == "__main__":
    main()
