"""Participant registration form UI component."""
import logging
import traceback
from typing import Any, Dict, Mapping, MutableMapping, Optional

import streamlit as st

from festival_registration.models.participant import (
    DEPARTMENT_PLACEHOLDER,
    DEPARTMENTS,
    Participant,
)
from festival_registration.services.image_service import (
    ALLOWED_IMAGE_EXTENSIONS,
    make_preview,
    read_uploaded_image,
)
from festival_registration.services.participant_service import (
    delete_participant,
    register_participant,
    search_participant,
    update_participant,
)
from festival_registration.services.participant_store import ParticipantStore
from festival_registration.utils.config import get_database_url
from festival_registration.utils.exceptions import ImageReadError, StoreError
from festival_registration.utils.validation import validate_lookup_id


logger = logging.getLogger(__name__)

FIELD_KEYS = {
    "registration_id": "reg_registration_id",
    "name": "reg_name",
    "department": "reg_department",
    "dancing_partner": "reg_dancing_partner",
    "contact_number": "reg_contact_number",
    "email_address": "reg_email_address",
}
IMAGE_KEY = "reg_image"
IMAGE_LABEL_KEY = "reg_image_label"
IMAGE_FROM_UPLOAD_KEY = "reg_image_from_upload"

DEPARTMENT_OPTIONS = [DEPARTMENT_PLACEHOLDER] + DEPARTMENTS
NO_IMAGE_SELECTED = "No Image Selected"
NO_IMAGE_AVAILABLE = "No Image Available"
IMAGE_PLACEHOLDER_STYLE = (
    "border: 1px dashed #94a3b8; border-radius: 8px; "
    "padding: 60px 12px; text-align: center; color: #64748b;"
)


@st.cache_resource
def get_store() -> ParticipantStore:
    """Open the participant store once per server process."""
    store = ParticipantStore(get_database_url())
    store.open()
    return store


def _form_defaults() -> Dict[str, Any]:
    """Session state values of an empty form."""
    defaults = {key: "" for key in FIELD_KEYS.values()}
    defaults[FIELD_KEYS["department"]] = DEPARTMENT_PLACEHOLDER
    defaults[IMAGE_KEY] = None
    defaults[IMAGE_LABEL_KEY] = NO_IMAGE_SELECTED
    defaults[IMAGE_FROM_UPLOAD_KEY] = False
    return defaults


def _participant_state(participant: Participant) -> Dict[str, Any]:
    """Session state values that load a participant into the form."""
    form = participant.to_form()
    state = {key: form[field] for field, key in FIELD_KEYS.items()}

    if state[FIELD_KEYS["department"]] not in DEPARTMENT_OPTIONS:
        state[FIELD_KEYS["department"]] = DEPARTMENT_PLACEHOLDER

    state[IMAGE_KEY] = participant.id_image
    state[IMAGE_LABEL_KEY] = NO_IMAGE_SELECTED if participant.has_image() else NO_IMAGE_AVAILABLE
    state[IMAGE_FROM_UPLOAD_KEY] = False
    return state


def _sync_uploaded_image(state: MutableMapping[str, Any], data: Optional[bytes]) -> None:
    """Mirror the uploader into the form photo; removing an upload drops it."""
    if data is not None:
        state[IMAGE_KEY] = data
        state[IMAGE_LABEL_KEY] = NO_IMAGE_SELECTED
        state[IMAGE_FROM_UPLOAD_KEY] = True
    elif state.get(IMAGE_FROM_UPLOAD_KEY):
        state[IMAGE_KEY] = None
        state[IMAGE_LABEL_KEY] = NO_IMAGE_SELECTED
        state[IMAGE_FROM_UPLOAD_KEY] = False


def _collect_payload(state: Mapping[str, Any]) -> Dict[str, Any]:
    """Read form values out of session state, keyed by participant field."""
    payload = {field: state.get(key, "") for field, key in FIELD_KEYS.items()}
    payload["id_image"] = state.get(IMAGE_KEY)
    return payload


def _feedback_level(success: bool, message: str) -> str:
    """Map an operation outcome to a message style."""
    if success:
        return "success"
    if message.startswith("Error"):
        return "error"
    return "warning"


def _show_exception(error: Exception, context: str) -> None:
    """Display error details in UI and log full traceback."""
    logger.exception("Registration form error during %s", context)

    st.error(f"❌ {context} failed: {error}")
    with st.expander("🔍 Error details"):
        st.code("".join(traceback.format_exception(type(error), error, error.__traceback__)))


def _set_feedback(success: bool, message: str) -> None:
    st.session_state.reg_feedback = (_feedback_level(success, message), message)


def _schedule_state(state: Dict[str, Any]) -> None:
    """Queue form values to apply before widgets are drawn on the next run."""
    st.session_state.reg_pending_state = state


def _apply_pending_state() -> None:
    pending = st.session_state.pop("reg_pending_state", None)
    if pending is None:
        return

    for key, value in pending.items():
        st.session_state[key] = value

    # New uploader key drops the previous upload
    st.session_state.reg_upload_nonce = st.session_state.get("reg_upload_nonce", 0) + 1


def initialize_form_state() -> None:
    """Initialize form session state defaults."""
    for key, value in _form_defaults().items():
        if key not in st.session_state:
            st.session_state[key] = value

    if "reg_upload_nonce" not in st.session_state:
        st.session_state.reg_upload_nonce = 0

    if "reg_pending_action" not in st.session_state:
        st.session_state.reg_pending_action = None


def _render_feedback() -> None:
    feedback = st.session_state.pop("reg_feedback", None)
    if not feedback:
        return

    level, message = feedback
    if level == "success":
        st.success(f"✅ {message}")
    elif level == "error":
        st.error(f"❌ {message}")
    else:
        st.warning(f"⚠️ {message}")


def _render_fields() -> None:
    st.text_input("Registration ID", key=FIELD_KEYS["registration_id"])
    st.text_input("Participant Name", key=FIELD_KEYS["name"])
    st.selectbox("Department", DEPARTMENT_OPTIONS, key=FIELD_KEYS["department"])
    st.text_input("Dancing Partner", key=FIELD_KEYS["dancing_partner"])
    st.text_input("Contact Number", key=FIELD_KEYS["contact_number"])
    st.text_input("Email Address", key=FIELD_KEYS["email_address"])


def _render_image_panel() -> None:
    uploaded = st.file_uploader(
        "University ID Image",
        type=list(ALLOWED_IMAGE_EXTENSIONS),
        key=f"reg_upload_{st.session_state.reg_upload_nonce}",
    )

    data = None
    if uploaded is not None:
        try:
            data = read_uploaded_image(uploaded)
        except ImageReadError as error:
            st.error(f"❌ {error}")
    _sync_uploaded_image(st.session_state, data)

    image_data = st.session_state.get(IMAGE_KEY)
    if image_data:
        try:
            st.image(make_preview(image_data), caption="ID preview")
        except ImageReadError as error:
            st.error(f"❌ {error}")
    else:
        label = st.session_state.get(IMAGE_LABEL_KEY, NO_IMAGE_SELECTED)
        st.markdown(
            f"<div style=\"{IMAGE_PLACEHOLDER_STYLE}\">{label}</div>",
            unsafe_allow_html=True,
        )


def _render_actions(store: ParticipantStore) -> None:
    cols = st.columns(6, gap="small")

    with cols[0]:
        if st.button("Register", type="primary", width="stretch", key="reg_btn_register"):
            success, message = register_participant(store, _collect_payload(st.session_state))
            _set_feedback(success, message)
            if success:
                _schedule_state(_form_defaults())
            st.rerun()

    with cols[1]:
        if st.button("Search", width="stretch", key="reg_btn_search"):
            success, message, participant = search_participant(
                store, st.session_state[FIELD_KEYS["registration_id"]]
            )
            _set_feedback(success, message)
            if success:
                _schedule_state(_participant_state(participant))
            st.rerun()

    with cols[2]:
        if st.button("Update", width="stretch", key="reg_btn_update"):
            success, message = update_participant(store, _collect_payload(st.session_state))
            _set_feedback(success, message)
            st.rerun()

    with cols[3]:
        if st.button("Delete", width="stretch", key="reg_btn_delete"):
            registration_id = st.session_state[FIELD_KEYS["registration_id"]]
            is_valid, error_msg = validate_lookup_id(registration_id)
            if is_valid:
                st.session_state.reg_pending_action = "delete"
                st.session_state.reg_delete_id = registration_id.strip()
            else:
                _set_feedback(False, error_msg)
            st.rerun()

    with cols[4]:
        if st.button("Clear", width="stretch", key="reg_btn_clear"):
            _schedule_state(_form_defaults())
            st.session_state.reg_pending_action = None
            st.rerun()

    with cols[5]:
        if st.button("Exit", width="stretch", key="reg_btn_exit"):
            st.session_state.reg_pending_action = "exit"
            st.rerun()


def render_delete_confirmation(store: ParticipantStore) -> None:
    """Render delete confirmation step."""
    registration_id = st.session_state.get("reg_delete_id")

    if not registration_id:
        st.session_state.reg_pending_action = None
        return

    with st.container():
        st.warning(f"⚠️ Are you sure you want to delete participant with ID: {registration_id}?")

        confirm_col, cancel_col = st.columns(2, gap="small")

        with confirm_col:
            if st.button("✅ Yes, delete", type="primary", width="stretch", key="reg_confirm_delete"):
                success, message = delete_participant(store, registration_id)
                _set_feedback(success, message)
                if success:
                    _schedule_state(_form_defaults())
                st.session_state.reg_pending_action = None
                st.session_state.pop("reg_delete_id", None)
                st.rerun()

        with cancel_col:
            if st.button("❌ Cancel", width="stretch", key="reg_cancel_delete"):
                st.session_state.reg_pending_action = None
                st.session_state.pop("reg_delete_id", None)
                st.rerun()


def render_exit_confirmation(store: ParticipantStore) -> None:
    """Render exit confirmation step; closing disposes the store."""
    with st.container():
        st.warning("⚠️ Are you sure you want to exit?")

        confirm_col, cancel_col = st.columns(2, gap="small")

        with confirm_col:
            if st.button("✅ Yes, exit", type="primary", width="stretch", key="reg_confirm_exit"):
                store.close()
                get_store.clear()
                st.session_state.reg_exited = True
                st.session_state.reg_pending_action = None
                st.rerun()

        with cancel_col:
            if st.button("❌ Cancel", width="stretch", key="reg_cancel_exit"):
                st.session_state.reg_pending_action = None
                st.rerun()


def render_registration_form(store: ParticipantStore) -> None:
    """Render the participant registration page."""
    try:
        _apply_pending_state()
        initialize_form_state()

        st.markdown("## 💃 SALSA Dance Festival: Participant Registration")
        _render_feedback()

        field_col, image_col = st.columns([2, 1], gap="large")
        with field_col:
            _render_fields()
        with image_col:
            _render_image_panel()

        _render_actions(store)

        action = st.session_state.get("reg_pending_action")
        if action == "delete":
            render_delete_confirmation(store)
        elif action == "exit":
            render_exit_confirmation(store)

        try:
            st.caption(f"{store.count()} participant(s) registered")
        except StoreError as error:
            st.warning(f"⚠️ {error}")
    except Exception as error:
        _show_exception(error, "Loading registration form")
