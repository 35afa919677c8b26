"""
Streamlit UI for attempting a job's assessment.

The acting user is identified by an API key (sidebar, defaulting to
UI_API_KEY). Answers autosave to the user's draft slot for the job on
every change; only visible questions are rendered and validated.
"""

import sys
from pathlib import Path

# Add parent directory to path so we can import from the root
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from assessment import QuestionSpec, visible_questions
from config.settings import settings
from services.exceptions import AnswerValidationError, ConflictError, NotFoundError
from ui.db import get_db_session
from ui.services import AssessmentUIService
from utils.logging_config import configure_logging

configure_logging()

# Page configuration
st.set_page_config(
    page_title="Assessment",
    page_icon="📝",
    layout="wide"
)


def initialize_session_state():
    """Initialize Streamlit session state variables."""
    if "answers" not in st.session_state:
        st.session_state.answers = {}  # job_id -> answer mapping
    if "loaded_drafts" not in st.session_state:
        st.session_state.loaded_drafts = set()
    if "just_submitted" not in st.session_state:
        st.session_state.just_submitted = None


def current_user(raw_key):
    with get_db_session() as db:
        return AssessmentUIService(db).resolve_user(raw_key)


def render_question(question: QuestionSpec, value, key: str):
    """Input widget for one question; returns the current answer."""
    label = question.display_label + (" *" if question.required else "")
    type_name = question.type_name
    options = question.options or []

    if type_name == "single-choice":
        values = [o.value for o in options]
        texts = {o.value: o.text for o in options}
        index = values.index(value) if value in values else None
        return st.radio(label, values, index=index, format_func=lambda v: texts.get(v, str(v)), key=key)

    if type_name == "multi-choice":
        values = [o.value for o in options]
        texts = {o.value: o.text for o in options}
        default = [v for v in (value or []) if v in values]
        return st.multiselect(label, values, default=default, format_func=lambda v: texts.get(v, str(v)), key=key)

    if type_name == "long-text":
        return st.text_area(label, value=value or "", placeholder=question.placeholder, key=key)

    if type_name == "file":
        uploaded = st.file_uploader(label, key=key)
        if uploaded is not None:
            return uploaded.name
        if value:
            st.caption(f"Uploaded: {value}")
        return value

    # short-text and numeric are typed as text so the validation messages match the API
    return st.text_input(label, value="" if value is None else str(value), placeholder=question.placeholder, key=key)


def render_attempt(service_user, job):
    job_id = job["id"]
    user_id = service_user["user_id"]

    with get_db_session() as db:
        state = AssessmentUIService(db).attempt_state(job_id, user_id)

    if state["status"] == "unavailable":
        st.info("This job has no assessment yet.")
        return

    assessment = state["assessment"]
    st.header(assessment["title"])
    if assessment.get("description"):
        st.markdown(assessment["description"])

    if state["status"] == "submitted":
        st.success(f"✅ You already submitted this assessment on {state['submitted_at']:%Y-%m-%d %H:%M}.")
        return

    # Restore the draft once per job and session
    if job_id not in st.session_state.loaded_drafts:
        st.session_state.answers[job_id] = dict(state["draft_answers"])
        st.session_state.loaded_drafts.add(job_id)
    answers = st.session_state.answers.setdefault(job_id, {})

    questions = AssessmentUIService.questions_of(assessment)
    changed = False
    for question in visible_questions(questions, answers):
        new_value = render_question(question, answers.get(question.id), key=f"{job_id}:{question.id}")
        if new_value != answers.get(question.id):
            answers[question.id] = new_value
            changed = True

    if changed:
        with get_db_session() as db:
            AssessmentUIService(db).save_draft(user_id, job_id, answers)
        # conditionals may reveal or hide questions
        st.rerun()

    st.caption("Your answers are saved automatically.")

    if st.button("Submit assessment", type="primary"):
        try:
            with get_db_session() as db:
                AssessmentUIService(db).submit(job_id, user_id, answers)
        except AnswerValidationError as e:
            st.error(e.message)
            return
        except (ConflictError, NotFoundError) as e:
            st.error(str(e))
            return
        st.session_state.answers.pop(job_id, None)
        st.session_state.loaded_drafts.discard(job_id)
        st.session_state.just_submitted = job["title"]
        st.rerun()


def render_applications(service_user):
    with get_db_session() as db:
        applications = AssessmentUIService(db).applications(service_user["user_id"])
    if not applications:
        st.info("You have not applied to any job yet.")
        return
    st.dataframe(applications, use_container_width=True, hide_index=True)


def main():
    """Main Streamlit app."""
    initialize_session_state()

    # Sidebar
    st.sidebar.title("📝 TalentFlow")
    st.sidebar.markdown("---")
    raw_key = st.sidebar.text_input("API key", value=settings.UI_API_KEY or "", type="password")
    user = current_user(raw_key)
    if not user:
        st.title("Assessment")
        st.warning("Enter a valid API key in the sidebar to continue.")
        return
    st.sidebar.markdown(f"**Signed in as:** {user['name'] or user['email']} ({user['role']})")

    if st.session_state.just_submitted:
        st.success(f"Submitted your assessment for {st.session_state.just_submitted}.")
        st.session_state.just_submitted = None
        st.subheader("My applications")
        render_applications(user)
        return

    with get_db_session() as db:
        jobs = AssessmentUIService(db).list_jobs(active_only=True)
    if not jobs:
        st.warning("No active jobs.")
        return

    titles = {job["title"]: job for job in jobs}
    selected = st.sidebar.selectbox("Job", options=list(titles.keys()))

    tab_attempt, tab_applications = st.tabs(["Assessment", "My applications"])
    with tab_attempt:
        render_attempt(user, titles[selected])
    with tab_applications:
        render_applications(user)


if __name__ == "__main__":
    main()
