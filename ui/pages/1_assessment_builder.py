"""
Assessment builder UI.

Lets an admin edit a job's question list and preview what a candidate
would see for sample answers. Edits stay in the session until "Save",
which replaces the job's assessment in one transaction.
"""

import sys
from pathlib import Path

# Add parent directory to path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

import streamlit as st

from assessment import AssessmentBuilder, QuestionType
from config.settings import settings
from services.exceptions import AssessmentDefinitionError, ConflictError, NotFoundError
from ui.db import get_db_session
from ui.services import AssessmentUIService

# Page configuration
st.set_page_config(
    page_title="Assessment Builder",
    page_icon="🛠️",
    layout="wide"
)

TYPE_NAMES = [t.value for t in QuestionType]
NO_CONDITION = "(always shown)"


def get_builder(job_id) -> AssessmentBuilder:
    """Builder for the selected job, kept across reruns."""
    if st.session_state.get("builder_job_id") != job_id:
        with get_db_session() as db:
            st.session_state.builder = AssessmentUIService(db).load_builder(job_id)
        st.session_state.builder_job_id = job_id
        st.session_state.preview_answers = {}
    return st.session_state.builder


def _parse_value(raw: str):
    """Conditional values typed by hand: numbers become numbers, everything else stays text."""
    text = raw.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return text


def _optional_number(label, current, key):
    raw = st.text_input(label, value="" if current is None else str(current), key=key)
    if not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError:
        st.warning(f"{label} must be a number")
        return current


def edit_conditional(builder: AssessmentBuilder, question, key: str):
    earlier = [q for q in builder.questions if q.order is not None and q.order < question.order]
    choices = {NO_CONDITION: None}
    choices.update({f"{q.order + 1}. {q.display_label}": q for q in earlier})

    current = question.conditional
    current_label = next(
        (name for name, q in choices.items() if q is not None and current and q.id == current.depends_on),
        NO_CONDITION,
    )
    picked = st.selectbox("Show only when", list(choices.keys()),
                          index=list(choices.keys()).index(current_label), key=f"{key}:dep")
    parent = choices[picked]
    if parent is None:
        return None

    current_value = current.value if current and current.depends_on == parent.id else None
    if parent.is_choice and parent.options:
        values = [o.value for o in parent.options]
        texts = {o.value: o.text for o in parent.options}
        index = values.index(current_value) if current_value in values else 0
        value = st.selectbox("equals", values, index=index,
                             format_func=lambda v: texts.get(v, str(v)), key=f"{key}:val")
    else:
        raw = st.text_input("equals", value="" if current_value is None else str(current_value), key=f"{key}:val")
        value = _parse_value(raw) if parent.type_name == "numeric" else raw
    return {"depends_on": parent.id, "condition": "equals", "value": value}


def edit_question(builder: AssessmentBuilder, question, position: int):
    key = f"q:{question.id}"
    with st.expander(f"{position + 1}. {question.display_label} ({question.type_name})", expanded=False):
        label = st.text_input("Label", value=question.label, key=f"{key}:label")
        new_type = st.selectbox("Type", TYPE_NAMES, index=TYPE_NAMES.index(question.type_name), key=f"{key}:type")
        required = st.checkbox("Required", value=question.required, key=f"{key}:req")
        placeholder = st.text_input("Placeholder", value=question.placeholder, key=f"{key}:ph")

        if new_type != question.type_name:
            builder.change_type(question.id, new_type)
            st.rerun()

        validation = {}
        if question.type_name == "numeric":
            col1, col2 = st.columns(2)
            with col1:
                validation["min"] = _optional_number("Min", question.validation.min, f"{key}:min")
            with col2:
                validation["max"] = _optional_number("Max", question.validation.max, f"{key}:max")
        elif question.type_name in ("short-text", "long-text"):
            max_length = st.number_input("Max length (0 = no limit)", min_value=0,
                                         value=question.validation.max_length or 0, key=f"{key}:maxlen")
            validation["max_length"] = int(max_length) or None

        if question.is_choice:
            st.markdown("**Options**")
            for option in list(question.options or []):
                col1, col2 = st.columns([5, 1])
                with col1:
                    text = st.text_input(f"Option {option.id}", value=option.text, key=f"{key}:opt:{option.id}")
                    if text != option.text:
                        builder.update_option(question.id, option.id, text)
                with col2:
                    if st.button("✕", key=f"{key}:optdel:{option.id}", disabled=len(question.options) == 1):
                        builder.remove_option(question.id, option.id)
                        st.rerun()
            if st.button("Add option", key=f"{key}:optadd"):
                builder.add_option(question.id)
                st.rerun()

        conditional = edit_conditional(builder, question, key)

        builder.update_question(
            question.id,
            label=label,
            required=required,
            placeholder=placeholder,
            validation={**question.validation.model_dump(), **validation},
            conditional=conditional,
        )

        col1, col2, col3 = st.columns(3)
        with col1:
            if st.button("↑ Move up", key=f"{key}:up", disabled=position == 0):
                builder.move_question(question.id, position - 1)
                st.rerun()
        with col2:
            if st.button("↓ Move down", key=f"{key}:down", disabled=position == len(builder.questions) - 1):
                builder.move_question(question.id, position + 1)
                st.rerun()
        with col3:
            if st.button("Delete question", key=f"{key}:del"):
                builder.remove_question(question.id)
                st.rerun()


def render_preview(builder: AssessmentBuilder):
    st.subheader("Candidate preview")
    answers = st.session_state.preview_answers
    for question in builder.preview(answers):
        key = f"preview:{question.id}"
        if question.is_choice and question.options:
            values = [o.value for o in question.options]
            texts = {o.value: o.text for o in question.options}
            if question.type_name == "single-choice":
                answers[question.id] = st.radio(question.display_label, values, index=None,
                                                format_func=lambda v: texts.get(v, str(v)), key=key)
            else:
                answers[question.id] = st.multiselect(question.display_label, values,
                                                      format_func=lambda v: texts.get(v, str(v)), key=key)
        elif question.type_name == "file":
            st.file_uploader(question.display_label, key=key, disabled=True)
        else:
            answers[question.id] = st.text_input(question.display_label, placeholder=question.placeholder, key=key)

    errors = builder.preview_errors(answers)
    if errors:
        st.markdown("**Would fail validation:**")
        for issue in errors:
            st.markdown(f"- {issue.message}")
    else:
        st.success("These answers would pass validation.")


def main():
    st.title("🛠️ Assessment Builder")

    raw_key = st.sidebar.text_input("API key", value=settings.UI_API_KEY or "", type="password")
    with get_db_session() as db:
        service = AssessmentUIService(db)
        user = service.resolve_user(raw_key)
        jobs = service.list_jobs(active_only=False) if user else []

    if not user or user["role"] != "admin":
        st.warning("Enter an admin API key in the sidebar to edit assessments.")
        return
    if not jobs:
        st.info("Create a job first.")
        return

    titles = {f"{job['title']} ({job['status']})": job["id"] for job in jobs}
    selected = st.sidebar.selectbox("Job", list(titles.keys()))
    builder = get_builder(titles[selected])

    builder.title = st.text_input("Title", value=builder.title)
    builder.description = st.text_area("Description", value=builder.description)

    col_edit, col_preview = st.columns([3, 2])
    with col_edit:
        st.subheader(f"Questions ({len(builder.questions)})")
        ordered = sorted(builder.questions, key=lambda q: q.order if q.order is not None else 0)
        for position, question in enumerate(ordered):
            edit_question(builder, question, position)

        if st.button("➕ Add question"):
            builder.add_question()
            st.rerun()

        st.divider()
        if st.button("💾 Save assessment", type="primary", use_container_width=True):
            try:
                with get_db_session() as db:
                    st.session_state.builder = AssessmentUIService(db).save_builder(builder)
                st.success("Assessment saved.")
            except AssessmentDefinitionError as e:
                for problem in e.problems:
                    st.error(problem)
            except (ConflictError, NotFoundError) as e:
                st.error(str(e))

    with col_preview:
        render_preview(builder)


main()
