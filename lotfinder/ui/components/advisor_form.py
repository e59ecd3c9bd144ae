"""
Advisor questionnaire component - one question per step.
"""
import streamlit as st

from ...models.preferences import MultiChoiceQuestion, toggle_multi


def render_question_step(questions: list, step: int) -> None:
    """
    Render the question at `step` and its navigation.

    Answers live in st.session_state.answers.
    """
    answers = st.session_state.answers
    question = questions[step]

    st.progress((step + 1) / len(questions), text=f"Question {step + 1} / {len(questions)}")
    st.markdown(f"#### {question.title}")
    if question.description:
        st.caption(question.description)

    if isinstance(question, MultiChoiceQuestion):
        current = answers.get(question.id, [])
        for option in question.options:
            picked = option.value in current
            if st.button(
                f"{'✓ ' if picked else ''}{option.label}",
                key=f"adv_{question.id}_{option.value}",
                use_container_width=True,
            ):
                answers[question.id] = toggle_multi(current, option.value, question.max_pick)
                st.rerun()
    else:
        values = [o.value for o in question.options]
        labels = {o.value: o.label for o in question.options}
        current = answers.get(question.id)
        choice = st.radio(
            question.title,
            options=values,
            index=values.index(current) if current in values else None,
            format_func=lambda v: labels[v],
            key=f"adv_{question.id}",
            label_visibility="collapsed",
        )
        if choice is not None:
            answers[question.id] = choice

    if question.id == "location_pref" and answers.get("location_pref") == "manual":
        st.session_state.manual_location = st.text_input(
            "Location",
            value=st.session_state.get("manual_location", ""),
            placeholder="City or state, e.g. DALLAS or TX",
        )

    col1, _, col3 = st.columns([1, 1, 1])
    with col1:
        if st.button("← Back", use_container_width=True, disabled=step == 0):
            st.session_state.advisor_step = step - 1
            st.rerun()
    with col3:
        if st.button(
            "Next →",
            type="primary",
            use_container_width=True,
            disabled=not question.is_answered(answers.get(question.id)),
        ):
            st.session_state.advisor_step = step + 1
            st.rerun()
