"""
UI layer
Purpose: Streamlit-only glue. Renders the role, interview and feedback
screens, collects user input, and delegates all work to the controllers.
Keeps UI concerns (layout/widget state) separate from interview logic so the
logic can be unit tested without Streamlit.
"""

import streamlit as st
from audio_recorder_streamlit import audio_recorder
import hashlib
import logging

from interview_partner.config import settings
from interview_partner.controller import InterviewController
from interview_partner.controller_feedback import FeedbackController, FeedbackError
from interview_partner.models import (
    MAX_QUESTIONS,
    ConversationState,
    LLMSettings,
    Speaker as TurnSpeaker,
)
from interview_partner.services.llm_openai import OpenAILLMClient
from interview_partner.services.pricing import PRICE_TABLE, Usage
from interview_partner.services.speech import Speaker
from interview_partner.services.voice import (
    autoplay_html,
    detect_capabilities,
    transcribe_wav_bytes,
)
from interview_partner.utils.logging import setup_logging

setup_logging(settings.log_level, settings.log_file)
logger = logging.getLogger("interview_partner.app")

# ---------------------------
# Page config
# ---------------------------
st.set_page_config(
    page_title="Interview Practice Partner",
    page_icon="🎯",
    layout="centered",
    initial_sidebar_state="expanded",
)

# ---------------------------
# Session state init
# ---------------------------
st_session = st.session_state
st_session.setdefault("step", "role-selection")
st_session.setdefault("llm", None)
st_session.setdefault("api_key_set", False)
st_session.setdefault("capabilities", None)
st_session.setdefault("capability_warned", False)
st_session.setdefault("model", settings.model if settings.model in PRICE_TABLE else "gpt-4o-mini")
st_session.setdefault("selected_role", "")
st_session.setdefault("controller", None)
st_session.setdefault("feedback_controller", None)
st_session.setdefault("finished_transcript", None)
st_session.setdefault("report", None)
st_session.setdefault("feedback_error", None)
st_session.setdefault("voice_mode", settings.voice_enabled)
st_session.setdefault("speak_replies", settings.voice_enabled)
st_session.setdefault("last_voice_sig", None)


# ---------------------------
# Helpers
# ---------------------------
def make_llm_settings(max_tokens: int = 512) -> LLMSettings:
    """Build LLMSettings from session state."""
    return LLMSettings(
        model=st_session.model,
        temperature=settings.temperature,
        max_tokens=max_tokens,
    )


def make_speaker():
    """Return a Speaker when replies should be read aloud, else None."""
    caps = st_session.capabilities
    if not st_session.speak_replies or not (caps and caps.synthesis):
        return None
    return Speaker(
        st_session.llm, voice=settings.tts_voice, model=settings.tts_model
    )


def handle_interview_finish(transcript) -> None:
    """Controller callback: the interview ended, move to the feedback screen."""
    st_session.finished_transcript = transcript
    st_session.report = None
    st_session.feedback_error = None
    st_session.step = "feedback"


def start_interview(role: str) -> None:
    controller = InterviewController(
        st_session.llm,
        speaker=make_speaker(),
        settings=make_llm_settings(200),
        on_finish=handle_interview_finish,
    )
    with st.spinner("Preparing your interviewer…"):
        controller.start(role)
    st_session.controller = controller
    st_session.selected_role = controller.role
    st_session.step = "interview"


def reset_session() -> None:
    """Back to role selection; keeps the API key and model choice."""
    controller = st_session.controller
    if controller:
        controller.reset()
    st_session.controller = None
    st_session.feedback_controller = None
    st_session.selected_role = ""
    st_session.finished_transcript = None
    st_session.report = None
    st_session.feedback_error = None
    st_session.last_voice_sig = None
    st_session.step = "role-selection"


def session_usage() -> Usage:
    """Usage summed over both controllers."""
    total = Usage(model_used=st_session.model)
    for c in (st_session.controller, st_session.feedback_controller):
        if c:
            total = total.merge(c.usage)
    return total


def show_turn_result(result) -> None:
    if result.notice:
        st.toast(result.notice, icon="⚠️")


def render_scores(scores) -> None:
    """Render the three 0-10 scores with progress bars."""
    labels = [
        ("communication", "Communication"),
        ("technical", "Technical"),
        ("overall", "Overall"),
    ]
    cols = st.columns(3)
    for (key, label), col in zip(labels, cols):
        with col:
            val = float(getattr(scores, key))
            st.metric(label, f"{val:.1f} / 10")
            st.progress(min(1.0, max(0.0, val / 10)))


# ---------------------------
# SIDEBAR: settings
# ---------------------------
with st.sidebar:
    st.markdown("# Settings")

    st.markdown("## OpenAI API Key Required")
    user_api_key = st.text_input(
        "Enter your API key",
        value=settings.openai_api_key or "",
        type="password",
        help="We do not store your key. It stays in your session only.",
    )
    if not user_api_key:
        st.warning("Please enter your API key in the sidebar to continue.")
        st.stop()
    elif not st_session.api_key_set:
        try:
            llm = OpenAILLMClient(api_key=user_api_key, timeout=settings.request_timeout)
            model_ids = [m.id for m in llm.client.models.list()]
        except Exception as e:
            logger.exception("OpenAI client init failed")
            st.error(f"OpenAI client init failed: {e}")
            st.stop()
        st_session.llm = llm
        st_session.capabilities = detect_capabilities(
            llm,
            available_models=model_ids,
            stt_model=settings.stt_model,
            tts_model=settings.tts_model,
            voice_enabled=settings.voice_enabled,
        )
        st_session.api_key_set = True

    st_session.model = st.selectbox(
        "Model",
        list(PRICE_TABLE.keys()),
        index=list(PRICE_TABLE.keys()).index(st_session.model),
    )
    st.divider()

    st.markdown("## Voice")
    st_session.voice_mode = st.toggle("🎙️ Answer by voice", value=st_session.voice_mode)
    st_session.speak_replies = st.toggle(
        "🔊 Speak interviewer replies", value=st_session.speak_replies
    )
    st.divider()

    st.markdown("## Usage")
    usage = session_usage()
    st.caption(
        f"Tokens in/out: **{usage.tokens_in:,} / {usage.tokens_out:,}** · "
        f"est. cost **${usage.cost():,.4f}**"
    )
    st.button("Reset session", type="primary", on_click=reset_session)

caps = st_session.capabilities
if caps and caps.degraded and not st_session.capability_warned:
    st.toast(
        "Voice features are unavailable; you can still type your answers.", icon="⚠️"
    )
    st_session.capability_warned = True

# ---------------------------
# Header
# ---------------------------
st.title("Interview Practice Partner")


# ---------------------------
# Screens
# ---------------------------
def render_role_selection() -> None:
    st.markdown(
        "Enter the role or topic you want to practice for. "
        "Our AI will guide you through a tailored mock interview."
    )
    role = st.text_input("Interview Role or Job Description", key="role_input")
    if st.button("Start Interview →", type="primary", disabled=not role.strip()):
        try:
            start_interview(role)
        except ValueError as e:
            st.toast(str(e), icon="⚠️")
            return
        st.rerun()


def render_interview() -> None:
    controller = st_session.controller
    if controller is None:
        reset_session()
        st.rerun()
        return

    st.subheader(f"Mock Interview: {controller.role}")
    if controller.phase == ConversationState.QUESTIONING:
        st.caption(
            f"Question {min(controller.question_count, MAX_QUESTIONS)} of "
            f"{MAX_QUESTIONS}. Good luck!"
        )
    else:
        st.caption(
            "The interview has concluded. You may ask follow-up questions or say \"exit\"."
        )

    controller.speaker = make_speaker()
    clip = controller.pop_audio()
    if clip:
        st.html(autoplay_html(clip))

    transcript = st.container(height=450, border=True)
    with transcript:
        for entry in controller.transcript:
            role = "assistant" if entry.speaker == TurnSpeaker.INTERVIEWER else "user"
            with st.chat_message(role):
                st.markdown(entry.text)

    caps = st_session.capabilities
    result = None
    try:
        if st_session.voice_mode and caps and caps.recognition:
            wav_bytes = audio_recorder(
                pause_threshold=2,
                sample_rate=16_000,
                text="Press to answer",
                icon_size="2x",
            )
            sig = hashlib.sha1(wav_bytes).hexdigest() if wav_bytes else None
            if sig and sig != st_session.last_voice_sig and controller.start_listening():
                st_session.last_voice_sig = sig
                try:
                    with st.spinner("Transcribing…"):
                        text = transcribe_wav_bytes(
                            wav_bytes, st_session.llm, model=settings.stt_model
                        )
                except Exception as e:
                    logger.exception("Transcription failed")
                    result = controller.on_recognition_error(type(e).__name__)
                else:
                    controller.listener.feed(text, final=True)
                    with st.spinner("Thinking..."):
                        result = controller.stop_listening(commit=True)
        else:
            raw = st.chat_input("Type your answer…", disabled=not controller.can_listen())
            if raw is not None:
                if not raw.strip():
                    st.toast("Please enter a non-empty message.", icon="⚠️")
                else:
                    with st.spinner("Thinking..."):
                        result = controller.submit_answer(raw)
    except ValueError as e:
        st.toast(str(e), icon="⚠️")

    if controller.phase == ConversationState.CLOSING:
        st.caption("Say \"exit\" to finish the interview and get your feedback.")

    if result is not None:
        show_turn_result(result)
        st.rerun()


def render_feedback() -> None:
    role = st_session.selected_role
    if st_session.feedback_controller is None:
        st_session.feedback_controller = FeedbackController(
            st_session.llm, settings=make_llm_settings(700)
        )

    if st_session.report is None and st_session.feedback_error is None:
        with st.spinner("Analyzing Your Performance... This may take a moment."):
            try:
                st_session.report = st_session.feedback_controller.run(
                    role, st_session.finished_transcript or ()
                )
            except FeedbackError as e:
                st_session.feedback_error = str(e)

    if st_session.feedback_error:
        st.error(st_session.feedback_error)
        c1, c2 = st.columns(2)
        if c1.button("Try again", type="primary"):
            st_session.feedback_error = None
            st.rerun()
        c2.button("Practice Again", on_click=reset_session)
        return

    report = st_session.report
    assessment = report.assessment

    st.subheader("Your Interview Feedback")
    st.caption(f"Here's a breakdown of your performance for the {role} role.")
    color = "green" if assessment.is_positive else "red"
    st.markdown(f"### :{color}[{assessment.summary}]")

    st.markdown("#### Performance Dashboard")
    render_scores(assessment.scores)
    st.divider()

    st.markdown("#### Personalized Coaching")
    st.markdown(report.feedback)
    st.divider()

    c1, c2 = st.columns(2)
    with c1:
        st.markdown("#### Communication Skills")
        st.caption("Clarity, conciseness, and engagement.")
        st.markdown(assessment.communication_skills)
    with c2:
        st.markdown("#### Technical Knowledge")
        st.caption("Expertise and application of concepts.")
        st.markdown(assessment.technical_knowledge)

    c3, c4 = st.columns(2)
    with c3:
        st.markdown("#### Overall Performance")
        st.caption("Strengths and weaknesses highlight.")
        st.markdown(assessment.overall_performance)
    with c4:
        st.markdown("#### Areas for Improvement")
        st.caption("Actionable recommendations.")
        st.markdown("\n".join(f"- {it}" for it in assessment.areas_for_improvement) or "—")

    st.divider()
    st.button("🔄 Practice Again", type="primary", on_click=reset_session)


if st_session.step == "interview":
    render_interview()
elif st_session.step == "feedback":
    render_feedback()
else:
    render_role_selection()

st.divider()
st.caption(
    "Privacy tip: Do not paste sensitive personal data. Transcripts are not stored."
)
