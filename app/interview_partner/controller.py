"""
Purpose: The single orchestration point for an interview. Owns the session
state (role, transcript, phase, turn-taking flags) and the turn-taking rules.
Prevents UI from knowing how prompts/LLM/speech services work.

Key responsibilities:
- start(role): greet the candidate and ask the opening question.
- submit_answer(text): record the answer and produce the interviewer's reply,
  moving questioning -> closing -> terminated.
- Recover locally from follow-up failures with scripted lines.
- Speak each interviewer turn after it is appended; never block on audio.
- Gate the listen session behind "not speaking, not waiting on the AI".
- Hand the frozen transcript to on_finish exactly once.

Testing: Pure unit tests with fakes: mock LLMClient and SpeechOutput.
"""

from __future__ import annotations
import logging
import re
from typing import Callable, Optional

from .models import (
    MAX_QUESTIONS,
    ConversationState,
    InterviewEntry,
    LLMSettings,
    SessionState,
    Speaker,
    TurnResult,
)
from .interfaces import LLMClient, PromptFactory, SpeechOutput
from .prompts import DefaultPromptFactory
from .schemas import FollowUpInput
from .services.follow_up import generate_follow_up
from .services.pricing import Usage, estimate_tokens_from_text
from .services.security import DefaultSecurity
from .services.voice import ListenSession

logger = logging.getLogger(__name__)

EXIT_TRIGGER = re.compile(r"\bexit\b", re.IGNORECASE)
GOODBYE_TRIGGER = re.compile(r"\bgood-?bye\b", re.IGNORECASE)

AI_FAILURE_NOTICE = "Failed to get a response from the AI."

Transcript = tuple[InterviewEntry, ...]

class InterviewController:
    def __init__(
        self,
        llm: LLMClient,
        *,
        speaker: Optional[SpeechOutput] = None,
        settings: Optional[LLMSettings] = None,
        on_finish: Optional[Callable[[Transcript], None]] = None,
        max_questions: int = MAX_QUESTIONS,
    ):
        self.llm: LLMClient = llm
        self.prompts: PromptFactory = DefaultPromptFactory()
        self.security = DefaultSecurity()
        self.speaker = speaker
        self.settings = settings or LLMSettings(model="gpt-4o-mini", max_tokens=200)
        self.on_finish = on_finish
        self.max_questions = max_questions

        self.listener = ListenSession()
        self.state = SessionState()
        self.usage = Usage()

    @property
    def phase(self) -> ConversationState:
        return self.state.phase

    @property
    def role(self) -> str:
        return self.state.role

    @property
    def transcript(self) -> Transcript:
        """Frozen copy of the conversation so far."""
        return tuple(self.state.transcript)

    @property
    def question_count(self) -> int:
        return sum(1 for e in self.state.transcript if e.counts_as_question)

    @property
    def answered_count(self) -> int:
        """Candidate answers given while questioning."""
        return self.state.answered_count

    @property
    def is_terminated(self) -> bool:
        return self.state.phase == ConversationState.TERMINATED

    @property
    def is_busy(self) -> bool:
        return self.state.pending or self.state.speaking

    def reset(self) -> None:
        """Drop the session; the next start() begins a fresh interview."""
        self.listener.stop(commit=False)
        self.state = SessionState()
        self.usage = Usage()

    def start(self, role: str) -> Optional[InterviewEntry]:
        """Greet the candidate. Returns None if the session already started."""
        if self.state.started:
            return None
        self.state.role = self.security.validate_role(role)
        self.state.started = True
        logger.info("Interview started for role %r", self.state.role)
        return self._say(self.prompts.greeting(role=self.state.role), is_question=True)

    def submit_answer(self, text: str) -> TurnResult:
        """
        Record one candidate answer and produce the interviewer's reply.
        Blank answers, and answers arriving while the interviewer is busy or
        the interview is over, produce no transition.
        """
        answer = (text or "").strip()
        if not answer or not self.state.started or self.is_terminated or self.is_busy:
            return TurnResult()
        self.security.validate_answer(answer)

        if self.state.phase == ConversationState.CLOSING:
            return self._closing_turn(answer)
        return self._questioning_turn(answer)

    def pop_audio(self) -> Optional[bytes]:
        """Next synthesized clip waiting to be played, if any."""
        if self.state.audio_queue:
            return self.state.audio_queue.pop(0)
        return None

    # listening

    def can_listen(self) -> bool:
        return self.state.started and not (self.is_busy or self.is_terminated)

    def start_listening(self) -> bool:
        if not self.can_listen():
            return False
        return self.listener.start()

    def stop_listening(self, *, commit: bool = True) -> TurnResult:
        answer = self.listener.stop(commit=commit)
        if answer is None:
            return TurnResult()
        return self.submit_answer(answer)

    def on_recognition_error(self, code: str) -> TurnResult:
        answer, notice = self.listener.fail(code)
        if answer:
            return self.submit_answer(answer)
        return TurnResult(notice=notice)

    # turns

    def _questioning_turn(self, answer: str) -> TurnResult:
        self._append(Speaker.CANDIDATE, answer)
        self.state.answered_count += 1

        if self.question_count >= self.max_questions:
            self.state.phase = ConversationState.CLOSING
            logger.info("Question budget spent; moving to closing")
            closing = self._say(self.prompts.closing_prompt(), is_question=False)
            return TurnResult(reply=closing)

        try:
            question = self._follow_up(answer, ConversationState.QUESTIONING)
        except Exception:
            logger.exception("Follow-up generation failed; asking a fallback question")
            entry = self._say(self.prompts.fallback_question(), is_question=True)
            return TurnResult(reply=entry, notice=AI_FAILURE_NOTICE)
        return TurnResult(reply=self._say(question, is_question=True))

    def _closing_turn(self, answer: str) -> TurnResult:
        self._append(Speaker.CANDIDATE, answer)
        if EXIT_TRIGGER.search(answer):
            self._finish("candidate exit")
            return TurnResult(terminated=True)

        try:
            reply = self._follow_up(answer, ConversationState.CLOSING)
        except Exception:
            logger.exception("Follow-up generation failed during closing")
            entry = self._say(self.prompts.fallback_reprompt(), is_question=False)
            return TurnResult(reply=entry, notice=AI_FAILURE_NOTICE)

        if GOODBYE_TRIGGER.search(reply):
            entry = self._append(Speaker.INTERVIEWER, reply, is_question=False)
            self._finish("interviewer goodbye")
            return TurnResult(reply=entry, terminated=True)
        return TurnResult(reply=self._say(reply, is_question=False))

    def _follow_up(self, answer: str, phase: ConversationState) -> str:
        redacted, pii = self.security.redact_pii(
            self.security.sanitize_for_prompt(answer)
        )
        if pii:
            logger.info("Redacted %s from answer before prompting", ", ".join(pii))
        request = FollowUpInput(
            previous_question=self._last_interviewer_text(),
            user_answer=redacted,
            job_role=self.state.role,
            interview_state=phase,
        )
        self.state.pending = True
        try:
            question, meta = generate_follow_up(
                llm=self.llm,
                prompts=self.prompts,
                settings=self.settings,
                request=request,
            )
        finally:
            self.state.pending = False
        self.usage.add(meta, self.settings.model)
        return question

    def _last_interviewer_text(self) -> str:
        for entry in reversed(self.state.transcript):
            if entry.speaker == Speaker.INTERVIEWER:
                return entry.text
        return ""

    def _append(
        self, speaker: Speaker, text: str, *, is_question: Optional[bool] = None
    ) -> InterviewEntry:
        entry = InterviewEntry(speaker=speaker, text=text, is_question=is_question)
        self.state.transcript.append(entry)
        return entry

    def _say(self, text: str, *, is_question: bool) -> InterviewEntry:
        """Append an interviewer turn, then read it aloud (best-effort)."""
        entry = self._append(Speaker.INTERVIEWER, text, is_question=is_question)
        if self.speaker is None:
            return entry

        self.state.speaking = True
        try:
            audio = self.speaker.speak(text)
        except Exception:
            logger.exception("Speech output failed; continuing without audio")
            audio = b""
        finally:
            self.state.speaking = False
        if audio:
            self.state.audio_queue.append(audio)
            # TTS is billed per input character; count it like prompt tokens
            self.usage.add({"tokens_in": estimate_tokens_from_text(text)})
        return entry

    def _finish(self, reason: str) -> None:
        self.state.phase = ConversationState.TERMINATED
        self.listener.stop(commit=False)
        if self.state.handed_off:
            return
        self.state.handed_off = True
        logger.info(
            "Interview finished (%s) with %d entries", reason, len(self.state.transcript)
        )
        if self.on_finish is not None:
            self.on_finish(self.transcript)
