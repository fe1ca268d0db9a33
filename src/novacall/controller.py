import json
import logging
from datetime import datetime
from typing import Callable, Optional

from novacall.context import CallContext, apply_edits
from novacall.keywords import build_keywords
from novacall.prompts import REASON_SILENCE
from novacall.session import CallSession
from novacall.state_machine import StateMachine
from novacall.summary import generate_summary
from novacall.transcript import ConversationTurn, to_json_array, to_timestamped_dump

logger = logging.getLogger(__name__)


class CallController:
    """Boundary operations for the single call this process simulates.

    Invalid sequencing (submitting with no live call, closing twice, ...) is
    a silent no-op. Only the controller mutates the session; renderers read
    snapshot().
    """

    def __init__(
        self,
        context: CallContext,
        *,
        id_factory: Callable[[], str],
        clock: Callable[[], datetime],
    ):
        self.context = context
        self.clock = clock
        self.keywords = build_keywords(context)
        self.machine = StateMachine(id_factory=id_factory, clock=clock)
        self.session = CallSession.baseline(len(context.talking_points))

    def start_call(self) -> Optional[ConversationTurn]:
        if self.session.status.accepts_input:
            return None
        intro = self.machine.start(self.session, self.context)
        logger.info(
            "Call started to %s (%d talking points)",
            self.context.phone_number or "unknown", len(self.context.talking_points),
        )
        return intro

    def submit_caller_utterance(self, text: str) -> list[ConversationTurn]:
        if not self.session.status.accepts_input:
            return []
        trimmed = text.strip()
        if not trimmed:
            return []
        turns = self.machine.process(self.session, self.context, self.keywords, trimmed)
        self._log_if_finished()
        return turns

    def trigger_silence_escalation(self) -> list[ConversationTurn]:
        if not self.session.status.accepts_input:
            return []
        turns = self.machine.escalate(self.session, self.context, REASON_SILENCE)
        self._log_if_finished()
        return turns

    def close_call(self) -> list[ConversationTurn]:
        turns = self.machine.close(self.session, self.context)
        if turns:
            self._log_if_finished()
        return turns

    def log_clarification_note(self) -> list[ConversationTurn]:
        return self.machine.log_clarification(self.session, self.context)

    def generate_summary(self) -> str:
        return generate_summary(self.context, self.session)

    def reset_session(self):
        self.session = CallSession.baseline(len(self.context.talking_points))
        logger.info("Session reset")

    def update_context(self, **changes):
        """Apply validated edits from the configuration form.

        Talking points and handoff conditions may be given as raw
        newline-delimited text.
        """
        self.context = apply_edits(self.context, **changes)
        self.keywords = build_keywords(self.context)
        self.session.resize_coverage(len(self.context.talking_points))
        logger.info("Context updated: %s", ", ".join(sorted(changes)) or "no fields")

    def elapsed_seconds(self) -> int:
        """Whole seconds since launch. Display only; never consulted by the engine."""
        if self.session.launched_at is None:
            return 0
        if not self.session.active and self.session.log:
            end = self.session.log[-1].timestamp
        else:
            end = self.clock()
        return max(0, int((end - self.session.launched_at).total_seconds()))

    def snapshot(self) -> dict:
        session = self.session
        context = self.context
        return {
            "context": {
                "phone_number": context.phone_number,
                "purpose": context.purpose,
                "talking_points": list(context.talking_points),
                "handoff_conditions": list(context.handoff_conditions),
                "consent_to_summary": context.consent_to_summary,
                "principal_name": context.principal_name,
                "assistant_name": context.assistant_name,
            },
            "status": session.status.value,
            "status_label": session.status.label,
            "active": session.active,
            "ended": session.ended,
            "clarifications_used": session.clarifications_used,
            "next_point_index": session.next_point_index,
            "covered_points": list(session.covered_points),
            "escalation_reason": session.escalation_reason,
            "launched_at": session.launched_at.isoformat() if session.launched_at else None,
            "elapsed_seconds": self.elapsed_seconds(),
            "keywords": sorted(self.keywords),
            "conversation": to_json_array(session.log),
        }

    def _log_if_finished(self):
        if not self.session.status.is_terminal:
            return
        dump = to_timestamped_dump(
            self.session.log,
            self.session.launched_at,
            phone=self.context.phone_number,
            final_status=self.session.status.value,
            escalation_reason=self.session.escalation_reason,
        )
        logger.info("TRANSCRIPT_DUMP|%s", json.dumps(dump))
