import logging
from datetime import datetime
from typing import Callable

from novacall import prompts
from novacall.classification import Route, classify_utterance
from novacall.context import CallContext
from novacall.session import CallSession
from novacall.transcript import ConversationTurn, Sender

logger = logging.getLogger(__name__)

MAX_CLARIFICATIONS = len(prompts.CLARIFICATION_TEMPLATES)


class StateMachine:
    """Per-turn decision engine for one call.

    Every operation is synchronous and mutates only the session it is
    handed. Turn ids and timestamps come from the injected factories so the
    engine never generates them itself.
    """

    def __init__(self, id_factory: Callable[[], str], clock: Callable[[], datetime]):
        self.id_factory = id_factory
        self.clock = clock

    def _append(self, session: CallSession, sender: Sender, content: str) -> ConversationTurn:
        turn = ConversationTurn(
            id=self.id_factory(),
            sender=sender,
            content=content,
            timestamp=self.clock(),
        )
        return session.log.append(turn)

    # ── Lifecycle ──

    def start(self, session: CallSession, context: CallContext) -> ConversationTurn:
        session.log.clear()
        session.active = True
        session.ended = False
        session.clarifications_used = 0
        session.next_point_index = 0
        session.covered_points = [False] * len(context.talking_points)
        session.escalation_reason = ""
        session.launched_at = self.clock()
        return self._append(session, Sender.ASSISTANT, prompts.intro_line(context))

    def process(
        self,
        session: CallSession,
        context: CallContext,
        keywords: frozenset[str],
        text: str,
    ) -> list[ConversationTurn]:
        """Record a caller utterance and produce the engine's response turns."""
        caller_turn = self._append(session, Sender.CALLER, text)
        route = classify_utterance(text, keywords, context.principal_token)

        if route == Route.ESCALATE:
            produced = self.escalate(session, context, prompts.requested_reason(context))
        elif route == Route.CLARIFY:
            produced = self.handle_unclear_question(session, context)
        else:
            produced = [self.deliver_next(session, context)]
        return [caller_turn, *produced]

    # ── Script progression ──

    def deliver_next(self, session: CallSession, context: CallContext) -> ConversationTurn:
        index = session.next_point_index
        if index < len(context.talking_points):
            line = prompts.humanize_talking_point(context.talking_points[index], index)
            session.covered_points[index] = True
            session.next_point_index = index + 1
            logger.debug("Delivered talking point %d of %d", index + 1, len(context.talking_points))
            return self._append(session, Sender.ASSISTANT, line)
        return self._append(session, Sender.ASSISTANT, prompts.script_exhausted_line(context))

    # ── Clarification budget ──

    def handle_unclear_question(self, session: CallSession, context: CallContext) -> list[ConversationTurn]:
        if session.clarifications_used < MAX_CLARIFICATIONS:
            prompt = prompts.clarification_prompts(context)[session.clarifications_used]
            session.clarifications_used += 1
            logger.info(
                "Clarification %d/%d issued", session.clarifications_used, MAX_CLARIFICATIONS,
            )
            return [self._append(session, Sender.ASSISTANT, prompt)]
        return self.escalate(session, context, prompts.REASON_BEYOND_CONTEXT)

    # ── Handoff and close ──

    def escalate(self, session: CallSession, context: CallContext, reason: str) -> list[ConversationTurn]:
        logger.warning("Escalating to %s: %s", context.principal_name, reason)
        note = self._append(session, Sender.NOTE, prompts.escalation_note(reason))
        transfer = self._append(session, Sender.ASSISTANT, prompts.transfer_line(context))
        session.active = False
        session.ended = True
        session.escalation_reason = reason
        return [note, transfer]

    def close(self, session: CallSession, context: CallContext) -> list[ConversationTurn]:
        if not session.status.accepts_input:
            return []
        turn = self._append(session, Sender.ASSISTANT, prompts.closing_line(context))
        session.active = False
        session.ended = True
        logger.info("Call closed normally after %d turns", len(session.log))
        return [turn]

    def log_clarification(self, session: CallSession, context: CallContext) -> list[ConversationTurn]:
        if not session.status.accepts_input:
            return []
        return [self._append(session, Sender.NOTE, prompts.clarification_logged_note(context))]
