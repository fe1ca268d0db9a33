import re

from novacall.context import CallContext
from novacall.session import CallSession
from novacall.transcript import Sender

SUMMARY_WITHHELD = "Summary withheld: caller did not grant consent to capture post-call notes."
SUMMARY_NOT_READY = "End the call first to capture an accurate summary."

NO_POINTS_COVERED = "None were marked as complete."
NO_CALLER_HIGHLIGHTS = "Nothing specific captured."
FALLBACK_NEXT_STEP = "Follow up with the caller to confirm next steps."

NEXT_STEP_PATTERN = re.compile(r"schedule|coordinate|follow up|send", re.IGNORECASE)

MAX_CALLER_HIGHLIGHTS = 3
BULLET = "•"


def _bullets(items: list[str]) -> str:
    return "\n".join(f"{BULLET} {item}" for item in items)


def build_summary(context: CallContext, turns, covered_points: list[bool]) -> str:
    """Assemble the four-section digest from coverage and transcript.

    Sections are separated by a blank line:
      Purpose, covered talking points (script order), the last three caller
      responses (chronological) and the earliest assistant line that proposes
      a scheduling or follow-up step.
    """
    turns = list(turns)

    completed = [
        point for index, point in enumerate(context.talking_points)
        if index < len(covered_points) and covered_points[index]
    ]
    highlights = [
        turn.content for turn in turns if turn.sender == Sender.CALLER
    ][-MAX_CALLER_HIGHLIGHTS:]
    next_step = next(
        (
            turn.content for turn in turns
            if turn.sender == Sender.ASSISTANT and NEXT_STEP_PATTERN.search(turn.content)
        ),
        FALLBACK_NEXT_STEP,
    )

    sections = [
        f"Purpose: {context.purpose}.",
        f"Covered talking points:\n{_bullets(completed)}"
        if completed else f"Covered talking points: {NO_POINTS_COVERED}",
        f"Caller responses worth noting:\n{_bullets(highlights)}"
        if highlights else f"Caller responses worth noting: {NO_CALLER_HIGHLIGHTS}",
        f"Recommended next step: {next_step}",
    ]
    return "\n\n".join(sections)


def generate_summary(context: CallContext, session: CallSession) -> str:
    """Post-call digest, or one of the two fixed notices.

    Consent is checked before anything else so the log is never read for a
    caller who declined.
    """
    if not context.consent_to_summary:
        return SUMMARY_WITHHELD
    if not session.status.is_terminal:
        return SUMMARY_NOT_READY
    return build_summary(context, session.log.snapshot(), session.covered_points)
