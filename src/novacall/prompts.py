from novacall.context import CallContext

INTRO_TEMPLATE = (
    "Hi, this is {assistant} calling on behalf of {principal_full}. "
    "I'm reaching out to {purpose}. For transparency, I'm taking light notes so "
    "{principal} can follow up without missing any details. Is now a good time to talk?"
)

# Rotated by talking-point index.
CONNECTIVES = (
    "Just to make sure we're aligned,",
    "Additionally,",
    "On that note,",
    "As a next step,",
    "Before we wrap up,",
)

# Exactly two. The budget controller escalates once both are spent.
CLARIFICATION_TEMPLATES = (
    "I'm supporting {principal} with scheduling and updates today. Could you clarify "
    "your question so I can make sure we stay on track?",
    "I'm here to keep things efficient for {principal}. Would you mind rephrasing that "
    "so I can assist accurately?",
)

SCRIPT_EXHAUSTED_TEMPLATE = (
    "Happy to keep things concise. Would you like me to schedule time with {principal} "
    "now, or would you prefer that {principal} follows up by email?"
)

TRANSFER_TEMPLATE = "Let me connect you directly with {principal}."

CLOSING_TEMPLATE = (
    "Thanks again for your time today. I'll brief {principal} right away "
    "so {principal} can follow up directly."
)

ESCALATION_NOTE_TEMPLATE = "Escalated • {reason}"

CLARIFICATION_LOGGED_TEMPLATE = (
    "Logged: Caller requested clarification, {assistant} responded with the approved prompt."
)

# Escalation reasons
REASON_REQUESTED_TEMPLATE = "Caller requested {principal} directly."
REASON_BEYOND_CONTEXT = "Caller asked for information beyond prepared context."
REASON_SILENCE = "Caller remained silent for more than five seconds."


def intro_line(context: CallContext) -> str:
    return INTRO_TEMPLATE.format(
        assistant=context.assistant_name,
        principal_full=context.principal_name,
        principal=context.principal_first_name,
        purpose=context.purpose.lower(),
    )


def humanize_talking_point(point: str, index: int) -> str:
    """Turn a raw script line into a spoken sentence with a rotating lead-in."""
    trimmed = point.strip()
    if not trimmed:
        return ""
    sentence = trimmed if trimmed.endswith(".") else f"{trimmed}."
    prefix = CONNECTIVES[index % len(CONNECTIVES)]
    return f"{prefix} {sentence}"


def clarification_prompts(context: CallContext) -> tuple[str, ...]:
    return tuple(t.format(principal=context.principal_first_name) for t in CLARIFICATION_TEMPLATES)


def script_exhausted_line(context: CallContext) -> str:
    return SCRIPT_EXHAUSTED_TEMPLATE.format(principal=context.principal_first_name)


def transfer_line(context: CallContext) -> str:
    return TRANSFER_TEMPLATE.format(principal=context.principal_first_name)


def closing_line(context: CallContext) -> str:
    return CLOSING_TEMPLATE.format(principal=context.principal_first_name)


def requested_reason(context: CallContext) -> str:
    return REASON_REQUESTED_TEMPLATE.format(principal=context.principal_first_name)


def escalation_note(reason: str) -> str:
    return ESCALATION_NOTE_TEMPLATE.format(reason=reason)


def clarification_logged_note(context: CallContext) -> str:
    return CLARIFICATION_LOGGED_TEMPLATE.format(assistant=context.assistant_name)
