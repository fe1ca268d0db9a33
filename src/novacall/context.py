import dataclasses
from dataclasses import dataclass


DEFAULT_TALKING_POINTS = (
    "Thank them for taking time to speak about the application submitted last week",
    "Confirm they received Manohar's portfolio link and technical writing sample",
    "Offer to schedule a 30-minute conversation with Manohar next week",
    "Highlight Manohar's availability on Tuesday through Thursday between 10 AM and 2 PM ET",
    "Reassure that Manohar will personally follow up after the conversation",
)

DEFAULT_HANDOFF_CONDITIONS = (
    "Caller requests to speak with Manohar directly",
    "Caller asks something outside the role or hiring process",
    "Caller remains silent for more than 5 seconds",
)

# Fields an external editor may change. Persona names come from config only.
EDITABLE_FIELDS = frozenset({
    "phone_number", "purpose", "talking_points",
    "handoff_conditions", "consent_to_summary",
})


def parse_list(value: str) -> tuple[str, ...]:
    """Split newline-delimited form text into trimmed, non-empty lines."""
    return tuple(line.strip() for line in value.split("\n") if line.strip())


@dataclass(frozen=True)
class CallContext:
    purpose: str
    talking_points: tuple[str, ...] = ()
    handoff_conditions: tuple[str, ...] = ()
    consent_to_summary: bool = True

    # Display / persona
    phone_number: str = ""
    principal_name: str = "Manohar Kumar Sah"
    assistant_name: str = "Nova"

    @property
    def principal_first_name(self) -> str:
        parts = self.principal_name.split()
        return parts[0] if parts else self.principal_name

    @property
    def principal_token(self) -> str:
        """Lowercased first name, matched against caller text for handoff requests."""
        return self.principal_first_name.lower()


def default_context(principal_name: str = "Manohar Kumar Sah", assistant_name: str = "Nova") -> CallContext:
    return CallContext(
        phone_number="+1 (555) 013-4455",
        purpose="Follow up on AI/ML job application",
        talking_points=DEFAULT_TALKING_POINTS,
        handoff_conditions=DEFAULT_HANDOFF_CONDITIONS,
        consent_to_summary=True,
        principal_name=principal_name,
        assistant_name=assistant_name,
    )


def _coerce_lines(value) -> tuple[str, ...]:
    if isinstance(value, str):
        return parse_list(value)
    return tuple(str(item).strip() for item in value if str(item).strip())


def apply_edits(context: CallContext, **changes) -> CallContext:
    """Return a new context with the given fields replaced.

    Talking points and handoff conditions may arrive either as sequences or
    as the raw newline-delimited text of a form field.
    """
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise TypeError(f"Unknown context fields: {', '.join(sorted(unknown))}")

    for key in ("talking_points", "handoff_conditions"):
        if key in changes:
            changes[key] = _coerce_lines(changes[key])
    if "consent_to_summary" in changes:
        changes["consent_to_summary"] = bool(changes["consent_to_summary"])
    return dataclasses.replace(context, **changes)
