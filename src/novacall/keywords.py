import re

from novacall.context import CallContext

KEYWORD_PATTERN = re.compile(r"\b[a-z]{4,}\b")
INTERROGATIVE_PATTERN = re.compile(r"\b(what|why|how|who|when|where|which|explain|clarify)\b")

ESCALATION_VERBS = ("speak", "talk", "connect")
ESCALATION_PHRASES = ("speak with {name}", "talk to {name}", "connect me with {name}")


def build_keywords(context: CallContext) -> frozenset[str]:
    """Topic keywords from the purpose and script.

    Every run of four or more letters in the lowercased text counts. The set
    is a coarse relevance signal, never an exact-match router.
    """
    text = " ".join([context.purpose, *context.talking_points]).lower()
    return frozenset(KEYWORD_PATTERN.findall(text))


def is_question(text: str) -> bool:
    lower = text.lower()
    return "?" in lower or bool(INTERROGATIVE_PATTERN.search(lower))


def contains_known_keyword(text: str, keywords: frozenset[str]) -> bool:
    """Check if any keyword appears in text as a substring (not whole word)."""
    lower = text.lower()
    return any(kw in lower for kw in keywords)


def detect_escalation_request(text: str, principal_token: str) -> bool:
    """Caller asks to reach the principal directly.

    Exact phrases, or the name anywhere alongside speak/talk/connect. Negated
    requests ("I don't want to talk to Manohar") also match.
    """
    if not principal_token:
        return False
    lower = text.lower()
    if any(phrase.format(name=principal_token) in lower for phrase in ESCALATION_PHRASES):
        return True
    return principal_token in lower and any(verb in lower for verb in ESCALATION_VERBS)
