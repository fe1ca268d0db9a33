import logging
from enum import Enum

from novacall.keywords import (
    contains_known_keyword,
    detect_escalation_request,
    is_question,
)

logger = logging.getLogger(__name__)


class Route(Enum):
    ESCALATE = "escalate"
    CLARIFY = "clarify"
    CONTINUE = "continue"


def classify_utterance(text: str, keywords: frozenset[str], principal_token: str) -> Route:
    """Pick exactly one route for a caller utterance.

    Precedence, first match wins:
      1. explicit request for the principal -> ESCALATE
      2. question with no topic keyword     -> CLARIFY
      3. anything else                      -> CONTINUE
    """
    if detect_escalation_request(text, principal_token):
        route = Route.ESCALATE
    elif is_question(text) and not contains_known_keyword(text, keywords):
        route = Route.CLARIFY
    else:
        route = Route.CONTINUE
    logger.debug("Classified utterance as %s: %r", route.value, text)
    return route
