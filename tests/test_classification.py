import pytest

from novacall.classification import Route, classify_utterance
from novacall.keywords import build_keywords


@pytest.fixture
def keywords(context):
    return build_keywords(context)


class TestPrecedence:
    def test_escalation_beats_unrecognized_question(self, keywords):
        route = classify_utterance("Can I speak with Manohar about the weather?", keywords, "manohar")
        assert route == Route.ESCALATE

    def test_escalation_beats_plain_statement(self, keywords):
        assert classify_utterance("connect me with Manohar now", keywords, "manohar") == Route.ESCALATE

    def test_unrecognized_question_clarifies(self, keywords):
        route = classify_utterance("Can you tell me about the salary range?", keywords, "manohar")
        assert route == Route.CLARIFY

    def test_interrogative_without_mark_clarifies(self, keywords):
        assert classify_utterance("who won the game", keywords, "manohar") == Route.CLARIFY

    def test_topical_question_continues(self, keywords):
        route = classify_utterance("When would you like to schedule it?", keywords, "manohar")
        assert route == Route.CONTINUE

    def test_statement_continues(self, keywords):
        assert classify_utterance("Sounds good", keywords, "manohar") == Route.CONTINUE

    def test_empty_keyword_index_makes_every_question_unclear(self):
        assert classify_utterance("Is the application open?", frozenset(), "manohar") == Route.CLARIFY


class TestDeterminism:
    def test_same_input_same_route(self, keywords):
        routes = {classify_utterance("What is the weather like?", keywords, "manohar") for _ in range(5)}
        assert routes == {Route.CLARIFY}

    def test_principal_token_controls_escalation(self, keywords):
        assert classify_utterance("I need to speak with Priya", keywords, "priya") == Route.ESCALATE
        assert classify_utterance("I need to speak with Priya", keywords, "manohar") == Route.CONTINUE
