import os
import sys

from novacall.controller import CallController

from tests.fakes import StepClock, make_ids

# Add scripts to path so we can import the module
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "scripts"))
from replay_call import format_replay, parse_script_lines, run_replay, stepping_clock  # noqa: E402


class TestParseScriptLines:
    def test_utterances_and_controls(self):
        lines = ["Sounds good", "", "# comment", "  !SILENCE ", "!close", "!note", "!unknown"]
        assert parse_script_lines(lines) == [
            ("say", "Sounds good"),
            ("silence", ""),
            ("close", ""),
            ("note", ""),
            ("say", "!unknown"),
        ]

    def test_empty(self):
        assert parse_script_lines([]) == []


def test_stepping_clock_advances_per_read():
    from tests.fakes import T0
    clock = stepping_clock(T0, step_seconds=2.0)
    assert (clock() - T0).total_seconds() == 0.0
    assert (clock() - T0).total_seconds() == 2.0


class TestRunReplay:
    def test_closes_call_by_default(self, context):
        controller = CallController(context, id_factory=make_ids(), clock=StepClock())
        run_replay(controller, parse_script_lines(["Sounds good", "Okay"]))
        assert controller.session.ended is True
        assert controller.session.covered_points == [True, True]

    def test_leave_open(self, context):
        controller = CallController(context, id_factory=make_ids(), clock=StepClock())
        run_replay(controller, parse_script_lines(["Sounds good"]), leave_open=True)
        assert controller.session.active is True

    def test_silence_control_escalates(self, context):
        controller = CallController(context, id_factory=make_ids(), clock=StepClock())
        run_replay(controller, parse_script_lines(["!silence", "Sounds good"]))
        assert controller.session.escalation_reason == "Caller remained silent for more than five seconds."
        assert controller.session.covered_points == [False, False]


def test_format_replay_prints_transcript_then_summary(context):
    controller = CallController(context, id_factory=make_ids(), clock=StepClock())
    run_replay(controller, parse_script_lines(["I need to speak with Manohar"]))
    output = format_replay(controller)
    assert output.startswith("Call to +15125551234 | Call Complete")
    assert "Caller: I need to speak with Manohar" in output
    assert "[Note: Escalated • Caller requested Manohar directly.]" in output
    assert "Handoff reason: Caller requested Manohar directly." in output
    assert output.index("Nova: Let me connect you") < output.index("Purpose: Follow up on job application.")
