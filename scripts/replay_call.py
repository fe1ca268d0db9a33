#!/usr/bin/env python3
"""Replay a scripted call offline and print the transcript and summary.

Each non-empty line of the input is one caller utterance. Lines starting
with "!" are operator controls:
    !silence   mark the caller silent (hands off to the principal)
    !close     end the call normally
    !note      log that a clarification was requested

Usage:
    python scripts/replay_call.py call.txt                 # transcript + summary
    python scripts/replay_call.py call.txt --raw           # final snapshot as JSON
    python scripts/replay_call.py call.txt --no-consent    # caller declined notes
    cat call.txt | python scripts/replay_call.py -         # read from stdin
"""

import argparse
import itertools
import json
import sys
from datetime import datetime, timedelta, timezone

from dotenv import load_dotenv

from novacall.config import load_settings
from novacall.context import default_context
from novacall.controller import CallController
from novacall.transcript import to_plain_text

CONTROLS = {"!silence", "!close", "!note"}


def parse_script_lines(lines: list[str]) -> list[tuple[str, str]]:
    """Turn raw script lines into (action, text) pairs.

    Blank lines and lines starting with "#" are skipped. Unknown "!" controls
    are treated as ordinary speech.
    """
    steps = []
    for line in lines:
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        if stripped.lower() in CONTROLS:
            steps.append((stripped.lower()[1:], ""))
        else:
            steps.append(("say", stripped))
    return steps


def stepping_clock(start: datetime, step_seconds: float = 1.0):
    """Clock that advances a fixed step on every read, for reproducible dumps."""
    ticks = itertools.count()

    def clock() -> datetime:
        return start + timedelta(seconds=next(ticks) * step_seconds)

    return clock


def run_replay(controller: CallController, steps: list[tuple[str, str]], leave_open: bool = False) -> CallController:
    controller.start_call()
    for action, text in steps:
        if action == "say":
            controller.submit_caller_utterance(text)
        elif action == "silence":
            controller.trigger_silence_escalation()
        elif action == "close":
            controller.close_call()
        elif action == "note":
            controller.log_clarification_note()
    if not leave_open:
        controller.close_call()
    return controller


def format_replay(controller: CallController) -> str:
    snapshot = controller.snapshot()
    lines = [
        f"Call to {snapshot['context']['phone_number'] or 'unknown'} | {snapshot['status_label']}",
        "═" * 55,
        to_plain_text(controller.session.log, assistant_name=controller.context.assistant_name),
        "",
    ]
    if snapshot["escalation_reason"]:
        lines.append(f"Handoff reason: {snapshot['escalation_reason']}")
        lines.append("")
    lines.append(controller.generate_summary())
    return "\n".join(lines)


def main():
    parser = argparse.ArgumentParser(description="Replay a scripted call and print the summary")
    parser.add_argument("script", help="File with one caller utterance per line, or - for stdin")
    parser.add_argument("--raw", action="store_true", help="Output the final snapshot as JSON")
    parser.add_argument("--no-consent", action="store_true", help="Caller declined post-call notes")
    parser.add_argument("--leave-open", action="store_true", help="Do not close the call after the last line")
    args = parser.parse_args()

    load_dotenv()
    settings = load_settings()

    if args.script == "-":
        lines = sys.stdin.read().splitlines()
    else:
        with open(args.script, encoding="utf-8") as f:
            lines = f.read().splitlines()

    context = default_context(
        principal_name=settings.principal_name,
        assistant_name=settings.assistant_name,
    )
    ids = itertools.count(1)
    controller = CallController(
        context,
        id_factory=lambda: f"turn-{next(ids)}",
        clock=stepping_clock(datetime.now(timezone.utc)),
    )
    if args.no_consent:
        controller.update_context(consent_to_summary=False)

    run_replay(controller, parse_script_lines(lines), leave_open=args.leave_open)

    if args.raw:
        print(json.dumps({"call": controller.snapshot(), "summary": controller.generate_summary()}, indent=2))
    else:
        print(format_replay(controller))


if __name__ == "__main__":
    main()
