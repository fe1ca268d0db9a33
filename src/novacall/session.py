from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from novacall.states import CallStatus
from novacall.transcript import ConversationLog


@dataclass
class CallSession:
    active: bool = False
    ended: bool = False

    # Script progress
    next_point_index: int = 0
    covered_points: list = field(default_factory=list)

    # Clarification budget
    clarifications_used: int = 0

    # Handoff
    escalation_reason: str = ""

    launched_at: Optional[datetime] = None
    log: ConversationLog = field(default_factory=ConversationLog)

    @classmethod
    def baseline(cls, point_count: int) -> "CallSession":
        """A never-started session with one coverage slot per talking point."""
        return cls(covered_points=[False] * point_count)

    @property
    def status(self) -> CallStatus:
        if self.active:
            return CallStatus.LIVE
        if self.ended:
            return CallStatus.COMPLETE
        return CallStatus.STANDBY

    def resize_coverage(self, point_count: int):
        """Keep coverage aligned with an edited script.

        Surviving indices keep their flag, new ones start uncovered and the
        cursor is clamped to the new length.
        """
        self.covered_points = [
            self.covered_points[i] if i < len(self.covered_points) else False
            for i in range(point_count)
        ]
        self.next_point_index = min(self.next_point_index, point_count)
