from enum import Enum


class CallStatus(Enum):
    STANDBY = "standby"
    LIVE = "live"
    COMPLETE = "complete"

    @property
    def accepts_input(self) -> bool:
        return self is CallStatus.LIVE

    @property
    def is_terminal(self) -> bool:
        return self is CallStatus.COMPLETE

    @property
    def label(self) -> str:
        return {
            CallStatus.STANDBY: "Standby",
            CallStatus.LIVE: "Live Call",
            CallStatus.COMPLETE: "Call Complete",
        }[self]
