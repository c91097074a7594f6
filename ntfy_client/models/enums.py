"""Enums for pipeline outcomes."""

from enum import Enum


class PollResult(str, Enum):
    """Outcome of a poll cycle, reported back to the background-fetch host."""

    NEW_DATA = "new_data"
    NO_DATA = "no_data"
    FAILED = "failed"


class TapOutcome(str, Enum):
    """What happened when the user interacted with a notification."""

    ACTION = "action"
    CLICK = "click"
    NONE = "none"
    FAILED = "failed"
