"""Exception types and error classification for the detection loop."""

from __future__ import annotations

from typing import Iterable


class AttentionEngineError(Exception):
    """Base class for attention engine errors."""


class DetectorInitializationError(AttentionEngineError):
    """The landmark backend could not be loaded; no cycle can ever succeed."""


class FrameNotReadyError(AttentionEngineError):
    """The frame source is not delivering usable frames yet (or anymore)."""


def is_transient_error(error: BaseException, patterns: Iterable[str] = ()) -> bool:
    """
    Tell whether a cycle failure is a teardown/startup race.

    Transient errors are swallowed by the scheduler without logging noise.
    Besides FrameNotReadyError, third-party errors are recognized by message
    fragments such as "texture size" or "0x0".
    """
    if isinstance(error, FrameNotReadyError):
        return True
    message = str(error).lower()
    return any(pattern.lower() in message for pattern in patterns)
