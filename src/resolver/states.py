# src/resolver/states.py — v1
"""Fallback state machine: states, signals and the transition table.

Each handler in the resolver reports one Signal; the next state is a pure
lookup of (current state, signal). Every path ends in DONE.
"""

from __future__ import annotations

from enum import Enum

from facetier.llm.models import ErrorClass


class ResolverState(str, Enum):
    CACHE_LOOKUP = "cache_lookup"
    CONNECTIVITY_CHECK = "connectivity_check"
    REMOTE_CALL = "remote_call"
    WRITE_CACHE = "write_cache"
    LOCAL_OR_SIMULATED = "local_or_simulated"
    CACHE_RETRY = "cache_retry"
    SIMULATED = "simulated"
    DONE = "done"


class Signal(str, Enum):
    HIT = "hit"
    MISS = "miss"
    ONLINE = "online"
    OFFLINE = "offline"
    SUCCESS = "success"
    QUOTA = "quota"
    TRANSIENT = "transient"
    MALFORMED = "malformed"
    UNREACHABLE = "unreachable"
    RESOLVED = "resolved"


class InvalidTransitionError(Exception):
    """A handler reported a signal its state does not accept."""


TRANSITIONS: dict[tuple[ResolverState, Signal], ResolverState] = {
    (ResolverState.CACHE_LOOKUP, Signal.HIT): ResolverState.DONE,
    (ResolverState.CACHE_LOOKUP, Signal.MISS): ResolverState.CONNECTIVITY_CHECK,
    (ResolverState.CONNECTIVITY_CHECK, Signal.OFFLINE): ResolverState.LOCAL_OR_SIMULATED,
    (ResolverState.CONNECTIVITY_CHECK, Signal.ONLINE): ResolverState.REMOTE_CALL,
    (ResolverState.REMOTE_CALL, Signal.SUCCESS): ResolverState.WRITE_CACHE,
    (ResolverState.REMOTE_CALL, Signal.QUOTA): ResolverState.LOCAL_OR_SIMULATED,
    (ResolverState.REMOTE_CALL, Signal.TRANSIENT): ResolverState.LOCAL_OR_SIMULATED,
    (ResolverState.REMOTE_CALL, Signal.MALFORMED): ResolverState.LOCAL_OR_SIMULATED,
    (ResolverState.REMOTE_CALL, Signal.UNREACHABLE): ResolverState.CACHE_RETRY,
    (ResolverState.WRITE_CACHE, Signal.RESOLVED): ResolverState.DONE,
    (ResolverState.CACHE_RETRY, Signal.HIT): ResolverState.DONE,
    (ResolverState.CACHE_RETRY, Signal.MISS): ResolverState.SIMULATED,
    (ResolverState.LOCAL_OR_SIMULATED, Signal.RESOLVED): ResolverState.DONE,
    (ResolverState.SIMULATED, Signal.RESOLVED): ResolverState.DONE,
}

_ERROR_SIGNALS: dict[ErrorClass, Signal] = {
    ErrorClass.QUOTA: Signal.QUOTA,
    ErrorClass.TRANSIENT: Signal.TRANSIENT,
    ErrorClass.MALFORMED_RESPONSE: Signal.MALFORMED,
    ErrorClass.UNREACHABLE: Signal.UNREACHABLE,
}


def next_state(state: ResolverState, signal: Signal) -> ResolverState:
    """Pure transition function."""
    try:
        return TRANSITIONS[(state, signal)]
    except KeyError:
        raise InvalidTransitionError(
            f"No transition from {state.value} on {signal.value}"
        ) from None


def signal_for_error(error_class: ErrorClass) -> Signal:
    return _ERROR_SIGNALS[error_class]
