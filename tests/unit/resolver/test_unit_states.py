# tests/unit/resolver/test_unit_states.py — v1
"""Tests for resolver/states.py: the transition table."""

from __future__ import annotations

import pytest

from facetier.llm.models import ErrorClass
from facetier.resolver.states import (
    TRANSITIONS,
    InvalidTransitionError,
    ResolverState,
    Signal,
    next_state,
    signal_for_error,
)


class TestTransitions:
    @pytest.mark.parametrize("state,signal,expected", [
        (ResolverState.CACHE_LOOKUP, Signal.HIT, ResolverState.DONE),
        (ResolverState.CACHE_LOOKUP, Signal.MISS, ResolverState.CONNECTIVITY_CHECK),
        (ResolverState.CONNECTIVITY_CHECK, Signal.OFFLINE, ResolverState.LOCAL_OR_SIMULATED),
        (ResolverState.CONNECTIVITY_CHECK, Signal.ONLINE, ResolverState.REMOTE_CALL),
        (ResolverState.REMOTE_CALL, Signal.SUCCESS, ResolverState.WRITE_CACHE),
        (ResolverState.REMOTE_CALL, Signal.QUOTA, ResolverState.LOCAL_OR_SIMULATED),
        (ResolverState.REMOTE_CALL, Signal.TRANSIENT, ResolverState.LOCAL_OR_SIMULATED),
        (ResolverState.REMOTE_CALL, Signal.MALFORMED, ResolverState.LOCAL_OR_SIMULATED),
        (ResolverState.REMOTE_CALL, Signal.UNREACHABLE, ResolverState.CACHE_RETRY),
        (ResolverState.WRITE_CACHE, Signal.RESOLVED, ResolverState.DONE),
        (ResolverState.CACHE_RETRY, Signal.HIT, ResolverState.DONE),
        (ResolverState.CACHE_RETRY, Signal.MISS, ResolverState.SIMULATED),
        (ResolverState.LOCAL_OR_SIMULATED, Signal.RESOLVED, ResolverState.DONE),
        (ResolverState.SIMULATED, Signal.RESOLVED, ResolverState.DONE),
    ])
    def test_table(self, state, signal, expected):
        assert next_state(state, signal) is expected

    def test_unknown_transition(self):
        with pytest.raises(InvalidTransitionError):
            next_state(ResolverState.CACHE_LOOKUP, Signal.SUCCESS)

    def test_done_is_terminal(self):
        assert not any(state is ResolverState.DONE for state, _ in TRANSITIONS)

    def test_every_path_reaches_done(self):
        def reaches_done(state, seen=()):
            if state is ResolverState.DONE:
                return True
            targets = [t for (s, _), t in TRANSITIONS.items() if s is state]
            return bool(targets) and all(
                t not in seen and reaches_done(t, seen + (state,)) for t in targets
            )

        assert reaches_done(ResolverState.CACHE_LOOKUP)

    @pytest.mark.parametrize("error_class,signal", [
        (ErrorClass.QUOTA, Signal.QUOTA),
        (ErrorClass.TRANSIENT, Signal.TRANSIENT),
        (ErrorClass.MALFORMED_RESPONSE, Signal.MALFORMED),
        (ErrorClass.UNREACHABLE, Signal.UNREACHABLE),
    ])
    def test_signal_for_error(self, error_class, signal):
        assert signal_for_error(error_class) is signal
