# src/resolver/resolver.py — v1
"""Tiered result resolution: cache, remote, local heuristic, simulated.

The resolver drives the state machine in facetier.resolver.states. Each state
has one handler that does its I/O, records any result on the trace and
returns a Signal. Every failure class is absorbed here; callers always get a
provenance-tagged result and never an exception.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Awaitable, Callable

from facetier.analysis.local_engine import LocalAnalysisError, LocalHeuristicEngine
from facetier.analysis.simulated import SimulatedGenerator
from facetier.cache.base_cache_store import BaseCacheStore
from facetier.cache.fingerprint import cache_key
from facetier.cache.models import DEFAULT_TTL
from facetier.core.models import (
    AnalysisKind,
    AnalysisRequest,
    AnalysisResult,
    FaceAnalysis,
    MedicalRecommendation,
    Provenance,
)
from facetier.core.payloads import PayloadError, decode_payload_text, encode_payload
from facetier.llm.base_client import BaseInferenceClient
from facetier.llm.models import RemoteSuccess
from facetier.logging.context import set_request_context, set_tier_context
from facetier.network.connectivity import ConnectivityOracle
from facetier.resolver.states import ResolverState, Signal, next_state, signal_for_error

logger = logging.getLogger(__name__)


@dataclass
class ResolutionTrace:
    """Outcome of one resolution plus the states it passed through."""

    request: AnalysisRequest
    key: str
    request_id: str
    result: AnalysisResult | None = None
    states: list[ResolverState] = field(default_factory=list)
    signals: list[Signal] = field(default_factory=list)


class ResultResolver:
    """Resolves analysis requests through the fallback chain."""

    def __init__(
        self,
        cache: BaseCacheStore,
        connectivity: ConnectivityOracle,
        remote: BaseInferenceClient,
        local_engine: LocalHeuristicEngine | None = None,
        simulator: SimulatedGenerator | None = None,
        cache_ttl: timedelta = DEFAULT_TTL,
    ) -> None:
        self._cache = cache
        self._connectivity = connectivity
        self._remote = remote
        self._local = local_engine
        self._simulator = simulator or SimulatedGenerator()
        self._cache_ttl = cache_ttl
        self._handlers: dict[ResolverState, Callable[[ResolutionTrace], Awaitable[Signal]]] = {
            ResolverState.CACHE_LOOKUP: self._cache_lookup,
            ResolverState.CONNECTIVITY_CHECK: self._connectivity_check,
            ResolverState.REMOTE_CALL: self._remote_call,
            ResolverState.WRITE_CACHE: self._write_cache,
            ResolverState.LOCAL_OR_SIMULATED: self._local_or_simulated,
            ResolverState.CACHE_RETRY: self._cache_lookup,
            ResolverState.SIMULATED: self._simulated,
        }

    # --- Public API ---

    async def resolve(self, request: AnalysisRequest) -> AnalysisResult:
        """Resolve a request; every tier failure ends in a simulated result."""
        trace = await self.resolve_with_trace(request)
        if trace.result is None:
            raise RuntimeError(f"Resolution of {request.kind.value} produced no result")
        return trace.result

    async def analyze_face(self, image: bytes) -> FaceAnalysis:
        result = await self.resolve(AnalysisRequest.for_face(image))
        if not isinstance(result, FaceAnalysis):
            raise TypeError(f"Expected FaceAnalysis, got {type(result).__name__}")
        return result

    async def recommend_medical(self, face: FaceAnalysis) -> MedicalRecommendation:
        result = await self.resolve(AnalysisRequest.for_medical(face))
        if not isinstance(result, MedicalRecommendation):
            raise TypeError(f"Expected MedicalRecommendation, got {type(result).__name__}")
        return result

    async def resolve_with_trace(self, request: AnalysisRequest) -> ResolutionTrace:
        """Resolve a request and return the full trace of states visited."""
        request_id = uuid.uuid4().hex[:8]
        set_request_context(request_id, request.kind.value)
        trace = ResolutionTrace(request=request, key=cache_key(request), request_id=request_id)
        try:
            await self._run(trace)
        except Exception:
            logger.exception("Resolution failed unexpectedly, using simulated result")
            trace.result = self._simulate(request)
        finally:
            set_tier_context(None)

        if trace.result is None:
            logger.error("Resolution ended without a result, using simulated result")
            trace.result = self._simulate(request)
        result = trace.result
        logger.info(
            "Resolved %s request via %s (%s)",
            request.kind.value, result.provenance.value,
            " -> ".join(s.value for s in trace.states),
        )
        return trace

    # --- State machine ---

    async def _run(self, trace: ResolutionTrace) -> None:
        state = ResolverState.CACHE_LOOKUP
        while state is not ResolverState.DONE:
            set_tier_context(state.value)
            signal = await self._handlers[state](trace)
            trace.states.append(state)
            trace.signals.append(signal)
            following = next_state(state, signal)
            logger.debug("%s --%s--> %s", state.value, signal.value, following.value)
            state = following

    async def _cache_lookup(self, trace: ResolutionTrace) -> Signal:
        try:
            payload = await self._cache.get(trace.key)
        except Exception as e:
            logger.warning("Cache unavailable, treating as miss: %s", e)
            return Signal.MISS
        if payload is None:
            return Signal.MISS
        try:
            trace.result = decode_payload_text(trace.request.kind, payload, Provenance.CACHED)
        except PayloadError as e:
            logger.warning("Discarding unreadable cache entry %s: %s", trace.key, e)
            return Signal.MISS
        return Signal.HIT

    async def _connectivity_check(self, trace: ResolutionTrace) -> Signal:
        try:
            online = await self._connectivity.is_reachable()
        except Exception as e:
            logger.warning("Connectivity check failed, assuming offline: %s", e)
            online = False
        if not online:
            logger.info("Offline, skipping remote analysis")
        return Signal.ONLINE if online else Signal.OFFLINE

    async def _remote_call(self, trace: ResolutionTrace) -> Signal:
        request = trace.request
        try:
            if request.kind is AnalysisKind.FACE:
                if request.image is None:
                    raise ValueError("face request carries no image")
                outcome = await self._remote.analyze_face(request.image)
            else:
                if request.face is None:
                    raise ValueError("medical request carries no face analysis")
                outcome = await self._remote.recommend_medical(request.face)
        except Exception as e:
            logger.warning("Remote call raised, treating as unreachable: %s", e)
            return Signal.UNREACHABLE

        if isinstance(outcome, RemoteSuccess):
            trace.result = outcome.result
            return Signal.SUCCESS

        logger.info(
            "Remote %s failed (%s, status=%s), falling back",
            request.kind.value, outcome.error_class.value, outcome.status_code,
        )
        return signal_for_error(outcome.error_class)

    async def _write_cache(self, trace: ResolutionTrace) -> Signal:
        if trace.result is None:
            raise RuntimeError("No remote result to cache")
        try:
            await self._cache.put(trace.key, encode_payload(trace.result), self._cache_ttl)
        except Exception as e:
            logger.warning("Failed to cache remote result %s: %s", trace.key, e)
        return Signal.RESOLVED

    async def _local_or_simulated(self, trace: ResolutionTrace) -> Signal:
        request = trace.request
        if request.kind is AnalysisKind.FACE and self._local is not None and request.image is not None:
            try:
                trace.result = await self._local.analyze(request.image)
                return Signal.RESOLVED
            except LocalAnalysisError as e:
                logger.info("Local analysis unavailable (%s), using simulated result", e)
            except Exception as e:
                logger.warning("Local analysis crashed, using simulated result: %s", e)
        trace.result = self._simulate(request)
        return Signal.RESOLVED

    async def _simulated(self, trace: ResolutionTrace) -> Signal:
        trace.result = self._simulate(trace.request)
        return Signal.RESOLVED

    def _simulate(self, request: AnalysisRequest) -> AnalysisResult:
        if request.kind is AnalysisKind.FACE:
            return self._simulator.face()
        return self._simulator.medical(request.face)
