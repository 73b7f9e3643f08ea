# tests/unit/api/test_unit_facade.py — v1
"""Tests for api/facade.py: analyze() with an injected resolver."""

from __future__ import annotations

import pytest

from facetier.analysis.simulated import SimulatedGenerator
from facetier.api.facade import analyze
from facetier.api.models import AnalysisReport, ImageInput
from facetier.cache.fingerprint import content_hash
from facetier.config.settings import Settings
from facetier.core.models import Provenance
from facetier.network.connectivity import LinkType
from facetier.resolver.resolver import ResultResolver
from facetier.storage.history_store import SqliteHistoryStore


@pytest.fixture
def resolver(memory_cache, make_oracle, remote_success):
    return ResultResolver(
        cache=memory_cache,
        connectivity=make_oracle(LinkType.ETHERNET),
        remote=remote_success,
        simulator=SimulatedGenerator(seed=1),
    )


class TestAnalyze:
    @pytest.mark.asyncio
    async def test_face_and_medical(self, resolver, blank_jpeg):
        report = await analyze(blank_jpeg, resolver=resolver)
        assert isinstance(report, AnalysisReport)
        assert report.face.provenance is Provenance.REMOTE
        assert report.medical is not None
        assert report.history_id is None
        assert not report.degraded

    @pytest.mark.asyncio
    async def test_skip_medical(self, resolver, remote_success, blank_jpeg):
        report = await analyze(blank_jpeg, resolver=resolver, include_medical=False)
        assert report.medical is None
        assert remote_success.calls == ["face"]

    @pytest.mark.asyncio
    async def test_writes_history(self, resolver, database, blank_jpeg):
        history = SqliteHistoryStore(database)
        report = await analyze(blank_jpeg, resolver=resolver, history=history)
        record = await history.get(report.history_id)
        assert record.image_sha256 == content_hash(blank_jpeg)
        assert record.face == report.face
        assert record.medical == report.medical

    @pytest.mark.asyncio
    async def test_image_input_from_path(self, resolver, tmp_path, blank_jpeg):
        path = tmp_path / "face.jpg"
        path.write_bytes(blank_jpeg)
        report = await analyze(ImageInput(content=path), resolver=resolver)
        assert report.face.provenance is Provenance.REMOTE

    @pytest.mark.asyncio
    async def test_image_input_from_str_path(self, resolver, tmp_path, blank_jpeg):
        path = tmp_path / "face.jpg"
        path.write_bytes(blank_jpeg)
        report = await analyze(ImageInput(content=str(path)), resolver=resolver)
        assert report.face.provenance is Provenance.REMOTE

    @pytest.mark.asyncio
    async def test_empty_image_rejected(self, resolver):
        with pytest.raises(ValueError):
            await analyze(b"", resolver=resolver)

    @pytest.mark.asyncio
    async def test_builds_own_resolver(self, tmp_path, blank_jpeg, monkeypatch):
        monkeypatch.setattr(
            "facetier.network.connectivity.ConnectivityOracle.is_reachable",
            _offline,
        )
        settings = Settings(
            _env_file=None,
            database_path=tmp_path / "facetier.db",
            face_detector="none",
            simulated_seed=5,
        )
        report = await analyze(blank_jpeg, settings=settings)
        assert report.face.provenance is Provenance.SIMULATED
        assert report.medical.provenance is Provenance.SIMULATED
        assert report.degraded
        assert report.history_id == 1


class TestImageInput:
    def test_str_is_read_as_path(self, tmp_path, blank_jpeg):
        path = tmp_path / "face.jpg"
        path.write_bytes(blank_jpeg)
        image = ImageInput(content=str(path))
        assert image.content == path
        assert image.read_bytes() == blank_jpeg

    def test_bytes_kept_as_is(self, blank_jpeg):
        assert ImageInput(content=blank_jpeg).read_bytes() == blank_jpeg

    def test_missing_str_path_raises_on_read(self, tmp_path):
        image = ImageInput(content=str(tmp_path / "absent.jpg"))
        with pytest.raises(FileNotFoundError):
            image.read_bytes()


async def _offline(self) -> bool:
    return False
