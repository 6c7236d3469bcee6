from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path

import httpx
import pytest

from cnpj_enricher.artifacts.store import ArtifactStore
from cnpj_enricher.catalog.fields import FieldCatalog
from cnpj_enricher.config.settings import Settings
from cnpj_enricher.lookup.http_client import HttpLookupClient
from cnpj_enricher.processor.processor import build_processor
from cnpj_enricher.status.models import JobStatus
from cnpj_enricher.status.tracker import JobStatusModel
from cnpj_enricher.worker.job_runner import JobRunner


@dataclass
class FakeLookupService:
    """In-memory stand-in for minhareceita.org: digits -> (status, JSON body)."""

    responses: dict[str, tuple[int, object]] = field(default_factory=dict)
    requested: list[str] = field(default_factory=list)
    corrupted: set[str] = field(default_factory=set)

    def handle(self, request: httpx.Request) -> httpx.Response:
        digits = request.url.path.strip("/")
        self.requested.append(digits)
        if digits in self.corrupted:
            return httpx.Response(
                200, headers={"Content-Encoding": "gzip"}, stream=httpx.ByteStream(b"not gzip")
            )
        status, body = self.responses.get(digits, (404, {"message": "not found"}))
        return httpx.Response(status, json=body)


@dataclass
class EnrichmentHarness:
    service: FakeLookupService
    runner: JobRunner
    status_model: JobStatusModel
    catalog: FieldCatalog
    seen: list[JobStatus]


@pytest.fixture
def test_settings() -> Settings:
    return Settings(lookup_base_url="https://minhareceita.org", output_suffix="-enriquecido")


@pytest.fixture
def lookup_service() -> FakeLookupService:
    return FakeLookupService()


@pytest.fixture
def harness(
    test_settings: Settings,
    lookup_service: FakeLookupService,
    tmp_path: Path,
) -> Generator[EnrichmentHarness, None, None]:
    client = HttpLookupClient(
        base_url=test_settings.lookup_base_url,
        timeout_seconds=test_settings.lookup_timeout_seconds,
        transport=httpx.MockTransport(lookup_service.handle),
    )
    artifact_store = ArtifactStore(tmp_path / "out")
    status_model = JobStatusModel(artifact_store)
    seen: list[JobStatus] = []
    status_model.subscribe(seen.append)
    catalog = FieldCatalog(client, test_settings.sample_cnpj)
    processor = build_processor(
        test_settings,
        client=client,
        catalog=catalog,
        status_model=status_model,
        artifact_store=artifact_store,
    )
    with client:
        yield EnrichmentHarness(
            service=lookup_service,
            runner=JobRunner(processor, status_model),
            status_model=status_model,
            catalog=catalog,
            seen=seen,
        )
