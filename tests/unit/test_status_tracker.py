from pathlib import Path
from unittest.mock import MagicMock

from cnpj_enricher.artifacts.store import ArtifactStore, OutputArtifact
from cnpj_enricher.status.models import JobPhase, JobStatus
from cnpj_enricher.status.tracker import JobStatusModel


def _make_model() -> tuple[JobStatusModel, MagicMock]:
    store = MagicMock(spec=ArtifactStore)
    return JobStatusModel(store), store


def _done(artifact: OutputArtifact | None = None) -> JobStatus:
    return JobStatus(phase=JobPhase.ENRICHING).transition(JobPhase.DONE, artifact=artifact)


class TestStartRun:
    def test_initial_status_is_idle(self) -> None:
        model, _store = _make_model()

        assert model.current.phase is JobPhase.IDLE

    def test_resets_to_parsing(self) -> None:
        model, _store = _make_model()

        model.start_run()

        assert model.current == JobStatus(phase=JobPhase.PARSING)

    def test_tokens_increase(self) -> None:
        model, _store = _make_model()

        first = model.start_run()
        second = model.start_run()

        assert second.generation == first.generation + 1
        assert not model.is_current(first)
        assert model.is_current(second)

    def test_releases_previous_artifact(self) -> None:
        model, store = _make_model()
        artifact = OutputArtifact(name="a.csv", path=Path("a.csv"))
        token = model.start_run()
        model.update(token, _done(artifact))

        model.start_run()

        store.release.assert_called_once_with(artifact)
        assert model.current.artifact is None

    def test_no_release_without_artifact(self) -> None:
        model, store = _make_model()

        model.start_run()
        model.start_run()

        store.release.assert_not_called()


class TestUpdate:
    def test_accepts_current_run(self) -> None:
        model, _store = _make_model()
        token = model.start_run()
        status = JobStatus(phase=JobPhase.ENRICHING, progress=0.5)

        assert model.update(token, status) is True
        assert model.current == status

    def test_ignores_stale_run(self) -> None:
        model, _store = _make_model()
        stale = model.start_run()
        model.start_run()

        accepted = model.update(stale, JobStatus(phase=JobPhase.ENRICHING, progress=0.9))

        assert accepted is False
        assert model.current.phase is JobPhase.PARSING

    def test_releases_artifact_of_stale_completion(self) -> None:
        model, store = _make_model()
        stale = model.start_run()
        model.start_run()
        artifact = OutputArtifact(name="old.csv", path=Path("old.csv"))

        model.update(stale, _done(artifact))

        store.release.assert_called_once_with(artifact)
        assert model.current.artifact is None


class TestListeners:
    def test_notified_of_accepted_statuses_only(self) -> None:
        model, _store = _make_model()
        seen: list[JobStatus] = []
        model.subscribe(seen.append)

        stale = model.start_run()
        model.start_run()
        model.update(stale, JobStatus(phase=JobPhase.ENRICHING))

        assert [status.phase for status in seen] == [JobPhase.PARSING, JobPhase.PARSING]


class TestStaleArtifactSharingPath:
    def test_keeps_file_now_owned_by_latest_run(self) -> None:
        model, store = _make_model()
        stale = model.start_run()
        latest = model.start_run()
        newer = OutputArtifact(name="clientes.csv", path=Path("out/clientes.csv"))
        model.update(latest, _done(newer))

        model.update(stale, _done(OutputArtifact(name="clientes.csv", path=Path("out/clientes.csv"))))

        store.release.assert_not_called()
        assert model.current.artifact == newer

    def test_releases_stale_file_with_a_different_path(self) -> None:
        model, store = _make_model()
        stale = model.start_run()
        latest = model.start_run()
        model.update(latest, _done(OutputArtifact(name="b.csv", path=Path("out/b.csv"))))
        old = OutputArtifact(name="a.csv", path=Path("out/a.csv"))

        model.update(stale, _done(old))

        store.release.assert_called_once_with(old)
