from collections.abc import Callable
from dataclasses import dataclass

from cnpj_enricher.artifacts.store import ArtifactStore, OutputArtifact
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.status.models import JobPhase, JobStatus, starting_status

StatusListener = Callable[[JobStatus], None]


@dataclass(frozen=True)
class RunToken:
    """Identifies one run; updates carrying an outdated token are dropped."""

    generation: int


class JobStatusModel:
    """Holds the status of the latest run and the artifact it produced.

    Starting a run supersedes the previous one: its artifact is released and
    anything it still reports afterwards is ignored.
    """

    def __init__(self, artifact_store: ArtifactStore) -> None:
        self._artifact_store = artifact_store
        self._generation = 0
        self._status = JobStatus()
        self._listeners: list[StatusListener] = []

    @property
    def current(self) -> JobStatus:
        return self._status

    def subscribe(self, listener: StatusListener) -> None:
        self._listeners.append(listener)

    def start_run(self) -> RunToken:
        previous = self._status.artifact
        if previous is not None:
            self._artifact_store.release(previous)
        self._generation += 1
        token = RunToken(self._generation)
        Log.debug(f"Run {token.generation} started")
        self._publish(starting_status())
        return token

    def is_current(self, token: RunToken) -> bool:
        return token.generation == self._generation

    def update(self, token: RunToken, status: JobStatus) -> bool:
        """Accept `status` if `token` belongs to the latest run.

        A stale done status still owns an artifact nobody will read, so it is
        released on the spot unless the latest run already published the same
        path.
        """
        if not self.is_current(token):
            Log.warning(
                f"Ignoring {status.phase.value} from superseded run {token.generation} "
                f"(current run is {self._generation})"
            )
            if status.phase is JobPhase.DONE and status.artifact is not None:
                self._release_unless_current(status.artifact)
            return False
        self._publish(status)
        return True

    def _release_unless_current(self, artifact: OutputArtifact) -> None:
        current = self._status.artifact
        if current is not None and current.path == artifact.path:
            Log.warning(f"Keeping {artifact.path}, it now belongs to run {self._generation}")
            return
        self._artifact_store.release(artifact)

    def _publish(self, status: JobStatus) -> None:
        self._status = status
        for listener in self._listeners:
            listener(status)
