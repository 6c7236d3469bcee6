from dataclasses import dataclass, replace
from enum import Enum

from cnpj_enricher.artifacts.store import OutputArtifact


class JobPhase(str, Enum):
    IDLE = "idle"
    PARSING = "parsing"
    ENRICHING = "enriching"
    DONE = "done"
    ERROR = "error"


TERMINAL_PHASES = frozenset({JobPhase.DONE, JobPhase.ERROR})

_ALLOWED_TRANSITIONS: dict[JobPhase, frozenset[JobPhase]] = {
    JobPhase.IDLE: frozenset({JobPhase.PARSING}),
    JobPhase.PARSING: frozenset({JobPhase.ENRICHING, JobPhase.ERROR}),
    JobPhase.ENRICHING: frozenset({JobPhase.DONE, JobPhase.ERROR}),
    JobPhase.DONE: frozenset(),
    JobPhase.ERROR: frozenset(),
}


class InvalidTransitionError(ValueError):
    """Raised when a status change breaks the phase order or progress monotonicity."""


@dataclass(frozen=True)
class JobStatus:
    """Snapshot of one run, as read by the presentation layer."""

    phase: JobPhase = JobPhase.IDLE
    progress: float = 0.0
    message: str | None = None
    artifact: OutputArtifact | None = None

    @property
    def is_terminal(self) -> bool:
        return self.phase in TERMINAL_PHASES

    def transition(
        self,
        phase: JobPhase,
        *,
        message: str | None = None,
        artifact: OutputArtifact | None = None,
    ) -> "JobStatus":
        if phase not in _ALLOWED_TRANSITIONS[self.phase]:
            raise InvalidTransitionError(
                f"Cannot move from {self.phase.value} to {phase.value}"
            )
        progress = 1.0 if phase is JobPhase.DONE else self.progress
        return replace(self, phase=phase, progress=progress, message=message, artifact=artifact)

    def advance(self, progress: float) -> "JobStatus":
        """Report enrichment progress; 1.0 is reserved for the done phase."""
        if self.phase is not JobPhase.ENRICHING:
            raise InvalidTransitionError(f"Progress only advances while enriching, not {self.phase.value}")
        if not 0.0 <= progress < 1.0:
            raise InvalidTransitionError(f"Progress must be in [0, 1) while enriching, got {progress}")
        if progress < self.progress:
            raise InvalidTransitionError(f"Progress cannot go back from {self.progress} to {progress}")
        return replace(self, progress=progress)


def starting_status() -> JobStatus:
    """Status of a fresh run: parsing, no progress, no artifact."""
    return JobStatus(phase=JobPhase.PARSING)
