from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cnpj_enricher.artifacts.store import OutputArtifact
from cnpj_enricher.processor.models import RowOutcome, UploadedFile
from cnpj_enricher.status.models import JobStatus
from cnpj_enricher.status.tracker import RunToken
from cnpj_enricher.tabular.codec import Header, RawRow


@dataclass(slots=True)
class PipelineContext:
    upload: UploadedFile
    selection: tuple[str, ...]
    token: RunToken
    status: JobStatus
    header: Header = ()
    rows: list[RawRow] = field(default_factory=list)
    enriched_rows: list[RawRow] = field(default_factory=list)
    outcomes: list[RowOutcome] = field(default_factory=list)
    output_text: str = ""
    artifact: OutputArtifact | None = None
    error_message: str = ""


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
