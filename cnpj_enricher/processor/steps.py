from cnpj_enricher.artifacts.store import ArtifactStore, output_file_name
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.processor.exceptions import StaleRunError
from cnpj_enricher.processor.models import RunSummary
from cnpj_enricher.processor.pipeline import PipelineContext, PipelineStep
from cnpj_enricher.processor.row_enricher import RowEnricher
from cnpj_enricher.status.models import JobPhase, JobStatus
from cnpj_enricher.status.tracker import JobStatusModel
from cnpj_enricher.tabular.codec import TabularCodec

ENRICHING_MESSAGE = "Consultando API para cada CNPJ..."


def _publish(status_model: JobStatusModel, context: PipelineContext, status: JobStatus) -> None:
    status_model.update(context.token, status)
    context.status = status


class ParseInputStep(PipelineStep):
    def __init__(self, codec: TabularCodec) -> None:
        self._codec = codec

    def run(self, context: PipelineContext) -> PipelineContext:
        context.header, context.rows = self._codec.parse(context.upload.text)
        Log.info(
            f"Parsed {len(context.rows)} rows with columns {list(context.header)} "
            f"from {context.upload.name}"
        )
        return context


class MarkEnrichingStep(PipelineStep):
    def __init__(self, status_model: JobStatusModel) -> None:
        self._status_model = status_model

    def run(self, context: PipelineContext) -> PipelineContext:
        _publish(
            self._status_model,
            context,
            context.status.transition(JobPhase.ENRICHING, message=ENRICHING_MESSAGE),
        )
        return context


class EnrichRowsStep(PipelineStep):
    """Resolves rows one at a time, in input order."""

    def __init__(self, row_enricher: RowEnricher, status_model: JobStatusModel) -> None:
        self._row_enricher = row_enricher
        self._status_model = status_model

    def run(self, context: PipelineContext) -> PipelineContext:
        total = len(context.rows)
        for processed, row in enumerate(context.rows, start=1):
            if not self._status_model.is_current(context.token):
                raise StaleRunError(
                    f"Run {context.token.generation} superseded after {processed - 1} rows"
                )
            enriched, outcome = self._row_enricher.enrich(row, context.selection)
            context.enriched_rows.append(enriched)
            context.outcomes.append(outcome)
            # the last row's completion is reported by the done transition
            if processed < total:
                _publish(self._status_model, context, context.status.advance(processed / total))
        return context


class SerializeOutputStep(PipelineStep):
    def __init__(self, codec: TabularCodec) -> None:
        self._codec = codec

    def run(self, context: PipelineContext) -> PipelineContext:
        context.output_text = self._codec.serialize(context.header, context.enriched_rows)
        return context


class PublishArtifactStep(PipelineStep):
    def __init__(
        self,
        artifact_store: ArtifactStore,
        status_model: JobStatusModel,
        output_suffix: str,
    ) -> None:
        self._artifact_store = artifact_store
        self._status_model = status_model
        self._output_suffix = output_suffix

    def run(self, context: PipelineContext) -> PipelineContext:
        if not self._status_model.is_current(context.token):
            raise StaleRunError(f"Run {context.token.generation} superseded before publishing")
        name = output_file_name(context.upload.name, self._output_suffix)
        context.artifact = self._artifact_store.create(name, context.output_text)
        summary = RunSummary.from_outcomes(context.outcomes)
        Log.info(
            f"Run {context.token.generation} finished: {summary.enriched} enriched, "
            f"{summary.invalid} invalid identifiers, {summary.failed} failed lookups"
        )
        _publish(
            self._status_model,
            context,
            context.status.transition(
                JobPhase.DONE,
                message=(
                    f"Processamento concluído. {summary.enriched} de {summary.total} "
                    f"linhas enriquecidas."
                ),
                artifact=context.artifact,
            ),
        )
        return context


class MarkFailedStep(PipelineStep):
    def __init__(self, artifact_store: ArtifactStore, status_model: JobStatusModel) -> None:
        self._artifact_store = artifact_store
        self._status_model = status_model

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.artifact is not None:
            self._artifact_store.release(context.artifact)
            context.artifact = None
        context.enriched_rows.clear()
        if not context.status.is_terminal:
            _publish(
                self._status_model,
                context,
                context.status.transition(JobPhase.ERROR, message=context.error_message),
            )
        return context
