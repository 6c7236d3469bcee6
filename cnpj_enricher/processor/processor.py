from cnpj_enricher.artifacts.store import ArtifactStore
from cnpj_enricher.catalog.fields import FieldCatalog
from cnpj_enricher.config.settings import Settings
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.lookup.base import BaseLookupClient
from cnpj_enricher.processor.exceptions import StaleRunError
from cnpj_enricher.processor.pipeline import PipelineContext, PipelineStep
from cnpj_enricher.processor.row_enricher import RowEnricher
from cnpj_enricher.processor.steps import (
    EnrichRowsStep,
    MarkEnrichingStep,
    MarkFailedStep,
    ParseInputStep,
    PublishArtifactStep,
    SerializeOutputStep,
)
from cnpj_enricher.status.tracker import JobStatusModel
from cnpj_enricher.tabular.codec import TabularCodec
from cnpj_enricher.tabular.exceptions import TabularError

GENERIC_ERROR_MESSAGE = (
    "Ocorreu um erro ao processar o CSV. Verifique o arquivo e tente novamente."
)


def describe_failure(exc: Exception) -> str:
    """Operator-facing message: input problems verbatim, anything else generic."""
    if isinstance(exc, TabularError) and str(exc):
        return str(exc)
    return GENERIC_ERROR_MESSAGE


class Processor:
    """Runs the enrichment steps in order.

    Pipeline: parse -> mark enriching -> enrich rows -> serialize -> publish.
    Any step failure runs the failed step and re-raises.
    """

    def __init__(self, steps: list[PipelineStep], failed_step: PipelineStep) -> None:
        self._steps = steps
        self._failed_step = failed_step

    def process(self, context: PipelineContext) -> PipelineContext:
        Log.info(
            f"Processing {context.upload.name} (run {context.token.generation}, "
            f"{len(context.selection)} selected fields)"
        )
        try:
            for step in self._steps:
                context = step.run(context)
        except StaleRunError:
            raise
        except Exception as exc:
            context.error_message = describe_failure(exc)
            self._failed_step.run(context)
            raise
        return context


def build_processor(
    settings: Settings,
    *,
    client: BaseLookupClient,
    catalog: FieldCatalog,
    status_model: JobStatusModel,
    artifact_store: ArtifactStore,
) -> Processor:
    """Build a Processor wired to the given lookup client and status model."""
    codec = TabularCodec()
    row_enricher = RowEnricher(client, catalog)
    steps: list[PipelineStep] = [
        ParseInputStep(codec),
        MarkEnrichingStep(status_model),
        EnrichRowsStep(row_enricher, status_model),
        SerializeOutputStep(codec),
        PublishArtifactStep(artifact_store, status_model, settings.output_suffix),
    ]
    return Processor(steps=steps, failed_step=MarkFailedStep(artifact_store, status_model))
