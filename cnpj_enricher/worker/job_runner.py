from cnpj_enricher.catalog.selection import SelectionSet
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.processor.exceptions import StaleRunError
from cnpj_enricher.processor.models import UploadedFile
from cnpj_enricher.processor.pipeline import PipelineContext
from cnpj_enricher.processor.processor import Processor
from cnpj_enricher.status.models import JobStatus
from cnpj_enricher.status.tracker import JobStatusModel
from cnpj_enricher.tabular.exceptions import TabularError


class JobRunner:
    """Run one upload to a terminal status, catching run-level exceptions."""

    def __init__(self, processor: Processor, status_model: JobStatusModel) -> None:
        self._processor = processor
        self._status_model = status_model

    def run(self, upload: UploadedFile, selection: SelectionSet) -> JobStatus:
        """Start a new run for `upload`, superseding any previous one.

        The selection is snapshotted once so the whole run sees the same fields.
        Returns the run's final status; it never raises for bad input or
        failed lookups.
        """
        token = self._status_model.start_run()
        context = PipelineContext(
            upload=upload,
            selection=selection.snapshot(),
            token=token,
            status=self._status_model.current,
        )
        try:
            context = self._processor.process(context)
        except StaleRunError as exc:
            Log.info(f"Dropped superseded run: {exc}")
        except TabularError as exc:
            Log.error(f"Run {token.generation} rejected {upload.name}: {exc}")
        except Exception:
            Log.exception(f"Run {token.generation} for {upload.name} failed unexpectedly")
        return context.status
