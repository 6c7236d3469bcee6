import argparse
import sys
from pathlib import Path

from tqdm import tqdm

from cnpj_enricher.artifacts.store import ArtifactStore
from cnpj_enricher.catalog.fields import FieldCatalog
from cnpj_enricher.catalog.selection import SelectionSet
from cnpj_enricher.config.settings import Settings
from cnpj_enricher.logging.logger import Log
from cnpj_enricher.lookup.factory import LookupClientFactory
from cnpj_enricher.processor.exceptions import FileReadError
from cnpj_enricher.processor.file_loader import FileLoader
from cnpj_enricher.processor.processor import build_processor
from cnpj_enricher.status.models import JobPhase, JobStatus
from cnpj_enricher.status.tracker import JobStatusModel
from cnpj_enricher.worker.job_runner import JobRunner

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class ProgressBar:
    """Mirrors status progress on a tqdm bar while rows are being enriched (TTY only)."""

    def __init__(self) -> None:
        self._bar: tqdm | None = None

    def __call__(self, status: JobStatus) -> None:
        if status.phase is JobPhase.ENRICHING:
            if self._bar is None:
                self._bar = tqdm(
                    total=100,
                    desc="Enriquecendo",
                    unit="%",
                    disable=not sys.stderr.isatty(),
                    ascii=True,
                    ncols=80,
                )
            self._move_to(status.progress)
        elif status.is_terminal:
            self._move_to(status.progress)
            self.close()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None

    def _move_to(self, progress: float) -> None:
        if self._bar is None:
            return
        target = round(progress * 100)
        if target > self._bar.n:
            self._bar.update(target - self._bar.n)


def _split_fields(raw: str) -> list[str]:
    return [key.strip() for key in raw.split(",") if key.strip()]


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="cnpj-enricher",
        description="Enrich a CSV with a 'cnpj' column using a CNPJ lookup service",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    commands = parser.add_subparsers(dest="command", required=True)

    enrich = commands.add_parser("enrich", help="Enrich one CSV file")
    enrich.add_argument("input", type=Path, help="CSV file with a 'cnpj' column")
    enrich.add_argument(
        "--fields",
        default=None,
        help="Comma-separated field keys to add (default: every discovered field)",
    )
    enrich.add_argument("--output-dir", type=Path, default=None, help="Override OUTPUT_DIR")

    fields = commands.add_parser("fields", help="List the fields the lookup service offers")
    fields.add_argument("--filter", default="", help="Case-insensitive substring filter")
    return parser.parse_args(argv)


def run_fields(settings: Settings, args: argparse.Namespace) -> int:
    client = LookupClientFactory.create(settings)
    try:
        catalog = FieldCatalog(client, settings.sample_cnpj)
        keys = catalog.discover()
    finally:
        client.close()
    if not keys:
        print("Nenhum campo disponível.", file=sys.stderr)
        return EXIT_FAILURE
    for key in FieldCatalog.filter(keys, args.filter):
        print(f"{key}\t{catalog.label(key)}")
    return EXIT_SUCCESS


def run_enrich(settings: Settings, args: argparse.Namespace) -> int:
    try:
        upload = FileLoader().load(args.input)
    except (FileNotFoundError, FileReadError) as exc:
        Log.error(str(exc))
        print(str(exc), file=sys.stderr)
        return EXIT_FAILURE

    output_dir = args.output_dir if args.output_dir is not None else Path(settings.output_dir)
    artifact_store = ArtifactStore(output_dir)
    status_model = JobStatusModel(artifact_store)
    progress = ProgressBar()
    status_model.subscribe(progress)

    client = LookupClientFactory.create(settings)
    try:
        catalog = FieldCatalog(client, settings.sample_cnpj)
        selection = SelectionSet()
        if args.fields is None:
            selection.select_all(catalog.discover())
        else:
            selection.select_all(_split_fields(args.fields))
        if not selection:
            Log.warning("No fields selected, output will match the input columns")

        processor = build_processor(
            settings,
            client=client,
            catalog=catalog,
            status_model=status_model,
            artifact_store=artifact_store,
        )
        status = JobRunner(processor, status_model).run(upload, selection)
    finally:
        progress.close()
        client.close()

    if status.phase is JobPhase.DONE and status.artifact is not None:
        print(status.message)
        print(status.artifact.path)
        return EXIT_SUCCESS
    print(status.message or "Falha no processamento.", file=sys.stderr)
    return EXIT_FAILURE


def main(argv: list[str] | None = None) -> int:
    """Entry point: load settings -> configure logging -> dispatch command."""
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    settings = Settings()
    Log.configure(args.log_level or settings.log_level)

    if args.command == "fields":
        return run_fields(settings, args)
    return run_enrich(settings, args)


if __name__ == "__main__":
    sys.exit(main())
