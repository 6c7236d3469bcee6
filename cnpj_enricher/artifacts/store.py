import re
from dataclasses import dataclass
from pathlib import Path

from cnpj_enricher.logging.logger import Log

_CSV_EXTENSION = re.compile(r"\.csv$", re.IGNORECASE)


def output_file_name(input_name: str, suffix: str) -> str:
    """'clientes.CSV' -> 'clientes-enriquecido.csv'; 'dados' -> 'dados-enriquecido.csv'."""
    name = Path(input_name).name
    if _CSV_EXTENSION.search(name):
        return _CSV_EXTENSION.sub(f"{suffix}.csv", name)
    return f"{name}{suffix}.csv"


@dataclass(frozen=True)
class OutputArtifact:
    """Handle to a downloadable enriched file."""

    name: str
    path: Path


class ArtifactStore:
    """Creates artifact files in one directory and deletes them on release."""

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def create(self, name: str, text: str) -> OutputArtifact:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        path = self._output_dir / name
        path.write_text(text, encoding="utf-8")
        Log.info(f"Wrote artifact {path} ({len(text)} chars)")
        return OutputArtifact(name=name, path=path)

    def release(self, artifact: OutputArtifact) -> None:
        path = artifact.path
        if path.exists():
            path.unlink()
            Log.debug(f"Released artifact {path}")
