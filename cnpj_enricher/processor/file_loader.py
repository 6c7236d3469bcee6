from pathlib import Path

from cnpj_enricher.processor.exceptions import FileReadError
from cnpj_enricher.processor.models import UploadedFile


class FileLoader:
    """Reads an uploaded CSV from disk as UTF-8 text."""

    def load(self, path: Path) -> UploadedFile:
        """Read the file, dropping a leading byte-order mark if present.

        Raises:
            FileNotFoundError: if the file does not exist.
            FileReadError: if the file cannot be read or decoded.
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        try:
            text = path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise FileReadError(f"Cannot read {path}: {exc}") from exc
        return UploadedFile(name=path.name, text=text)
