from __future__ import annotations
import logging
import os
import tempfile
from pathlib import Path
from stats_export.shared.errors import DeliveryError


logger = logging.getLogger(__name__)

class FileSystemArtifactSink:
    """Writes finished artifacts into an output directory.

        Bytes go to a temporary file in the same directory first and are
        renamed into place, so a failed write never leaves a truncated file
        under the final name.
        """

    def __init__(self, output_dir: Path) -> None:
        self._output_dir = output_dir

    def deliver(self, filename: str, payload: bytes) -> Path:
        if not filename or Path(filename).name != filename:
            raise DeliveryError(f"Invalid artifact filename: {filename!r}")

        path = self._output_dir / filename
        tmp_name: str | None = None
        try:
            self._output_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{filename}.", dir=self._output_dir)
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as exc:
            logger.error("Could not write artifact %s: %s", path, exc)
            raise DeliveryError(f"Could not write {filename}") from exc
        finally:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)

        logger.info("Artifact written to %s (%d bytes)", path.resolve(), len(payload))
        return path.resolve()
