"""
Document Storage

Stores uploaded files on local disk under generated filenames. The stored
filename is the only handle recorded in the database; the client's original
filename never becomes part of the path.

Writes are not transactional. Callers that need to undo a write (for example
after a failed database transaction) use ``delete``, which is best effort.
"""

import logging
import shutil
import uuid
from pathlib import Path

from fastapi import Request, UploadFile
from starlette.concurrency import run_in_threadpool

logger = logging.getLogger(__name__)


class DocumentStore:
    """Local directory blob store for uploaded application documents."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def ensure_root(self) -> None:
        self.root.mkdir(parents=True, exist_ok=True)

    @staticmethod
    def _generate_filename() -> str:
        return uuid.uuid4().hex

    def path_for(self, filename: str) -> Path:
        return self.root / filename

    def _write(self, upload: UploadFile, filename: str) -> None:
        self.ensure_root()
        upload.file.seek(0)
        with open(self.path_for(filename), "wb") as out:
            shutil.copyfileobj(upload.file, out)

    async def save(self, upload: UploadFile) -> str:
        """
        Persist an uploaded file and return its stored filename.

        Args:
            upload: The multipart upload to persist

        Returns:
            Generated filename under the store root
        """
        filename = self._generate_filename()
        await run_in_threadpool(self._write, upload, filename)
        logger.info(f"Stored upload '{upload.filename}' as {filename}")
        return filename

    async def delete(self, filename: str) -> bool:
        """
        Remove a stored file. Failures are logged, never raised.

        Returns:
            True if the file was removed, False otherwise
        """
        try:
            await run_in_threadpool(self.path_for(filename).unlink)
            return True
        except OSError as e:
            logger.warning(f"Could not remove stored file {filename}: {e}")
            return False


def get_document_store(request: Request) -> DocumentStore:
    """FastAPI dependency returning the configured DocumentStore."""
    return request.app.state.document_store
