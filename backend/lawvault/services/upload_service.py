import logging
import os
import secrets
import time
from typing import Optional
import aiofiles
from starlette.datastructures import UploadFile

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
CHUNK_SIZE = 1024 * 1024


class UploadService:
    """Stores uploaded photos in the managed upload directory."""

    def __init__(self, upload_dir: str):
        self.upload_dir = upload_dir

    def ensure_dir(self) -> None:
        os.makedirs(self.upload_dir, exist_ok=True)

    @staticmethod
    def generate_filename(original_name: Optional[str]) -> str:
        # Client filenames are only trusted for their extension
        ext = os.path.splitext(os.path.basename(original_name or ""))[1].lower()
        return f"{int(time.time() * 1000)}-{secrets.randbelow(10 ** 9)}{ext}"

    async def save(self, file: UploadFile) -> str:
        """Write the upload to disk and return its public reference.

        Any OSError propagates: a photo that cannot be stored fails the request.
        """
        self.ensure_dir()
        filename = self.generate_filename(file.filename)
        file_path = os.path.join(self.upload_dir, filename)

        try:
            async with aiofiles.open(file_path, "wb") as f:
                while True:
                    chunk = await file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    await f.write(chunk)
        except OSError:
            self._remove(file_path)
            raise

        logger.info("Stored upload %s", filename)
        return f"{UPLOAD_URL_PREFIX}/{filename}"

    def delete(self, reference: str) -> None:
        filename = reference.rsplit("/", 1)[-1]
        self._remove(os.path.join(self.upload_dir, filename))

    def _remove(self, file_path: str) -> None:
        try:
            os.remove(file_path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove upload %s", file_path, exc_info=True)
