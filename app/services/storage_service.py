import logging
import re
import shutil
import uuid
from pathlib import Path
from typing import Union
from app.core.config import settings
from app.core.exceptions import BadRequestError, ResourceNotFoundError

logger = logging.getLogger(__name__)

PUBLIC_FOLDER = "public"
UPLOADS_FOLDER = "uploads"
TEMP_FOLDER = "temp"

ALLOWED_EXTENSIONS = {
    ".jpg", ".jpeg", ".png", ".gif", ".webp", ".heic",
    ".mp4", ".mov", ".webm",
}
EXTENSION_PATTERN = re.compile(r"^\.[A-Za-z0-9]{1,16}$")


class StorageService:
    """
    Local file storage.

    Uploads land in ``{root}/temp/{uuid}.{ext}`` and are moved to
    ``{root}/uploads/{event_id}/{post_id}/`` once a post references them.
    The root is read from settings on every call.
    """

    @property
    def root_path(self) -> Path:
        return Path(settings.STORAGE_ROOT_DIR).resolve()

    @property
    def public_path(self) -> Path:
        return self.root_path / PUBLIC_FOLDER

    @property
    def uploads_path(self) -> Path:
        return self.root_path / UPLOADS_FOLDER

    @property
    def temp_path(self) -> Path:
        return self.root_path / TEMP_FOLDER

    def init(self) -> None:
        for folder in (self.public_path, self.uploads_path, self.temp_path):
            folder.mkdir(parents=True, exist_ok=True)
        logger.info(f"Storage initialized at: {self.root_path}")

    def save_temp(self, content: bytes, original_filename: str) -> str:
        """Store an upload in the temp area and return its generated name."""
        if not content:
            raise BadRequestError("Uploaded file is empty")
        if len(content) > settings.max_upload_size_bytes:
            raise BadRequestError(f"File size must be less than {settings.MAX_UPLOAD_SIZE_MB}MB")

        extension = Path(original_filename or "").suffix
        self._check_extension(extension)
        new_filename = f"{uuid.uuid4().hex}{extension}"

        self.temp_path.mkdir(parents=True, exist_ok=True)
        (self.temp_path / new_filename).write_bytes(content)

        logger.info(f"Saved temp upload {new_filename} ({len(content)} bytes)")
        return new_filename

    def move_to_permanent(self, temp_name: str, event_id: int, post_id: int) -> str:
        """Move a staged file under the post folder and return its public path."""
        if "/" in temp_name or "\\" in temp_name or temp_name.startswith("."):
            raise BadRequestError(f"Invalid media reference: {temp_name}")
        if "." not in temp_name:
            raise ResourceNotFoundError(f"Temp file not found: {temp_name}")
        self._check_extension(Path(temp_name).suffix)

        source = self.temp_path / temp_name
        if not source.is_file():
            raise ResourceNotFoundError(f"Temp file not found: {temp_name}")

        sub_path = f"{event_id}/{post_id}"
        dest_dir = self.uploads_path / str(event_id) / str(post_id)
        dest_dir.mkdir(parents=True, exist_ok=True)

        shutil.move(str(source), str(dest_dir / temp_name))
        logger.info(f"Moved {temp_name} to /{UPLOADS_FOLDER}/{sub_path}")

        return f"/{UPLOADS_FOLDER}/{sub_path}/{temp_name}"

    def _check_extension(self, extension: str) -> None:
        if not EXTENSION_PATTERN.match(extension) or extension.lower() not in ALLOWED_EXTENSIONS:
            allowed = ", ".join(sorted(ALLOWED_EXTENSIONS))
            raise BadRequestError(f"Invalid file type. Allowed types: {allowed}")

    def remove_post_files(self, event_id: int, post_id: int) -> None:
        self._remove_tree(self.uploads_path / str(event_id) / str(post_id))

    def remove_event_files(self, event_id: int) -> None:
        self._remove_tree(self.uploads_path / str(event_id))

    def _remove_tree(self, path: Union[str, Path]) -> None:
        # Best effort: the database rows are already gone
        try:
            shutil.rmtree(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning(f"Could not remove {path}: {str(e)}")


# Global instance
storage_service = StorageService()
