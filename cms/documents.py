"""
Document repository — every document is a plain file directly inside the
configured data directory, and the directory listing is the full set of
documents.
"""

import logging
import os

from flask import current_app, has_app_context
from werkzeug.security import safe_join
from werkzeug.utils import secure_filename

from cms.errors import DocumentNotFound, ValidationError

logger = logging.getLogger(__name__)

COPY_SUFFIX = "_copy"

DEFAULT_DOCUMENT_EXTENSIONS = frozenset({".md", ".txt"})
DEFAULT_IMAGE_EXTENSIONS = frozenset({".jpg", ".png"})


def extension_of(name: str) -> str:
    return os.path.splitext(name)[1].lower()


class DocumentRepository:
    def __init__(self, root=None):
        self.root = root

    def init_app(self, app):
        os.makedirs(app.config["DATA_DIR"], exist_ok=True)

    # ── Configuration ─────────────────────────────────────────────────

    def _root(self):
        return self.root or current_app.config["DATA_DIR"]

    def _config(self, key, default):
        if not has_app_context():
            return default
        return current_app.config.get(key, default)

    @property
    def document_extensions(self):
        return self._config("DOCUMENT_EXTENSIONS", DEFAULT_DOCUMENT_EXTENSIONS)

    @property
    def image_extensions(self):
        return self._config("IMAGE_EXTENSIONS", DEFAULT_IMAGE_EXTENSIONS)

    # ── Lookup ────────────────────────────────────────────────────────

    def path_for(self, name: str) -> str:
        """Resolve a document name to its path, refusing anything outside root."""
        root = os.path.abspath(self._root())
        path = safe_join(root, name) if name else None
        if path is None or os.path.dirname(path) != root:
            raise DocumentNotFound(name)
        return path

    def list(self):
        root = self._root()
        return [
            entry.name
            for entry in os.scandir(root)
            if entry.is_file() and not entry.name.startswith(".")
        ]

    def exists(self, name: str) -> bool:
        try:
            return os.path.isfile(self.path_for(name))
        except DocumentNotFound:
            return False

    def read(self, name: str) -> bytes:
        try:
            with open(self.path_for(name), "rb") as f:
                return f.read()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise DocumentNotFound(name) from e

    # ── Mutations ─────────────────────────────────────────────────────

    def validate_new_name(self, name: str) -> str:
        name = (name or "").strip()

        if not name:
            raise ValidationError("Please enter a document name.")

        ext = extension_of(name)
        if not ext:
            raise ValidationError("Please include an extension.")

        if "." in os.path.splitext(name)[0].lstrip("."):
            raise ValidationError("Please use only one extension.")

        if ext not in self.document_extensions:
            supported = " and ".join(sorted(self.document_extensions))
            raise ValidationError(f"Only {supported} extensions are supported.")

        try:
            path = self.path_for(name)
        except DocumentNotFound:
            raise ValidationError(f"{name} is not a valid document name.") from None
        if os.path.exists(path):
            raise ValidationError(f"{name} already exists.")

        return name

    def create(self, name: str, initial_content="") -> str:
        name = self.validate_new_name(name)
        self.write(name, initial_content)
        return name

    def write(self, name: str, content):
        """Overwrite ``name`` with ``content``; a missing document is created."""
        if isinstance(content, str):
            content = content.encode("utf-8")
        with open(self.path_for(name), "wb") as f:
            f.write(content)
        logger.debug("Wrote %d bytes to %s", len(content), name)

    def delete(self, name: str):
        try:
            os.remove(self.path_for(name))
        except FileNotFoundError as e:
            raise DocumentNotFound(name) from e

    @staticmethod
    def copy_name(name: str) -> str:
        stem, ext = os.path.splitext(name)
        return f"{stem}{COPY_SUFFIX}{ext}"

    def duplicate(self, name: str) -> str:
        """Copy ``name`` to ``<stem>_copy<ext>``, replacing an earlier copy."""
        content = self.read(name)
        target = self.copy_name(name)
        self.write(target, content)
        return target

    def upload_binary(self, filename: str, data: bytes) -> str:
        name = secure_filename(filename or "")
        if not name or not data:
            raise ValidationError("Please select an image to upload.")

        if extension_of(name) not in self.image_extensions:
            supported = " and ".join(sorted(self.image_extensions))
            raise ValidationError(f"Only {supported} images are supported.")

        self.write(name, data)
        return name
