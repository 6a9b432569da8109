"""
Flat-file credential store: one ``username: bcrypt-hash`` entry per user in a
YAML file. The file is parsed again on every lookup, since other requests (or
``flask create-user``) may have appended to it in the meantime.
"""

import logging
import os

import yaml
from flask import current_app

from cms.errors import CredentialStoreError
from cms.extensions import bcrypt

logger = logging.getLogger(__name__)


class CredentialStore:
    def __init__(self, path=None):
        self.path = path

    def init_app(self, app):
        """Fail at startup if the credential file cannot be used."""
        self.load_all(app.config["USERS_FILE"])

    def _path(self):
        return self.path or current_app.config["USERS_FILE"]

    def load_all(self, path=None) -> dict:
        path = path or self._path()
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError as e:
            raise CredentialStoreError(f"Credential file not found: {path}") from e
        except yaml.YAMLError as e:
            raise CredentialStoreError(f"Credential file is not valid YAML: {path}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise CredentialStoreError(
                f"Credential file must map usernames to password hashes: {path}"
            )
        return {str(user): str(hashed) for user, hashed in data.items()}

    def verify(self, username: str, password: str) -> bool:
        stored = self.load_all().get(username)
        if stored is None:
            return False
        try:
            return bcrypt.check_password_hash(stored, password)
        except ValueError:
            logger.warning("Unusable password hash stored for %r", username)
            return False

    def username_available(self, username: str) -> bool:
        return bool(username) and username not in self.load_all()

    def append(self, username: str, password: str):
        """Hash ``password`` and add a record for ``username``.

        Existing records are never rewritten; the new entry goes at the end.
        """
        path = self._path()
        hashed = bcrypt.generate_password_hash(password).decode("utf-8")
        record = yaml.safe_dump({username: hashed}, default_flow_style=False)

        # Keep the new record on its own line
        needs_newline = False
        if os.path.exists(path) and os.path.getsize(path) > 0:
            with open(path, "rb") as f:
                f.seek(-1, os.SEEK_END)
                needs_newline = f.read(1) != b"\n"

        with open(path, "a", encoding="utf-8") as f:
            if needs_newline:
                f.write("\n")
            f.write(record)
        logger.info("Added credential for %r", username)
