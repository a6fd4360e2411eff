import os
import re
import time
from typing import Optional
from flask import current_app, url_for
from werkzeug.utils import secure_filename
from careers.domain.invariants.exceptions import InvariantViolation, PersistenceError

ALLOWED_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}
UPLOAD_PREFIX = "uploads"

_UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9._-]")
_HYPHENS = re.compile(r"-+")


def sanitize_filename(filename: str) -> str:
    """Keep letters, digits, dots, hyphens and underscores only."""
    name = _UNSAFE_CHARS.sub("-", filename or "")
    name = _HYPHENS.sub("-", name)
    return name.strip("-")


def allowed_file(filename: str, mimetype: Optional[str] = None) -> bool:
    if '.' not in filename or filename.rsplit('.', 1)[1].lower() not in ALLOWED_EXTENSIONS:
        return False
    return mimetype is None or mimetype.startswith("image/")


def storage_key(filename: str, now_ms: Optional[int] = None) -> str:
    """Collision-resistant key: ``uploads/<epoch ms>-<sanitized name>``."""
    safe_name = sanitize_filename(secure_filename(filename)) or "upload"
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    return f"{UPLOAD_PREFIX}/{timestamp}-{safe_name}"


class LocalObjectStorage:
    """Writes objects under a local root and serves them from ``/media``."""

    def __init__(self, root: str, base_url: Optional[str] = None):
        self.root = root
        self.base_url = base_url.rstrip("/") if base_url else None

    def public_url(self, key: str) -> str:
        if self.base_url:
            return f"{self.base_url}/{key}"
        return url_for("media.serve_media", key=key, _external=True)

    def put(self, key: str, data: bytes) -> str:
        path = os.path.join(self.root, key)
        # never overwrite an existing object
        if os.path.exists(path):
            raise PersistenceError(f"Object already exists: {key}")

        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "xb") as fh:
                fh.write(data)
        except OSError as exc:
            current_app.logger.error(f"Failed to store object {key}: {exc}")
            raise PersistenceError("Failed to upload file") from exc

        return self.public_url(key)


def get_storage() -> LocalObjectStorage:
    root = current_app.config.get("UPLOAD_FOLDER", "uploads")
    if not os.path.isabs(root):
        root = os.path.join(current_app.instance_path, root)
    return LocalObjectStorage(root, current_app.config.get("MEDIA_BASE_URL"))


def save_file(file) -> str:
    """Validate an uploaded image and store it; returns its public URL."""
    if not file or not file.filename:
        raise InvariantViolation("No file provided")

    if not allowed_file(file.filename, file.mimetype):
        raise InvariantViolation("Please select an image file")

    key = storage_key(file.filename)
    url = get_storage().put(key, file.read())
    current_app.logger.info(f"Stored upload {key}")
    return url
