# capture_api/docs.py

from pathlib import Path
from typing import Optional

# Only these files, relative to the docs root, are ever served
ALLOWED_FILES = [
    "API_DOCUMENTATION.md",
    "openapi.yaml",
    "README.md",
    "scripts/test_api.py",
    "capture_api/schemas.py",
]

CONTENT_TYPES = {
    ".md": "text/markdown",
    ".yaml": "application/x-yaml",
    ".yml": "application/x-yaml",
    ".py": "text/x-python",
    ".js": "application/javascript",
    ".ts": "application/typescript",
}

CACHE_CONTROL = "public, max-age=3600"


def is_allowed(name: Optional[str]) -> bool:
    return name in ALLOWED_FILES


def content_type_for(name: str) -> str:
    return CONTENT_TYPES.get(Path(name).suffix.lower(), "text/plain")


def resolve_doc_path(root: Path, name: str) -> Path:
    return Path(root) / name
