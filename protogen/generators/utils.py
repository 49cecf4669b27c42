"""Utility functions shared by the generators."""
import re
from pathlib import Path


def sanitize_name(name: str) -> str:
    """Lower-case a user supplied name and replace anything outside [a-z0-9] with '-'."""
    return re.sub(r"[^a-z0-9]", "-", name.lower())


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def public_url(public_dir: Path, path: Path) -> str:
    """Map a file below the public directory to its `/public/...` URL."""
    relative = path.resolve().relative_to(public_dir.resolve())
    return "/public/" + relative.as_posix()


def is_within(base_dir: Path, candidate: Path) -> bool:
    try:
        candidate.resolve().relative_to(base_dir.resolve())
    except ValueError:
        return False
    return True
