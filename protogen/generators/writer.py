"""File writer for generated artifacts."""
import shutil
from pathlib import Path
from typing import List
from protogen.generators.types import GeneratedFile


def write_files(files: List[GeneratedFile], out_dir: Path) -> None:
    """
    Write generated files to the output directory.

    Args:
        files: List of GeneratedFile objects to write
        out_dir: Base output directory path
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    for file in files:
        file_path = out_dir / file.path
        # Create parent directories if needed
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(file.content, encoding="utf-8")
        if file.executable:
            file_path.chmod(0o755)


def copy_tree(source: Path, destination: Path) -> List[Path]:
    """Copy a template directory recursively, returning the copied files."""
    copied = []
    destination.mkdir(parents=True, exist_ok=True)
    for item in sorted(source.rglob("*")):
        if item.is_dir() or item.name == "__pycache__" or item.suffix == ".pyc":
            continue
        target = destination / item.relative_to(source)
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(item, target)
        copied.append(target)
    return copied
