from typing import Callable
import os
import stat
from pathlib import Path
import shutil


def _clear_readonly(func: Callable[[str], None], path: str, excinfo) -> None:
    # git pack and object files are read-only; Windows refuses to unlink them
    os.chmod(path, stat.S_IWUSR | stat.S_IRUSR)
    func(path)


def rmtree_force(path: Path, *, within: Path | None = None) -> None:
    """Recursively delete ``path``, read-only files included. Missing paths are fine.

    With ``within``, refuse (ValueError) to touch anything that does not
    resolve to a location strictly below that directory.
    """
    if within is not None:
        root = Path(within).resolve()
        target = Path(path).resolve()
        if target == root or not target.is_relative_to(root):
            raise ValueError(f"Refusing to delete {target}: not inside {root}")
    if not path.exists():
        return
    try:
        shutil.rmtree(path)
    except PermissionError:
        shutil.rmtree(path, onexc=_clear_readonly)
