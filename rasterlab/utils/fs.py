"""File I/O for configs, request files and CLI outputs.

Everything the CLI writes (JSON responses, PNG previews) goes through
_replace_atomically(): the payload is written to a sibling temp file, synced,
then renamed over the target, so a reader never sees a half-written file.
The temp file sits next to the target so the rename stays on one
filesystem.

Usage:
    from rasterlab.utils import fs
    cfg = fs.load_yaml("rasterlab/configs/server.yaml")
    fs.atomic_json_dump(result.to_response(), "out/line.json")
    fs.atomic_save_image(preview, "out/line.png")
"""

import json
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

import numpy as np
import yaml
from PIL import Image

PathLike = Union[str, Path]


def ensure_dir(p: PathLike) -> Path:
    """mkdir -p; returns the directory as a Path."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


@contextmanager
def _replace_atomically(target: Path, tmp_name: str) -> Iterator[Path]:
    """Yield a temp path next to target; on clean exit rename it over target.

    Any OSError or ValueError raised while writing (or renaming) removes the
    temp file and is re-raised as RuntimeError naming the target.
    """
    ensure_dir(target.parent)
    tmp = target.with_name(tmp_name)
    try:
        yield tmp
        tmp.replace(target)
    except (OSError, ValueError) as e:
        tmp.unlink(missing_ok=True)
        raise RuntimeError(f"Could not write {target}: {e}") from e


def atomic_write_bytes(path: PathLike, data: bytes) -> None:
    """Write bytes to path atomically, fsync'ing before the rename.

    Raises
    ------
    RuntimeError
        If the write or rename fails
    """
    path = Path(path)
    with _replace_atomically(path, f".{path.name}.tmp") as tmp:
        with open(tmp, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())


def atomic_write_text(path: PathLike, text: str, encoding: str = "utf-8") -> None:
    atomic_write_bytes(path, text.encode(encoding))


def atomic_json_dump(obj: Any, path: PathLike, indent: Optional[int] = None) -> None:
    """Write obj as JSON (newline-terminated) atomically.

    Parameters
    ----------
    obj : Any
        JSON-serializable value, typically a draw response dict
    path : PathLike
        Output file
    indent : int, optional
        Pretty-print indentation; None writes one line
    """
    atomic_write_text(path, json.dumps(obj, indent=indent) + "\n")


def atomic_save_image(
    img: np.ndarray,
    path: PathLike,
    pil_kwargs: Optional[Dict[str, Any]] = None
) -> None:
    """Encode an (H, W) or (H, W, 3) array with Pillow and write it atomically.

    Parameters
    ----------
    img : np.ndarray
        Image data; anything other than uint8 is clipped to [0, 255] first
    path : PathLike
        Output file; its extension picks the format
    pil_kwargs : dict, optional
        Passed to ``PIL.Image.Image.save`` (e.g. ``optimize=True``)

    Raises
    ------
    RuntimeError
        Unknown format, encoder failure or failed rename
    """
    path = Path(path)
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]

    # real extension last so Pillow can infer the format from the temp name
    with _replace_atomically(path, f".{path.stem}.tmp{path.suffix}") as tmp:
        Image.fromarray(img).save(tmp, **(pil_kwargs or {}))


def load_yaml(path: PathLike) -> Any:
    """safe_load a YAML file; an empty file gives None.

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    yaml.YAMLError
        If the content isn't valid YAML (message includes the path)
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"YAML file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"{path}: {e}") from e
