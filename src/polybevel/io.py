from __future__ import annotations

from pathlib import Path
from typing import Union

from .model import Model


PathLike = Union[str, Path]


def load_json(path: PathLike) -> Model:
    return Model.from_json(Path(path).read_text(encoding="utf-8"))


def save_json(model: Model, path: PathLike) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(model.to_json(), encoding="utf-8")
