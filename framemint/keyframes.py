"""Animation keyframes and the sources they are loaded from.

Keyframes are produced by the animation editor in the browser and persisted in
its local storage under ``keyframesData``. The same JSON can be exported to a
file. Either way the document is a list of keyframes, each keyframe being a
list of image layers::

    [
        [{"id": 1, "url": "a.png", "x": 10, "y": 20, "rotation": 0, "scale": 1}],
        ...
    ]

A source never fails the mint: anything it cannot read is reported once and
treated as "no animation".
"""

from __future__ import annotations

import json
import math
import sqlite3
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Tuple, Type, Union

from framemint.exception import InvalidDataException
from framemint.logging import logger
from framemint.types import JsonDict, Number

__all__ = [
    "ImageInfo",
    "Keyframe",
    "KeyframesData",
    "parse_keyframes",
    "KeyframeSource",
    "EmptyKeyframeSource",
    "JsonFileKeyframeSource",
    "LocalStorageKeyframeSource",
    "DEFAULT_LOCAL_STORAGE_KEY",
]

DEFAULT_LOCAL_STORAGE_KEY = "keyframesData"


def _number(value: Any, field_name: str) -> Number:
    # bool is a subclass of int but never a valid coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidDataException(
            f"Field {field_name} has to be a number, got {type(value)} instead."
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidDataException(
            f"Field {field_name} has to be a finite number, got {value} instead."
        )
    return value


@dataclass(frozen=True)
class ImageInfo:
    """State of one animated layer at one instant."""

    id: Union[int, str]

    url: str

    x: Number

    y: Number

    rotation: Number

    scale: Number

    @classmethod
    def from_primitive(cls: Type[ImageInfo], value: JsonDict) -> ImageInfo:
        if not isinstance(value, dict):
            raise InvalidDataException(
                f"An image layer has to be an object, got {type(value)} instead."
            )
        try:
            image_id = value["id"]
            if isinstance(image_id, bool) or not isinstance(image_id, (int, str)):
                raise InvalidDataException(
                    f"Image id has to be an integer or a string, got {type(image_id)} instead."
                )
            return cls(
                id=image_id,
                url=str(value.get("url", "")),
                x=_number(value["x"], "x"),
                y=_number(value["y"], "y"),
                rotation=_number(value["rotation"], "rotation"),
                scale=_number(value["scale"], "scale"),
            )
        except KeyError as e:
            raise InvalidDataException(f"Image layer {value} is missing field {e}.")

    def to_primitive(self) -> JsonDict:
        return {
            "id": self.id,
            "url": self.url,
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "scale": self.scale,
        }


Keyframe = Tuple[ImageInfo, ...]

KeyframesData = List[Keyframe]


def parse_keyframes(primitive: Any) -> KeyframesData:
    """Convert decoded JSON into keyframes.

    Args:
        primitive (Any): Decoded JSON. ``None`` is read as no keyframes.

    Returns:
        KeyframesData: Keyframes in the order they appear in the document.

    Raises:
        :class:`InvalidDataException`: When the document does not match the keyframe schema.
    """
    if primitive is None:
        return []
    if not isinstance(primitive, list):
        raise InvalidDataException(
            f"Keyframes data has to be a list, got {type(primitive)} instead."
        )
    keyframes = []
    for index, keyframe in enumerate(primitive):
        if not isinstance(keyframe, list):
            raise InvalidDataException(
                f"Keyframe {index} has to be a list, got {type(keyframe)} instead."
            )
        keyframes.append(tuple(ImageInfo.from_primitive(layer) for layer in keyframe))
    return keyframes


class KeyframeSource:
    """Where keyframes come from. ``load`` never raises."""

    def load(self) -> KeyframesData:
        raise NotImplementedError()


class EmptyKeyframeSource(KeyframeSource):
    def load(self) -> KeyframesData:
        return []


class JsonFileKeyframeSource(KeyframeSource):
    """Read keyframes from a JSON file exported by the editor.

    Args:
        path (Union[str, Path]): Location of the JSON file.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> KeyframesData:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return parse_keyframes(json.load(f))
        except (OSError, ValueError, RecursionError, InvalidDataException) as e:
            logger.warning(
                f"Could not load keyframes data from {self.path}, using no keyframes: {e}"
            )
            return []


class LocalStorageKeyframeSource(KeyframeSource):
    """Read keyframes persisted in a browser's local storage.

    Browsers keep a site's local storage in an SQLite database with one row per
    entry (Firefox: ``storage/default/<origin>/ls/data.sqlite``, table ``data``).
    The database is opened read-only so a wrong path never creates a file.

    Args:
        db_path (Union[str, Path]): Location of the local storage database.
        key (str): Name of the entry holding the keyframes.
        table (str): Table holding the entries.
    """

    def __init__(
        self,
        db_path: Union[str, Path],
        key: str = DEFAULT_LOCAL_STORAGE_KEY,
        table: str = "data",
    ):
        if not table.isidentifier():
            raise InvalidDataException(f"Invalid local storage table name: {table}")
        self.db_path = Path(db_path)
        self.key = key
        self.table = table

    def _read_entry(self) -> Optional[str]:
        conn = sqlite3.connect(f"{self.db_path.resolve().as_uri()}?mode=ro", uri=True)
        try:
            row = conn.execute(
                f"SELECT value FROM {self.table} WHERE key = ?", (self.key,)
            ).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        value = row[0]
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    def load(self) -> KeyframesData:
        try:
            entry = self._read_entry()
            if not entry:
                logger.warning(
                    f"No {self.key} entry found in local storage {self.db_path}, using no keyframes."
                )
                return []
            return parse_keyframes(json.loads(entry))
        except (
            sqlite3.Error,
            ValueError,
            TypeError,
            RecursionError,
            InvalidDataException,
        ) as e:
            logger.warning(
                f"Could not load {self.key} from local storage {self.db_path}, using no keyframes: {e}"
            )
            return []
