"""Off-chain metadata documents referenced by a token's URI.

Two strategies are available and they produce different attribute shapes:

* :class:`KeyframeMetadataBuilder` writes one attribute per image layer per keyframe.
* :class:`ScalarMetadataBuilder` writes five fixed attributes describing a single frame.

Consumers may depend on either shape, so the caller always picks one explicitly.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Type

from framemint.exception import InvalidArgumentException
from framemint.keyframes import ImageInfo, KeyframesData
from framemint.nft import NftData
from framemint.types import JsonDict, Number

__all__ = [
    "Attribute",
    "MetadataDocument",
    "MetadataBuilder",
    "KeyframeMetadataBuilder",
    "ScalarMetadataBuilder",
    "FrameScalars",
    "MetadataMode",
    "builder_for_mode",
    "image_trait",
    "CREATOR_SHARE",
]

CREATOR_SHARE = 100


def _js_number(value: Number) -> Number:
    # JSON written by a browser has no distinction between 1 and 1.0
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def image_trait(image: ImageInfo, keyframe_index: int) -> str:
    return f"Image {image.id} Keyframe {keyframe_index}"


@dataclass(frozen=True)
class Attribute:
    trait_type: str
    value: Any

    def to_primitive(self) -> JsonDict:
        return {"trait_type": self.trait_type, "value": self.value}


@dataclass(frozen=True)
class MetadataDocument:
    """Metadata document uploaded next to the image."""

    name: str

    symbol: str

    description: str

    image: str

    attributes: List[Attribute] = field(default_factory=list)

    properties: Optional[JsonDict] = None
    """Extra properties, for example the creators and their shares."""

    def to_primitive(self) -> JsonDict:
        primitive = {
            "name": self.name,
            "symbol": self.symbol,
            "description": self.description,
            "image": self.image,
            "attributes": [a.to_primitive() for a in self.attributes],
        }
        if self.properties is not None:
            primitive["properties"] = self.properties
        return primitive

    def to_json(self) -> str:
        return _dumps(self.to_primitive())


class MetadataBuilder:
    """Builds the metadata document of a token."""

    def attributes(self, keyframes: KeyframesData) -> List[Attribute]:
        raise NotImplementedError()

    def properties(self) -> Optional[JsonDict]:
        return None

    def build(
        self,
        nft_data: NftData,
        image_uri: str,
        keyframes: Optional[KeyframesData] = None,
    ) -> MetadataDocument:
        """Build a fresh metadata document.

        Args:
            nft_data (NftData): Descriptive fields of the token.
            image_uri (str): URI of the uploaded image.
            keyframes (Optional[KeyframesData]): Animation keyframes. ``None`` means no animation.

        Returns:
            MetadataDocument: The document to upload.
        """
        return MetadataDocument(
            name=nft_data.name,
            symbol=nft_data.symbol,
            description=nft_data.description,
            image=image_uri,
            attributes=self.attributes(keyframes or []),
            properties=self.properties(),
        )


class KeyframeMetadataBuilder(MetadataBuilder):
    """One attribute per layer per keyframe, in keyframe order then layer order.

    Example:
        A layer ``{id: 1, x: 10, y: 20, rotation: 0, scale: 1}`` in keyframe 0 becomes::

            {"trait_type": "Image 1 Keyframe 0", "value": '{"x":10,"y":20,"rotation":0,"scale":1}'}
    """

    def attributes(self, keyframes: KeyframesData) -> List[Attribute]:
        return [
            Attribute(
                trait_type=image_trait(image, keyframe_index),
                value=_dumps(
                    {
                        "x": _js_number(image.x),
                        "y": _js_number(image.y),
                        "rotation": _js_number(image.rotation),
                        "scale": _js_number(image.scale),
                    }
                ),
            )
            for keyframe_index, keyframe in enumerate(keyframes)
            for image in keyframe
        ]


@dataclass(frozen=True)
class FrameScalars:
    """A single frame described by five numbers."""

    x: Number = 0

    y: Number = 0

    rotation: Number = 0

    scale: Number = 1

    set: Number = 0

    def __post_init__(self):
        for name, value in self.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentException(
                    f"Frame scalar {name} has to be a number, got {type(value)} instead."
                )
            if isinstance(value, float) and not math.isfinite(value):
                raise InvalidArgumentException(
                    f"Frame scalar {name} has to be a finite number, got {value} instead."
                )

    def items(self):
        return [
            ("x", self.x),
            ("y", self.y),
            ("rotation", self.rotation),
            ("scale", self.scale),
            ("set", self.set),
        ]

    @classmethod
    def from_string(cls: Type[FrameScalars], value: str) -> FrameScalars:
        """Parse ``"x,y,rotation,scale,set"``."""
        parts = [p.strip() for p in value.split(",")]
        if len(parts) != 5:
            raise InvalidArgumentException(
                f"Expected 5 comma separated numbers (x,y,rotation,scale,set), got: {value}"
            )
        try:
            numbers = [_js_number(float(p)) for p in parts]
        except ValueError:
            raise InvalidArgumentException(
                f"Frame scalars must be numbers, got: {value}"
            )
        return cls(*numbers)


class ScalarMetadataBuilder(MetadataBuilder):
    """Five fixed attributes plus a creator share property.

    Keyframes are not used by this strategy.

    Args:
        frame (FrameScalars): The frame written into the attributes.
        creator (str): Address of the creator receiving the whole share.
    """

    def __init__(self, frame: FrameScalars, creator: str):
        self.frame = frame
        self.creator = creator

    def attributes(self, keyframes: KeyframesData) -> List[Attribute]:
        return [Attribute(trait_type=k, value=v) for k, v in self.frame.items()]

    def properties(self) -> Optional[JsonDict]:
        return {"creators": [{"address": self.creator, "share": CREATOR_SHARE}]}


class MetadataMode(Enum):
    KEYFRAMES = "keyframes"
    SCALAR = "scalar"


def builder_for_mode(
    mode: MetadataMode,
    frame: Optional[FrameScalars] = None,
    creator: Optional[str] = None,
) -> MetadataBuilder:
    if mode is MetadataMode.KEYFRAMES:
        return KeyframeMetadataBuilder()
    if not creator:
        raise InvalidArgumentException("Scalar metadata requires a creator address.")
    return ScalarMetadataBuilder(frame or FrameScalars(), creator)
