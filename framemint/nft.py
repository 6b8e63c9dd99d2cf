"""Descriptive records of the tokens to be minted."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Type

from framemint.exception import InvalidArgumentException
from framemint.types import JsonDict

__all__ = ["NftData", "CollectionNftData", "MAX_BASIS_POINTS"]

MAX_BASIS_POINTS = 10000


@dataclass(frozen=True)
class NftData:
    """Static description of a single mintable token.

    Attributes:
        name (str): Name of the token.
        symbol (str): Ticker-like symbol of the token.
        description (str): Free text description.
        seller_fee_basis_points (int): Royalty in basis points (1/100 of a percent).
        image_file (str): Path of the image, relative to the asset directory.
    """

    name: str
    symbol: str
    description: str
    seller_fee_basis_points: int
    image_file: str

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise InvalidArgumentException("NFT name must be a non-empty string.")

        if not isinstance(self.seller_fee_basis_points, int) or isinstance(
            self.seller_fee_basis_points, bool
        ):
            raise InvalidArgumentException(
                "Expected seller fee basis points to be of type: integer."
            )

        if not 0 <= self.seller_fee_basis_points <= MAX_BASIS_POINTS:
            raise InvalidArgumentException(
                f"Seller fee basis points must be between 0 and {MAX_BASIS_POINTS}, "
                f"got {self.seller_fee_basis_points}."
            )

        if not self.image_file:
            raise InvalidArgumentException(f"NFT {self.name} has no image file.")

    @classmethod
    def from_primitive(cls: Type[NftData], value: JsonDict) -> NftData:
        try:
            return cls(
                name=value["name"],
                symbol=value.get("symbol", ""),
                description=value.get("description", ""),
                seller_fee_basis_points=value.get(
                    "seller_fee_basis_points", value.get("sellerFeeBasisPoints", 0)
                ),
                image_file=value.get("image_file", value.get("imageFile", "")),
            )
        except (KeyError, AttributeError, TypeError) as e:
            raise InvalidArgumentException(f"Invalid NFT data {value}: {e}")


@dataclass(frozen=True)
class CollectionNftData(NftData):
    """The parent NFT grouping member NFTs under a certified collection.

    Attributes:
        collection_authority (str): Public address of the authority that signs for the collection.
    """

    collection_authority: Optional[str] = None

    is_collection: bool = field(default=True, init=False)

    @classmethod
    def from_nft_data(
        cls: Type[CollectionNftData],
        data: NftData,
        collection_authority: Optional[str] = None,
    ) -> CollectionNftData:
        return cls(
            name=data.name,
            symbol=data.symbol,
            description=data.description,
            seller_fee_basis_points=data.seller_fee_basis_points,
            image_file=data.image_file,
            collection_authority=collection_authority,
        )
