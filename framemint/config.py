"""Configuration read from the environment and validated at startup.

All settings are environment variables prefixed with ``FRAMEMINT_``. A ``.env`` file in the
working directory is read first, values already set in the environment take precedence.

=================================  ========================================================
Variable                           Meaning
=================================  ========================================================
``FRAMEMINT_PINATA_JWT``           Pinata API JWT (required)
``FRAMEMINT_CROSSMINT_API_KEY``    Crossmint server API key (required)
``FRAMEMINT_WALLET``               Wallet receiving the tokens, collection authority (required)
``FRAMEMINT_CLUSTER``              ``devnet`` (default), ``testnet`` or ``mainnet-beta``
``FRAMEMINT_PINATA_URL``           Pinata API base URL
``FRAMEMINT_IPFS_GATEWAY``         Gateway prefix of returned URIs
``FRAMEMINT_CROSSMINT_URL``        Crossmint API base URL
``FRAMEMINT_UPLOAD_TIMEOUT``       Seconds before a storage upload times out (60)
``FRAMEMINT_ASSET_DIR``            Directory images are read from (``src``)
``FRAMEMINT_KEYFRAMES_FILE``       JSON file holding keyframes
``FRAMEMINT_LOCAL_STORAGE_DB``     Browser local storage database holding keyframes
``FRAMEMINT_LOCAL_STORAGE_KEY``    Local storage entry name (``keyframesData``)
``FRAMEMINT_METADATA_MODE``        ``keyframes`` (default) or ``scalar``
``FRAMEMINT_FRAME``                ``x,y,rotation,scale,set`` for the scalar mode
``FRAMEMINT_NFT_PLAN``             JSON file with a ``collection`` and its ``members``
``FRAMEMINT_HOST``                 Address the HTTP trigger listens on (``127.0.0.1``)
``FRAMEMINT_PORT``                 Port of the HTTP trigger (3000)
=================================  ========================================================
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Mapping, Optional, Tuple, Type

from dotenv import load_dotenv

from framemint.backend.crossmint import CROSSMINT_API_URL, CrossmintMintContext
from framemint.backend.pinata import (
    PINATA_API_URL,
    PINATA_GATEWAY_URL,
    PinataStorageContext,
)
from framemint.exception import (
    FrameMintException,
    InvalidArgumentException,
    InvalidConfigException,
)
from framemint.keyframes import (
    DEFAULT_LOCAL_STORAGE_KEY,
    EmptyKeyframeSource,
    JsonFileKeyframeSource,
    KeyframeSource,
    LocalStorageKeyframeSource,
)
from framemint.metadata import (
    FrameScalars,
    MetadataBuilder,
    MetadataMode,
    builder_for_mode,
)
from framemint.network import Cluster
from framemint.nft import CollectionNftData, NftData
from framemint.orchestrator import MintOrchestrator
from framemint.uploader import DEFAULT_ASSET_DIR, AssetUploader

__all__ = [
    "Config",
    "DEFAULT_COLLECTION_NFT",
    "DEFAULT_MEMBER_NFT",
    "load_nft_plan",
]

PREFIX = "FRAMEMINT_"

REQUIRED = ("PINATA_JWT", "CROSSMINT_API_KEY", "WALLET")

# example data for the collection NFT
DEFAULT_COLLECTION_NFT = {
    "name": "TestCollectionNFT",
    "symbol": "TEST",
    "description": "Test Description Collection",
    "seller_fee_basis_points": 100,
    "image_file": "pink.png",
}

# example data for a new NFT
DEFAULT_MEMBER_NFT = {
    "name": "Name",
    "symbol": "SYMBOL",
    "description": "Description",
    "seller_fee_basis_points": 0,
    "image_file": "pink.png",
}


def load_nft_plan(
    path: Optional[str], collection_authority: Optional[str] = None
) -> Tuple[CollectionNftData, List[NftData]]:
    """Load the collection and its members.

    Args:
        path (Optional[str]): JSON file ``{"collection": {...}, "members": [{...}, ...]}``.
            When empty, the built-in example data is used.
        collection_authority (Optional[str]): Address signing for the collection.

    Returns:
        Tuple[CollectionNftData, List[NftData]]: The collection and its members.
    """
    plan = {"collection": DEFAULT_COLLECTION_NFT, "members": [DEFAULT_MEMBER_NFT]}
    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                plan = json.load(f)
        except (OSError, ValueError) as e:
            raise InvalidConfigException(f"Cannot read NFT plan {path}: {e}")
        if not isinstance(plan, dict) or "collection" not in plan:
            raise InvalidConfigException(f"NFT plan {path} has no collection.")

    try:
        collection = CollectionNftData.from_nft_data(
            NftData.from_primitive(plan["collection"]), collection_authority
        )
        members = [NftData.from_primitive(m) for m in plan.get("members", [])]
    except InvalidArgumentException as e:
        raise InvalidConfigException(f"Invalid NFT plan: {e}")
    return collection, members


@dataclass(frozen=True)
class Config:
    pinata_jwt: str

    crossmint_api_key: str

    wallet: str

    cluster: Cluster = Cluster.DEVNET

    pinata_url: str = PINATA_API_URL

    ipfs_gateway: str = PINATA_GATEWAY_URL

    crossmint_url: str = CROSSMINT_API_URL

    upload_timeout: float = 60

    asset_dir: str = DEFAULT_ASSET_DIR

    keyframes_file: Optional[str] = None

    local_storage_db: Optional[str] = None

    local_storage_key: str = DEFAULT_LOCAL_STORAGE_KEY

    metadata_mode: MetadataMode = MetadataMode.KEYFRAMES

    frame: Optional[FrameScalars] = None

    nft_plan: Optional[str] = None

    host: str = "127.0.0.1"

    port: int = 3000

    @classmethod
    def from_env(
        cls: Type[Config],
        environ: Optional[Mapping[str, str]] = None,
        dotenv: bool = True,
    ) -> Config:
        """Read and validate the configuration.

        Args:
            environ (Optional[Mapping[str, str]]): Variables to read. Defaults to ``os.environ``.
            dotenv (bool): Whether to load a ``.env`` file into ``os.environ`` first.

        Raises:
            :class:`InvalidConfigException`: Listing every missing or malformed variable.
        """
        if environ is None:
            if dotenv:
                load_dotenv()
            environ = os.environ

        def get(name: str, default: Optional[str] = None) -> Optional[str]:
            value = environ.get(PREFIX + name)
            if value is None or not value.strip():
                return default
            return value.strip()

        errors = [f"{PREFIX}{name} is not set" for name in REQUIRED if not get(name)]
        values = {}

        def parse(key: str, name: str, convert):
            raw = get(name)
            if raw is None:
                return
            try:
                values[key] = convert(raw)
            except (ValueError, FrameMintException) as e:
                errors.append(f"{PREFIX}{name}: {e}")

        parse("cluster", "CLUSTER", Cluster.from_primitive)
        parse("upload_timeout", "UPLOAD_TIMEOUT", _positive_float)
        parse("metadata_mode", "METADATA_MODE", lambda v: MetadataMode(v.lower()))
        parse("frame", "FRAME", FrameScalars.from_string)
        parse("port", "PORT", int)

        if errors:
            raise InvalidConfigException("Invalid configuration: " + "; ".join(errors))

        return cls(
            pinata_jwt=get("PINATA_JWT"),
            crossmint_api_key=get("CROSSMINT_API_KEY"),
            wallet=get("WALLET"),
            pinata_url=get("PINATA_URL", PINATA_API_URL),
            ipfs_gateway=get("IPFS_GATEWAY", PINATA_GATEWAY_URL),
            crossmint_url=get("CROSSMINT_URL", CROSSMINT_API_URL),
            asset_dir=get("ASSET_DIR", DEFAULT_ASSET_DIR),
            keyframes_file=get("KEYFRAMES_FILE"),
            local_storage_db=get("LOCAL_STORAGE_DB"),
            local_storage_key=get("LOCAL_STORAGE_KEY", DEFAULT_LOCAL_STORAGE_KEY),
            nft_plan=get("NFT_PLAN"),
            host=get("HOST", "127.0.0.1"),
            **values,
        )

    def storage_context(self) -> PinataStorageContext:
        return PinataStorageContext(
            self.pinata_jwt,
            base_url=self.pinata_url,
            gateway_url=self.ipfs_gateway,
            timeout=self.upload_timeout,
        )

    def mint_context(self) -> CrossmintMintContext:
        return CrossmintMintContext(
            self.crossmint_api_key,
            recipient=self.wallet,
            base_url=self.crossmint_url,
            cluster=self.cluster,
        )

    def keyframe_source(self) -> KeyframeSource:
        # local storage wins when both are configured
        if self.local_storage_db:
            return LocalStorageKeyframeSource(
                self.local_storage_db, key=self.local_storage_key
            )
        if self.keyframes_file:
            return JsonFileKeyframeSource(self.keyframes_file)
        return EmptyKeyframeSource()

    def metadata_builder(self) -> MetadataBuilder:
        return builder_for_mode(
            self.metadata_mode, frame=self.frame, creator=self.wallet
        )

    def nfts(self) -> Tuple[CollectionNftData, List[NftData]]:
        return load_nft_plan(self.nft_plan, collection_authority=self.wallet)

    def orchestrator(self) -> MintOrchestrator:
        return MintOrchestrator(
            AssetUploader(self.storage_context(), self.asset_dir),
            self.mint_context(),
            builder=self.metadata_builder(),
            keyframe_source=self.keyframe_source(),
        )


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise ValueError(f"expected a positive number, got {value}")
    return number
