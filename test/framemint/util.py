from typing import List, Optional

from framemint.backend.base import Commitment, MintContext, MintedNft, StorageContext
from framemint.keyframes import KeyframeSource
from framemint.network import Cluster
from framemint.nft import CollectionNftData, NftData
from framemint.types import JsonDict

TEST_WALLET = "7Np41oeYqPefeNQEHSv1UDhYrehxin3NStELsSKCT4K2"


class FixedStorageContext(StorageContext):
    """Storage that keeps uploads in memory and hands out predictable URIs."""

    def __init__(self, calls: Optional[List[tuple]] = None):
        self.calls = calls if calls is not None else []
        self.files = []
        self.documents = []

    def upload(self, data: bytes, file_name: str) -> str:
        self.files.append((file_name, data))
        uri = f"https://storage.test/image/{len(self.files)}"
        self.calls.append(("upload", file_name))
        return uri

    def upload_metadata(self, metadata: JsonDict) -> str:
        self.documents.append(metadata)
        uri = f"https://storage.test/metadata/{len(self.documents)}"
        self.calls.append(("upload_metadata", metadata["name"]))
        return uri


class FixedMintContext(MintContext):
    """Mint context recording every call in the order it was made."""

    def __init__(self, calls: Optional[List[tuple]] = None):
        self.calls = calls if calls is not None else []
        self.nfts = {}
        self.verified = set()
        self.commitments = []

    @property
    def cluster(self) -> Cluster:
        return Cluster.DEVNET

    def create_nft(
        self,
        uri: str,
        nft_data: NftData,
        collection: Optional[str] = None,
        commitment: Commitment = Commitment.FINALIZED,
    ) -> MintedNft:
        is_collection = isinstance(nft_data, CollectionNftData)
        address = f"mint{len(self.nfts)}"
        nft = MintedNft(
            address=address,
            mint_address=address,
            uri=uri,
            name=nft_data.name,
            symbol=nft_data.symbol,
            is_collection=is_collection,
            collection=collection,
            signature=f"sig{len(self.nfts)}",
        )
        self.nfts[address] = nft
        self.commitments.append(commitment)
        self.calls.append(
            ("create_collection" if is_collection else "create_nft", address)
        )
        return nft

    def verify_collection(
        self,
        mint_address: str,
        collection_mint_address: str,
        is_sized_collection: bool = True,
    ) -> Optional[str]:
        assert self.nfts[mint_address].collection == collection_mint_address
        self.verified.add(mint_address)
        self.calls.append(
            (
                "verify_collection",
                mint_address,
                collection_mint_address,
                is_sized_collection,
            )
        )
        return None

    def find_nft(self, address: str) -> MintedNft:
        self.calls.append(("find_nft", address))
        return self.nfts[address]

    def update_uri(
        self,
        nft: MintedNft,
        uri: str,
        commitment: Commitment = Commitment.FINALIZED,
    ) -> str:
        self.calls.append(("update_uri", nft.address, uri))
        self.commitments.append(commitment)
        self.nfts[nft.address] = MintedNft(
            address=nft.address,
            mint_address=nft.mint_address,
            uri=uri,
            name=nft.name,
            symbol=nft.symbol,
            is_collection=nft.is_collection,
            collection=nft.collection,
            signature="update-sig",
        )
        return "update-sig"


class StaticKeyframeSource(KeyframeSource):
    def __init__(self, keyframes):
        self.keyframes = keyframes
        self.loads = 0

    def load(self):
        self.loads += 1
        return self.keyframes
