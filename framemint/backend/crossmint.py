from typing import Optional, Tuple

import requests
from retry.api import retry_call

from framemint.backend.base import Commitment, MintContext, MintedNft
from framemint.exception import (
    ActionPendingException,
    InvalidArgumentException,
    MintFailedException,
    VerificationFailedException,
)
from framemint.logging import log_state, logger
from framemint.network import Cluster
from framemint.nft import CollectionNftData, NftData
from framemint.types import JsonDict

__all__ = ["CrossmintMintContext", "CROSSMINT_API_URL", "DEFAULT_COLLECTION"]

CROSSMINT_API_URL = "https://staging.crossmint.com/api"

API_VERSION = "2022-06-09"

DEFAULT_COLLECTION = "default-solana"


def split_address(address: str) -> Tuple[str, Optional[str]]:
    """Split ``"<collection id>:<nft id>"``. A bare id addresses a collection."""
    parts = address.split(":")
    if len(parts) == 1 and parts[0]:
        return parts[0], None
    elif len(parts) == 2 and all(parts):
        return parts[0], parts[1]
    raise InvalidArgumentException(f"Unable to parse NFT address: {address}")


def _mint_address(resource: JsonDict, fallback: str) -> str:
    on_chain = resource.get("onChain") or {}
    return on_chain.get("mintHash") or on_chain.get("mintAddress") or fallback


class CrossmintMintContext(MintContext):
    """A `Crossmint <https://www.crossmint.com/>`_ minting API wrapper.

    Collections are addressed by their id and members by ``"<collection id>:<nft id>"``.
    Every write is an asynchronous action on Crossmint's side. Waiting for
    :attr:`Commitment.FINALIZED` polls the action until it has succeeded on chain.

    Args:
        api_key (str): A server side API key.
        recipient (str): Wallet address receiving minted tokens.
        base_url (str): Base URL of the API. Defaults to the staging environment.
        cluster (Cluster): Cluster the tokens live on.
        timeout (float): Seconds to wait for each HTTP request.
        confirm_tries (int): Number of times an action is polled before giving up.
        confirm_delay (float): Seconds between two polls.
    """

    def __init__(
        self,
        api_key: str,
        recipient: str,
        base_url: Optional[str] = None,
        cluster: Cluster = Cluster.DEVNET,
        timeout: float = 30,
        confirm_tries: int = 60,
        confirm_delay: float = 2,
    ):
        self._secret_api_key = api_key
        self._recipient = recipient
        self._base_url = (base_url or CROSSMINT_API_URL).rstrip("/")
        self._cluster = cluster
        self._timeout = timeout
        self._confirm_tries = confirm_tries
        self._confirm_delay = confirm_delay

    @property
    def cluster(self) -> Cluster:
        return self._cluster

    @property
    def recipient(self) -> str:
        return f"{self._cluster.chain}:{self._recipient}"

    def _request(self, method: str, path: str, **kwargs) -> JsonDict:
        response = requests.request(
            method,
            f"{self._base_url}/{API_VERSION}/{path}",
            headers={
                "X-API-KEY": self._secret_api_key,
                "Content-Type": "application/json",
            },
            timeout=self._timeout,
            **kwargs,
        )
        if not response.ok:
            raise MintFailedException(
                f"{method} {path} failed with status {response.status_code}: {response.text}"
            )
        return response.json()

    def _action(self, action_id: str) -> JsonDict:
        action = self._request("GET", f"actions/{action_id}")
        status = action.get("status")
        if status == "succeeded":
            return action
        elif status == "failed":
            raise MintFailedException(f"Action {action_id} failed: {action}")
        raise ActionPendingException(f"Action {action_id} is {status}")

    def wait_for_action(
        self, action_id: Optional[str], commitment: Commitment
    ) -> Optional[JsonDict]:
        """Block until an action has settled to the requested commitment."""
        if not action_id or commitment is Commitment.PROCESSED:
            return None
        logger.debug(f"Waiting for action {action_id} to be {commitment.value}")
        try:
            return retry_call(
                self._action,
                fargs=[action_id],
                exceptions=ActionPendingException,
                tries=self._confirm_tries,
                delay=self._confirm_delay,
                logger=None,
            )
        except ActionPendingException as e:
            raise MintFailedException(
                f"Action {action_id} was not {commitment.value} after "
                f"{self._confirm_tries} checks: {e}"
            )

    def _create_collection(
        self, uri: str, data: CollectionNftData, commitment: Commitment
    ) -> MintedNft:
        metadata = {
            "name": data.name,
            "symbol": data.symbol,
            "description": data.description,
            "uri": uri,
            "sellerFeeBasisPoints": data.seller_fee_basis_points,
        }
        if data.collection_authority:
            metadata["updateAuthority"] = data.collection_authority
        created = self._request(
            "POST",
            "collections",
            json={
                "chain": self._cluster.chain,
                "fungibility": "non-fungible",
                "metadata": metadata,
            },
        )
        collection_id = created["id"]
        action = self.wait_for_action(created.get("actionId"), commitment) or {}
        collection = self._request("GET", f"collections/{collection_id}")
        return MintedNft(
            address=collection_id,
            mint_address=_mint_address(collection, collection_id),
            uri=uri,
            name=data.name,
            symbol=data.symbol,
            is_collection=True,
            signature=(action.get("data") or {}).get("txId"),
        )

    @log_state
    def create_nft(
        self,
        uri: str,
        nft_data: NftData,
        collection: Optional[str] = None,
        commitment: Commitment = Commitment.FINALIZED,
    ) -> MintedNft:
        if isinstance(nft_data, CollectionNftData):
            return self._create_collection(uri, nft_data, commitment)

        collection_id = collection or DEFAULT_COLLECTION
        created = self._request(
            "POST",
            f"collections/{collection_id}/nfts",
            json={
                "recipient": self.recipient,
                "metadata": uri,
                "reuploadLinkedFiles": False,
            },
        )
        nft_id = created["id"]
        self.wait_for_action(created.get("actionId"), commitment)
        nft = self._request("GET", f"collections/{collection_id}/nfts/{nft_id}")
        return MintedNft(
            address=f"{collection_id}:{nft_id}",
            mint_address=_mint_address(nft, nft_id),
            uri=uri,
            name=nft_data.name,
            symbol=nft_data.symbol,
            collection=collection,
            signature=(nft.get("onChain") or {}).get("txId"),
        )

    @log_state
    def verify_collection(
        self,
        mint_address: str,
        collection_mint_address: str,
        is_sized_collection: bool = True,
    ) -> Optional[str]:
        collection_id, nft_id = split_address(mint_address)
        if nft_id is None or collection_id != collection_mint_address:
            raise VerificationFailedException(
                f"{mint_address} is not a member of collection {collection_mint_address}"
            )
        nft = self._request("GET", f"collections/{collection_id}/nfts/{nft_id}")
        on_chain = nft.get("onChain") or {}
        if on_chain.get("status") != "success":
            raise VerificationFailedException(
                f"{mint_address} is not on chain yet, status: {on_chain.get('status')}"
            )
        logger.debug(
            f"{mint_address} verified in collection {collection_mint_address} "
            f"(sized: {is_sized_collection})"
        )
        return on_chain.get("txId")

    def find_nft(self, address: str) -> MintedNft:
        collection_id, nft_id = split_address(address)
        if nft_id is None:
            resource = self._request("GET", f"collections/{collection_id}")
        else:
            resource = self._request(
                "GET", f"collections/{collection_id}/nfts/{nft_id}"
            )
        metadata = resource.get("metadata") or {}
        return MintedNft(
            address=address,
            mint_address=_mint_address(resource, nft_id or collection_id),
            uri=metadata.get("uri", ""),
            name=metadata.get("name", ""),
            symbol=metadata.get("symbol", ""),
            is_collection=nft_id is None,
            collection=collection_id if nft_id else None,
            signature=(resource.get("onChain") or {}).get("txId"),
        )

    @log_state
    def update_uri(
        self,
        nft: MintedNft,
        uri: str,
        commitment: Commitment = Commitment.FINALIZED,
    ) -> str:
        collection_id, nft_id = split_address(nft.address)
        if nft_id is None:
            path = f"collections/{collection_id}"
        else:
            path = f"collections/{collection_id}/nfts/{nft_id}"
        updated = self._request("PATCH", path, json={"metadata": uri})
        action = self.wait_for_action(updated.get("actionId"), commitment) or {}
        signature = (action.get("data") or {}).get("txId")
        if not signature:
            signature = self.find_nft(nft.address).signature
        if not signature:
            raise MintFailedException(
                f"Update of {nft.address} reported no transaction"
            )
        return signature
