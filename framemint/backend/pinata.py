import mimetypes
from typing import Optional

import requests

from framemint.backend.base import StorageContext
from framemint.exception import UploadFailedException
from framemint.logging import log_state, logger
from framemint.types import JsonDict

__all__ = ["PinataStorageContext", "PINATA_API_URL", "PINATA_GATEWAY_URL"]

PINATA_API_URL = "https://api.pinata.cloud"

PINATA_GATEWAY_URL = "https://gateway.pinata.cloud/ipfs/"


class PinataStorageContext(StorageContext):
    """A `Pinata <https://pinata.cloud/>`_ IPFS pinning API wrapper.

    Args:
        jwt (str): A Pinata API JWT.
        base_url (str): Base URL of the pinning API.
        gateway_url (str): Gateway prefix the returned URIs are built with.
        timeout (float): Seconds to wait for an upload before giving up.
    """

    def __init__(
        self,
        jwt: str,
        base_url: Optional[str] = None,
        gateway_url: Optional[str] = None,
        timeout: float = 60,
    ):
        self._secret_jwt = jwt
        self._base_url = (base_url or PINATA_API_URL).rstrip("/")
        self._gateway_url = gateway_url or PINATA_GATEWAY_URL
        if not self._gateway_url.endswith("/"):
            self._gateway_url += "/"
        self._timeout = timeout

    @property
    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self._secret_jwt}"}

    def _uri(self, response: requests.Response) -> str:
        if not response.ok:
            raise UploadFailedException(
                f"Upload to {response.url} failed with status {response.status_code}: {response.text}"
            )
        ipfs_hash = response.json().get("IpfsHash")
        if not ipfs_hash:
            raise UploadFailedException(
                f"Storage service returned no content hash: {response.text}"
            )
        return self._gateway_url + ipfs_hash

    @log_state
    def upload(self, data: bytes, file_name: str) -> str:
        content_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        logger.debug(f"Uploading {file_name} ({len(data)} bytes, {content_type})")
        response = requests.post(
            f"{self._base_url}/pinning/pinFileToIPFS",
            headers=self._headers,
            files={"file": (file_name, data, content_type)},
            timeout=self._timeout,
        )
        return self._uri(response)

    @log_state
    def upload_metadata(self, metadata: JsonDict) -> str:
        payload = {
            "pinataContent": metadata,
            "pinataMetadata": {"name": f"{metadata.get('name', 'metadata')}.json"},
        }
        response = requests.post(
            f"{self._base_url}/pinning/pinJSONToIPFS",
            headers=self._headers,
            json=payload,
            timeout=self._timeout,
        )
        return self._uri(response)
