"""Uploading images and metadata documents to decentralized storage."""

from pathlib import Path
from typing import Optional, Union

from framemint.backend.base import StorageContext
from framemint.keyframes import KeyframesData
from framemint.logging import logger
from framemint.metadata import MetadataBuilder, MetadataDocument
from framemint.nft import NftData

__all__ = ["AssetUploader", "DEFAULT_ASSET_DIR"]

DEFAULT_ASSET_DIR = "src"


class AssetUploader:
    """Reads images from the asset directory and uploads them with their metadata.

    Upload errors are not handled here. Whatever the storage context raises reaches the caller.

    Args:
        storage (StorageContext): Where files are uploaded.
        asset_dir (Union[str, Path]): Directory relative image paths are resolved against.
    """

    def __init__(
        self, storage: StorageContext, asset_dir: Union[str, Path] = DEFAULT_ASSET_DIR
    ):
        self.storage = storage
        self.asset_dir = Path(asset_dir)

    def resolve(self, image_path: Union[str, Path]) -> Path:
        path = Path(image_path)
        if path.is_absolute():
            return path
        return self.asset_dir / path

    def upload(self, image_path: Union[str, Path]) -> str:
        path = self.resolve(image_path)
        # file to buffer
        data = path.read_bytes()
        image_uri = self.storage.upload(data, path.name)
        logger.info(f"image uri: {image_uri}")
        return image_uri

    def upload_metadata(self, document: MetadataDocument) -> str:
        uri = self.storage.upload_metadata(document.to_primitive())
        logger.info(f"metadata uri: {uri}")
        return uri

    def upload_nft(
        self,
        nft_data: NftData,
        builder: MetadataBuilder,
        keyframes: Optional[KeyframesData] = None,
    ) -> str:
        """Upload the image of a token, then its metadata document.

        Args:
            nft_data (NftData): The token to upload.
            builder (MetadataBuilder): Strategy building the metadata document.
            keyframes (Optional[KeyframesData]): Animation keyframes written into the attributes.

        Returns:
            str: URI of the metadata document.
        """
        image_uri = self.upload(nft_data.image_file)
        document = builder.build(nft_data, image_uri, keyframes)
        return self.upload_metadata(document)
