from unittest.mock import MagicMock

import pytest

from framemint.exception import UploadFailedException
from framemint.keyframes import parse_keyframes
from framemint.metadata import KeyframeMetadataBuilder
from framemint.uploader import AssetUploader


def test_upload_reads_whole_image(storage, asset_dir):
    uploader = AssetUploader(storage, asset_dir)
    uri = uploader.upload("pink.png")
    assert uri == "https://storage.test/image/1"
    assert storage.files == [("pink.png", b"\x89PNG\r\n\x1a\nfake")]


def test_upload_absolute_path(storage, asset_dir):
    uploader = AssetUploader(storage, "somewhere/else")
    uploader.upload(asset_dir / "pink.png")
    assert storage.files[0][0] == "pink.png"


def test_upload_missing_image(storage, asset_dir):
    uploader = AssetUploader(storage, asset_dir)
    with pytest.raises(FileNotFoundError):
        uploader.upload("missing.png")
    assert storage.calls == []


def test_upload_nft(storage, asset_dir, nft_data, keyframes_primitive):
    uploader = AssetUploader(storage, asset_dir)
    uri = uploader.upload_nft(
        nft_data, KeyframeMetadataBuilder(), parse_keyframes(keyframes_primitive)
    )
    assert uri == "https://storage.test/metadata/1"
    assert storage.calls == [("upload", "pink.png"), ("upload_metadata", "Name")]
    document = storage.documents[0]
    assert document["image"] == "https://storage.test/image/1"
    assert len(document["attributes"]) == 3


def test_upload_errors_propagate(asset_dir, nft_data):
    error = UploadFailedException("storage is down")
    storage = MagicMock()
    storage.upload.side_effect = error
    uploader = AssetUploader(storage, asset_dir)
    with pytest.raises(UploadFailedException) as e:
        uploader.upload_nft(nft_data, KeyframeMetadataBuilder())
    assert e.value is error
    storage.upload_metadata.assert_not_called()
