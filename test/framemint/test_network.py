import pytest

from framemint.exception import InvalidArgumentException
from framemint.network import Cluster


def test_address_url():
    assert (
        Cluster.DEVNET.address_url("abc")
        == "https://explorer.solana.com/address/abc?cluster=devnet"
    )
    assert (
        Cluster.MAINNET.address_url("abc") == "https://explorer.solana.com/address/abc"
    )


def test_transaction_url():
    assert (
        Cluster.TESTNET.transaction_url("sig")
        == "https://explorer.solana.com/tx/sig?cluster=testnet"
    )


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, Cluster.DEVNET),
        ("", Cluster.DEVNET),
        ("devnet", Cluster.DEVNET),
        (" Testnet ", Cluster.TESTNET),
        ("mainnet", Cluster.MAINNET),
        ("mainnet-beta", Cluster.MAINNET),
    ],
)
def test_from_primitive(value, expected):
    assert Cluster.from_primitive(value) == expected


def test_from_invalid_primitive():
    with pytest.raises(InvalidArgumentException):
        Cluster.from_primitive("localnet")
