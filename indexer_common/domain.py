"""Core domain types of the indexer."""

from __future__ import annotations

from enum import Enum

from indexer_common.bytes import ByteArray, ByteVec

BlockAuthor = ByteArray
ContractAddress = ByteVec
ContractEntryPoint = ByteVec
ContractState = ByteVec
ContractZswapState = ByteVec
Identifier = ByteVec
MerkleTreeRoot = ByteVec
RawTransaction = ByteVec
SessionId = ByteArray


class ApplyStage(Enum):
    """The apply stage of a transaction; the default is FAILURE."""

    SUCCESS = "Success"
    PARTIAL_SUCCESS = "PartialSuccess"
    FAILURE = "Failure"


class ContractActionVariant(Enum):
    """The variant of a contract action; the default is DEPLOY."""

    DEPLOY = "Deploy"
    CALL = "Call"
    UPDATE = "Update"


class UnknownNetworkIdError(ValueError):
    """Raised for a network ID that is not known."""

    def __init__(self, value: str) -> None:
        super().__init__(f"unknown NetworkId {value}")
        self.value = value


_SHORT_NAMES = {
    "undeployed": "Undeployed",
    "dev": "DevNet",
    "test": "TestNet",
    "": "MainNet",
}


class NetworkId(Enum):
    """The network the indexer runs against."""

    UNDEPLOYED = "Undeployed"
    DEV_NET = "DevNet"
    TEST_NET = "TestNet"
    MAIN_NET = "MainNet"

    @classmethod
    def parse(cls, text: str) -> NetworkId:
        """Parse the short form: "undeployed", "dev", "test" or "" (case-insensitive)."""
        name = _SHORT_NAMES.get(text.lower())
        if name is None:
            raise UnknownNetworkIdError(text)
        return cls(name)

    @classmethod
    def from_name(cls, name: str) -> NetworkId:
        """Look up a network ID by its exact variant name, e.g. "DevNet"."""
        try:
            return cls(name)
        except ValueError:
            raise UnknownNetworkIdError(name) from None

    def __str__(self) -> str:
        return self.value


DEFAULT_APPLY_STAGE = ApplyStage.FAILURE
DEFAULT_CONTRACT_ACTION_VARIANT = ContractActionVariant.DEPLOY