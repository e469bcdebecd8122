"""The syncing state of a node, as returned by ``eth_syncing`` and its subscription."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from web3types.block import _mapping, _required
from web3types.primitives import U256

_NO_VARIANT = "data did not match any variant of untagged enum SyncStateVariants"


@dataclass(frozen=True)
class SyncInfo:
    """Progress of a running sync."""

    starting_block: U256
    current_block: U256
    highest_block: U256

    @classmethod
    def from_json(cls, data: Any) -> SyncInfo:
        data = _mapping(data)
        return cls(
            starting_block=_required(data, "startingBlock", U256.from_json),
            current_block=_required(data, "currentBlock", U256.from_json),
            highest_block=_required(data, "highestBlock", U256.from_json),
        )

    def to_json(self) -> dict[str, str]:
        return {
            "startingBlock": self.starting_block.to_json(),
            "currentBlock": self.current_block.to_json(),
            "highestBlock": self.highest_block.to_json(),
        }


def _subscription_info(data: Any) -> SyncInfo:
    data = _mapping(data)
    return SyncInfo(
        starting_block=_required(data, "StartingBlock", U256.from_json),
        current_block=_required(data, "CurrentBlock", U256.from_json),
        highest_block=_required(data, "HighestBlock", U256.from_json),
    )


def _subscription_state(data: Mapping[str, Any]) -> tuple[bool, SyncInfo | None]:
    syncing = data.get("syncing")
    if not isinstance(syncing, bool):
        raise ValueError(_NO_VARIANT)
    status = data.get("status")
    if status is None:
        return syncing, None
    try:
        return syncing, _subscription_info(status)
    except ValueError:
        raise ValueError(_NO_VARIANT) from None


@dataclass(frozen=True)
class SyncState:
    """Either a running sync with its progress, or no sync (``info`` is None)."""

    info: SyncInfo | None = None

    @property
    def is_syncing(self) -> bool:
        return self.info is not None

    @classmethod
    def from_json(cls, value: Any) -> SyncState:
        """Accept a sync info object, a subscription status object, or ``false``."""
        if isinstance(value, bool):
            if value:
                raise ValueError("expected object or `false`, got `true`")
            return cls()
        if not isinstance(value, Mapping):
            raise ValueError(_NO_VARIANT)
        try:
            return cls(SyncInfo.from_json(value))
        except ValueError:
            pass
        syncing, status = _subscription_state(value)
        if status is None and not syncing:
            return cls()
        if status is not None and syncing:
            return cls(status)
        raise ValueError("expected object or `syncing = false`, got `syncing = true`")

    def to_json(self) -> Any:
        return False if self.info is None else self.info.to_json()