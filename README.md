# web3types

Plain Python models for the data exchanged with Ethereum JSON-RPC nodes.
Each model reads the JSON shape a node returns (`from_json`) and writes the
shape a node expects (`to_json`). Quantities are `0x`-prefixed hex strings on
the wire and integers in Python. Malformed input raises `ValueError`.

## Install

```
pip install web3types
```

There are no runtime dependencies.

## Modules

- `web3types.primitives`: fixed-size hashes (`FixedHash` and its subclasses
  `H64`, `H128`, `H160`, `H256`, `H512`, `H520`, `H2048`), unsigned integers
  (`Uint` and its subclasses `U64`, `U128`, `U256`), `Bytes` (hex-encoded) and
  `BytesArray` (encoded as a JSON array of numbers).
- `web3types.block`: `BlockTag`, `BlockNumber`, `BlockId`, `BlockHeader`, `Block`.
- `web3types.log`: `Log`, `Filter`, `FilterBuilder`, `TopicFilter`.
- `web3types.fee_history`: `FeeHistory`.
- `web3types.transaction_id`: `TransactionId`.
- `web3types.sync_state`: `SyncInfo`, `SyncState`.
- `web3types.work`: `Work`.
- `web3types.transaction`: `Transaction`, `Receipt`, `RawTransaction`, `AccessListItem`.
- `web3types.transaction_request`: `CallRequest`, `CallRequestBuilder`,
  `TransactionRequest`, `TransactionRequestBuilder`, `TransactionCondition`.
- `web3types.signed`: `SignedData`, `SignedTransaction`, `TransactionParameters`.
- `web3types.recovery`: `Recovery`, `RecoveryMessage`, `ParseSignatureError`.
- `web3types.parity_peers`: `ParityPeerType`, `ParityPeerInfo`,
  `PeerNetworkInfo`, `PeerProtocolsInfo`, `EthProtocolInfo`, `PipProtocolInfo`.
- `web3types.parity_pending_transaction`: `FilterOp`, `FilterCondition`,
  `ToFilter`, `ParityPendingTransactionFilter`,
  `ParityPendingTransactionFilterBuilder`.
- `web3types.trace_filtering`: `TraceFilter`, `TraceFilterBuilder`, the action
  types `Call`, `Create`, `Suicide`, `Reward`, the results `CallResult` and
  `CreateResult`, `Trace`, the enums `ActionType`, `CallType`, `RewardType`,
  and the helpers `parse_action`, `action_to_json`, `parse_result`,
  `result_to_json`.
- `web3types.traces`: `TraceType`, `serialize_trace_types`, `DiffKind`,
  `ChangedType`, `Diff`, `AccountDiff`, `StateDiff`, `TransactionTrace`,
  `VMTrace`, `VMOperation`, `VMExecutedOperation`, `MemoryDiff`,
  `StorageDiff`, `BlockTrace`.

## Examples

Numbers and hashes:

```python
from web3types.primitives import H128, U256

U256(256).to_json()                     # "0x100"
U256.from_json("0x01")                  # U256(1)
U256.from_json("10")                    # raises ValueError: no 0x prefix
U256.from_json("0x")                    # raises ValueError: no digits

h = H128.from_low_u64_be(1023)
h.to_json()                             # "0x000000000000000000000000000003ff"
str(h)                                  # "0x0000…03ff"
format(h, "x")                          # "000000000000000000000000000003ff"
```

Block numbers:

```python
from web3types.block import BlockNumber

BlockNumber.number(100).to_json()       # "0x64"
BlockNumber.from_json("latest")         # BlockNumber(tag=BlockTag.LATEST)
BlockNumber.from_json("64")             # raises ValueError: missing 0x prefix
```

`Block.from_json` takes an optional `transaction_parser` that is applied to
each entry of `transactions`; without it the entries are kept as given. A
`null` or missing `miner` gives the zero address.

Building a log filter (each builder step returns a new builder):

```python
from web3types.block import BlockNumber
from web3types.log import FilterBuilder
from web3types.primitives import H160, H256

flt = (
    FilterBuilder()
    .from_block(BlockNumber.number(1))
    .address([H160.from_low_u64_be(1)])
    .topics([H256.from_low_u64_be(3)], None, None, None)
    .build()
)
payload = flt.to_json()
```

Trailing unconstrained topics are dropped, and a single address or topic is
written on its own rather than as an array.

Call requests:

```python
from web3types.primitives import H160, Bytes
from web3types.transaction_request import CallRequest

request = (
    CallRequest.builder()
    .to(H160.from_low_u64_be(5))
    .gas(21_000)
    .value(5_000_000)
    .data(Bytes(b"\x01\x02\x03"))
    .build()
)
request.to_json()
# {"to": "0x0000000000000000000000000000000000000005",
#  "gas": "0x5208", "value": "0x4c4b40", "data": "0x010203"}
```

Sync state:

```python
from web3types.sync_state import SyncState

SyncState.from_json(False)              # not syncing
SyncState.from_json(True)               # raises ValueError
SyncState.from_json({"syncing": False}) # not syncing
```

Signatures:

```python
from web3types.recovery import Recovery

rec = Recovery.from_raw_signature("Some data", raw_65_bytes)
compact, recovery_id = rec.as_signature()
```

`from_raw_signature` raises `ParseSignatureError` (a `ValueError`) unless the
signature is exactly 65 bytes. `recovery_id()` maps `v` of 27 to 0, 28 to 1,
and any `v` of 35 or more to its parity; other values give `None`.

Traces:

```python
from web3types.traces import BlockTrace, TraceType, serialize_trace_types

serialize_trace_types([TraceType.TRACE, TraceType.VM_TRACE, TraceType.STATE_DIFF])
# '["trace","vmTrace","stateDiff"]'
trace = BlockTrace.from_json(replay_result)
```

## What this package does not do

It only models data. It does not connect to a node or send requests, it
does not sign transactions, and it does not recover an address from a
signature: `Recovery` only holds and splits the signature data.

## Tests

```
pip install -e .[test]
pytest
```