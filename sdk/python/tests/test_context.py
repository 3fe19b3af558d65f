from pathlib import Path

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from dfns_blueprint import (
    BlueprintConfig,
    ContextError,
    DfnsContext,
    KeyFormatError,
    LocalDatabase,
    derive_operator_address,
    generate_keypair,
    raw_operator_key,
)


def _compress(raw: bytes) -> bytes:
    point = ec.EllipticCurvePublicKey.from_encoded_point(ec.SECP256K1(), b"\x04" + raw)
    return point.public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.CompressedPoint,
    )


def _context(tmp_path: Path, call_id=None) -> DfnsContext:
    config = BlueprintConfig(blueprint_id=3, keystore_uri=tmp_path, call_id=call_id)
    return DfnsContext(config)


def test_context_defaults(tmp_path):
    ctx = _context(tmp_path, call_id=12)
    assert ctx.network_protocol == "/dfns/cggmp21/1.0.0"
    assert ctx.blueprint_id() == 3
    assert ctx.current_call_id() == 12
    assert isinstance(ctx.store, LocalDatabase)
    assert ctx.store.path == tmp_path / "dfns.json"


def test_missing_call_id(tmp_path):
    with pytest.raises(ContextError):
        _context(tmp_path).current_call_id()


def test_raw_operator_key_accepts_all_encodings():
    _, raw = generate_keypair()
    assert raw_operator_key(raw) == raw
    assert raw_operator_key(b"\x04" + raw) == raw
    assert raw_operator_key(_compress(raw)) == raw


def test_raw_operator_key_rejects_bad_input():
    with pytest.raises(KeyFormatError):
        raw_operator_key(b"\x01" * 40)
    with pytest.raises(KeyFormatError):
        raw_operator_key(b"\x02" + b"\xff" * 32)


def test_operators_ordered_by_address(tmp_path):
    raws = [generate_keypair()[1] for _ in range(4)]
    ctx = _context(tmp_path)

    operators = ctx.operators_by_address([_compress(raws[0]), raws[1], b"\x04" + raws[2], raws[3]])

    assert list(operators) == sorted(derive_operator_address(r) for r in raws)
    for address, raw in operators.items():
        assert derive_operator_address(raw) == address


def test_party_index(tmp_path):
    raws = [generate_keypair()[1] for _ in range(3)]
    ctx = _context(tmp_path)
    registry = [_compress(r) for r in raws]

    ordered = sorted(derive_operator_address(r) for r in raws)
    for raw in raws:
        index, operators = ctx.party_index_and_operators(raw, registry)
        assert ordered[index] == derive_operator_address(raw)
        assert len(operators) == 3


def test_party_not_in_operator_set(tmp_path):
    raws = [generate_keypair()[1] for _ in range(3)]
    _, outsider = generate_keypair()

    with pytest.raises(ContextError):
        _context(tmp_path).party_index_and_operators(outsider, raws)
