import pytest

from counter_pallet.errors import BadOrigin, Unauthorized
from counter_pallet.types.origin import (Origin, OriginKind, ensure_root,
                                         ensure_signed, resolve_origin)

ALICE = b"\xaa" * 32


def test_constructors_and_kinds():
    assert Origin.root().kind is OriginKind.ROOT
    assert Origin.none().kind is OriginKind.NONE
    s = Origin.signed(ALICE)
    assert s.kind is OriginKind.SIGNED and s.who == ALICE
    assert Origin.signed("0x" + ALICE.hex()) == s


def test_signed_requires_account_and_others_forbid_it():
    with pytest.raises(ValueError):
        Origin(OriginKind.SIGNED)
    with pytest.raises(ValueError):
        Origin(OriginKind.ROOT, who=ALICE)


def test_ensure_root():
    ensure_root(Origin.root())
    for o in (Origin.signed(ALICE), Origin.none()):
        with pytest.raises(Unauthorized) as ei:
            ensure_root(o)
        assert ei.value.code == "BAD_ORIGIN"
        assert ei.value.data["required"] == "root"


def test_ensure_signed():
    assert ensure_signed(Origin.signed(ALICE)) == ALICE
    with pytest.raises(BadOrigin):
        ensure_signed(Origin.root())
    with pytest.raises(Unauthorized) as ei:
        ensure_signed(Origin.none())
    assert ei.value.data == {"source": "BadOrigin", "required": "signed", "got": "none"}


def test_ensure_rejects_non_origin_values():
    with pytest.raises(Unauthorized):
        ensure_root("root")
    with pytest.raises(Unauthorized):
        ensure_signed(ALICE)


@pytest.mark.parametrize(
    "raw, kind",
    [
        (None, OriginKind.NONE),
        ("none", OriginKind.NONE),
        ("", OriginKind.NONE),
        ("root", OriginKind.ROOT),
        ("ROOT", OriginKind.ROOT),
        ({"root": True}, OriginKind.ROOT),
        ({"signed": "0x" + ALICE.hex()}, OriginKind.SIGNED),
        ("0x" + ALICE.hex(), OriginKind.SIGNED),
        (ALICE, OriginKind.SIGNED),
        (Origin.root(), OriginKind.ROOT),
    ],
)
def test_resolve_origin(raw, kind):
    assert resolve_origin(raw).kind is kind


def test_resolve_origin_rejects_garbage():
    with pytest.raises(Unauthorized):
        resolve_origin(12345)
    with pytest.raises(Unauthorized):
        resolve_origin("alice")
    with pytest.raises(Unauthorized):
        resolve_origin({"unknown": 1})


@pytest.mark.parametrize("raw", ["0x", " 0X ", {"signed": "0x"}, {"signed": 123}, {"signed": [1]}])
def test_resolve_origin_rejects_empty_or_non_hex_accounts(raw):
    with pytest.raises(Unauthorized) as ei:
        resolve_origin(raw)
    assert ei.value.code == "BAD_ORIGIN"


def test_signed_constructor_rejects_empty_account():
    with pytest.raises(Unauthorized):
        Origin.signed(b"")
