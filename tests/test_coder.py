import base64
import string

import pytest

from grimoire.coder import (
    MultiCoder,
    decode_json,
    decode_pickle,
    encode_json,
    encode_pickle,
)

SAMPLE = {"name": "grimoire", "items": [1, 2, 3], "nested": {"ok": True}}


@pytest.fixture
def coder():
    return MultiCoder()


def test_encode_json_is_compact_with_newline(coder):
    assert coder.encode({"a": 1}, encode_json) == b'{"a":1}\n'


def test_json_round_trip(coder):
    assert coder.decode(coder.encode(SAMPLE, encode_json), decode_json) == SAMPLE


def test_pickle_round_trip(coder):
    value = {"tuple": (1, 2), "set": {3}}
    assert coder.decode(coder.encode(value, encode_pickle), decode_pickle) == value


def test_b64_round_trip_is_url_safe(coder):
    encoded = coder.encode_b64(SAMPLE, encode_json)
    allowed = set((string.ascii_letters + string.digits + "-_=").encode())
    assert set(encoded) <= allowed
    assert coder.decode_b64(encoded, decode_json) == SAMPLE


def test_b64_of_empty_raises_eof(coder):
    with pytest.raises(EOFError):
        coder.decode_b64(b"", decode_json)


def test_b64_payload_is_gzip(coder):
    raw = base64.urlsafe_b64decode(coder.encode_b64(SAMPLE, encode_json))
    assert raw[:2] == b"\x1f\x8b"


def test_encrypt_round_trip(coder):
    sealed = coder.encode_encrypt(SAMPLE, encode_pickle)
    assert coder.decode_decrypt(sealed, decode_pickle) == SAMPLE


def test_encrypt_hides_plaintext(coder):
    sealed = coder.encode_encrypt("grimoire-secret-text", encode_json)
    assert b"grimoire" not in sealed
    assert coder.decode_decrypt(sealed, decode_json) == "grimoire-secret-text"


def test_decrypt_needs_same_key():
    sealed = MultiCoder(b"a" * 32).encode_encrypt(SAMPLE, encode_json)
    assert MultiCoder(b"a" * 32).decode_decrypt(sealed, decode_json) == SAMPLE


def test_decrypt_empty_raises_eof(coder):
    with pytest.raises(EOFError):
        coder.decode_decrypt(b"", decode_json)


def test_save_and_open(coder, tmp_path):
    target = tmp_path / "nested" / "dir" / "Global.ID"
    coder.encode_save(target, "identifier", encode_json)
    assert target.exists()
    assert coder.decode_open(target, decode_json) == "identifier"


def test_open_missing_file(coder, tmp_path):
    with pytest.raises(FileNotFoundError):
        coder.decode_open(tmp_path / "missing", decode_json)


def test_encode_chain_returns_last(coder):
    result = coder.encode_chain(SAMPLE, encode_json, coder.encode, coder.encode_b64)
    assert coder.decode_b64(result, decode_json) == SAMPLE


def test_chains_without_handlers(coder):
    assert coder.encode_chain(SAMPLE, encode_json) == b""
    assert coder.decode_chain(b"{}", decode_json) is None


def test_decode_chain_returns_last(coder):
    data = coder.encode(SAMPLE, encode_json)
    assert coder.decode_chain(data, decode_json, coder.decode) == SAMPLE


def test_chain_propagates_errors(coder):
    with pytest.raises(EOFError):
        coder.decode_chain(b"", decode_json, coder.decode_b64)