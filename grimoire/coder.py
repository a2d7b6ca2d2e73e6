"""Encoding of objects to bytes, optionally compressed, base64-wrapped or encrypted."""

import base64
import gzip
import io
import json
import pickle
import zlib
from pathlib import Path
from typing import Any, BinaryIO, Callable, Generic, Optional, TypeVar, Union

from grimoire.crypto import Crypto

T = TypeVar("T")

Encoder = Callable[[BinaryIO, Any], None]
Decoder = Callable[[BinaryIO], Any]


def encode_json(stream: BinaryIO, obj: Any) -> None:
    """Write ``obj`` as compact JSON followed by a newline."""
    stream.write(json.dumps(obj, separators=(",", ":")).encode("utf-8") + b"\n")


def decode_json(stream: BinaryIO) -> Any:
    """Read one JSON document from ``stream``."""
    return json.load(stream)


def encode_pickle(stream: BinaryIO, obj: Any) -> None:
    """Write ``obj`` in pickle format."""
    pickle.dump(obj, stream)


def decode_pickle(stream: BinaryIO) -> Any:
    """Read a pickled object; only use on trusted data."""
    return pickle.load(stream)


def _compress(data: bytes) -> bytes:
    return gzip.compress(data)


def _decompress(data: bytes) -> bytes:
    if not data:
        raise EOFError("no data to decompress")
    # Truncated streams yield what could be recovered, as a lenient reader would.
    decompressor = zlib.decompressobj(16 + zlib.MAX_WBITS)
    return decompressor.decompress(data) + decompressor.flush()


class MultiCoder(Generic[T]):
    """Encodes and decodes objects with a chosen encoder and decoder."""

    def __init__(self, key: Optional[Union[str, bytes]] = None) -> None:
        self.crypto = Crypto(key)

    def encode(self, obj: T, encoder: Encoder) -> bytes:
        """Return the bytes ``encoder`` writes for ``obj``."""
        buffer = io.BytesIO()
        encoder(buffer, obj)
        return buffer.getvalue()

    def decode(self, data: bytes, decoder: Decoder) -> T:
        """Return the object ``decoder`` reads from ``data``."""
        return decoder(io.BytesIO(data))

    def encode_b64(self, obj: T, encoder: Encoder) -> bytes:
        """Encode, gzip and wrap in URL-safe base64."""
        return base64.urlsafe_b64encode(_compress(self.encode(obj, encoder)))

    def decode_b64(self, data: bytes, decoder: Decoder) -> T:
        """Reverse ``encode_b64``."""
        return self.decode(_decompress(base64.urlsafe_b64decode(data)), decoder)

    def encode_encrypt(self, obj: T, encoder: Encoder) -> bytes:
        """Encode, encrypt with AES-CFB and gzip."""
        return _compress(self.crypto.encrypt_cfb(self.encode(obj, encoder)))

    def decode_decrypt(self, data: bytes, decoder: Decoder) -> T:
        """Reverse ``encode_encrypt``."""
        return self.decode(self.crypto.decrypt_cfb(_decompress(data)), decoder)

    def encode_save(self, filename: Union[str, Path], obj: T, encoder: Encoder) -> None:
        """Encode ``obj`` into ``filename``, creating parent directories."""
        path = Path(filename)
        data = self.encode(obj, encoder)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def decode_open(self, filename: Union[str, Path], decoder: Decoder) -> T:
        """Decode the contents of ``filename``."""
        return self.decode(Path(filename).read_bytes(), decoder)

    def encode_chain(
        self, obj: T, encoder: Encoder, *args: Callable[[T, Encoder], bytes]
    ) -> bytes:
        """Run each handler on ``obj`` in turn and return the last result."""
        data = b""
        for handler in args:
            data = handler(obj, encoder)
        return data

    def decode_chain(
        self, data: bytes, decoder: Decoder, *args: Callable[[bytes, Decoder], T]
    ) -> Optional[T]:
        """Run each handler on ``data`` in turn and return the last result."""
        obj: Optional[T] = None
        for handler in args:
            obj = handler(data, decoder)
        return obj