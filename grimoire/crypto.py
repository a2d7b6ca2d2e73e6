"""Symmetric encryption helpers over AES and Blowfish."""

import secrets
from typing import Optional, Union

from Crypto.Cipher import AES, Blowfish

from grimoire import uid

KEY_LEN = 32
AES_KEY = uid.new_uid(KEY_LEN).encode("ascii")

BLOCK_SIZE = AES.block_size
BLOWFISH_BLOCK_SIZE = Blowfish.block_size
GCM_NONCE_SIZE = 12
GCM_TAG_SIZE = 16


def _as_bytes(key: Union[str, bytes]) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


class Crypto:
    """Encrypts and decrypts byte strings with one key.

    Modes that need an IV or nonce generate a random one and prepend it
    to the ciphertext.
    """

    def __init__(self, key: Optional[Union[str, bytes]] = None) -> None:
        self.key = _as_bytes(key) if key is not None else AES_KEY
        # Fails early with ValueError on a key of the wrong length.
        AES.new(self.key, AES.MODE_ECB)

    def encrypt_blowfish(self, data: bytes) -> bytes:
        """Encrypt whole 8-byte blocks with Blowfish in CBC mode."""
        if len(data) % BLOWFISH_BLOCK_SIZE:
            raise ValueError("input not full blocks")
        iv = secrets.token_bytes(BLOWFISH_BLOCK_SIZE)
        cipher = Blowfish.new(self.key, Blowfish.MODE_CBC, iv=iv)
        return iv + cipher.encrypt(data)

    def decrypt_blowfish(self, data: bytes) -> bytes:
        """Reverse ``encrypt_blowfish``."""
        if len(data) < BLOWFISH_BLOCK_SIZE:
            raise ValueError("ciphertext too short")
        iv, body = data[:BLOWFISH_BLOCK_SIZE], data[BLOWFISH_BLOCK_SIZE:]
        if len(body) % BLOWFISH_BLOCK_SIZE:
            raise ValueError("ciphertext is not a multiple of the block size")
        cipher = Blowfish.new(self.key, Blowfish.MODE_CBC, iv=iv)
        return cipher.decrypt(body)

    def encrypt_gcm(self, data: bytes) -> bytes:
        """Encrypt and authenticate with AES-GCM; returns nonce, ciphertext and tag."""
        nonce = secrets.token_bytes(GCM_NONCE_SIZE)
        cipher = AES.new(self.key, AES.MODE_GCM, nonce=nonce)
        ciphertext, tag = cipher.encrypt_and_digest(data)
        return nonce + ciphertext + tag

    def decrypt_gcm(self, data: bytes) -> bytes:
        """Reverse ``encrypt_gcm``; raises ValueError if authentication fails."""
        if len(data) < GCM_NONCE_SIZE + GCM_TAG_SIZE:
            raise ValueError("ciphertext too short")
        nonce = data[:GCM_NONCE_SIZE]
        ciphertext, tag = data[GCM_NONCE_SIZE:-GCM_TAG_SIZE], data[-GCM_TAG_SIZE:]
        cipher = AES.new(self.key, AES.MODE_GCM, nonce=nonce)
        return cipher.decrypt_and_verify(ciphertext, tag)

    def encrypt_ecb(self, data: bytes) -> bytes:
        """Encrypt whole 16-byte blocks with AES in ECB mode."""
        if len(data) % BLOCK_SIZE:
            raise ValueError("input not full blocks")
        return AES.new(self.key, AES.MODE_ECB).encrypt(data)

    def decrypt_ecb(self, data: bytes) -> bytes:
        """Reverse ``encrypt_ecb``."""
        if len(data) % BLOCK_SIZE:
            raise ValueError("ciphertext is not a multiple of the block size")
        return AES.new(self.key, AES.MODE_ECB).decrypt(data)

    def encrypt_cfb(self, data: bytes) -> bytes:
        """Encrypt with AES in full-block CFB mode; returns IV and ciphertext."""
        iv = secrets.token_bytes(BLOCK_SIZE)
        cipher = AES.new(self.key, AES.MODE_CFB, iv=iv, segment_size=BLOCK_SIZE * 8)
        return iv + cipher.encrypt(data)

    def decrypt_cfb(self, data: bytes) -> bytes:
        """Reverse ``encrypt_cfb``."""
        if len(data) < BLOCK_SIZE:
            raise ValueError("ciphertext too short")
        iv, body = data[:BLOCK_SIZE], data[BLOCK_SIZE:]
        cipher = AES.new(self.key, AES.MODE_CFB, iv=iv, segment_size=BLOCK_SIZE * 8)
        return cipher.decrypt(body)