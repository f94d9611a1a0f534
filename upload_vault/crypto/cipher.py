"""Streaming AES-256-CBC encryption of uploaded files.

Artifact layout: a random 16-byte IV followed by the PKCS7-padded
ciphertext. Plaintext is read and encrypted in fixed-size chunks so memory
use does not depend on file size.
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from upload_vault.crypto.exceptions import EncryptionError
from upload_vault.logging.logger import Log
from upload_vault.processor.cancellation import CancellationToken

IV_SIZE = 16
KEY_SIZE = 32
DEFAULT_CHUNK_SIZE = 64 * 1024
PARTIAL_SUFFIX = ".part"


class StreamingCipher:
    """Encrypts and decrypts files under one process-wide 256-bit key."""

    def __init__(self, key: str | bytes, chunk_size: int = DEFAULT_CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._key = key
        self._chunk_size = chunk_size

    def encrypt_file(
        self,
        source: Path,
        destination: Path,
        token: CancellationToken | None = None,
    ) -> Path:
        """Write ``destination`` as IV + ciphertext of ``source``.

        The artifact only appears under its final name after it has been
        flushed and synced; on any failure the partial file is removed.

        Raises:
            EncryptionError: bad key, unreadable source, unwritable
                destination, or cancelled batch.
        """
        key = self._resolve_key()
        self._write_atomically(
            source,
            destination,
            lambda reader, writer: self._encrypt(reader, writer, key, token),
            "Encryption",
        )
        Log.info(f"Encrypted {source.name} -> {destination.name}")
        return destination

    def decrypt_file(
        self,
        source: Path,
        destination: Path,
        token: CancellationToken | None = None,
    ) -> Path:
        """Restore the plaintext of an artifact written by ``encrypt_file``."""
        key = self._resolve_key()
        self._write_atomically(
            source,
            destination,
            lambda reader, writer: self._decrypt(reader, writer, key, token),
            "Decryption",
        )
        return destination

    def _write_atomically(
        self,
        source: Path,
        destination: Path,
        transform: Callable[[BinaryIO, BinaryIO], None],
        action: str,
    ) -> None:
        partial = destination.with_name(destination.name + PARTIAL_SUFFIX)
        try:
            with source.open("rb") as reader, partial.open("wb") as writer:
                transform(reader, writer)
                writer.flush()
                os.fsync(writer.fileno())
            os.replace(partial, destination)
        except EncryptionError:
            partial.unlink(missing_ok=True)
            raise
        except Exception as exc:
            partial.unlink(missing_ok=True)
            raise EncryptionError(f"{action} of {source.name} failed: {exc}") from exc

    def _encrypt(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        key: bytes,
        token: CancellationToken | None,
    ) -> None:
        iv = os.urandom(IV_SIZE)
        encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        writer.write(iv)
        while True:
            if token is not None:
                token.raise_if_cancelled()
            chunk = reader.read(self._chunk_size)
            if not chunk:
                break
            writer.write(encryptor.update(padder.update(chunk)))
        writer.write(encryptor.update(padder.finalize()) + encryptor.finalize())

    def _decrypt(
        self,
        reader: BinaryIO,
        writer: BinaryIO,
        key: bytes,
        token: CancellationToken | None,
    ) -> None:
        iv = reader.read(IV_SIZE)
        if len(iv) != IV_SIZE:
            raise EncryptionError("Artifact is too short to contain an IV")
        decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        while True:
            if token is not None:
                token.raise_if_cancelled()
            chunk = reader.read(self._chunk_size)
            if not chunk:
                break
            writer.write(unpadder.update(decryptor.update(chunk)))
        writer.write(unpadder.update(decryptor.finalize()) + unpadder.finalize())

    def _resolve_key(self) -> bytes:
        if isinstance(self._key, bytes):
            key = self._key
        else:
            if not self._key.strip():
                raise EncryptionError("Encryption key is not configured")
            try:
                key = bytes.fromhex(self._key.strip())
            except ValueError as exc:
                raise EncryptionError("Encryption key must be hex encoded") from exc
        if len(key) != KEY_SIZE:
            raise EncryptionError(
                f"Encryption key must be {KEY_SIZE} bytes, got {len(key)}"
            )
        return key
