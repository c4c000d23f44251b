"""Digest calculation utilities."""

import hashlib
from pathlib import Path
from typing import AsyncIterator, Union

import aiofiles

DEFAULT_CHUNK_SIZE = 1024 * 1024


def _new_hasher(algorithm: str):
    if algorithm not in hashlib.algorithms_available:
        raise ValueError(f"Unsupported algorithm: {algorithm}")
    return hashlib.new(algorithm)


def calculate_digest(data: Union[bytes, bytearray], algorithm: str = "sha256") -> str:
    """Calculate digest of data.

    Args:
        data: Data to hash
        algorithm: Hash algorithm (default: sha256)

    Returns:
        Digest string in format "algorithm:hex"

    Raises:
        ValueError: If algorithm is not supported
        ValueError: If data is not bytes-like
    """
    if not isinstance(data, (bytes, bytearray)):
        raise ValueError("Data must be bytes or bytearray")

    hasher = _new_hasher(algorithm)
    hasher.update(data)
    return f"{algorithm}:{hasher.hexdigest()}"


async def calculate_file_digest(
    path: Union[str, Path],
    algorithm: str = "sha256",
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Calculate digest of a file without loading it into memory.

    Raises:
        ValueError: If algorithm is not supported
    """
    hasher = _new_hasher(algorithm)
    async for chunk in read_file_chunks(path, chunk_size):
        hasher.update(chunk)
    return f"{algorithm}:{hasher.hexdigest()}"


async def read_file_chunks(
    path: Union[str, Path], chunk_size: int = DEFAULT_CHUNK_SIZE
) -> AsyncIterator[bytes]:
    """Yield file content in chunks."""
    async with aiofiles.open(path, "rb") as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            yield chunk
