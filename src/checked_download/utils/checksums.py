"""Hash calculation utilities."""

import logging
from os import PathLike
from pathlib import Path

from tqdm.auto import tqdm

from ..checksum.algorithms import DigestEngine, HashAlgorithm
from ..constants import TQDM_SMOOTHING

log = logging.getLogger(__name__)


def calculate_digest(
    file_path: str | PathLike,
    algorithm: HashAlgorithm | str | None = None,
    chunk_size=2**18,
    progress=True,
) -> str:
    """
    Calculate the digest of a file in chunks

    :param file_path: path to the file
    :param algorithm: hash algorithm, SHA256 if None
    :param chunk_size: Chunk size in bytes
    :param progress: Print progress
    :return: lowercase hex digest of file_path
    """
    file_path = Path(file_path)
    total_size = file_path.stat().st_size
    engine = DigestEngine(algorithm)

    # inspired by hashlib.file_digest
    buf = bytearray(chunk_size)
    view = memoryview(buf)
    with open(file_path, "rb") as f:
        if progress and (total_size > chunk_size):
            with tqdm(
                total=total_size,
                unit="B",
                unit_scale=True,
                desc=f"Calculating {engine.algorithm.upper()} {file_path.name}",
                smoothing=TQDM_SMOOTHING,
            ) as pbar:
                while size := f.readinto(buf):
                    engine.update(view[:size])
                    pbar.update(size)
        else:
            while size := f.readinto(buf):
                engine.update(view[:size])

    return engine.hexdigest()
