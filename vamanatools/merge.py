"""Merging graph indices built on overlapping shards into one graph."""

from __future__ import annotations

import argparse
import logging
import os
import random
import struct
from contextlib import ExitStack
from typing import Sequence

import numpy as np

from .cached_io import CachedReader, CachedWriter
from .errors import ANNException

__all__ = ["read_idmap", "merge_shards", "main"]

logger = logging.getLogger(__name__)

_CACHE_SIZE = 1024 * 1048576
_U32 = struct.Struct("<I")
_U64 = struct.Struct("<Q")
_HEADER_SIZE = _U64.size + 2 * _U32.size


def read_idmap(fname: str | os.PathLike) -> np.ndarray:
    """Read a one-dimensional uint32 bin file mapping local ids to global ids."""
    actual_file_size = os.path.getsize(fname)
    with open(fname, "rb") as reader:
        header = reader.read(2 * _U32.size)
        if len(header) < 2 * _U32.size:
            raise ANNException(
                "Error reading idmap file. File is too short to hold a header. "
                f"Actual: {actual_file_size}\n",
                -1, "read_idmap", __file__,
            )
        npts, dim = struct.unpack("<II", header)
        expected = npts * _U32.size + 2 * _U32.size
        if dim != 1 or actual_file_size != expected:
            raise ANNException(
                "Error reading idmap file. Check if the file is bin file with "
                f"1 dimensional data. Actual: {actual_file_size}, "
                f"expected: {expected}\n",
                -1, "read_idmap", __file__,
            )
        return np.frombuffer(reader.read(npts * _U32.size), dtype="<u4").astype(
            np.uint32
        )


def _read_u32(reader: CachedReader) -> int:
    return _U32.unpack(reader.read(_U32.size))[0]


def merge_shards(
    vamana_prefix: str,
    vamana_suffix: str,
    idmaps_prefix: str,
    idmaps_suffix: str,
    nshards: int,
    max_degree: int,
    output_vamana: str | os.PathLike,
    medoids_file: str | os.PathLike,
) -> int:
    """Merge per-shard graph indices into one index and write shard medoids.

    Shard files are named prefix + shard number + suffix. Neighbourhoods of
    a node found in several shards are united, shuffled and cut to
    max_degree. Returns the size in bytes of the merged index.
    """
    vamana_names = [f"{vamana_prefix}{shard}{vamana_suffix}" for shard in range(nshards)]
    idmaps = [
        read_idmap(f"{idmaps_prefix}{shard}{idmaps_suffix}").tolist()
        for shard in range(nshards)
    ]

    nnodes = max((max(idmap) for idmap in idmaps if idmap), default=0) + 1
    logger.info("# nodes: %d, max. degree: %d", nnodes, max_degree)

    node_shard = sorted(
        (node_id, shard) for shard, idmap in enumerate(idmaps) for node_id in idmap
    )
    logger.info("Finished computing node -> shards map")

    with ExitStack() as stack:
        readers: list[CachedReader] = []
        for name in vamana_names:
            reader = stack.enter_context(CachedReader(name, _CACHE_SIZE))
            readers.append(reader)
            actual_file_size = os.path.getsize(name)
            expected_file_size = _U64.unpack(reader.read(_U64.size))[0]
            if actual_file_size != expected_file_size:
                raise ANNException(
                    f"Error in Vamana Index file {name} Actual file size: "
                    f"{actual_file_size} does not match expected file size: "
                    f"{expected_file_size}\n",
                    -1, "merge_shards", __file__,
                )

        merged_index_size = _HEADER_SIZE
        writer = stack.enter_context(CachedWriter(output_vamana, _CACHE_SIZE))
        writer.write(_U64.pack(merged_index_size))

        max_input_width = max((_read_u32(r) for r in readers), default=0)
        logger.info(
            "Max input width: %d, output width: %d", max_input_width, max_degree
        )
        writer.write(_U32.pack(max_degree))

        with open(medoids_file, "wb") as medoid_writer:
            medoid_writer.write(struct.pack("<II", nshards, 1))
            for shard, reader in enumerate(readers):
                medoid = idmaps[shard][_read_u32(reader)]
                medoid_writer.write(_U32.pack(medoid))
                if shard == nshards - 1:
                    writer.write(_U32.pack(medoid))

        logger.info("Starting merge")
        rng = random.Random()
        final_nhood: list[int] = []
        seen: set[int] = set()

        def flush() -> int:
            rng.shuffle(final_nhood)
            nnbrs = min(len(final_nhood), max_degree)
            writer.write(_U32.pack(nnbrs))
            writer.write(np.asarray(final_nhood[:nnbrs], dtype="<u4").tobytes())
            final_nhood.clear()
            seen.clear()
            return _U32.size + nnbrs * _U32.size

        cur_id = 0
        for node_id, shard_id in node_shard:
            if cur_id < node_id:
                merged_index_size += flush()
                cur_id = node_id
            reader = readers[shard_id]
            shard_nnbrs = _read_u32(reader)
            shard_nhood = np.frombuffer(
                reader.read(shard_nnbrs * _U32.size), dtype="<u4"
            ).tolist()
            idmap = idmaps[shard_id]
            for local in shard_nhood:
                global_id = idmap[local]
                if global_id not in seen:
                    seen.add(global_id)
                    final_nhood.append(global_id)
        merged_index_size += flush()

        logger.info("Expected size: %d", merged_index_size)
        writer.reset()
        writer.write(_U64.pack(merged_index_size))
    logger.info("Finished merge")
    return merged_index_size


def main(argv: Sequence[str] | None = None) -> int:
    """Command-line entry point for merging shard indices."""
    parser = argparse.ArgumentParser(
        description="Merge graph indices built on shards into one index."
    )
    parser.add_argument("vamana_index_prefix")
    parser.add_argument("vamana_index_suffix")
    parser.add_argument("idmaps_prefix")
    parser.add_argument("idmaps_suffix")
    parser.add_argument("n_shards", type=int)
    parser.add_argument("max_degree", type=int)
    parser.add_argument("output_vamana_path")
    parser.add_argument("output_medoids_path")
    args = parser.parse_args(argv)
    merge_shards(
        args.vamana_index_prefix,
        args.vamana_index_suffix,
        args.idmaps_prefix,
        args.idmaps_suffix,
        args.n_shards,
        args.max_degree,
        args.output_vamana_path,
        args.output_medoids_path,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())