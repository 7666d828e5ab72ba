# sim/rng.py
from __future__ import annotations

from dataclasses import dataclass
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _crc32_u32(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


@dataclass(frozen=True)
class RNGKey:
    """Stream name + optional parts (e.g. a query's start/goal ids) for substreams."""

    stream: str
    parts: tuple[int, ...]  # already normalized to u32

    @classmethod
    def from_parts(cls, stream: str, *parts: object) -> RNGKey:
        norm: list[int] = [_crc32_u32(stream)]
        for p in parts:
            if isinstance(p, (int, np.integer)):
                norm.append(_u32(int(p)))
            else:
                norm.append(_crc32_u32(str(p)))
        return cls(stream=stream, parts=tuple(norm))


class RNGRegistry:
    """
    Source of numpy.random.Generator streams for the sampler.

    With a master seed, every (stream, parts) key maps to the same draws on
    every run. Without one, the root entropy comes from the OS, so repeated
    runs explore different random walks.
    """

    def __init__(self, master_seed: int | None = None):
        self._root = np.random.SeedSequence(None if master_seed is None else _u32(master_seed))
        self.master_seed = self._root.entropy

    def generator(self, key: RNGKey) -> np.random.Generator:
        ss = np.random.SeedSequence(entropy=self.master_seed, spawn_key=key.parts)
        return np.random.Generator(np.random.PCG64(ss))

    def stream(self, name: str) -> np.random.Generator:
        return self.generator(RNGKey.from_parts(name))

    def substream(self, name: str, *parts: object) -> np.random.Generator:
        return self.generator(RNGKey.from_parts(name, *parts))
