"""Per-rank binary output of an unstructured prism mesh and its variable."""

from __future__ import annotations

import math
import os
import struct
from array import array
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .pdirs import make_dir, wait_for_dir

_U64 = struct.Struct("=Q")
_U32 = struct.Struct("=I")


@dataclass
class PrzmRecord:
    """Contents of one rank's file for one time step."""

    npoints: int
    xpts: list[float] | None = None
    ypts: list[float] | None = None
    zpts: list[float] | None = None
    conns3: list[int] = field(default_factory=list)
    conns2: list[int] = field(default_factory=list)
    data: list[float] | None = None

    @property
    def nelems3(self) -> int:
        return len(self.conns3) // 6

    @property
    def nelems2(self) -> int:
        return len(self.conns2) // 3


def rank_digits(nprocs: int) -> int:
    """Number of digits used for the rank in file names."""
    return int(math.log10(nprocs - 1) + 1.5) if nprocs > 1 else 1


def write_przm(
    name: str | os.PathLike,
    tstep: int,
    rank: int = 0,
    nprocs: int = 1,
    xpts: Sequence[float] | None = None,
    ypts: Sequence[float] | None = None,
    zpts: Sequence[float] | None = None,
    conns3: Sequence[int] | None = None,
    conns2: Sequence[int] | None = None,
    data: Sequence[float] | None = None,
) -> Path:
    """Write one rank's mesh and data for a time step; returns the file path.

    The file lives in ``<name>.przm/tNNNN.d/r<rank>.dat``.
    """
    has_grid = xpts is not None and ypts is not None and zpts is not None
    if has_grid:
        npoints = len(xpts)
        if len(ypts) != npoints or len(zpts) != npoints:
            raise ValueError("coordinate arrays differ in length")
    elif data is not None:
        npoints = len(data)
    else:
        npoints = 0
    if data is not None and len(data) != npoints:
        raise ValueError("data length does not match number of points")
    conns3 = list(conns3 or ())
    conns2 = list(conns2 or ())
    if len(conns3) % 6:
        raise ValueError("prism connections must come in groups of 6")
    if len(conns2) % 3:
        raise ValueError("triangle connections must come in groups of 3")

    base = make_dir(f"{os.fspath(name)}.przm")
    step_dir = make_dir(base / f"t{tstep:04d}.d")
    wait_for_dir(step_dir, interval=0.0)
    path = step_dir / f"r{rank:0{rank_digits(nprocs)}d}.dat"

    with open(path, "wb") as out:
        out.write(_U64.pack(npoints))
        out.write(_U32.pack(1 if has_grid else 0))
        if has_grid:
            for coords in (xpts, ypts, zpts):
                out.write(array("f", coords).tobytes())
        for conns, per_elem in ((conns3, 6), (conns2, 3)):
            out.write(_U64.pack(len(conns) // per_elem))
            if conns:
                out.write(array("Q", conns).tobytes())
        out.write(_U32.pack(1 if data is not None else 0))
        if data is not None:
            out.write(array("f", data).tobytes())
    return path


class _Cursor:
    def __init__(self, raw: bytes) -> None:
        self._raw = raw
        self._pos = 0

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._raw):
            raise ValueError("truncated przm file")
        chunk = self._raw[self._pos:end]
        self._pos = end
        return chunk

    def scalar(self, fmt: struct.Struct) -> int:
        return fmt.unpack(self._take(fmt.size))[0]

    def values(self, typecode: str, count: int) -> list:
        arr = array(typecode)
        arr.frombytes(self._take(arr.itemsize * count))
        return arr.tolist()


def read_przm(path: str | os.PathLike) -> PrzmRecord:
    """Read a file written by :func:`write_przm`."""
    cursor = _Cursor(Path(path).read_bytes())
    record = PrzmRecord(npoints=cursor.scalar(_U64))
    if cursor.scalar(_U32):
        record.xpts = cursor.values("f", record.npoints)
        record.ypts = cursor.values("f", record.npoints)
        record.zpts = cursor.values("f", record.npoints)
    nelems3 = cursor.scalar(_U64)
    record.conns3 = cursor.values("Q", nelems3 * 6)
    nelems2 = cursor.scalar(_U64)
    record.conns2 = cursor.values("Q", nelems2 * 3)
    if cursor.scalar(_U32):
        record.data = cursor.values("f", record.npoints)
    return record