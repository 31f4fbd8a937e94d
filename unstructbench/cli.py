"""Command-line driver: build the mesh, fill it with noise, time and write each step."""

from __future__ import annotations

import math
import struct
import sys
from dataclasses import dataclass
from typing import Iterator, Sequence, TextIO

from .args import parse_float_x, parse_int_x
from .grid import TaskLayout, grid_points, plan_layout, surface_connections, volume_connections
from .przm import write_przm
from .timer import Timer, collect_stats, format_stats

_FLOAT32 = struct.Struct("=f")
_OUTPUT_NAME = "unstruct"


class UsageError(ValueError):
    """Raised for a command line that cannot be understood."""


def _f32(value: float) -> float:
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


@dataclass
class Options:
    """Settings taken from the command line."""

    npoints: int = 0
    nptstask: int = 0
    uround0: float = 0.3
    vround0: float = 0.3
    uround1: float = -1.0
    vround1: float = -1.0
    tsteps: int = 50
    noisespacefreq: float = 10.0
    noisetimefreq: float = 0.25
    nprocs: int = 1
    przm: bool = False


def usage() -> str:
    """Return the usage text."""
    return (
        "Usage: unstruct --points PTS [options]\n"
        "     OR\n"
        "       unstruct --pointspertask PTST [options]\n\n"
        "  Required (one or the other, but not both):\n"
        "    --points PTS : Specifies total number of points for all tasks\n"
        "    --pointspertask PTST : Specified number of points per single task\n\n"
        "  Optional:\n"
        "    --nprocs NPROCS : Number of tasks to lay the grid out over\n"
        "       Default: 1\n"
        "    --roundness UR VR : Shape of superquadric for base grid\n"
        "       0 0 is a cube, 1 1 is a sphere, 2 2 is an octahedron, >2 >2 is increasingly concave\n"
        "       Defaults: 0.3 0.3\n"
        "    --animroundness UR VR : Shape of superquadric at final time step\n"
        "       If specified, linearly interpolates over time from starting roundness\n"
        "       Defaults: no change from initial roundness\n"
        "    --tsteps NT : Total number of time steps\n"
        "       Default: 50\n"
        "    --noisespacefreq FNS : Spatial frequency of noise function\n"
        "      FNS : space frequency value; Default: 10.0\n"
        "    --noisetimefreq FNT : Temporal frequency of noise function\n"
        "      FNT : time frequency value;  Default: 0.25\n"
        "   --przm : Enable PRZM output.\n"
    )


def _value(args: Iterator[str], option: str) -> str:
    value = next(args, None)
    if value is None:
        raise UsageError(f"Missing value for option: {option}")
    return value


def _int(args: Iterator[str], option: str) -> int:
    return parse_int_x(_value(args, option))[0]


def _float(args: Iterator[str], option: str) -> float:
    return _f32(parse_float_x(_value(args, option))[0])


def _double(args: Iterator[str], option: str) -> float:
    return parse_float_x(_value(args, option))[0]


def parse_args(argv: Sequence[str]) -> Options:
    """Parse command-line arguments (option names are case-insensitive)."""
    opts = Options(uround0=_f32(0.3), vround0=_f32(0.3))
    args = iter(argv)
    for arg in args:
        key = arg.lower()
        if key == "--points":
            opts.npoints = _int(args, arg)
            opts.nptstask = 0
        elif key == "--pointspertask":
            opts.nptstask = _int(args, arg)
            opts.npoints = 0
        elif key == "--roundness":
            opts.uround0 = _float(args, arg)
            opts.vround0 = _float(args, arg)
        elif key == "--animroundness":
            opts.uround1 = _float(args, arg)
            opts.vround1 = _float(args, arg)
        elif key == "--tsteps":
            opts.tsteps = _int(args, arg)
        elif key == "--noisespacefreq":
            opts.noisespacefreq = _double(args, arg)
        elif key == "--noisetimefreq":
            opts.noisetimefreq = _double(args, arg)
        elif key == "--nprocs":
            opts.nprocs = _int(args, arg)
        elif key == "--przm":
            opts.przm = True
        else:
            raise UsageError(f"Option not recognized: {arg}")
    if opts.uround1 == -1.0:
        opts.uround1 = opts.uround0
    if opts.vround1 == -1.0:
        opts.vround1 = opts.vround0
    return opts


def _smooth_noise(x: float, y: float, z: float, w: float) -> float:
    """Smooth deterministic field in [-1, 1] over space and time."""
    return (
        math.sin(x + 0.7 * w) * math.cos(y - 1.3 * w) * 0.5
        + math.sin(z + 0.5 * y + w) * 0.5
    )


def _data_size(layout: TaskLayout) -> int:
    return (
        layout.nptstask * 4 * 3
        + layout.nelems2 * 3 * 8
        + layout.nelems3 * 6 * 8
        + layout.nptstask * 4
    )


def _run(opts: Options, out: TextIO) -> None:
    layout = plan_layout(opts.npoints, opts.nptstask, opts.nprocs)
    ranks = range(layout.nprocs)
    print(
        f"Actual points: {layout.npoints} , points per task: {layout.nptstask}\n"
        f"uprocs: {layout.uprocs} , vprocs: {layout.vprocs}\n"
        f"nu: {layout.nu} , nv: {layout.nv} , nlyr: {layout.nlyr}",
        file=out,
    )
    conns2 = {rank: surface_connections(layout, rank) for rank in ranks}
    conns3 = {rank: volume_connections(layout, conns2[rank]) for rank in ranks}
    datasize = _data_size(layout)
    print(
        f"nelems2: {layout.nelems2} , nelems3: {layout.nelems3}\n"
        f"data size per task = {datasize} , all tasks = {datasize * layout.nprocs}",
        file=out,
    )

    nt = opts.tsteps
    grids: dict[int, tuple[list[float], list[float], list[float]]] = {}
    sfreq, tfreq = opts.noisespacefreq, opts.noisetimefreq
    for t in range(nt):
        tpar = _f32(t / (nt - 1)) if nt > 1 else 0.0
        print(f"t = {t}", file=out, flush=True)
        uround = _f32((1 - tpar) * opts.uround0 + tpar * opts.uround1)
        vround = _f32((1 - tpar) * opts.vround0 + tpar * opts.vround1)
        regenerate = opts.uround0 != opts.uround1 or t == 0
        if opts.przm:
            print("   Writing przm...", file=out, flush=True)

        grid_times: list[float] = []
        compute_times: list[float] = []
        output_times: list[float] = []
        for rank in ranks:
            with Timer() as grid_timer:
                if regenerate:
                    grids[rank] = grid_points(layout, rank, uround, vround)
            grid_times.append(grid_timer.elapsed)

            xpts, ypts, zpts = grids[rank]
            with Timer() as compute_timer:
                data = [
                    _f32(_smooth_noise(x * sfreq, y * sfreq, z * sfreq, t * tfreq))
                    for x, y, z in zip(xpts, ypts, zpts)
                ]
            compute_times.append(compute_timer.elapsed)

            with Timer() as output_timer:
                if opts.przm:
                    write_przm(
                        _OUTPUT_NAME, t, rank, layout.nprocs,
                        xpts, ypts, zpts, conns3[rank], conns2[rank], data,
                    )
            output_times.append(output_timer.elapsed)

        print(format_stats("   Grid", collect_stats(grid_times)), file=out)
        print(format_stats("   Compute", collect_stats(compute_times)), file=out)
        print(format_stats("   Output", collect_stats(output_times)), file=out)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the benchmark; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        opts = parse_args(argv)
    except UsageError as exc:
        print(f"{exc}\n", file=sys.stderr)
        print(usage(), file=sys.stderr, end="")
        return 1
    try:
        _run(opts, sys.stdout)
    except ValueError as exc:
        print(f"Error: {exc}\n", file=sys.stderr)
        print(usage(), file=sys.stderr, end="")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())