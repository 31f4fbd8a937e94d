# unstructbench

A small benchmark that builds a synthetic unstructured mesh and writes it out
once per time step, timing separately the building of the grid, the
computation of a field on it and the output.

The mesh is a volumetric shell shaped by a superquadric. The work is split
across a number of tasks; each task owns a tile of the shell, made of
triangular prisms (six point indices each) stacked in layers over a
triangulated base surface (three point indices per triangle).

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the benchmark

The package installs one command, `unstructbench`. One of the two size
options is required; if both are given, the later one wins:

```
unstructbench --points PTS [options]
unstructbench --pointspertask PTST [options]
```

- `--points PTS` – total number of points over all tasks; must divide evenly
  by the number of tasks.
- `--pointspertask PTST` – number of points for a single task.

Optional settings:

- `--nprocs NPROCS` – number of tasks to lay the grid out over, default `1`.
  More than one task requires an even number.
- `--roundness UR VR` – superquadric shape of the base grid. `0 0` is a cube,
  `1 1` a sphere, `2 2` an octahedron, larger values are increasingly concave.
  Default `0.3 0.3`.
- `--animroundness UR VR` – shape at the final time step; the shape is
  interpolated linearly over time from the starting roundness. By default the
  shape does not change. The grid is rebuilt every step only when the u
  roundness changes.
- `--tsteps NT` – number of time steps, default `50`.
- `--noisespacefreq FNS` – spatial frequency of the field, default `10.0`.
- `--noisetimefreq FNT` – temporal frequency of the field, default `0.25`.
- `--przm` – write PRZM output for each time step.

Option names are matched without regard to case. An unknown option, a missing
value or an impossible size (odd task count, points not divisible by the task
count, too few points per task for a volume grid) prints a message and the
usage text to standard error and exits with status 1.

The requested point count is only a target: each task holds
`nu * nv * nlyr` points, and the actual totals, the task split and the element
counts are printed before the time loop. For every step the minimum, mean,
maximum and standard deviation of the grid, compute and output timers over all
tasks are printed.

The field written at each point is a smooth deterministic function of the
scaled coordinates and time, with values in `[-1, 1]`.

## Output

### PRZM

With `--przm`, each step goes to `unstruct.przm/tNNNN.d/` in the current
directory (step number padded to four digits), one file per task named
`rN.dat`, where the rank is padded to the number of digits given by
`unstructbench.przm.rank_digits(nprocs)`. A file holds, in native byte order:

1. the number of points (unsigned 64-bit);
2. a grid flag (unsigned 32-bit), followed by the x, y and z coordinates as
   32-bit floats when it is 1;
3. the number of prisms (unsigned 64-bit), followed by six 64-bit point
   indices per prism;
4. the number of surface triangles (unsigned 64-bit), followed by three 64-bit
   point indices per triangle;
5. the number of variables (unsigned 32-bit), followed by one 32-bit float per
   point when it is 1.

`unstructbench.przm.write_przm` writes such a file and returns its path;
`unstructbench.przm.read_przm` reads one back into a `PrzmRecord` (with
`nelems3` and `nelems2` properties), raising `ValueError` on a truncated file.

### XDMF descriptions

`unstructbench.xdmf.write_xdmf_xml(h5_name, xdmf_path, npoints, nelems3)`
writes an XDMF 2.0 description of a wedge-topology mesh whose connectivity
(`/conns3`), coordinates (`/grid points/x`, `y`, `z`) and scalar field
(`/vars`) are referenced in the named HDF5 file; `xdmf_text` returns the same
document as a string.

## What it does not do

- All tasks run one after another in a single process; there is no parallel
  execution and no parallel file I/O.
- PRZM is the only data output. The package writes no HDF5 files itself: the
  XDMF helpers only describe a file produced elsewhere, and the command does
  not call them.

## Using it as a library

```python
from unstructbench.grid import (
    prime_split, plan_layout, surface_connections,
    volume_connections, grid_points,
)

prime_split(12)                      # (4, 3): two close factors, larger first
layout = plan_layout(0, 1000, 4)     # about 1000 points per task, 4 tasks
conns2 = surface_connections(layout, rank=0)
conns3 = volume_connections(layout, conns2)
xpts, ypts, zpts = grid_points(layout, 0, 0.3, 0.3)
```

`TaskLayout` exposes `nptstask`, `npoints`, `nelems2`, `nelems3`, `du`, `dv`,
`origin(rank)` and `check_rank(rank)`. `sgn`, `sqc` and `sqs` are the
superquadric helper functions.

Other helpers:

- `unstructbench.timer` – `Timer` with `tick()` / `tock()` (also usable as a
  context manager, leaving the result in `elapsed`), `collect_stats` to gather
  elapsed times into `TimerStats` (min, max, mean, population std), and
  `format_stats` for the one-line report.
- `unstructbench.pdirs` – `make_dir`, which tolerates an existing directory,
  and `wait_for_dir(dirname, retries=50, interval=0.2)`, which polls until a
  directory appears and raises `TimeoutError` otherwise.
- `unstructbench.args` – `parse_int_x` and `parse_float_x`, which read the
  leading number of a string with an optional trailing `x` and report whether
  the `x` was there.
- `unstructbench.cli` – `parse_args` returning `Options`, `usage()` and
  `main(argv=None)`.