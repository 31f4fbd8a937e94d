"""Generation of a layered superquadric prism mesh split across tasks."""

from __future__ import annotations

import math
import struct
from dataclasses import dataclass

_FLOAT32 = struct.Struct("=f")


def _f32(value: float) -> float:
    """Round a Python float to single precision."""
    try:
        return _FLOAT32.unpack(_FLOAT32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _prime_factors(n: int) -> list[int]:
    limit = math.isqrt(n)
    factors = []
    while n % 2 == 0:
        factors.append(2)
        n //= 2
    for p in range(3, limit + 1, 2):
        while n % p == 0:
            factors.append(p)
            n //= p
    if n > 1:
        factors.append(n)
    return factors


def prime_split(n: int) -> tuple[int, int]:
    """Split ``n`` into two factors ``(n1, n2)`` with ``n1 >= n2``.

    The ordered prime factors (led by 1) are bisected at the first point
    where the left product reaches the right one; the bisection just before
    it wins when its factors lie closer together.  Returns ``(0, 0)`` for
    ``n < 1``.
    """
    if n < 1:
        return 0, 0
    factors = [1, *_prime_factors(n)]
    n1 = n2 = 1
    p1, p2 = 1, n
    for i in range(1, len(factors)):
        n1 = math.prod(factors[:i])
        n2 = math.prod(factors[i:])
        if n1 >= n2:
            break
        p1, p2 = n1, n2
    if n1 - n2 > p2 - p1:
        n1, n2 = p1, p2
    assert n1 * n2 == n
    return (n1, n2) if n1 >= n2 else (n2, n1)


def sgn(x: float) -> float:
    """Sign of ``x`` as +1.0 or -1.0, honouring the sign of zero."""
    return math.copysign(1.0, x)


def _signed_pow(base: float, m: float) -> float:
    magnitude = abs(base)
    if magnitude == 0.0 and m < 0:
        power = math.inf
    else:
        power = magnitude ** m
    return _f32(sgn(base) * power)


def sqc(w: float, m: float) -> float:
    """Superquadric ellipsoidal "c" function, rounded to single precision."""
    return _signed_pow(math.cos(w), m)


def sqs(w: float, m: float) -> float:
    """Superquadric ellipsoidal "s" function, rounded to single precision."""
    return _signed_pow(math.sin(w), m)


def _ceil_cbrt(n: int) -> int:
    """Smallest non-negative integer whose cube is at least ``n``."""
    if n <= 0:
        return 0
    root = int(round(n ** (1.0 / 3.0)))
    while root ** 3 < n:
        root += 1
    while root > 0 and (root - 1) ** 3 >= n:
        root -= 1
    return root


@dataclass(frozen=True)
class TaskLayout:
    """How the spherical volume is tiled over tasks and sampled within a task."""

    nprocs: int
    uprocs: int
    vprocs: int
    nu: int
    nv: int
    nlyr: int

    @property
    def nptstask(self) -> int:
        return self.nu * self.nv * self.nlyr

    @property
    def npoints(self) -> int:
        return self.nptstask * self.nprocs

    @property
    def nelems2(self) -> int:
        return (self.nu - 1) * (self.nv - 1) * 2

    @property
    def nelems3(self) -> int:
        return self.nelems2 * (self.nlyr - 1)

    @property
    def du(self) -> float:
        return _f32(2 * math.pi / self.uprocs / (self.nu - 1))

    @property
    def dv(self) -> float:
        return _f32(math.pi / self.vprocs / (self.nv - 1))

    def check_rank(self, rank: int) -> None:
        """Raise ValueError unless ``rank`` is a task of this layout."""
        if not 0 <= rank < self.nprocs:
            raise ValueError(f"rank {rank} outside 0..{self.nprocs - 1}")

    def origin(self, rank: int) -> tuple[float, float]:
        """Starting ``(u, v)`` angles of the tile owned by ``rank``."""
        self.check_rank(rank)
        urank = rank % self.uprocs
        vrank = rank // self.uprocs
        u0 = _f32(urank * 2 * math.pi / self.uprocs - math.pi)
        v0 = _f32(vrank * math.pi / self.vprocs - math.pi / 2)
        return u0, v0


def plan_layout(npoints: int, nptstask: int, nprocs: int) -> TaskLayout:
    """Choose a tiling that comes close to the requested number of points.

    Give either the total ``npoints`` or ``nptstask`` per task (the other 0).
    The actual counts are those of the returned layout.
    """
    if nprocs < 1:
        raise ValueError("NPROCS must be at least 1")
    if nprocs % 2 > 0 and nprocs > 1:
        raise ValueError("NPROCS is not even; that is required for load balancing")
    if npoints == 0 and nptstask == 0:
        raise ValueError("neither points or pointspertask specified")
    if npoints % nprocs > 0:
        raise ValueError("points must be evenly divisible by NPROCS for best load balancing")
    uprocs, vprocs = prime_split(nprocs)
    if npoints:
        nptstask = npoints // nprocs
    nu = _ceil_cbrt(nptstask * uprocs * 2 // vprocs)
    nv = nu * vprocs // uprocs
    nlyr = nu // 2
    if nlyr < 2 or nv < 2:
        raise ValueError("too few points per task to build a volume grid")
    return TaskLayout(nprocs=nprocs, uprocs=uprocs, vprocs=vprocs, nu=nu, nv=nv, nlyr=nlyr)


def surface_connections(layout: TaskLayout, rank: int) -> list[int]:
    """Triangle connectivity of the base surface of ``rank``, as global point indices."""
    layout.check_rank(rank)
    nv = layout.nv
    base = rank * layout.nptstask
    conns: list[int] = []
    for i in range(layout.nu - 1):
        for j in range(nv - 1):
            ndx = base + i * nv + j
            conns += [ndx, ndx + nv + 1, ndx + nv, ndx, ndx + 1, ndx + nv + 1]
    return conns


def volume_connections(layout: TaskLayout, conns2: list[int]) -> list[int]:
    """Prism connectivity made by extruding the surface triangles through the layers."""
    if len(conns2) % 3:
        raise ValueError("triangle connections must come in groups of 3")
    layer = layout.nu * layout.nv
    conns: list[int] = []
    for k in range(layout.nlyr - 1):
        lower, upper = layer * k, layer * (k + 1)
        for e in range(0, len(conns2), 3):
            tri = conns2[e:e + 3]
            conns += [c + lower for c in tri]
            conns += [c + upper for c in tri]
    return conns


def grid_points(
    layout: TaskLayout, rank: int, uround: float, vround: float
) -> tuple[list[float], list[float], list[float]]:
    """Coordinates of the points of ``rank``, layer by layer, then along u, then v."""
    u0, v0 = layout.origin(rank)
    du, dv = layout.du, layout.dv
    xpts: list[float] = []
    ypts: list[float] = []
    zpts: list[float] = []
    for k in range(layout.nlyr):
        w = _f32(1.0 + _f32((k / (layout.nlyr - 1)) ** 2) * 2.0)
        for i in range(layout.nu):
            u = _f32(u0 + du * i)
            cu, su = sqc(u, uround), sqs(u, uround)
            for j in range(layout.nv):
                v = _f32(v0 + dv * j)
                cv, sv = sqc(v, vround), sqs(v, vround)
                xpts.append(_f32(w * cv * cu))
                ypts.append(_f32(w * cv * su))
                zpts.append(_f32(w * sv))
    return xpts, ypts, zpts