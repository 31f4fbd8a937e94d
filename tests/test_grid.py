import math

import pytest

from unstructbench.grid import (
    TaskLayout,
    grid_points,
    plan_layout,
    prime_split,
    sgn,
    sqc,
    sqs,
    surface_connections,
    volume_connections,
)


@pytest.mark.parametrize("n", [2, 4, 6, 8, 12, 18, 30, 36, 100, 128, 210])
def test_prime_split_factors_multiply_back(n):
    n1, n2 = prime_split(n)
    assert n1 * n2 == n
    assert n1 >= n2 >= 1


@pytest.mark.parametrize("n", [16, 64])
def test_prime_split_even_power_of_two_is_square(n):
    n1, n2 = prime_split(n)
    assert n1 == n2
    assert n1 * n1 == n


@pytest.mark.parametrize("p", [2, 3, 7, 13, 97])
def test_prime_split_prime(p):
    assert prime_split(p) == (p, 1)


@pytest.mark.parametrize("n", [0, -1, -12])
def test_prime_split_trivial_nonpositive(n):
    assert prime_split(n) == (0, 0)


def test_prime_split_one():
    assert prime_split(1) == (1, 1)


def test_sgn_honours_signed_zero():
    assert sgn(0.0) == 1.0
    assert sgn(-0.0) == -1.0
    assert sgn(-2.5) == -1.0
    assert sgn(7) == 1.0


@pytest.mark.parametrize("w", [-3.0, -1.2, -0.4, 0.3, 1.0, 2.2, 3.1])
def test_superquadric_with_unit_exponent_matches_trig(w):
    assert sqc(w, 1.0) == pytest.approx(math.cos(w), abs=1e-6)
    assert sqs(w, 1.0) == pytest.approx(math.sin(w), abs=1e-6)


@pytest.mark.parametrize("w", [-2.0, -0.5, 0.5, 2.0])
def test_superquadric_with_zero_exponent_is_sign(w):
    assert sqc(w, 0.0) == sgn(math.cos(w))
    assert sqs(w, 0.0) == sgn(math.sin(w))


def test_superquadric_at_zero_angle():
    assert sqc(0.0, 0.3) == 1.0
    assert sqs(0.0, 0.3) == 0.0


def test_plan_layout_rejects_odd_nprocs():
    with pytest.raises(ValueError):
        plan_layout(0, 1000, 3)


def test_plan_layout_requires_point_count():
    with pytest.raises(ValueError):
        plan_layout(0, 0, 2)


def test_plan_layout_requires_divisible_points():
    with pytest.raises(ValueError):
        plan_layout(1001, 0, 2)


def test_plan_layout_rejects_too_small_grid():
    with pytest.raises(ValueError):
        plan_layout(0, 10, 1)


@pytest.mark.parametrize(
    "npoints, nptstask, nprocs",
    [(0, 1000, 1), (0, 5000, 2), (40000, 0, 4), (0, 20000, 6), (120000, 0, 12)],
)
def test_plan_layout_invariants(npoints, nptstask, nprocs):
    layout = plan_layout(npoints, nptstask, nprocs)
    requested = npoints // nprocs if npoints else nptstask
    target = requested * layout.uprocs * 2 // layout.vprocs
    assert (layout.uprocs, layout.vprocs) == prime_split(nprocs)
    assert layout.nu ** 3 >= target > (layout.nu - 1) ** 3
    assert layout.nv == layout.nu * layout.vprocs // layout.uprocs
    assert layout.nlyr == layout.nu // 2
    assert layout.nptstask == layout.nu * layout.nv * layout.nlyr
    assert layout.npoints == layout.nptstask * nprocs


def test_layout_element_counts():
    layout = plan_layout(0, 5000, 2)
    assert layout.nelems2 == (layout.nu - 1) * (layout.nv - 1) * 2
    assert layout.nelems3 == layout.nelems2 * (layout.nlyr - 1)


def test_origin_rejects_bad_rank():
    layout = plan_layout(0, 1000, 2)
    with pytest.raises(ValueError):
        layout.origin(2)
    with pytest.raises(ValueError):
        surface_connections(layout, -1)


def test_surface_connections_shape_and_range():
    layout = plan_layout(0, 3000, 2)
    rank = 1
    conns2 = surface_connections(layout, rank)
    assert len(conns2) == layout.nelems2 * 3
    base = rank * layout.nptstask
    assert min(conns2) == base
    assert max(conns2) < base + layout.nu * layout.nv
    nv = layout.nv
    assert conns2[:6] == [base, base + nv + 1, base + nv, base, base + 1, base + nv + 1]


def test_volume_connections_extrude_layers():
    layout = plan_layout(0, 3000, 2)
    rank = 1
    conns2 = surface_connections(layout, rank)
    conns3 = volume_connections(layout, conns2)
    assert len(conns3) == layout.nelems3 * 6
    layer = layout.nu * layout.nv
    assert conns3[:3] == conns2[:3]
    assert conns3[3:6] == [c + layer for c in conns2[:3]]
    assert min(conns3) == rank * layout.nptstask
    assert max(conns3) < (rank + 1) * layout.nptstask


def test_volume_connections_rejects_partial_triangle():
    layout = plan_layout(0, 1000, 1)
    with pytest.raises(ValueError):
        volume_connections(layout, [0, 1])


def test_grid_points_sphere_layers_span_radius_one_to_three():
    layout = plan_layout(0, 2000, 1)
    xs, ys, zs = grid_points(layout, 0, 1.0, 1.0)
    assert len(xs) == len(ys) == len(zs) == layout.nptstask
    layer = layout.nu * layout.nv
    radii = [math.sqrt(x * x + y * y + z * z) for x, y, z in zip(xs, ys, zs)]
    assert all(r == pytest.approx(1.0, abs=1e-5) for r in radii[:layer])
    assert all(r == pytest.approx(3.0, abs=1e-5) for r in radii[-layer:])
    assert all(1.0 - 1e-5 <= r <= 3.0 + 1e-5 for r in radii)


def test_grid_points_rank_tiles_split_u_range():
    layout = plan_layout(0, 2000, 2)
    assert (layout.uprocs, layout.vprocs) == (2, 1)
    _, ys0, _ = grid_points(layout, 0, 1.0, 1.0)
    _, ys1, _ = grid_points(layout, 1, 1.0, 1.0)
    assert max(ys0) <= 1e-5
    assert min(ys1) >= -1e-5


def test_grid_points_deterministic():
    layout = TaskLayout(nprocs=1, uprocs=1, vprocs=1, nu=6, nv=6, nlyr=3)
    first = grid_points(layout, 0, 0.3, 0.3)
    second = grid_points(layout, 0, 0.3, 0.3)
    assert first == second
    assert len(first[0]) == layout.nptstask