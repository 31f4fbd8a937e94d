"""XDMF descriptions of a prism mesh stored in an HDF5 file."""

from __future__ import annotations

import os
from pathlib import Path


def _check_count(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} must not be negative")
    return int(value)


def xdmf_text(h5_name: str, npoints: int, nelems3: int) -> str:
    """Return the XDMF document describing one time step's mesh and variable.

    ``h5_name`` is the HDF5 file path as seen from the XDMF file,
    ``npoints`` the global number of points and ``nelems3`` the global
    number of prism (wedge) elements.
    """
    npoints = _check_count("npoints", npoints)
    nelems3 = _check_count("nelems3", nelems3)
    lines = [
        '<?xml version="1.0" ?>',
        '<!DOCTYPE Xdmf SYSTEM "Xdmf.dtd" []>',
        '<Xdmf Version="2.0">',
        "<Domain>",
        '<Grid Name="Unstructured Mesh">',
        f'<Topology TopologyType="Wedge" NumberOfElements="{nelems3}">',
        f'<DataItem Dimensions="{nelems3 * 6}" Format="HDF">',
        f"{h5_name}:/conns3",
        "</DataItem>",
        "</Topology>",
        '<Geometry GeometryType="X_Y_Z">',
    ]
    for axis in "xyz":
        lines += [
            f'<DataItem Name="{axis.upper()}" Dimensions="{npoints}" Format="HDF">',
            f"{h5_name}:/grid points/{axis}",
            "</DataItem>",
        ]
    lines += [
        "</Geometry>",
        '<Attribute Name="Scalar" AttributeType="Scalar" Center="Node">',
        f'<DataItem Dimensions="{npoints}" NumberType="Float" Precision="4" Format="HDF">',
        f"{h5_name}:/vars",
        "</DataItem>",
        "</Attribute>",
        "</Grid>",
        "</Domain>",
        "</Xdmf>",
    ]
    return "\n".join(lines) + "\n"


def write_xdmf_xml(
    h5_name: str, xdmf_path: str | os.PathLike, npoints: int, nelems3: int
) -> Path:
    """Write the XDMF document for a time step to ``xdmf_path``; returns the path."""
    path = Path(xdmf_path)
    path.write_text(xdmf_text(h5_name, npoints, nelems3), encoding="utf-8")
    return path