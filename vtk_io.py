import os
import numpy as np


class VTKFormatError(ValueError):
    pass


def read_cloud_points_from_vtk(filename: str) -> np.ndarray:
    '''
    Read the POINTS section of a legacy VTK file.
    Returns an (n, 3) float array, in file order.
    '''
    with open(filename, 'r') as f:
        tokens = f.read().split()

    try:
        start = tokens.index("POINTS")
    except ValueError:
        raise VTKFormatError(f"'{filename}' has no POINTS section")

    # POINTS <count> <type>
    if start + 2 >= len(tokens):
        raise VTKFormatError(f"'{filename}' has a truncated POINTS header")
    try:
        num_points = int(tokens[start + 1])
    except ValueError:
        raise VTKFormatError(f"'{filename}' has an invalid point count '{tokens[start + 1]}'")
    if num_points < 0:
        raise VTKFormatError(f"'{filename}' has a negative point count")

    values = tokens[start + 3:start + 3 + 3 * num_points]
    if len(values) < 3 * num_points:
        raise VTKFormatError(f"'{filename}' declares {num_points} points but holds {len(values) // 3}")
    try:
        coords = np.array(values, dtype=float)
    except ValueError:
        raise VTKFormatError(f"'{filename}' has non-numeric point coordinates")
    return coords.reshape(num_points, 3)


def print_cloud_points(points):
    for i, p in enumerate(points):
        print(f"Point {i} = ({p[0]:g}, {p[1]:g}, {p[2]:g})")


def write_points_in_vtk(filename: str, points):
    points = np.asarray(points, dtype=float).reshape(-1, 3)
    num_points = len(points)

    directory = os.path.dirname(filename)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filename, 'w') as f:
        f.write("# vtk DataFile Version 4.1\n")
        f.write("vtk output\n")
        f.write("ASCII\n")
        f.write("DATASET POLYDATA\n")
        f.write(f"POINTS {num_points} float\n")
        for p in points:
            f.write(f"{p[0]:g} {p[1]:g} {p[2]:g}\n")
        f.write(f"VERTICES {num_points} {num_points * 2}\n")
        for i in range(num_points):
            f.write(f"1 {i}\n")
