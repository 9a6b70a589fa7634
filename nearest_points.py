#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Reads a cloud of points from a surface given in legacy VTK format, builds a kd-tree over it
and writes the points nearest to a fixed target back out as VTK.
"""

import argparse
import sys
import numpy as np

import config
from function_profiler import FunctionProfiler
from kd_tree import KDTree
from vtk_io import VTKFormatError, print_cloud_points, read_cloud_points_from_vtk, write_points_in_vtk


def build_tree(points, profiler=None):
    tree = KDTree(config.DIMENSIONS)
    insert = tree.insert
    if profiler is not None:
        insert = profiler.profile("insert")(insert)
    # payload is the point's index in the input file
    for i, point in enumerate(points):
        insert(point, i)
    return tree


def query(tree, target, mode=config.QUERY_MODE, k=config.QUERY_K, radius=config.QUERY_RADIUS):
    if mode == "nearest_range":
        return tree.nearest_range(target, radius)
    return tree.nearest_n(target, k)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='Find the points of a VTK cloud nearest to a target')
    parser.add_argument('input_file', type=str, help='Input filename with the surface cloud of points in legacy VTK format')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--k', type=int, default=None, help=f'Number of nearest points to find (default {config.QUERY_K})')
    group.add_argument('--radius', type=float, default=None, help='Find every point within this distance instead')
    parser.add_argument('--target', type=float, nargs=3, default=list(config.QUERY_TARGET), help='Query target x y z')
    parser.add_argument('--output', type=str, default=config.OUTPUT_PATH, help='Output VTK filename')
    parser.add_argument('--print-cloud', action='store_true', help='Print every input point')
    parser.add_argument('--profile', action='store_true', help='Print build and query timings')
    parser.add_argument('--plot-timings', action='store_true', help='Plot the distribution of insert timings')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    profiler = FunctionProfiler() if (args.profile or args.plot_timings) else None

    try:
        points = read_cloud_points_from_vtk(args.input_file)
    except OSError as e:
        print(f"[-] ERROR! Cannot read file '{args.input_file}'! ({e.strerror})", file=sys.stderr)
        return 1
    except UnicodeDecodeError:
        print(f"[-] ERROR! Cannot read file '{args.input_file}'! (not a text file)", file=sys.stderr)
        return 1
    except VTKFormatError as e:
        print(f"[-] ERROR! {e}", file=sys.stderr)
        return 1

    if args.print_cloud:
        print_cloud_points(points)

    tree = build_tree(points, profiler)

    mode = config.QUERY_MODE
    if args.radius is not None:
        mode = "nearest_range"
    elif args.k is not None:
        mode = "nearest_n"
    k = args.k if args.k is not None else config.QUERY_K
    radius = args.radius if args.radius is not None else config.QUERY_RADIUS
    target = np.array(args.target, dtype=float)

    run_query = query
    if profiler is not None:
        run_query = profiler.profile(mode)(query)
    results = run_query(tree, target, mode, k, radius)

    print(f"found {len(results)} results:")
    nearest_points = []
    while not results.is_exhausted():
        point, _ = results.current()
        pos = point.coordinates
        print(f"node at ({pos[0]:.3f}, {pos[1]:.3f}, {pos[2]:.3f}) is {results.current_distance():.3f} away")
        nearest_points.append(pos)
        results.advance()

    write_points_in_vtk(args.output, nearest_points)

    if args.profile:
        profiler.summary()
    if args.plot_timings:
        profiler.plot("insert")
    return 0


if __name__ == "__main__":
    sys.exit(main())
