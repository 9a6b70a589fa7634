# Query parameters used by nearest_points.py when no override is given on the command line

DIMENSIONS = 3

QUERY_TARGET = (19234.4, 19886, 15900.9)
QUERY_RADIUS = 50000.0
QUERY_K = 40

# "nearest_n" or "nearest_range"
QUERY_MODE = "nearest_n"

OUTPUT_PATH = "outputs/nearest_points.vtk"
