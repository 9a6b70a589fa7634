from typing import Generic, Iterable, List, Optional, Sequence, Tuple, TypeVar, Union
import heapq
import numpy as np

from result_set import ResultSet

T = TypeVar('T')


class InvalidDimension(ValueError):
    pass


class AllocationFailure(MemoryError):
    pass


class Point(Generic[T]):
    '''Immutable coordinate vector with an optional payload'''
    def __init__(self, coordinates: Iterable[float], payload: Optional[T] = None):
        coordinates = np.array(coordinates, dtype=float).reshape(-1)
        coordinates.flags.writeable = False
        self.coordinates = coordinates
        self.payload = payload

    def __len__(self):
        return len(self.coordinates)

    def __getitem__(self, axis):
        return self.coordinates[axis]

    def __repr__(self):
        coords = ", ".join(f"{c:g}" for c in self.coordinates)
        if self.payload is None:
            return f"Point({coords})"
        return f"Point({coords}; {self.payload!r})"


def squared_distance(a: np.ndarray, b: np.ndarray) -> float:
    diff = a - b
    return float(np.dot(diff, diff))


class KDTreeNode(Generic[T]):
    def __init__(self, point: Point[T], axis: int, left: Optional['KDTreeNode[T]'] = None, right: Optional['KDTreeNode[T]'] = None):
        self.point = point
        self.axis = axis
        self.left = left
        self.right = right


class KDTree(Generic[T]):
    def __init__(self, dimensions: int, node_class = KDTreeNode):
        if dimensions <= 0:
            raise InvalidDimension(f"dimensions must be positive, got {dimensions}")
        self.root = None
        self.dimensions = dimensions
        self.node_class = node_class
        self.size = 0

    def __len__(self):
        return self.size

    def clear(self):
        self.root = None
        self.size = 0

    def _as_point(self, point: Union[Point[T], Sequence[float]], payload: Optional[T] = None) -> Point[T]:
        if not isinstance(point, Point):
            point = Point(point, payload)
        if len(point) != self.dimensions:
            raise InvalidDimension(f"expected {self.dimensions} coordinates, got {len(point)}")
        return point

    def insert(self, point: Union[Point[T], Sequence[float]], payload: Optional[T] = None) -> KDTreeNode[T]:
        point = self._as_point(point, payload)

        # Walk down to the empty slot first so a failed allocation leaves the tree untouched
        parent = None
        node = self.root
        depth = 0
        while node is not None:
            parent = node
            if point[node.axis] < node.point[node.axis]:
                node = node.left
            else:
                node = node.right
            depth += 1

        try:
            new_node = self.node_class(point, depth % self.dimensions)
        except MemoryError as e:
            raise AllocationFailure("could not allocate a tree node") from e

        if parent is None:
            self.root = new_node
        elif point[parent.axis] < parent.point[parent.axis]:
            parent.left = new_node
        else:
            parent.right = new_node
        self.size += 1
        return new_node

    def _search(self, target: np.ndarray, visit, descend_far):
        '''
        Nearest-side-first traversal. visit(node, dist_sq) sees every node that is reached,
        descend_far(plane_dist_sq) is asked just before a far subtree is entered.
        '''
        # Far subtrees are pushed beneath their near sibling, so they are only
        # checked once the near side has been fully explored
        stack: List[Tuple[KDTreeNode[T], Optional[float]]] = [(self.root, None)]
        while stack:
            node, plane_dist_sq = stack.pop()
            if node is None:
                continue
            if plane_dist_sq is not None and not descend_far(plane_dist_sq):
                continue

            visit(node, squared_distance(target, node.point.coordinates))

            axis = node.axis
            diff = target[axis] - node.point[axis]
            if diff < 0:
                next_branch, opposite_branch = node.left, node.right
            else:
                next_branch, opposite_branch = node.right, node.left
            stack.append((opposite_branch, diff * diff))
            stack.append((next_branch, None))

    def nearest_n(self, target: Union[Point, Sequence[float]], k: int) -> ResultSet[T]:
        target = self._as_point(target).coordinates
        if k <= 0 or self.root is None:
            return ResultSet([])

        # Max-heap on (distance, discovery order); the root is the entry evicted next
        best: List[Tuple[float, int, Point[T]]] = []
        counter = [0]

        def visit(node, dist_sq):
            order = counter[0]
            counter[0] += 1
            if len(best) < k:
                heapq.heappush(best, (-dist_sq, -order, node.point))
            elif dist_sq < -best[0][0]:
                heapq.heapreplace(best, (-dist_sq, -order, node.point))

        def descend_far(plane_dist_sq):
            return len(best) < k or plane_dist_sq < -best[0][0]

        self._search(target, visit, descend_far)
        best.sort(key=lambda item: (-item[0], -item[1]))
        return ResultSet([(point, -neg_dist_sq) for neg_dist_sq, _, point in best])

    def nearest_range(self, target: Union[Point, Sequence[float]], radius: float) -> ResultSet[T]:
        target = self._as_point(target).coordinates
        if radius < 0 or self.root is None:
            return ResultSet([])

        radius_sq = radius * radius
        found: List[Tuple[Point[T], float]] = []

        def visit(node, dist_sq):
            if dist_sq <= radius_sq:
                found.append((node.point, dist_sq))

        def descend_far(plane_dist_sq):
            return plane_dist_sq <= radius_sq

        self._search(target, visit, descend_far)
        # sort is stable, equal distances keep their discovery order
        found.sort(key=lambda item: item[1])
        return ResultSet(found)

    def nearest_neighbor(self, target: Union[Point, Sequence[float]]) -> Optional[Point[T]]:
        results = self.nearest_n(target, 1)
        if results.is_exhausted():
            return None
        return results.current()[0]
