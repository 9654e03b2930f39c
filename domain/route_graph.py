"""Weighted undirected graph of cities for route and proximity searches.

Adjacency is a mapping of city -> {neighbor: distance}. ``add_connection``
and ``remove_connection`` write both directions; ``remove_city`` also
strips the city from every other neighbor map.

Dijkstra runs over a heap ordered by (distance, city name) and only
relaxes on strict improvement, so among equal-cost routes the one whose
predecessor is settled first (smaller distance, then alphabetical) wins.
"""
import heapq
import logging
from numbers import Real
from typing import Dict, List, Mapping, Optional

from domain.exceptions import CityNotFoundError, InvalidArgumentError, NoPathError
from domain.value_objects import NearbyCity, Route

logger = logging.getLogger(__name__)


def _is_distance(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and value >= 0


class RouteGraph:
    """City network with shortest-path and radius search"""

    def __init__(self):
        self._adjacency: Dict[str, Dict[str, float]] = {}

    # ==================== CITIES ====================
    def add_city(self, name: str, neighbors: Optional[Mapping[str, float]] = None) -> None:
        """Insert a city, or replace the whole neighbor map of an existing one"""
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("City name must be a non-empty string")
        if neighbors is None:
            neighbors = {}
        if not isinstance(neighbors, Mapping):
            raise InvalidArgumentError("Neighbors must be a mapping of city to distance")
        for neighbor, distance in neighbors.items():
            if not _is_distance(distance):
                raise InvalidArgumentError(
                    f"Invalid distance for {neighbor}: must be a non-negative number"
                )
        self._adjacency[name] = dict(neighbors)

    def remove_city(self, name: str) -> bool:
        if name not in self._adjacency:
            return False
        del self._adjacency[name]
        for neighbors in self._adjacency.values():
            neighbors.pop(name, None)
        logger.debug("Removed city %s", name)
        return True

    def has_city(self, name: str) -> bool:
        return name in self._adjacency

    def cities(self) -> List[str]:
        return list(self._adjacency)

    def neighbors(self, name: str) -> Dict[str, float]:
        self._require_city(name)
        return dict(self._adjacency[name])

    # ==================== CONNECTIONS ====================
    def add_connection(self, city1: str, city2: str, distance: float) -> None:
        """Connect two existing cities in both directions"""
        self._require_city(city1)
        self._require_city(city2)
        if not _is_distance(distance):
            raise InvalidArgumentError("Distance must be a non-negative number")
        self._adjacency[city1][city2] = distance
        self._adjacency[city2][city1] = distance

    def remove_connection(self, city1: str, city2: str) -> bool:
        if city1 not in self._adjacency or city2 not in self._adjacency:
            return False
        removed1 = self._adjacency[city1].pop(city2, None) is not None
        removed2 = self._adjacency[city2].pop(city1, None) is not None
        return removed1 or removed2

    def distance(self, from_city: str, to_city: str) -> Optional[float]:
        """Length of the direct edge, or None when the cities are not adjacent"""
        self._require_city(from_city)
        self._require_city(to_city)
        return self._adjacency[from_city].get(to_city)

    # ==================== SEARCH ====================
    def nearby_cities(self, start: str, max_distance: float) -> List[NearbyCity]:
        """Every other city whose shortest distance from start is within max_distance"""
        self._require_city(start)
        if not _is_distance(max_distance):
            raise InvalidArgumentError("Maximum distance must be a non-negative number")

        distances = self._dijkstra(start, limit=max_distance)[0]
        found = [
            NearbyCity(city=city, distance=distance)
            for city, distance in distances.items()
            if city != start
        ]
        return sorted(found, key=lambda n: (n.distance, n.city))

    def shortest_path(self, start: str, end: str) -> Route:
        if start not in self._adjacency:
            raise CityNotFoundError(f"Starting city '{start}' does not exist in the graph")
        if end not in self._adjacency:
            raise CityNotFoundError(f"Destination city '{end}' does not exist in the graph")
        if start == end:
            return Route(path=[start], distance=0)

        distances, previous = self._dijkstra(start, target=end)
        if end not in distances:
            raise NoPathError(f"No path exists between '{start}' and '{end}'")

        path = [end]
        while path[-1] != start:
            path.append(previous[path[-1]])
        path.reverse()
        return Route(path=path, distance=distances[end])

    def _dijkstra(self, start: str, target: Optional[str] = None, limit: Optional[float] = None):
        """Settled distances and predecessors from start.

        Stops early once target is settled; never settles a city farther
        than limit.
        """
        tentative = {start: 0}
        previous: Dict[str, str] = {}
        settled: Dict[str, float] = {}
        heap = [(0, start)]

        while heap:
            distance, city = heapq.heappop(heap)
            if city in settled:
                continue
            settled[city] = distance
            if city == target:
                break
            for neighbor, weight in self._adjacency[city].items():
                # neighbors named in add_city but never added themselves are skipped
                if neighbor in settled or neighbor not in self._adjacency:
                    continue
                candidate = distance + weight
                if limit is not None and candidate > limit:
                    continue
                if neighbor not in tentative or candidate < tentative[neighbor]:
                    tentative[neighbor] = candidate
                    previous[neighbor] = city
                    heapq.heappush(heap, (candidate, neighbor))

        return settled, previous

    # ==================== GRAPH ====================
    def size(self) -> int:
        return len(self._adjacency)

    def is_empty(self) -> bool:
        return not self._adjacency

    def clear(self) -> None:
        self._adjacency.clear()

    def _require_city(self, name: str) -> None:
        if name not in self._adjacency:
            raise CityNotFoundError(f"City '{name}' does not exist in the graph")

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, name) -> bool:
        return self.has_city(name)

    def __str__(self) -> str:
        if self.is_empty():
            return "RouteGraph { empty }"
        lines = ["RouteGraph {"]
        for city, neighbors in self._adjacency.items():
            edges = ", ".join(f"{n} ({d}km)" for n, d in neighbors.items())
            lines.append(f"  {city}: [{edges}]")
        lines.append("}")
        return "\n".join(lines)
