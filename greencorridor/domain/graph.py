import networkx as nx
from typing import Dict, List, Optional, Tuple
from greencorridor.domain.models import Coordinates, Edge, Node
from greencorridor.domain import config

class RoadNetwork:
    """Directed road graph with id-indexed edges.

    Intersections are graph nodes carrying a ``pos`` attribute; every road
    segment is a directed graph edge carrying its ``id``. Outgoing edges are
    reported in insertion order, which route planning relies on for
    tie-breaking.
    """

    def __init__(self):
        self.graph = nx.DiGraph()
        self.edges: Dict[str, Edge] = {}

    def add_intersection(self, intersection_id: str, pos: Tuple[float, float]):
        self.graph.add_node(intersection_id, pos=pos, type="intersection")

    def add_road(self, u: str, v: str, edge_id: Optional[str] = None) -> Edge:
        edge_id = edge_id or f"e_{u}_{v}"
        edge = Edge(id=edge_id, source=u, target=v)
        self.graph.add_edge(u, v, id=edge_id)
        self.edges[edge_id] = edge
        return edge

    def get_edge(self, edge_id: str) -> Optional[Edge]:
        return self.edges.get(edge_id)

    def get_edge_id(self, u: str, v: str) -> str:
        return self.graph.edges[u, v]["id"]

    def outgoing(self, node_id: str) -> List[Edge]:
        if node_id not in self.graph:
            return []
        return [self.edges[eid] for _, _, eid in self.graph.out_edges(node_id, data="id")]

    def get_node_pos(self, u: str) -> Tuple[float, float]:
        return self.graph.nodes[u].get('pos', (0.0, 0.0))

    def has_node(self, u: str) -> bool:
        return u in self.graph

    def distance(self, u: str, v: str) -> float:
        ux, uy = self.get_node_pos(u)
        vx, vy = self.get_node_pos(v)
        return ((ux - vx) ** 2 + (uy - vy) ** 2) ** 0.5

    def edge_list(self) -> List[Edge]:
        return list(self.edges.values())


def node_id(x: int, y: int) -> str:
    return f"n_{x}_{y}"


def build_city(grid_size: int = config.GRID_SIZE) -> Tuple[RoadNetwork, Dict[str, Node], str]:
    """Builds the square grid city.

    Returns the road network, the intersections keyed by id (row-major
    order) and the hospital node id, which is the far corner of the grid.
    """
    network = RoadNetwork()
    nodes: Dict[str, Node] = {}

    cell_width = config.MAP_WIDTH / (grid_size + 1)
    cell_height = config.MAP_HEIGHT / (grid_size + 1)

    for y in range(grid_size):
        for x in range(grid_size):
            nid = node_id(x, y)
            pos = ((x + 1) * cell_width, (y + 1) * cell_height)
            nodes[nid] = Node(id=nid, pos=Coordinates(x=pos[0], y=pos[1]))
            network.add_intersection(nid, pos)

    # Two one-way edges per road, right neighbour first then bottom
    for y in range(grid_size):
        for x in range(grid_size):
            nid = node_id(x, y)
            if x < grid_size - 1:
                right = node_id(x + 1, y)
                network.add_road(nid, right)
                network.add_road(right, nid)
            if y < grid_size - 1:
                bottom = node_id(x, y + 1)
                network.add_road(nid, bottom)
                network.add_road(bottom, nid)

    hospital_node_id = node_id(grid_size - 1, grid_size - 1)
    return network, nodes, hospital_node_id
