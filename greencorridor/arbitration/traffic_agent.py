import logging
import networkx as nx
from typing import Dict, List
from greencorridor.domain.graph import RoadNetwork

logger = logging.getLogger(__name__)

class TrafficAgent:
    """Route optimization and signal preemption for emergency vehicles."""

    def compute_route(self, origin_edge_id: str, target_node_id: str, road_network: RoadNetwork) -> List[str]:
        """Shortest path by edge count from the end of ``origin_edge_id``.

        The origin edge itself is not part of the result. Among equally
        short paths the first one discovered wins, so the result follows
        the network's edge insertion order and is reproducible. An empty
        list means either the origin already ends at the target or no
        path exists.
        """
        origin = road_network.get_edge(origin_edge_id)
        if origin is None:
            logger.warning("Origin edge %s not found", origin_edge_id)
            return []

        start = origin.target
        if start == target_node_id:
            return []
        if not road_network.has_node(target_node_id):
            logger.warning("Target node %s not found", target_node_id)
            return []

        predecessors: Dict[str, str] = {}
        for parent, child in nx.bfs_edges(road_network.graph, start):
            predecessors[child] = parent
            if child == target_node_id:
                break
        else:
            logger.warning("No route from %s to %s", start, target_node_id)
            return []

        path: List[str] = []
        node = target_node_id
        while node != start:
            parent = predecessors[node]
            path.append(road_network.get_edge_id(parent, node))
            node = parent
        path.reverse()
        return path

    def nodes_for_route(self, route_edge_ids: List[str], road_network: RoadNetwork) -> List[str]:
        """Intersections whose lights guard the given route, in route order."""
        affected: List[str] = []
        for edge_id in route_edge_ids:
            edge = road_network.get_edge(edge_id)
            if edge and edge.target not in affected:
                affected.append(edge.target)
        return affected
