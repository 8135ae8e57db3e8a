from typing import Dict, Iterable, List
from greencorridor.domain.models import Node, TrafficLightState
from greencorridor.domain.graph import RoadNetwork
from greencorridor.domain import config

class SignalSystem:
    def __init__(self, road_network: RoadNetwork, look_ahead: int = config.GREEN_WAVE_LOOK_AHEAD):
        self.road_network = road_network
        self.look_ahead = look_ahead

    def set_all(self, nodes: Iterable[Node], state: TrafficLightState):
        for node in nodes:
            node.lightState = state

    def apply_green_wave(self, nodes: Dict[str, Node], planned_route: List[str], current_edge_id: str) -> bool:
        """Moves the green window to the ambulance's position on the route.

        The light at the end of each planned edge reverts to NORMAL once
        passed, turns GREEN_WAVE for the current edge and the next
        ``look_ahead`` edges, and otherwise stays pre-warned. Returns False
        when the current edge is not part of the plan.
        """
        if current_edge_id not in planned_route:
            return False
        current_index = planned_route.index(current_edge_id)

        for index, edge_id in enumerate(planned_route):
            edge = self.road_network.get_edge(edge_id)
            if edge is None:
                continue
            node = nodes.get(edge.target)
            if node is None:
                continue

            if index < current_index:
                node.lightState = TrafficLightState.NORMAL
            elif index <= current_index + self.look_ahead:
                node.lightState = TrafficLightState.GREEN_WAVE
            elif node.lightState != TrafficLightState.NORMAL:
                node.lightState = TrafficLightState.PREEMPTION_HIGHLIGHT
        return True
