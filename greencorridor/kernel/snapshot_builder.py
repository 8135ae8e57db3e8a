from greencorridor.domain.models import StateSnapshot
from greencorridor.domain.state import SimulationState

class SnapshotBuilder:
    """Copies the live state into a frozen snapshot for consumers."""

    def build(self, state: SimulationState) -> StateSnapshot:
        network = state.road_network
        return StateSnapshot(
            nodes=tuple(n.model_copy(deep=True) for n in state.nodes.values()),
            edges=tuple(network.edge_list()) if network else (),
            vehicles=tuple(v.model_copy(deep=True) for v in state.vehicles),
            emergencyActive=state.emergency_active,
            tickCount=state.tick_count,
            activeRoute=tuple(state.active_route),
            hospitalNodeId=state.hospital_node_id,
            phase=state.phase
        )
