from typing import List, Dict, Optional
from pydantic import BaseModel, ConfigDict
from greencorridor.domain.models import Node, Vehicle, Coordinates, EmergencyPhase
from greencorridor.domain.graph import RoadNetwork

class SimulationState(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    tick_count: int = 0
    nodes: Dict[str, Node] = {}
    vehicles: List[Vehicle] = []
    emergency_active: bool = False
    phase: EmergencyPhase = EmergencyPhase.IDLE
    active_route: List[Coordinates] = []  # Display only
    hospital_node_id: str = ""

    # Graph based structure
    road_network: Optional[RoadNetwork] = None
