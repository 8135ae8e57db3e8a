from typing import Iterable, List
from greencorridor.domain.models import Vehicle, VehicleType

class LogisticsAgent:
    """Fleet management: holds traffic off the emergency corridor."""

    def enforce_clearance(self, vehicles: List[Vehicle], active_edge_ids: Iterable[str]) -> int:
        # Recomputed from scratch each call so vehicles that changed edges are released
        route_set = set(active_edge_ids)
        held = 0
        for v in vehicles:
            if v.type == VehicleType.AMBULANCE:
                continue
            v.stopped = v.edgeId in route_set
            if v.stopped:
                held += 1
        return held

    def resume_fleet(self, vehicles: List[Vehicle]):
        for v in vehicles:
            if v.type in (VehicleType.CIVILIAN, VehicleType.DELIVERY_BOT):
                v.stopped = False
