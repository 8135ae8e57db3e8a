import logging
import random
from typing import Dict
from greencorridor.domain.models import Vehicle, VehicleType
from greencorridor.domain.graph import RoadNetwork
from greencorridor.domain import config

logger = logging.getLogger(__name__)

TARGET_SPEEDS: Dict[VehicleType, float] = {
    VehicleType.CIVILIAN: config.CIVILIAN_TARGET_SPEED,
    VehicleType.DELIVERY_BOT: config.BOT_TARGET_SPEED,
    VehicleType.AMBULANCE: config.AMBULANCE_SPEED,
}

class VehicleSystem:
    def __init__(self, road_network: RoadNetwork, rng: random.Random):
        self.road_network = road_network
        self.rng = rng

    def advance(self, vehicle: Vehicle) -> bool:
        """Applies one tick of braking/acceleration and movement.

        Returns True when the vehicle has reached the end of its edge and
        needs a new one.
        """
        if self.road_network.get_edge(vehicle.edgeId) is None:
            logger.debug("Vehicle %s is on unknown edge %s, skipping", vehicle.id, vehicle.edgeId)
            return False

        if vehicle.stopped:
            if vehicle.speed > 0:
                vehicle.speed = max(0.0, vehicle.speed - config.BRAKE_RATE)
            return False

        # Ambulance holds its cruising speed
        if vehicle.type != VehicleType.AMBULANCE:
            target_speed = TARGET_SPEEDS[vehicle.type]
            if vehicle.speed < target_speed:
                vehicle.speed = min(target_speed, vehicle.speed + config.ACCELERATION)

        vehicle.progress += vehicle.speed
        return vehicle.progress >= 1

    def turn(self, vehicle: Vehicle):
        """Moves a background vehicle onto a random outgoing edge.

        On a dead end the vehicle stalls at the start of its current edge.
        """
        edge = self.road_network.get_edge(vehicle.edgeId)
        if edge is None:
            return

        next_edges = self.road_network.outgoing(edge.target)
        if next_edges:
            vehicle.edgeId = self.rng.choice(next_edges).id
        else:
            logger.debug("Vehicle %s reached dead end at %s", vehicle.id, edge.target)
        vehicle.progress = 0.0
