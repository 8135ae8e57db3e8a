import logging
import random
from typing import List
from greencorridor.domain.models import Vehicle, VehicleType, Edge
from greencorridor.domain.graph import RoadNetwork
from greencorridor.domain import config

logger = logging.getLogger(__name__)

def spawn_fleet(
    network: RoadNetwork,
    rng: random.Random,
    civilian_count: int = config.CIVILIAN_COUNT,
    bot_count: int = config.DELIVERY_BOT_COUNT,
) -> List[Vehicle]:
    """Places civilians and delivery bots on random edges."""
    edges = network.edge_list()
    vehicles: List[Vehicle] = []

    for i in range(civilian_count):
        vehicles.append(Vehicle(
            id=f"civ_{i}",
            type=VehicleType.CIVILIAN,
            edgeId=rng.choice(edges).id,
            progress=rng.random(),
            speed=rng.uniform(config.CIVILIAN_MIN_SPEED, config.CIVILIAN_TARGET_SPEED),
            stopped=False
        ))

    for i in range(bot_count):
        vehicles.append(Vehicle(
            id=f"delivery_{i}",
            type=VehicleType.DELIVERY_BOT,
            edgeId=rng.choice(edges).id,
            progress=rng.random(),
            speed=rng.uniform(config.BOT_MIN_SPEED, config.BOT_TARGET_SPEED),
            stopped=False
        ))

    logger.debug("Spawned %d civilians and %d delivery bots", civilian_count, bot_count)
    return vehicles

def sample_ambulance_edge(
    network: RoadNetwork,
    hospital_node_id: str,
    rng: random.Random,
    min_distance: float = config.AMBULANCE_MIN_SPAWN_DISTANCE,
    max_attempts: int = config.AMBULANCE_SPAWN_ATTEMPTS,
) -> Edge:
    """Rejection-samples a spawn edge far enough from the hospital.

    An edge qualifies when its source intersection is at least
    ``min_distance`` from the hospital and it does not lead straight into
    the hospital. After ``max_attempts`` draws the last sampled edge is
    returned whether or not it qualifies.
    """
    edges = network.edge_list()
    edge = rng.choice(edges)
    for attempt in range(max(1, max_attempts)):
        if attempt > 0:
            edge = rng.choice(edges)
        distance = network.distance(edge.source, hospital_node_id)
        if distance >= min_distance and edge.target != hospital_node_id:
            return edge

    logger.warning("No spawn edge qualified after %d attempts, using %s", max_attempts, edge.id)
    return edge
