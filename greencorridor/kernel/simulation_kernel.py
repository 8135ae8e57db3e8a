import logging
import math
import random
from collections import deque
from typing import Deque, List, Optional, Union

from greencorridor.domain.models import (
    Vehicle, VehicleType, TrafficLightState, EmergencyPhase, Coordinates,
    LogEntry, LogSource, LogLevel, StateSnapshot
)
from greencorridor.domain.state import SimulationState
from greencorridor.domain.graph import build_city
from greencorridor.domain import config
from greencorridor.systems.population import spawn_fleet, sample_ambulance_edge
from greencorridor.systems.vehicle_system import VehicleSystem
from greencorridor.systems.signal_system import SignalSystem
from greencorridor.arbitration.traffic_agent import TrafficAgent
from greencorridor.arbitration.logistics_agent import LogisticsAgent
from greencorridor.kernel.command_queue import CommandQueue
from greencorridor.kernel.commands import Command
from greencorridor.kernel.snapshot_builder import SnapshotBuilder

logger = logging.getLogger(__name__)

_LOG_LEVELS = {
    LogLevel.INFO: logging.INFO,
    LogLevel.SUCCESS: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ALERT: logging.WARNING,
}

class SimulationKernel:
    """Owns the city state and advances it one tick at a time.

    The emergency lifecycle runs IDLE -> DETECTED -> ROUTING -> ACTIVE ->
    RESOLVED and back to IDLE on reset. Consumers only ever see frozen
    snapshots built after each mutation.
    """

    def __init__(
        self,
        grid_size: int = config.GRID_SIZE,
        civilian_count: int = config.CIVILIAN_COUNT,
        bot_count: int = config.DELIVERY_BOT_COUNT,
        seed: Optional[Union[int, random.Random]] = None,
    ):
        self.rng = seed if isinstance(seed, random.Random) else random.Random(seed)
        self.civilian_count = civilian_count
        self.bot_count = bot_count

        network, nodes, hospital_node_id = build_city(grid_size)
        self.state = SimulationState(
            nodes=nodes,
            hospital_node_id=hospital_node_id,
            road_network=network
        )
        self.state.vehicles = spawn_fleet(network, self.rng, civilian_count, bot_count)

        self.command_queue = CommandQueue()
        self.snapshot_builder = SnapshotBuilder()
        self.vehicle_system = VehicleSystem(network, self.rng)
        self.signal_system = SignalSystem(network)
        self.traffic_agent = TrafficAgent()
        self.logistics_agent = LogisticsAgent()

        # Route state
        self.planned_route: List[str] = []
        self.ambulance_path_queue: Deque[str] = deque()

        self.events: Deque[LogEntry] = deque(maxlen=config.EVENT_LOG_SIZE)
        self._event_seq = 0

        # Bumped on every reset and injection; identifies the current emergency
        self.emergency_epoch = 0

    @property
    def phase(self) -> EmergencyPhase:
        return self.state.phase

    def _ambulance(self) -> Optional[Vehicle]:
        for v in self.state.vehicles:
            if v.type == VehicleType.AMBULANCE:
                return v
        return None

    def log_event(self, source: LogSource, message: str, level: LogLevel = LogLevel.INFO):
        self._event_seq += 1
        self.events.append(LogEntry(
            id=f"log-{self._event_seq}",
            tick=self.state.tick_count,
            source=source,
            message=message,
            level=level
        ))
        logger.log(_LOG_LEVELS[level], "[%s] %s", source.value, message)

    def get_logs(self) -> List[LogEntry]:
        return list(self.events)

    # Commands

    def queue_command(self, command: Command):
        self.command_queue.add(command)

    def process_commands(self):
        commands = self.command_queue.pop_all()
        while commands:
            cmd = commands.popleft()
            cmd.execute(self)

    def run_tick(self) -> StateSnapshot:
        self.process_commands()
        return self.step()

    # Emergency lifecycle

    def reset(self):
        network = self.state.road_network
        self.state.vehicles = spawn_fleet(network, self.rng, self.civilian_count, self.bot_count)
        self.state.emergency_active = False
        self.state.phase = EmergencyPhase.IDLE
        self.signal_system.set_all(self.state.nodes.values(), TrafficLightState.NORMAL)
        self.state.active_route = []
        self.planned_route = []
        self.ambulance_path_queue.clear()
        self.command_queue.clear()
        self.logistics_agent.resume_fleet(self.state.vehicles)
        self.emergency_epoch += 1
        self.events.clear()
        self.log_event(LogSource.SYSTEM, "Simulation reset.")

    def inject_ambulance(self) -> Vehicle:
        existing = self._ambulance()
        if existing is not None:
            logger.warning("Emergency already in progress (%s), ignoring injection", self.state.phase.value)
            return existing

        edge = sample_ambulance_edge(self.state.road_network, self.state.hospital_node_id, self.rng)
        ambulance = Vehicle(
            id=config.AMBULANCE_ID,
            type=VehicleType.AMBULANCE,
            edgeId=edge.id,
            progress=0.0,
            speed=config.AMBULANCE_SPEED,
            stopped=False
        )
        self.state.vehicles.append(ambulance)
        self.state.emergency_active = True
        self.state.phase = EmergencyPhase.DETECTED
        self.emergency_epoch += 1
        self.log_event(LogSource.VISION, f"TARGET ACQUIRED: AMBULANCE on {edge.id}", LogLevel.ALERT)
        return ambulance

    def highlight_traffic_lights(self):
        if self.state.phase != EmergencyPhase.DETECTED:
            logger.warning("Cannot highlight traffic lights in phase %s", self.state.phase.value)
            return
        self.signal_system.set_all(self.state.nodes.values(), TrafficLightState.PREEMPTION_HIGHLIGHT)
        self.state.phase = EmergencyPhase.ROUTING
        self.log_event(LogSource.TRAFFIC_AGENT, "Computing shortest path to City Hospital...", LogLevel.WARNING)

    def activate_agents(self):
        ambulance = self._ambulance()
        if ambulance is None or self.state.phase not in (EmergencyPhase.DETECTED, EmergencyPhase.ROUTING):
            logger.warning("Cannot activate agents in phase %s", self.state.phase.value)
            return

        network = self.state.road_network
        route = self.traffic_agent.compute_route(ambulance.edgeId, self.state.hospital_node_id, network)
        if not route:
            self.log_event(LogSource.TRAFFIC_AGENT, "No further route to City Hospital.", LogLevel.WARNING)

        self.ambulance_path_queue = deque(route)
        self.planned_route = [ambulance.edgeId] + route
        self.state.active_route = self._route_waypoints(self.planned_route)
        self.state.phase = EmergencyPhase.ACTIVE
        # Release the ambulance if it was waiting at the end of its edge
        ambulance.stopped = False
        ambulance.speed = config.AMBULANCE_SPEED

        intersections = self.traffic_agent.nodes_for_route(self.planned_route, network)
        self.log_event(
            LogSource.TRAFFIC_AGENT,
            f"Green Wave Sequence Initiated across {len(intersections)} intersections.",
            LogLevel.SUCCESS
        )

        held = self.logistics_agent.enforce_clearance(self.state.vehicles, self.planned_route)
        self.log_event(
            LogSource.LOGISTICS_AGENT,
            f"Clearing path: Stopping {held} vehicles on emergency route.",
            LogLevel.SUCCESS
        )

    def _route_waypoints(self, edge_ids: List[str]) -> List[Coordinates]:
        waypoints: List[Coordinates] = []
        for eid in edge_ids:
            edge = self.state.road_network.get_edge(eid)
            if edge is None:
                continue
            for nid in (edge.source, edge.target):
                node = self.state.nodes.get(nid)
                if node is None:
                    continue
                if not waypoints or waypoints[-1] != node.pos:
                    waypoints.append(node.pos)
        return waypoints

    # Tick

    def step(self) -> StateSnapshot:
        self.state.tick_count += 1

        # 1. Vehicle movement
        for v in self.state.vehicles:
            if not self.vehicle_system.advance(v):
                continue
            if v.type == VehicleType.AMBULANCE:
                self._advance_ambulance(v)
            else:
                self.vehicle_system.turn(v)

        ambulance = self._ambulance()

        # 2. Continuous clearance
        if (self.state.phase == EmergencyPhase.ACTIVE and self.planned_route
                and ambulance is not None and not ambulance.stopped):
            # Edges behind the ambulance are released
            active_edges = [ambulance.edgeId, *self.ambulance_path_queue]
            self.logistics_agent.enforce_clearance(self.state.vehicles, active_edges)
        elif ambulance is not None and ambulance.stopped:
            self.logistics_agent.resume_fleet(self.state.vehicles)

        # 3. Green wave
        if self.state.phase == EmergencyPhase.ACTIVE and self.planned_route and ambulance is not None:
            self.signal_system.apply_green_wave(self.state.nodes, self.planned_route, ambulance.edgeId)

        return self.get_state()

    def _advance_ambulance(self, ambulance: Vehicle):
        if self.state.phase != EmergencyPhase.ACTIVE:
            # No committed route yet, hold just short of the intersection
            ambulance.progress = math.nextafter(1.0, 0.0)
            ambulance.stopped = True
            return

        if self.ambulance_path_queue:
            ambulance.edgeId = self.ambulance_path_queue.popleft()
            ambulance.progress = 0.0
            return

        # Reached hospital
        ambulance.progress = 1.0
        ambulance.stopped = True
        self.signal_system.set_all(self.state.nodes.values(), TrafficLightState.NORMAL)
        self.state.phase = EmergencyPhase.RESOLVED
        self.log_event(LogSource.TRAFFIC_AGENT, "Ambulance arrived at City Hospital. Signals restored.", LogLevel.SUCCESS)
        self.log_event(LogSource.LOGISTICS_AGENT, "Route clear. Resuming fleet operations.")

    def get_state(self) -> StateSnapshot:
        return self.snapshot_builder.build(self.state)
