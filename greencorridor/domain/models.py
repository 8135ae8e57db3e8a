from enum import Enum
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

class VehicleType(str, Enum):
    CIVILIAN = "CIVILIAN"
    DELIVERY_BOT = "DELIVERY_BOT"
    AMBULANCE = "AMBULANCE"

class TrafficLightState(str, Enum):
    NORMAL = "NORMAL"
    PREEMPTION_HIGHLIGHT = "PREEMPTION_HIGHLIGHT"
    GREEN_WAVE = "GREEN_WAVE"

class EmergencyPhase(str, Enum):
    IDLE = "IDLE"
    DETECTED = "DETECTED"
    ROUTING = "ROUTING"
    ACTIVE = "ACTIVE"
    RESOLVED = "RESOLVED"

class LogSource(str, Enum):
    SYSTEM = "SYSTEM"
    VISION = "VISION"
    TRAFFIC_AGENT = "TRAFFIC_AGENT"
    LOGISTICS_AGENT = "LOGISTICS_AGENT"

class LogLevel(str, Enum):
    INFO = "info"
    WARNING = "warning"
    ALERT = "alert"
    SUCCESS = "success"

class Coordinates(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float

class Node(BaseModel):
    id: str  # e.g., "n_0_3"
    pos: Coordinates
    lightState: TrafficLightState = TrafficLightState.NORMAL

class Edge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str  # e.g., "e_n_0_0_n_1_0"
    source: str
    target: str

class Vehicle(BaseModel):
    id: str
    type: VehicleType
    edgeId: str
    progress: float  # 0 to 1 along the edge
    speed: float
    stopped: bool = False

class LogEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    tick: int
    source: LogSource
    message: str
    level: LogLevel = LogLevel.INFO

# API/Response Models

class StateSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: Tuple[Node, ...]
    edges: Tuple[Edge, ...]
    vehicles: Tuple[Vehicle, ...]
    emergencyActive: bool
    tickCount: int
    activeRoute: Tuple[Coordinates, ...]  # Path for Green Wave visualization
    hospitalNodeId: str
    phase: EmergencyPhase = EmergencyPhase.IDLE

class SimulationStatus(BaseModel):
    running: bool
    phase: EmergencyPhase
    tickCount: int
    triggerTick: Optional[int] = None
    # Commands queued for the next tick
    pendingCommands: int = 0
