# Simulation Configuration

# Timing
TICK_INTERVAL_MS = 150

# Grid Settings
GRID_SIZE = 4            # 4x4 grid city
MAP_WIDTH = 800.0
MAP_HEIGHT = 600.0

# Map Layout (rendering only)
ROAD_WIDTH = 40.0
LANE_OFFSET = 10.0       # Offset from center for the right lane

# Fleet
CIVILIAN_COUNT = 20
DELIVERY_BOT_COUNT = 12

# Vehicle Physics (progress units per tick)
CIVILIAN_MIN_SPEED = 0.005
CIVILIAN_TARGET_SPEED = 0.008
BOT_MIN_SPEED = 0.0025
BOT_TARGET_SPEED = 0.003
AMBULANCE_SPEED = 0.015
ACCELERATION = 0.0002
BRAKE_RATE = 0.0005

# Emergency Scenario
AMBULANCE_ID = "ambulance_1"
AMBULANCE_MIN_SPAWN_DISTANCE = 200.0
AMBULANCE_SPAWN_ATTEMPTS = 20
EMERGENCY_TRIGGER_MIN_MS = 5000
EMERGENCY_TRIGGER_MAX_MS = 15000
DETECTION_TO_WARNING_MS = 1000
WARNING_TO_ACTIVATION_MS = 1200
GREEN_WAVE_LOOK_AHEAD = 2  # Current and next two intersections

# Event Log
EVENT_LOG_SIZE = 50
