import asyncio
import logging
import time
from typing import List, Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from greencorridor.kernel.simulation_kernel import SimulationKernel
from greencorridor.kernel.commands import (
    InjectAmbulanceCommand, HighlightTrafficLightsCommand, ActivateAgentsCommand, ResetCommand
)
from greencorridor.arbitration.emergency_arbitrator import EmergencyArbitrator
from greencorridor.domain.models import StateSnapshot, LogEntry, SimulationStatus, EmergencyPhase
from greencorridor.domain import config

async def run_simulation(app: FastAPI):
    """Runs the simulation update loop at the configured tick interval"""
    dt = config.TICK_INTERVAL_MS / 1000.0

    while True:
        start_time = time.time()

        if app.state.running:
            app.state.arbitrator.run_tick(app.state.kernel)
            app.state.kernel.run_tick()

        # Sleep to maintain tick rate
        elapsed = time.time() - start_time
        sleep_time = max(0.0, dt - elapsed)
        await asyncio.sleep(sleep_time)

def create_app(
    kernel: Optional[SimulationKernel] = None,
    arbitrator: Optional[EmergencyArbitrator] = None,
) -> FastAPI:

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: Start the simulation loop
        loop_task = asyncio.create_task(run_simulation(app))
        yield
        # Shutdown
        loop_task.cancel()

    app = FastAPI(lifespan=lifespan)
    app.state.kernel = kernel or SimulationKernel()
    app.state.arbitrator = arbitrator or EmergencyArbitrator()
    app.state.running = False

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def status() -> SimulationStatus:
        return SimulationStatus(
            running=app.state.running,
            phase=app.state.kernel.phase,
            tickCount=app.state.kernel.state.tick_count,
            triggerTick=app.state.arbitrator.trigger_tick,
            pendingCommands=len(app.state.kernel.command_queue)
        )

    @app.get("/api/state", response_model=StateSnapshot)
    async def get_state():
        """Returns the latest simulation snapshot"""
        return app.state.kernel.get_state()

    @app.get("/api/logs", response_model=List[LogEntry])
    async def get_logs():
        """Returns the most recent scenario events"""
        return app.state.kernel.get_logs()

    @app.get("/api/simulation/status", response_model=SimulationStatus)
    async def get_status():
        return status()

    @app.post("/api/simulation/start", response_model=SimulationStatus)
    async def start_simulation():
        """Starts ticking and arms the automatic emergency trigger"""
        app.state.running = True
        if app.state.kernel.phase == EmergencyPhase.IDLE:
            app.state.arbitrator.arm(app.state.kernel)
        return status()

    @app.post("/api/simulation/stop", response_model=SimulationStatus)
    async def stop_simulation():
        app.state.running = False
        return status()

    @app.post("/api/simulation/reset", response_model=SimulationStatus)
    async def reset_simulation():
        """Cancels pending scenario phases and returns the city to IDLE"""
        app.state.arbitrator.cancel()
        app.state.running = False
        app.state.kernel.queue_command(ResetCommand())
        # Not ticking, so apply it now
        app.state.kernel.process_commands()
        return status()

    @app.post("/api/emergency/trigger")
    async def trigger_emergency():
        """Manual override: runs the scripted emergency sequence now"""
        started = app.state.arbitrator.trigger(app.state.kernel, manual=True)
        return {"status": "Emergency Started" if started else "Emergency Already Active", "started": started}

    @app.post("/api/emergency/inject")
    async def inject_ambulance():
        app.state.kernel.queue_command(InjectAmbulanceCommand())
        return {"status": "queued"}

    @app.post("/api/emergency/highlight")
    async def highlight_traffic_lights():
        app.state.kernel.queue_command(HighlightTrafficLightsCommand())
        return {"status": "queued"}

    @app.post("/api/emergency/activate")
    async def activate_agents():
        app.state.kernel.queue_command(ActivateAgentsCommand())
        return {"status": "queued"}

    @app.get("/")
    def read_root():
        return {"status": "GreenCorridor Backend Running"}

    return app

app = create_app()

def main():
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(app, host="0.0.0.0", port=8001)

if __name__ == "__main__":
    main()
