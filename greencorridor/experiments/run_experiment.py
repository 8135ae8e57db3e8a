import json
import time
from typing import Any, Dict, List
from greencorridor.kernel.simulation_kernel import SimulationKernel
from greencorridor.arbitration.emergency_arbitrator import EmergencyArbitrator
from greencorridor.domain.models import TrafficLightState, EmergencyPhase, VehicleType

def run_headless_experiment(output_path: str, seed: int = 42, duration_ticks: int = 1000) -> List[Dict[str, Any]]:
    """Runs one scripted emergency without a UI and records per-tick metrics."""
    kernel = SimulationKernel(seed=seed)
    arbitrator = EmergencyArbitrator()
    arbitrator.trigger(kernel)

    results = []

    start_time = time.time()
    for i in range(duration_ticks):
        arbitrator.run_tick(kernel)
        state = kernel.run_tick()
        ambulance = next((v for v in state.vehicles if v.type == VehicleType.AMBULANCE), None)
        results.append({
            "tick": state.tickCount,
            "phase": state.phase.value,
            "ambulance_edge": ambulance.edgeId if ambulance else None,
            "held_vehicles": sum(1 for v in state.vehicles if v.stopped and v is not ambulance),
            "green_lights": sum(1 for n in state.nodes if n.lightState == TrafficLightState.GREEN_WAVE)
        })
        if state.phase == EmergencyPhase.RESOLVED:
            break

    end_time = time.time()
    print(f"Experiment finished in {end_time - start_time:.4f}s ({len(results)} ticks)")

    with open(output_path, 'w') as f:
        json.dump(results, f, indent=2)
    return results

if __name__ == "__main__":
    import sys
    if len(sys.argv) > 1:
        seed = int(sys.argv[2]) if len(sys.argv) > 2 else 42
        run_headless_experiment(sys.argv[1], seed=seed)
    else:
        print("Usage: python -m greencorridor.experiments.run_experiment <output> [seed]")
