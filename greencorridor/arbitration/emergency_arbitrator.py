import logging
import math
import random
from typing import Optional, Callable, List, Tuple
from greencorridor.domain.models import EmergencyPhase, LogSource, LogLevel
from greencorridor.domain import config

logger = logging.getLogger(__name__)

def ms_to_ticks(ms: float, tick_interval_ms: float = config.TICK_INTERVAL_MS) -> int:
    return max(1, math.ceil(ms / tick_interval_ms))

class EmergencyArbitrator:
    """Drives the scripted emergency scenario against a kernel.

    Phases are scheduled by tick number rather than wall-clock timers:
    detection, then the route warning, then full agent activation. Each
    pending phase belongs to the emergency that scheduled it: once the
    kernel is reset or a different ambulance is injected the remaining
    phases are dropped. A phase the kernel has already passed through by
    other means is skipped. ``cancel`` drops everything still pending.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.trigger_tick: Optional[int] = None
        # (tick, kernel emergency epoch, expected kernel phase, action name)
        self.pending: List[Tuple[int, int, EmergencyPhase, str]] = []
        self.warning_delay = ms_to_ticks(config.DETECTION_TO_WARNING_MS)
        self.activation_delay = ms_to_ticks(config.WARNING_TO_ACTIVATION_MS)

    @property
    def armed(self) -> bool:
        return self.trigger_tick is not None

    def arm(self, kernel) -> Optional[int]:
        """Schedules the automatic trigger at a random point in the future."""
        if self.armed or self.pending or kernel.state.emergency_active:
            return self.trigger_tick

        delay_ms = self.rng.randint(config.EMERGENCY_TRIGGER_MIN_MS, config.EMERGENCY_TRIGGER_MAX_MS)
        self.trigger_tick = kernel.state.tick_count + ms_to_ticks(delay_ms)
        kernel.log_event(LogSource.SYSTEM, "City Digital Twin initialized. Surveillance systems active.")
        kernel.log_event(
            LogSource.SYSTEM,
            f"Emergency Scenario Scheduler: Trigger set for T+{delay_ms / 1000:.1f}s"
        )
        return self.trigger_tick

    def cancel(self):
        if self.armed or self.pending:
            logger.info("Cancelling pending emergency phases")
        self.trigger_tick = None
        self.pending = []

    def trigger(self, kernel, manual: bool = False) -> bool:
        """Starts the scenario now. Returns False if one is already running."""
        if manual:
            kernel.log_event(LogSource.SYSTEM, "Manual Override Initiated", LogLevel.WARNING)
        # Replaces the auto trigger only
        self.trigger_tick = None
        if kernel.state.emergency_active:
            return False

        kernel.inject_ambulance()
        now = kernel.state.tick_count
        epoch = kernel.emergency_epoch
        self.pending = [
            (now + self.warning_delay, epoch, EmergencyPhase.DETECTED, "highlight_traffic_lights"),
            (now + self.warning_delay + self.activation_delay, epoch, EmergencyPhase.ROUTING, "activate_agents"),
        ]
        return True

    def run_tick(self, kernel):
        """Fires whatever is due at the kernel's current tick."""
        now = kernel.state.tick_count

        if self.trigger_tick is not None and now >= self.trigger_tick:
            self.trigger_tick = None
            self.trigger(kernel)
            return

        while self.pending and now >= self.pending[0][0]:
            _, epoch, expected_phase, action = self.pending.pop(0)
            if epoch != kernel.emergency_epoch:
                logger.info("Dropping %s, its emergency is no longer current", action)
                self.pending = []
                return
            if kernel.phase != expected_phase:
                logger.info("Skipping %s, kernel is in %s", action, kernel.phase.value)
                continue
            handler: Callable[[], None] = getattr(kernel, action)
            handler()
