from abc import ABC, abstractmethod
from typing import Any

class Command(ABC):
    @abstractmethod
    def execute(self, kernel: Any):
        pass

class InjectAmbulanceCommand(Command):
    def execute(self, kernel: Any):
        return kernel.inject_ambulance()

class HighlightTrafficLightsCommand(Command):
    def execute(self, kernel: Any):
        kernel.highlight_traffic_lights()

class ActivateAgentsCommand(Command):
    def execute(self, kernel: Any):
        kernel.activate_agents()

class ResetCommand(Command):
    def execute(self, kernel: Any):
        kernel.reset()
