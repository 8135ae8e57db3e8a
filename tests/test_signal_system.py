import unittest
from greencorridor.domain.graph import build_city
from greencorridor.domain.models import TrafficLightState
from greencorridor.systems.signal_system import SignalSystem

# n_0_0 -> n_3_0 along the top row, then down to the hospital at n_3_3
ROUTE = [
    "e_n_0_0_n_1_0",
    "e_n_1_0_n_2_0",
    "e_n_2_0_n_3_0",
    "e_n_3_0_n_3_1",
    "e_n_3_1_n_3_2",
    "e_n_3_2_n_3_3",
]

class TestSignalSystem(unittest.TestCase):
    def setUp(self):
        self.network, self.nodes, self.hospital = build_city(4)
        self.signals = SignalSystem(self.network, look_ahead=2)

    def lights(self):
        return {nid: node.lightState for nid, node in self.nodes.items()}

    def test_set_all(self):
        self.signals.set_all(self.nodes.values(), TrafficLightState.PREEMPTION_HIGHLIGHT)
        self.assertTrue(all(
            state == TrafficLightState.PREEMPTION_HIGHLIGHT for state in self.lights().values()
        ))

    def test_window_leaves_unwarned_lights_normal(self):
        self.signals.set_all(self.nodes.values(), TrafficLightState.PREEMPTION_HIGHLIGHT)
        self.nodes["n_3_2"].lightState = TrafficLightState.NORMAL

        self.assertTrue(self.signals.apply_green_wave(self.nodes, ROUTE, ROUTE[0]))
        lights = self.lights()
        for nid in ("n_1_0", "n_2_0", "n_3_0"):
            self.assertEqual(lights[nid], TrafficLightState.GREEN_WAVE, nid)
        self.assertEqual(lights["n_3_1"], TrafficLightState.PREEMPTION_HIGHLIGHT)
        self.assertEqual(lights["n_3_2"], TrafficLightState.NORMAL)
        self.assertEqual(lights["n_3_3"], TrafficLightState.PREEMPTION_HIGHLIGHT)

        self.signals.apply_green_wave(self.nodes, ROUTE, ROUTE[1])
        lights = self.lights()
        self.assertEqual(lights["n_1_0"], TrafficLightState.NORMAL)
        self.assertEqual(lights["n_3_1"], TrafficLightState.GREEN_WAVE)
        self.assertEqual(lights["n_3_2"], TrafficLightState.NORMAL)
        self.assertEqual(lights["n_3_3"], TrafficLightState.PREEMPTION_HIGHLIGHT)

        # Only the window itself turns a NORMAL light green
        self.signals.apply_green_wave(self.nodes, ROUTE, ROUTE[2])
        self.assertEqual(self.nodes["n_3_2"].lightState, TrafficLightState.GREEN_WAVE)

    def test_lights_off_the_route_are_untouched(self):
        self.signals.set_all(self.nodes.values(), TrafficLightState.PREEMPTION_HIGHLIGHT)
        self.signals.apply_green_wave(self.nodes, ROUTE, ROUTE[0])
        for nid in ("n_0_1", "n_1_1", "n_2_2"):
            self.assertEqual(self.nodes[nid].lightState, TrafficLightState.PREEMPTION_HIGHLIGHT, nid)

    def test_edge_off_the_route_changes_nothing(self):
        self.signals.set_all(self.nodes.values(), TrafficLightState.PREEMPTION_HIGHLIGHT)
        self.nodes["n_2_0"].lightState = TrafficLightState.GREEN_WAVE
        before = self.lights()

        self.assertFalse(self.signals.apply_green_wave(self.nodes, ROUTE, "e_n_1_1_n_1_2"))
        self.assertEqual(self.lights(), before)

if __name__ == '__main__':
    unittest.main()
