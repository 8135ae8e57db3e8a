import random
import unittest
from greencorridor.domain.graph import RoadNetwork, build_city
from greencorridor.domain.models import Vehicle, VehicleType
from greencorridor.domain import config
from greencorridor.systems.vehicle_system import VehicleSystem

class TestVehicleKinematics(unittest.TestCase):
    def setUp(self):
        self.network, _, _ = build_city(4)
        self.system = VehicleSystem(self.network, random.Random(1))

    def vehicle(self, vtype=VehicleType.CIVILIAN, speed=0.005, progress=0.2, stopped=False, edge_id="e_n_0_0_n_1_0"):
        return Vehicle(id="v", type=vtype, edgeId=edge_id, progress=progress, speed=speed, stopped=stopped)

    def test_stopped_vehicle_brakes_without_moving(self):
        v = self.vehicle(speed=0.0008, stopped=True)
        self.assertFalse(self.system.advance(v))
        self.assertAlmostEqual(v.speed, 0.0008 - config.BRAKE_RATE)
        self.assertEqual(v.progress, 0.2)

        self.system.advance(v)
        self.assertEqual(v.speed, 0.0)
        self.system.advance(v)
        self.assertEqual(v.speed, 0.0)
        self.assertEqual(v.progress, 0.2)

    def test_moving_vehicle_accelerates_up_to_target(self):
        v = self.vehicle(speed=0.0)
        self.system.advance(v)
        self.assertAlmostEqual(v.speed, config.ACCELERATION)
        self.assertAlmostEqual(v.progress, 0.2 + config.ACCELERATION)

        for _ in range(200):
            self.system.advance(v)
            if v.progress >= 1:
                v.progress = 0.0
            self.assertLessEqual(v.speed, config.CIVILIAN_TARGET_SPEED)
        self.assertEqual(v.speed, config.CIVILIAN_TARGET_SPEED)

    def test_bot_capped_at_its_own_target(self):
        v = self.vehicle(vtype=VehicleType.DELIVERY_BOT, speed=0.0029)
        self.system.advance(v)
        self.assertEqual(v.speed, config.BOT_TARGET_SPEED)

    def test_ambulance_holds_speed(self):
        v = self.vehicle(vtype=VehicleType.AMBULANCE, speed=config.AMBULANCE_SPEED, progress=0.0)
        for _ in range(10):
            self.system.advance(v)
        self.assertEqual(v.speed, config.AMBULANCE_SPEED)
        self.assertAlmostEqual(v.progress, 10 * config.AMBULANCE_SPEED)

    def test_progress_strictly_increases_while_moving(self):
        v = self.vehicle(speed=0.006, progress=0.0)
        last = v.progress
        for _ in range(50):
            self.system.advance(v)
            self.assertGreater(v.progress, last)
            last = v.progress

    def test_reaching_edge_end_reports_transition(self):
        v = self.vehicle(speed=0.008, progress=0.995)
        self.assertTrue(self.system.advance(v))

    def test_turn_moves_to_outgoing_edge(self):
        v = self.vehicle(progress=1.002)
        self.system.turn(v)
        self.assertEqual(v.progress, 0.0)
        self.assertIn(v.edgeId, [e.id for e in self.network.outgoing("n_1_0")])

    def test_dead_end_stalls_at_edge_start(self):
        network = RoadNetwork()
        network.add_intersection("a", (0.0, 0.0))
        network.add_intersection("b", (100.0, 0.0))
        network.add_road("a", "b")
        system = VehicleSystem(network, random.Random(1))
        v = Vehicle(id="v", type=VehicleType.CIVILIAN, edgeId="e_a_b", progress=0.999, speed=0.005)

        self.assertTrue(system.advance(v))
        system.turn(v)
        self.assertEqual(v.edgeId, "e_a_b")
        self.assertEqual(v.progress, 0.0)

    def test_unknown_edge_is_skipped(self):
        v = self.vehicle(edge_id="e_missing")
        self.assertFalse(self.system.advance(v))
        self.system.turn(v)
        self.assertEqual(v.progress, 0.2)
        self.assertEqual(v.speed, 0.005)
        self.assertEqual(v.edgeId, "e_missing")

if __name__ == '__main__':
    unittest.main()
