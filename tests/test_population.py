import random
import unittest
from greencorridor.domain.graph import build_city
from greencorridor.domain.models import VehicleType
from greencorridor.domain import config
from greencorridor.systems.population import spawn_fleet, sample_ambulance_edge

class TestFleetSpawn(unittest.TestCase):
    def setUp(self):
        self.network, _, self.hospital = build_city(4)

    def test_counts_and_ids(self):
        vehicles = spawn_fleet(self.network, random.Random(3), civilian_count=5, bot_count=3)
        self.assertEqual(len(vehicles), 8)
        self.assertEqual([v.id for v in vehicles[:5]], [f"civ_{i}" for i in range(5)])
        self.assertEqual([v.id for v in vehicles[5:]], [f"delivery_{i}" for i in range(3)])
        self.assertTrue(all(v.type == VehicleType.CIVILIAN for v in vehicles[:5]))
        self.assertTrue(all(v.type == VehicleType.DELIVERY_BOT for v in vehicles[5:]))

    def test_initial_vehicle_state(self):
        vehicles = spawn_fleet(self.network, random.Random(7))
        self.assertEqual(len(vehicles), config.CIVILIAN_COUNT + config.DELIVERY_BOT_COUNT)
        for v in vehicles:
            self.assertIn(v.edgeId, self.network.edges)
            self.assertGreaterEqual(v.progress, 0.0)
            self.assertLess(v.progress, 1.0)
            self.assertFalse(v.stopped)
            if v.type == VehicleType.CIVILIAN:
                self.assertGreaterEqual(v.speed, config.CIVILIAN_MIN_SPEED)
                self.assertLessEqual(v.speed, config.CIVILIAN_TARGET_SPEED)
            else:
                self.assertGreaterEqual(v.speed, config.BOT_MIN_SPEED)
                self.assertLessEqual(v.speed, config.BOT_TARGET_SPEED)

    def test_seeded_spawn_is_reproducible(self):
        first = spawn_fleet(self.network, random.Random(11))
        second = spawn_fleet(self.network, random.Random(11))
        self.assertEqual([v.model_dump() for v in first], [v.model_dump() for v in second])

class TestAmbulanceSpawnEdge(unittest.TestCase):
    def setUp(self):
        self.network, _, self.hospital = build_city(4)

    def test_sampled_edge_is_far_from_hospital(self):
        for seed in range(25):
            edge = sample_ambulance_edge(self.network, self.hospital, random.Random(seed))
            self.assertGreaterEqual(self.network.distance(edge.source, self.hospital), config.AMBULANCE_MIN_SPAWN_DISTANCE)
            self.assertNotEqual(edge.target, self.hospital)

    def test_falls_back_to_last_sample_when_exhausted(self):
        edges = self.network.edge_list()
        replay = random.Random(5)
        expected = [replay.choice(edges) for _ in range(4)][-1]

        edge = sample_ambulance_edge(
            self.network, self.hospital, random.Random(5), min_distance=10_000.0, max_attempts=4
        )
        self.assertEqual(edge.id, expected.id)

    def test_first_qualifying_sample_wins(self):
        edges = self.network.edge_list()
        replay = random.Random(9)
        expected = replay.choice(edges)

        edge = sample_ambulance_edge(self.network, self.hospital, random.Random(9), min_distance=0.0)
        if expected.target != self.hospital:
            self.assertEqual(edge.id, expected.id)
        else:
            self.assertNotEqual(edge.target, self.hospital)

if __name__ == '__main__':
    unittest.main()
