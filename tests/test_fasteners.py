import math
import unittest

import trimesh

from fanmount.config import GeometryConfig
from fanmount.library.catalog import get_spec
from fanmount.library.generator import (
    generate_fastener,
    generate_hardware_set,
    list_available_generators,
)
from fanmount.library.generators.fastener_generators import (
    fender_washer,
    hex_bolt,
    hex_nut,
    washer,
)
from fanmount.library.threads import PlainThreads


CONFIG = GeometryConfig(fn=32)


def _extents(mesh):
    lower, upper = mesh.bounds
    return tuple(float(u - l) for l, u in zip(lower, upper))


def _polygon_area(radius, sides):
    return sides / 2.0 * radius * radius * math.sin(2 * math.pi / sides)


class RecordingThreads(PlainThreads):
    def __init__(self):
        super().__init__(CONFIG)
        self.calls = []

    def external(self, thread_spec, turns, higbee_arc=20):
        self.calls.append(("external", thread_spec, turns))
        return super().external(thread_spec, turns, higbee_arc)

    def internal(self, thread_spec, turns, outer_diameter, higbee_arc=20):
        self.calls.append(("internal", thread_spec, turns))
        return super().internal(thread_spec, turns, outer_diameter, higbee_arc)


class HexBoltTests(unittest.TestCase):
    def test_m6_bolt_components(self):
        threads = RecordingThreads()
        model = hex_bolt("M6", 10, 2, threads=threads, config=CONFIG)

        self.assertEqual(set(model.components), {"head", "shank", "thread"})
        self.assertEqual(model.turns, 8)
        self.assertEqual(threads.calls, [("external", "M6x1", 8)])

        head = model.components["head"]
        self.assertAlmostEqual(head.bounds[0][2], -4.0)
        self.assertAlmostEqual(head.bounds[1][2], 0.0)
        head_x, head_y, _ = _extents(head)
        self.assertAlmostEqual(head_x, 11.547, places=3)
        self.assertAlmostEqual(head_y, 10.0)

        shank = model.components["shank"]
        shank_x, shank_y, shank_z = _extents(shank)
        self.assertAlmostEqual(shank_z, 2.0)
        self.assertAlmostEqual(shank_x, 6.0)
        self.assertAlmostEqual(shank_y, 6.0)

        thread = model.components["thread"]
        self.assertAlmostEqual(thread.bounds[0][2], 2.0)
        self.assertAlmostEqual(thread.bounds[1][2], 10.0)

        self.assertIsInstance(model.mesh, trimesh.Trimesh)
        self.assertAlmostEqual(model.mesh.bounds[0][2], -4.0)
        self.assertAlmostEqual(model.mesh.bounds[1][2], 10.0)

    def test_bolt_mesh_is_single_solid(self):
        model = hex_bolt("M6", 10, 2, config=CONFIG)
        self.assertTrue(model.mesh.is_volume)
        self.assertEqual(len(model.mesh.split(only_watertight=False)), 1)
        expected = sum(part.volume for part in model.components.values())
        self.assertAlmostEqual(model.mesh.volume, expected, places=2)

    def test_accepts_resolved_specification(self):
        spec = get_spec("M8")
        model = hex_bolt(spec, 20, config=CONFIG)
        self.assertIs(model.spec, spec)
        self.assertNotIn("shank", model.components)
        self.assertEqual(model.turns, 16)

    def test_fully_unthreaded(self):
        model = hex_bolt("M6", 5, 5, config=CONFIG)
        self.assertEqual(model.turns, 0)
        self.assertNotIn("thread", model.components)

    def test_invalid_lengths(self):
        with self.assertRaises(ValueError):
            hex_bolt("M6", 2, 5, config=CONFIG)
        with self.assertRaises(ValueError):
            hex_bolt("M6", -1, config=CONFIG)

    def test_unknown_size(self):
        with self.assertRaises(KeyError):
            hex_bolt("M7", 10, config=CONFIG)


class HexNutTests(unittest.TestCase):
    def test_one_turn_correction(self):
        threads = RecordingThreads()
        model = hex_nut("M6", threads=threads, config=CONFIG)
        self.assertAlmostEqual(model.turns, 4.2)
        self.assertEqual(threads.calls[0][:2], ("internal", "M6x1"))
        self.assertAlmostEqual(model.components["thread"].bounds[1][2], 5.2)
        self.assertAlmostEqual(model.mesh.bounds[0][2], 0.0, places=6)
        self.assertAlmostEqual(model.mesh.bounds[1][2], 5.2, places=6)

    def test_collar_has_bore(self):
        model = hex_nut("M6", thickness=3, config=CONFIG)
        collar = model.components["collar"]
        self.assertTrue(collar.is_volume)
        expected = (10 * 10 * math.sqrt(3) / 2 - _polygon_area(3.0, 32)) * 3
        self.assertAlmostEqual(collar.volume, expected, places=3)
        self.assertAlmostEqual(model.mesh.volume, expected, places=2)


class WasherTests(unittest.TestCase):
    def test_default_thickness(self):
        model = washer("M6", config=CONFIG)
        self.assertAlmostEqual(model.parameters["thickness"], 1.6)
        self.assertAlmostEqual(model.mesh.bounds[0][2], 0.0, places=6)
        self.assertAlmostEqual(model.mesh.bounds[1][2], 1.6, places=6)
        expected = (_polygon_area(6.0, 32) - _polygon_area(3.2, 32)) * 1.6
        self.assertAlmostEqual(model.mesh.volume, expected, places=3)

    def test_inner_cylinder_overshoots_faces(self):
        model = washer("M6", config=CONFIG)
        inner = model.components["inner"]
        self.assertLess(inner.bounds[0][2], 0.0)
        self.assertGreater(inner.bounds[1][2], 1.6)

    def test_explicit_thickness(self):
        for thickness in (None, 0):
            self.assertAlmostEqual(washer("M6", thickness, config=CONFIG).parameters["thickness"], 1.6)
        model = washer("M6", thickness=3, config=CONFIG)
        self.assertAlmostEqual(_extents(model.mesh)[2], 3.0, places=6)

    def test_fender_washer(self):
        model = fender_washer("M6", config=CONFIG)
        self.assertAlmostEqual(model.parameters["outer_diameter"], 18)
        self.assertAlmostEqual(_extents(model.mesh)[0], 18.0, places=6)

    def test_fender_washer_missing_for_m42(self):
        with self.assertRaises(KeyError):
            fender_washer("M42", config=CONFIG)


class GeneratorDispatchTests(unittest.TestCase):
    def test_generate_by_kind(self):
        model = generate_fastener("hex_bolt", "M6", length=10, shank=2)
        self.assertEqual(model.turns, 8)
        with self.assertRaises(ValueError):
            generate_fastener("rivet", "M6")

    def test_hardware_set_skips_missing_fender_washer(self):
        result = generate_hardware_set("M42", 60)
        self.assertEqual(set(result["models"]), {"hex_bolt", "hex_nut", "washer"})
        self.assertEqual(len(result["warnings"]), 1)
        self.assertIn("M42", result["warnings"][0])

    def test_hardware_set_complete(self):
        result = generate_hardware_set("M6", 20, shank=5)
        self.assertEqual(set(result["models"]),
                         {"hex_bolt", "hex_nut", "washer", "fender_washer"})
        self.assertEqual(result["warnings"], [])

    def test_list_available_generators(self):
        generators = list_available_generators()
        self.assertEqual(set(generators), {"hex_bolt", "hex_nut", "washer", "fender_washer"})
        self.assertTrue(generators["hex_bolt"].endswith("fastener_generators.hex_bolt"))


if __name__ == "__main__":
    unittest.main()
