"""Tests for session-level state: published records, view, units and floor."""

from __future__ import annotations

import json
import unittest

from factory_layout.layout import (
    add_machine, add_custom_working_area, collect_placed_machines,
    clear_selection, rotate_active_object, session_to_dict,
)
from tests.layout_fixture import make_machine, make_session, place_at


class TestPlacedMachineRecords(unittest.TestCase):

    def setUp(self):
        self.session, self.published, _ = make_session()

    def test_record_merges_metadata_and_position(self):
        add_machine(self.session, make_machine(7, "Edgebander", type_label="edgeband"))
        [record] = collect_placed_machines(self.session)
        self.assertEqual(record["id"], 7)
        self.assertEqual(record["machine_name"], "Edgebander")
        self.assertEqual(record["price_capex"], 125000)
        self.assertEqual(record["rotation"], 0)
        self.assertIn("x", record)
        self.assertIn("y", record)

    def test_default_drop_position(self):
        """A 1 m body dropped at the default offset is centred at (90, 90) px."""
        add_machine(self.session, make_machine())
        [record] = collect_placed_machines(self.session)
        self.assertEqual((record["x"], record["y"]), (2.25, 17.75))

    def test_buffer_zones_are_not_published(self):
        add_machine(self.session, make_machine())
        add_custom_working_area(self.session)
        self.assertEqual(len(collect_placed_machines(self.session)), 1)

    def test_rotation_and_position_are_reported(self):
        place_at(self.session, make_machine(), 12, 8)
        rotate_active_object(self.session)
        record = self.published[-1][0]
        self.assertEqual((record["x"], record["y"], record["rotation"]), (12.0, 8.0, 90))

    def test_published_records_are_copies(self):
        add_machine(self.session, make_machine())
        self.published[-1][0]["machine_name"] = "changed"
        self.assertEqual(collect_placed_machines(self.session)[0]["machine_name"], "Saw")


class TestView(unittest.TestCase):

    def setUp(self):
        self.session, _, _ = make_session()

    def test_zoom_steps(self):
        self.assertAlmostEqual(self.session.zoom_in(), 1.2)
        self.assertAlmostEqual(self.session.zoom_out(), 1.0)

    def test_zoom_limits(self):
        for _ in range(20):
            self.session.zoom_in()
        self.assertEqual(self.session.zoom, 3.0)
        for _ in range(40):
            self.session.zoom_out()
        self.assertEqual(self.session.zoom, 0.5)

    def test_reset_view(self):
        self.session.zoom_in()
        self.session.pan = (15.0, -30.0)
        self.session.reset_view()
        self.assertEqual((self.session.zoom, self.session.pan), (1.0, (0.0, 0.0)))


class TestUnitsAndInputs(unittest.TestCase):

    def setUp(self):
        self.session, _, _ = make_session()

    def test_floor_inputs(self):
        self.assertEqual(self.session.floor_inputs(), ("30.00", "20.00"))
        self.session.set_units(False)
        self.assertEqual(self.session.floor_inputs(), ("98.43", "65.62"))
        self.assertEqual(self.session.unit_label, "ft")

    def test_floor_area(self):
        self.assertEqual(self.session.floor_area(), "600 m² / 6458 ft²")

    def test_position_inputs_follow_selection(self):
        place_at(self.session, make_machine(), 12.5, 4)
        self.assertEqual(self.session.position_inputs(), ("12.50", "4.00"))
        clear_selection(self.session)
        self.assertIsNone(self.session.position_inputs())


class TestFloorResize(unittest.TestCase):

    def setUp(self):
        self.session, self.published, self.notes = make_session()

    def test_grid_lines_include_both_borders(self):
        self.assertEqual(len(self.session.grid), 31 + 21)
        self.assertTrue(self.session.set_floor_dimensions(10, 10))
        self.assertEqual(len(self.session.grid), 22)
        self.assertEqual(self.session.floor_width_px, 400)

    def test_invalid_sizes_are_rejected(self):
        for width, height in ((0, 10), (10, -1), (float("nan"), 10), (10, float("inf"))):
            self.assertFalse(self.session.set_floor_dimensions(width, height))
            self.assertEqual(self.notes[-1].level, "error")
        self.assertEqual((self.session.floor.width_m, self.session.floor.height_m), (30, 20))

    def test_resize_in_feet(self):
        self.session.set_units(False)
        self.session.set_floor_dimensions(32.8084, 65.6168, in_display_units=True)
        self.assertAlmostEqual(self.session.floor.width_m, 10)
        self.assertAlmostEqual(self.session.floor.height_m, 20)

    def test_objects_outside_stay_put(self):
        obj = place_at(self.session, make_machine(), 25, 5)
        center = obj.center
        before = len(self.published)
        self.session.set_floor_dimensions(10, 20)
        self.assertEqual(obj.center, center)
        self.assertFalse(self.session.is_inside_floor(obj))
        self.assertEqual(len(self.published), before + 1)


class TestNotifications(unittest.TestCase):

    def test_queue_is_bounded_and_drained(self):
        session, _, notes = make_session()
        for i in range(60):
            session.notify("info", f"message {i}")
        self.assertEqual(len(notes), 60)
        drained = session.drain_notifications()
        self.assertEqual(len(drained), 50)
        self.assertEqual(drained[-1].message, "message 59")
        self.assertEqual(session.drain_notifications(), [])


class TestSnapshot(unittest.TestCase):

    def test_snapshot_is_json_safe(self):
        session, _, _ = make_session()
        place_at(session, make_machine(1), 5, 10)
        place_at(session, make_machine(2), 5.5, 10)
        add_custom_working_area(session, 3, 2, "Staging")
        snapshot = session_to_dict(session)
        self.assertEqual(set(snapshot), {
            "floor", "units", "view", "grid", "objects", "active_id",
            "position_inputs", "collision", "banner", "annotations",
        })
        self.assertTrue(snapshot["collision"]["any"])
        self.assertIsNotNone(snapshot["banner"])
        self.assertEqual(len(snapshot["objects"]), 3)
        json.dumps(snapshot)


if __name__ == "__main__":
    unittest.main()
