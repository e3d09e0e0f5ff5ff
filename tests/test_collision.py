"""Tests for collision detection and highlighting."""

from __future__ import annotations

import unittest
from dataclasses import replace

from factory_layout.config import LAYOUT_RULES, ALARM_FILL, ALARM_STROKE
from factory_layout.layout import (
    add_machine, add_custom_working_area, detect_collisions,
    move_active_object, rotate_active_object, select_object,
)
from factory_layout.layout.collision import BANNER_TEXT
from factory_layout.layout.models import ROLE_BODY, ROLE_WORKING_AREA
from tests.layout_fixture import make_machine, make_session, place_at


class TestCollisionDetection(unittest.TestCase):

    def setUp(self):
        self.session, _, _ = make_session()

    def _overlapping_pair(self):
        """Two 1 m machines whose bodies overlap by 1 px on both axes.

        The first body spans x 180–220, y 380–420 px.
        """
        a = place_at(self.session, make_machine(1, "A"), 5, 10)
        b = add_machine(self.session, make_machine(2, "B"))
        move_active_object(self.session, (239, 439))
        return a, b

    def test_one_pixel_overlap_flags_both(self):
        a, b = self._overlapping_pair()
        report = self.session.collisions
        self.assertTrue(report.any_collision)
        self.assertEqual(report.colliding_ids, {a.id, b.id})
        for obj in (a, b):
            body = obj.shape(ROLE_BODY)
            self.assertEqual((body.fill, body.stroke), (ALARM_FILL, ALARM_STROKE))
            self.assertTrue(obj.is_collision_highlighted)
        self.assertIsNotNone(self.session.banner)
        self.assertEqual(self.session.banner.text, BANNER_TEXT)

    def test_separating_clears_flags_and_banner(self):
        a, b = self._overlapping_pair()
        move_active_object(self.session, (241, 439))
        self.assertFalse(self.session.collisions.any_collision)
        self.assertIsNone(self.session.banner)
        for obj in (a, b):
            self.assertEqual(obj.shape(ROLE_BODY).fill, "#3B82F6")
            self.assertFalse(obj.is_collision_highlighted)

    def test_touching_counts_as_collision(self):
        place_at(self.session, make_machine(1), 5, 10)
        add_machine(self.session, make_machine(2))
        move_active_object(self.session, (240, 400))
        self.assertTrue(self.session.collisions.any_collision)

    def test_relation_is_symmetric(self):
        place_at(self.session, make_machine(1), 5, 10)
        place_at(self.session, make_machine(2), 5.5, 10.5)
        place_at(self.session, make_machine(3), 20, 5)
        report = detect_collisions(self.session)
        flagged = {frozenset(p) for p in report.pairs}
        for x, y in report.pairs:
            self.assertIn(frozenset((y, x)), flagged)
            self.assertIn(x, report.colliding_ids)
            self.assertIn(y, report.colliding_ids)
        self.assertEqual(len(report.colliding_ids), 2)
        self.assertEqual(report.any_collision, self.session.banner is not None)

    def test_single_machine_never_collides(self):
        add_machine(self.session, make_machine())
        self.assertFalse(detect_collisions(self.session).any_collision)
        self.assertIsNone(self.session.banner)

    def test_buffer_zone_never_collides(self):
        machine = add_machine(self.session, make_machine(width_mm=4000, length_mm=3000))
        add_custom_working_area(self.session, 10, 10)
        report = detect_collisions(self.session)
        self.assertFalse(report.any_collision)
        self.assertFalse(machine.is_collision_highlighted)

    def test_banner_is_centred_at_top(self):
        self._overlapping_pair()
        banner = self.session.banner
        self.assertAlmostEqual(banner.x + banner.width / 2, 600)
        self.assertEqual(banner.y, 10)

    def test_rotating_into_a_neighbour_flags_both(self):
        """A 4 x 1 m body turned upright reaches a machine 1.5 m above it."""
        long = place_at(self.session, make_machine(1, "Long", width_mm=4000), 5, 10)
        other = place_at(self.session, make_machine(2), 5, 12)
        self.assertFalse(self.session.collisions.any_collision)

        select_object(self.session, long.id)
        rotate_active_object(self.session)
        report = self.session.collisions
        self.assertEqual(report.pairs, [(long.id, other.id)])
        self.assertTrue(long.is_collision_highlighted)
        self.assertTrue(other.is_collision_highlighted)

        rotate_active_object(self.session)
        self.assertFalse(self.session.collisions.any_collision)

    def test_palette_reset_keeps_custom_colours(self):
        custom = place_at(self.session, make_machine(1, isCustom=True), 5, 10)
        add_machine(self.session, make_machine(2))
        move_active_object(self.session, (200, 400))
        self.assertEqual(custom.shape(ROLE_BODY).fill, ALARM_FILL)
        move_active_object(self.session, (800, 400))
        self.assertEqual(custom.shape(ROLE_BODY).fill, "#9333EA")
        self.assertEqual(custom.shape(ROLE_WORKING_AREA).stroke, "#A855F7")


class TestFootprintExtent(unittest.TestCase):
    """With the footprint extent, working areas take part in the check."""

    def test_working_areas_collide_in_footprint_mode(self):
        session, _, _ = make_session(rules=replace(LAYOUT_RULES, extent_mode="footprint"))
        place_at(session, make_machine(1), 5, 10)
        place_at(session, make_machine(2), 6.5, 10)
        self.assertTrue(session.collisions.any_collision)

    def test_same_layout_is_clear_in_body_mode(self):
        session, _, _ = make_session()
        place_at(session, make_machine(1), 5, 10)
        place_at(session, make_machine(2), 6.5, 10)
        self.assertFalse(session.collisions.any_collision)

    def test_reselecting_does_not_change_flags(self):
        session, _, _ = make_session()
        a = place_at(session, make_machine(1), 5, 10)
        place_at(session, make_machine(2), 5, 10)
        select_object(session, a.id)
        self.assertTrue(session.collisions.any_collision)


if __name__ == "__main__":
    unittest.main()
