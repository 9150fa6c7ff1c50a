from __future__ import annotations

import pytest

from attendpro.core.enums import ZoneSelection
from attendpro.core.exceptions import LocationAccessDenied, ValidationError
from attendpro.geofence.evaluator import GeoFenceEvaluator, haversine_distance, policy_for
from attendpro.geofence.model import GeoPoint, Location
from attendpro.geofence.policies.nearest_match import NearestMatchPolicy
from attendpro.geofence.position import ReportedPosition

HQ = Location(location_id=1, name="HQ", latitude=10.7769, longitude=106.7009, radius=100.0)
ANNEX = Location(location_id=2, name="Annex", latitude=10.7772, longitude=106.7012, radius=100.0)
REMOTE = Location(location_id=3, name="Depot", latitude=21.0285, longitude=105.8542, radius=500.0)


def test_haversine_zero_for_same_point():
    p = GeoPoint(10.7769, 106.7009)
    assert haversine_distance(p, p) == 0.0


def test_haversine_one_degree_latitude_is_about_111_km():
    d = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(1.0, 0.0))
    assert d == pytest.approx(111_195, rel=1e-3)


def test_haversine_antipodal_points_do_not_fail():
    d = haversine_distance(GeoPoint(0.0, 0.0), GeoPoint(0.0, 180.0))
    assert d == pytest.approx(20_015_087, rel=1e-3)


def test_point_at_zone_center_matches():
    match = GeoFenceEvaluator().is_within_any_zone(HQ.center, [HQ])
    assert match is not None
    assert match.location.location_id == 1
    assert match.distance_m == 0.0


def test_point_outside_every_zone_is_no_match():
    match = GeoFenceEvaluator().is_within_any_zone(GeoPoint(10.8231, 106.6297), [HQ, ANNEX, REMOTE])
    assert match is None


def test_no_zones_configured_is_no_match():
    assert GeoFenceEvaluator().is_within_any_zone(HQ.center, []) is None


def test_boundary_is_inclusive():
    # Point exactly on the radius counts as inside.
    point = GeoPoint(10.7769, 106.7009 + 0.0005)
    distance = haversine_distance(point, HQ.center)
    zone = Location(location_id=9, name="Edge", latitude=HQ.latitude, longitude=HQ.longitude, radius=distance)
    assert GeoFenceEvaluator().is_within_any_zone(point, [zone]) is not None


def test_first_match_returns_first_zone_in_configured_order():
    point = ANNEX.center
    match = GeoFenceEvaluator().is_within_any_zone(point, [HQ, ANNEX])
    assert match.location.location_id == 1


def test_nearest_match_returns_closest_zone():
    point = ANNEX.center
    match = GeoFenceEvaluator(NearestMatchPolicy()).is_within_any_zone(point, [HQ, ANNEX])
    assert match.location.location_id == 2
    assert match.distance_m == 0.0


def test_matches_lists_every_containing_zone():
    matches = GeoFenceEvaluator().matches(ANNEX.center, [HQ, ANNEX, REMOTE])
    assert [m.location.location_id for m in matches] == [1, 2]


def test_policy_for_resolves_setting_values():
    assert isinstance(policy_for("nearest"), NearestMatchPolicy)
    assert not isinstance(policy_for(ZoneSelection.FIRST), NearestMatchPolicy)
    with pytest.raises(ValueError):
        policy_for("closest")


def test_out_of_range_coordinates_are_rejected():
    with pytest.raises(ValidationError):
        GeoFenceEvaluator().matches(GeoPoint(91.0, 0.0), [HQ])


def test_reported_position_returns_point():
    pos = ReportedPosition.from_payload({"position": {"latitude": 10.5, "longitude": 106.5}})
    assert pos.get_current_position() == GeoPoint(10.5, 106.5)


@pytest.mark.parametrize("payload", [{"position_error": "PERMISSION_DENIED"}, {"position": None}, {}])
def test_reported_position_without_fix_is_access_denied(payload):
    with pytest.raises(LocationAccessDenied):
        ReportedPosition.from_payload(payload).get_current_position()


def test_misconfigured_zone_is_rejected():
    broken = Location(location_id=7, name="Typo", latitude=10.7, longitude=206.7, radius=100.0)
    with pytest.raises(ValidationError):
        GeoFenceEvaluator().matches(HQ.center, [HQ, broken])


def test_origin_zone_classification_is_fixed():
    zone = Location(location_id=10, name="Origin", latitude=0.0, longitude=0.0, radius=100.0)
    evaluator = GeoFenceEvaluator()

    assert evaluator.is_within_any_zone(GeoPoint(0.0, 0.0), [zone]) is not None

    edge = GeoPoint(0.0, 0.0009)
    assert haversine_distance(edge, zone.center) == pytest.approx(100.08, abs=0.01)
    assert evaluator.is_within_any_zone(edge, [zone]) is None

    # Ten radii east of the center.
    assert evaluator.is_within_any_zone(GeoPoint(0.0, 0.009), [zone]) is None
