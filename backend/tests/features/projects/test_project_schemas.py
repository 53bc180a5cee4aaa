"""
Tests for waypoint and user request validation.
"""

import json

import pytest
from pydantic import ValidationError

from fieldroute.features.projects.schemas import GpsDetails, PoleDetails, WaypointCreate
from fieldroute.features.users.schemas import UserCreate


BASE = {
    "name": "Pole 1",
    "latitude": 21.25,
    "longitude": 81.63,
    "route_type": "new",
    "route_starting_point": "Substation A",
    "route_ending_point": "Village B",
}


class TestWaypointCreate:

    def test_defaults(self):
        wp = WaypointCreate(**BASE)

        assert not wp.is_start and not wp.is_end
        assert wp.distance_from_previous == 0.0
        assert wp.pole_details == []
        assert wp.gps_details == []
        assert wp.image is None

    def test_start_and_end_rejected(self):
        with pytest.raises(ValidationError):
            WaypointCreate(**BASE, is_start=True, is_end=True)

    def test_json_encoded_details(self):
        gps = [{"timeAndDate": "2025-03-01 09:00", "userId": "EMP1", "feederName": "F-12"}]

        wp = WaypointCreate(**BASE, gps_details=json.dumps(gps), pole_details="")

        assert len(wp.gps_details) == 1
        assert wp.gps_details[0].feeder_name == "F-12"
        assert wp.gps_details[0].user_id == "EMP1"
        assert wp.pole_details == []

    @pytest.mark.parametrize("value", ["not json", json.dumps({"a": 1})])
    def test_bad_details_rejected(self, value):
        with pytest.raises(ValidationError):
            WaypointCreate(**BASE, pole_details=value)

    @pytest.mark.parametrize("field", ["name", "route_type", "route_starting_point", "route_ending_point"])
    def test_required_text_fields(self, field):
        data = {**BASE, field: ""}
        with pytest.raises(ValidationError):
            WaypointCreate(**data)

    def test_latitude_range(self):
        with pytest.raises(ValidationError):
            WaypointCreate(**{**BASE, "latitude": 91})


POLE = {
    "poleNo": 4,
    "existingOrNewProposed": "new",
    "poleDiscription": "LT pole near pump house",
    "poleType": "PSC",
    "poleSizeInMeter": 8,
    "poleStructure": "single",
    "abSwitch": 1,
}


class TestEquipmentRecords:

    def test_pole_record(self):
        pole = PoleDetails(**POLE)

        assert pole.pole_type == "PSC"
        assert pole.ab_switch == 1
        assert pole.stay_wire_712 == 0
        assert pole.three_phase_lt_distribution_box == 0

    def test_pole_record_dumps_wire_keys(self):
        data = PoleDetails(**POLE, _3PhaseLTDistributionBox=2).model_dump(by_alias=True)

        assert data["poleDiscription"] == "LT pole near pump house"
        assert data["_3PhaseLTDistributionBox"] == 2
        assert data["angle4Feet"] == 0
        assert data["iHuckClamp"] == 0
        assert data["stayWire712"] == 0

    @pytest.mark.parametrize("missing", [
        "existingOrNewProposed", "poleDiscription", "poleType", "poleSizeInMeter", "poleStructure",
    ])
    def test_pole_required_fields(self, missing):
        data = {k: v for k, v in POLE.items() if k != missing}
        with pytest.raises(ValidationError):
            PoleDetails(**data)

    def test_gps_record(self):
        gps = GpsDetails(
            timeAndDate="2025-03-01 09:00",
            userId="EMP1",
            transformerKV="11",
            startPointCoordinates={"latitude": 21.25, "longitude": 81.63},
        )

        assert gps.transformer_kv == "11"
        assert gps.start_point_coordinates.latitude == 21.25
        assert gps.dtr_spotting_angle_with_clamp == 0
        assert gps.model_dump(by_alias=True)["transformerKV"] == "11"

    @pytest.mark.parametrize("missing", ["timeAndDate", "userId"])
    def test_gps_required_fields(self, missing):
        data = {"timeAndDate": "2025-03-01 09:00", "userId": "EMP1"}
        del data[missing]
        with pytest.raises(ValidationError):
            GpsDetails(**data)

    def test_unknown_records_rejected(self):
        with pytest.raises(ValidationError):
            WaypointCreate(**BASE, pole_details=[{"bogus": "field"}])
        with pytest.raises(ValidationError):
            WaypointCreate(**BASE, gps_details=json.dumps([{"nothing": 1}]))

    def test_quantity_must_be_numeric(self):
        with pytest.raises(ValidationError):
            PoleDetails(**{**POLE, "anchorRod": "many"})


class TestUserCreate:

    def test_valid_mobile(self):
        assert UserCreate(emp_id="EMP1", mobile_no="9876543210").mobile_no == "9876543210"

    def test_invalid_mobile(self):
        with pytest.raises(ValidationError):
            UserCreate(emp_id="EMP1", mobile_no="12345")

    def test_default_role(self):
        assert UserCreate(emp_id="EMP1").role.value == "employee"
