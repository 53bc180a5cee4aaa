"""
Project-related schemas.

Pydantic models for project, waypoint and report operations.
"""

import json
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from fieldroute.features.users.schemas import EmployeeSummary


# === Projects ===

class ProjectCreate(BaseModel):
    """Request model for creating a new project."""

    project_id: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=100,
        description="Generated as Project_<n> when omitted",
    )
    circle: str = Field(min_length=1, max_length=100)
    division: str = Field(min_length=1, max_length=100)
    description: Optional[str] = None
    created_by: Optional[str] = Field(default=None, description="emp_id of the creating admin")


class AssignEmployeeRequest(BaseModel):
    """Assign an employee to a project."""

    emp_id: str = Field(min_length=1)


class ProjectResponse(BaseModel):
    """Project summary."""

    project_id: str
    circle: str
    division: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    employees: list[EmployeeSummary] = []

    class Config:
        from_attributes = True


class ProjectListResponse(BaseModel):
    message: str
    count: int
    projects: list[ProjectResponse]


class ProjectMutationResponse(BaseModel):
    message: str
    project: ProjectResponse


# === Equipment records ===

class EquipmentQuantities(BaseModel):
    """
    Equipment counts recorded at a pole or along a GPS leg.

    Keys travel in camelCase (`abSwitch`, `stayWire712`, ...); every
    quantity defaults to 0.
    """

    ab_switch: int = 0
    anchor_rod: int = 0
    anchoring_assembly: int = 0
    angle_4_feet: int = 0
    angle_9_feet: int = 0
    base_plat: int = 0
    channel_4_feet: int = 0
    channel_9_feet: int = 0
    do_channel: int = 0
    do_channel_back_clamp: int = 0
    do_fuse: int = 0
    disc_hardware: int = 0
    disc_insulator_polymeric: int = 0
    disc_insulator_porcelain: int = 0
    dtr_base_channel: int = 0
    dtr_spotting_angle: int = 0
    dvc_conductor: int = 0
    earthing_conductor: int = 0
    elbow: int = 0
    eye_bolt: int = 0
    gi_pin: int = 0
    gi_pipe: int = 0
    greeper: int = 0
    guy_insulator: int = 0
    i_huck_clamp: int = 0
    lighting_arrestor: int = 0
    pin_insulator_polymeric: int = 0
    pin_insulator_porcelain: int = 0
    pole_earthing: int = 0
    side_clamp: int = 0
    spotting_angle: int = 0
    spotting_channel: int = 0
    stay_clamp: int = 0
    stay_insulator: int = 0
    stay_road: int = 0
    stay_wire_712: int = 0
    suspension_assembly_clamp: int = 0
    top_channel: int = 0
    top_clamp: int = 0
    turn_buckle: int = 0
    v_cross_arm: int = 0
    v_cross_arm_clamp: int = 0
    x_bressing: int = 0
    earthing_coil: int = 0

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class PoleDetails(EquipmentQuantities):
    """Pole survey record."""

    pole_no: Optional[int] = None
    existing_or_new_proposed: str
    pole_discription: str
    pole_type: str
    pole_size_in_meter: float
    pole_structure: str
    three_phase_lt_distribution_box: int = Field(default=0, alias="_3PhaseLTDistributionBox")


class Coordinates(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class GpsDetails(EquipmentQuantities):
    """GPS leg record: location, feeder and transformer details."""

    time_and_date: str
    user_id: str
    district: Optional[str] = None
    route_start_point: Optional[str] = None
    length_in_meter: Optional[float] = None
    start_point_coordinates: Optional[Coordinates] = None
    current_waypoint_coordinates: Optional[Coordinates] = None

    substation_name: Optional[str] = None
    feeder_name: Optional[str] = None
    conductor: Optional[str] = None
    cable: Optional[str] = None
    transformer_location: Optional[str] = None
    transformer_type: Optional[str] = None
    transformer_pole_type: Optional[str] = None
    transformer_kv: Optional[str] = Field(default=None, alias="transformerKV")

    dtr_spotting_angle_with_clamp: int = 0


# === Waypoints ===

class WaypointCreate(BaseModel):
    """
    Waypoint submission.

    `pole_details` and `gps_details` accept either a list or a JSON-encoded
    list (form clients send them as strings). Each entry must be a valid
    equipment record.
    """

    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    distance_from_previous: float = 0.0
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    is_start: bool = False
    is_end: bool = False
    route_type: str = Field(min_length=1)
    route_starting_point: str = Field(min_length=1)
    route_ending_point: str = Field(min_length=1)
    image: Optional[str] = Field(default=None, description="Reference to an uploaded image")
    pole_details: list[PoleDetails] = []
    gps_details: list[GpsDetails] = []

    @field_validator("pole_details", "gps_details", mode="before")
    @classmethod
    def parse_json_list(cls, v, info):
        """Parse JSON-encoded equipment lists."""
        if v is None or v == "":
            return []
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError:
                raise ValueError(f"Invalid {info.field_name} format")
            if not isinstance(v, list):
                raise ValueError(f"{info.field_name} must be an array")
        return v

    @model_validator(mode="after")
    def check_flags(self):
        if self.is_start and self.is_end:
            raise ValueError("is_start and is_end cannot both be true")
        return self


class WaypointResponse(BaseModel):
    """Stored waypoint."""

    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    distance_from_previous: float = 0.0
    latitude: float
    longitude: float
    route_type: str
    route_starting_point: str
    route_ending_point: str
    is_start: bool
    is_end: bool
    image: Optional[str] = None
    pole_details: list[dict[str, Any]] = []
    gps_details: list[dict[str, Any]] = []
    timestamp: datetime
    created_by: str
    path_owner: Optional[str] = None

    class Config:
        from_attributes = True


class WaypointAddedResponse(BaseModel):
    message: str
    waypoint: WaypointResponse


class ProjectWaypointsResponse(BaseModel):
    """Paths of a project, each an ordered list of waypoints."""

    success: bool
    waypoints: list[list[WaypointResponse]]


class ExportWaypointsResponse(BaseModel):
    """Flattened waypoints of one employee in one project."""

    success: bool
    project_id: str
    emp_id: str
    count: int
    waypoints: list[WaypointResponse]


# === Employee history ===

class CreatorSchema(BaseModel):
    emp_id: str
    name: Optional[str] = None
    role: Optional[str] = None
    email: Optional[str] = None

    class Config:
        from_attributes = True


class WaypointViewSchema(BaseModel):
    id: Optional[str] = None
    route_type: str
    route_starting_point: str
    route_ending_point: str
    latitude: float
    longitude: float
    is_start: bool
    is_end: bool
    image: Optional[str] = None
    gps_details: list[dict[str, Any]] = []
    pole_details: list[dict[str, Any]] = []
    timestamp: datetime
    created_by: Optional[CreatorSchema] = None

    class Config:
        from_attributes = True


class ReportEntrySchema(BaseModel):
    """One project on one date, with one waypoint list per segment."""

    project_id: str
    circle: str
    division: str
    description: Optional[str] = None
    date: str
    waypoints: list[list[WaypointViewSchema]]

    class Config:
        from_attributes = True


class EmployeeHistoryResponse(BaseModel):
    success: bool
    emp_id: str
    employee_name: Optional[str] = None
    projects: list[ReportEntrySchema]
