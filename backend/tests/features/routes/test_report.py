"""
Tests for ReportAggregator.

Covers sorting, date/project grouping and the display projection.
"""

from datetime import datetime

import pytest

from fieldroute.features.routes import (
    EmployeeRef,
    Path,
    PathBuilder,
    PathConflict,
    Project,
    ReportAggregator,
)


DAY_1 = datetime(2025, 3, 1, 9, 0)
DAY_2 = datetime(2025, 3, 2, 9, 0)
DAY_3 = datetime(2025, 3, 3, 9, 0)


def make_project(project_id, *paths):
    return Project(
        project_id=project_id,
        circle="Raipur",
        division="City-1",
        paths=[Path(waypoints=list(p)) for p in paths],
    )


def closed_path(make_waypoint, employee, start_ts, end_ts, midpoints=0):
    points = [make_waypoint(employee, is_start=True, timestamp=start_ts)]
    points += [make_waypoint(employee, timestamp=start_ts) for _ in range(midpoints)]
    points.append(make_waypoint(employee, is_end=True, timestamp=end_ts))
    return points


# =============================================================================
# Scenarios
# =============================================================================

class TestScenarios:

    def test_start_mid_end_then_reconstruct(self, make_waypoint):
        """Submitted start/mid/end comes back as one dated segment."""
        project = Project(project_id="PRJ001", circle="Raipur", division="City-1")
        for kind in ("start", "mid", "end"):
            ts = DAY_2 if kind == "end" else DAY_1
            wp = make_waypoint(is_start=kind == "start", is_end=kind == "end", timestamp=ts)
            PathBuilder.submit_waypoint(project, "emp-a", wp)

        entries = ReportAggregator.reconstruct([project], "emp-a")

        assert len(entries) == 1
        assert entries[0].project_id == "PRJ001"
        assert entries[0].date == "2025-03-02"
        assert len(entries[0].waypoints) == 1
        assert len(entries[0].waypoints[0]) == 3

    def test_double_start_rejected(self, make_waypoint):
        project = Project(project_id="PRJ001", circle="Raipur", division="City-1")
        PathBuilder.submit_waypoint(project, "emp-a", make_waypoint(is_start=True))

        with pytest.raises(PathConflict):
            PathBuilder.submit_waypoint(project, "emp-a", make_waypoint(is_start=True))

        entries = ReportAggregator.reconstruct([project], "emp-a")
        assert len(entries[0].waypoints[0]) == 1

    def test_interleaved_employees(self, make_waypoint):
        """Each employee's report holds only their own waypoints."""
        project = Project(project_id="PRJ001", circle="Raipur", division="City-1")
        sequence = [
            ("emp-a", "start"), ("emp-b", "start"), ("emp-a", "mid"),
            ("emp-b", "mid"), ("emp-b", "end"), ("emp-a", "mid"), ("emp-a", "end"),
        ]
        for employee, kind in sequence:
            wp = make_waypoint(employee, is_start=kind == "start", is_end=kind == "end")
            PathBuilder.submit_waypoint(project, employee, wp)

        a = ReportAggregator.reconstruct([project], "emp-a")
        b = ReportAggregator.reconstruct([project], "emp-b")

        a_points = [wp for entry in a for seg in entry.waypoints for wp in seg]
        b_points = [wp for entry in b for seg in entry.waypoints for wp in seg]
        assert len(a_points) == 4
        assert len(b_points) == 3
        a_ids = {wp.id for wp in project.paths[0].waypoints}
        assert {wp.id for wp in a_points} == a_ids
        assert not a_ids & {wp.id for wp in b_points}

    def test_later_date_first(self, make_waypoint):
        early = closed_path(make_waypoint, "emp-a", DAY_1, DAY_1)
        late = closed_path(make_waypoint, "emp-a", DAY_3, DAY_3)
        project = make_project("PRJ001", early, late)

        entries = ReportAggregator.reconstruct([project], "emp-a")

        assert [e.date for e in entries] == ["2025-03-03", "2025-03-01"]
        assert entries[0].waypoints[0][0].id == late[0].id


# =============================================================================
# Grouping
# =============================================================================

class TestGrouping:

    def test_same_day_same_project_is_merged(self, make_waypoint):
        morning = closed_path(make_waypoint, "emp-a", DAY_1, DAY_1.replace(hour=10))
        afternoon = closed_path(make_waypoint, "emp-a", DAY_1.replace(hour=14), DAY_1.replace(hour=15))
        project = make_project("PRJ001", morning, afternoon)

        entries = ReportAggregator.reconstruct([project], "emp-a")

        assert len(entries) == 1
        # Newest segment first
        assert [seg[0].id for seg in entries[0].waypoints] == [afternoon[0].id, morning[0].id]

    def test_same_day_projects_in_first_seen_order(self, make_waypoint):
        """Within a date, the project with the latest segment comes first."""
        p1 = make_project("PRJ001", closed_path(make_waypoint, "emp-a", DAY_1, DAY_1.replace(hour=10)))
        p2 = make_project("PRJ002", closed_path(make_waypoint, "emp-a", DAY_1, DAY_1.replace(hour=16)))

        entries = ReportAggregator.reconstruct([p1, p2], "emp-a")

        assert [e.project_id for e in entries] == ["PRJ002", "PRJ001"]
        assert {e.date for e in entries} == {"2025-03-01"}

    def test_project_repeats_across_dates(self, make_waypoint):
        p1 = make_project(
            "PRJ001",
            closed_path(make_waypoint, "emp-a", DAY_1, DAY_1),
            closed_path(make_waypoint, "emp-a", DAY_3, DAY_3),
        )
        p2 = make_project("PRJ002", closed_path(make_waypoint, "emp-a", DAY_2, DAY_2))

        entries = ReportAggregator.reconstruct([p1, p2], "emp-a")

        assert [(e.date, e.project_id) for e in entries] == [
            ("2025-03-03", "PRJ001"),
            ("2025-03-02", "PRJ002"),
            ("2025-03-01", "PRJ001"),
        ]

    def test_open_segment_dated_by_start(self, make_waypoint):
        closed = closed_path(make_waypoint, "emp-a", DAY_1, DAY_1)
        still_open = [
            make_waypoint(is_start=True, timestamp=DAY_2),
            make_waypoint(timestamp=DAY_3),
        ]
        project = make_project("PRJ001", closed, still_open)

        entries = ReportAggregator.reconstruct([project], "emp-a")

        assert [e.date for e in entries] == ["2025-03-02", "2025-03-01"]
        assert len(entries[0].waypoints[0]) == 2

    def test_no_waypoints_is_empty(self, make_waypoint):
        project = make_project("PRJ001", closed_path(make_waypoint, "emp-b", DAY_1, DAY_1))

        assert ReportAggregator.reconstruct([project], "emp-a") == []
        assert ReportAggregator.reconstruct([], "emp-a") == []

    def test_reconstruct_is_repeatable(self, make_waypoint):
        projects = [
            make_project(
                "PRJ001",
                closed_path(make_waypoint, "emp-a", DAY_1, DAY_2, midpoints=2),
                closed_path(make_waypoint, "emp-a", DAY_3, DAY_3),
            ),
            make_project("PRJ002", closed_path(make_waypoint, "emp-a", DAY_2, DAY_2)),
        ]

        first = ReportAggregator.reconstruct(projects, "emp-a")
        second = ReportAggregator.reconstruct(projects, "emp-a")

        assert first == second


# =============================================================================
# Display projection
# =============================================================================

class TestWaypointView:

    def test_creator_is_flattened(self, make_waypoint):
        project = make_project("PRJ001", closed_path(make_waypoint, "user-1", DAY_1, DAY_1))
        employees = {
            "user-1": EmployeeRef(
                id="user-1", emp_id="EMP123", name="Asha", role="employee", email="asha@example.com"
            )
        }

        entries = ReportAggregator.reconstruct([project], "user-1", employees)

        creator = entries[0].waypoints[0][0].created_by
        assert creator.emp_id == "EMP123"
        assert creator.name == "Asha"
        assert creator.email == "asha@example.com"

    def test_unknown_creator_is_none(self, make_waypoint):
        project = make_project("PRJ001", closed_path(make_waypoint, "user-1", DAY_1, DAY_1))

        entries = ReportAggregator.reconstruct([project], "user-1")

        assert entries[0].waypoints[0][0].created_by is None

    def test_equipment_lists_carried_through(self, make_waypoint):
        pole = {"poleNo": 7, "poleType": "PSC", "abSwitch": 1}
        start = make_waypoint(is_start=True, timestamp=DAY_1, pole_details=[pole])
        end = make_waypoint(is_end=True, timestamp=DAY_1)
        project = make_project("PRJ001", [start, end])

        view_start, view_end = ReportAggregator.reconstruct([project], "emp-a")[0].waypoints[0]

        assert view_start.pole_details == [pole]
        assert view_start.gps_details == []
        assert view_end.pole_details == []
        assert view_start.is_start and view_end.is_end
        assert view_start.latitude == start.latitude
        assert view_start.route_type == "new"
