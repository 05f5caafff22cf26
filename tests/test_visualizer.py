"""
Tests for text and HTML reports.
"""

import pytest

from sprint_planner.analyzer import PersonEffort, SprintEffortSummary
from sprint_planner.capacity import SprintCapacity
from sprint_planner.visualizer import ASCIICharts, Visualizer


def make_summary() -> SprintEffortSummary:
    members = [
        PersonEffort(person_id="a", name="Ayşe Yılmaz", sprint_hours=40, planned_hours=10, leave_hours=8),
        PersonEffort(person_id="b", name="Burak <Dev>", sprint_hours=40, planned_hours=50),
    ]
    return SprintEffortSummary(sprint_hours=40, members=members)


class TestASCIICharts:
    """Tests for ASCII bars."""

    def test_horizontal_bar(self):
        assert ASCIICharts.horizontal_bar(50, 100, 10) == "█" * 5 + "░" * 5

    def test_bar_is_clamped(self):
        assert ASCIICharts.horizontal_bar(150, 100, 4) == "████"
        assert ASCIICharts.horizontal_bar(-5, 100, 4) == "░░░░"

    def test_utilization_bar_without_sprint_hours(self):
        member = PersonEffort(person_id="a", name="A", sprint_hours=0)

        assert ASCIICharts.utilization_bar(member, 5).endswith("N/A")


class TestTextReports:
    """Tests for text reports."""

    def test_effort_report_turkish(self):
        report = Visualizer().effort_report(make_summary(), "Sprint 7")

        assert "KALAN EFORLAR: Sprint 7" in report
        assert "22 saat kaldı" in report
        assert "-10 saat kaldı" in report

    def test_effort_report_english(self):
        report = Visualizer(locale="en").effort_report(make_summary())

        assert "REMAINING EFFORT" in report
        assert "22 hours left" in report

    def test_rows_share_width(self):
        report = Visualizer().effort_report(make_summary(), "Sprint 7")
        widths = {len(line) for line in report.splitlines()}

        assert len(widths) == 1

    def test_dangling_people_listed(self):
        summary = SprintEffortSummary(sprint_hours=40, dangling_person_ids=["ghost"])

        report = Visualizer(locale="en").effort_report(summary)

        assert "Unknown people: ghost" in report
        assert "No people defined" in report

    def test_capacity_report(self):
        capacity = SprintCapacity(
            sprint_id="s1",
            sprint_name="Sprint 7",
            business_days=10,
            holiday_days=0,
            daily_hours=8
        )

        report = Visualizer(locale="en").capacity_report([capacity])

        assert "Sprint 7" in report
        assert "80h" in report


class TestHTMLReports:
    """Tests for HTML reports."""

    def test_effort_cards(self):
        html = Visualizer(locale="en").effort_report(make_summary(), "Sprint 7", format="html")

        assert "22 hours left" in html
        assert "#dc2626" in html
        assert "Burak &lt;Dev&gt;" in html

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            Visualizer().effort_report(make_summary(), format="pdf")
