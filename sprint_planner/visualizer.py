"""
Visualizer for Sprint Planner

Creates text and HTML reports for sprint capacity and remaining effort.
"""

from html import escape
from typing import Literal, Optional

from .analyzer import EffortStatus, PersonEffort, SprintEffortSummary
from .capacity import SprintCapacity
from .i18n import DEFAULT_LOCALE, translate


BOX_WIDTH = 60


# ASCII art for terminal output
class ASCIICharts:
    """Generate ASCII art charts for terminal/text output."""

    @staticmethod
    def horizontal_bar(
        value: float,
        max_value: float = 100,
        width: int = 20,
        filled_char: str = "█",
        empty_char: str = "░"
    ) -> str:
        """Create a horizontal bar chart."""
        if max_value <= 0:
            return empty_char * width

        filled = int((value / max_value) * width)
        filled = max(0, min(filled, width))
        return filled_char * filled + empty_char * (width - filled)

    @staticmethod
    def utilization_bar(member: PersonEffort, width: int = 20) -> str:
        """Create a utilization bar with a status marker."""
        utilization = member.utilization_percent
        if utilization is None:
            return f"{ASCIICharts.horizontal_bar(0, 0, width)}   N/A"

        marker = {
            EffortStatus.HEALTHY: "+",
            EffortStatus.AT_CAPACITY: "~",
            EffortStatus.OVERLOADED: "!"
        }[member.status]
        bar = ASCIICharts.horizontal_bar(utilization, 100, width)
        return f"{bar} {utilization:5.1f}% {marker}"


def _row(text: str = "") -> str:
    return f"║{text}".ljust(BOX_WIDTH + 1) + "║"


def _rule(char: str = "─") -> str:
    return "║" + char * BOX_WIDTH + "║"


class TextReporter:
    """Generate text-based reports."""

    @staticmethod
    def effort_report(
        summary: SprintEffortSummary,
        sprint_name: Optional[str] = None,
        locale: str = DEFAULT_LOCALE
    ) -> str:
        """Generate a text report of remaining effort per person."""
        t = lambda key: translate(key, locale)
        lines = []

        # Header
        title = t("report.effort.title")
        if sprint_name:
            title = f"{title}: {sprint_name}"
        lines.append("╔" + "═" * BOX_WIDTH + "╗")
        lines.append("║" + title[:BOX_WIDTH].center(BOX_WIDTH) + "║")
        lines.append("╠" + "═" * BOX_WIDTH + "╣")

        # Summary
        lines.append(_row(f" {t('report.summary')}"))
        lines.append(_rule())
        lines.append(_row(f"  {t('report.sprint_hours')}: {summary.sprint_hours:g}h"))
        lines.append(_row(f"  {t('report.team_capacity')}: {summary.team_capacity_hours:g}h"))
        lines.append(_row(
            f"  {t('report.planned')}: {summary.total_planned_hours:g}h  "
            f"{t('report.leave')}: {summary.total_leave_hours:g}h  "
            f"{t('report.remaining')}: {summary.total_remaining_hours:g}h"
        ))
        lines.append(_row(
            f"  {t('status.healthy')}: {summary.healthy_count}  "
            f"{t('status.at_capacity')}: {summary.at_capacity_count}  "
            f"{t('status.overloaded')}: {summary.overloaded_count}"
        ))
        lines.append("╠" + "═" * BOX_WIDTH + "╣")

        # People
        lines.append(_row(f" {t('report.people')}"))
        lines.append(_rule())
        if not summary.members:
            lines.append(_row(f"  {t('report.no_people')}"))

        for member in summary.members:
            name = member.name[:15].ljust(15)
            lines.append(_row(f"  {name} {ASCIICharts.utilization_bar(member, 15)}"))
            lines.append(_row(
                f"    {member.remaining_hours:g} {t('report.hours_left')} · "
                f"{t('report.planned')}: {member.planned_hours:g}h · "
                f"{t('report.leave')}: {member.leave_hours:g}h"
            ))

        if summary.dangling_person_ids:
            lines.append(_rule())
            ids = ", ".join(summary.dangling_person_ids)
            lines.append(_row(f"  {t('report.unknown_people')}: {ids}"[:BOX_WIDTH]))

        # Footer
        lines.append("╚" + "═" * BOX_WIDTH + "╝")

        return "\n".join(lines)

    @staticmethod
    def capacity_report(
        capacities: list[SprintCapacity],
        locale: str = DEFAULT_LOCALE
    ) -> str:
        """Generate a text report of business days and hours per sprint."""
        t = lambda key: translate(key, locale)
        lines = []

        lines.append("╔" + "═" * BOX_WIDTH + "╗")
        lines.append("║" + t("report.capacity.title").center(BOX_WIDTH) + "║")
        lines.append("╠" + "═" * BOX_WIDTH + "╣")

        if not capacities:
            lines.append(_row(f"  {t('report.no_sprints')}"))

        for capacity in capacities:
            name = capacity.sprint_name[:20].ljust(20)
            lines.append(_row(
                f"  {name} {t('report.business_days')}: {capacity.business_days:>3}  "
                f"{capacity.planned_hours:g}h"
            ))

        lines.append("╚" + "═" * BOX_WIDTH + "╝")

        return "\n".join(lines)


class HTMLReporter:
    """Generate HTML reports."""

    @staticmethod
    def effort_cards(
        summary: SprintEffortSummary,
        sprint_name: Optional[str] = None,
        locale: str = DEFAULT_LOCALE
    ) -> str:
        """Generate an HTML card list of remaining effort."""
        t = lambda key: translate(key, locale)

        cards = []
        for member in summary.members:
            color = "#16a34a" if member.remaining_hours >= 0 else "#dc2626"
            cards.append(f"""
            <div class="member-card">
                <div class="member-name">{escape(member.name)}</div>
                <div class="remaining" style="color: {color};">{member.remaining_hours:g} {t('report.hours_left')}</div>
                <div class="member-details">
                    <span>{t('report.planned')}: {member.planned_hours:g}h</span>
                    <span>{t('report.leave')}: {member.leave_hours:g}h</span>
                </div>
            </div>
            """)
        member_cards = "".join(cards)

        title = t("report.effort.title")
        if sprint_name:
            title = f"{title}: {escape(sprint_name)}"

        return f"""
        <!DOCTYPE html>
        <html>
        <head>
            <meta charset="utf-8">
            <title>{title}</title>
            <style>
                body {{ font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; margin: 0; padding: 20px; background: #f8fafc; }}
                .members {{ display: grid; grid-template-columns: repeat(auto-fill, minmax(240px, 1fr)); gap: 12px; }}
                .member-card {{ background: white; padding: 16px; border-radius: 8px; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }}
                .member-name {{ font-weight: 600; margin-bottom: 8px; }}
                .remaining {{ font-size: 20px; font-weight: bold; margin: 8px 0; }}
                .member-details {{ color: #64748b; font-size: 12px; display: flex; gap: 12px; }}
            </style>
        </head>
        <body>
            <h1>{title}</h1>
            <p>{t('report.sprint_hours')}: {summary.sprint_hours:g}h</p>
            <div class="members">
                {member_cards}
            </div>
        </body>
        </html>
        """


# Main visualization class
class Visualizer:
    """
    Main visualizer class that supports multiple output formats.

    Usage:
        viz = Visualizer()
        print(viz.effort_report(summary, format="text"))
        html = viz.effort_report(summary, format="html", locale="en")
    """

    def __init__(self, locale: str = DEFAULT_LOCALE):
        self.locale = locale
        self.text = TextReporter()
        self.html = HTMLReporter()

    def effort_report(
        self,
        summary: SprintEffortSummary,
        sprint_name: Optional[str] = None,
        format: Literal["text", "html"] = "text",
        locale: Optional[str] = None
    ) -> str:
        """Generate remaining-effort report in specified format."""
        locale = locale or self.locale
        if format == "text":
            return self.text.effort_report(summary, sprint_name, locale)
        elif format == "html":
            return self.html.effort_cards(summary, sprint_name, locale)
        else:
            raise ValueError(f"Unknown format: {format}")

    def capacity_report(
        self,
        capacities: list[SprintCapacity],
        locale: Optional[str] = None
    ) -> str:
        """Generate sprint capacity report."""
        return self.text.capacity_report(capacities, locale or self.locale)
