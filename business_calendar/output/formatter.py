"""
Console output formatting using Rich.
"""

from datetime import date
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from business_calendar.data.schemas import BusinessDaysResult, HolidayEntry, WorkDayStepResult

WEEKDAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


class ConsoleFormatter:
    """Formats output for console display using Rich."""

    def __init__(self, console: Optional[Console] = None, language: str = "pt"):
        """
        Initialize the console formatter.

        Args:
            console: Rich console to print to. A new one is created if omitted.
            language: Language for holiday names ('pt' or 'en').
        """
        self.console = console or Console()
        self.language = language

    def print_result(self, result: BusinessDaysResult) -> None:
        """
        Print a business-day count.

        Args:
            result: BusinessDaysResult to display.
        """
        self.console.print()
        self.console.rule("[bold blue]Business Days[/bold blue]")
        self.console.print()

        summary_table = Table(show_header=False, box=None)
        summary_table.add_column("Label", style="cyan", width=20)
        summary_table.add_column("Value", style="white")
        summary_table.add_row(
            "Period:",
            f"{result.start_date.strftime('%d/%m/%Y')} - {result.end_date.strftime('%d/%m/%Y')}",
        )
        summary_table.add_row(
            "Weekend:",
            ", ".join(WEEKDAY_NAMES[day] for day in result.weekend),
        )
        self.console.print(Panel(summary_table, title="[bold]Period[/bold]"))

        calc_table = Table(show_header=False, box=None)
        calc_table.add_column("Label", style="cyan", width=20)
        calc_table.add_column("Value", style="white", justify="right", width=10)
        calc_table.add_row("Calendar Days:", str(result.calendar_days))
        calc_table.add_row("Weekend Days:", f"- {result.weekend_days}")
        calc_table.add_row("Holidays:", f"- {result.holidays_count}")
        calc_table.add_row("", "─" * 10)
        calc_table.add_row(
            Text("Working Days:", style="bold green"),
            Text(str(result.working_days), style="bold green"),
        )
        self.console.print(Panel(calc_table, title="[bold]Calculation[/bold]"))

        if result.months:
            month_table = Table(title="[bold]Per Month[/bold]")
            month_table.add_column("Month", style="cyan", width=9)
            month_table.add_column("From", width=12)
            month_table.add_column("To", width=12)
            month_table.add_column("Working Days", justify="right")
            for month in result.months:
                month_table.add_row(
                    f"{month.month:02d}/{month.year}",
                    month.first_day.strftime("%d/%m/%Y"),
                    month.last_day.strftime("%d/%m/%Y"),
                    str(month.working_days),
                )
            self.console.print(month_table)

        if result.holidays:
            self.print_holidays(result.holidays)

        for warning in result.warnings:
            self.console.print(f"[yellow]Warning:[/yellow] {warning}")

        self.console.print()

    def print_step(self, result: WorkDayStepResult) -> None:
        """Print the outcome of adding business days to a date."""
        direction = "after" if result.days >= 0 else "before"
        self.console.print(
            f"{abs(result.days)} business day(s) {direction} "
            f"{result.start_date.strftime('%d/%m/%Y')} "
            f"({WEEKDAY_NAMES[result.start_date.weekday()]}): "
            f"[bold green]{result.result_date.strftime('%d/%m/%Y')}[/bold green] "
            f"({WEEKDAY_NAMES[result.result_date.weekday()]})"
        )
        self.console.print(
            f"[dim]Skipped {result.skipped.get('weekend_days', 0)} weekend day(s) "
            f"and {result.skipped.get('holidays', 0)} holiday(s)[/dim]"
        )

    def print_check(self, day: date, working: bool, holiday: Optional[HolidayEntry] = None) -> None:
        """Print whether a day is a business day."""
        label = f"{day.strftime('%d/%m/%Y')} ({WEEKDAY_NAMES[day.weekday()]})"
        if working:
            self.console.print(f"{label}: [bold green]business day[/bold green]")
        elif holiday:
            self.console.print(
                f"{label}: [bold red]holiday[/bold red] - {holiday.label(self.language)}"
            )
        else:
            self.console.print(f"{label}: [bold red]not a business day[/bold red]")

    def print_easter(self, year: int, easter: date, approximate: bool = False) -> None:
        """Print the Easter Sunday of a year."""
        self.console.print(
            f"Easter Sunday {year}: [bold green]{easter.strftime('%d/%m/%Y')}[/bold green]"
        )
        if approximate:
            self.console.print(
                "[yellow]Warning:[/yellow] year outside 1582-2299, the date is approximate"
            )

    def print_holidays(self, holidays: List[HolidayEntry], title: str = "Holidays in Period") -> None:
        """
        Print a table of holidays.

        Args:
            holidays: List of holidays to display.
            title: Table title.
        """
        holiday_table = Table(title=f"[bold]{title}[/bold]")
        holiday_table.add_column("Date", style="cyan", width=12)
        holiday_table.add_column("Day", style="dim", width=12)
        holiday_table.add_column("Name", style="white")

        for holiday in holidays:
            holiday_table.add_row(
                holiday.holiday_date.strftime("%d/%m/%Y"),
                WEEKDAY_NAMES[holiday.holiday_date.weekday()],
                holiday.label(self.language),
            )

        self.console.print(holiday_table)

    def print_holidays_for_year(self, year: int, holidays: List[HolidayEntry]) -> None:
        """
        Print all national holidays of a year.

        Args:
            year: Year.
            holidays: List of holidays.
        """
        self.console.print()
        self.console.rule(f"[bold blue]Brazilian National Holidays {year}[/bold blue]")
        self.console.print()
        self.print_holidays(holidays, title=f"{len(holidays)} holidays")
        self.console.print()

    def print_days(self, days: List[date], working: List[bool]) -> None:
        """Print a day-by-day table marking business days."""
        table = Table()
        table.add_column("Date", style="cyan", width=12)
        table.add_column("Day", style="dim", width=12)
        table.add_column("Business Day")
        for day, is_working in zip(days, working):
            table.add_row(
                day.strftime("%d/%m/%Y"),
                WEEKDAY_NAMES[day.weekday()],
                "[green]yes[/green]" if is_working else "[red]no[/red]",
            )
        self.console.print(table)

    def print_error(self, message: str) -> None:
        """
        Print an error message.

        Args:
            message: Error message to display.
        """
        self.console.print(f"[bold red]Error:[/bold red] {message}")

    def print_success(self, message: str) -> None:
        """
        Print a success message.

        Args:
            message: Success message to display.
        """
        self.console.print(f"[bold green]Success:[/bold green] {message}")
