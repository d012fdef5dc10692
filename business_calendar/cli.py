"""
CLI interface for the business calendar.
"""

import logging
import sys
from datetime import date, datetime
from typing import List, Optional, Tuple

import click

from business_calendar.config.manager import ConfigManager
from business_calendar.core.calculator import BusinessDayCalculator
from business_calendar.core.easter import easter_sunday, in_validity_window
from business_calendar.core.holiday_provider import HolidayProvider
from business_calendar.core.ranges import each_day, each_month, next_weekday
from business_calendar.data.schemas import BusinessDaysRequest, Config, Weekday
from business_calendar.output.exporter import ResultExporter
from business_calendar.output.formatter import ConsoleFormatter

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def parse_date(date_str: str) -> date:
    """Parse date string in various formats."""
    formats = ["%Y-%m-%d", "%d/%m/%Y", "%d.%m.%Y"]
    for fmt in formats:
        try:
            return datetime.strptime(date_str, fmt).date()
        except ValueError:
            continue
    raise ValueError(
        f"Invalid date format: {date_str}. Use YYYY-MM-DD, DD/MM/YYYY, or DD.MM.YYYY"
    )


def load_config(config_path: Optional[str], weekend: Optional[str] = None) -> Config:
    """Load configuration and apply the command line weekend override."""
    manager = ConfigManager(config_path)
    cfg = manager.load_config()
    if weekend:
        cfg.weekend_days = [Weekday.parse(item) for item in weekend.split(",") if item.strip()]
    return cfg


def build_calculator(
    cfg: Config, extra_holidays: Tuple[str, ...] = (), national: bool = True
) -> BusinessDayCalculator:
    """Create a calculator from configuration plus command line holidays."""
    extra = list(cfg.extra_holidays) + [parse_date(item) for item in extra_holidays]
    return BusinessDayCalculator(
        HolidayProvider(language=cfg.holiday_language),
        extra_holidays=extra,
        weekend=cfg.weekend_days,
        include_national_holidays=national and cfg.include_national_holidays,
    )


config_option = click.option(
    "--config", "-c",
    type=click.Path(exists=True),
    help="Path to config file (optional)",
)
weekend_option = click.option(
    "--weekend", "-w",
    help="Comma separated weekend days (default: SAT,SUN)",
)
holiday_options = [
    click.option(
        "--holiday", "-H",
        "extra_holidays",
        multiple=True,
        help="Additional holiday date, may be repeated",
    ),
    click.option(
        "--no-national",
        is_flag=True,
        default=False,
        help="Ignore the Brazilian national holidays (weekends only)",
    ),
]


def with_holiday_options(func):
    for option in reversed(holiday_options):
        func = option(func)
    return func


@click.group()
@click.version_option(version="0.1.0", prog_name="business-calendar")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose):
    """Business Calendar - Brazilian holidays and business-day arithmetic."""
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


@main.command()
@click.option("--start", "-s", required=True, help="First day (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--end", "-e", required=True, help="Last day (YYYY-MM-DD or DD/MM/YYYY)")
@with_holiday_options
@weekend_option
@click.option("--by-month", is_flag=True, default=False, help="Show working days per month")
@click.option("--output", "-o", type=click.Path(), help="Output file path (optional)")
@click.option(
    "--format", "-f",
    type=click.Choice(["json", "csv", "both", "console"]),
    default="console",
    help="Output format (default: console)",
)
@config_option
def count(start, end, extra_holidays, no_national, weekend, by_month, output, format, config):
    """Count business days between two dates (inclusive)."""
    try:
        cfg = load_config(config, weekend)
        formatter = ConsoleFormatter(language=cfg.holiday_language)
        calculator = build_calculator(cfg, extra_holidays, national=not no_national)

        request = BusinessDaysRequest(
            start_date=parse_date(start),
            end_date=parse_date(end),
            include_national_holidays=calculator.include_national_holidays,
            monthly_breakdown=by_month,
        )
        result = calculator.calculate(request)

        if format in ("console", "both"):
            formatter.print_result(result)

        if format in ("json", "csv", "both"):
            exporter = ResultExporter(output_directory=cfg.output_directory)
            if format == "json":
                path = exporter.export_json(result, output)
                formatter.print_success(f"Result saved to {path}")
            elif format == "csv":
                path = exporter.export_csv(result, output)
                formatter.print_success(f"Result saved to {path}")
            else:
                json_path, csv_path = exporter.export_both(result)
                formatter.print_success(f"Results saved to:\n  - {json_path}\n  - {csv_path}")

    except ValueError as e:
        ConsoleFormatter().print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--date", "-d", "start", required=True, help="Start date (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--days", "-n", type=int, required=True, help="Business days to add (negative to subtract)")
@with_holiday_options
@weekend_option
@config_option
def add(start, days, extra_holidays, no_national, weekend, config):
    """Add (or subtract) business days to a date."""
    try:
        cfg = load_config(config, weekend)
        formatter = ConsoleFormatter(language=cfg.holiday_language)
        calculator = build_calculator(cfg, extra_holidays, national=not no_national)
        formatter.print_step(calculator.step(parse_date(start), days))

    except ValueError as e:
        ConsoleFormatter().print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--date", "-d", "day", required=True, help="Date to check (YYYY-MM-DD or DD/MM/YYYY)")
@with_holiday_options
@weekend_option
@config_option
def check(day, extra_holidays, no_national, weekend, config):
    """Check whether a date is a business day."""
    try:
        cfg = load_config(config, weekend)
        formatter = ConsoleFormatter(language=cfg.holiday_language)
        calculator = build_calculator(cfg, extra_holidays, national=not no_national)

        current = parse_date(day)
        working = calculator.check(current)
        holiday = None
        if not working and calculator.include_national_holidays:
            matches = calculator.holiday_provider.get_holidays_for_range(current, current)
            holiday = matches[0] if matches else None
        formatter.print_check(current, working, holiday)

    except ValueError as e:
        ConsoleFormatter().print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year (default: current year)")
def easter(year):
    """Show the date of Easter Sunday."""
    year = date.today().year if year is None else year
    formatter = ConsoleFormatter()
    try:
        formatter.print_easter(year, easter_sunday(year), approximate=not in_validity_window(year))
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--year", "-y", type=int, default=None, help="Year (default: current year)")
@click.option("--output", "-o", type=click.Path(), help="Output CSV file path (optional)")
@config_option
def holidays(year, output, config):
    """List the national holidays of a year."""
    formatter = ConsoleFormatter()

    try:
        year = date.today().year if year is None else year
        cfg = load_config(config)
        formatter.language = cfg.holiday_language

        holiday_provider = HolidayProvider(language=cfg.holiday_language)
        holiday_list = sorted(
            holiday_provider.get_holidays_for_year(year),
            key=lambda entry: entry.holiday_date,
        )
        formatter.print_holidays_for_year(year, holiday_list)

        if output:
            exporter = ResultExporter(output_directory=cfg.output_directory)
            path = exporter.export_holidays_csv(holiday_list, output)
            formatter.print_success(f"Holidays saved to {path}")

    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command(name="next")
@click.option("--date", "-d", "start", default=None, help="Start date (default: today)")
@click.option("--weekday", "-W", required=True, help="Weekday name, e.g. TUESDAY or TUE")
def next_command(start, weekday):
    """Show the next date falling on a weekday (today included)."""
    formatter = ConsoleFormatter()
    try:
        current = parse_date(start) if start else date.today()
        target = Weekday.parse(weekday)
        result = next_weekday(current, target)
        formatter.console.print(
            f"Next {target.name.capitalize()} from {current.strftime('%d/%m/%Y')}: "
            f"[bold green]{result.strftime('%d/%m/%Y')}[/bold green]"
        )
    except ValueError as e:
        formatter.print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--start", "-s", required=True, help="First day (YYYY-MM-DD or DD/MM/YYYY)")
@click.option("--end", "-e", required=True, help="Last day (YYYY-MM-DD or DD/MM/YYYY)")
@click.option(
    "--unit", "-u",
    type=click.Choice(["day", "month"]),
    default="day",
    help="Step between listed dates (default: day)",
)
@with_holiday_options
@weekend_option
@config_option
def days(start, end, unit, extra_holidays, no_national, weekend, config):
    """List the dates of a period and mark the business days."""
    try:
        cfg = load_config(config, weekend)
        formatter = ConsoleFormatter(language=cfg.holiday_language)
        calculator = build_calculator(cfg, extra_holidays, national=not no_national)

        first = parse_date(start)
        last = parse_date(end)
        iterator = each_day if unit == "day" else each_month
        listed: List[date] = list(iterator(first, last))
        work_calendar = calculator.calendar_for(first, last)
        formatter.print_days(listed, [work_calendar.is_working_day(day) for day in listed])

    except ValueError as e:
        ConsoleFormatter().print_error(str(e))
        sys.exit(1)


@main.command()
@click.option("--host", "-h", default=None, help="Host to bind to (default: from config or 0.0.0.0)")
@click.option("--port", "-p", type=int, default=None, help="Port to bind to (default: from config or 8000)")
@config_option
def serve(host, port, config):
    """Start the FastAPI server."""
    formatter = ConsoleFormatter()

    try:
        import uvicorn

        cfg = load_config(config)
        api_host = host or cfg.api_host
        api_port = port or cfg.api_port

        formatter.console.print(f"Starting API server at http://{api_host}:{api_port}")
        formatter.console.print("Press Ctrl+C to stop")
        formatter.console.print()

        uvicorn.run(
            "business_calendar.api:app",
            host=api_host,
            port=api_port,
            reload=False,
            log_level=cfg.log_level.lower(),
        )

    except ImportError:
        formatter.print_error("uvicorn is required for the API server. Install it with: pip install uvicorn")
        sys.exit(1)
    except ValueError as e:
        formatter.print_error(f"Error starting server: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
