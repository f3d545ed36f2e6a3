#!/usr/bin/env python3
"""
Unified CLI for vehicle mileage tracking.

Commands:
  list     - Show mileage log entries with trip distances (most recent first)
  summary  - Show total, business and personal distance
  log      - Add a new mileage log entry
  edit     - Change an existing entry
  delete   - Remove an entry
  style    - Show or change the mileage logging style
"""

import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional

from mileage import (
    LoggingStyle,
    MileageError,
    MileageLedger,
    MileageSummary,
    ReconciledEntry,
    build_edited_entry,
    build_new_entry,
    delete_trip,
    edit_display_value,
    format_display_date,
    load_ledger,
    load_logging_style,
    save_mileage_log,
    set_logging_style,
    update_mileage_log,
    user_settings_path,
)

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance or reading for display."""
    if km is None:
        return "-"
    if float(km).is_integer():
        return f"{km:,.0f}"
    return f"{km:,.1f}"


def format_percent(value: float) -> str:
    return f"{value:.1f}%"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def short_id(entry_id: str) -> str:
    return entry_id[:8]


def resolve_entry_id(ledger: MileageLedger, prefix: str) -> Optional[str]:
    """Find the full entry id for a unique id prefix."""
    matches = [e.id for e in ledger.entries if e.id.startswith(prefix)]
    if len(matches) == 1:
        return matches[0]
    return None


# =============================================================================
# List command
# =============================================================================


def make_log_table(entries: List[ReconciledEntry]) -> List[List[str]]:
    """Convert reconciled entries to table rows."""
    rows = []
    for item in entries:
        distance = format_km(item.distance)
        if item.is_clamped:
            distance += " *"
        rows.append(
            [
                short_id(item.id),
                item.date,
                truncate(item.description or "Mileage Entry"),
                format_km(item.odometer_reading),
                distance,
                "Business" if item.is_business_use else "Personal",
            ]
        )
    return rows


def print_summary(summary: MileageSummary) -> None:
    print(f"Total distance:    {format_km(summary.total_distance)} km")
    print(f"Business distance: {format_km(summary.business_distance)} km")
    print(f"Personal distance: {format_km(summary.personal_distance)} km")
    print(f"Business use:      {format_percent(summary.business_percentage)}")


def cmd_list(args):
    """Show mileage log entries with their trip distances."""
    ledger = load_ledger(args.vehicle_file)

    if args.year:
        entries = ledger.entries_for_year(args.year)
    else:
        entries = ledger.display_entries()
    if args.search:
        matching = {e.id for e in ledger.search(args.search)}
        entries = [e for e in entries if e.id in matching]
    if args.asc:
        entries = sorted(entries, key=lambda e: e.date)

    print(f"Vehicle: {ledger.vehicle.display_name}")
    print(f"Starting odometer: {format_km(ledger.baseline)} km")
    print(f"Entries: {len(ledger.entries)}")
    if args.search or args.year:
        print(f"Showing: {len(entries)} (filtered)")
    print()

    if not entries:
        print("No mileage entries found.")
        return 0

    headers = ["ID", "Date", "Trip", "Odometer", "Distance", "Use"]
    print(tabulate(make_log_table(entries), headers=headers, tablefmt="simple"))

    if any(e.is_clamped for e in entries):
        print()
        print("* reading is lower than the previous entry; distance counted as 0")

    print()
    print_summary(ledger.summary())
    return 0


# =============================================================================
# Summary command
# =============================================================================


def cmd_summary(args):
    """Show total, business and personal distance."""
    ledger = load_ledger(args.vehicle_file)

    print(f"Vehicle: {ledger.vehicle.display_name}")
    print(f"Entries: {len(ledger.entries)}")
    print()
    print_summary(ledger.summary())
    return 0


# =============================================================================
# Log command
# =============================================================================


def cmd_log(args):
    """Add a new mileage log entry."""
    style = LoggingStyle(args.style) if args.style else load_logging_style(
        user_settings_path(args.vehicle_file)
    )
    entry_date = args.date or date.today().isoformat()
    is_business = not args.personal

    ledger = load_ledger(args.vehicle_file)
    entry = build_new_entry(
        ledger, entry_date, args.value, style, args.description, is_business
    )

    # Show what will be added
    print(f"Adding mileage entry to {args.vehicle_file}:")
    print(f"  Id:       {short_id(entry.id)}")
    print(f"  Date:     {entry.date}")
    if style is LoggingStyle.TRIP_DISTANCE:
        print(f"  Trip:     {format_km(float(args.value))} km")
    print(f"  Odometer: {format_km(entry.odometer_reading)} km")
    if entry.description:
        print(f"  Title:    {entry.description}")
    print(f"  Use:      {'Business' if entry.is_business_use else 'Personal'}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    save_mileage_log(args.vehicle_file, entry)
    print("Entry saved.")
    return 0


# =============================================================================
# Edit command
# =============================================================================


def cmd_edit(args):
    """Change an existing mileage log entry."""
    style = LoggingStyle(args.style) if args.style else load_logging_style(
        user_settings_path(args.vehicle_file)
    )
    ledger = load_ledger(args.vehicle_file)
    entry_id = resolve_entry_id(ledger, args.entry_id)
    if entry_id is None:
        print(f"Error: No unique entry matches id '{args.entry_id}'")
        return 1

    current_value = edit_display_value(ledger, entry_id, style)
    entry = build_edited_entry(
        ledger, entry_id, style, args.value, args.date, args.description, args.business
    )

    new_value = float(args.value) if args.value is not None else current_value
    label = "Value" if style is LoggingStyle.ODOMETER else "Trip"
    print(f"Editing mileage entry {short_id(entry_id)}:")
    print(f"  {label}:    {format_km(current_value)} km -> {format_km(new_value)} km")
    print(f"  Date:     {entry.date}")
    print(f"  Odometer: {format_km(entry.odometer_reading)} km")
    if entry.description:
        print(f"  Title:    {entry.description}")
    print(f"  Use:      {'Business' if entry.is_business_use else 'Personal'}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    update_mileage_log(args.vehicle_file, entry)
    print("Entry updated.")
    return 0


# =============================================================================
# Delete command
# =============================================================================


def cmd_delete(args):
    """Remove a mileage log entry."""
    ledger = load_ledger(args.vehicle_file)
    entry_id = resolve_entry_id(ledger, args.entry_id)
    if entry_id is None:
        print(f"Error: No unique entry matches id '{args.entry_id}'")
        return 1

    entry = ledger.get_entry(entry_id)
    print(f"Deleting mileage entry {short_id(entry_id)}:")
    print(f"  Date:     {format_display_date(entry.date)}")
    print(f"  Odometer: {format_km(entry.odometer_reading)} km")
    if entry.description:
        print(f"  Title:    {entry.description}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    delete_trip(args.vehicle_file, entry_id)
    print("Entry deleted.")
    return 0


# =============================================================================
# Style command
# =============================================================================


def cmd_style(args):
    """Show or change the mileage logging style."""
    settings_file = user_settings_path(args.vehicle_file)
    if args.new_style is None:
        style = load_logging_style(settings_file)
        print(f"Mileage logging style: {style.value} ({style.input_label})")
        return 0

    style = set_logging_style(settings_file, args.new_style)
    print(f"Mileage logging style set to {style.value}.")
    return 0


# =============================================================================
# Main
# =============================================================================


def main(argv: Optional[List[str]] = None):
    logging.basicConfig(
        level=os.environ.get("MILEAGE_LOG_LEVEL", "WARNING").upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    styles = [s.value for s in LoggingStyle]
    parser = argparse.ArgumentParser(
        description="Vehicle mileage tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s vehicles/civic.yaml list
  %(prog)s vehicles/civic.yaml list --search client --year 2025
  %(prog)s vehicles/civic.yaml summary
  %(prog)s vehicles/civic.yaml log 42 --description "Client meeting"
  %(prog)s vehicles/civic.yaml log 10250 --style odometer --date 2025-01-05
  %(prog)s vehicles/civic.yaml edit 3f2b9c1a --value 38 --personal
  %(prog)s vehicles/civic.yaml delete 3f2b9c1a
  %(prog)s vehicles/civic.yaml style odometer
""",
    )
    parser.add_argument(
        "vehicle_file",
        type=Path,
        help="Path to vehicle YAML file",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # List subcommand
    list_parser = subparsers.add_parser("list", help="Show mileage log entries")
    list_parser.add_argument(
        "--search",
        type=str,
        help="Filter to entries whose title or date contains text (case-insensitive)",
    )
    list_parser.add_argument(
        "--year",
        type=int,
        help="Show only entries in a tax year",
    )
    list_parser.add_argument(
        "--asc",
        action="store_true",
        help="Oldest first instead of most recent first",
    )

    # Summary subcommand
    subparsers.add_parser("summary", help="Show distance totals")

    # Log subcommand
    log_parser = subparsers.add_parser("log", help="Add a new mileage entry")
    log_parser.add_argument(
        "value",
        type=str,
        help="Trip distance or odometer reading, depending on logging style",
    )
    log_parser.add_argument(
        "--date",
        type=str,
        help="Trip date in YYYY-MM-DD format (default: today)",
    )
    log_parser.add_argument(
        "--description",
        type=str,
        help="Trip title (e.g., 'Audition downtown')",
    )
    log_parser.add_argument(
        "--personal",
        action="store_true",
        help="Mark the trip as personal rather than business",
    )
    log_parser.add_argument(
        "--style",
        choices=styles,
        help="Override the saved logging style for this entry",
    )
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be added without saving",
    )

    # Edit subcommand
    edit_parser = subparsers.add_parser("edit", help="Change a mileage entry")
    edit_parser.add_argument("entry_id", type=str, help="Entry id (or unique prefix)")
    edit_parser.add_argument(
        "--value",
        type=str,
        help="New trip distance or odometer reading, depending on logging style",
    )
    edit_parser.add_argument("--date", type=str, help="New trip date (YYYY-MM-DD)")
    edit_parser.add_argument(
        "--description",
        type=str,
        help="New trip title (empty string clears it)",
    )
    use_group = edit_parser.add_mutually_exclusive_group()
    use_group.add_argument(
        "--business",
        dest="business",
        action="store_const",
        const=True,
        help="Mark the trip as business",
    )
    use_group.add_argument(
        "--personal",
        dest="business",
        action="store_const",
        const=False,
        help="Mark the trip as personal",
    )
    edit_parser.add_argument(
        "--style",
        choices=styles,
        help="Override the saved logging style for this edit",
    )
    edit_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be changed without saving",
    )

    # Delete subcommand
    delete_parser = subparsers.add_parser("delete", help="Remove a mileage entry")
    delete_parser.add_argument("entry_id", type=str, help="Entry id (or unique prefix)")
    delete_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be deleted without saving",
    )

    # Style subcommand
    style_parser = subparsers.add_parser("style", help="Show or set the logging style")
    style_parser.add_argument(
        "new_style",
        nargs="?",
        choices=styles,
        help="New logging style (omit to show the current one)",
    )

    args = parser.parse_args(argv)

    # Validate vehicle file exists
    if not args.vehicle_file.exists():
        print(f"Error: File not found: {args.vehicle_file}")
        return 1

    handlers = {
        "list": cmd_list,
        "summary": cmd_summary,
        "log": cmd_log,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "style": cmd_style,
    }
    try:
        return handlers[args.command](args)
    except MileageError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
