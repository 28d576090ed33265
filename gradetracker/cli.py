"""
Command-Line Interface for the Module Tracker.

This module provides the interactive CLI. It handles user input and hands
each action to GradeTracker; everything it prints goes through
TerminalDisplay.

NOTE: Don't run this file directly. Run from the project root:
    python3 -m gradetracker
"""

import logging

from .config import TERM_PARTS, GRADE_CHOICES, CREDIT_CHOICES, DEFAULT_CREDITS, configure_logging
from .engines.aggregation import ALL
from .errors import TrackerError
from .tracker import GradeTracker
from .ui import TerminalDisplay

logger = logging.getLogger(__name__)

MENU = [
    ("1", "View modules"),
    ("2", "Add module"),
    ("3", "Edit module"),
    ("4", "Delete module"),
    ("5", "Graduation requirements"),
    ("6", "Target GPA calculator"),
    ("7", "Import CSV"),
    ("8", "Export CSV"),
    ("9", "Expand / collapse terms"),
    ("10", "Charts"),
    ("11", "Clear data"),
    ("q", "Quit"),
]


def _prompt(label: str, default: str = "") -> str:
    suffix = f" [{default}]" if default else ""
    value = input(f"  {label}{suffix}: ").strip()
    return value or default


def _prompt_id(label: str = "Module id") -> int:
    value = _prompt(label)
    try:
        return int(value)
    except ValueError:
        raise TrackerError(f"'{value}' is not a module id")


def _collect_record_fields(existing=None) -> dict:
    """
    Ask for every record field.

    When editing, the current value is the default, so pressing Enter keeps
    it.
    """
    term = existing.parsed_term if existing else None
    print(f"  {TerminalDisplay.DIM}Term parts: {', '.join(f'{i}={p}' for i, p in enumerate(TERM_PARTS, 1))}"
          f"{TerminalDisplay.RESET}")

    year = _prompt("Year (1-6)", str(term.year) if term else "")
    part_choice = _prompt("Term part", str(TERM_PARTS.index(term.part) + 1) if term else "1")
    if part_choice.isdigit() and 1 <= int(part_choice) <= len(TERM_PARTS):
        part = TERM_PARTS[int(part_choice) - 1]
    else:
        part = part_choice

    categories = ";".join(existing.categories) if existing else ""
    workload = "" if not existing or existing.workload is None else f"{existing.workload:g}"
    return {
        "year": year,
        "part": part,
        "code": _prompt("Module code", existing.code if existing else ""),
        "title": _prompt("Module name", existing.title if existing else ""),
        "credits": _prompt(f"MCs ({'/'.join(str(c) for c in CREDIT_CHOICES)})",
                           str(existing.credits if existing else DEFAULT_CREDITS)),
        "categories": _prompt("Focus area(s), ';'-separated", categories),
        "specialization": _prompt("Specialization", existing.specialization if existing else ""),
        "workload": _prompt("Workload (hrs/week)", workload),
        "grade": _prompt(f"Grade ({'/'.join(GRADE_CHOICES)}, blank = none)", existing.grade if existing else ""),
    }


# =============================================================================
# Actions
# =============================================================================

def _view_modules(tracker: GradeTracker):
    terms = tracker.aggregation_engine.unique_terms(tracker.records)
    categories = tracker.aggregation_engine.all_categories(tracker.records)
    print(f"  {TerminalDisplay.DIM}Terms: {', '.join(terms) or '-'}{TerminalDisplay.RESET}")
    print(f"  {TerminalDisplay.DIM}Focus areas: {', '.join(categories) or '-'}{TerminalDisplay.RESET}")
    term = _prompt("Filter by term", ALL)
    category = _prompt("Filter by focus area", ALL)

    expanded = set(tracker.expanded_terms)
    if term != ALL:
        expanded.add(term)

    TerminalDisplay.print_overview(tracker.snapshot)
    TerminalDisplay.print_terms(tracker.filtered_terms(term, category), frozenset(expanded))


def _add_module(tracker: GradeTracker):
    TerminalDisplay.print_subheader("Add Module")
    record = tracker.add_record(**_collect_record_fields())
    TerminalDisplay.print_message(f"Added {record.code} as #{record.record_id}")


def _edit_module(tracker: GradeTracker):
    TerminalDisplay.print_subheader("Edit Module")
    record_id = _prompt_id()
    existing = tracker.records.get(record_id)
    TerminalDisplay.print_record(existing)
    record = tracker.edit_record(record_id, **_collect_record_fields(existing))
    TerminalDisplay.print_message(f"Updated {record.code}")


def _delete_module(tracker: GradeTracker):
    record_id = _prompt_id("Module id to delete")
    record = tracker.records.get(record_id)
    if _prompt(f"Delete {record.code}? (y/n)", "n").lower() == "y":
        tracker.delete_record(record_id)
        TerminalDisplay.print_message(f"Deleted {record.code}")


def _edit_requirements(tracker: GradeTracker):
    TerminalDisplay.print_header("GRADUATION REQUIREMENTS")
    print(f"\n  {TerminalDisplay.BOLD}Total MCs required:{TerminalDisplay.RESET} "
          f"{tracker.requirements.total_credits}")
    TerminalDisplay.print_category_progress(tracker.snapshot.category_progress)

    suggestions = tracker.suggested_categories()
    if suggestions:
        print(f"\n  {TerminalDisplay.DIM}Unconfigured focus areas: {', '.join(suggestions)}{TerminalDisplay.RESET}")

    print("\n  t) set total   a) add category   q) quick-add   e) edit category   r) remove category")
    choice = _prompt("Choice").lower()
    if choice == "t":
        tracker.set_total_credits(_prompt("Total MCs required", str(tracker.requirements.total_credits)))
    elif choice == "a":
        tracker.add_category(_prompt("Category name"), _prompt("Required MCs", "0"))
    elif choice == "q":
        for name in suggestions:
            tracker.quick_add_category(name)
        TerminalDisplay.print_message(f"Added {len(suggestions)} categories")
    elif choice == "e":
        name = _prompt("Category name")
        tracker.update_category(name, _prompt("Required MCs") or None, _prompt("Color (hex)") or None)
    elif choice == "r":
        tracker.remove_category(_prompt("Category name"))


def _target_gpa(tracker: GradeTracker):
    result = tracker.project(_prompt("Target GPA (0-5.0)"))
    TerminalDisplay.print_projection(result)


def _import_csv(tracker: GradeTracker):
    path = _prompt("CSV file to import")
    TerminalDisplay.print_import_result(tracker.import_file(path))


def _export_csv(tracker: GradeTracker):
    path = tracker.export_file(_prompt("Export to", "nus_modules.csv"))
    TerminalDisplay.print_message(f"Exported {len(tracker.records)} modules to {path}")


def _toggle_terms(tracker: GradeTracker):
    choice = _prompt("Term name, 'all' to expand all, 'none' to collapse all")
    if choice.lower() == "all":
        tracker.expand_all()
    elif choice.lower() == "none":
        tracker.collapse_all()
    elif choice:
        tracker.toggle_term(choice)


def _charts(tracker: GradeTracker):
    TerminalDisplay.print_category_chart(tracker.snapshot.category_stats)
    TerminalDisplay.print_workload_chart(tracker.snapshot.terms)


def _clear_data(tracker: GradeTracker):
    choice = _prompt("Clear (m)odules, (r)equirements or (b)oth? Enter to cancel").lower()
    if choice not in ("m", "r", "b"):
        return
    if _prompt("This cannot be undone. Continue? (y/n)", "n").lower() != "y":
        return
    if choice in ("m", "b"):
        tracker.clear_records()
    if choice in ("r", "b"):
        tracker.clear_requirements()
    TerminalDisplay.print_message("Data cleared")


ACTIONS = {
    "1": _view_modules,
    "2": _add_module,
    "3": _edit_module,
    "4": _delete_module,
    "5": _edit_requirements,
    "6": _target_gpa,
    "7": _import_csv,
    "8": _export_csv,
    "9": _toggle_terms,
    "10": _charts,
    "11": _clear_data,
}


def _print_menu(tracker: GradeTracker):
    snapshot = tracker.snapshot
    print(f"\n{TerminalDisplay.BOLD}{TerminalDisplay.CYAN}")
    print("╔══════════════════════════════════════════════════════════════════╗")
    print("║         MODULE TRACKER                                           ║")
    print("╚══════════════════════════════════════════════════════════════════╝")
    print(f"{TerminalDisplay.RESET}  GPA {TerminalDisplay.format_gpa(snapshot.gpa)}  ·  "
          f"{snapshot.total_credits} MCs  ·  {snapshot.record_count} modules\n")
    for key, label in MENU:
        print(f"  {key:>2}. {label}")


def main(data_dir=None):
    """
    Interactive command-line interface.

    Every action runs to completion before the next prompt. Validation
    problems are printed and leave the saved data untouched.
    """
    configure_logging()
    tracker = GradeTracker(data_dir=data_dir, seed_samples=True)

    while True:
        _print_menu(tracker)
        try:
            choice = input(f"\n{TerminalDisplay.BOLD}Select: {TerminalDisplay.RESET}").strip().lower()
        except EOFError:
            choice = "q"

        if choice in ("q", "quit", "exit"):
            break

        action = ACTIONS.get(choice)
        if action is None:
            TerminalDisplay.print_message(f"Unknown option: {choice}", ok=False)
            continue

        try:
            action(tracker)
        except TrackerError as e:
            TerminalDisplay.print_message(str(e), ok=False)
        except OSError as e:
            logger.warning("File operation failed: %s", e)
            TerminalDisplay.print_message(f"File error: {e}", ok=False)
        except EOFError:
            break


if __name__ == "__main__":
    main()
