"""
Terminal Display Implementation.

This module handles all console/terminal output formatting.
It's the ONLY place where printing happens in the gradetracker package.

To create a different UI (web, PDF, etc.), create a new class with
the same method signatures but different output handling.
"""

from ..models import (
    AggregateSnapshot,
    CategoryProgress,
    CourseRecord,
    GradeStatus,
    ImportResult,
    ProjectionResult,
)


class TerminalDisplay:
    """
    Pretty terminal output for tracker snapshots.

    ═══════════════════════════════════════════════════════════════════════════
    HOW TO REPLACE THIS UI
    ═══════════════════════════════════════════════════════════════════════════

    1. FOR WEB UI:
       Create a WebDisplay class with the same method signatures and
       subscribe it to GradeTracker; render instead of print().

    2. FOR CHARTS:
       AggregateSnapshot.category_stats and TermSummary.workload already hold
       the pie/bar chart series; hand them to any plotting library.

    ═══════════════════════════════════════════════════════════════════════════
    """

    # ANSI color codes for terminal styling
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    RED = "\033[91m"
    BLUE = "\033[94m"
    CYAN = "\033[96m"
    WHITE = "\033[97m"

    BG_GREEN = "\033[42m"
    BG_RED = "\033[41m"

    BAR_WIDTH = 30

    @classmethod
    def print_header(cls, title: str):
        """Print a major section header with decorative borders."""
        width = 70
        print()
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}  {title}{cls.RESET}")
        print(f"{cls.BOLD}{cls.CYAN}{'═' * width}{cls.RESET}")

    @classmethod
    def print_subheader(cls, title: str):
        """Print a subsection header."""
        print()
        print(f"{cls.BOLD}{cls.WHITE}  ── {title} ──{cls.RESET}")

    @classmethod
    def print_message(cls, text: str, ok: bool = True):
        color = cls.GREEN if ok else cls.RED
        mark = "✓" if ok else "✗"
        print(f"\n  {color}{mark} {text}{cls.RESET}")

    @staticmethod
    def format_gpa(gpa) -> str:
        return "N/A" if gpa is None else f"{gpa:.2f}"

    @classmethod
    def progress_bar(cls, percentage: float) -> str:
        filled = int(round(cls.BAR_WIDTH * min(percentage, 100.0) / 100))
        color = cls.GREEN if percentage >= 100 else cls.YELLOW if percentage > 0 else cls.DIM
        return f"{color}{'█' * filled}{cls.DIM}{'░' * (cls.BAR_WIDTH - filled)}{cls.RESET}"

    @classmethod
    def grade_color(cls, record: CourseRecord) -> str:
        status = record.grade_status
        if status is GradeStatus.UNSCORED:
            return cls.BLUE
        if status is GradeStatus.ABSENT:
            return cls.DIM
        if record.grade.startswith("A"):
            return cls.GREEN
        if record.grade.startswith("B"):
            return cls.CYAN
        if record.grade.startswith("C"):
            return cls.YELLOW
        return cls.RED

    # =========================================================================
    # Overview
    # =========================================================================

    @classmethod
    def print_overview(cls, snapshot: AggregateSnapshot):
        """GPA, credit totals and graduation progress."""
        cls.print_header("OVERVIEW")
        counts = snapshot.graded_counts
        ungraded = snapshot.record_count - counts.scored - counts.unscored

        print(f"\n  {cls.BOLD}GPA:{cls.RESET}        {cls.format_gpa(snapshot.gpa)}")
        print(f"  {cls.BOLD}Total MCs:{cls.RESET}  {snapshot.total_credits}")
        print(f"  {cls.BOLD}Modules:{cls.RESET}    {snapshot.record_count} "
              f"({counts.scored} graded, {counts.unscored} S/U, {ungraded} no grade)")

        grad = snapshot.graduation_progress
        if grad.required:
            print(f"\n  {cls.BOLD}Graduation:{cls.RESET} {cls.progress_bar(grad.percentage)} "
                  f"{grad.earned}/{grad.required} MCs ({grad.percentage:.0f}%)")

    @classmethod
    def print_category_progress(cls, progress: tuple):
        """Per-category progress toward the configured requirements."""
        cls.print_subheader("Category Progress")
        if not progress:
            print(f"  {cls.DIM}(no categories configured){cls.RESET}")
            return
        for item in progress:
            cls._print_progress_row(item)

    @classmethod
    def _print_progress_row(cls, item: CategoryProgress):
        print(f"  {item.name[:24]:<24} {cls.progress_bar(item.percentage)} "
              f"{item.earned}/{item.required} MCs")

    # =========================================================================
    # Records
    # =========================================================================

    @classmethod
    def print_terms(cls, summaries: tuple, expanded=frozenset()):
        """Records grouped by term; collapsed terms show their header only."""
        cls.print_header("MODULES BY TERM")
        if not summaries:
            print(f"\n  {cls.DIM}(no modules){cls.RESET}")
            return
        for summary in summaries:
            arrow = "▼" if summary.term in expanded else "▶"
            print(f"\n  {cls.BOLD}{arrow} {summary.term or '(no term)'}{cls.RESET}  "
                  f"{cls.DIM}{len(summary.records)} modules · {summary.credits} MCs · "
                  f"GPA {cls.format_gpa(summary.gpa)}{cls.RESET}")
            if summary.term in expanded:
                for record in summary.records:
                    cls.print_record(record)

    @classmethod
    def print_record(cls, record: CourseRecord):
        grade = record.grade or "-"
        labels = ", ".join(record.categories) or "Uncategorized"
        print(f"    {cls.DIM}#{record.record_id:<4}{cls.RESET}{record.code:<10} {record.title[:32]:<32} "
              f"{record.credits:>2} MCs  {cls.grade_color(record)}{grade:<3}{cls.RESET} "
              f"{cls.DIM}{labels}{cls.RESET}")

    # =========================================================================
    # Charts
    # =========================================================================

    @classmethod
    def print_category_chart(cls, stats: tuple):
        """MCs per category label, as horizontal bars."""
        cls.print_subheader("MCs by Category")
        total = sum(s.credits for s in stats)
        if not total:
            print(f"  {cls.DIM}(no data){cls.RESET}")
            return
        for stat in stats:
            share = stat.credits / total * 100
            print(f"  {stat.label[:24]:<24} {cls.progress_bar(share)} {stat.credits} MCs ({stat.count})")

    @classmethod
    def print_workload_chart(cls, summaries: tuple):
        """Weekly hours per term, as horizontal bars."""
        cls.print_subheader("Weekly Workload by Term")
        peak = max((s.workload for s in summaries), default=0)
        if not peak:
            print(f"  {cls.DIM}(no data){cls.RESET}")
            return
        for summary in summaries:
            share = summary.workload / peak * 100
            print(f"  {summary.term[:24]:<24} {cls.progress_bar(share)} {summary.workload:g} h")

    # =========================================================================
    # Projection / import
    # =========================================================================

    @classmethod
    def print_projection(cls, result: ProjectionResult):
        cls.print_header(f"TARGET GPA {result.target_gpa:g}")
        badge = (f"{cls.BG_GREEN}{cls.WHITE} ✓ ACHIEVABLE {cls.RESET}" if result.achievable
                 else f"{cls.BG_RED}{cls.WHITE} ✗ NOT ACHIEVABLE {cls.RESET}")
        print(f"\n  {badge}")
        print(f"  {result.message}")
        if result.required_average is not None:
            print(f"\n  {cls.DIM}Graded MCs:{cls.RESET}    {result.locked_credits}")
            print(f"  {cls.DIM}Remaining MCs:{cls.RESET} {result.open_credits}")
            print(f"  {cls.DIM}Required:{cls.RESET}      {result.required_average:.2f} pts/MC "
                  f"(≈{result.recommended_grade})")

    @classmethod
    def print_import_result(cls, result: ImportResult):
        cls.print_message(f"Successfully imported {result.imported} modules!")
        if result.skipped:
            print(f"  {cls.YELLOW}Skipped {result.skipped} row(s) without a module code or name{cls.RESET}")
