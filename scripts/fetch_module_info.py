"""
Build an import-ready CSV from a list of module codes.

Looks up each module's title and MCs in the public NUSMods catalog and writes
a file that `gradetracker` can import directly.

Usage:
    python scripts/fetch_module_info.py "Year 1 Semester 1" CS1101S MA1521 -o y1s1.csv

Needs the gradetracker package importable (pip install -e .) so the CSV
header and default MCs stay the same as the importer's.
"""

import csv
import time

import click
import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from gradetracker.config import CSV_HEADERS, DEFAULT_CREDITS

# --- CONFIGURATION ---
API_BASE = "https://api.nusmods.com/v2"
ACAD_YEAR = "2025-2026"
REQUEST_DELAY = 0.5      # seconds between lookups
# ---------------------


def create_retry_session():
    session = requests.Session()
    retries = Retry(
        total=5,
        backoff_factor=1,  # Wait 1s, 2s, 4s... on 429/5xx
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET"]
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    return session


def weekly_hours(workload):
    """NUSMods workload is a list of weekly hours per activity (lecture, tutorial, ...)."""
    if isinstance(workload, list):
        try:
            return int(sum(float(h) for h in workload))
        except (TypeError, ValueError):
            return ""
    return ""


def fetch_module(session, acad_year, code):
    """
    Fetch one module. Returns (title, credits, workload).

    Unknown modules and network failures fall back to the code as title and
    4 MCs, so the row can still be imported and fixed by hand.
    """
    url = f"{API_BASE}/{acad_year}/modules/{code}.json"
    try:
        resp = session.get(url, timeout=15)
        if resp.status_code != 200:
            print(f"   [{code} ⚠️ {resp.status_code}]")
            return code, DEFAULT_CREDITS, ""
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        print(f"   [{code} Err: {e}]")
        return code, DEFAULT_CREDITS, ""

    try:
        credits = int(float(data.get("moduleCredit", DEFAULT_CREDITS)))
    except (TypeError, ValueError):
        credits = DEFAULT_CREDITS
    return data.get("title", code), credits, weekly_hours(data.get("workload"))


def run(term, codes, output, acad_year=ACAD_YEAR, category=""):
    session = create_retry_session()
    rows = []
    for code in codes:
        code = code.strip().upper()
        if not code:
            continue
        title, credits, workload = fetch_module(session, acad_year, code)
        print(f"   📘 {code}: {title} ({credits} MCs)")
        rows.append([term, code, title, credits, category, "", workload, ""])
        time.sleep(REQUEST_DELAY)

    with open(output, "w", encoding="utf-8", newline="") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(CSV_HEADERS)
        writer.writerows(rows)
    return rows


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("term")
@click.argument("codes", nargs=-1, required=True)
@click.option("--output", "-o", default="modules.csv", type=click.Path(dir_okay=False),
              help="CSV file to write.")
@click.option("--acad-year", default=ACAD_YEAR, show_default=True, help="NUSMods academic year.")
@click.option("--category", default="", help="Focus area for every row.")
def main(term, codes, output, acad_year, category):
    """Build a module CSV for TERM (e.g. "Year 1 Semester 1") from NUSMods data."""
    click.echo(f"🚀 Looking up {len(codes)} modules for AY{acad_year}")
    click.echo("-" * 60)
    rows = run(term, codes, output, acad_year, category)
    click.echo("-" * 60)
    click.echo(f"✨ Done. {len(rows)} rows written to '{output}'")


if __name__ == "__main__":
    main()
