"""UX Starter - builds UX audit recommendation decks.

Reads the failing criteria from an audit workbook and produces one slide per
recommendation (criteria, pages it applies to, problem and solution, the
best-practice mockup and the client screenshot), followed by any insight
slides and a closing slide.
"""

from __future__ import annotations

from uxstarter import run_cli


def main() -> None:
    run_cli()


if __name__ == "__main__":
    main()
