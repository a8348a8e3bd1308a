"""Module entry point for python -m party_rental."""

from __future__ import annotations

from party_rental.app import main


if __name__ == "__main__":
    raise SystemExit(main())
