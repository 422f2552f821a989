"""
School meal viewer.

Fetches a school cafeteria's meal-of-the-day data from the NEIS open API,
parses it and renders it as a page.

Structure:
- domain/: Meal records, date codec, XML and nutrition parsing
- infrastructure/: Relay transports, NEIS client, render targets
- application/: Presenter and request orchestration
- api/: FastAPI page surface
- tests/: Test suite
"""

__version__ = "1.0.0"
