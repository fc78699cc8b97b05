"""shirt-trades — Aggregate FRC shirt-trade spreadsheets into one CSV per year."""

__version__ = "0.2.0"

OUTPUT_COLUMNS: list[str] = [
    "Team Number",
    "Team Name",
    "Size",
    "Year",
    "Description",
    "Seller",
    "Contact",
]
