# app/core/reference.py
# Static reference data for the mine form. Not configuration: extend in code.

MINE_TYPES = (
    "Gold",
    "Copper",
    "Iron",
    "Diamond",
    "Silver",
    "Copper & Gold",
    "Copper, Uranium, Gold",
    "Platinum",
)

COUNTRIES = (
    "USA", "Canada", "Australia", "Chile", "Peru", "Brazil",
    "South Africa", "Ghana", "Mali", "Tanzania", "DRC",
    "Russia", "China", "Indonesia", "Papua New Guinea",
    "Mongolia", "Kazakhstan", "Uzbekistan", "Botswana",
    "Angola", "Namibia", "Zimbabwe", "Mexico", "Argentina",
)

MINE_STATUSES = ("Active", "Inactive", "Planned")

DEFAULT_MINE_TYPE = "Gold"
DEFAULT_MINE_STATUS = "Active"
