"""Railway network records in CSV files and passenger traffic analysis."""

__version__ = "0.1.0"

__all__ = [
    "station",
    "train",
    "route",
    "user",
    "records",
    "holidays",
    "loadfactor",
    "flow",
    "heat",
    "prediction",
]