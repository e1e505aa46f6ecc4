"""listing-doctor: smart parsing of real-estate price lists into validated listing records."""

__version__ = "0.3.0"

from listing_doctor.engine import (  # noqa: E402
    column_suggestions,
    extract_developer_info,
    extract_project_name,
    list_sheet_names,
    parse,
)
from listing_doctor.compliance import validate_compliance  # noqa: E402

__all__ = [
    "__version__",
    "column_suggestions",
    "extract_developer_info",
    "extract_project_name",
    "list_sheet_names",
    "parse",
    "validate_compliance",
]
