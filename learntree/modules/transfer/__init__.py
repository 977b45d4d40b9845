"""Import/export exports."""

from .exporter import CSV_HEADERS, EXPORT_VERSION, export_csv, export_json, export_payload
from .importer import ImportFormatError, ImportResult, ImportShape, detect_shape, import_payload

__all__ = [
    "CSV_HEADERS",
    "EXPORT_VERSION",
    "export_csv",
    "export_json",
    "export_payload",
    "ImportFormatError",
    "ImportResult",
    "ImportShape",
    "detect_shape",
    "import_payload",
]
