# marc_toolkit/adapters/exporters/__init__.py

"""Report exporters"""

# Local imports
from marc_toolkit.adapters.exporters.json_exporter import JSONReportWriter
from marc_toolkit.adapters.exporters.json_exporter import save_report_json

__all__ = ["JSONReportWriter", "save_report_json"]
