# marc_toolkit/application/models/__init__.py

"""Application-level models"""

# Local imports
from marc_toolkit.application.models.run_stats import DiagnosticsSummary
from marc_toolkit.application.models.run_stats import ReadStatistics

__all__ = ["DiagnosticsSummary", "ReadStatistics"]
