# marc_toolkit/application/processing/diagnostics/__init__.py

"""Record diagnostics: structural and rule-based validation"""

# Local imports
from marc_toolkit.application.processing.diagnostics._engine import DiagnosticsEngine
from marc_toolkit.application.processing.diagnostics._semantic import SemanticChecker
from marc_toolkit.application.processing.diagnostics._structural import StructuralChecker

__all__ = ["DiagnosticsEngine", "SemanticChecker", "StructuralChecker"]
