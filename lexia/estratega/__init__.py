# lexia/estratega/__init__.py
"""Strategic case analysis pipeline."""

from lexia.estratega.orchestrator import StrategicAnalyzer, pick_timeline_scenario
from lexia.estratega.schemas import AnalyzeParams, StrategicAnalysis

__all__ = ["StrategicAnalyzer", "pick_timeline_scenario", "AnalyzeParams", "StrategicAnalysis"]
