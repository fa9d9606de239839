"""AI agents for MoodMirror."""

from moodmirror.agents.analyst import AnalysisService, parse_analysis

__all__ = ["AnalysisService", "parse_analysis"]
