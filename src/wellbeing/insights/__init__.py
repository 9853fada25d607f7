"""
Insights

Aggregations over recorded entries, used by the dashboard views.
"""

from wellbeing.insights.notable import NotableLookup
from wellbeing.insights.service import InsightService

__all__ = ["InsightService", "NotableLookup"]
