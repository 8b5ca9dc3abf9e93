"""
Analytics Subsystem

Click recording and impression/click effectiveness reporting.
"""

from .services import AnalyticsReportService
from .routes import create_analytics_blueprint
from .factory import create_analytics_module

__all__ = ['AnalyticsReportService', 'create_analytics_blueprint', 'create_analytics_module']
