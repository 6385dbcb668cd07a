"""
servicelink - reconcile PagerDuty services with Backstage catalog components.
"""

__version__ = "0.1.0"
