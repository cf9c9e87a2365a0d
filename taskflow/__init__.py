"""Taskflow: multi-tenant task and project management API"""

__version__ = "1.0.0"
