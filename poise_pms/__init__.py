"""
Poise PMS

Console project-tracking tool for a construction firm: projects, their fees
and deadlines, and the customers, architects, contractors and project
managers attached to them.
"""

__version__ = "0.1.0"
