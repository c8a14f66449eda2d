"""
SkillMatch API - personnel, skills and project staffing service.
"""

__version__ = "1.0.0"
