"""
Learner Funding Eligibility Checker

Determines which government education funding streams a learner qualifies for
and shows the funded courses that match.
"""

__version__ = "1.0.0"
__author__ = "Funding Checker Team"
__description__ = "Education funding eligibility checking service"
