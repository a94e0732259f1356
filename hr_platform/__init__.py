"""
HR Platform
===========

Typed persistence layer over MongoDB plus the cross-entity domain logic
(time aggregation, absences, expenses, approval workflows) of the HR and
operations platform.
"""
__version__ = "1.0.0"
