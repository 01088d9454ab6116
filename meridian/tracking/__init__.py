"""
Tracking domain utilities.

Pure functions with no database access:
- aging: aging days, aging level and progress percent
- recurrence: recurring meeting date expansion and calendar helpers
- object_codes: suggested ``OBJ-..`` object codes
- saved_views: built-in list filter presets
- reports: dashboard and report aggregation
"""
