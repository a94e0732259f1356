"""Constants for time entry field names"""


class TimeEntryFields:
    """Field names shared by WorkTimeEntry and ProjectTimeEntry"""
    EMPLOYEE_ID = "employee_id"
    PROJECT_ID = "project_id"
    DATE = "date"
    IS_BILLABLE = "is_billable"
