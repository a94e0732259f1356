"""Constants for LeaveRequest and SickNote field names"""


class AbsenceFields:
    """Field names shared by absence records"""
    EMPLOYEE_ID = "employee_id"
    START_DATE = "start_date"
    END_DATE = "end_date"
    STATUS = "status"
