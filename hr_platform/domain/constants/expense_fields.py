"""Constants for expense, payroll and travel field names"""


class ExpenseFields:
    """Field name constants for ExpenseReport model"""
    EMPLOYEE_ID = "employee_id"
    DATE = "date"
    ITEMS = "items"
    STATUS = "status"

    # ExpenseItem (embedded)
    ITEM_PROJECT_ID = "project_id"


class PayrollFields:
    """Field name constants for Payroll model"""
    EMPLOYEE_ID = "employee_id"
    PERIOD_START = "period_start"


class TravelFields:
    """Field name constants for TravelRequest and TravelExpense models"""
    EMPLOYEE_ID = "employee_id"
    TRAVEL_REQUEST_ID = "travel_request_id"
    START_DATE = "start_date"
    DATE = "date"
