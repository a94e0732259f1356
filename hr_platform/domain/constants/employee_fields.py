"""Constants for Employee and Project model field names"""


class EmployeeFields:
    """Field name constants for Employee model"""
    PERSONNEL_NUMBER = "personnel_number"
    LAST_NAME = "last_name"
    EMAIL = "email"
    DEPARTMENT = "department"
    IS_ACTIVE = "is_active"


class ProjectFields:
    """Field name constants for Project model"""
    PROJECT_NUMBER = "project_number"
    NAME = "name"
    MEMBER_EMPLOYEE_IDS = "member_employee_ids"
