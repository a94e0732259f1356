"""Constants for UserAccount model field names"""


class UserFields:
    """Field name constants for UserAccount model"""
    NORMALIZED_USER_NAME = "normalized_user_name"
    NORMALIZED_EMAIL = "normalized_email"
