"""Constants shared by every stored entity"""


class CommonFields:
    """Field names present on every entity"""
    ID = "id"

    # MongoDB specific
    MONGO_ID = "_id"  # MongoDB's internal _id field
