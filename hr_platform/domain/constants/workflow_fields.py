"""Constants for ApprovalWorkflow and Document field names"""


class WorkflowFields:
    """Field name constants for ApprovalWorkflow model"""
    ENTITY_ID = "entity_id"
    ENTITY_TYPE = "entity_type"
    STATUS = "status"
    STEPS = "steps"
    CREATED_AT = "created_at"

    # ApprovalStep (embedded)
    STEP_APPROVER_ID = "approver_id"
    STEP_DECISION = "decision"


class DocumentFields:
    """Field name constants for Document model"""
    LINKED_ENTITIES = "linked_entities"
    CATEGORY = "category"

    # DocumentReference (embedded)
    REF_ENTITY_ID = "entity_id"
    REF_ENTITY_TYPE = "entity_type"
