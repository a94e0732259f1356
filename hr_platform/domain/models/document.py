"""
Document Model
==============

Metadata of an uploaded file. The binary content lives elsewhere
(``storage_path``); a document links to, but never owns, business entities.
"""
from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field


class DocumentCategory:
    """Document categories"""
    PAYSLIP = "Payslip"
    TRAVEL_EXPENSES = "TravelExpenses"
    SICK_NOTE = "SickNote"
    LEAVE = "Leave"
    CONTRACT = "Contract"
    OTHER = "Other"


@dataclass
class DocumentReference:
    """Back-reference from a document to the entity it belongs to."""
    entity_id: str
    entity_type: str
    description: str = ""


@dataclass
class Document:
    file_name: str
    content_type: str = "application/octet-stream"
    size: int = 0
    upload_date: Optional[datetime] = None
    uploaded_by: str = ""
    category: str = DocumentCategory.OTHER
    storage_path: str = ""
    description: str = ""
    linked_entities: List[DocumentReference] = field(default_factory=list)
    id: str = ""

    def link(self, entity_id: str, entity_type: str, description: str = "") -> None:
        """Attach the document to an entity (no-op if already linked)."""
        if not self.references(entity_id, entity_type):
            self.linked_entities.append(DocumentReference(entity_id, entity_type, description))

    def references(self, entity_id: str, entity_type: Optional[str] = None) -> bool:
        return any(
            ref.entity_id == entity_id and (entity_type is None or ref.entity_type == entity_type)
            for ref in self.linked_entities
        )
