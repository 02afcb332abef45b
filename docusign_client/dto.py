import os
from typing import Any, Dict, List, Optional

from fastapi_camelcase import CamelModel
from pydantic import BaseModel, model_validator


class Signer(CamelModel):
    email: str
    name: str


class DocumentRef(BaseModel):
    """A file to upload, given either as an open binary stream or a path."""
    io: Any = None
    path: Optional[str] = None
    name: Optional[str] = None
    content_type: str = 'application/pdf'

    @model_validator(mode='after')
    def check_source(self):
        if self.io is None and not self.path:
            raise ValueError('Either io or path must be supplied')
        if not self.name:
            if not self.path:
                raise ValueError('name is required when uploading a stream')
            self.name = os.path.basename(self.path)
        return self


class EnvelopeRequest(BaseModel):
    email_subject: str
    email_body: str = ''
    files: List[DocumentRef] = []
    signers: List[Signer] = []
    status: str = 'sent'
    headers: Optional[Dict[str, str]] = None


class EnvelopeDocument(CamelModel):
    document_id: str
    name: str


class EnvelopeSigner(CamelModel):
    email: str
    name: str
    recipient_id: str


class Recipients(CamelModel):
    signers: List[EnvelopeSigner] = []


class EnvelopeDefinition(CamelModel):
    email_blurb: str
    email_subject: str
    documents: List[EnvelopeDocument] = []
    recipients: Recipients
    status: str = 'sent'
