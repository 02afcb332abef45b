import json
import logging
from typing import List

from urllib3.fields import RequestField
from urllib3.filepost import encode_multipart_formdata

from .dto import (DocumentRef, EnvelopeDefinition, EnvelopeDocument,
                  EnvelopeRequest, EnvelopeSigner, Recipients, Signer)


logger = logging.getLogger(__name__)


def make_signers(signers: List[Signer]):
    """Number signers 1..N in the order they were given."""
    return [EnvelopeSigner(email=signer.email,
                           name=signer.name,
                           recipient_id=str(index))
            for index, signer in enumerate(signers, start=1)]


def make_documents(files: List[DocumentRef]):
    """Number documents 1..N; the id ties each entry to its file part."""
    return [EnvelopeDocument(document_id=str(index), name=file.name)
            for index, file in enumerate(files, start=1)]


def signers_fragment(signers: List[Signer]):
    return _dump_list(make_signers(signers))


def documents_fragment(files: List[DocumentRef]):
    return _dump_list(make_documents(files))


def make_envelope(request: EnvelopeRequest):
    return EnvelopeDefinition(
        email_blurb=request.email_body,
        email_subject=request.email_subject,
        documents=make_documents(request.files),
        recipients=Recipients(signers=make_signers(request.signers)),
        status=request.status,
    )


def envelope_body(request: EnvelopeRequest):
    """
    Serialize the envelope metadata sent alongside the uploaded files.

    :param request: EnvelopeRequest
    :return: str JSON with emailBlurb, emailSubject, documents,
     recipients.signers and status keys
    """
    return json.dumps(make_envelope(request).model_dump(by_alias=True))


def make_multipart(request: EnvelopeRequest):
    """
    Encode the envelope as a multipart body.

    The JSON metadata goes first as ``post_body``, followed by one
    ``file<n>`` part per document whose Content-Disposition carries the
    same ``documentid`` as the JSON entry.

    :param request: EnvelopeRequest
    :return: tuple of (body bytes, Content-Type header value)
    """
    post_body = RequestField(name='post_body', data=envelope_body(request))
    post_body.make_multipart(content_type='application/json')
    fields = [post_body]
    for index, file in enumerate(request.files, start=1):
        part = RequestField(name=f'file{index}',
                            data=_read_document(file),
                            filename=file.name)
        part.make_multipart(content_disposition=f'file; documentid={index}',
                            content_type=file.content_type)
        fields.append(part)
    logger.debug(f'Encoded envelope with {len(request.files)} documents '
                 f'and {len(request.signers)} signers')
    return encode_multipart_formdata(fields)


def _read_document(file: DocumentRef):
    # Streams we were handed stay open; the caller owns them.
    if file.io is not None:
        return file.io.read()
    with open(file.path, 'rb') as stream:
        return stream.read()


def _dump_list(records):
    return json.dumps([record.model_dump(by_alias=True) for record in records])
