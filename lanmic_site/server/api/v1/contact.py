"""
Contact Form Endpoint.
"""

from fastapi import APIRouter

from lanmic_site.core.models.io.misc import ContactRequest, ContactResponse
from lanmic_site.server.services.contact_service import FAILURE_MESSAGE, SUCCESS_MESSAGE, ContactService
from lanmic_site.server.services.deps import EmailServiceDep

router = APIRouter()


@router.post(
    "",
    response_model=ContactResponse,
    summary="Submit Contact Form",
    description="Forward a website enquiry to the company inbox and send the visitor a confirmation.",
)
async def submit_contact(body: ContactRequest, email_service: EmailServiceDep) -> ContactResponse:
    delivered = await ContactService(email_service).submit(body)
    if delivered:
        return ContactResponse(message=SUCCESS_MESSAGE, success=True)
    return ContactResponse(message=FAILURE_MESSAGE, success=False)
