"""
Testimonial API Endpoints.

Client quotes shown on the public site. Same owner-scoped shape as the
team and executive endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from lanmic_site.core.database.entities import testimonials as entities
from lanmic_site.core.database.repositories.content import TestimonialRepository
from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io import testimonials as io
from lanmic_site.core.models.io.common import MessageResponse
from lanmic_site.server.services.deps import RelayDep, SessionDep, VerifiedUser
from lanmic_site.server.services.relay import TESTIMONIAL_EVENTS

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND = "Testimonial not found"


async def _get_owned(repo: TestimonialRepository, testimonial_id: int, owner_id: int) -> entities.Testimonial:
    testimonial = await repo.get_for_owner(testimonial_id, owner_id)
    if not testimonial:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return testimonial


@router.get("", response_model=List[io.TestimonialRead], summary="List My Testimonials")
async def list_testimonials(user: VerifiedUser, session: SessionDep) -> List[io.TestimonialRead]:
    testimonials = await TestimonialRepository(session).list_for_owner(user.id)
    return [io.TestimonialRead.model_validate(t) for t in testimonials]


@router.get(
    "/active",
    response_model=List[io.TestimonialRead],
    summary="List Active Testimonials",
    description="Public listing ordered by display order. No authentication required.",
)
async def list_active_testimonials(session: SessionDep) -> List[io.TestimonialRead]:
    testimonials = await TestimonialRepository(session).list_public()
    return [io.TestimonialRead.model_validate(t) for t in testimonials]


@router.get("/{testimonial_id}", response_model=io.TestimonialRead, summary="Get Testimonial")
async def get_testimonial(testimonial_id: int, user: VerifiedUser, session: SessionDep) -> io.TestimonialRead:
    testimonial = await _get_owned(TestimonialRepository(session), testimonial_id, user.id)
    return io.TestimonialRead.model_validate(testimonial)


@router.post(
    "",
    response_model=io.TestimonialRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create Testimonial",
)
async def create_testimonial(
    body: io.TestimonialCreate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> io.TestimonialRead:
    testimonial = await TestimonialRepository(session).create(
        entities.Testimonial(**body.model_dump(), user_id=user.id)
    )
    result = io.TestimonialRead.model_validate(testimonial)
    relay.publish(TESTIMONIAL_EVENTS.created, result)
    logger.info(f"User {user.id} created testimonial {testimonial.id}")
    return result


@router.put("/{testimonial_id}", response_model=io.TestimonialRead, summary="Update Testimonial")
async def update_testimonial(
    testimonial_id: int, body: io.TestimonialUpdate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> io.TestimonialRead:
    repo = TestimonialRepository(session)
    testimonial = await _get_owned(repo, testimonial_id, user.id)
    testimonial = await repo.apply_changes(testimonial, body.model_dump(exclude_unset=True))
    result = io.TestimonialRead.model_validate(testimonial)
    relay.publish(TESTIMONIAL_EVENTS.updated, result)
    return result


@router.delete("/{testimonial_id}", response_model=MessageResponse, summary="Delete Testimonial")
async def delete_testimonial(
    testimonial_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> MessageResponse:
    repo = TestimonialRepository(session)
    await repo.delete(await _get_owned(repo, testimonial_id, user.id))
    relay.publish(TESTIMONIAL_EVENTS.deleted, {"id": testimonial_id})
    logger.info(f"User {user.id} deleted testimonial {testimonial_id}")
    return MessageResponse(message="Testimonial deleted successfully")


@router.put("/{testimonial_id}/active", response_model=io.TestimonialRead, summary="Toggle Testimonial Active")
async def toggle_testimonial_active(
    testimonial_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> io.TestimonialRead:
    repo = TestimonialRepository(session)
    testimonial = await repo.toggle_public_flag(await _get_owned(repo, testimonial_id, user.id))
    result = io.TestimonialRead.model_validate(testimonial)
    relay.publish(TESTIMONIAL_EVENTS.toggled, result)
    return result
