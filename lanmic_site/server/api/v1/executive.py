"""
Executive Leadership API Endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from lanmic_site.core.database.entities.executives import Executive
from lanmic_site.core.database.repositories import ExecutiveRepository
from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.common import MessageResponse
from lanmic_site.core.models.io.executives import ExecutiveCreate, ExecutiveRead, ExecutiveUpdate
from lanmic_site.server.services.deps import RelayDep, SessionDep, VerifiedUser
from lanmic_site.server.services.relay import EXECUTIVE_EVENTS

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND = "Executive leadership not found"


async def _get_owned(repo: ExecutiveRepository, executive_id: int, owner_id: int) -> Executive:
    executive = await repo.get_for_owner(executive_id, owner_id)
    if not executive:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return executive


@router.get("", response_model=List[ExecutiveRead], summary="List My Executives")
async def list_executives(user: VerifiedUser, session: SessionDep) -> List[ExecutiveRead]:
    executives = await ExecutiveRepository(session).list_for_owner(user.id)
    return [ExecutiveRead.model_validate(executive) for executive in executives]


@router.get(
    "/active",
    response_model=List[ExecutiveRead],
    summary="List Active Executives",
    description="Public listing ordered by display order. No authentication required.",
)
async def list_active_executives(session: SessionDep) -> List[ExecutiveRead]:
    executives = await ExecutiveRepository(session).list_public()
    return [ExecutiveRead.model_validate(executive) for executive in executives]


@router.get("/{executive_id}", response_model=ExecutiveRead, summary="Get Executive")
async def get_executive(executive_id: int, user: VerifiedUser, session: SessionDep) -> ExecutiveRead:
    executive = await _get_owned(ExecutiveRepository(session), executive_id, user.id)
    return ExecutiveRead.model_validate(executive)


@router.post("", response_model=ExecutiveRead, status_code=status.HTTP_201_CREATED, summary="Create Executive")
async def create_executive(
    body: ExecutiveCreate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> ExecutiveRead:
    executive = await ExecutiveRepository(session).create(Executive(**body.model_dump(), user_id=user.id))
    result = ExecutiveRead.model_validate(executive)
    relay.publish(EXECUTIVE_EVENTS.created, result)
    logger.info(f"User {user.id} created executive {executive.id}")
    return result


@router.put("/{executive_id}", response_model=ExecutiveRead, summary="Update Executive")
async def update_executive(
    executive_id: int, body: ExecutiveUpdate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> ExecutiveRead:
    repo = ExecutiveRepository(session)
    executive = await _get_owned(repo, executive_id, user.id)
    executive = await repo.apply_changes(executive, body.model_dump(exclude_unset=True))
    result = ExecutiveRead.model_validate(executive)
    relay.publish(EXECUTIVE_EVENTS.updated, result)
    return result


@router.delete("/{executive_id}", response_model=MessageResponse, summary="Delete Executive")
async def delete_executive(
    executive_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> MessageResponse:
    repo = ExecutiveRepository(session)
    await repo.delete(await _get_owned(repo, executive_id, user.id))
    relay.publish(EXECUTIVE_EVENTS.deleted, {"id": executive_id})
    logger.info(f"User {user.id} deleted executive {executive_id}")
    return MessageResponse(message="Executive leadership deleted successfully")


@router.put("/{executive_id}/active", response_model=ExecutiveRead, summary="Toggle Executive Active")
async def toggle_executive_active(
    executive_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> ExecutiveRead:
    repo = ExecutiveRepository(session)
    executive = await repo.toggle_public_flag(await _get_owned(repo, executive_id, user.id))
    result = ExecutiveRead.model_validate(executive)
    relay.publish(EXECUTIVE_EVENTS.toggled, result)
    return result
