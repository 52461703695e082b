"""
Team Member API Endpoints.

Owner-scoped CRUD for team members and the public listing of active ones.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from lanmic_site.core.database.entities.team_members import TeamMember
from lanmic_site.core.database.repositories import TeamMemberRepository
from lanmic_site.core.logging_config import get_logger
from lanmic_site.core.models.io.common import MessageResponse
from lanmic_site.core.models.io.team_members import TeamMemberCreate, TeamMemberRead, TeamMemberUpdate
from lanmic_site.server.services.deps import RelayDep, SessionDep, VerifiedUser
from lanmic_site.server.services.relay import TEAM_EVENTS

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND = "Team member not found"


async def _get_owned(repo: TeamMemberRepository, member_id: int, owner_id: int) -> TeamMember:
    member = await repo.get_for_owner(member_id, owner_id)
    if not member:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=NOT_FOUND)
    return member


@router.get("", response_model=List[TeamMemberRead], summary="List My Team Members")
async def list_team_members(user: VerifiedUser, session: SessionDep) -> List[TeamMemberRead]:
    members = await TeamMemberRepository(session).list_for_owner(user.id)
    return [TeamMemberRead.model_validate(member) for member in members]


@router.get(
    "/active",
    response_model=List[TeamMemberRead],
    summary="List Active Team Members",
    description="Public listing ordered by display order. No authentication required.",
)
async def list_active_team_members(session: SessionDep) -> List[TeamMemberRead]:
    members = await TeamMemberRepository(session).list_public()
    return [TeamMemberRead.model_validate(member) for member in members]


@router.get("/{member_id}", response_model=TeamMemberRead, summary="Get Team Member")
async def get_team_member(member_id: int, user: VerifiedUser, session: SessionDep) -> TeamMemberRead:
    member = await _get_owned(TeamMemberRepository(session), member_id, user.id)
    return TeamMemberRead.model_validate(member)


@router.post("", response_model=TeamMemberRead, status_code=status.HTTP_201_CREATED, summary="Create Team Member")
async def create_team_member(
    body: TeamMemberCreate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> TeamMemberRead:
    member = await TeamMemberRepository(session).create(TeamMember(**body.model_dump(), user_id=user.id))
    result = TeamMemberRead.model_validate(member)
    relay.publish(TEAM_EVENTS.created, result)
    logger.info(f"User {user.id} created team member {member.id}")
    return result


@router.put("/{member_id}", response_model=TeamMemberRead, summary="Update Team Member")
async def update_team_member(
    member_id: int, body: TeamMemberUpdate, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> TeamMemberRead:
    repo = TeamMemberRepository(session)
    member = await _get_owned(repo, member_id, user.id)
    member = await repo.apply_changes(member, body.model_dump(exclude_unset=True))
    result = TeamMemberRead.model_validate(member)
    relay.publish(TEAM_EVENTS.updated, result)
    return result


@router.delete("/{member_id}", response_model=MessageResponse, summary="Delete Team Member")
async def delete_team_member(
    member_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> MessageResponse:
    repo = TeamMemberRepository(session)
    await repo.delete(await _get_owned(repo, member_id, user.id))
    relay.publish(TEAM_EVENTS.deleted, {"id": member_id})
    logger.info(f"User {user.id} deleted team member {member_id}")
    return MessageResponse(message="Team member deleted successfully")


@router.put("/{member_id}/active", response_model=TeamMemberRead, summary="Toggle Team Member Active")
async def toggle_team_member_active(
    member_id: int, user: VerifiedUser, session: SessionDep, relay: RelayDep
) -> TeamMemberRead:
    repo = TeamMemberRepository(session)
    member = await repo.toggle_public_flag(await _get_owned(repo, member_id, user.id))
    result = TeamMemberRead.model_validate(member)
    relay.publish(TEAM_EVENTS.toggled, result)
    return result
