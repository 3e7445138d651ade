from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import Field

from wedding_api.admin.repository.write_models import AdminGroupWriteModel, SqlAdminGroupWriteModel
from wedding_api.admin.urls import GROUP_URL, GROUPS_URL
from wedding_api.guests.dtos import GroupNotFoundError
from wedding_api.guests.schemas import CamelModel, GroupResponse

router = APIRouter()


class GroupCreate(CamelModel):
    name: str = Field(default="", max_length=200)


class GroupUpdate(CamelModel):
    name: str = Field(max_length=200)


class GroupDeleteResponse(CamelModel):
    success: bool
    deleted_guests: int


def get_admin_group_write_model() -> AdminGroupWriteModel:
    """Dependency to get admin group write model instance."""
    return SqlAdminGroupWriteModel()


@router.get(GROUPS_URL, response_model=list[GroupResponse])
async def list_groups(
    write_model: AdminGroupWriteModel = Depends(get_admin_group_write_model),
) -> list[GroupResponse]:
    """List all groups with their guests."""
    groups = await write_model.list_groups()
    return [GroupResponse.from_dto(group) for group in groups]


@router.get(GROUP_URL, response_model=GroupResponse)
async def get_group(
    group_id: UUID,
    write_model: AdminGroupWriteModel = Depends(get_admin_group_write_model),
) -> GroupResponse:
    group = await write_model.get_group(group_id)
    if group is None:
        raise GroupNotFoundError()
    return GroupResponse.from_dto(group)


@router.post(GROUPS_URL, response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
async def create_group(
    group_data: GroupCreate,
    write_model: AdminGroupWriteModel = Depends(get_admin_group_write_model),
) -> GroupResponse:
    group = await write_model.create_group(group_data.name)
    return GroupResponse.from_dto(group)


@router.put(GROUP_URL, response_model=GroupResponse)
async def update_group(
    group_id: UUID,
    group_data: GroupUpdate,
    write_model: AdminGroupWriteModel = Depends(get_admin_group_write_model),
) -> GroupResponse:
    group = await write_model.update_group(group_id, group_data.name)
    return GroupResponse.from_dto(group)


@router.delete(GROUP_URL, response_model=GroupDeleteResponse)
async def delete_group(
    group_id: UUID,
    write_model: AdminGroupWriteModel = Depends(get_admin_group_write_model),
) -> GroupDeleteResponse:
    """Delete a group together with every guest in it."""
    deleted_guests = await write_model.delete_group(group_id)
    return GroupDeleteResponse(success=True, deleted_guests=deleted_guests)
