"""Tag registry services."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from discvault.models.tagging import Tag
from discvault.schema.tag import TagCreate, TagUpdate


async def list_tags(session: AsyncSession) -> list[Tag]:
    """List every tag sorted by name."""
    result = await session.execute(select(Tag).order_by(Tag.name.asc()))
    return list(result.scalars().all())


async def get_tag(session: AsyncSession, tag_id: uuid.UUID) -> Tag:
    tag = await session.get(Tag, tag_id)
    if not tag:
        raise ValueError("Tag not found")
    return tag


async def _name_taken(session: AsyncSession, name: str, *, exclude: uuid.UUID | None = None) -> bool:
    stmt = select(Tag.id).where(Tag.name == name)
    if exclude is not None:
        stmt = stmt.where(Tag.id != exclude)
    result = await session.execute(stmt)
    return result.first() is not None


async def create_tag(session: AsyncSession, payload: TagCreate, *, created_by: uuid.UUID | None = None) -> Tag:
    """Create a new tag with a unique name."""
    name = payload.name.strip()
    if not name:
        raise ValueError("Tag name cannot be blank")
    if await _name_taken(session, name):
        raise ValueError("Tag already exists")
    tag = Tag(name=name, color=payload.color, description=payload.description, created_by=created_by)
    session.add(tag)
    await session.commit()
    await session.refresh(tag)
    return tag


async def update_tag(session: AsyncSession, tag_id: uuid.UUID, payload: TagUpdate) -> Tag:
    tag = await get_tag(session, tag_id)
    changes = payload.model_dump(exclude_unset=True)
    if "name" in changes:
        name = (changes["name"] or "").strip()
        if not name:
            raise ValueError("Tag name cannot be blank")
        if await _name_taken(session, name, exclude=tag.id):
            raise ValueError("Tag already exists")
        tag.name = name
    if "color" in changes:
        tag.color = changes["color"]
    if "description" in changes:
        tag.description = changes["description"]
    await session.commit()
    await session.refresh(tag)
    return tag


async def delete_tag(session: AsyncSession, tag_id: uuid.UUID) -> None:
    tag = await get_tag(session, tag_id)
    await session.delete(tag)
    await session.commit()
