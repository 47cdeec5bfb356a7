"""Notification service and route tests."""

from __future__ import annotations

import uuid

import pytest

from discvault.models.notification import NotificationType
from discvault.models.user import User
from discvault.services import notification_service
from discvault.tests.utils import API, install_admin, register_and_login


@pytest.mark.asyncio
async def test_mark_read_is_scoped_to_owner(session):
    owner = User(username="owner", email="owner@test", hashed_password="x")
    other = User(username="other", email="other@test", hashed_password="x")
    session.add_all([owner, other])
    await session.commit()

    note = await notification_service.create_notification(
        session, owner.id, NotificationType.DISC_ADDED, "Added 'Heat' to the collection"
    )

    with pytest.raises(ValueError):
        await notification_service.mark_read(session, other.id, note.id)

    marked = await notification_service.mark_read(session, owner.id, note.id)
    assert marked.read is True


@pytest.mark.asyncio
async def test_list_is_latest_first_and_limited(session):
    user = User(username="reader", email="reader@test", hashed_password="x")
    session.add(user)
    await session.commit()
    for index in range(3):
        await notification_service.create_notification(
            session, user.id, NotificationType.DISC_ADDED, f"Added disc {index}"
        )

    latest = await notification_service.list_notifications(session, user.id, limit=2)
    assert [note.message for note in latest] == ["Added disc 2", "Added disc 1"]


@pytest.mark.asyncio
async def test_notification_routes(client):
    admin = await install_admin(client)
    member = await register_and_login(client)
    for title in ("Heat", "Ronin"):
        await client.post(f"{API}/discs", json={"title": title, "media_kind": "movie"}, headers=admin.headers)

    notes = (await client.get(f"{API}/notifications", headers=admin.headers)).json()
    assert len(notes) == 2
    assert (await client.get(f"{API}/notifications", headers=member.headers)).json() == []

    res = await client.put(f"{API}/notifications/{notes[0]['id']}/read", headers=member.headers)
    assert res.status_code == 404
    res = await client.put(f"{API}/notifications/{uuid.uuid4()}/read", headers=admin.headers)
    assert res.status_code == 404

    res = await client.put(f"{API}/notifications/{notes[0]['id']}/read", headers=admin.headers)
    assert res.status_code == 200
    assert res.json()["read"] is True

    res = await client.put(f"{API}/notifications/read-all", headers=admin.headers)
    assert res.json() == {"updated": 1}
    notes = (await client.get(f"{API}/notifications", headers=admin.headers)).json()
    assert all(note["read"] for note in notes)
