import pytest
from sqlalchemy import select, func
from actionthreads.models import Thread, Transcript, ActionPoint
from actionthreads.repositories import thread as thread_repo

API = "/api/v1"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_create_and_list_threads(client, alice, act_as):
    act_as(alice)
    r1 = await client.post(f"{API}/threads", json={"name": "  Standup  "})
    assert r1.status_code == 201
    body = r1.json()
    assert body["name"] == "Standup"
    assert body["userId"] == str(alice.id)
    assert "createdAt" in body
    r2 = await client.post(f"{API}/threads", json={"name": "Retro"})
    assert r2.status_code == 201

    listing = await client.get(f"{API}/threads")
    assert listing.status_code == 200
    # newest first
    assert [t["name"] for t in listing.json()] == ["Retro", "Standup"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_threads_are_private_to_their_owner(client, alice, bob, act_as):
    act_as(alice)
    thread = (await client.post(f"{API}/threads", json={"name": "Private"})).json()

    act_as(bob)
    assert (await client.get(f"{API}/threads")).json() == []
    r = await client.patch(f"{API}/threads/{thread['id']}", json={"name": "Mine now"})
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "THREAD_NOT_FOUND"
    r = await client.get(f"{API}/threads/{thread['id']}/transcripts")
    assert r.status_code == 404
    r = await client.post(f"{API}/threads/{thread['id']}/action-points", json={"title": "sneaky"})
    assert r.status_code == 404
    # deleting someone else's thread is a silent no-op
    assert (await client.delete(f"{API}/threads/{thread['id']}")).status_code == 204

    act_as(alice)
    names = [t["name"] for t in (await client.get(f"{API}/threads")).json()]
    assert names == ["Private"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_duplicate_names_are_scoped_per_owner(client, alice, bob, act_as):
    act_as(alice)
    assert (await client.post(f"{API}/threads", json={"name": "Weekly"})).status_code == 201
    dup = await client.post(f"{API}/threads", json={"name": "Weekly"})
    assert dup.status_code == 409
    assert dup.json()["error"]["code"] == "THREAD_NAME_DUPLICATE"
    # names are case-sensitive
    assert (await client.post(f"{API}/threads", json={"name": "weekly"})).status_code == 201

    act_as(bob)
    assert (await client.post(f"{API}/threads", json={"name": "Weekly"})).status_code == 201


@pytest.mark.asyncio
@pytest.mark.integration
async def test_thread_limit(client, alice, act_as, settings):
    act_as(alice)
    limit = settings.thread_limit_per_user
    ids = []
    for i in range(limit):
        r = await client.post(f"{API}/threads", json={"name": f"t{i}"})
        assert r.status_code == 201, r.text
        ids.append(r.json()["id"])
    over = await client.post(f"{API}/threads", json={"name": "one too many"})
    assert over.status_code == 429
    assert over.json()["error"]["code"] == "THREAD_LIMIT_REACHED"

    assert (await client.delete(f"{API}/threads/{ids[0]}")).status_code == 204
    assert (await client.post(f"{API}/threads", json={"name": "fits again"})).status_code == 201


@pytest.mark.asyncio
@pytest.mark.integration
async def test_rename_thread(client, alice, act_as):
    act_as(alice)
    a = (await client.post(f"{API}/threads", json={"name": "Alpha"})).json()
    await client.post(f"{API}/threads", json={"name": "Beta"})

    same = await client.patch(f"{API}/threads/{a['id']}", json={"name": "Alpha"})
    assert same.status_code == 200
    assert same.json()["name"] == "Alpha"

    clash = await client.patch(f"{API}/threads/{a['id']}", json={"name": "Beta"})
    assert clash.status_code == 409

    renamed = await client.patch(f"{API}/threads/{a['id']}", json={"name": "Gamma"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Gamma"
    assert renamed.json()["id"] == a["id"]


@pytest.mark.asyncio
@pytest.mark.integration
@pytest.mark.parametrize("name", ["", "   ", "x" * 21])
async def test_invalid_thread_name(client, alice, act_as, name):
    act_as(alice)
    r = await client.post(f"{API}/threads", json={"name": name})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "THREAD_NAME_INVALID"


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete_thread_removes_children(client, alice, act_as, db_session):
    act_as(alice)
    thread = (await client.post(f"{API}/threads", json={"name": "Doomed"})).json()
    tid = thread["id"]
    await client.post(f"{API}/threads/{tid}/transcripts", json={"content": "notes"})
    await client.post(f"{API}/threads/{tid}/action-points", json={"title": "task"})

    assert (await client.delete(f"{API}/threads/{tid}")).status_code == 204
    # second delete is still a success
    assert (await client.delete(f"{API}/threads/{tid}")).status_code == 204

    for model in (Thread, Transcript, ActionPoint):
        count = (await db_session.execute(select(func.count()).select_from(model))).scalar_one()
        assert count == 0
    r = await client.get(f"{API}/threads/{tid}/transcripts")
    assert r.status_code == 404


@pytest.mark.asyncio
@pytest.mark.integration
async def test_invalid_thread_id(client, alice, act_as):
    act_as(alice)
    r = await client.delete(f"{API}/threads/not-a-uuid")
    assert r.status_code == 400
    assert r.json()["error"] == {"code": "VALIDATION_ERROR", "message": "Invalid thread ID format"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unique_violation_on_insert_is_a_duplicate(client, alice, act_as, monkeypatch):
    act_as(alice)
    assert (await client.post(f"{API}/threads", json={"name": "Taken"})).status_code == 201
    other = (await client.post(f"{API}/threads", json={"name": "Other"})).json()

    async def _never_taken(*args, **kwargs):
        return False

    # as if a concurrent request inserted the name after the pre-check
    monkeypatch.setattr(thread_repo, "name_taken", _never_taken)
    created = await client.post(f"{API}/threads", json={"name": "Taken"})
    assert created.status_code == 409
    assert created.json()["error"]["code"] == "THREAD_NAME_DUPLICATE"

    renamed = await client.patch(f"{API}/threads/{other['id']}", json={"name": "Taken"})
    assert renamed.status_code == 409
    assert renamed.json()["error"]["code"] == "THREAD_NAME_DUPLICATE"

    monkeypatch.undo()
    names = sorted(t["name"] for t in (await client.get(f"{API}/threads")).json())
    assert names == ["Other", "Taken"]
