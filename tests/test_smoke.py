import pytest


@pytest.mark.asyncio
@pytest.mark.smoke
async def test_smoke_thread_lifecycle(client, alice, act_as, summarizer):
    # Root
    r_root = await client.get('/')
    assert r_root.status_code == 200
    assert r_root.json()['status'] == 'ok'
    act_as(alice)
    # Who am I
    r_me = await client.get('/api/v1/users/me')
    assert r_me.status_code == 200
    assert r_me.json()['email'] == 'alice@example.com'
    # Create thread
    r_thread = await client.post('/api/v1/threads', json={"name": "smoke-thread"})
    assert r_thread.status_code == 201
    thread_id = r_thread.json()['id']
    # Add and update a transcript
    r_tr = await client.post(f'/api/v1/threads/{thread_id}/transcripts', json={"content": "hello"})
    assert r_tr.status_code == 201
    summarizer.reply = '[{"title": "Say hello back"}, {"title": "  "}]'
    r_up = await client.patch(f"/api/v1/transcripts/{r_tr.json()['id']}", json={"content": "hello again"})
    assert r_up.status_code == 200
    assert [ap['title'] for ap in r_up.json()['actionPointsGeneration']['created']] == ["Say hello back"]
    # List threads
    r_threads = await client.get('/api/v1/threads')
    assert r_threads.status_code == 200
    assert any(t['id'] == thread_id for t in r_threads.json())
