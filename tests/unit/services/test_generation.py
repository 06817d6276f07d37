import pytest
from actionthreads.core.errors import ActionPointGenerationError
from actionthreads.models import User, Thread, ActionPoint
from actionthreads.services.generation import build_prompt, generate_action_points, parse_reply


class _Reply:
    def __init__(self, text: str):
        self.text = text
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.text


@pytest.mark.unit
def test_parse_reply_extracts_array_from_prose():
    reply = 'Sure!\n```json\n[{"title": " Send minutes "}, {"title": ""}, {"title": "Book venue"}]\n```'
    assert parse_reply(reply) == ["Send minutes", "Book venue"]


@pytest.mark.unit
def test_parse_reply_truncates_long_titles():
    titles = parse_reply('[{"title": "%s"}]' % ("y" * 300))
    assert len(titles[0]) == 255


@pytest.mark.unit
@pytest.mark.parametrize(
    "reply",
    ["no json here", "[not json]", '[{"name": "missing title"}]', '[{"title": 5}]', ""],
)
def test_parse_reply_rejects_malformed(reply):
    with pytest.raises(ActionPointGenerationError):
        parse_reply(reply)


@pytest.mark.unit
def test_build_prompt_lists_existing_titles():
    prompt = build_prompt("We met.", ["Ship report"])
    assert "We met." in prompt
    assert "- Ship report" in prompt
    assert "already recorded" not in build_prompt("We met.", [])


@pytest.mark.asyncio
@pytest.mark.unit
async def test_generate_skips_known_titles(db_session):
    user = User(email="gen@example.com")
    db_session.add(user)
    await db_session.flush()
    thread = Thread(user_id=user.id, name="Gen")
    db_session.add(thread)
    await db_session.flush()
    db_session.add(ActionPoint(thread_id=thread.id, title="Ship Report"))
    await db_session.flush()

    summarizer = _Reply('[{"title": "ship report"}, {"title": "Call Bob"}, {"title": "call bob"}]')
    created = await generate_action_points(
        db_session, user_id=user.id, thread_id=thread.id, content="notes", summarizer=summarizer
    )
    assert [ap.title for ap in created] == ["Call Bob"]
    assert all(ap.is_completed is False for ap in created)
    assert "- Ship Report" in summarizer.prompts[0]
