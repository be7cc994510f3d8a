"""Tests for the story catalog service."""
import pytest

from kosaquest.domain.catalog.models import Difficulty
from kosaquest.domain.catalog.services import CatalogService
from kosaquest.domain.common.errors import NotFoundError
from kosaquest.infra.db.repositories.story_repo import StoryRepositoryImpl

from helpers import make_story


def story_payload(story_id: str, **overrides) -> dict:
    payload = make_story(story_id=story_id).model_dump(mode="json")
    payload.update(overrides)
    return payload


class TestCatalogService:
    async def test_list_only_active_with_filters(self, db_session, add_story):
        await add_story(make_story("001", language="Yoruba"))
        await add_story(make_story("002", language="Hausa", difficulty="intermediate"))
        await add_story(make_story("003", is_active=False))
        catalog = CatalogService(StoryRepositoryImpl(db_session))

        assert {s.story_id for s in await catalog.list_stories()} == {"001", "002"}
        assert [s.story_id for s in await catalog.list_stories(language="Hausa")] == ["002"]
        assert [s.story_id for s in await catalog.list_stories(difficulty=Difficulty.BEGINNER)] == ["001"]

    async def test_get_story_round_trips_quizzes_in_order(self, db_session, add_story):
        await add_story(make_story(questions=[("q2", "b", 5), ("q1", "a", 10)]))
        story = await CatalogService(StoryRepositoryImpl(db_session)).get_story("001")
        assert [q.question_id for q in story.quizzes] == ["q2", "q1"]
        assert story.quizzes[0].answer == "b"

    async def test_get_inactive_story_not_found(self, db_session, add_story):
        await add_story(make_story(is_active=False))
        with pytest.raises(NotFoundError):
            await CatalogService(StoryRepositoryImpl(db_session)).get_story("001")

    async def test_bulk_upload_reports_failures_by_index(self, db_session, add_story):
        await add_story(make_story("001"))
        catalog = CatalogService(StoryRepositoryImpl(db_session))
        items = [
            story_payload("010"),
            story_payload("001"),  # duplicate story_id
            {"title": "Broken"},  # missing fields
            story_payload("011", quizzes=[{"question_id": "q1", "question": "?", "answer": "a", "points": 0}]),
            story_payload("012"),
        ]
        saved, errors = await catalog.bulk_upload(items)

        assert saved == ["010", "012"]
        assert [e["index"] for e in errors] == [1, 2, 3]
        assert errors[1]["story"] == "Broken"

    async def test_delete_and_stats(self, db_session, add_story):
        await add_story(make_story("001", language="Yoruba"))
        await add_story(make_story("002", language="Yoruba", is_active=False))
        await add_story(make_story("003", language="Igbo", difficulty="advanced"))
        catalog = CatalogService(StoryRepositoryImpl(db_session))

        stats = await catalog.get_stats()
        assert (stats.total, stats.active, stats.inactive) == (3, 2, 1)
        assert stats.language_distribution == {"Yoruba": 2, "Igbo": 1}
        assert stats.difficulty_distribution == {"beginner": 2, "advanced": 1}
        assert len(stats.recent_stories) == 3

        deleted = await catalog.delete_story("003")
        assert deleted.story_id == "003"
        with pytest.raises(NotFoundError):
            await catalog.delete_story("003")
        assert (await catalog.get_stats()).total == 2
