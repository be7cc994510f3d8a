"""Seed the story catalog with sample folktales, or with stories from a JSON file.

Usage:
    python scripts/seed_stories.py              # built-in samples
    python scripts/seed_stories.py stories.json # a JSON array of stories

Idempotent: stories whose story_id already exists are reported and skipped.
"""
import asyncio
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from kosaquest.domain.catalog.services import CatalogService
from kosaquest.infra.db.base import Base, build_engine, build_session_factory
from kosaquest.infra.db.repositories.story_repo import StoryRepositoryImpl
from kosaquest.infra.db import models  # noqa: F401
from kosaquest.settings import settings


SAMPLE_STORIES = [
    {
        "story_id": "001",
        "title": "The Tortoise and the Drum",
        "description": "A classic Yoruba tale about wisdom and patience",
        "language": "Yoruba",
        "difficulty": "beginner",
        "pages": [
            {
                "page_no": 1,
                "english": "Once upon a time, in a village far away, there lived a wise tortoise named Ijapa.",
                "native": "Ni igba kan, ni abule kan ti o jinna, ijapa ologbon kan wa ti a npe ni Ijapa.",
            },
            {
                "page_no": 2,
                "english": "One day, Ijapa heard the sound of a magical drum echoing through the forest.",
                "native": "Ni ojo kan, Ijapa gbo ariwo ilu idan kan ti o nkigbe ninu igbo.",
            },
        ],
        "quizzes": [
            {
                "question_id": "q1",
                "question": "What was the tortoise's name?",
                "options": ["Ijapa", "Anansi", "Kulu", "Baba"],
                "answer": "Ijapa",
                "points": 10,
            },
            {
                "question_id": "q2",
                "question": "What would the drum give to whoever played it?",
                "options": ["Gold", "Wisdom", "Power", "Fame"],
                "answer": "Wisdom",
                "points": 15,
            },
            {
                "question_id": "q3",
                "question": "Complete the proverb: 'Patience is...'",
                "options": [
                    "bitter but its fruit is sweet",
                    "a virtue",
                    "key to success",
                    "all of the above",
                ],
                "answer": "bitter but its fruit is sweet",
                "points": 20,
            },
        ],
        "total_xp": 45,
    },
    {
        "story_id": "002",
        "title": "The Clever Rabbit",
        "description": "A tale of wit and intelligence from Hausa folklore",
        "language": "Hausa",
        "difficulty": "beginner",
        "pages": [
            {
                "page_no": 1,
                "english": "In the savanna lived a clever rabbit who was known for his quick thinking.",
                "native": "A cikin savanna akwai wani zomo mai wayo wanda aka sani da saurin tunani.",
            },
        ],
        "quizzes": [
            {
                "question_id": "q1",
                "question": "What was the rabbit known for?",
                "options": ["Speed", "Quick thinking", "Singing", "Dancing"],
                "answer": "Quick thinking",
                "points": 10,
            },
            {
                "question_id": "q2",
                "question": "Who did the rabbit meet?",
                "options": ["A tiger", "A hungry lion", "An elephant", "A bird"],
                "answer": "A hungry lion",
                "points": 15,
            },
        ],
        "total_xp": 25,
    },
    {
        "story_id": "003",
        "title": "The Magic Pot",
        "description": "An Igbo story about kindness and sharing",
        "language": "Igbo",
        "difficulty": "intermediate",
        "pages": [
            {
                "page_no": 1,
                "english": "There was once a poor woman who found a magic pot in the forest.",
                "native": "Otu mgbe, enwere nwanyị ogbenye nke chọtara ite anwansi n'ọhịa.",
            },
        ],
        "quizzes": [
            {
                "question_id": "q1",
                "question": "Where did the woman find the pot?",
                "options": ["Market", "Forest", "River", "Mountain"],
                "answer": "Forest",
                "points": 15,
            },
        ],
        "total_xp": 15,
    },
]


def load_stories(path: str) -> list:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise SystemExit(f"{path} must contain a JSON array of stories")
    return data


async def seed_stories(stories: list) -> int:
    """Upload stories; return the number that failed."""
    engine = build_engine(settings.database_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        saved, errors = await CatalogService(StoryRepositoryImpl(session)).bulk_upload(stories)
    await engine.dispose()

    print(f"Seeded {len(saved)} stories ({len(errors)} skipped).")
    for story_id in saved:
        print(f"  + {story_id}")
    for error in errors:
        print(f"  - [{error['index']}] {error['story']}: {error['error']}")
    return len(errors)


if __name__ == "__main__":
    stories = load_stories(sys.argv[1]) if len(sys.argv) > 1 else SAMPLE_STORIES
    asyncio.run(seed_stories(stories))
