"""Quiz scoring engine.

Pure functions: no repository access, no side effects. The catalog's question
list is authoritative; submitted responses are matched against it by
question id.
"""
from typing import Dict, Iterable, List, Sequence

from kosaquest.domain.catalog.models import QuizQuestion
from kosaquest.domain.common.errors import CatalogIntegrityError
from kosaquest.domain.quiz.models import QuestionResult, QuizScore, SubmittedResponse


def latest_answers(responses: Iterable[SubmittedResponse]) -> Dict[str, str]:
    """Map question id -> answer. When a question is answered twice, the last one wins."""
    answers: Dict[str, str] = {}
    for response in responses:
        answers[response.question_id] = response.answer
    return answers


def score_quiz(
    questions: Sequence[QuizQuestion],
    responses: Iterable[SubmittedResponse],
) -> QuizScore:
    """Score submitted responses against a story's quiz.

    Args:
        questions: The story's questions in canonical order.
        responses: Caller-supplied answers. May omit questions, repeat a
            question id (last occurrence wins) or reference unknown ids
            (ignored).

    Returns:
        QuizScore with one result per catalog question. ``max_score`` is the
        live sum of question points, independent of what was submitted.

    Raises:
        CatalogIntegrityError: a question carries non-positive points.
    """
    answers = latest_answers(responses)
    results: List[QuestionResult] = []
    total_score = 0
    max_score = 0

    for question in questions:
        if question.points <= 0:
            raise CatalogIntegrityError(
                f"Question {question.question_id} has non-positive points ({question.points})"
            )
        max_score += question.points

        if question.question_id not in answers:
            results.append(
                QuestionResult(
                    question_id=question.question_id,
                    answer="",
                    is_correct=False,
                    points_earned=0,
                )
            )
            continue

        answer = answers[question.question_id]
        # Exact comparison: no case folding, no trimming.
        is_correct = answer == question.answer
        points_earned = question.points if is_correct else 0
        total_score += points_earned
        results.append(
            QuestionResult(
                question_id=question.question_id,
                answer=answer,
                is_correct=is_correct,
                points_earned=points_earned,
            )
        )

    return QuizScore(results=results, total_score=total_score, max_score=max_score)
