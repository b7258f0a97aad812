"""Assessment question selection and scoring."""
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.core.errors import PreconditionFailedError
from codehelper.models.assessment import ASSESSMENT_POST, ASSESSMENT_PRE, Assessment, AssessmentQuestion
from codehelper.models.user import User
from codehelper.schemas.assessment import AnswerSchema, AssessmentSubmitSchema
from codehelper.services.eligibility import check_post_assessment_eligibility


def _normalize(answer: str | None) -> str:
    return " ".join((answer or "").split()).lower()


def score_answers(
    questions: dict[str, AssessmentQuestion], answers: list[AnswerSchema]
) -> tuple[int, list[dict]]:
    """Count correct answers; unknown question ids score zero."""
    score = 0
    graded = []
    for a in answers:
        q = questions.get(a.question_id)
        correct = q is not None and _normalize(a.answer) == _normalize(q.correct_answer)
        if correct:
            score += 1
        graded.append({"question_id": a.question_id, "answer": a.answer, "correct": correct})
    return score, graded


async def list_questions(
    db: AsyncSession,
    language: str | None = None,
    difficulty: str | None = None,
    limit: int = 10,
) -> list[AssessmentQuestion]:
    stmt = select(AssessmentQuestion)
    if language:
        stmt = stmt.where(
            or_(AssessmentQuestion.language == language, AssessmentQuestion.language.is_(None))
        )
    if difficulty:
        stmt = stmt.where(AssessmentQuestion.difficulty == difficulty)
    result = await db.execute(stmt.order_by(AssessmentQuestion.created_at, AssessmentQuestion.id).limit(limit))
    return list(result.scalars().all())


async def _has_assessment(db: AsyncSession, user_id: str, kind: str) -> bool:
    result = await db.execute(
        select(Assessment.id).where(Assessment.user_id == user_id, Assessment.type == kind).limit(1)
    )
    return result.first() is not None


async def has_post_assessment(db: AsyncSession, user_id: str) -> bool:
    return await _has_assessment(db, user_id, ASSESSMENT_POST)


async def submit_assessment(
    db: AsyncSession,
    user: User,
    body: AssessmentSubmitSchema,
    min_minutes: int,
) -> Assessment:
    """Score and store an assessment.

    pre: once per user. post: after pre, once, and only when eligible.
    """
    if body.type == ASSESSMENT_PRE:
        if await _has_assessment(db, user.id, ASSESSMENT_PRE):
            raise PreconditionFailedError("Pre-assessment already completed")
    else:
        if not await _has_assessment(db, user.id, ASSESSMENT_PRE):
            raise PreconditionFailedError("Please complete the knowledge assessment first")
        if await _has_assessment(db, user.id, ASSESSMENT_POST):
            raise PreconditionFailedError("Post-assessment already completed")
        eligibility = check_post_assessment_eligibility(user.created_at, min_minutes=min_minutes)
        if not eligibility.is_eligible:
            raise PreconditionFailedError("Post-assessment is not available yet")

    ids = [a.question_id for a in body.answers]
    result = await db.execute(select(AssessmentQuestion).where(AssessmentQuestion.id.in_(ids)))
    questions = {q.id: q for q in result.scalars().all()}
    score, graded = score_answers(questions, body.answers)

    assessment = Assessment(
        user_id=user.id,
        type=body.type,
        language=body.language,
        score=score,
        total_questions=len(body.answers),
        confidence=body.confidence,
        answers=graded,
    )
    db.add(assessment)
    if body.type == ASSESSMENT_PRE:
        user.pre_assessment_completed = True
    await db.commit()
    return assessment
