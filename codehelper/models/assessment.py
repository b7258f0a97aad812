"""Knowledge assessments (pre/post) and the question bank."""
from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text

from codehelper.db.session import Base
from codehelper.models.base import new_id, utcnow

ASSESSMENT_PRE = "pre"
ASSESSMENT_POST = "post"


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = (Index("ix_assessments_user_id_type", "user_id", "type"),)

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(String(191), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    type = Column(String(8), nullable=False)  # pre | post
    language = Column(String(32), nullable=True)
    score = Column(Integer, nullable=True)
    total_questions = Column(Integer, nullable=False, default=0)
    confidence = Column(Integer, nullable=False)  # 1-5 self rating
    # [{question_id, answer, correct}]
    answers = Column(JSON, nullable=False, default=list)
    completed_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class AssessmentQuestion(Base):
    __tablename__ = "assessment_questions"
    __table_args__ = (Index("ix_assessment_questions_difficulty_language", "difficulty", "language"),)

    id = Column(String(32), primary_key=True, default=new_id)
    question = Column(Text, nullable=False)
    type = Column(String(32), nullable=False)  # multiple_choice | conceptual
    options = Column(JSON, nullable=True)
    correct_answer = Column(Text, nullable=False)
    category = Column(String(32), nullable=False, index=True)
    difficulty = Column(String(16), nullable=False)  # beginner | intermediate | advanced
    language = Column(String(32), nullable=True)  # null = language agnostic
    explanation = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
