"""User model: mirrors the auth provider identity plus profile and onboarding flags."""
from sqlalchemy import Boolean, Column, DateTime, Integer, JSON, String
from sqlalchemy.orm import relationship

from codehelper.db.session import Base
from codehelper.models.base import utcnow

ROLE_USER = "user"
ROLE_ADMIN = "admin"


class User(Base):
    __tablename__ = "users"

    # subject issued by the auth provider
    id = Column(String(191), primary_key=True)
    email = Column(String(255), nullable=True, index=True)
    role = Column(String(16), nullable=False, default=ROLE_USER)  # user | admin
    is_blocked = Column(Boolean, nullable=False, default=False)

    # profile
    experience = Column(String(32), nullable=True)  # beginner | intermediate | advanced
    focus_areas = Column(JSON, nullable=False, default=list)
    confidence = Column(Integer, nullable=True)  # 1-5
    ai_experience = Column(String(32), nullable=True)
    preferred_languages = Column(JSON, nullable=False, default=list)
    primary_language = Column(String(32), nullable=True)

    # onboarding
    profile_completed = Column(Boolean, nullable=False, default=False)
    pre_assessment_completed = Column(Boolean, nullable=False, default=False)
    tour_completed = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    stats = relationship("Stats", back_populates="user", uselist=False)
    chat_sessions = relationship("ChatSession", back_populates="user")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def onboarding_completed(self) -> bool:
        return bool(self.profile_completed and self.pre_assessment_completed)
