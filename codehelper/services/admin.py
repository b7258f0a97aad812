"""Admin dashboard aggregates, user management and data export."""
import json
import math
from datetime import timedelta

from sqlalchemy import distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from codehelper.core.errors import ForbiddenError, NotFoundError
from codehelper.models.base import utcnow
from codehelper.models.chat import ChatSession, Message
from codehelper.models.stats import Stats
from codehelper.models.user import User
from codehelper.schemas.admin import (
    AdminUserSchema,
    AnalyticsSchema,
    DashboardStatsSchema,
    ExportOutSchema,
    MessageCountsSchema,
    PaginationSchema,
    SessionCountsSchema,
    UserCountsSchema,
    UsersPageSchema,
)

EXPORT_MIME_TYPES = {
    "json": "application/json",
    "markdown": "text/markdown",
    "txt": "text/plain",
}
EXPORT_EXTENSIONS = {"json": "json", "markdown": "md", "txt": "txt"}


async def _count(db: AsyncSession, stmt) -> int:
    result = await db.execute(stmt)
    return result.scalar_one() or 0


async def get_dashboard_stats(db: AsyncSession) -> DashboardStatsSchema:
    now = utcnow()
    day_ago = now - timedelta(days=1)
    week_ago = now - timedelta(days=7)

    def active_since(since):
        return select(func.count(distinct(Message.user_id))).where(
            Message.role == "user", Message.timestamp >= since
        )

    users = UserCountsSchema(
        total=await _count(db, select(func.count(User.id))),
        new_24h=await _count(db, select(func.count(User.id)).where(User.created_at >= day_ago)),
        new_7d=await _count(db, select(func.count(User.id)).where(User.created_at >= week_ago)),
        active_24h=await _count(db, active_since(day_ago)),
        active_7d=await _count(db, active_since(week_ago)),
    )
    messages = MessageCountsSchema(
        total=await _count(db, select(func.count(Message.id))),
        user_messages=await _count(db, select(func.count(Message.id)).where(Message.role == "user")),
        last_24h=await _count(db, select(func.count(Message.id)).where(Message.timestamp >= day_ago)),
    )
    sessions = SessionCountsSchema(
        total=await _count(db, select(func.count(ChatSession.id))),
        last_24h=await _count(db, select(func.count(ChatSession.id)).where(ChatSession.created_at >= day_ago)),
        last_7d=await _count(db, select(func.count(ChatSession.id)).where(ChatSession.created_at >= week_ago)),
    )

    avg_result = await db.execute(
        select(func.avg(Stats.avg_response_time)).where(Stats.questions_asked > 0)
    )
    avg_response_time = avg_result.scalar_one()

    dist_result = await db.execute(
        select(Message.question_type, func.count(Message.id))
        .where(Message.role == "user", Message.question_type.is_not(None))
        .group_by(Message.question_type)
        .order_by(func.count(Message.id).desc())
    )
    distribution = {t: c for t, c in dist_result.all()}

    return DashboardStatsSchema(
        users=users,
        messages=messages,
        sessions=sessions,
        analytics=AnalyticsSchema(
            avg_response_time=round(float(avg_response_time or 0.0), 2),
            question_type_distribution=distribution,
        ),
    )


async def list_users(db: AsyncSession, page: int = 1, limit: int = 20, search: str | None = None) -> UsersPageSchema:
    filters = []
    if search:
        pattern = f"%{search.strip()}%"
        filters.append(or_(User.id.ilike(pattern), User.email.ilike(pattern)))

    total = await _count(db, select(func.count(User.id)).where(*filters))

    message_counts = (
        select(Message.user_id, func.count(Message.id).label("cnt")).group_by(Message.user_id).subquery()
    )
    session_counts = (
        select(ChatSession.user_id, func.count(ChatSession.id).label("cnt")).group_by(ChatSession.user_id).subquery()
    )
    result = await db.execute(
        select(User, func.coalesce(message_counts.c.cnt, 0), func.coalesce(session_counts.c.cnt, 0))
        .outerjoin(message_counts, message_counts.c.user_id == User.id)
        .outerjoin(session_counts, session_counts.c.user_id == User.id)
        .where(*filters)
        .order_by(User.created_at.desc())
        .offset((page - 1) * limit)
        .limit(limit)
    )
    users = [
        AdminUserSchema(
            id=u.id,
            email=u.email,
            role=u.role,
            is_blocked=u.is_blocked,
            created_at=u.created_at,
            message_count=m,
            session_count=s,
        )
        for u, m, s in result.all()
    ]
    return UsersPageSchema(
        users=users,
        pagination=PaginationSchema(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if total else 0,
        ),
    )


async def set_user_blocked(db: AsyncSession, user_id: str, blocked: bool) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User", user_id)
    if user.is_admin:
        raise ForbiddenError("Admin accounts cannot be blocked")
    user.is_blocked = blocked
    await db.commit()
    return user


async def _export_rows(db: AsyncSession) -> list[dict]:
    users = (await db.execute(select(User).order_by(User.created_at))).scalars().all()
    stats = {s.user_id: s for s in (await db.execute(select(Stats))).scalars().all()}
    messages = (await db.execute(select(Message).order_by(Message.timestamp))).scalars().all()

    by_user: dict[str, list[Message]] = {}
    for m in messages:
        by_user.setdefault(m.user_id, []).append(m)

    rows = []
    for u in users:
        s = stats.get(u.id)
        rows.append({
            "id": u.id,
            "role": u.role,
            "created_at": u.created_at.isoformat(),
            "stats": {
                "questions_asked": s.questions_asked if s else 0,
                "avg_response_time": s.avg_response_time if s else 0.0,
                "most_frequent_response_type": s.most_frequent_response_type if s else None,
                "tasks_completed": s.tasks_completed if s else 0,
            },
            "messages": [
                {
                    "session_id": m.chat_session_id,
                    "role": m.role,
                    "content": m.content,
                    "question_type": m.question_type,
                    "timestamp": m.timestamp.isoformat(),
                }
                for m in by_user.get(u.id, [])
            ],
        })
    return rows


def _render_markdown(rows: list[dict]) -> str:
    lines = ["# Programming Helper AI export", ""]
    for r in rows:
        st = r["stats"]
        lines += [
            f"## User {r['id']} ({r['role']})",
            "",
            f"- Created: {r['created_at']}",
            f"- Questions asked: {st['questions_asked']}",
            f"- Avg response time: {st['avg_response_time']:.2f}s",
            f"- Most frequent type: {st['most_frequent_response_type'] or '-'}",
            f"- Tasks completed: {st['tasks_completed']}",
            "",
        ]
        for m in r["messages"]:
            lines += [f"**{m['role']}** ({m['timestamp']}):", "", m["content"], ""]
    return "\n".join(lines)


def _render_txt(rows: list[dict]) -> str:
    lines = []
    for r in rows:
        st = r["stats"]
        lines.append(f"User {r['id']} [{r['role']}] created {r['created_at']}")
        lines.append(
            f"  questions={st['questions_asked']} avg_response_time={st['avg_response_time']:.2f}s "
            f"tasks={st['tasks_completed']}"
        )
        for m in r["messages"]:
            lines.append(f"  [{m['timestamp']}] {m['role']}: {m['content']}")
        lines.append("")
    return "\n".join(lines)


async def export_data(db: AsyncSession, fmt: str) -> ExportOutSchema:
    rows = await _export_rows(db)
    if fmt == "json":
        data = json.dumps({"exported_at": utcnow().isoformat(), "users": rows}, ensure_ascii=False, indent=2)
    elif fmt == "markdown":
        data = _render_markdown(rows)
    else:
        data = _render_txt(rows)
    stamp = utcnow().strftime("%Y%m%d-%H%M%S")
    return ExportOutSchema(
        data=data,
        filename=f"programming-helper-export-{stamp}.{EXPORT_EXTENSIONS[fmt]}",
        mime_type=EXPORT_MIME_TYPES[fmt],
    )
