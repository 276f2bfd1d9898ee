from sqlalchemy import Column, String, DateTime, JSON, ForeignKey
from datetime import datetime, timezone

from personalbook.core.database import Base, generate_uuid

# Ordered list sections stored as JSON arrays, in display order
LIST_SECTIONS = (
    "education",
    "projects",
    "learnings",
    "interests",
    "wishlist",
    "tours",
    "best_pics",
)


class Profile(Base):
    """
    One profile document per user account.

    user_id equals the owning account's secret_id. public_link_key is set
    once at creation and never regenerated.
    """
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    user_id = Column(
        String(16),
        ForeignKey("accounts.secret_id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )
    public_link_key = Column(String(64), unique=True, index=True, nullable=False)

    # Singleton section {name, bio, image}
    about = Column(JSON, nullable=False, default=dict)

    education = Column(JSON, nullable=False, default=list)
    projects = Column(JSON, nullable=False, default=list)
    learnings = Column(JSON, nullable=False, default=list)
    interests = Column(JSON, nullable=False, default=list)
    wishlist = Column(JSON, nullable=False, default=list)
    tours = Column(JSON, nullable=False, default=list)
    best_pics = Column(JSON, nullable=False, default=list)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def __repr__(self):
        return f"<Profile user_id={self.user_id}>"
