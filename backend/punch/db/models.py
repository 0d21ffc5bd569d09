from datetime import datetime
from typing import Literal

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

EventType = Literal["in", "out", "note"]
PunchDirection = Literal["in", "out"]

PUNCH_TYPES: tuple[str, ...] = ("in", "out")

# follows_event_id of the first in/out event of a project
CHAIN_START = 0

# SQLite only auto-increments INTEGER PRIMARY KEY columns
_BigId = BigInteger().with_variant(Integer, "sqlite")


class Base(DeclarativeBase):
    pass


class Project(Base):
    __tablename__ = "projects"

    __table_args__ = (
        CheckConstraint("overhead >= 0", name="ck_projects_overhead_non_negative"),
    )

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    # Minutes deducted from every work session to account for ramp-up time
    overhead: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    events: Mapped[list["Event"]] = relationship(
        "Event", back_populates="project", lazy="raise"
    )

    def __repr__(self) -> str:
        return f"<Project id={self.id} name={self.name} overhead={self.overhead}>"


class Event(Base):
    __tablename__ = "events"

    __table_args__ = (
        # Compare-and-insert: at most one in/out event may follow any given one
        UniqueConstraint("project_id", "follows_event_id", name="uq_events_punch_chain"),
        Index("ix_events_project_clock", "project_id", "clock"),
    )

    id: Mapped[int] = mapped_column(_BigId, primary_key=True, autoincrement=True)
    project_id: Mapped[int] = mapped_column(
        _BigId,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
    )
    event_type: Mapped[str] = mapped_column(
        Enum("in", "out", "note", name="event_type_enum"), nullable=False
    )
    clock: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # NULL for notes, which are not part of the in/out chain
    follows_event_id: Mapped[int | None] = mapped_column(_BigId, nullable=True)

    project: Mapped["Project"] = relationship("Project", back_populates="events")

    def __repr__(self) -> str:
        return (
            f"<Event id={self.id} project_id={self.project_id} "
            f"event_type={self.event_type} clock={self.clock}>"
        )
