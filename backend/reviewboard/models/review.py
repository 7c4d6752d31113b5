"""
Review Board Backend — Review SQLAlchemy Model
===============================================

What:  ORM model representing the `reviews` table.
How:   Inherits from the declarative Base; ReviewStore builds its INSERT,
       SELECT and DELETE statements from this class and creates the table
       through Base.metadata.
Who:   Used by ReviewStore only. API payloads live in schemas/review.py.

Table Design:
    reviews(id INTEGER PRIMARY KEY AUTOINCREMENT, name TEXT, review TEXT, rating INTEGER)

    - id: The application always sends an explicit id from the IdAllocator.
      AUTOINCREMENT stays on the column as a backstop so the engine never
      reuses a deleted id if a row is ever inserted without one.
    - name / review: Free text, stored exactly as submitted.
    - rating: 1..5, enforced by ReviewService before the insert. No CHECK
      constraint: the table mirrors the plain schema above.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from reviewboard.database import Base


class Review(Base):
    """
    A single submitted review.

    Lifecycle:
        1. Inserted by ReviewService.create_review() with an allocated id
        2. Read back by every ReviewService.list_reviews() call
        3. Removed by ReviewService.delete_review()
        Never updated in place.
    """

    __tablename__ = "reviews"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=True)
    review: Mapped[str] = mapped_column(Text, nullable=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, rating={self.rating})>"
