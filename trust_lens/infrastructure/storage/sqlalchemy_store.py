"""SQLAlchemy implementation of the rating store.

Defaults to a single-file SQLite database; any SQLAlchemy URL (for example a
managed PostgreSQL instance) works with the same schema.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Float,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
    func,
    or_,
    select,
)
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

from ...domain.errors import StorageError
from ...domain.models.rating import DomainRating, PlatformStats, Vote, VoteSummary
from ...domain.ports.rating_store import RatingStore

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for rating tables."""


class NewsDataRow(Base):
    """One aggregate rating per domain."""

    __tablename__ = "news_data"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    rating: Mapped[float] = mapped_column(Float, nullable=False, index=True)
    # NULL when votes are not tracked ("set" mode)
    total_votes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class VoteRow(Base):
    """Append-only vote log."""

    __tablename__ = "votes"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 10", name="ck_votes_rating_range"),
        UniqueConstraint("domain", "user_id", "ip_address", name="uq_votes_domain_voter"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    user_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_domain_rating(row: NewsDataRow) -> DomainRating:
    return DomainRating(
        domain=row.domain,
        rating=float(row.rating),
        total_votes=row.total_votes,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
    )


def _min_votes_clause(min_votes: int):
    return or_(NewsDataRow.total_votes.is_(None), NewsDataRow.total_votes >= min_votes)


class SQLAlchemyRatingStore(RatingStore):
    """Relational rating store."""

    def __init__(self, database_url: str = "sqlite:///./trustlens.db", echo: bool = False):
        """Initialize the store and create the schema if needed.

        Args:
            database_url: SQLAlchemy database URL
            echo: Log emitted SQL
        """
        engine_kwargs = {"echo": echo}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if database_url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool

        try:
            self._engine = create_engine(database_url, **engine_kwargs)
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to open rating database: {e}")

        self._session = sessionmaker(self._engine, expire_on_commit=False)
        logger.info(f"✅ Rating database ready: {self._engine.url.render_as_string(hide_password=True)}")

    def insert_vote_if_absent(self, vote: Vote) -> bool:
        row = VoteRow(
            domain=vote.domain,
            rating=vote.rating,
            user_id=vote.user_id,
            ip_address=vote.ip_address,
            user_agent=vote.user_agent,
            created_at=vote.created_at,
        )
        with self._session() as session:
            try:
                session.add(row)
                session.commit()
                return True
            except IntegrityError as e:
                session.rollback()
                if self._vote_exists(session, vote):
                    return False
                logger.error(f"Error inserting vote: {e}")
                raise StorageError("Failed to record vote")
            except SQLAlchemyError as e:
                session.rollback()
                logger.error(f"Error inserting vote: {e}")
                raise StorageError("Failed to record vote")

    def _vote_exists(self, session, vote: Vote) -> bool:
        if vote.user_id is None or vote.ip_address is None:
            return False
        stmt = select(VoteRow.id).where(
            VoteRow.domain == vote.domain,
            VoteRow.user_id == vote.user_id,
            VoteRow.ip_address == vote.ip_address,
        )
        return session.execute(stmt).first() is not None

    def recompute_aggregate(self, domain: str) -> Tuple[float, int]:
        stmt = select(func.avg(VoteRow.rating), func.count(VoteRow.id)).where(
            VoteRow.domain == domain
        )
        try:
            with self._session() as session:
                mean, count = session.execute(stmt).one()
        except SQLAlchemyError as e:
            logger.error(f"Error calculating average: {e}")
            raise StorageError("Failed to update rating")
        return float(mean or 0.0), int(count)

    def upsert_rating(
        self,
        domain: str,
        rating: float,
        total_votes: Optional[int],
        updated_at: datetime,
        keep_vote_count: bool = False,
    ) -> Tuple[DomainRating, bool]:
        try:
            with self._session() as session:
                row = session.scalars(
                    select(NewsDataRow).where(NewsDataRow.domain == domain)
                ).first()
                created = row is None
                if created:
                    row = NewsDataRow(
                        domain=domain,
                        rating=rating,
                        total_votes=total_votes,
                        created_at=updated_at,
                        updated_at=updated_at,
                    )
                    session.add(row)
                else:
                    row.rating = rating
                    if not keep_vote_count:
                        row.total_votes = total_votes
                    row.updated_at = updated_at
                try:
                    session.commit()
                except IntegrityError:
                    # Another writer created the row first; last writer wins.
                    session.rollback()
                    row = session.scalars(
                        select(NewsDataRow).where(NewsDataRow.domain == domain)
                    ).one()
                    row.rating = rating
                    if not keep_vote_count:
                        row.total_votes = total_votes
                    row.updated_at = updated_at
                    session.commit()
                    created = False
                return _to_domain_rating(row), created
        except SQLAlchemyError as e:
            logger.error(f"Error updating news_data: {e}")
            raise StorageError("Failed to update rating")

    def get_rating(self, domain: str) -> Optional[DomainRating]:
        try:
            with self._session() as session:
                row = session.scalars(
                    select(NewsDataRow).where(NewsDataRow.domain == domain)
                ).first()
                return _to_domain_rating(row) if row else None
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise StorageError("Internal server error")

    def query_ordered(
        self,
        limit: int,
        min_votes: int = 0,
        ascending: bool = False,
        offset: int = 0,
    ) -> List[DomainRating]:
        rating_order = NewsDataRow.rating.asc() if ascending else NewsDataRow.rating.desc()
        stmt = (
            select(NewsDataRow)
            .where(_min_votes_clause(min_votes))
            .order_by(
                rating_order,
                func.coalesce(NewsDataRow.total_votes, 0).desc(),
                NewsDataRow.domain.asc(),
            )
            .offset(offset)
            .limit(limit)
        )
        return self._fetch_ratings(stmt)

    def count_domains(self, min_votes: int = 0) -> int:
        stmt = select(func.count(NewsDataRow.id)).where(_min_votes_clause(min_votes))
        try:
            with self._session() as session:
                return int(session.execute(stmt).scalar_one())
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise StorageError("Internal server error")

    def search_domains(self, query: str, limit: int) -> List[DomainRating]:
        stmt = (
            select(NewsDataRow)
            .where(func.lower(NewsDataRow.domain).contains(query.lower(), autoescape=True))
            .order_by(
                NewsDataRow.rating.desc(),
                func.coalesce(NewsDataRow.total_votes, 0).desc(),
                NewsDataRow.domain.asc(),
            )
            .limit(limit)
        )
        return self._fetch_ratings(stmt)

    def vote_summary(self, domain: str) -> Optional[VoteSummary]:
        try:
            with self._session() as session:
                row = session.scalars(
                    select(NewsDataRow).where(NewsDataRow.domain == domain)
                ).first()
                if row is None:
                    return None

                low, high, first, last = session.execute(
                    select(
                        func.min(VoteRow.rating),
                        func.max(VoteRow.rating),
                        func.min(VoteRow.created_at),
                        func.max(VoteRow.created_at),
                    ).where(VoteRow.domain == domain)
                ).one()
                distribution = session.execute(
                    select(VoteRow.rating, func.count(VoteRow.id))
                    .where(VoteRow.domain == domain)
                    .group_by(VoteRow.rating)
                    .order_by(VoteRow.rating)
                ).all()

                return VoteSummary(
                    domain=domain,
                    rating=float(row.rating),
                    total_votes=row.total_votes,
                    min_vote=low,
                    max_vote=high,
                    distribution={score: count for score, count in distribution},
                    first_vote_at=_aware(first),
                    last_vote_at=_aware(last),
                    updated_at=_aware(row.updated_at),
                )
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise StorageError("Internal server error")

    def platform_totals(self) -> PlatformStats:
        try:
            with self._session() as session:
                total_domains, average = session.execute(
                    select(func.count(NewsDataRow.id), func.avg(NewsDataRow.rating))
                ).one()
                total_votes, total_users = session.execute(
                    select(func.count(VoteRow.id), func.count(func.distinct(VoteRow.user_id)))
                ).one()
        except SQLAlchemyError as e:
            logger.error(f"Error fetching stats: {e}")
            raise StorageError("Internal server error")

        return PlatformStats(
            total_domains=int(total_domains),
            total_votes=int(total_votes),
            total_users=int(total_users),
            average_rating=round(float(average or 0.0), 1),
        )

    def _fetch_ratings(self, stmt) -> List[DomainRating]:
        try:
            with self._session() as session:
                return [_to_domain_rating(row) for row in session.scalars(stmt)]
        except SQLAlchemyError as e:
            logger.error(f"Database error: {e}")
            raise StorageError("Internal server error")

    def close(self) -> None:
        """Dispose of the connection pool."""
        self._engine.dispose()
