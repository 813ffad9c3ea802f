from datetime import datetime, timedelta
from typing import Callable, List, Optional
import logging

from sqlalchemy.orm import Session

from app.core.clock import as_utc, utcnow
from app.core.config import settings
from app.db.models import FactCheck, Post
from app.db.store import EntityStore
from app.services.fact_check.provider import AnalysisResult, FactCheckProvider

logger = logging.getLogger(__name__)


def build_analysis_content(post: Post) -> str:
    """Snapshot of the post text that is sent for analysis and stored with the result."""
    content = f"Question: {post.question}\n\nAnswer: {post.answer or ''}"
    if post.media_url:
        content += f"\n\nMedia: {post.media_url}"
    return content


class FactCheckService:
    """
    Decides between reusing a recent fact check and requesting a new one.

    The latest FactCheck row for a post acts as a cache entry keyed by post id
    with a freshness window (24 hours by default). History is append-only.

    The read-decide-write sequence in ``check_post`` is not serialized: two
    concurrent requests for the same stale post may both call the provider and
    both insert a row. Both rows are valid history entries and ``latest`` stays
    well defined by ``checked_at``.
    """

    def __init__(
        self,
        db: Session,
        provider: FactCheckProvider,
        freshness_window: Optional[timedelta] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = EntityStore(db, FactCheck)
        self.provider = provider
        self.freshness_window = freshness_window or timedelta(hours=settings.FACTCHECK_FRESHNESS_HOURS)
        self.clock = clock

    def is_fresh(self, fact_check: FactCheck, now: Optional[datetime] = None) -> bool:
        now = now or self.clock()
        return as_utc(fact_check.checked_at) + self.freshness_window > now

    def check_post(self, post: Post, checked_by: str = "system") -> FactCheck:
        """
        Return a fact check for the post, analysing it only when the cached one is stale.

        Args:
            post: The post to check
            checked_by: User id or system identifier recorded on a new row

        Returns:
            The reused or newly persisted FactCheck

        Raises:
            StorageError: If the new row cannot be persisted
        """
        logger.info(f"Starting fact check for post {post.id}")
        now = self.clock()

        existing = self.latest(post)
        if existing is not None and self.is_fresh(existing, now):
            logger.info(f"Returning existing fact check {existing.id} for post {post.id}")
            return existing

        content = build_analysis_content(post)
        result = self.provider.analyze(content, post.question)

        checked_at = now
        if existing is not None and as_utc(existing.checked_at) >= checked_at:
            # Keep history strictly ordered even if the clock went backwards
            checked_at = as_utc(existing.checked_at) + timedelta(microseconds=1)

        fact_check = self._to_entity(post, result, content, checked_by, checked_at)
        saved = self.store.save(fact_check)
        logger.info(
            f"Stored fact check {saved.id} for post {post.id}: "
            f"{saved.validity_status.value} ({saved.accuracy_score:.2f})"
        )
        return saved

    def history(self, post: Post) -> List[FactCheck]:
        """All fact checks for the post, newest first."""
        return self.store.find_by(order_by="checked_at", post_id=post.id)

    def latest(self, post: Post) -> Optional[FactCheck]:
        return self.store.find_first(order_by="checked_at", post_id=post.id)

    @staticmethod
    def _to_entity(
        post: Post,
        result: AnalysisResult,
        content: str,
        checked_by: str,
        checked_at: datetime,
    ) -> FactCheck:
        return FactCheck(
            post_id=post.id,
            content_analyzed=content,
            accuracy_score=result.accuracy_score,
            validity_status=result.validity_status,
            confidence_level=result.confidence_level,
            analysis=result.analysis,
            sources=list(result.sources),
            corrections=list(result.corrections),
            reasoning=result.reasoning,
            claims=[claim.model_dump() for claim in result.claims],
            checked_by=checked_by,
            checked_at=checked_at,
        )
