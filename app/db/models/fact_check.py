from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, JSON, Float, Index
from sqlalchemy.orm import relationship
from app.core.clock import utcnow
from .enums import ValidityStatus, ConfidenceLevel, enum_column_type
from ..base import Base

class FactCheck(Base):
    """One analysis of a post. Rows are only ever appended; the latest wins."""
    __tablename__ = 'fact_checks'

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey('posts.id'), nullable=False)
    content_analyzed = Column(Text, nullable=False)
    accuracy_score = Column(Float, nullable=False)  # 0.0 - 1.0
    validity_status = Column(enum_column_type(ValidityStatus), nullable=False)
    confidence_level = Column(enum_column_type(ConfidenceLevel), nullable=False)
    analysis = Column(Text)
    sources = Column(JSON, default=list)
    corrections = Column(JSON, default=list)
    reasoning = Column(Text)
    claims = Column(JSON, default=list)
    checked_by = Column(String(255), nullable=False, default="system")
    checked_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (
        Index('idx_fact_checks_post_checked_at', 'post_id', 'checked_at'),
    )

    # Relationships
    post = relationship("Post", back_populates="fact_checks")

    @property
    def summary(self) -> str:
        """Short form of the analysis used in post detail views."""
        text = self.analysis or ""
        return text if len(text) <= 200 else text[:197] + "..."
