"""Above-the-fold metadata rows, one per (url, device class)."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from atf_optimizer.core.database import Base
from atf_optimizer.schemas.lcp import NOT_FOUND, ElementDescriptor, decode_lcp, decode_viewport


class AboveTheFold(Base):
    """LCP and viewport elements measured by the beacon for one page."""

    __tablename__ = "above_the_fold"
    __table_args__ = (UniqueConstraint("url", "is_mobile", name="uq_above_the_fold_url_mobile"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(2000), nullable=False, index=True)
    is_mobile: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    # JSON payloads; NULL or "not found" when the beacon saw nothing
    lcp: Mapped[str | None] = mapped_column(Text)
    viewport: Mapped[str | None] = mapped_column(Text)

    status: Mapped[str] = mapped_column(String(20), default="completed")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def has_lcp(self) -> bool:
        return bool(self.lcp) and self.lcp != NOT_FOUND

    def has_viewport(self) -> bool:
        return bool(self.viewport) and self.viewport != NOT_FOUND

    def lcp_descriptor(self) -> ElementDescriptor | None:
        if not self.has_lcp():
            return None
        return decode_lcp(self.lcp)

    def viewport_descriptors(self) -> list[ElementDescriptor]:
        if not self.has_viewport():
            return []
        return decode_viewport(self.viewport)

    def __repr__(self) -> str:
        return f"<AboveTheFold url={self.url!r} is_mobile={self.is_mobile}>"
