from sqlalchemy import event
from content_service.extensions import db
from .base import BaseModel


class PageVersion(BaseModel):
    __tablename__ = "page_versions"

    page_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id"),
        nullable=False
    )

    # The page's version at the moment it was superseded
    version = db.Column(db.Integer, nullable=False)

    title = db.Column(db.String(200), nullable=False)
    content_tree = db.Column(db.JSON, nullable=False, default=dict)
    seo = db.Column(db.JSON(none_as_null=True), nullable=True)

    created_by = db.Column(db.String(255), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("page_id", "version", name="uq_page_version"),
        db.Index("idx_page_version_page", "page_id"),
    )


# Snapshots are append-only. Owning-page deletion removes them with a bulk
# query delete, which does not go through these mapper events.
@event.listens_for(PageVersion, 'before_update')
@event.listens_for(PageVersion, 'before_delete')
def prevent_version_mutation(mapper, connection, target):
    raise RuntimeError("Page versions are immutable")
