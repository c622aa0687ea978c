from content_service.extensions import db
from .base import BaseModel

DEFAULT_CONTENT_TREE = {
    "root": {
        "instanceId": "root",
        "componentId": "page-container",
        "props": {},
        "children": [],
    }
}


class Page(BaseModel):
    __tablename__ = 'pages'

    title = db.Column(db.String(200), nullable=False)
    path = db.Column(db.String(200), nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default='draft', index=True)

    content_tree = db.Column(db.JSON, nullable=False, default=dict)
    seo = db.Column(db.JSON(none_as_null=True), nullable=True)

    # Content generation counter, bumped by update and rollback only
    version = db.Column(db.Integer, nullable=False, default=1)
    published_at = db.Column(db.DateTime(timezone=True), nullable=True)

    parent_id = db.Column(
        db.String(36),
        db.ForeignKey("pages.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    position = db.Column(db.Integer, nullable=False, default=0)

    is_template = db.Column(db.Boolean, nullable=False, default=False, index=True)
    template_name = db.Column(db.String(200), nullable=True)

    created_by = db.Column(db.String(255), nullable=True)

    __table_args__ = (
        db.UniqueConstraint("path", name="uq_page_path"),
    )

    # Every UPDATE is issued as "... WHERE version = <loaded>"; zero matched
    # rows raises StaleDataError. Version values are assigned explicitly.
    __mapper_args__ = {
        "version_id_col": version,
        "version_id_generator": False,
    }

    def __repr__(self):
        return f"<Page {self.path} v{self.version}>"
