from content_service.extensions import db
from .base import BaseModel

REDIRECT_STATUS_CODES = (301, 302)


class Redirect(BaseModel):
    __tablename__ = "redirects"

    from_path = db.Column(db.String(200), nullable=False)
    to_path = db.Column(db.String(200), nullable=False, index=True)
    status_code = db.Column(db.Integer, nullable=False, default=301)

    __table_args__ = (
        db.UniqueConstraint("from_path", name="uq_redirect_from_path"),
    )
