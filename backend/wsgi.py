import os
from content_service import create_app

app = create_app(os.getenv("FLASK_CONFIG", "production"))
