# Importing every model registers it on Base.metadata
from app.models.user import User  # noqa: F401
from app.models.project import Project, ProjectTechnology  # noqa: F401
from app.models.bid import Bid  # noqa: F401
