from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import declarative_base

# Define a common Base for all models
Base = declarative_base(cls=AsyncAttrs)

# Import models AFTER Base is defined so they register on the same metadata
from . import property  # noqa: E402,F401
from . import search  # noqa: E402,F401
from . import user  # noqa: E402,F401

from .property import Property  # noqa: E402
from .search import SavedSearch  # noqa: E402
from .user import User, saved_properties  # noqa: E402
