# apps/api/backoffice/db/base.py
from sqlalchemy.orm import declarative_base

# Model base class (every model extends this)
Base = declarative_base()
