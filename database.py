# In: backend/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

import config

# SQLite needs this so the session can be used from FastAPI's worker threads
connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(config.DATABASE_URL, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


# --- Dependency to get a DB session ---
# This function creates a database session for each request and closes it when done
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
