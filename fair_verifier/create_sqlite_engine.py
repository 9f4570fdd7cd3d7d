import pathlib

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from fair_verifier.load_secrets import sqlite_path

if sqlite_path:
    file_path = pathlib.Path(sqlite_path)
else:
    file_path = pathlib.Path(__file__).parents[1]
    file_path /= "./fair_verifier.sqlite3"
sqlite_url = f"sqlite+aiosqlite:///{file_path}"

# connections are opened per session and never reused across event loops
engine = create_async_engine(url=sqlite_url, echo=False, poolclass=NullPool)
