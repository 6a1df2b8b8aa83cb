"""Store boundary: engine + session factory owned by the application.

The store is created by the process entry point (``create_app``) and handed to
request handlers through ``app.state``; nothing here is a module-level engine.
"""
from __future__ import annotations

import os
from typing import Any

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

# Allow overriding database via environment.
# Default is a lightweight local sqlite DB for development.
DEFAULT_DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///./backoffice.db")


class Base(DeclarativeBase):
	pass


class Store:
	"""Relational store handle.

	Either build from a URL or wrap an existing engine (tests pass an in-memory
	engine bound to a ``StaticPool``).
	"""

	def __init__(self, url: str | None = None, *, engine: Engine | None = None, **engine_kwargs: Any):
		if engine is None:
			url = url or DEFAULT_DATABASE_URL
			if url.startswith("sqlite"):
				engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
			engine = create_engine(url, **engine_kwargs)
		self.engine = engine
		self._session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)

	@property
	def url(self) -> str:
		return self.engine.url.render_as_string(hide_password=True)

	def session(self) -> Session:
		return self._session_factory()

	def create_all(self) -> None:
		# Model modules must be imported so every table is registered on Base.metadata
		import backoffice.models.db  # noqa: F401
		Base.metadata.create_all(bind=self.engine)

	def drop_all(self) -> None:
		Base.metadata.drop_all(bind=self.engine)

	def ping(self) -> None:
		with self.engine.connect() as conn:
			conn.execute(text("SELECT 1"))

	def dispose(self) -> None:
		self.engine.dispose()
