"""Save links and notes into feeds stored in SQLite and serve them as RSS over WSGI."""

__version__ = "0.1.0"