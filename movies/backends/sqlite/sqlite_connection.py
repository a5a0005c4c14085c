##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
SQLite connection context manager for the Movies application.

This module defines the `SQLiteConnection` class, which provides a safe and reusable way to
establish and manage SQLite connections using a context manager. It ensures proper configuration
(e.g., enabling WAL mode), handles compatibility with Python versions, wires the operation
context into SQLite's progress handler so that long statements stop once the caller gives up,
and guarantees cleanup by closing the connection on exit.
"""

import logging
import sqlite3
import sys
from pathlib import Path
from types import TracebackType
from typing import Type

from movies.context import OperationContext


LOG = logging.getLogger(__name__)

# Number of SQLite virtual machine instructions between context checks
PROGRESS_HANDLER_INSTRUCTIONS = 1000

IN_MEMORY_PATH = ":memory:"


class SQLiteConnection:
    """
    Context manager for establishing and safely closing a SQLite database connection.

    This class ensures SQLite connections are created with proper configuration, including:
    - WAL mode for better concurrency
    - Dictionary-style row access via `sqlite3.Row`
    - Autocommit, so that every statement is its own transaction
    - Interruption of running statements once the operation context is done

    Attributes:
        db_path (str): The path to the SQLite database file.
        ctx (OperationContext): The context of the operation using this connection.
        conn (sqlite3.Connection): The active SQLite connection used within the context.

    Methods:
        __enter__:
            Opens and configures the SQLite connection when entering the context.

        __exit__:
            Closes the SQLite connection when exiting the context, handling any exceptions.
    """

    def __init__(self, db_path: str, ctx: OperationContext = None):
        """
        Initialize the SQLiteConnection context manager.

        Args:
            db_path: The path to the SQLite database file.
            ctx: The context of the operation using this connection.
        """
        self.db_path: str = db_path
        self.ctx: OperationContext = ctx
        self.conn: sqlite3.Connection = None

    def __enter__(self) -> sqlite3.Connection:
        """
        Enters the runtime context related to this object and creates a sqlite connection.

        Returns:
            A sqlite connection.
        """
        if self.db_path != IN_MEMORY_PATH:
            Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

        connection_kwargs = {"check_same_thread": False}
        if sys.version_info < (3, 12):  # Autocommit wasn't added until python 3.12
            connection_kwargs["isolation_level"] = None
        else:
            connection_kwargs["autocommit"] = True

        self.conn = sqlite3.connect(self.db_path, **connection_kwargs)

        # Enable WAL mode for better concurrent access
        self.conn.execute("PRAGMA journal_mode=WAL")

        # This enables name-based access to columns
        self.conn.row_factory = sqlite3.Row

        if self.ctx is not None:
            # A non-zero return value interrupts the running statement
            self.conn.set_progress_handler(lambda: int(self.ctx.done()), PROGRESS_HANDLER_INSTRUCTIONS)

        return self.conn

    def __exit__(self, exc_type: Type[Exception], exc_value: Exception, traceback: TracebackType):
        """
        Exits the runtime context and performs cleanup.

        This method closes the connection if it's still open.

        Args:
            exc_type: The exception type raised, if any.
            exc_value: The exception instance raised, if any.
            traceback: The traceback object, if an exception was raised.
        """
        if self.conn:
            self.conn.close()
