##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
This module contains pytest fixtures to be used throughout the entire test suite.
"""
import logging
import os
from glob import glob

import pytest

from movies.config.configfile import ENV_OVERRIDES
from tests.fixture_types import FixtureModification


# pylint: disable=redefined-outer-name


#######################################
# Loading in Module Specific Fixtures #
#######################################

TESTS_DIR = os.path.dirname(os.path.abspath(__file__))
ROOT_DIR = os.path.dirname(TESTS_DIR)

fixture_glob = os.path.join(TESTS_DIR, "fixtures", "**", "*.py")
pytest_plugins = [
    os.path.relpath(fixture_file, ROOT_DIR).replace(os.sep, ".")[: -len(".py")]
    for fixture_file in glob(fixture_glob, recursive=True)
    if not fixture_file.endswith("__init__.py")
]


#######################################
######### Fixture Definitions #########
#######################################


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> FixtureModification:
    """
    Keep every test independent of the machine it runs on: no `app.yaml` from the
    working directory or the user's home, and no configuration from the environment.

    Args:
        monkeypatch: PyTest monkeypatch fixture.
        tmp_path: A temporary directory unique to the test.
    """
    for name in ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)

    movies_home = tmp_path / "movies_home"
    movies_home.mkdir()
    monkeypatch.setenv("MOVIES_HOME", str(movies_home))

    workdir = tmp_path / "workdir"
    workdir.mkdir()
    monkeypatch.chdir(workdir)


@pytest.fixture(autouse=True)
def restore_movies_logger() -> FixtureModification:
    """
    `setup_logging` attaches handlers to the "movies" logger and stops it from
    propagating. Undo that after each test so that `caplog` keeps seeing records
    in the tests that follow a CLI test.
    """
    logger = logging.getLogger("movies")
    handlers = list(logger.handlers)
    level = logger.level
    propagate = logger.propagate
    yield
    logger.handlers = handlers
    logger.setLevel(level)
    logger.propagate = propagate
