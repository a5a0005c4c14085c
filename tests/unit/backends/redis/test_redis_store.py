##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Movies
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Movies.
##############################################################################

"""
Tests for the `redis_store.py` module.
"""

import uuid
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from pytest_mock import MockerFixture
from redis.client import Pipeline

from movies.backends.redis.redis_store import RedisMoviesStore
from movies.backends.utils import serialize_movie
from movies.config.configfile import DEFAULT_POOL_SIZE
from movies.context import OperationContext
from movies.data_models import Movie
from movies.exceptions import ConfigurationError, DuplicateKeyError, OperationCancelledError, RecordNotFoundError
from movies.utils import utc_now
from tests.fixture_types import FixtureCallable, FixtureRedis


@pytest.fixture
def redis_store(mock_redis: FixtureRedis) -> RedisMoviesStore:
    """
    A Redis store built around a mocked client.

    Args:
        mock_redis: A fixture providing a mocked Redis client.
    """
    return RedisMoviesStore(client=mock_redis)


@pytest.fixture
def mock_pipe(mock_redis: FixtureRedis) -> MagicMock:
    """
    A mocked pipeline that `transaction` hands to the function it runs.

    Args:
        mock_redis: A fixture providing a mocked Redis client.
    """
    pipe = MagicMock(spec=Pipeline)

    def _transaction(func, *watches, **kwargs):
        func(pipe)
        return []

    mock_redis.transaction.side_effect = _transaction
    return pipe


@pytest.fixture
def stored_movie(make_create_params: FixtureCallable) -> Movie:
    """
    A movie as it would be stored in Redis.

    Args:
        make_create_params: A fixture that builds `CreateMovieParams`.
    """
    return make_create_params().to_movie(utc_now())


class TestRedisMoviesStore:
    """Tests for the `RedisMoviesStore` class."""

    def test_initialization_with_client(self, mock_redis: FixtureRedis):
        """
        Test that the store uses the client it's given.

        Args:
            mock_redis: A fixture providing a mocked Redis client.
        """
        store = RedisMoviesStore(client=mock_redis, key="film", pool_size=5)

        assert store.client is mock_redis
        assert store.key == "film"
        assert store.backend_name == "redis"

    def test_initialization_from_url(self, mocker: MockerFixture):
        """
        Test that the store builds a client from the URL.

        Args:
            mocker: PyTest mocker fixture.
        """
        mock_from_url = mocker.patch("movies.backends.redis.redis_store.Redis.from_url")

        store = RedisMoviesStore(database_url="redis://localhost:6379/0", socket_timeout=1.5, pool_size=12)

        mock_from_url.assert_called_once_with(
            "redis://localhost:6379/0", decode_responses=True, socket_timeout=1.5, max_connections=12
        )
        assert store.client is mock_from_url.return_value

    def test_default_pool_size(self, mocker: MockerFixture):
        """
        Test that the client's pool is capped at the default pool size when none is configured.

        Args:
            mocker: PyTest mocker fixture.
        """
        mock_from_url = mocker.patch("movies.backends.redis.redis_store.Redis.from_url")

        RedisMoviesStore(database_url="redis://localhost:6379/0")

        assert mock_from_url.call_args.kwargs["max_connections"] == DEFAULT_POOL_SIZE

    def test_initialization_without_url(self):
        """
        Test that the store can't be created without a URL or a client.
        """
        with pytest.raises(ConfigurationError):
            RedisMoviesStore()

    def test_get_full_key(self, redis_store: RedisMoviesStore):
        """
        Test that movie keys are namespaced by the store's key.

        Args:
            redis_store: A Redis store built around a mocked client.
        """
        movie_id = uuid.uuid4()
        assert redis_store._get_full_key(movie_id) == f"movie:{movie_id}"

    def test_get_all(self, redis_store: RedisMoviesStore, stored_movie: Movie):
        """
        Test that `get_all` reads every hash under the store's key, skipping ones deleted mid-scan.

        Args:
            redis_store: A Redis store built around a mocked client.
            stored_movie: A movie as it would be stored in Redis.
        """
        redis_store.client.scan_iter.return_value = [f"movie:{stored_movie.id}", "movie:gone"]
        redis_store.client.hgetall.side_effect = [serialize_movie(stored_movie), {}]

        movies = redis_store.get_all()

        redis_store.client.scan_iter.assert_called_once_with(match="movie:*")
        assert movies == [stored_movie]

    def test_get_by_id(self, redis_store: RedisMoviesStore, stored_movie: Movie):
        """
        Test that `get_by_id` reads the movie's hash.

        Args:
            redis_store: A Redis store built around a mocked client.
            stored_movie: A movie as it would be stored in Redis.
        """
        redis_store.client.hgetall.return_value = serialize_movie(stored_movie)

        assert redis_store.get_by_id(stored_movie.id) == stored_movie
        redis_store.client.hgetall.assert_called_once_with(f"movie:{stored_movie.id}")

    def test_get_by_id_not_found(self, redis_store: RedisMoviesStore):
        """
        Test that an empty hash means the movie doesn't exist.

        Args:
            redis_store: A Redis store built around a mocked client.
        """
        redis_store.client.hgetall.return_value = {}

        with pytest.raises(RecordNotFoundError):
            redis_store.get_by_id(uuid.uuid4())

    def test_create(self, redis_store: RedisMoviesStore, mock_pipe: MagicMock, make_create_params: FixtureCallable):
        """
        Test that `create` checks for the key and writes the hash inside one watched transaction.

        Args:
            redis_store: A Redis store built around a mocked client.
            mock_pipe: A mocked pipeline used by the transaction.
            make_create_params: A fixture that builds `CreateMovieParams`.
        """
        params = make_create_params()
        key = f"movie:{params.id}"
        mock_pipe.exists.return_value = 0

        redis_store.create(params)

        redis_store.client.transaction.assert_called_once()
        assert redis_store.client.transaction.call_args.args[1] == key
        mock_pipe.exists.assert_called_once_with(key)
        mock_pipe.multi.assert_called_once()
        written_key = mock_pipe.hset.call_args.args[0]
        mapping = mock_pipe.hset.call_args.kwargs["mapping"]
        assert written_key == key
        assert mapping["id"] == str(params.id)
        assert mapping["title"] == params.title
        assert mapping["created_at"] == mapping["updated_at"]

    def test_create_duplicate(
        self, redis_store: RedisMoviesStore, mock_pipe: MagicMock, make_create_params: FixtureCallable
    ):
        """
        Test that `create` raises `DuplicateKeyError` and writes nothing if the key exists.

        Args:
            redis_store: A Redis store built around a mocked client.
            mock_pipe: A mocked pipeline used by the transaction.
            make_create_params: A fixture that builds `CreateMovieParams`.
        """
        mock_pipe.exists.return_value = 1

        with pytest.raises(DuplicateKeyError):
            redis_store.create(make_create_params())
        mock_pipe.hset.assert_not_called()

    def test_update(
        self,
        redis_store: RedisMoviesStore,
        mock_pipe: MagicMock,
        stored_movie: Movie,
        make_update_params: FixtureCallable,
    ):
        """
        Test that `update` rewrites the hash with the new fields and keeps `created_at`.

        Args:
            redis_store: A Redis store built around a mocked client.
            mock_pipe: A mocked pipeline used by the transaction.
            stored_movie: A movie as it would be stored in Redis.
            make_update_params: A fixture that builds `UpdateMovieParams`.
        """
        mock_pipe.hgetall.return_value = serialize_movie(stored_movie)

        redis_store.update(stored_movie.id, make_update_params(title="New title", ticket_price=20.0))

        mapping = mock_pipe.hset.call_args.kwargs["mapping"]
        assert mapping["title"] == "New title"
        assert mapping["ticket_price"] == "20.0"
        assert mapping["created_at"] == serialize_movie(stored_movie)["created_at"]
        assert mapping["updated_at"] >= serialize_movie(stored_movie)["updated_at"]

    def test_update_keeps_updated_at_monotonic(
        self,
        mocker: MockerFixture,
        redis_store: RedisMoviesStore,
        mock_pipe: MagicMock,
        stored_movie: Movie,
        make_update_params: FixtureCallable,
    ):
        """
        Test that a clock that stepped backwards doesn't decrease `updated_at`.

        Args:
            mocker: PyTest mocker fixture.
            redis_store: A Redis store built around a mocked client.
            mock_pipe: A mocked pipeline used by the transaction.
            stored_movie: A movie as it would be stored in Redis.
            make_update_params: A fixture that builds `UpdateMovieParams`.
        """
        mock_pipe.hgetall.return_value = serialize_movie(stored_movie)
        mocker.patch(
            "movies.backends.redis.redis_store.utc_now", return_value=stored_movie.updated_at - timedelta(hours=1)
        )

        redis_store.update(stored_movie.id, make_update_params())

        mapping = mock_pipe.hset.call_args.kwargs["mapping"]
        assert mapping["updated_at"] == serialize_movie(stored_movie)["updated_at"]

    def test_update_not_found(
        self, redis_store: RedisMoviesStore, mock_pipe: MagicMock, make_update_params: FixtureCallable
    ):
        """
        Test that updating a missing movie raises and writes nothing.

        Args:
            redis_store: A Redis store built around a mocked client.
            mock_pipe: A mocked pipeline used by the transaction.
            make_update_params: A fixture that builds `UpdateMovieParams`.
        """
        mock_pipe.hgetall.return_value = {}

        with pytest.raises(RecordNotFoundError):
            redis_store.update(uuid.uuid4(), make_update_params())
        mock_pipe.hset.assert_not_called()

    @pytest.mark.parametrize("removed", [1, 0])
    def test_delete(self, redis_store: RedisMoviesStore, removed: int):
        """
        Test that `delete` removes the key, whether or not it existed.

        Args:
            redis_store: A Redis store built around a mocked client.
            removed: The number of keys Redis reports as deleted.
        """
        movie_id = uuid.uuid4()
        redis_store.client.delete.return_value = removed

        redis_store.delete(movie_id)

        redis_store.client.delete.assert_called_once_with(f"movie:{movie_id}")

    def test_cancelled_context_skips_round_trips(
        self, redis_store: RedisMoviesStore, make_create_params: FixtureCallable
    ):
        """
        Test that a cancelled context stops the store before it talks to Redis.

        Args:
            redis_store: A Redis store built around a mocked client.
            make_create_params: A fixture that builds `CreateMovieParams`.
        """
        ctx = OperationContext()
        ctx.cancel()

        with pytest.raises(OperationCancelledError):
            redis_store.get_all(ctx)
        with pytest.raises(OperationCancelledError):
            redis_store.create(make_create_params(), ctx)
        with pytest.raises(OperationCancelledError):
            redis_store.delete(uuid.uuid4(), ctx)

        redis_store.client.scan_iter.assert_not_called()
        redis_store.client.transaction.assert_not_called()
        redis_store.client.delete.assert_not_called()

    def test_get_version(self, redis_store: RedisMoviesStore):
        """
        Test that the version comes from `INFO`.

        Args:
            redis_store: A Redis store built around a mocked client.
        """
        redis_store.client.info.return_value = {"redis_version": "7.2.4"}
        assert redis_store.get_version() == "7.2.4"

        redis_store.client.info.return_value = {}
        assert redis_store.get_version() == "N/A"

    def test_close(self, redis_store: RedisMoviesStore):
        """
        Test that closing the store closes the client.

        Args:
            redis_store: A Redis store built around a mocked client.
        """
        redis_store.close()
        redis_store.client.close.assert_called_once()
