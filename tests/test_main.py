"""Tests for the command line entry point."""

from unittest.mock import MagicMock, patch

import pytest

import main
from moviegraph.graph_db import DEMO_MOVIE
from moviegraph.models import Movie, Person, ActorFilmography


@pytest.fixture
def movie_graph(settings):
    graph = MagicMock()
    graph.sample_movies.return_value = [Movie("Top Gun", 1986)]
    graph.sample_persons.return_value = [Person("Tom Hanks", 1956)]
    graph.actor_movies.return_value = []
    graph.actor_filmography.return_value = [
        ActorFilmography(Person("Tom Hanks", 1956), [Movie("Cast Away")])
    ]
    graph.joint_movies.return_value = []
    with patch.object(main, "get_settings", return_value=settings), patch.object(
        main, "setup_logging"
    ), patch.object(main, "Neo4jClient") as client_cls, patch.object(
        main, "MovieGraph", return_value=graph
    ):
        graph.client_cls = client_cls
        yield graph


def test_browse_runs_read_queries_only(movie_graph, capsys):
    main.main(["--mode", "browse", "--limit", "3"])

    movie_graph.sample_movies.assert_called_once_with(3)
    movie_graph.sample_persons.assert_called_once_with(3)
    movie_graph.joint_movies.assert_called_once_with("Tom Hanks", "Meg Ryan")
    movie_graph.create_movie.assert_not_called()
    output = capsys.readouterr().out
    assert "Top Gun (1986)" in output
    assert "Cast Away" in output


def test_demo_creates_links_and_removes_movie(movie_graph):
    main.main(["--actor", "Meg Ryan", "--co-actor", "Tom Hanks"])

    movie_graph.actor_movies.assert_called_once_with("Meg Ryan")
    movie_graph.create_movie.assert_called_once_with(DEMO_MOVIE)
    movie_graph.add_actor.assert_called_once_with("Meg Ryan", "Really New")
    movie_graph.remove_actor.assert_called_once_with("Meg Ryan", "Really New")
    movie_graph.delete_movie.assert_called_once_with("Really New")
    movie_graph.client_cls.return_value.close.assert_called_once()


def test_cleanup_mode(movie_graph):
    main.main(["--mode", "cleanup"])

    movie_graph.cleanup_movie.assert_called_once_with("Really New")
    movie_graph.sample_movies.assert_not_called()


def test_failure_exits_with_status_one(movie_graph):
    movie_graph.sample_movies.side_effect = RuntimeError("boom")

    with pytest.raises(SystemExit) as exc_info:
        main.main(["--mode", "browse"])

    assert exc_info.value.code == 1
    movie_graph.client_cls.return_value.close.assert_called_once()


@pytest.mark.parametrize("limit", ["-1", "ten"])
def test_invalid_limit_is_rejected_by_argparse(movie_graph, limit):
    with pytest.raises(SystemExit) as exc_info:
        main.main(["--mode", "browse", "--limit", limit])

    assert exc_info.value.code == 2
    movie_graph.client_cls.assert_not_called()


def test_zero_limit_is_accepted(movie_graph):
    main.main(["--mode", "browse", "--limit", "0"])

    movie_graph.sample_movies.assert_called_once_with(0)
