"""Main entry point for the MovieGraph demo."""

import argparse
import logging
import sys
from moviegraph.config import get_settings
from moviegraph.utils import setup_logging
from moviegraph.graph_db import Neo4jClient, MovieGraph, DEMO_MOVIE

logger = logging.getLogger(__name__)


def non_negative_int(value: str) -> int:
    """argparse type for counts such as --limit."""
    try:
        count = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if count < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {count}")
    return count


def main(argv=None):
    """Main application entry point."""
    parser = argparse.ArgumentParser(
        description="Typed Cypher queries against the Neo4j movies dataset"
    )
    parser.add_argument(
        '--mode',
        choices=['demo', 'browse', 'cleanup'],
        default='demo',
        help='Operation mode: demo (run every query and mutation), browse (read-only queries), cleanup (remove the demo movie)',
    )
    parser.add_argument('--actor', type=str, help='Actor to query')
    parser.add_argument(
        '--co-actor', type=str, help='Second actor for joint movies'
    )
    parser.add_argument(
        '--limit',
        type=non_negative_int,
        help='Number of sample movies and people',
    )

    args = parser.parse_args(argv)

    # Load settings
    settings = get_settings()
    setup_logging(settings.log_level)

    actor = args.actor or settings.demo_actor
    co_actor = args.co_actor or settings.demo_co_actor
    limit = args.limit if args.limit is not None else settings.demo_limit

    logger.info(f"Starting MovieGraph in {args.mode} mode")
    logger.info(f"Neo4j URI: {settings.neo4j_uri}")

    neo4j_client = Neo4jClient(settings)

    try:
        neo4j_client.connect()
        movie_graph = MovieGraph(neo4j_client)

        if args.mode == 'demo':
            run_browse_mode(movie_graph, actor, co_actor, limit)
            run_update_mode(movie_graph, actor)
        elif args.mode == 'browse':
            run_browse_mode(movie_graph, actor, co_actor, limit)
        elif args.mode == 'cleanup':
            movie_graph.cleanup_movie(DEMO_MOVIE.title)
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    except Exception as e:
        logger.error(f"Error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        neo4j_client.close()


def run_browse_mode(
    movie_graph: MovieGraph, actor: str, co_actor: str, limit: int
):
    """Run the read-only queries and print their results."""
    movies = movie_graph.sample_movies(limit)
    print(f"\n=== Movies (showing {len(movies)}) ===")
    for movie in movies:
        print(f"  {movie.title} ({movie.released})")

    persons = movie_graph.sample_persons(limit)
    print(f"\n=== People (showing {len(persons)}) ===")
    for person in persons:
        born = person.born if person.born is not None else "?"
        print(f"  {person.name} (born {born})")

    rows = movie_graph.actor_movies(actor)
    print(f"\n=== {actor}: one row per movie ({len(rows)} rows) ===")
    for row in rows:
        print(f"  {row.actor.name} -> {row.movie.title}")

    for filmography in movie_graph.actor_filmography(actor):
        titles = sorted(m.title for m in filmography.movies)
        print(f"\n=== {filmography.actor.name}: collected movies ===")
        print(f"  {', '.join(titles)}")

    joint = movie_graph.joint_movies(actor, co_actor)
    print(f"\n=== {actor} and {co_actor}: joint movies ===")
    if not joint:
        print("  none")
    for row in joint:
        titles = ", ".join(sorted(m.title for m in row.movies))
        print(
            f"  {row.actor.name} & {row.co_actor.name}: "
            f"{row.movie_count} movies ({titles})"
        )


def run_update_mode(movie_graph: MovieGraph, actor: str):
    """Create the demo movie, link and unlink the actor, then delete it."""
    movie_graph.create_movie(DEMO_MOVIE)
    movie_graph.add_actor(actor, DEMO_MOVIE.title)
    movie_graph.remove_actor(actor, DEMO_MOVIE.title)
    movie_graph.delete_movie(DEMO_MOVIE.title)
    print(f"\nCreated and removed '{DEMO_MOVIE.title}' for {actor}")


if __name__ == '__main__':
    main()
