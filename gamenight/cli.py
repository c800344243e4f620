"""
Game Night CLI - Command-line interface.

Usage:
    gamenight serve [--host HOST] [--port PORT]    Run the API server
    gamenight search <query>                       Search BoardGameGeek
    gamenight game <id>                            Show normalized game metadata
"""

import argparse
import asyncio
import sys

from . import config


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Game Night - Board game session scheduler",
        prog="gamenight",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: LOG_LEVEL env)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the API server")
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=config.PORT, help="Port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    # Search command
    search_parser = subparsers.add_parser("search", help="Search BoardGameGeek by name")
    search_parser.add_argument("query", help="Game name")

    # Game command
    game_parser = subparsers.add_parser("game", help="Show game metadata by BGG id")
    game_parser.add_argument("game_id", help="BoardGameGeek id")

    args = parser.parse_args()
    config.configure_logging(args.log_level)

    if args.command == "serve":
        cmd_serve(args)
    elif args.command == "search":
        asyncio.run(cmd_search(args))
    elif args.command == "game":
        asyncio.run(cmd_game(args))
    else:
        parser.print_help()
        sys.exit(1)


def cmd_serve(args):
    """Run the API server with uvicorn."""
    import uvicorn

    uvicorn.run(
        "gamenight.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


async def cmd_search(args):
    """Search games by name."""
    from .errors import GameNightError
    from .games import GameDetailFetcher

    fetcher = GameDetailFetcher()
    try:
        candidates = await fetcher.search(args.query)
    except GameNightError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    finally:
        await fetcher.client.close()

    if not candidates:
        print("No games found")
        return
    for game in candidates:
        print(f"{game.id:>8}  {game.name} ({game.year_published})")


async def cmd_game(args):
    """Show normalized metadata for one game."""
    from .display import complexity_label, playing_time_label
    from .errors import GameNightError
    from .games import GameDetailFetcher

    fetcher = GameDetailFetcher()
    try:
        game = await fetcher.fetch(args.game_id)
    except GameNightError as e:
        print(f"Error: {e.message}")
        sys.exit(1)
    finally:
        await fetcher.client.close()

    print(f"Game: {game.name}")
    print(f"Duration: {playing_time_label(game.min_playing_time, game.max_playing_time)}")
    print(f"Complexity: {complexity_label(game.complexity)}")
    print(f"Link: {game.link}")
    print(f"How to play: {game.youtube_link}")


if __name__ == "__main__":
    main()
