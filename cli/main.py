"""CLI entry point and argument parsing"""

import argparse
import sys

from rich.console import Console

from cli.status_display import show_config_status


console = Console()


def main():
    """Entry point for the CLI"""
    parser = argparse.ArgumentParser(description="Inbox Brief - Gmail OAuth and message decoding server")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument("--bind", "-b", default=None, help="Override bind address (default: from config)")
    parser.add_argument("--port", "-p", type=int, default=None, help="Override port (default: from config)")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Show the effective configuration and exit"
    )

    args = parser.parse_args()

    ok = show_config_status(console)
    if args.check:
        sys.exit(0 if ok else 1)
    if not ok:
        console.print("[yellow]Login will fail until the missing settings are provided[/yellow]")

    try:
        from webapp import WebServer

        server = WebServer(debug=args.debug, bind_address=args.bind, port=args.port)
        console.print(
            f"[green]Serving on http://{server.bind_address}:{server.port}[/green] "
            f"(open /auth/login to sign in)"
        )
        server.run()

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        console.print("Goodbye!")
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
