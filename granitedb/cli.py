"""Interactive command-line client for a GraniteDB server."""

from __future__ import annotations

import argparse
import json
import socket
import sys
import uuid
from typing import Any, Optional, Sequence, TextIO

VERSION = "0.1.0"

_BANNER = "\n".join(
    [
        "╔══════════════════════════════════════════════════╗",
        "║             GraniteDB CLI v0.1.0                ║",
        "╚══════════════════════════════════════════════════╝",
    ]
)

_HELP = "\n".join(
    [
        "╔══════════════════════════════════════════════════════════════╗",
        "║                    GraniteDB CLI Commands                   ║",
        "╠══════════════════════════════════════════════════════════════╣",
        "║  General:                                                   ║",
        "║    ping             — Ping the server                       ║",
        "║    status           — Show server status                    ║",
        "║    help             — Show this help                        ║",
        "║    exit / quit      — Exit the CLI                          ║",
        "║                                                             ║",
        "║  Database:                                                  ║",
        "║    use <db>         — Switch database                       ║",
        "║    dbs              — List all databases                    ║",
        "║    createdb <name>  — Create a database                     ║",
        "║                                                             ║",
        "║  Collection:                                                ║",
        "║    collections          — List collections                  ║",
        "║    createcol <name>     — Create a collection               ║",
        "║                                                             ║",
        "║  CRUD:                                                      ║",
        "║    insert <col> <json>  — Insert a document                 ║",
        "║    find <col> [filter]  — Find documents                    ║",
        "║    count <col> [filter] — Count documents                   ║",
        "║    delete <col> <filter>— Delete documents                  ║",
        "╚══════════════════════════════════════════════════════════════╝",
    ]
)


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def _loads(text: str) -> Any:
    return json.loads(text, parse_constant=_reject_constant)


def _try_loads(text: str) -> Optional[Any]:
    try:
        return _loads(text)
    except ValueError:
        return None


def _split_first(text: str) -> tuple[str, Optional[str]]:
    head, sep, rest = text.partition(" ")
    return head, (rest if sep else None)


def _filtered(kind: str, db: str, args: str) -> dict[str, Any]:
    collection, rest = _split_first(args)
    filter_doc = _try_loads(rest) if rest is not None else None
    return {
        "type": kind,
        "database": db,
        "collection": collection,
        "filter": {} if filter_doc is None else filter_doc,
    }


def parse_cli_command(text: str, db: str) -> Optional[dict[str, Any]]:
    """Build the request for a command line, or return None if it is not a request."""
    cmd, rest = _split_first(text)
    cmd = cmd.lower()
    args = rest.strip() if rest is not None else ""

    if cmd == "ping":
        command = {"type": "ping"}
    elif cmd == "status":
        command = {"type": "server_status"}
    elif cmd in ("dbs", "databases"):
        command = {"type": "list_databases"}
    elif cmd == "collections":
        command = {"type": "list_collections", "database": db}
    elif cmd == "createdb":
        command = {"type": "create_database", "name": args}
    elif cmd in ("createcol", "createcollection"):
        command = {"type": "create_collection", "database": db, "name": args}
    elif cmd == "insert":
        collection, doc_text = _split_first(args)
        if doc_text is None:
            print("Usage: insert <collection> <json document>")
            return None
        document = _try_loads(doc_text)
        if document is None:
            return None
        command = {
            "type": "insert_one",
            "database": db,
            "collection": collection,
            "document": document,
        }
    elif cmd == "find":
        command = _filtered("find", db, args)
    elif cmd == "count":
        command = _filtered("count", db, args)
    elif cmd == "delete":
        collection, filter_text = _split_first(args)
        if filter_text is None:
            print("Usage: delete <collection> <filter json>")
            return None
        filter_doc = _try_loads(filter_text)
        if filter_doc is None:
            return None
        command = {
            "type": "delete_many",
            "database": db,
            "collection": collection,
            "filter": filter_doc,
        }
    else:
        return None

    return {"request_id": str(uuid.uuid4()), "command": command}


def help_text() -> str:
    """The table of available commands."""
    return _HELP


def format_response(line: str) -> str:
    """Pretty-print a JSON response line, or return the raw line trimmed."""
    try:
        value = _loads(line)
    except ValueError:
        return line.strip()
    return json.dumps(value, indent=2, sort_keys=True, ensure_ascii=False)


def _port(value: str) -> int:
    port = int(value)
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"{value} is not in 0-65535")
    return port


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="granite-cli", description="GraniteDB interactive CLI client"
    )
    parser.add_argument("-V", "--version", action="version", version=f"granite-cli {VERSION}")
    parser.add_argument("--host", default="127.0.0.1", help="Server host")
    parser.add_argument("-p", "--port", type=_port, default=6380, help="Server port")
    parser.add_argument("-d", "--database", default="default", help="Database to use")
    return parser


def _session(reader: TextIO, writer: TextIO, db: str) -> None:
    while True:
        print(f"granite:{db}> ", end="", flush=True)
        raw = sys.stdin.readline()
        if not raw:
            print()
            break
        line = raw.strip()
        if not line:
            continue
        if line in ("exit", "quit"):
            print("Goodbye!")
            break
        if line == "help":
            print(help_text())
            continue

        request = parse_cli_command(line, db)
        if request is None:
            if line.startswith("use "):
                db = line[4:].strip()
                print(f"Switched to database: {db}")
                continue
            print("Unknown command. Type 'help' for available commands.")
            continue

        try:
            writer.write(json.dumps(request, sort_keys=True, separators=(",", ":")) + "\n")
            writer.flush()
        except OSError:
            print("Connection lost.", file=sys.stderr)
            break

        try:
            response = reader.readline()
        except OSError as exc:
            print(f"Read error: {exc}", file=sys.stderr)
            break
        if not response:
            print("Connection closed by server.", file=sys.stderr)
            break
        print(format_response(response))
        print()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the interactive client; return the exit status."""
    args = _build_parser().parse_args(argv)
    addr = f"{args.host}:{args.port}"

    print(_BANNER)
    print(f"Connecting to {addr}...")
    try:
        sock = socket.create_connection((args.host, args.port))
    except OSError as exc:
        print(f"Failed to connect to {addr}: {exc}", file=sys.stderr)
        print("Make sure the GraniteDB server is running.", file=sys.stderr)
        return 1

    print("Connected! Type 'help' for commands, 'exit' to quit.")
    print(f"Using database: {args.database}")
    print()

    with sock, sock.makefile("r", encoding="utf-8", newline="\n") as reader, sock.makefile(
        "w", encoding="utf-8", newline="\n"
    ) as writer:
        _session(reader, writer, args.database)
    return 0


if __name__ == "__main__":
    sys.exit(main())