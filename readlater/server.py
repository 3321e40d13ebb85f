"""Command line entry point that serves the application."""

from __future__ import annotations

import socket
import sys
from typing import Sequence
from wsgiref.simple_server import make_server

import psutil

from .handler import Handler
from .storage import History

USAGE = "Usage: readlater --listen|-l <port> --website|-s <example.com>"


def ipv4_addresses() -> list[str]:
    """The IPv4 addresses of all network interfaces."""
    return [
        address.address
        for addresses in psutil.net_if_addrs().values()
        for address in addresses
        if address.family == socket.AF_INET
    ]


def parse_args(argv: Sequence[str]) -> tuple[int, str]:
    """The port and the public root URL from ``--listen <port> --website <url>``."""
    args = list(argv)
    if (
        len(args) != 4
        or args[0] not in ("--listen", "-l")
        or args[2] not in ("--website", "-s")
    ):
        raise ValueError(USAGE)
    try:
        port = int(args[1])
    except ValueError:
        raise ValueError(f"Invalid port: {args[1]}") from None
    if not 0 <= port <= 65535:
        raise ValueError(f"Invalid port: {args[1]}")
    return port, args[3]


def main(argv: Sequence[str] | None = None) -> int:
    """Serve the application on all interfaces until interrupted."""
    args = sys.argv[1:] if argv is None else argv
    try:
        port, root_url = parse_args(args)
    except ValueError as exc:
        print(exc)
        return 0

    history = History()
    app = Handler(root_url, history)
    for index, ip in enumerate(ipv4_addresses()):
        prefix = "Serving at" if index == 0 else " " * len("Serving at")
        print(f"{prefix} http://{ip}:{port}")

    with history, make_server("0.0.0.0", port, app) as server:
        server.serve_forever()
    return 0


if __name__ == "__main__":
    sys.exit(main())