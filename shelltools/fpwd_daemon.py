"""Serve working-directory formatting over a Unix socket."""

import os
import socket
import sys

from shelltools.fpwd import ConfigError, format_path, load_config


def handle_connection(conn, edits):
    """Read a path until the client stops sending, reply with it formatted."""
    chunks = []
    while chunk := conn.recv(4096):
        chunks.append(chunk)
    path = b"".join(chunks).decode("utf-8")
    conn.sendall(format_path(path, edits).encode("utf-8"))


def serve(sockname, edits):
    """Listen on ``sockname`` forever, answering one request per connection."""
    try:
        os.remove(sockname)
    except OSError:
        pass
    with socket.socket(socket.AF_UNIX, socket.SOCK_STREAM) as listener:
        listener.bind(sockname)
        listener.listen()
        print(f"Listening @ {sockname}", file=sys.stderr)
        while True:
            try:
                conn, _ = listener.accept()
            except OSError as error:
                print(f"accept failed: {error!r}")
                continue
            with conn:
                handle_connection(conn, edits)


def main(argv=None):
    sockname = os.environ.get("FPWDRS_SOCKET_NAME")
    if sockname is None:
        print("$FPWDRS_SOCKET_NAME must be set", file=sys.stderr)
        return 1
    try:
        edits = load_config()
    except ConfigError as error:
        print(f"fpwd ERROR: {error}", file=sys.stderr)
        return 1
    try:
        serve(sockname, edits)
    except (OSError, UnicodeDecodeError) as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())