from __future__ import annotations

"""
Simple TCP REPL server for chainlisp.

Protocol: JSON per line over TCP.
- Request: {"cmd": "eval", "code": "(define x 5) x"}
- Request: {"cmd": "reset"}
- Response: {"ok": true, "result": <printed value>} or {"ok": false, "error": <message>}

Every connection gets its own Interpreter, so definitions persist across the
requests of one client and are never visible to another.
"""

import json
import logging
import socket
import threading
from typing import Tuple

from chainlisp.config import configure_logging, get_repl_address
from chainlisp.errors import LispError
from chainlisp.interpreter import Interpreter

logger = logging.getLogger(__name__)


def handle_request(interp: Interpreter, line: bytes) -> dict:
    try:
        req = json.loads(line.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as ex:
        return {"ok": False, "error": f"Invalid request: {ex}"}
    if not isinstance(req, dict):
        return {"ok": False, "error": "Invalid request: expected a JSON object"}

    cmd = req.get("cmd")
    if cmd == "eval":
        try:
            return {"ok": True, "result": interp.eval_to_string(req.get("code", ""))}
        except LispError as ex:
            return {"ok": False, "error": str(ex)}
    if cmd == "reset":
        interp.reset()
        return {"ok": True, "result": ""}
    return {"ok": False, "error": f"Unknown cmd: {cmd}"}


class ReplServer:
    def __init__(self, host: str | None = None, port: int | None = None, prelude='auto'):
        default_host, default_port = get_repl_address()
        self.host = host or default_host
        self.port = port if port is not None else default_port
        self.prelude = prelude

    def serve_forever(self):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            s.bind((self.host, self.port))
            s.listen(5)
            logger.info("REPL server listening on %s:%d", self.host, self.port)
            while True:
                conn, addr = s.accept()
                threading.Thread(target=self._handle_client, args=(conn, addr), daemon=True).start()

    def _handle_client(self, conn: socket.socket, addr: Tuple[str, int]):
        logger.info("client connected: %s:%d", *addr)
        interp = Interpreter(prelude=self.prelude)
        with conn:
            buf = b""
            while True:
                data = conn.recv(4096)
                if not data:
                    break
                buf += data
                while b"\n" in buf:
                    line, buf = buf.split(b"\n", 1)
                    line = line.strip()
                    if not line:
                        continue
                    resp = handle_request(interp, line)
                    conn.sendall((json.dumps(resp) + "\n").encode("utf-8"))
        logger.info("client disconnected: %s:%d", *addr)


def main() -> None:
    configure_logging()
    ReplServer().serve_forever()


if __name__ == "__main__":
    main()
