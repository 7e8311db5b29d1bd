"""
HTTP server for the blogging API

BlogServer wraps uvicorn with an explicit start/stop lifecycle so tests
and the command line both bind the port and connect the database the
same way.
"""

import logging
import threading
import time
from typing import Optional

import uvicorn

from blogging.shared import config
from blogging.shared.database import Database
from blogging.posts.main import create_app

logger = logging.getLogger(__name__)

STARTUP_TIMEOUT = 10.0


class BlogServer:
    """One uvicorn server bound to one database."""

    def __init__(
        self,
        database_url: str = config.DATABASE_URL,
        host: str = config.HOST,
        port: int = config.PORT,
    ):
        self.database = Database(database_url)
        self.app = create_app(self.database)
        self.host = host
        self.port = port
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def bound_port(self) -> int:
        """Port actually bound, useful when started with port 0."""
        if self._server is None or not self._server.servers:
            return self.port
        return self._server.servers[0].sockets[0].getsockname()[1]

    @property
    def base_url(self) -> str:
        host = "127.0.0.1" if self.host in ("0.0.0.0", "") else self.host
        return f"http://{host}:{self.bound_port}"

    def start(self) -> None:
        """Connect the database and start serving on a background thread."""
        if self.running:
            raise RuntimeError("Server is already running")

        uv_config = uvicorn.Config(
            self.app, host=self.host, port=self.port, lifespan="on", log_level="info"
        )
        self._server = uvicorn.Server(uv_config)
        self._thread = threading.Thread(target=self._server.run, name="blog-server", daemon=True)
        self._thread.start()

        deadline = time.monotonic() + STARTUP_TIMEOUT
        while not self._server.started:
            if not self._thread.is_alive():
                self._server = None
                self._thread = None
                raise RuntimeError(f"Server failed to start on {self.host}:{self.port}")
            if time.monotonic() > deadline:
                self.stop()
                raise RuntimeError(f"Server did not start within {STARTUP_TIMEOUT} seconds")
            time.sleep(0.05)

        logger.info(f"Blog server listening on {self.base_url}")

    def stop(self) -> None:
        """Stop serving and close the database connection."""
        if self._server is None:
            return
        self._server.should_exit = True
        if self._thread is not None:
            self._thread.join(timeout=STARTUP_TIMEOUT)
            if self._thread.is_alive():
                logger.warning(f"Blog server thread did not exit within {STARTUP_TIMEOUT} seconds")
        self._server = None
        self._thread = None
        logger.info("Blog server stopped")

    def __enter__(self) -> "BlogServer":
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop()


def run_server(database_url: str = config.DATABASE_URL, port: int = config.PORT) -> BlogServer:
    """Start a server in the background and return it."""
    server = BlogServer(database_url=database_url, port=port)
    server.start()
    return server


def close_server(server: BlogServer) -> None:
    server.stop()


def main() -> None:
    """Console entry point: serve in the foreground until interrupted."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    database = Database(config.DATABASE_URL)
    uvicorn.run(create_app(database), host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    main()
