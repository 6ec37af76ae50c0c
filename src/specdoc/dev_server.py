"""
Development HTTP server for previewing the build output.
"""

import threading
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional

from specdoc.app_logger import AppLogger, LogContext, get_default_logger
from specdoc.config import DEFAULT_HOST, DEFAULT_PORT


class _LoggingRequestHandler(SimpleHTTPRequestHandler):
    """Static file handler that reports requests through the app logger."""

    app_logger: AppLogger
    log_context = LogContext(component="DevServer", operation="request")

    def log_message(self, format: str, *args) -> None:
        self.app_logger.debug(format % args, context=self.log_context)


class DevServer:
    """
    Serves the output directory on localhost from a background thread.

    The server never opens a browser; ``url`` tells the user where to look.
    """

    def __init__(
        self,
        directory: Path,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        logger: Optional[AppLogger] = None,
    ):
        self.directory = Path(directory).expanduser().resolve()
        self.host = host
        self.port = port
        self._logger = logger or get_default_logger()
        self._log_context = LogContext(component="DevServer")
        self._httpd: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def url(self) -> Optional[str]:
        """Address being served, or None when stopped."""
        if self._httpd is None:
            return None
        host, port = self._httpd.server_address[:2]
        return f"http://{self.host or host}:{port}/"

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> str:
        """
        Bind the server and start serving.

        Returns:
            The URL being served

        Raises:
            OSError: If the address cannot be bound
        """
        if self._httpd is not None:
            raise RuntimeError("Dev server already started")

        handler_class = type(
            "RequestHandler", (_LoggingRequestHandler,), {"app_logger": self._logger}
        )
        self._httpd = ThreadingHTTPServer(
            (self.host, self.port),
            partial(handler_class, directory=str(self.directory)),
        )
        self._thread = threading.Thread(
            target=self._httpd.serve_forever, name="specdoc-dev-server", daemon=True
        )
        self._thread.start()

        url = self.url
        self._logger.info(
            f"Serving {self.directory} at {url}", context=self._log_context
        )
        return url

    def stop(self) -> None:
        """Stop serving and release the socket."""
        if self._httpd is None:
            return
        self._httpd.shutdown()
        self._httpd.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5.0)
        self._httpd = None
        self._thread = None
        self._logger.debug("Dev server stopped", context=self._log_context)
