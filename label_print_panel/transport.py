"""
Spooler WebSocket Transport
===========================

Thin adapter around ``websocket.WebSocketApp`` (websocket-client). Every
event handler receives the transport itself first, so the channel manager
can drop events from a connection it has already replaced.
"""

import threading
from typing import Callable, Optional

import websocket

from .config import DEFAULT_TIMEOUT
from .logging_config import get_logger

logger = get_logger(__name__)

# close codes that mean the peer closed the connection on purpose
CLEAN_CLOSE_CODES = (1000, 1001)


class WebSocketTransport:
    """One WebSocket connection, run on its own daemon thread."""

    def __init__(self, url: str,
                 on_open: Callable,
                 on_message: Callable,
                 on_close: Callable,
                 on_error: Callable,
                 timeout: int = DEFAULT_TIMEOUT):
        """
        Args:
            url: Spooler endpoint
            on_open: on_open(transport)
            on_message: on_message(transport, raw)
            on_close: on_close(transport, was_clean)
            on_error: on_error(transport, error)
            timeout: Socket timeout in seconds
        """
        self.url = url
        self.timeout = timeout
        self._on_open = on_open
        self._on_message = on_message
        self._on_close = on_close
        self._on_error = on_error
        self._closing = False
        self._thread: Optional[threading.Thread] = None

        self._app = websocket.WebSocketApp(
            url,
            on_open=self._handle_open,
            on_message=self._handle_message,
            on_close=self._handle_close,
            on_error=self._handle_error,
        )

    def connect(self):
        """Start the connection on a background thread."""
        self._thread = threading.Thread(
            target=self._run,
            daemon=True,
            name='sato-ws',
        )
        self._thread.start()

    def _run(self):
        websocket.setdefaulttimeout(self.timeout)
        self._app.run_forever()

    def send(self, text: str):
        """Send one text frame. Raises on a closed socket."""
        self._app.send(text)

    def close(self):
        """Close the connection (clean close)."""
        self._closing = True
        self._app.close()

    # websocket-client callbacks

    def _handle_open(self, ws):
        self._on_open(self)

    def _handle_message(self, ws, message):
        self._on_message(self, message)

    def _handle_close(self, ws, close_status_code, close_msg):
        was_clean = self._closing or close_status_code in CLEAN_CLOSE_CODES
        logger.debug(f"WebSocket closed: code={close_status_code} msg={close_msg!r}")
        self._on_close(self, was_clean)

    def _handle_error(self, ws, error):
        self._on_error(self, error)
