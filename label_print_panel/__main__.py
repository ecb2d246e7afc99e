"""
Label Print Panel entry point: python -m label_print_panel
"""

from .app import create_app
from .config import PORT, HOST, DEBUG, LOG_LEVEL, LOG_DIR, SATO_WEBSOCKET_URL, BROWSER_PRINT_URL
from .logging_config import setup_logging
from .service import PrintPanel


def main():
    """Run the panel."""
    logger = setup_logging(LOG_LEVEL, log_dir=LOG_DIR, enable_file_logging=bool(LOG_DIR))

    logger.info("=" * 60)
    logger.info("  Label Print Panel")
    logger.info(f"  API: http://{HOST}:{PORT}/api")
    logger.info(f"  SATO spooler: {SATO_WEBSOCKET_URL}")
    logger.info(f"  Browser Print: {BROWSER_PRINT_URL}")
    logger.info("=" * 60)

    panel = PrintPanel()
    app = create_app(panel)

    panel.start()
    try:
        app.run(host=HOST, port=PORT, debug=DEBUG, use_reloader=False)
    finally:
        panel.stop()


if __name__ == '__main__':
    main()
