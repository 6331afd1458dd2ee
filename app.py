import logging
import os
import socket

from catalog_browser.logging_config import configure_logging
from catalog_browser.ui.dash_app import create_dash_app

configure_logging()
logger = logging.getLogger("catalog_browser.app")

CONFIG_ROOT = os.getenv("CATALOG_BROWSER_CONFIG", "config")

app = create_dash_app(CONFIG_ROOT)
server = app.server


def first_open_port(host: str, start_port: int, attempts: int = 100) -> int:
    """First port at or above start_port with nothing listening on host."""
    for port in range(start_port, start_port + attempts):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            if s.connect_ex((host, port)) != 0:
                return port
    return start_port


if __name__ == "__main__":
    host = os.getenv("HOST", "0.0.0.0")
    wanted = int(os.getenv("PORT", "8051"))
    port = first_open_port("localhost", wanted)
    if port != wanted:
        logger.warning("Port %d is taken, serving on %d instead", wanted, port)

    logger.info("Serving catalog browser", extra={"config_root": CONFIG_ROOT, "host": host, "port": port})
    app.run(host=host, port=port, debug=os.getenv("DEBUG", "0") == "1")
