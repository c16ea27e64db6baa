import logging

from chatterbox_mcp.config import load_settings
from chatterbox_mcp.log_config import configure_logging
from chatterbox_mcp.server import build_services, build_watcher, create_server

logger = logging.getLogger("chatterbox_mcp")


def main() -> None:
    settings = load_settings()
    configure_logging(settings.log_level, settings.log_file)

    services = build_services(settings)
    mcp = create_server(services)

    watcher = build_watcher(services)
    if settings.auto_response_numbers:
        watcher.start()

    logger.info("Starting Chatterbox MCP server...")
    try:
        mcp.run(transport=settings.transport)
    finally:
        watcher.stop()


if __name__ == "__main__":
    main()
