"""
Chatterbox MCP Server – WhatsApp and YouTube tools backed by the Chatterbox WhatsApp server.

The services can also be used as a library (e.g. in scripts or cron jobs)
without going through MCP:

    from chatterbox_mcp import Settings, build_services

    services = build_services(Settings(server_urls="http://a:3000,http://b:3000", secret="..."))
    services.whatsapp.send_message("27820000000", "Hello")
"""

from chatterbox_mcp.config import Settings, SecretStore, load_settings, parse_server_urls
from chatterbox_mcp.errors import ChatterboxError, NoServersAvailable, RequestFailed, ClientError
from chatterbox_mcp.models import (
    MessageData,
    MissedMessages,
    Contact,
    Chat,
    Playlist,
    PlaylistItem,
    HealthResult,
)
from chatterbox_mcp.health import ServerHealthProbe
from chatterbox_mcp.pool import ServerPool
from chatterbox_mcp.client import FailoverClient
from chatterbox_mcp.whatsapp import WhatsAppService
from chatterbox_mcp.youtube import YouTubeService
from chatterbox_mcp.formatting import format_message, format_messages_list
from chatterbox_mcp.scheduler import PeriodicTask
from chatterbox_mcp.watcher import MissedMessageWatcher
from chatterbox_mcp.server import Services, build_services, create_server

__all__ = [
    "Settings",
    "SecretStore",
    "load_settings",
    "parse_server_urls",
    "ChatterboxError",
    "NoServersAvailable",
    "RequestFailed",
    "ClientError",
    "MessageData",
    "MissedMessages",
    "Contact",
    "Chat",
    "Playlist",
    "PlaylistItem",
    "HealthResult",
    "ServerHealthProbe",
    "ServerPool",
    "FailoverClient",
    "WhatsAppService",
    "YouTubeService",
    "format_message",
    "format_messages_list",
    "PeriodicTask",
    "MissedMessageWatcher",
    "Services",
    "build_services",
    "create_server",
]
