"""Embedding-host handshake for the board client.

The board runs inside a collaboration host (a Teams channel tab) that hands
out the channel id and expects one success or failure signal once the board
has loaded. Outside the host, ``StandaloneHost`` stands in with a fixed
development channel.
"""

import logging
import os
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from taskboard.board import BoardController, BoardStatus

logger = logging.getLogger(__name__)

DEV_CHANNEL_ID = "demo-channel-123"


@dataclass(frozen=True, slots=True)
class ChannelContext:
    channel_id: str
    team_id: str = ""
    user_id: str = ""
    user_principal_name: str = ""
    theme: str = "default"


@runtime_checkable
class HostContext(Protocol):
    """Capabilities the board needs from its embedding host."""

    async def initialize(self) -> None: ...

    async def get_context(self) -> ChannelContext: ...

    def notify_success(self) -> None: ...

    def notify_failure(self, reason: str) -> None: ...


class StandaloneHost:
    """Host used when the board runs outside any embedding environment."""

    def __init__(self, channel_id: str | None = None):
        self.channel_id = channel_id or os.getenv("TASKBOARD_CHANNEL_ID", DEV_CHANNEL_ID)

    async def initialize(self) -> None:
        logger.info("Running outside an embedding host, using standalone context")

    async def get_context(self) -> ChannelContext:
        return ChannelContext(channel_id=self.channel_id)

    def notify_success(self) -> None:
        logger.info(f"Board loaded for channel {self.channel_id}")

    def notify_failure(self, reason: str) -> None:
        logger.error(f"Board failed to load for channel {self.channel_id}: {reason}")


async def start_board(host: HostContext, controller: BoardController) -> BoardController:
    """Run the host handshake and the initial board load.

    Signals the host exactly once: ``notify_success`` when the board is
    ready, ``notify_failure`` when the handshake or the load fails.
    """
    try:
        await host.initialize()
        context = await host.get_context()
    except Exception as e:
        logger.error(f"Host handshake failed: {str(e)}")
        reason = str(e) or "Host handshake failed"
        controller.fail(reason)
        host.notify_failure(reason)
        return controller

    await controller.load(context.channel_id)
    if controller.status is BoardStatus.READY:
        host.notify_success()
    else:
        host.notify_failure(controller.error or "Failed to load tasks")
    return controller
