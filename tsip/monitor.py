"""
Receiver monitor: periodic commands plus a formatted packet log.

The monitor connects to a receiver, starts one asyncio task per scheduled
command and prints one line per decoded packet until the stream ends. The
default schedule asks for the software version once, one second after
connecting, and for the tracking status of all satellites every thirty
seconds. Signal level polling is optional.

Example:
    >>> settings = MonitorSettings(host="192.168.1.50")
    >>> stats = asyncio.run(run_monitor(settings))
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tsip.client import ReceiverClient, ReceiverStatistics
from tsip.formatting import format_failure, format_packet
from tsip.models.commands import (
    Command,
    GetSatelliteTrackingStatusCommand,
    GetSignalLevelsCommand,
    GetSoftwareVersionCommand,
)
from tsip.parsers.decoder import DecodeResult
from tsip.protocol.constants import OverflowPolicy, ProtocolConstants
from tsip.transport.abc import AbstractTransport
from tsip.transport.serial_async import AsyncSerialTransport
from tsip.transport.tcp_async import TcpTransport

logger = logging.getLogger(__name__)


class MonitorSettings(BaseModel):
    """
    Validated monitor configuration.

    Exactly one of host (TCP bridge) or serial_port must be given.
    """

    model_config = ConfigDict(frozen=True)

    host: str | None = None
    port: int = Field(default=ProtocolConstants.DEFAULT_TCP_PORT, ge=1, le=65535)
    serial_port: str | None = None
    baudrate: int = Field(default=ProtocolConstants.DEFAULT_BAUD_RATE, gt=0)

    max_frame_length: int = Field(default=ProtocolConstants.MAX_FRAME_LENGTH, ge=1)
    overflow_policy: OverflowPolicy = OverflowPolicy.TRUNCATE
    resynchronize: bool = False
    read_timeout: float | None = Field(default=None, gt=0)

    version_delay: float | None = Field(default=1.0, ge=0, description="None disables")
    tracking_interval: float | None = Field(default=30.0, gt=0, description="None disables")
    signal_interval: float | None = Field(default=None, gt=0, description="None disables")
    satellite_number: int = Field(default=ProtocolConstants.ALL_SATELLITES, ge=0, le=0xFF)

    @model_validator(mode="after")
    def _check_endpoint(self) -> MonitorSettings:
        if (self.host is None) == (self.serial_port is None):
            raise ValueError("Specify exactly one of host or serial_port")
        return self

    def create_transport(self) -> AbstractTransport:
        """Build the transport these settings describe."""
        if self.serial_port is not None:
            return AsyncSerialTransport(
                self.serial_port,
                baudrate=self.baudrate,
                default_timeout=self.read_timeout,
            )
        return TcpTransport(self.host, self.port, default_timeout=self.read_timeout)


@dataclass(frozen=True)
class ScheduledCommand:
    """
    A command sent after an initial delay, then optionally repeated.

    Attributes:
        command: Command to send.
        delay: Seconds to wait before the first send.
        interval: Seconds between repeats, or None to send once.
    """

    command: Command
    delay: float
    interval: float | None = None

    async def run(self, client: ReceiverClient) -> None:
        await asyncio.sleep(self.delay)
        while True:
            logger.info("Sending %s", self.command)
            await client.send(self.command)
            if self.interval is None:
                return
            await asyncio.sleep(self.interval)


def build_schedule(settings: MonitorSettings) -> list[ScheduledCommand]:
    """Translate settings into the list of scheduled commands."""
    schedule: list[ScheduledCommand] = []

    if settings.version_delay is not None:
        schedule.append(ScheduledCommand(GetSoftwareVersionCommand(), settings.version_delay))

    if settings.tracking_interval is not None:
        schedule.append(
            ScheduledCommand(
                GetSatelliteTrackingStatusCommand(satellite_number=settings.satellite_number),
                delay=settings.tracking_interval,
                interval=settings.tracking_interval,
            )
        )

    if settings.signal_interval is not None:
        schedule.append(
            ScheduledCommand(
                GetSignalLevelsCommand(),
                delay=settings.signal_interval,
                interval=settings.signal_interval,
            )
        )

    return schedule


async def run_monitor(
    settings: MonitorSettings,
    transport: AbstractTransport | None = None,
    output: Callable[[str], None] = print,
) -> ReceiverStatistics:
    """
    Run the monitor until the receiver stream ends.

    Args:
        settings: Monitor configuration.
        transport: Transport to use instead of the one settings describe.
        output: Sink for formatted lines.

    Returns:
        Session statistics.

    Raises:
        FramingError: On a fatal framing error (unless resynchronizing).
        TransportError: If the connection fails.
    """
    client = ReceiverClient(
        transport or settings.create_transport(),
        max_frame_length=settings.max_frame_length,
        overflow_policy=settings.overflow_policy,
        resynchronize=settings.resynchronize,
    )

    output(f"connecting to {client.transport.endpoint}")
    async with client:
        tasks = [asyncio.create_task(entry.run(client)) for entry in build_schedule(settings)]
        try:
            async for result, value in client.results():
                if result is DecodeResult.SUCCESS:
                    line = format_packet(value)
                elif result is DecodeResult.UNKNOWN_PACKET:
                    line = format_failure(value)
                else:
                    line = None
                if line is not None:
                    output(line)
        finally:
            for task in tasks:
                task.cancel()
            outcomes = await asyncio.gather(*tasks, return_exceptions=True)
            for outcome in outcomes:
                if isinstance(outcome, Exception):
                    logger.error("Scheduled command failed: %s", outcome)

    return client.statistics
