"""Tests for TcpTransport against a local asyncio server."""

import asyncio

import pytest

from tsip.exceptions import EndOfStreamError, TimeoutError, TransportError
from tsip.protocol.frame_reader import FrameReader
from tsip.protocol.frame_writer import frame_command
from tsip.transport.tcp_async import TcpTransport

VERSION_FRAME = frame_command(b"\x45", bytes(10))


async def start_bridge(payload: bytes, close_after: bool = True, received: list | None = None):
    """Start a server that sends payload to each client and records what it reads."""

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        writer.write(payload)
        await writer.drain()
        if received is not None:
            received.append(await reader.read(64))
        if close_after:
            writer.close()
            await writer.wait_closed()
        else:
            await asyncio.sleep(1.0)
            writer.close()

    server = await asyncio.start_server(handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    return server, port


class TestTcpTransport:
    """Tests for TcpTransport class."""

    def test_endpoint(self):
        transport = TcpTransport("192.168.1.50")
        assert transport.endpoint == "192.168.1.50:4001"
        assert not transport.is_open
        assert "closed" in repr(transport)

    @pytest.mark.asyncio
    async def test_reads_frames_until_close(self):
        server, port = await start_bridge(b"\x10\x03" + VERSION_FRAME)
        async with server:
            async with TcpTransport("127.0.0.1", port) as transport:
                reader = FrameReader()
                assert await reader.read_frame(transport) == b"\x45" + bytes(10)
                assert await reader.read_frame(transport) is None

    @pytest.mark.asyncio
    async def test_end_of_stream(self):
        server, port = await start_bridge(b"\x10")
        async with server:
            async with TcpTransport("127.0.0.1", port) as transport:
                with pytest.raises(EndOfStreamError):
                    await transport.read(2)

    @pytest.mark.asyncio
    async def test_read_timeout(self):
        server, port = await start_bridge(b"", close_after=False)
        async with server:
            async with TcpTransport("127.0.0.1", port, default_timeout=0.05) as transport:
                with pytest.raises(TimeoutError) as exc_info:
                    await transport.read_byte()
                assert exc_info.value.timeout_seconds == 0.05

    @pytest.mark.asyncio
    async def test_write(self):
        received = []
        server, port = await start_bridge(b"", received=received)
        async with server:
            async with TcpTransport("127.0.0.1", port) as transport:
                await transport.write(bytes.fromhex("10 1f 10 03"))
                with pytest.raises(EndOfStreamError):
                    await transport.read_byte()
        assert received == [bytes.fromhex("10 1f 10 03")]

    @pytest.mark.asyncio
    async def test_connection_refused(self):
        server, port = await start_bridge(b"")
        server.close()
        await server.wait_closed()

        with pytest.raises(TransportError):
            await TcpTransport("127.0.0.1", port, connect_timeout=1.0).open()

    @pytest.mark.asyncio
    async def test_write_when_closed(self):
        with pytest.raises(TransportError):
            await TcpTransport("127.0.0.1", 1).write(b"\x10")

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        server, port = await start_bridge(b"")
        async with server:
            transport = TcpTransport("127.0.0.1", port)
            await transport.open()
            await transport.close()
            await transport.close()
            assert not transport.is_open
