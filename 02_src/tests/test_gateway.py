"""Tests for the subprocess gateway, using the Python interpreter as backend."""

import sys

import pytest

from kbchat.errors import ProtocolError, TransportError
from kbchat.gateway import Gateway, send_command
from kbchat.models import Channel, MemberType

RAW_ECHO = "import json, sys\nprint(json.dumps({'raw': sys.stdin.read()}))\n"

ECHO = (
    "import json, sys\n"
    "command = json.load(sys.stdin)\n"
    "print(json.dumps({'result': {'echo': command}}))\n"
)


def python_gateway(script: str) -> Gateway:
    return Gateway([sys.executable, "-c", script])


class TestGatewaySubmit:
    """Tests for Gateway.submit()."""

    @pytest.mark.asyncio
    async def test_round_trip(self):
        gateway = python_gateway(ECHO)
        response = await gateway.submit({"method": "list"})
        assert response == {"result": {"echo": {"method": "list"}}}

    @pytest.mark.asyncio
    async def test_command_written_compact(self):
        gateway = python_gateway(RAW_ECHO)
        channel = Channel(name="chan", members_type=MemberType.TEAM)
        response = await gateway.submit(send_command(channel, "hi"))
        assert response["raw"] == (
            '{"method":"send","params":{"options":{"channel":'
            '{"name":"chan","members_type":"team"},"message":{"body":"hi"}}}}'
        )

    @pytest.mark.asyncio
    async def test_each_call_is_a_new_process(self):
        gateway = python_gateway("import os; print('{\"pid\": %d}' % os.getpid())")
        first = await gateway.submit({"method": "list"})
        second = await gateway.submit({"method": "list"})
        assert first["pid"] != second["pid"]

    @pytest.mark.asyncio
    async def test_nonzero_exit(self):
        gateway = python_gateway("import sys; sys.stderr.write('boom'); sys.exit(3)")
        with pytest.raises(TransportError) as exc_info:
            await gateway.submit({"method": "list"})
        assert exc_info.value.extra["returncode"] == 3
        assert exc_info.value.extra["stderr"] == "boom"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        gateway = python_gateway("print('definitely not json')")
        with pytest.raises(ProtocolError):
            await gateway.submit({"method": "list"})

    @pytest.mark.asyncio
    async def test_invalid_utf8(self):
        gateway = python_gateway("import sys; sys.stdout.buffer.write(b'\\xff\\xfe')")
        with pytest.raises(ProtocolError):
            await gateway.submit({"method": "list"})

    @pytest.mark.asyncio
    async def test_non_object_document(self):
        gateway = python_gateway("print('[1, 2, 3]')")
        with pytest.raises(ProtocolError):
            await gateway.submit({"method": "list"})

    @pytest.mark.asyncio
    async def test_missing_binary(self, tmp_path):
        gateway = Gateway([str(tmp_path / "no-such-keybase"), "chat", "api"])
        with pytest.raises(TransportError):
            await gateway.submit({"method": "list"})

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError):
            Gateway([])
