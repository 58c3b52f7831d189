"""
End-to-end: start main.py as a subprocess and talk to it over stdio, the
same way an agent would.  Most tests use a real MCP client (fastmcp); the
raw tests write bytes to the pipe to check the wire format itself.

Only calls that never reach Gemini are exercised: the handshake, discovery,
argument errors, unknown tools, and a missing input file.
"""

import asyncio
import json
import os
import subprocess
import sys

import pytest
from fastmcp import Client
from fastmcp.client.transports import PythonStdioTransport
from mcp.shared.exceptions import McpError


_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_MAIN = os.path.join(_PROJECT_ROOT, "main.py")


def _run(output_dir, body):
    transport = PythonStdioTransport(
        script_path=_MAIN,
        env={
            "GEMINI_API_KEY": "test-key-for-testing",
            "GEMINI_OUTPUT_DIR": output_dir,
        },
        cwd=_PROJECT_ROOT,
        python_cmd=sys.executable,
    )

    async def _session():
        async with Client(transport) as client:
            return await body(client)

    return asyncio.run(_session())


# -----------------------------------------------------------------------------
# Raw stdio helpers
# -----------------------------------------------------------------------------

def _start(output_dir):
    env = dict(os.environ)
    env.update({
        "GEMINI_API_KEY": "test-key-for-testing",
        "GEMINI_OUTPUT_DIR": output_dir,
        "PYTHONIOENCODING": "utf-8",
    })
    return subprocess.Popen(
        [sys.executable, _MAIN],
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.DEVNULL,
        cwd=_PROJECT_ROOT,
        env=env,
    )


def _send(proc, payload: bytes) -> None:
    proc.stdin.write(payload)
    proc.stdin.flush()


def _request(method, request_id=None, params=None) -> bytes:
    message = {"jsonrpc": "2.0", "method": method}
    if request_id is not None:
        message["id"] = request_id
    if params is not None:
        message["params"] = params
    return (json.dumps(message) + "\n").encode("utf-8")


def _response_to(proc, request_id):
    """Read stdout lines until the response carrying request_id arrives."""
    for _ in range(10):
        line = proc.stdout.readline()
        assert line, "server closed stdout before answering"
        message = json.loads(line)
        if message.get("id") == request_id:
            return message
    raise AssertionError(f"no response with id {request_id!r}")


def _handshake(proc):
    _send(proc, _request("initialize", 0, {
        "protocolVersion": "2024-11-05",
        "capabilities": {},
        "clientInfo": {"name": "pytest", "version": "0"},
    }))
    response = _response_to(proc, 0)
    _send(proc, _request("notifications/initialized"))
    return response


def _stop(proc) -> int:
    proc.stdin.close()
    try:
        return proc.wait(timeout=30)
    finally:
        proc.stdout.close()


# -----------------------------------------------------------------------------
# Tests
# -----------------------------------------------------------------------------

def test_handshake_and_tool_discovery(tmp_path):
    async def body(client):
        first = await client.list_tools()
        second = await client.list_tools()
        return first, second

    first, second = _run(str(tmp_path / "out"), body)

    assert [tool.name for tool in first] == ["generate_media", "analyze_media", "manipulate_media"]
    assert [tool.name for tool in second] == [tool.name for tool in first]


def test_initialize_answer_on_the_wire(tmp_path):
    proc = _start(str(tmp_path / "out"))
    try:
        response = _handshake(proc)
        _send(proc, _request("tools/list", 1))
        tools = _response_to(proc, 1)
    finally:
        returncode = _stop(proc)

    result = response["result"]
    assert response["jsonrpc"] == "2.0"
    assert result["protocolVersion"] == "2024-11-05"
    assert result["serverInfo"]["name"] == "gemini-mcp-server"
    assert result["serverInfo"]["version"] == "1.0.0"
    assert "Gemini" in result["instructions"]
    assert "tools" in result["capabilities"]
    assert len(tools["result"]["tools"]) == 3
    assert returncode == 0


def test_invalid_utf8_line_does_not_stop_the_server(tmp_path):
    proc = _start(str(tmp_path / "out"))
    try:
        _handshake(proc)
        _send(proc, b"\xff\xfe garbage\n")
        _send(proc, _request("ping", 1))
        pong = _response_to(proc, 1)
    finally:
        returncode = _stop(proc)

    assert pong == {"jsonrpc": "2.0", "id": 1, "result": {}}
    assert returncode == 0


def test_missing_argument_comes_back_as_text(tmp_path):
    async def body(client):
        return await client.call_tool_mcp("manipulate_media", {"inputFile": "/tmp/x.png", "prompt": "p"})

    result = _run(str(tmp_path / "out"), body)

    assert result.content[0].text == "Error: outputFile is required"


def test_unknown_tool_is_a_protocol_error(tmp_path):
    async def body(client):
        return await client.call_tool_mcp("no_such_tool", {})

    with pytest.raises(McpError) as exc:
        _run(str(tmp_path / "out"), body)
    assert exc.value.error.code == -32602
    assert "Unknown tool: no_such_tool" in exc.value.error.message


def test_analyze_missing_file(tmp_path):
    output_dir = str(tmp_path / "out")

    async def body(client):
        return await client.call_tool_mcp(
            "analyze_media", {"filePath": str(tmp_path / "missing.png"), "prompt": "describe"}
        )

    result = _run(output_dir, body)

    assert result.content[0].text.startswith("Error: Analysis failed:")
    assert not os.path.exists(output_dir)
