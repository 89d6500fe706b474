"""Unit tests for the session driver state machine."""

import asyncio

import pytest

from determinishtic import (
    ConnectionClosedError,
    IncompleteError,
    ResultError,
    Session,
    SessionAbortedError,
    SessionState,
    ThinkBuilder,
    ToolFailure,
    TransportError,
)
from determinishtic.tools import ResultTool, ToolRegistry
from tests.conftest import ScriptedEngine, invoke


def add_one(n: int) -> int:
    return n + 1


def make_session(engine, output_type=str, tools=()):
    b = ThinkBuilder(engine, output_type).text("Do the thing.")
    for name, fn in tools:
        b.define_tool(name, "", fn)
    return Session(engine, b.render(), b.tools, ResultTool.for_type(output_type))


class TestSessionStates:
    async def test_completed(self):
        engine = ScriptedEngine([invoke("return_result", {"result": "hi"})])
        session = make_session(engine)
        assert session.state is SessionState.INIT
        assert await session.run() == "hi"
        assert session.state is SessionState.COMPLETED
        assert session.error is None
        assert engine.closed

    async def test_engine_receives_prompt_and_tools(self):
        engine = ScriptedEngine([invoke("return_result", {"result": "x"})])
        await make_session(engine, tools=[("add_one", add_one)]).run()
        assert engine.prompt == "Do the thing."
        assert [t.name for t in engine.tools] == ["add_one", "return_result"]

    async def test_result_decode_failure_is_terminal(self):
        engine = ScriptedEngine([
            invoke("return_result", {"result": "NaN-ish"}),
            invoke("return_result", {"result": 3}),
        ])
        session = make_session(engine, output_type=int)
        with pytest.raises(ResultError):
            await session.run()
        assert session.state is SessionState.FAILED
        assert isinstance(session.error, ResultError)
        assert engine.responses == []
        assert engine.closed

    async def test_incomplete(self):
        engine = ScriptedEngine([])
        session = make_session(engine)
        with pytest.raises(IncompleteError):
            await session.run()
        assert session.state is SessionState.FAILED

    async def test_run_twice_not_allowed(self):
        session = make_session(ScriptedEngine([invoke("return_result", {"result": "x"})]))
        await session.run()
        with pytest.raises(RuntimeError):
            await session.run()


class TestDispatch:
    async def test_responses_follow_request_order(self):
        engine = ScriptedEngine([
            invoke("add_one", {"input": 1}, id="a"),
            invoke("add_one", {"input": 10}, id="b"),
            invoke("missing", {}, id="c"),
            invoke("add_one", {"input": "x"}, id="d"),
            invoke("return_result", {"result": 3}),
        ])
        session = make_session(engine, output_type=int, tools=[("add_one", add_one)])
        assert await session.run() == 3
        assert [r.id for r in engine.responses] == ["a", "b", "c", "d"]
        assert [r.output for r in engine.responses[:2]] == ["2", "11"]
        assert engine.responses[2].is_error
        assert engine.responses[3].is_error
        assert session.tool_calls == 4

    async def test_unrecoverable_failure_ends_session(self):
        def fatal(n: int) -> int:
            raise ToolFailure("no", recoverable=False)

        engine = ScriptedEngine([invoke("fatal", {"input": 1}), invoke("return_result", {"result": "x"})])
        session = make_session(engine, tools=[("fatal", fatal)])
        with pytest.raises(SessionAbortedError):
            await session.run()
        assert session.state is SessionState.FAILED
        assert isinstance(session.error.cause, ToolFailure)
        assert engine.responses == []
        assert engine.closed


class TestTransport:
    async def test_next_request_failure(self):
        engine = ScriptedEngine([OSError("socket closed")])
        session = make_session(engine)
        with pytest.raises(TransportError) as exc_info:
            await session.run()
        assert isinstance(exc_info.value.cause, OSError)
        assert session.state is SessionState.FAILED
        assert engine.closed

    async def test_engine_errors_pass_through(self):
        engine = ScriptedEngine([ConnectionClosedError()])
        with pytest.raises(ConnectionClosedError):
            await make_session(engine).run()

    async def test_open_failure(self):
        class Unreachable:
            async def open(self, prompt, tools):
                raise ConnectionRefusedError("nobody home")

        session = make_session(Unreachable())
        with pytest.raises(TransportError):
            await session.run()
        assert session.state is SessionState.FAILED

    async def test_respond_failure(self):
        class BrokenPipe(ScriptedEngine):
            async def respond(self, response):
                raise BrokenPipeError("gone")

        engine = BrokenPipe([invoke("add_one", {"input": 1})])
        with pytest.raises(TransportError):
            await make_session(engine, tools=[("add_one", add_one)]).run()
        assert engine.closed


class TestCancellation:
    async def test_cancel_while_awaiting_engine(self):
        class Hanging(ScriptedEngine):
            def __init__(self):
                super().__init__()
                self.entered = asyncio.Event()

            async def next_request(self):
                self.entered.set()
                await asyncio.Event().wait()

        engine = Hanging()
        session = make_session(engine)
        task = asyncio.create_task(session.run())
        await engine.entered.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert engine.closed
        assert session.state is SessionState.FAILED
        assert session.error is None

    async def test_cancel_during_tool_callback(self):
        started = asyncio.Event()

        async def slow(n: int) -> int:
            started.set()
            await asyncio.sleep(3600)
            return n

        engine = ScriptedEngine([invoke("slow", {"input": 1})])
        session = make_session(engine, tools=[("slow", slow)])
        task = asyncio.create_task(session.run())
        await started.wait()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert engine.closed
        assert engine.responses == []
        assert session.state is SessionState.FAILED


class TestRegistryIsolation:
    async def test_sessions_do_not_share_registries(self):
        a = ThinkBuilder(ScriptedEngine(), str).define_tool("a", "", add_one)
        b = ThinkBuilder(ScriptedEngine(), str).define_tool("a", "", add_one)
        assert a.tools is not b.tools
        assert isinstance(a.tools, ToolRegistry)
