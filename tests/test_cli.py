"""CLI tests for toolagent via Click's CliRunner.

A ScriptedClient is injected through ``obj={"client": ...}`` so commands
never touch the network.
"""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from tests.conftest import ScriptedClient, final_turn, tool_turn
from toolagent.cli import cli
from toolagent.cli.commands.chat import DEFAULT_CHAT_PREAMBLE
from toolagent.cli.commands.demo import CHAT_PROMPT, STREAM_PROMPT, TOOLS_PROMPT
from toolagent.cli.commands.reason import DEFAULT_REASON_PREAMBLE, PUZZLE_PROMPT
from toolagent.cli.commands.tools import DEFAULT_TOOLS_PREAMBLE
from toolagent.llm.config import DEEPSEEK_REASONER
from toolagent.llm.errors import LLMStreamError
from toolagent.models.conversation import AssistantTurn


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def runner():
    """Create a Click test runner."""
    return CliRunner()


def _invoke(runner: CliRunner, client: ScriptedClient, *args: str):
    return runner.invoke(cli, list(args), obj={"client": client})


# ===========================================================================
# chat
# ===========================================================================


class TestChatCommand:
    def test_prints_answer(self, runner: CliRunner):
        client = ScriptedClient([final_turn("你好，我是助手")])
        result = _invoke(runner, client, "chat", "请简单介绍一下你自己")

        assert result.exit_code == 0, result.output
        assert "你好，我是助手" in result.output
        messages = client.requests[0]["messages"]
        assert messages[0] == {"role": "system", "content": DEFAULT_CHAT_PREAMBLE}
        assert messages[1] == {"role": "user", "content": "请简单介绍一下你自己"}
        assert client.requests[0]["tools"] == []

    def test_custom_preamble(self, runner: CliRunner):
        client = ScriptedClient([final_turn("ok")])
        result = _invoke(runner, client, "chat", "hi", "--preamble", "Be brief.")
        assert result.exit_code == 0
        assert client.requests[0]["messages"][0]["content"] == "Be brief."

    def test_model_option(self, runner: CliRunner):
        client = ScriptedClient([final_turn("ok")])
        result = _invoke(runner, client, "--model", "deepseek-reasoner", "chat", "hi")
        assert result.exit_code == 0
        assert client.requests[0]["model"] == "deepseek-reasoner"


# ===========================================================================
# tools
# ===========================================================================


class TestToolsCommand:
    def test_runs_tools_and_prints_results(self, runner: CliRunner):
        client = ScriptedClient([
            tool_turn(("c1", "calculator", '{"expression": "123 + 456"}')),
            final_turn("结果是 579"),
        ])
        result = _invoke(runner, client, "tools", "请计算 123 + 456 的结果")

        assert result.exit_code == 0, result.output
        assert "[tool] calculator -> 123 + 456 = 579" in result.output
        assert "结果是 579" in result.output
        assert "1 tool iteration(s), 1 tool call(s)" in result.output
        assert client.requests[0]["messages"][0]["content"] == DEFAULT_TOOLS_PREAMBLE
        assert [d.name for d in client.requests[0]["tools"]] == ["calculator", "get_weather"]

    def test_failed_tool_is_shown(self, runner: CliRunner):
        client = ScriptedClient([
            tool_turn(("c1", "calculator", '{"expression": "8/0"}')),
            final_turn("division failed"),
        ])
        result = _invoke(runner, client, "tools", "8/0?")
        assert result.exit_code == 0
        assert "calculator failed:" in result.output

    def test_max_iterations_exits_nonzero(self, runner: CliRunner):
        client = ScriptedClient([tool_turn(("c", "calculator", '{"expression": "1+1"}'))])
        result = _invoke(runner, client, "tools", "loop", "--max-iterations", "2")

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "max tool iterations" in result.output
        assert len(client.requests) == 2

    def test_max_iterations_must_be_positive(self, runner: CliRunner):
        result = _invoke(runner, ScriptedClient(), "tools", "q", "--max-iterations", "0")
        assert result.exit_code == 2


# ===========================================================================
# stream
# ===========================================================================


class TestStreamCommand:
    def test_prints_chunks(self, runner: CliRunner):
        client = ScriptedClient(chunks=["硅", "之梦", "[not markup]"])
        result = _invoke(runner, client, "stream", "写一首诗")

        assert result.exit_code == 0, result.output
        assert "硅之梦[not markup]" in result.output
        assert client.stream_requests == [{"prompt": "写一首诗", "model": None}]

    def test_stream_error_exits_nonzero(self, runner: CliRunner):
        client = ScriptedClient(chunks=["部分"], stream_error=LLMStreamError("connection dropped"))
        result = _invoke(runner, client, "stream", "q")

        assert result.exit_code == 1
        assert "部分" in result.output
        assert "connection dropped" in result.output


# ===========================================================================
# reason
# ===========================================================================


class TestReasonCommand:
    def test_prints_reasoning_and_answer(self, runner: CliRunner):
        client = ScriptedClient([
            AssistantTurn(text="金子在标着'空'的盒子里", reasoning="所有标签都是错的"),
        ])
        result = _invoke(runner, client, "reason")

        assert result.exit_code == 0, result.output
        assert "Reasoning" in result.output
        assert "所有标签都是错的" in result.output
        assert "金子在标着'空'的盒子里" in result.output

        request = client.requests[0]
        assert request["model"] == DEEPSEEK_REASONER
        assert request["tools"] == []
        assert request["messages"] == [
            {"role": "system", "content": DEFAULT_REASON_PREAMBLE},
            {"role": "user", "content": PUZZLE_PROMPT},
        ]

    def test_without_reasoning_text(self, runner: CliRunner):
        client = ScriptedClient([final_turn("answer only")])
        result = _invoke(runner, client, "reason", "1+1?")

        assert result.exit_code == 0
        assert "Reasoning" not in result.output
        assert "answer only" in result.output
        assert client.requests[0]["messages"][-1]["content"] == "1+1?"

    def test_model_option_overrides_reasoner(self, runner: CliRunner):
        client = ScriptedClient([final_turn("ok")])
        _invoke(runner, client, "--model", "deepseek-chat", "reason")
        assert client.requests[0]["model"] == "deepseek-chat"


# ===========================================================================
# demo
# ===========================================================================


class TestDemoCommand:
    def test_runs_every_walkthrough(self, runner: CliRunner):
        client = ScriptedClient(
            [
                final_turn("我是一个AI助手"),
                tool_turn(
                    ("c1", "calculator", '{"expression": "(15 + 25) * 2"}'),
                    ("c2", "get_weather", '{"city": "北京"}'),
                ),
                final_turn("结果是80，北京晴朗"),
                AssistantTurn(text="在标着'空'的盒子里", reasoning="标签全错"),
            ],
            chunks=["智能", "之诗"],
        )
        result = _invoke(runner, client, "demo")

        assert result.exit_code == 0, result.output
        assert "1. Basic chat" in result.output
        assert "(15 + 25) * 2 = 80" in result.output
        assert "北京今天晴朗" in result.output
        assert "3. Reasoning model" in result.output
        assert "标签全错" in result.output
        assert "智能之诗" in result.output
        assert "All demos finished." in result.output

        assert client.requests[0]["messages"][-1]["content"] == CHAT_PROMPT
        assert client.requests[1]["messages"][-1]["content"] == TOOLS_PROMPT
        assert client.requests[3]["messages"][-1]["content"] == PUZZLE_PROMPT
        assert client.requests[3]["model"] == DEEPSEEK_REASONER
        assert client.stream_requests[0]["prompt"] == STREAM_PROMPT


# ===========================================================================
# Group-level behaviour
# ===========================================================================


class TestCLIIntegration:
    def test_help(self, runner: CliRunner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for name in ("chat", "tools", "reason", "stream", "demo"):
            assert name in result.output

    def test_missing_api_key(self, runner: CliRunner, monkeypatch):
        monkeypatch.delenv("NOKEY_API_KEY", raising=False)
        result = runner.invoke(cli, ["--env-prefix", "NOKEY", "chat", "hi"])
        assert result.exit_code == 1
        assert "NOKEY_API_KEY" in result.output
