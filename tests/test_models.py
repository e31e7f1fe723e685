"""Tests for conversation models and agent result models."""

from __future__ import annotations

import pytest

from toolagent.agent.models import AgentResult, AgentState
from toolagent.models.conversation import (
    AssistantTurn,
    Conversation,
    SystemTurn,
    ToolCall,
    ToolResult,
    ToolResultsTurn,
    UserTurn,
)


class TestToolCall:
    def test_raw_string_arguments_pass_through(self):
        call = ToolCall(id="c1", name="calculator", raw_arguments='{"expression":"1+1"}')
        assert call.arguments_json() == '{"expression":"1+1"}'

    def test_dict_arguments_serialized(self):
        call = ToolCall(id="c1", name="get_weather", raw_arguments={"city": "北京"})
        assert call.arguments_json() == '{"city": "北京"}'

    def test_to_openai(self):
        call = ToolCall(id="c1", name="echo", raw_arguments="{}")
        assert call.to_openai() == {
            "id": "c1",
            "type": "function",
            "function": {"name": "echo", "arguments": "{}"},
        }

    def test_frozen(self):
        call = ToolCall(id="c1", name="echo")
        with pytest.raises(AttributeError):
            call.name = "other"


class TestToolResult:
    def test_ok(self):
        result = ToolResult.ok("c1", "calculator", "1+1 = 2")
        assert result.success
        assert result.content == "1+1 = 2"

    def test_fail(self):
        result = ToolResult.fail("c1", "calculator", "bad input")
        assert not result.success
        assert result.content == "Error: bad input"


class TestTurns:
    def test_roles(self):
        assert SystemTurn("s").role == "system"
        assert UserTurn("u").role == "user"
        assert AssistantTurn().role == "assistant"
        assert ToolResultsTurn().role == "tool"

    def test_assistant_without_tool_calls(self):
        assert AssistantTurn(text="hi").to_messages() == [{"role": "assistant", "content": "hi"}]

    def test_assistant_with_tool_calls(self):
        turn = AssistantTurn(tool_calls=(ToolCall(id="c1", name="echo", raw_arguments="{}"),))
        assert turn.has_tool_calls
        (message,) = turn.to_messages()
        assert message["content"] == ""
        assert message["tool_calls"][0]["id"] == "c1"

    def test_reasoning_not_sent(self):
        message = AssistantTurn(text="a", reasoning="secret").to_messages()[0]
        assert "reasoning" not in message
        assert "secret" not in str(message)

    def test_tool_results_one_message_each(self):
        turn = ToolResultsTurn((
            ToolResult.ok("c1", "echo", "one"),
            ToolResult.fail("c2", "echo", "two"),
        ))
        assert turn.to_messages() == [
            {"role": "tool", "tool_call_id": "c1", "content": "one"},
            {"role": "tool", "tool_call_id": "c2", "content": "Error: two"},
        ]


class TestConversation:
    def test_start_with_preamble(self):
        conv = Conversation.start("sys", "hello")
        assert [t.role for t in conv] == ["system", "user"]
        assert repr(conv) == "Conversation([system, user])"

    def test_start_without_preamble(self):
        conv = Conversation.start("", "hello")
        assert len(conv) == 1
        assert conv.to_messages() == [{"role": "user", "content": "hello"}]

    def test_append_and_last(self):
        conv = Conversation.start("", "q")
        reply = AssistantTurn(text="a")
        conv.append(reply)
        assert conv.last is reply
        assert len(conv.turns) == 2

    def test_empty_last(self):
        assert Conversation().last is None

    def test_turns_is_a_snapshot(self):
        conv = Conversation.start("", "q")
        turns = conv.turns
        conv.append(AssistantTurn(text="a"))
        assert len(turns) == 1

    def test_full_round_messages(self):
        conv = Conversation.start("sys", "q")
        conv.append(AssistantTurn(tool_calls=(ToolCall(id="c1", name="echo", raw_arguments="{}"),)))
        conv.append(ToolResultsTurn((ToolResult.ok("c1", "echo", "out"),)))
        conv.append(AssistantTurn(text="done"))
        assert [m["role"] for m in conv.to_messages()] == [
            "system", "user", "assistant", "tool", "assistant",
        ]


class TestAgentModels:
    def test_terminal_states(self):
        assert AgentState.DONE.is_terminal
        assert AgentState.FAILED.is_terminal
        assert not AgentState.AWAITING_MODEL.is_terminal
        assert not AgentState.EXECUTING_TOOLS.is_terminal

    def test_state_is_str(self):
        assert AgentState.DONE == "done"

    def test_tool_calls_total(self):
        conv = Conversation.start("", "q")
        conv.append(AssistantTurn(tool_calls=(
            ToolCall(id="a", name="x"),
            ToolCall(id="b", name="y"),
        )))
        conv.append(ToolResultsTurn())
        conv.append(AssistantTurn(text="done"))
        result = AgentResult(output="done", state=AgentState.DONE, iterations=1, conversation=conv)
        assert result.tool_calls_total == 2
