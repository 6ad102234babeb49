"""
Unit tests for the Neovim remote-expr sampler.

A fake runner stands in for subprocess.run.
"""

import subprocess

import pytest

from vimflow.core.sampler import SamplerError
from vimflow.core.state import EditorMode, INSERT
from vimflow.sampling import NvimRpcSampler
from vimflow.sampling.nvim_rpc import BUFFER_EXPR, OPERATOR_EXPR


class FakeNvim:
    """Answer remote-expr queries from a dict of expression -> output."""

    def __init__(self, answers, failing=()):
        self.answers = answers
        self.failing = set(failing)
        self.commands = []

    def __call__(self, command, capture_output, text, timeout):
        self.commands.append(command)
        expr = command[-1]
        if expr in self.failing or expr not in self.answers:
            return subprocess.CompletedProcess(command, 1, "", "E15: Invalid expression")
        return subprocess.CompletedProcess(command, 0, self.answers[expr], "")


@pytest.fixture
def answers():
    return {
        "mode()": "n\n",
        "mode(1)": "n\n",
        "line('.')": "2\n",
        "col('.')": "19\n",
        OPERATOR_EXPR: "\n",
        BUFFER_EXPR: "const old_name = ;\nconst new_name = 'Bob';\n",
        '@"': "Alice",
        "@0": "",
        "@1": "",
        "@a": "",
        "@b": "",
        "@c": "",
    }


class TestSample:

    def test_full_snapshot(self, answers):
        state = NvimRpcSampler("/tmp/nv", runner=FakeNvim(answers)).sample()

        assert (state.cursor_line, state.cursor_col) == (1, 18)
        assert state.buffer_lines == ("const old_name = ;", "const new_name = 'Bob';")
        assert dict(state.registers) == {'"': "Alice"}
        assert state.pending_operator is None

    def test_command_line(self, answers):
        runner = FakeNvim(answers)
        NvimRpcSampler("/tmp/nv", nvim_binary="/usr/bin/nvim", runner=runner).sample()
        assert runner.commands[0] == [
            "/usr/bin/nvim", "--server", "/tmp/nv", "--remote-expr", "mode()"
        ]

    def test_operator_pending(self, answers):
        answers["mode(1)"] = "no\n"
        answers[OPERATOR_EXPR] = "d\n"
        state = NvimRpcSampler("/tmp/nv", runner=FakeNvim(answers)).sample()
        assert state.mode == EditorMode.operator_pending("d")
        assert state.pending_operator == "d"

    def test_insert_mode(self, answers):
        answers["mode()"] = "i\n"
        answers["mode(1)"] = "i\n"
        state = NvimRpcSampler("/tmp/nv", runner=FakeNvim(answers)).sample()
        assert state.mode == INSERT

    def test_unreadable_register_skipped(self, answers):
        runner = FakeNvim(answers, failing={"@a"})
        answers["@b"] = "kept"
        state = NvimRpcSampler("/tmp/nv", runner=runner).sample()
        assert "a" not in state.registers
        assert state.registers["b"] == "kept"

    def test_operator_failure_is_tolerated(self, answers):
        runner = FakeNvim(answers, failing={OPERATOR_EXPR})
        state = NvimRpcSampler("/tmp/nv", runner=runner).sample()
        assert state.pending_operator is None

    def test_unparsable_position_defaults_to_origin(self, answers):
        answers["line('.')"] = "oops\n"
        state = NvimRpcSampler("/tmp/nv", runner=FakeNvim(answers)).sample()
        assert state.cursor_line == 0

    def test_mode_failure_raises(self, answers):
        runner = FakeNvim(answers, failing={"mode()"})
        with pytest.raises(SamplerError):
            NvimRpcSampler("/tmp/nv", runner=runner).sample()


class TestEvalExpr:

    def test_missing_binary(self):
        def runner(*args, **kwargs):
            raise FileNotFoundError("nvim")

        with pytest.raises(SamplerError):
            NvimRpcSampler("/tmp/nv", runner=runner).eval_expr("mode()")

    def test_timeout(self):
        def runner(command, **kwargs):
            raise subprocess.TimeoutExpired(command, kwargs["timeout"])

        with pytest.raises(SamplerError):
            NvimRpcSampler("/tmp/nv", timeout=0.5, runner=runner).eval_expr("mode()")

    def test_text_keeps_inner_whitespace(self, answers):
        answers["@a"] = "  indented  \n"
        sampler = NvimRpcSampler("/tmp/nv", runner=FakeNvim(answers))
        assert sampler.eval_expr("@a", strip=False) == "  indented  "
        assert sampler.eval_expr("@a") == "indented"
