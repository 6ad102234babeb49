"""
Neovim remote-expr sampler.

Queries a Neovim instance started with `--listen <socket>` through
`nvim --server <socket> --remote-expr <expr>`. Unlike the status file, this
yields the full snapshot: buffer lines, v:operator and register contents.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable

from loguru import logger

from vimflow.core.sampler import SamplerError
from vimflow.core.state import EditorMode, EditorState

# Registers worth watching for yank/delete exercises
WATCHED_REGISTERS = ('"', "0", "1", "a", "b", "c")

BUFFER_EXPR = 'join(getline(1, "$"), "\\n")'
OPERATOR_EXPR = "exists('v:operator') ? v:operator : ''"


class NvimRpcSampler:
    """
    Sample editor state from a running Neovim.

    Usage:
        sampler = NvimRpcSampler("/tmp/vimflow.sock")
        state = sampler.sample()
    """

    def __init__(
        self,
        socket_path: str,
        nvim_binary: str = "nvim",
        timeout: float = 2.0,
        runner: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        log=None,
    ):
        self.socket_path = socket_path
        self.nvim_binary = nvim_binary
        self.timeout = timeout
        self._run = runner
        self.log = log or logger.bind(component="sampler", source=socket_path)

    def eval_expr(self, expr: str, strip: bool = True) -> str:
        """
        Evaluate a Vim expression in the remote editor.

        Args:
            expr: Vim expression
            strip: Strip surrounding whitespace (scalars); otherwise only
                trailing newlines are removed (text content)

        Raises:
            SamplerError: nvim missing, timed out, or returned an error
        """
        command = [self.nvim_binary, "--server", self.socket_path, "--remote-expr", expr]
        try:
            result = self._run(command, capture_output=True, text=True, timeout=self.timeout)
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise SamplerError(f"Failed to evaluate '{expr}': {exc}") from exc

        if result.returncode != 0:
            raise SamplerError(f"Failed to evaluate '{expr}': {result.stderr.strip()}")

        output = result.stdout or ""
        return output.strip() if strip else output.rstrip("\r\n")

    def _eval_int(self, expr: str) -> int:
        try:
            return int(self.eval_expr(expr))
        except ValueError:
            return 1

    def sample(self) -> EditorState:
        mode = self.eval_expr("mode()")
        mode_detailed = self.eval_expr("mode(1)")
        line = self._eval_int("line('.')")
        col = self._eval_int("col('.')")

        try:
            operator = self.eval_expr(OPERATOR_EXPR) or None
        except SamplerError:
            operator = None

        buffer_lines = self.eval_expr(BUFFER_EXPR, strip=False).split("\n")

        registers: dict[str, str] = {}
        for name in WATCHED_REGISTERS:
            try:
                content = self.eval_expr(f"@{name}", strip=False)
            except SamplerError as exc:
                self.log.trace("Register {} unreadable: {}", name, exc)
                continue
            if content:
                registers[name] = content

        return EditorState(
            mode=EditorMode.from_vim_codes(mode, mode_detailed, operator),
            cursor_line=max(line - 1, 0),
            cursor_col=max(col - 1, 0),
            pending_operator=operator,
            buffer_lines=tuple(buffer_lines),
            registers=registers,
        )
