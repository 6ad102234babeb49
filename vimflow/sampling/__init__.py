"""
Editor state samplers.

- status_file: reads the LINE/COL/MODE record written by the status script
- nvim_rpc: queries a running Neovim over its --listen socket
"""

from vimflow.core.sampler import SamplerError, StateSampler
from .nvim_rpc import NvimRpcSampler
from .status_file import StatusFileSampler, parse_status_record
from .status_script import render_status_script

__all__ = [
    "NvimRpcSampler",
    "SamplerError",
    "StateSampler",
    "StatusFileSampler",
    "parse_status_record",
    "render_status_script",
]
