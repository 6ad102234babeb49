"""
vimflow: continuous Vim/Neovim practice in the terminal.

The learner works through exercises made of ordered goals while a live
editor is sampled in the background; goals advance as they are met.

Components:
- core: state model, goal compiler, goal detector, flow controller, monitor
- sampling: editor state samplers (status file, Neovim remote-expr)
- display: progress sinks (progress file, rich console)
- content: built-in sample exercises
"""

__version__ = "0.3.0"
