"""
Vim script that makes the editor publish its state to the status file.

Load it with `nvim -S <script> <practice-file>`.
"""

from __future__ import annotations

from pathlib import Path

STATUS_SCRIPT_TEMPLATE = r"""
" vimflow status writer
function! VimflowUpdateStatus()
  let l:operator = exists('v:operator') ? v:operator : ''
  let l:record = 'LINE:' . line('.') . ',COL:' . col('.') . ',MODE:' . mode() . ',DETAILED:' . mode(1) . ',OPERATOR:' . l:operator
  call writefile([l:record], '{status_path}')
endfunction

augroup vimflow_status
  autocmd!
  autocmd CursorMoved,CursorMovedI,InsertEnter,InsertLeave,ModeChanged * call VimflowUpdateStatus()
augroup END

function! VimflowTimerUpdate(timer)
  call VimflowUpdateStatus()
endfunction

let g:vimflow_timer = timer_start({interval_ms}, 'VimflowTimerUpdate', {{'repeat': -1}})

call cursor(1, 1)
call VimflowUpdateStatus()
"""


def _vim_single_quoted(text: str) -> str:
    return text.replace("'", "''")


def render_status_script(status_path: Path | str, interval_ms: int = 100) -> str:
    """Render the status writer for `status_path`, refreshed every `interval_ms`."""
    return STATUS_SCRIPT_TEMPLATE.format(
        status_path=_vim_single_quoted(str(status_path)),
        interval_ms=interval_ms,
    ).lstrip("\n")
