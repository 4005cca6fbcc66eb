from __future__ import annotations

import logging
import os
import subprocess
import threading
from dataclasses import dataclass
from typing import IO, Callable, Mapping, Sequence

logger = logging.getLogger(__name__)

# Flags whose following argument must never reach the log.
SECRET_FLAGS = frozenset({"-password"})


@dataclass(frozen=True)
class CmdResult:
    argv: list[str]
    returncode: int
    stdout: str
    stderr: str


def redact_argv(argv: Sequence[str]) -> list[str]:
    out: list[str] = []
    hide_next = False
    for a in argv:
        out.append("********" if hide_next else a)
        hide_next = a.lower() in SECRET_FLAGS
    return out


def _fmt_argv(argv: Sequence[str]) -> str:
    return subprocess.list2cmdline(redact_argv(argv))


def run_cmd(
    argv: Sequence[str],
    *,
    check: bool = True,
    env: Mapping[str, str] | None = None,
    cwd: str | None = None,
) -> CmdResult:
    """Run a command to completion, capturing its output."""

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    p = subprocess.run(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        env=dict(os.environ, **(env or {})),
    )

    if p.stdout:
        logger.debug("STDOUT %s", p.stdout.strip())
    if p.stderr:
        logger.debug("STDERR %s", p.stderr.strip())

    if check and p.returncode != 0:
        raise RuntimeError(f"Command failed ({p.returncode}): {_fmt_argv(argv_list)}\n{p.stderr}")

    return CmdResult(argv=argv_list, returncode=p.returncode, stdout=p.stdout, stderr=p.stderr)


def _pump(stream: IO[str], emit: Callable[[str], None]) -> None:
    with stream:
        for line in stream:
            emit(line.rstrip("\r\n"))


def stream_cmd(
    argv: Sequence[str],
    *,
    tag: str,
    cwd: str | None = None,
) -> int:
    """Run a long-lived tool, relaying its output line by line.

    stdout lines are logged at INFO as ``[TAG] line``, stderr lines at
    WARNING as ``[TAG-ERR] line``. Both pipes are drained concurrently so a
    chatty tool cannot block on a full buffer.

    Returns the exit code, or -1 when the OS does not report one.
    """

    argv_list = list(argv)
    logger.info("CMD %s", _fmt_argv(argv_list))

    p = subprocess.Popen(
        argv_list,
        text=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        cwd=cwd,
        errors="replace",
    )
    if p.stdout is None or p.stderr is None:
        p.kill()
        raise RuntimeError(f"No output pipes for {_fmt_argv(argv_list)}")

    def out(line: str) -> None:
        logger.info("[%s] %s", tag, line)

    def err(line: str) -> None:
        logger.warning("[%s-ERR] %s", tag, line)

    readers = [
        threading.Thread(target=_pump, args=(p.stdout, out), daemon=True),
        threading.Thread(target=_pump, args=(p.stderr, err), daemon=True),
    ]
    for t in readers:
        t.start()

    returncode = p.wait()
    for t in readers:
        t.join()

    return returncode if returncode is not None else -1
