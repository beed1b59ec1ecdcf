import subprocess
from dataclasses import dataclass
from typing import Mapping, Sequence

from settings import default_engine_command


REPORTER_ARGS = ("--reporter", "html")

# Engine exit codes meaning nothing was executed (argparse usage error, empty selection)
ENGINE_USAGE_ERROR = 2
ENGINE_NO_TESTS = 5
COULD_NOT_RUN_CODES = (ENGINE_USAGE_ERROR, ENGINE_NO_TESTS)


@dataclass(frozen=True)
class RunOptions:
    headed: bool = False
    debug: bool = False


class LaunchError(RuntimeError):
    """The engine process could not be started at all (as opposed to failing tests)."""


def build_command(
    projects: Sequence[str],
    extra_args: Sequence[str],
    options: RunOptions,
    engine_command: Sequence[str] | None = None,
) -> list[str]:
    cmd = list(engine_command or default_engine_command())
    for project in projects:
        cmd.extend(["--project", project])
    cmd.extend(REPORTER_ARGS)
    cmd.extend(extra_args)
    if options.headed:
        cmd.append("--headed")
    if options.debug:
        cmd.append("--debug")
    return cmd


def _exit_code(returncode: int) -> int:
    # Popen reports death-by-signal as -N; shells use 128 + N
    if returncode < 0:
        return 128 + (-returncode)
    return returncode


def launch(
    projects: Sequence[str],
    extra_args: Sequence[str],
    options: RunOptions,
    engine_command: Sequence[str] | None = None,
    env: Mapping[str, str] | None = None,
) -> int:
    cmd = build_command(projects, extra_args, options, engine_command)
    try:
        proc = subprocess.Popen(cmd, env=dict(env) if env is not None else None)
    except OSError as exc:
        raise LaunchError(f"could not start {cmd[0]!r}: {exc}") from exc

    while True:
        try:
            return _exit_code(proc.wait())
        except KeyboardInterrupt:
            # The child shares our process group and got the same SIGINT; keep waiting for it
            continue
