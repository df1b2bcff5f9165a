## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# rpnstack — A reverse-Polish stack calculator with a small dynamic type system.
#

import sys
import time
import logging
import traceback
from pathlib import Path
from dataclasses import dataclass

import click

from .types import nil
from .errors import RpnError, RpnUnsupportedToken, RpnStackUnderflow, RpnTypeMismatch, RpnFixtureError
from .lexer import format_source_context
from .literals import parse_literal
from .fixtures import check_fixture
from .formatting import write_without_ansi, format_value, show_stack, stack_to_list

from . import api


log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class RunnerConfig:
    verbose: int
    ignore: bool
    stats: bool
    plain: bool


@dataclass
class ExecutionItem:
    source: str
    filename: str


_BANNERS = (
    (RpnUnsupportedToken, "UNSUPPORTED TOKEN."),
    (RpnStackUnderflow, "STACK UNDERFLOW."),
    (RpnTypeMismatch, "TYPE MISMATCH."),
    (RpnFixtureError, "FIXTURE ERROR."),
)


_DEBUG_ESCAPES = {'\\': '\\\\', '"': '\\"', '\n': '\\n', '\r': '\\r', '\t': '\\t', '\0': '\\0'}

def _debug_str(text: str) -> str:
    # Non-printable characters become `\u{hex}` escapes; combining marks are left as-is.
    return '"' + ''.join(_DEBUG_ESCAPES.get(ch) or (ch if ch.isprintable() else f'\\u{{{ord(ch):x}}}') for ch in text) + '"'

def _debug_list(values: list[str]) -> str:
    return '[' + ', '.join(_debug_str(v) for v in values) + ']'


class RpnRunner:
    def __init__(self, config: RunnerConfig):
        self.verbose = config.verbose
        self.ignore = config.ignore
        self.stats_enabled = config.stats
        self.plain = config.plain

        if self.plain:
            writer = write_without_ansi(sys.stdout.write)
            sys.stdout.write, sys.stderr.write = writer, writer

        self.runtime = api._RUNTIME
        self.total_stats = {'steps': 0, 'start': time.time()} if self.stats_enabled else None
        self.failure = False
        self.executed_items = 0

    def _maybe_fatal_error(self, is_repl: bool = False) -> None:
        self.failure = self.failure or not is_repl
        if not is_repl and not self.ignore: sys.exit(1)

    def _handle_exception(self, exc: Exception, filename: str, source: str | None, is_repl: bool = False) -> None:
        if isinstance(exc, RpnError):
            banner = next((b for cls, b in _BANNERS if isinstance(exc, cls)), "RUNTIME ERROR.")
            token = getattr(exc, 'rpn_token', None)
            where = f"Token \033[1;97m`{token}`\033[0m from `\033[97m{filename}\033[0m`" if token else f"`\033[97m{filename}\033[0m`"
            print(f'\033[30;43m {banner} \033[0m {where} failed. (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            print(f'\033[90m  {exc}\033[0m', file=sys.stderr)
            if token and (meta := getattr(exc, 'rpn_meta', None)):
                print(format_source_context(meta, token, source=source), end='', file=sys.stderr)
            if (stack := getattr(exc, 'rpn_stack', None)) is not None:
                print(f'\033[1;33m  Stack content is\033[0;33m\n    ', end='', file=sys.stderr)
                show_stack(stack, width=None, file=sys.stderr, abbreviate=True)
                print('\033[0m', file=sys.stderr)
        else:
            print(f'\033[30;43m RUNTIME ERROR. \033[0m Evaluating `\033[97m{filename}\033[0m` caused an error! (Exception: \033[33m{type(exc).__name__}\033[0m)', file=sys.stderr)
            traceback.print_exc()
        self._maybe_fatal_error(is_repl)

    def _print_stack(self, stack) -> None:
        for value in reversed(stack_to_list(stack)):
            print(format_value(value))

    def execute_items(self, items: list[ExecutionItem]) -> None:
        for item in items:
            self._execute_script(item.source, item.filename, print_result=True)

    def _execute_script(self, source: str, filename: str, print_result: bool = False) -> None:
        try:
            stack = self.runtime.run(source, filename=filename, verbosity=self.verbose, stats=self.total_stats)
            if print_result:
                self._print_stack(stack)
        except Exception as exc:
            self._handle_exception(exc, filename, source)
        else:
            self.executed_items += 1

    def check_fixtures(self, numbers: list[str], root: Path) -> None:
        for number in numbers:
            try:
                result = check_fixture(number, root, runtime=self.runtime)
            except Exception as exc:
                self._handle_exception(exc, f'input-{number}.txt', None)
                continue
            print(f"Expected: {_debug_list(result.expected)}\nGot: {_debug_list(result.got)}")
            print(f"Result: {format_value(result.passed)}")
            self.executed_items += 1
            if not result.passed:
                self.failure = True

    def repl(self) -> None:
        if sys.platform != "win32": import readline

        print('rpnstack - Reverse-Polish stack calculator REPL; type Ctrl+C to exit.')
        stack = nil

        while True:
            try:
                line = input("\033[36m<<< \033[0m")
                if len(line.strip()) == 0: continue
                if line.strip() in ('quit', 'exit'): break
                if line.strip() == 'clear':
                    stack = nil; continue

                try:
                    stack = self.runtime.run(line, stack=stack, filename='<REPL>', verbosity=self.verbose)
                    print("\033[90m>>>\033[0m ", end='')
                    show_stack(stack, width=None)
                except Exception as exc:
                    self._handle_exception(exc, '<REPL>', line, is_repl=True)

            except (KeyboardInterrupt, EOFError):
                print(""); break

    def finalize(self) -> int:
        if self.total_stats and self.executed_items > 0:
            elapsed_time = time.time() - self.total_stats['start']
            print(f"\n\033[97m\033[48;5;30m STATISTICS. \033[0m")
            print(f"step\t\033[97m{self.total_stats['steps']:,}\033[0m")
            print(f"time\t\033[97m{elapsed_time:.3f}s\033[0m")
        return 1 if self.failure else 0


def _inline_command_source(index: int, command: str) -> ExecutionItem:
    return ExecutionItem(command.rstrip() + '\n', f'<INPUT_{index}>')


def _parse_dev_tokens(tokens: list[str]) -> list[tuple[str, Path | str | None]]:
    actions: list[tuple[str, Path | str | None]] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token == '--':
            index += 1
            continue
        if token in ('-c', '--command'):
            index += 1
            if index >= len(tokens):
                raise click.BadParameter("Missing inline code after -c/--command option.")
            actions.append(('command', tokens[index]))
            index += 1
            continue
        if token.startswith('-c=') or token.startswith('--command='):
            _, value = token.split('=', 1)
            if value == '':
                raise click.BadParameter("Empty code supplied to command option.")
            actions.append(('command', value))
            index += 1
            continue
        if token in ('-r', '--repl'):
            actions.append(('repl', None))
            index += 1
            continue
        if _is_option_like(token):
            raise click.BadParameter(f"Unknown option `{token}`.")
        if (path := Path(token)).is_file():
            actions.append(('file', path))
            index += 1
            continue
        # Consecutive bare words form one program, so `1 2 +` runs on a single stack.
        words = []
        while index < len(tokens) and _is_bare_code(tokens[index]):
            words.append(tokens[index])
            index += 1
        actions.append(('command', ' '.join(words)))
    return actions


def _is_option_like(token: str) -> bool:
    # Negative numbers and keywords such as `-` or `-inf` are code, not options.
    return token.startswith('-') and token.lstrip('-')[:1].isalpha() and parse_literal(token) is None


def _is_bare_code(token: str) -> bool:
    return token != '--' and not token.startswith('-c=') and not token.startswith('--command=') \
        and token not in ('-c', '--command', '-r', '--repl') and not _is_option_like(token) and not Path(token).is_file()


def _is_fixture_request(tokens: list[str]) -> bool:
    rest = [t for i, t in enumerate(tokens) if not t.startswith('--root') and (i == 0 or tokens[i-1] != '--root')]
    return bool(rest) and all(t.isdigit() for t in rest)


@click.group(invoke_without_command=True, context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.option('--verbose', '-v', default=0, count=True, help='Trace interpreter steps and log file activity.')
@click.option('--ignore', '-i', is_flag=True, help='Ignore errors and continue executing.')
@click.option('--stats', is_flag=True, help='Display execution statistics (e.g., number of steps).')
@click.option('--plain', '-p', is_flag=True, help='Strip ANSI color codes and redirect stderr to stdout.')
@click.pass_context
def cli(ctx: click.Context, verbose: int, ignore: bool, stats: bool, plain: bool) -> None:
    ctx.ensure_object(dict)
    ctx.obj['config'] = RunnerConfig(verbose=verbose, ignore=ignore, stats=stats, plain=plain)

    if verbose > 0:
        logging.basicConfig(format='%(levelname)s %(name)s: %(message)s', level=logging.INFO, stream=sys.stderr)


@cli.command('run-file')
@click.argument('script', type=click.File('r', encoding='utf-8'))
@click.pass_context
def run_file(ctx: click.Context, script) -> None:
    runner = RpnRunner(ctx.obj['config'])
    log.info('reading file: %s', script.name)
    runner.execute_items((ExecutionItem(script.read(), script.name or '<STDIN>'),))
    ctx.exit(runner.finalize())


@cli.command('run-dev', context_settings={'ignore_unknown_options': True, 'allow_extra_args': True})
@click.argument('tokens', nargs=-1)
@click.pass_context
def run_dev(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    runner = RpnRunner(ctx.obj['config'])
    actions = _parse_dev_tokens(list(tokens))

    command_index = 1
    for action, payload in actions:
        if action == 'file':
            log.info('reading file: %s', payload.resolve())
            runner.execute_items((ExecutionItem(payload.read_text(encoding='utf-8'), str(payload)),))
        elif action == 'command':
            item = _inline_command_source(command_index, payload)
            runner._execute_script(item.source, item.filename, print_result=True)
            command_index += 1
        elif action == 'repl':
            runner.repl()
        else:
            raise NotImplementedError

    if not actions:
        runner.repl()
    ctx.exit(runner.finalize())


@cli.command('run-repl')
@click.pass_context
def run_repl(ctx: click.Context) -> None:
    runner = RpnRunner(ctx.obj['config'])
    runner.repl()
    ctx.exit(runner.finalize())


@cli.command('check')
@click.argument('numbers', nargs=-1, required=True)
@click.option('--root', type=click.Path(file_okay=False, path_type=Path), envvar='RPNSTACK_FIXTURES',
              default='.', show_default=True, help='Directory holding the input/ and expected/ folders.')
@click.pass_context
def check(ctx: click.Context, numbers: tuple[str, ...], root: Path) -> None:
    runner = RpnRunner(ctx.obj['config'])
    runner.check_fixtures(list(numbers), root)
    ctx.exit(runner.finalize())


_COMMANDS = ('run-file', 'run-dev', 'run-repl', 'check')
_GLOBAL_FLAGS = ('--ignore', '--stats', '--plain', '-i', '-p')


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv[1:] if argv is None else argv)
    g = [t for t in a if t in _GLOBAL_FLAGS or t == '--verbose' or (t.startswith('-v') and set(t[1:]) == {'v'})]
    r = [t for t in a if t not in g]

    if len(r) == 0:
        # No args: if stdin has data, treat as file '-', else REPL
        cmd, tail = ('run-file', ['-']) if not sys.stdin.isatty() else ('run-repl', [])
    elif r[0] in _COMMANDS:
        cmd, tail = r[0], r[1:]
    elif r == ['-']:
        cmd, tail = 'run-file', ['-']
    elif _is_fixture_request(r):
        cmd, tail = 'check', r
    elif len(r) == 1 and Path(r[0]).is_file():
        cmd, tail = 'run-file', r
    else:
        cmd, tail = 'run-dev', r

    cli.main(args=[*g, cmd, *tail], prog_name='rpnstack')


if __name__ == "__main__":
    main()
