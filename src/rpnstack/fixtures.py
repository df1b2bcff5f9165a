## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# Numbered fixture pairs: `input/input-NNN.txt` holds a program, `expected/expected-NNN.txt`
# holds the final stack, one canonical value per line from bottom to top.
#

import logging
from pathlib import Path
from dataclasses import dataclass

from .errors import RpnFixtureError
from .runtime import Runtime


log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())


@dataclass(frozen=True)
class FixtureResult:
    number: str
    expected: list[str]
    got: list[str]

    @property
    def passed(self) -> bool:
        return self.expected == self.got


def fixture_paths(number: str, root: Path | str = '.') -> tuple[Path, Path]:
    root = Path(root)
    return (root / 'input' / f'input-{number}.txt',
            root / 'expected' / f'expected-{number}.txt')


def read_fixture_file(path: Path) -> str:
    log.info('reading file: %s', path.resolve())
    try:
        return path.read_text(encoding='utf-8')
    except OSError as exc:
        raise RpnFixtureError(f"Could not read the file '{path}'", filename=str(path)) from exc


def expected_lines(text: str) -> list[str]:
    return [line for line in text.splitlines() if line]


def check_fixture(number: str, root: Path | str = '.', runtime: Runtime | None = None) -> FixtureResult:
    """Evaluate one numbered input and compare it with its expected stack."""
    runtime = runtime or Runtime()
    input_path, expected_path = fixture_paths(number, root)
    source = read_fixture_file(input_path)
    expected = expected_lines(read_fixture_file(expected_path))

    got = runtime.evaluate(source, filename=str(input_path))
    result = FixtureResult(number=number, expected=expected, got=got)
    log.info('fixture %s: %s', number, 'passed' if result.passed else 'failed')
    return result
