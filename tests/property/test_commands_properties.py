from __future__ import annotations

from hypothesis import assume, given
from hypothesis import strategies as st

from gitmenu.commands import compose_shell_command

_PATH_CHARS = st.characters(min_codepoint=32, max_codepoint=126)


def _unescaped_quote_positions(value: str) -> list[int]:
    positions: list[int] = []
    backslashes = 0
    for index, char in enumerate(value):
        if char == '"' and backslashes % 2 == 0:
            positions.append(index)
        backslashes = backslashes + 1 if char == "\\" else 0
    return positions


@given(st.text(alphabet=_PATH_CHARS, min_size=1, max_size=40))
def test_cd_prefix_escapes_every_double_quote(path: str) -> None:
    assume(path.strip())

    result = compose_shell_command(path, "")

    assert result == 'cd "' + path.replace('"', '\\"') + '"'


@given(st.text(alphabet=st.sampled_from('ab/ "'), min_size=1, max_size=30))
def test_quoted_argument_is_not_terminated_early(path: str) -> None:
    assume(path.strip())

    result = compose_shell_command(path, "")

    assert _unescaped_quote_positions(result) == [3, len(result) - 1]


@given(
    st.text(alphabet=_PATH_CHARS, max_size=20),
    st.text(alphabet=_PATH_CHARS, max_size=20),
)
def test_separator_only_when_both_parts_present(path: str, command: str) -> None:
    result = compose_shell_command(path, command)

    has_prefix = bool(path.strip())
    has_command = bool(command)
    if has_prefix and has_command:
        assert result.startswith('cd "')
        assert result.endswith("&&" + command)
    elif has_prefix:
        assert result == 'cd "' + path.replace('"', '\\"') + '"'
    else:
        assert result == command
