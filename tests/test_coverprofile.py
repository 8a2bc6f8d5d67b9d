# -*- coding:utf-8 -*-

#  ************************** Copyrights and license ***************************
#
# This file is part of covrerun 1.1, a merge tool for Go coverage profiles.
#
# _____________________________________________________________________________
#
# Copyright (c) 2025-2026 the covrerun authors
#
# This software is distributed under the 3-clause BSD License.
# For more information, see the README.rst file.
#
# ****************************************************************************

# pylint: disable=missing-function-docstring,missing-module-docstring
import io
from pathlib import Path
import textwrap

import pytest

from covrerun.data_model.container import ProfileSet
from covrerun.data_model.profile import (
    BlockPosition,
    CoverageMode,
    FileProfile,
    ProfileBlock,
)
from covrerun.exceptions import ProfileParseError, SanityCheckError
from covrerun.formats.coverprofile import (
    format_profile,
    parse_profile,
    read_profile,
    write_profile,
)


def parse_text(text: str) -> ProfileSet:
    return parse_profile(io.StringIO(textwrap.dedent(text)), "cover.out")


def test_parse_simple_profile() -> None:
    profile = parse_text(
        """\
        mode: set
        example.com/pkg/a.go:3.14,5.2 2 1
        example.com/pkg/a.go:7.2,9.16 1 0
        """
    )
    assert profile.mode is CoverageMode.SET
    assert profile.filenames() == ["example.com/pkg/a.go"]
    assert profile["example.com/pkg/a.go"].blocks == [
        ProfileBlock(BlockPosition(3, 14, 5, 2), num_stmt=2, count=1),
        ProfileBlock(BlockPosition(7, 2, 9, 16), num_stmt=1, count=0),
    ]


@pytest.mark.parametrize("mode", ["set", "count", "atomic"])
def test_parse_modes(mode: str) -> None:
    profile = parse_text(f"mode: {mode}\npkg/a.go:1.1,2.2 1 1\n")
    assert str(profile.mode) == mode


def test_parse_sorts_files_and_blocks() -> None:
    profile = parse_text(
        """\
        mode: count
        pkg/b.go:10.1,12.2 1 1
        pkg/a.go:20.1,21.2 1 2
        pkg/b.go:1.1,3.2 1 3
        pkg/a.go:4.8,5.2 1 4
        pkg/a.go:4.2,4.7 1 5
        """
    )
    assert profile.filenames() == ["pkg/a.go", "pkg/b.go"]
    assert [b.sort_key for b in profile["pkg/a.go"]] == [(4, 2), (4, 8), (20, 1)]
    assert [b.count for b in profile["pkg/b.go"]] == [3, 1]


def test_parse_filename_with_colon() -> None:
    profile = parse_text("mode: set\nC:/src/pkg/a.go:1.1,2.2 1 1\n")
    assert profile.filenames() == ["C:/src/pkg/a.go"]
    assert profile["C:/src/pkg/a.go"].blocks[0].position == BlockPosition(1, 1, 2, 2)


def test_parse_duplicate_blocks_count_mode_are_summed() -> None:
    profile = parse_text(
        """\
        mode: count
        pkg/a.go:1.1,2.2 1 3
        pkg/a.go:5.1,6.2 1 1
        pkg/a.go:1.1,2.2 1 4
        """
    )
    assert profile["pkg/a.go"].blocks == [
        ProfileBlock(BlockPosition(1, 1, 2, 2), num_stmt=1, count=7),
        ProfileBlock(BlockPosition(5, 1, 6, 2), num_stmt=1, count=1),
    ]


def test_parse_duplicate_blocks_set_mode_are_ored() -> None:
    profile = parse_text(
        """\
        mode: set
        pkg/a.go:1.1,2.2 1 1
        pkg/a.go:1.1,2.2 1 1
        pkg/a.go:1.1,2.2 1 0
        """
    )
    assert [b.count for b in profile["pkg/a.go"]] == [1]


def test_parse_duplicate_blocks_with_other_end_in_between() -> None:
    profile = parse_text(
        """\
        mode: count
        pkg/a.go:1.1,2.2 1 1
        pkg/a.go:1.1,3.2 2 1
        pkg/a.go:1.1,2.2 1 1
        """
    )
    assert {b.position: b.count for b in profile["pkg/a.go"]} == {
        BlockPosition(1, 1, 2, 2): 2,
        BlockPosition(1, 1, 3, 2): 1,
    }


def test_parse_duplicate_blocks_inconsistent_statements() -> None:
    with pytest.raises(ProfileParseError, match="inconsistent number of statements"):
        parse_text(
            """\
            mode: set
            pkg/a.go:1.1,2.2 1 1
            pkg/a.go:1.1,2.2 2 1
            """
        )


def test_parse_empty_input() -> None:
    profile = parse_text("")
    assert profile.is_empty()
    assert profile.mode is None


def test_parse_mode_line_only() -> None:
    profile = parse_text("mode: atomic\n")
    assert profile.is_empty()
    assert profile.mode is CoverageMode.ATOMIC


def test_parse_skips_blank_lines() -> None:
    profile = parse_text("mode: set\n\npkg/a.go:1.1,2.2 1 1\n\n")
    assert len(profile["pkg/a.go"]) == 1


def test_parse_windows_line_endings() -> None:
    profile = parse_profile(["mode: set\r\n", "pkg/a.go:1.1,2.2 1 1\r\n"])
    assert profile.mode is CoverageMode.SET
    assert profile["pkg/a.go"].blocks[0].count == 1


@pytest.mark.parametrize(
    "first_line,message",
    [
        ("pkg/a.go:1.1,2.2 1 1", "bad mode line"),
        ("mode: ", "bad mode line"),
        ("mode:set", "bad mode line"),
        ("mode: sum", "unknown coverage mode 'sum'"),
    ],
)
def test_parse_bad_mode_line(first_line: str, message: str) -> None:
    with pytest.raises(ProfileParseError, match=message) as exc_info:
        parse_text(first_line + "\n")
    assert exc_info.value.filename == "cover.out"
    assert exc_info.value.lineno == 1
    assert str(exc_info.value).startswith("cover.out: 1: ")


@pytest.mark.parametrize(
    "line",
    [
        "pkg/a.go:1.1,2.2 1",
        "pkg/a.go:1.1,2.2 1 1 1",
        "pkg/a.go 1.1,2.2 1 1",
        "pkg/a.go:1,2 1 1",
        "pkg/a.go:1.1,2.2 1 -1",
        "pkg/a.go:1.1,2.2 one 1",
        ":1.1,2.2 1 1",
        "mode: set",
    ],
)
def test_parse_bad_block_line(line: str) -> None:
    with pytest.raises(ProfileParseError, match="does not match the expected format") as exc_info:
        parse_text(f"mode: set\npkg/a.go:1.1,2.2 1 1\n{line}\n")
    assert exc_info.value.lineno == 3


def test_read_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_profile(str(tmp_path / "missing.out"))


def test_read_profile(tmp_path: Path) -> None:
    path = tmp_path / "cover.out"
    path.write_text("mode: count\npkg/a.go:1.1,2.2 1 9\n", encoding="utf-8")
    profile = read_profile(str(path))
    assert profile.mode is CoverageMode.COUNT
    assert profile["pkg/a.go"].blocks[0].count == 9


def test_format_profile() -> None:
    profile = ProfileSet(
        CoverageMode.COUNT,
        [
            FileProfile(
                "pkg/a.go",
                [
                    ProfileBlock(BlockPosition(1, 1, 5, 2), num_stmt=3, count=5),
                    ProfileBlock(BlockPosition(6, 1, 10, 2), num_stmt=2, count=0),
                ],
            ),
            FileProfile(
                "pkg/b.go",
                [ProfileBlock(BlockPosition(1, 13, 3, 2), num_stmt=1, count=12)],
            ),
        ],
    )
    assert "".join(format_profile(profile)) == textwrap.dedent(
        """\
        mode: count
        pkg/a.go:1.1,5.2 3 5
        pkg/a.go:6.1,10.2 2 0
        pkg/b.go:1.13,3.2 1 12
        """
    )


def test_write_profile_replaces_content(tmp_path: Path) -> None:
    path = tmp_path / "cover.out"
    path.write_text("old content that is much longer than the new one\n" * 10)
    profile = parse_text("mode: set\npkg/a.go:1.1,2.2 1 1\n")
    write_profile(profile, str(path))
    assert path.read_text(encoding="utf-8") == "mode: set\npkg/a.go:1.1,2.2 1 1\n"


def test_write_empty_profile_does_nothing(tmp_path: Path) -> None:
    path = tmp_path / "cover.out"
    write_profile(parse_text("mode: set\n"), str(path))
    assert not path.exists()


def test_write_to_missing_directory(tmp_path: Path) -> None:
    profile = parse_text("mode: set\npkg/a.go:1.1,2.2 1 1\n")
    with pytest.raises(OSError):
        write_profile(profile, str(tmp_path / "missing" / "cover.out"))


def test_write_to_stdout(capsys: pytest.CaptureFixture[str]) -> None:
    profile = parse_text("mode: atomic\npkg/a.go:1.1,2.2 1 3\n")
    write_profile(profile, "-")
    assert capsys.readouterr().out == "mode: atomic\npkg/a.go:1.1,2.2 1 3\n"


def test_written_profile_is_normalized(tmp_path: Path) -> None:
    path = tmp_path / "cover.out"
    path.write_text(
        "mode: count\npkg/b.go:1.1,2.2 1 1\npkg/a.go:3.1,4.2 1 1\npkg/a.go:1.1,2.2 1 1\n",
        encoding="utf-8",
    )
    write_profile(read_profile(str(path)), str(path))
    assert path.read_text(encoding="utf-8") == (
        "mode: count\npkg/a.go:1.1,2.2 1 1\npkg/a.go:3.1,4.2 1 1\npkg/b.go:1.1,2.2 1 1\n"
    )


def test_read_profile_not_utf8(tmp_path: Path) -> None:
    path = tmp_path / "cover.out"
    path.write_bytes(b"mode: set\npkg/a.go:1.1,2.2 1 1\r\npkg/\xff.go:1.1,2.2 1 1\n")
    with pytest.raises(ProfileParseError) as exc_info:
        read_profile(str(path))
    assert exc_info.value.filename == str(path)
    assert exc_info.value.lineno == 3


def test_read_profile_with_crlf(tmp_path: Path) -> None:
    path = tmp_path / "cover.out"
    path.write_bytes(b"mode: set\r\npkg/a.go:1.1,2.2 1 1\r\n")
    profile = read_profile(str(path))
    assert profile.mode is CoverageMode.SET
    assert profile["pkg/a.go"].blocks == [ProfileBlock(BlockPosition(1, 1, 2, 2), 1, 1)]


def test_format_profile_without_mode() -> None:
    profile = ProfileSet(None)
    profile.files.append(
        FileProfile("pkg/a.go", [ProfileBlock(BlockPosition(1, 1, 2, 2), 1, 1)])
    )
    with pytest.raises(SanityCheckError, match="Files without a mode."):
        list(format_profile(profile))
