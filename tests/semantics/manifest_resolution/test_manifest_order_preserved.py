"""
Semantic test: resolution order.

Invariant:
Targets come out in manifest enumeration order, then line order within
each manifest, one entry per non-blank line.
"""

from __future__ import annotations

from pathlib import Path

from symlink_input.format.manifest import ManifestResolver, parse_manifest


def test_targets_follow_manifest_then_line_order(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("data/a", "a\n")
    b = write_text("data/b", "bb\n")
    c = write_text("data/c", "ccc\n")

    # LocalFileSystem lists by name: m1 before m2
    write_manifest("links/m2", c)
    write_manifest("links/m1", b, a)

    targets = ManifestResolver(fs).resolve([str(tmp_path / "links")])

    assert [t.path for t in targets] == [b, a, c]
    assert [t.length for t in targets] == [3, 2, 4]
    assert targets[0].manifest_path == str(tmp_path / "links" / "m1")
    assert targets[2].manifest_path == str(tmp_path / "links" / "m2")


def test_nested_manifest_directories_are_descended(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("data/a", "a\n")
    b = write_text("data/b", "b\n")
    write_manifest("links/2024/01/m", a)
    write_manifest("links/2024/02/m", b)

    targets = ManifestResolver(fs).resolve([str(tmp_path / "links")])

    assert [t.path for t in targets] == [a, b]


def test_hidden_entries_are_skipped(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("data/a", "a\n")
    write_manifest("links/m", a)
    write_manifest("links/_SUCCESS")
    write_text("links/.m.crc", "not a manifest\n")

    targets = ManifestResolver(fs).resolve([str(tmp_path / "links")])

    assert [t.path for t in targets] == [a]


def test_root_that_is_a_file_is_a_manifest(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("data/a", "a\n")
    manifest = write_manifest("single_manifest", a, a)

    targets = ManifestResolver(fs).resolve([manifest])

    assert [t.path for t in targets] == [a, a]


def test_multiple_roots_keep_root_order(tmp_path: Path, fs, write_text, write_manifest) -> None:
    a = write_text("data/a", "a\n")
    b = write_text("data/b", "b\n")
    write_manifest("z_links/m", a)
    write_manifest("a_links/m", b)

    targets = ManifestResolver(fs).resolve(
        [str(tmp_path / "z_links"), str(tmp_path / "a_links")]
    )

    assert [t.path for t in targets] == [a, b]


def test_parallel_resolution_keeps_order(tmp_path: Path, fs, write_text, write_manifest) -> None:
    expected = []
    for index in range(8):
        target = write_text(f"data/f{index}", f"line{index}\n")
        write_manifest(f"links/m{index}", target, target)
        expected.extend([target, target])

    targets = ManifestResolver(fs, threads=4).resolve([str(tmp_path / "links")])

    assert [t.path for t in targets] == expected


def test_parse_manifest_ignores_empty_lines_and_crlf() -> None:
    raw = b"/data/a\r\n\n/data/b\n\n/data/c"

    assert parse_manifest(raw) == ["/data/a", "/data/b", "/data/c"]
    assert parse_manifest(b"") == []


def test_parse_manifest_keeps_lines_verbatim() -> None:
    raw = b" /data/lead\n/data/trail \n\t\n/data/mid dle\r\n"

    assert parse_manifest(raw) == [" /data/lead", "/data/trail ", "\t", "/data/mid dle"]


def test_whitespace_in_target_name_selects_that_file(tmp_path: Path, fs, write_text, write_manifest) -> None:
    write_text("data/a", "other\n")
    spaced = write_text("data/a ", "spaced\n")
    write_manifest("links/m", spaced)

    targets = ManifestResolver(fs).resolve([str(tmp_path / "links")])

    assert [t.path for t in targets] == [spaced]
    assert [t.length for t in targets] == [7]
