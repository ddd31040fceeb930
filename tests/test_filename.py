# tests/test_filename.py
from __future__ import annotations

import pytest

from fileseen.errors import ContractError, FileNameError
from fileseen.rules.filename import file_ext, file_stem, is_valid_file_name, split_file_name


@pytest.mark.parametrize(
    "name, stem, ext",
    [
        ("valid.filename", "valid", "filename"),
        ("i.am.a.valid.file.pdf", "i.am.a.valid.file", "pdf"),
        ("archive.tar.gz", "archive.tar", "gz"),
        ("a.b. ", "a.b", " "),
    ],
)
def test_valid_names_split_on_last_dot(name: str, stem: str, ext: str):
    assert is_valid_file_name(name)
    assert split_file_name(name) == (stem, ext)
    assert file_stem(name) == stem
    assert file_ext(name) == ext


@pytest.mark.parametrize("name", ["invalid", "invalid.", ".filename", "..", "", "   ", "a. .b", "a .b", "a. b", "a..b"])
def test_invalid_names_are_rejected(name: str):
    assert not is_valid_file_name(name)
    with pytest.raises(FileNameError):
        split_file_name(name)


def test_split_error_is_a_contract_error():
    """Splitting an unvalidated name is caller misuse, not a data problem."""
    with pytest.raises(ContractError):
        file_ext("nodot")


def test_stem_and_ext_rebuild_the_name():
    for name in ["x.y", "x.y.z", "report.2024.final.docx", "a.b. "]:
        stem, ext = split_file_name(name)
        assert f"{stem}.{ext}" == name


def test_tab_edges_are_not_spaces():
    """Only a literal space at the inner boundary is refused."""
    assert is_valid_file_name("a\t.b")
    assert is_valid_file_name("a.\tb")


def test_non_string_is_not_a_filename():
    assert not is_valid_file_name(None)  # type: ignore[arg-type]
