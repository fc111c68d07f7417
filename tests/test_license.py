from dataclasses import dataclass

import pytest

from wasmpack.license import copy_from_crate, glob_license_files


@dataclass
class _Crate:
    license: str | None = None
    license_file: str | None = None

    def crate_license(self):
        return self.license

    def crate_license_file(self):
        return self.license_file


@pytest.fixture
def crate_dir(tmp_path):
    crate = tmp_path / "crate"
    crate.mkdir()
    (crate / "pkg").mkdir()
    return crate


def test_it_copies_a_license_default_path(crate_dir):
    (crate_dir / "LICENSE").write_text("WTFPL license text\n")
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license="WTFPL"), crate_dir, out_dir)

    assert (out_dir / "LICENSE").read_text() == (crate_dir / "LICENSE").read_text()


def test_it_copies_a_license_provided_path(crate_dir):
    (crate_dir / "LICENSE").write_text("some license\n")
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license="WTFPL"), str(crate_dir), str(out_dir))

    assert (out_dir / "LICENSE").read_text() == "some license\n"


def test_it_copies_all_licenses(crate_dir):
    (crate_dir / "LICENSE-WTFPL").write_text("wtfpl\n")
    (crate_dir / "LICENSE-MIT").write_text("mit\n")
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license="WTFPL OR MIT"), crate_dir, out_dir)

    assert (out_dir / "LICENSE-WTFPL").read_text() == (crate_dir / "LICENSE-WTFPL").read_text()
    assert (out_dir / "LICENSE-MIT").read_text() == (crate_dir / "LICENSE-MIT").read_text()


def test_it_copies_a_non_standard_license_provided_path(crate_dir):
    license_file = "NON-STANDARD-LICENSE"
    (crate_dir / license_file).write_text("custom terms\n")
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license_file=license_file), crate_dir, out_dir)

    assert (out_dir / license_file).read_text() == (crate_dir / license_file).read_text()


def test_glob_license_files_lists_sorted_names(crate_dir):
    (crate_dir / "LICENSE-WTFPL").write_text("a")
    (crate_dir / "LICENSE-MIT").write_text("b")
    (crate_dir / "README.md").write_text("c")

    assert glob_license_files(crate_dir) == ["LICENSE-MIT", "LICENSE-WTFPL"]


def test_license_key_without_files_reports(crate_dir, capsys):
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license="MIT"), crate_dir, out_dir)

    assert list(out_dir.iterdir()) == []
    assert "no LICENSE file(s) were found" in capsys.readouterr().err


def test_missing_license_file_reports(crate_dir, capsys):
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license_file="MISSING"), crate_dir, out_dir)

    assert list(out_dir.iterdir()) == []
    assert "origin crate has no LICENSE" in capsys.readouterr().err


def test_no_license_configured_copies_nothing(crate_dir):
    (crate_dir / "LICENSE").write_text("text")
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(), crate_dir, out_dir)

    assert list(out_dir.iterdir()) == []


def test_license_key_wins_over_license_file(crate_dir):
    (crate_dir / "LICENSE").write_text("main")
    (crate_dir / "OTHER-TERMS").write_text("other")
    out_dir = crate_dir / "pkg"

    copy_from_crate(_Crate(license="MIT", license_file="OTHER-TERMS"), crate_dir, out_dir)

    assert sorted(p.name for p in out_dir.iterdir()) == ["LICENSE"]


def test_missing_crate_directory_is_rejected(tmp_path):
    out_dir = tmp_path / "pkg"
    out_dir.mkdir()
    with pytest.raises(ValueError, match="crate directory should exist"):
        copy_from_crate(_Crate(license="MIT"), tmp_path / "absent", out_dir)


def test_missing_out_directory_is_rejected(crate_dir):
    with pytest.raises(ValueError, match="pkg directory should exist"):
        copy_from_crate(_Crate(license="MIT"), crate_dir, crate_dir / "absent")