import pytest

from wasmpack import readme


@pytest.fixture
def crate(tmp_path):
    crate_dir = tmp_path / "crate"
    crate_dir.mkdir()
    (crate_dir / "pkg").mkdir()
    return crate_dir


def test_copies_readme(crate):
    (crate / "README.md").write_text("# Hello\nworld\n")
    readme.copy_from_crate(crate, crate / "pkg")
    assert (crate / "pkg" / "README.md").read_text() == "# Hello\nworld\n"


def test_missing_readme_warns(crate, capsys):
    readme.copy_from_crate(crate, crate / "pkg")
    assert "origin crate has no README" in capsys.readouterr().err
    assert not (crate / "pkg" / "README.md").exists()


def test_missing_crate_dir_rejected(tmp_path):
    out = tmp_path / "pkg"
    out.mkdir()
    with pytest.raises(ValueError, match="crate directory should exist"):
        readme.copy_from_crate(tmp_path / "absent", out)


def test_missing_out_dir_rejected(crate):
    with pytest.raises(ValueError, match="pkg directory should exist"):
        readme.copy_from_crate(crate, crate / "nowhere")