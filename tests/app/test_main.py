import sys

import pytest

from grfmerge.app.main import GrfMergeApp, main
from grfmerge.common import CHECKSUM_PLACEHOLDER, END_MARKER
from grfmerge.util.console import Console


def test_version(monkeypatch):
    monkeypatch.setattr(Console, "init", staticmethod(lambda: None))
    with pytest.raises(SystemExit) as e:
        main(["-v"])
    assert e.value.code == 0


def test_missing_grd():
    with pytest.raises(SystemExit) as e:
        GrfMergeApp().run([])
    assert e.value.code == 1


def test_unknown_option():
    with pytest.raises(SystemExit) as e:
        GrfMergeApp().run(["--frobnicate"])
    assert e.value.code == 1


def test_unreadable_grd(tmp_path):
    assert GrfMergeApp().run([str(tmp_path / "missing.grd")]) == 2


def test_invalid_grd(tmp_path):
    bad = tmp_path / "bad.grd"
    bad.write_bytes(b"not a grd file")
    assert GrfMergeApp().run([str(bad)]) == 2


def test_merge(grf, tmp_path, capsys):
    records = grf.sample_records(3)
    original = grf.target(records)
    target = tmp_path / "trg1.grf"
    target.write_bytes(original)
    grd = tmp_path / "trg1.grd"
    grd.write_bytes(grf.patch_set("trg1", []))

    assert GrfMergeApp().run(["-y", str(grd), str(target)]) == 0
    assert target.read_bytes() == original + CHECKSUM_PLACEHOLDER
    assert (tmp_path / "trg1.bak").read_bytes() == original
    assert "merged" in capsys.readouterr().out


def test_list(grf, tmp_path, capsys):
    grd = tmp_path / "trg1.grd"
    entries = [(idx, grf.verbatim(b"x")) for idx in (5, 6, 7, 12, 20)]
    grd.write_bytes(grf.patch_set("trg1", entries))

    assert GrfMergeApp().run(["-l", str(grd)]) == 0
    assert "5-7, 12, 20" in capsys.readouterr().out
    assert sorted(p.name for p in tmp_path.iterdir()) == ["trg1.grd"]


def test_banner_before_usage_error(capsys):
    with pytest.raises(SystemExit):
        GrfMergeApp().run(["--frobnicate"])
    assert "GRFMerge version" in capsys.readouterr().out


@pytest.fixture
def frozen(monkeypatch, tmp_path):
    """Pretend to run as a frozen executable, returning the image path"""
    monkeypatch.setattr(Console, "init", staticmethod(lambda: None))
    image = tmp_path / "grfmerge.exe"
    monkeypatch.setattr(sys, "frozen", True, raising=False)
    monkeypatch.setattr(sys, "executable", str(image))
    return image


def test_self_extracting(grf, tmp_path, frozen):
    records = grf.sample_records(4)
    target = tmp_path / "trg1.grf"
    target.write_bytes(grf.target(records))
    new = grf.verbatim(b"from the exe")
    frozen.write_bytes(grf.sfx_image(1, 7, grf.patch_set("trg1", [(2, new)])))

    app = GrfMergeApp()
    assert app.is_sfx
    assert app.payload == (frozen, 128)

    # Every positional is a GRF file
    with pytest.raises(SystemExit) as e:
        main(["-y", str(target)])
    assert e.value.code == 0
    assert target.read_bytes() == b"".join([records[0], new] + records[2:]) + END_MARKER + CHECKSUM_PLACEHOLDER
    assert (tmp_path / "trg1.bak").exists()


def test_frozen_without_payload(grf, tmp_path, frozen):
    frozen.write_bytes(b"MZ" + b"\x00" * 200)
    grd = tmp_path / "trg1.grd"
    grd.write_bytes(grf.patch_set("trg1", [(1, grf.verbatim(b"x"))]))

    app = GrfMergeApp()
    assert not app.is_sfx
    assert app.run(["-l", str(grd)]) == 0


def test_truncated_self_image(frozen):
    frozen.write_bytes(b"MZ\x00\x00")
    with pytest.raises(SystemExit) as e:
        main([])
    assert e.value.code == 2
