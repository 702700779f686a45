import os

import pytest

from xztools import xb


def test_go_comment():
    assert xb.go_comment("\nA b\n\n  c  \n") == "// A b\n// c\n\n"


def test_go_copyright_is_comment():
    lines = xb.GO_COPYRIGHT.split("\n")
    assert xb.GO_COPYRIGHT.endswith("\n\n")
    assert all(line.startswith("// ") for line in lines[:-2])


def test_render_version_file():
    assert xb.render_version_file("v1.2") == (
        'package main\n\nconst version = "v1.2"\n'
    )


def test_render_constants_file_sorted():
    text = xb.render_constants_file("main", {"b": "x", "a": "y"})
    assert text == "package main\n\nconst a = `y`\nconst b = `x`\n"


def test_verify_path_errors(tmp_path):
    with pytest.raises(ValueError):
        xb.verify_path(str(tmp_path))
    with pytest.raises(FileNotFoundError):
        xb.verify_path(str(tmp_path / "missing"))


def test_gopath_find(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = tmp_path / "gp" / "src" / "pkg" / "file.txt"
    target.parent.mkdir(parents=True)
    target.write_text("content")
    gp = xb.GoPath([str(tmp_path / "gp")])
    assert gp.find("id:pkg/file.txt") == ("id", str(target))
    assert gp.find("pkg/file.txt") == ("gocat1", str(target))
    assert gp.find("pkg/file.txt")[0] == "gocat2"
    assert gp.find("x:-") == ("x", "-")
    with pytest.raises(FileNotFoundError):
        gp.find("pkg/none.txt")


def test_gopath_home_and_absolute(tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    f = tmp_path / "notes.txt"
    f.write_text("n")
    gp = xb.GoPath([])
    assert gp.find("h:~/notes.txt") == ("h", str(f))
    assert gp.find(f"a:{f}") == ("a", str(f))


def test_read_content(tmp_path):
    f = tmp_path / "a.txt"
    f.write_text("hello\nworld\n")
    assert xb.read_content(str(f)) == "hello\nworld\n"


def test_add_copyright_replaces_header(tmp_path, capsys):
    f = tmp_path / "a.go"
    f.write_text("// Copyright old\n// more\n\npackage x\n\nfunc f() {}\n")
    xb.add_copyright(str(f))
    text = f.read_text()
    assert text == xb.GO_COPYRIGHT + "package x\n\nfunc f() {}\n"
    assert "old" not in text
    assert not (tmp_path / "a.go.new").exists()
    assert f"adding copyright to {f}" in capsys.readouterr().err


def test_add_copyright_keeps_body(tmp_path):
    f = tmp_path / "b.go"
    f.write_text("package y\r\n\r\nvar v = 1")
    xb.add_copyright(str(f))
    assert f.read_text() == xb.GO_COPYRIGHT + "package y\n\nvar v = 1\n"


def test_walk_copyrights(tmp_path):
    (tmp_path / "sub").mkdir()
    (tmp_path / "a.go").write_text("package a\n")
    (tmp_path / "b.txt").write_text("plain\n")
    (tmp_path / "sub" / "c.go").write_text("package c\n")
    done = xb.walk_copyrights(str(tmp_path))
    assert sorted(done) == sorted(
        [str(tmp_path / "a.go"), str(tmp_path / "sub" / "c.go")]
    )
    assert (tmp_path / "b.txt").read_text() == "plain\n"
    assert (tmp_path / "sub" / "c.go").read_text().startswith(xb.GO_COPYRIGHT)


def test_cat_writes_constants(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GOPATH", str(tmp_path / "gp"))
    src = tmp_path / "gp" / "src" / "pkg" / "notes.txt"
    src.parent.mkdir(parents=True)
    src.write_text("hello")
    out = tmp_path / "out.go"
    rc = xb.cat(["-p", "consts", "-o", str(out), "pkg/notes.txt",
                 "named:pkg/notes.txt"])
    assert rc == 0
    assert out.read_text() == xb.render_constants_file(
        "consts", {"gocat1": "hello", "named": "hello"}
    )


def test_cat_missing_file_is_logged(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("GOPATH", str(tmp_path))
    out = tmp_path / "out.go"
    assert xb.cat(["-o", str(out), "missing.txt"]) == 0
    assert out.read_text() == "package main\n\n"
    assert "xb cat: file missing.txt not found" in capsys.readouterr().err


def test_cat_empty_package(tmp_path):
    with pytest.raises(SystemExit) as exc:
        xb.cat(["-p", "", "-o", str(tmp_path / "o.go")])
    assert exc.value.code == 1


def test_cat_help(capsys):
    assert xb.cat(["-h"]) == 0
    assert capsys.readouterr().out == xb.CAT_USAGE


def test_version_file_from_env(tmp_path, monkeypatch):
    monkeypatch.setenv("VERSION", " v9.9\n")
    out = tmp_path / "version.go"
    assert xb.version_file(["-o", str(out)]) == 0
    assert out.read_text() == xb.render_version_file("v9.9")


def test_version_file_empty_package(tmp_path):
    with pytest.raises(SystemExit) as exc:
        xb.version_file(["-p", "", "-o", str(tmp_path / "v.go")])
    assert exc.value.code == 1


def test_copyright_command(tmp_path, capsys):
    (tmp_path / "d").mkdir()
    go_file = tmp_path / "d" / "x.go"
    go_file.write_text("package x\n")
    plain = tmp_path / "file.txt"
    plain.write_text("t")
    rc = xb.copyright([str(tmp_path / "d"), str(plain),
                       str(tmp_path / "nope")])
    assert rc == 0
    assert go_file.read_text() == xb.GO_COPYRIGHT + "package x\n"
    err = capsys.readouterr().err
    assert f"{plain} is not a directory" in err


def test_main_version(capsys):
    assert xb.main(["version"]) == 0
    assert capsys.readouterr().out == "xb v0.5.11\n"


def test_main_help(capsys):
    assert xb.main(["help"]) == 0
    assert capsys.readouterr().out == xb.USAGE


def test_main_no_command(capsys):
    with pytest.raises(SystemExit) as exc:
        xb.main([])
    assert exc.value.code == 1
    assert "to show help, use xb help" in capsys.readouterr().err


def test_main_unknown_command(capsys):
    with pytest.raises(SystemExit) as exc:
        xb.main(["nope"])
    assert exc.value.code == 1
    assert 'command "nope" not supported' in capsys.readouterr().err


def test_main_dispatches_version_file(tmp_path, monkeypatch):
    monkeypatch.setenv("VERSION", "v1.0")
    out = tmp_path / "v.go"
    assert xb.main(["version-file", "-o", str(out)]) == 0
    assert os.path.exists(out)
    assert out.read_text() == xb.render_version_file("v1.0")