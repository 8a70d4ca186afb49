from xsmc.spl.paths import expand_path, output_filename, remove_extension


def test_expand_variable_prefix(monkeypatch):
    monkeypatch.setenv("SPLROOT", "/opt/os")
    assert expand_path("$SPLROOT/spl_progs/int.spl") == "/opt/os/spl_progs/int.spl"


def test_expand_whole_path(monkeypatch):
    monkeypatch.setenv("SPLFILE", "prog.spl")
    assert expand_path("$SPLFILE") == "prog.spl"


def test_unset_variable_left_alone(monkeypatch):
    monkeypatch.delenv("SPLNOTSET", raising=False)
    assert expand_path("$SPLNOTSET/a.spl") == "$SPLNOTSET/a.spl"


def test_absolute_path_unchanged():
    assert expand_path("/tmp/a.spl") == "/tmp/a.spl"


def test_remove_extension_keeps_dot():
    assert remove_extension("dir/prog.spl") == "dir/prog."
    assert remove_extension("noext") == ""


def test_output_filename():
    assert output_filename("dir/prog.spl") == "dir/prog.xsm"
    assert output_filename("a.b.spl").startswith("a.b.")