from chainregistry import output


def test_write_stderr_formats(capsys):
    output.write_stderr("chain %s at index %d", "op", 3)
    captured = capsys.readouterr()
    assert captured.err == "chain op at index 3\n"
    assert captured.out == ""


def test_write_ok(capsys):
    output.write_ok("inflating chain config at index %d", 0)
    assert capsys.readouterr().err == "[   OK] inflating chain config at index 0\n"


def test_write_not_ok(capsys):
    output.write_not_ok("reading genesis")
    assert capsys.readouterr().err == "[NOTOK] reading genesis\n"


def test_write_warn(capsys):
    output.write_warn("writing %s", "state.json")
    assert capsys.readouterr().err == "[ WARN] writing state.json\n"


def test_prefixes_share_width(capsys):
    output.write_ok("x")
    output.write_not_ok("x")
    output.write_warn("x")
    lines = capsys.readouterr().err.splitlines()
    assert len(lines) == 3
    assert {len(line) for line in lines} == {len(lines[0])}