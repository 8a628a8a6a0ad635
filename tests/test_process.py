import io
import os
import signal

from microshell import Shell, VariableStore
from microshell.shell.process import COMMAND_NOT_FOUND, run_program, translate_wait_status


def setup_shell() -> Shell:
    return Shell(
        variables=VariableStore(dict(os.environ)),
        stdin=io.StringIO(),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
    )


def test_translate_wait_status():
    assert translate_wait_status(0) == 0
    assert translate_wait_status(3 << 8) == 3
    assert translate_wait_status(signal.SIGKILL) == 128 + signal.SIGKILL


def test_external_command_writes_to_real_stdout(capfd):
    shell = setup_shell()
    result = shell.exec("echo_external=1\n/bin/echo hello world")
    assert result.exit_code == 0
    assert capfd.readouterr().out == "hello world\n"


def test_program_exit_status_passes_through():
    shell = setup_shell()
    assert shell.exec("false").exit_code == 1
    assert shell.last_status == 1
    assert shell.exec("true").exit_code == 0


def test_command_not_found(capfd):
    shell = setup_shell()
    result = shell.exec("somecommand_not_on_path")
    assert result.exit_code == COMMAND_NOT_FOUND
    assert capfd.readouterr().err == "somecommand_not_on_path: command not found\n"


def test_command_not_found_goes_to_redirected_stderr(tmp_path, monkeypatch, capfd):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    result = shell.exec("IamNotACommand_abcdefxyz 2> err.txt")
    assert result.exit_code == 127
    assert capfd.readouterr().err == ""
    assert (tmp_path / "err.txt").read_text() == "IamNotACommand_abcdefxyz: command not found\n"


def test_killed_by_signal(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = tmp_path / "suicide.sh"
    script.write_text("#!/bin/sh\nkill -TERM $$\n")
    script.chmod(0o755)
    shell = setup_shell()
    assert shell.exec("./suicide.sh").exit_code == 128 + signal.SIGTERM


def test_exported_variable_reaches_child(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    shell.exec("greeting=hello\nlocal_only=hidden\nexport greeting\nenv > env.txt")
    lines = (tmp_path / "env.txt").read_text().splitlines()
    assert "greeting=hello" in lines
    assert not any(line.startswith("local_only=") for line in lines)


def test_input_redirection_feeds_stdin(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "in.txt").write_text("line one\n")
    shell = setup_shell()
    assert shell.exec("cat < in.txt > out.txt").exit_code == 0
    assert (tmp_path / "out.txt").read_text() == "line one\n"


def test_append_redirection(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "log.txt").write_text("first\n")
    shell = setup_shell()
    shell.exec("/bin/echo second >> log.txt")
    assert (tmp_path / "log.txt").read_text() == "first\nsecond\n"


def test_output_redirection_truncates(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "out.txt").write_text("old contents that are long\n")
    shell = setup_shell()
    shell.exec("/bin/echo new > out.txt")
    assert (tmp_path / "out.txt").read_text() == "new\n"


def test_program_stderr_redirection(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    result = shell.exec("ls non_existing_file 2> err.txt")
    assert result.exit_code != 0
    assert "non_existing_file" in (tmp_path / "err.txt").read_text()


def test_failed_input_redirection_skips_later_targets(tmp_path, monkeypatch, capfd):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    result = shell.exec("cat < missing.txt > out.txt 2> err.txt")
    assert result.exit_code == 1
    assert capfd.readouterr().err == "cannot access missing.txt: No such file or directory\n"
    assert not (tmp_path / "out.txt").exists()
    assert not (tmp_path / "err.txt").exists()


def test_input_redirection_attempted_last_reports_into_err_file(tmp_path, monkeypatch, capfd):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    result = shell.exec("cat > out.txt 2> err.txt < missing.txt")
    assert result.exit_code == 1
    assert capfd.readouterr().err == ""
    assert (tmp_path / "out.txt").read_text() == ""
    assert (tmp_path / "err.txt").read_text() == "cannot access missing.txt: No such file or directory\n"


def test_redirection_filename_from_variable(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    shell.exec("target=var_out.txt\n/bin/echo via variable > $target")
    assert (tmp_path / "var_out.txt").read_text() == "via variable\n"


def test_run_program_directly(tmp_path):
    out = tmp_path / "direct.txt"
    from microshell.shell_parser import Redirection, RedirectionKind

    result = run_program(
        ["/bin/echo", "direct"],
        [Redirection(RedirectionKind.OUTPUT, str(out))],
        dict(os.environ),
    )
    assert result.exit_code == 0
    assert out.read_text() == "direct\n"


def test_child_gets_default_sigpipe(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    script = tmp_path / "pipe.sh"
    script.write_text("#!/bin/sh\nkill -PIPE $$\nexit 0\n")
    script.chmod(0o755)
    previous = signal.signal(signal.SIGPIPE, signal.SIG_IGN)
    try:
        result = setup_shell().exec("./pipe.sh")
    finally:
        signal.signal(signal.SIGPIPE, previous)
    assert result.exit_code == 128 + signal.SIGPIPE


def test_child_redirection_to_nul_path(tmp_path, monkeypatch, capfd):
    monkeypatch.chdir(tmp_path)
    shell = setup_shell()
    result = shell.exec("/bin/echo hi > a\x00b")
    assert result.exit_code == 1
    captured = capfd.readouterr()
    assert captured.out == ""
    assert captured.err == "a\x00b: Invalid argument\n"
