"""
Command line tests for ARITH
"""

import io
from arith import main, MAX_INPUT_LENGTH


def run_cli(argv, stdin_text=None, monkeypatch=None):
  """Run main and return its exit code (0 when it returns normally)"""
  if stdin_text is not None:
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin_text))
  try:
    main(argv)
  except SystemExit as e:
    return e.code
  return 0


class TestCli:
  """Test the driver end to end"""

  def test_command_option(self, capsys):
    assert run_cli(["-c", "x = 1 + 2 * 3; print x;"]) == 0
    assert capsys.readouterr().out == "7\n"

  def test_reads_line_from_stdin(self, capsys, monkeypatch):
    assert run_cli([], "print (2 + 3) * 4;\n", monkeypatch) == 0
    assert capsys.readouterr().out == "20\n"

  def test_reads_only_first_line(self, capsys, monkeypatch):
    assert run_cli([], "print 1;\nprint 2;\n", monkeypatch) == 0
    assert capsys.readouterr().out == "1\n"

  def test_input_is_truncated_to_buffer_size(self, capsys, monkeypatch):
    source = "print 1;" + " " * MAX_INPUT_LENGTH + "print 2;\n"
    assert run_cli([], source, monkeypatch) == 0
    assert capsys.readouterr().out == "1\n"

  def test_empty_stdin_is_an_error(self, capsys, monkeypatch):
    assert run_cli([], "", monkeypatch) == 1
    assert "Error reading input." in capsys.readouterr().err

  def test_end_of_input_error_points_at_typed_line(self, capsys, monkeypatch):
    assert run_cli([], "print 1\n", monkeypatch) == 1
    err = capsys.readouterr().err
    assert "Parse error at <input>:1:8:" in err
    assert "  print 1\n" + " " * 9 + "^" in err

  def test_blank_stdin_line_runs_nothing(self, capsys, monkeypatch):
    assert run_cli([], "\n", monkeypatch) == 0
    assert capsys.readouterr().out == ""

  def test_too_much_nesting_is_reported(self, capsys):
    assert run_cli(["-c", "print " + "(" * 400 + "1" + ")" * 400 + ";"]) == 1
    err = capsys.readouterr().err
    assert "Parse error at <input>:1:207:" in err
    assert "Too much nesting." in err

  def test_long_chain_runs(self, capsys):
    assert run_cli(["-c", "print " + "+".join(["1"] * 1500) + ";"]) == 0
    assert capsys.readouterr().out == "1500\n"

  def test_runtime_error_keeps_prior_output(self, capsys):
    assert run_cli(["-c", "print 1; print nope; print 3;"]) == 1
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert "Runtime error at <input>:1:16:" in captured.err
    assert "Undefined variable 'nope'." in captured.err

  def test_parse_error_prints_nothing(self, capsys):
    assert run_cli(["-c", "print 1; x = ;"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Expect expression." in captured.err
    assert "  print 1; x = ;" in captured.err

  def test_division_by_zero(self, capsys):
    assert run_cli(["-c", "print 1 / 0;"]) == 0
    assert capsys.readouterr().out == "inf\n"

  def test_max_variables_option(self, capsys):
    assert run_cli(["--max-variables", "1", "-c", "a = 1; b = 2;"]) == 1
    assert "Too many variables (limit 1)." in capsys.readouterr().err

  def test_invalid_max_variables(self, capsys):
    assert run_cli(["--max-variables", "0", "-c", "print 1;"]) == 2
    assert "--max-variables must be at least 1" in capsys.readouterr().err

  def test_debug_shows_environment_on_error(self, capsys):
    assert run_cli(["--debug", "-c", "x = 2; print y;"]) == 1
    captured = capsys.readouterr()
    assert "Executing: AssignStatement" in captured.out
    assert "Environment at error:" in captured.err
    assert "  x = 2.0" in captured.err

  def test_version(self, capsys):
    assert run_cli(["--version"]) == 0
    assert "ARITH v" in capsys.readouterr().out


class TestCliModes:
  """Test the token and syntax tree dumps"""

  def test_tokens(self, capsys):
    assert run_cli(["--tokens", "-c", "x = 1;"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "IDENTIFIER: 'x'",
        "EQUAL: '='",
        "NUMBER: '1'",
        "SEMICOLON: ';'",
        "EOF: ''",
    ]

  def test_tokens_stop_at_error(self, capsys):
    assert run_cli(["--tokens", "-c", "print ?"]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "PRINT: 'print'",
        "ERROR: 'Unexpected character.'",
    ]

  def test_parse(self, capsys):
    assert run_cli(["--parse", "-c", "print 1 + x; y = 2;"]) == 0
    assert capsys.readouterr().out == (
        "PrintStatement\n"
        "  Binary('+')\n"
        "    NumberLiteral(1.0)\n"
        "    Variable('x')\n"
        "AssignStatement('y')\n"
        "  NumberLiteral(2.0)\n"
    )

  def test_parse_does_not_evaluate(self, capsys):
    assert run_cli(["--parse", "-c", "print undefined_name;"]) == 0
    assert "Variable('undefined_name')" in capsys.readouterr().out

  def test_parse_error_in_parse_mode(self, capsys):
    assert run_cli(["--parse", "-c", "x;"]) == 1
    assert "Expect '=' after variable name." in capsys.readouterr().err

  def test_modes_are_exclusive(self, capsys):
    assert run_cli(["--tokens", "--parse", "-c", "print 1;"]) == 2
