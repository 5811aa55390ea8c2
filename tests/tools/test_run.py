#!/usr/bin/env python3
"""
Unit тесты для run.py
"""

import pytest

from gjp_mcp.tools.run import ExecutionFailed, run


class TestRun:
    """Тесты для run"""

    def test_returns_standard_output(self):
        """Тест захвата stdout"""
        assert run(["sh", "-c", "echo hello"]) == "hello\n"

    def test_failure_raises_with_command_and_status(self):
        """Тест ошибки при ненулевом коде выхода"""
        with pytest.raises(ExecutionFailed) as exc_info:
            run(["sh", "-c", "echo out; echo err >&2; exit 3"])

        assert exc_info.value.status == 3
        assert exc_info.value.command == "sh -c 'echo out; echo err >&2; exit 3'"
        assert exc_info.value.stdout == "out\n"
        assert exc_info.value.stderr == "err\n"

    def test_failure_tolerated_when_requested(self):
        """Тест fail_on_error=False"""
        assert run(["sh", "-c", "echo partial; exit 1"], fail_on_error=False) == "partial\n"

    def test_echo_copies_output(self, capsys):
        """Тест эхо вывода команды"""
        output = run(["sh", "-c", "echo visible; echo warning >&2"], echo=True)

        captured = capsys.readouterr()
        assert output == "visible\n"
        assert captured.out == "visible\n"
        assert captured.err == "warning\n"

    def test_no_echo_by_default(self, capsys):
        """Тест отсутствия эхо по умолчанию"""
        run(["sh", "-c", "echo quiet"])

        assert capsys.readouterr().out == ""

    def test_arguments_are_not_interpreted_by_a_shell(self, tmp_path):
        """Тест отсутствия интерполяции аргументов"""
        output = run(["echo", "$HOME; touch injected"], cwd=tmp_path)

        assert output == "$HOME; touch injected\n"
        assert not (tmp_path / "injected").exists()
