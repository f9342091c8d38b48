from shell import Shell
from standard_fixture import StandardTestFixture


class TestShell(StandardTestFixture):

    def setup_method(self, method):
        super().setup_method(method)
        self.shell = Shell(self.fs)

    def run_commands(self, capsys, *commands):
        for command in commands:
            self.shell.execute_command(command)
        return capsys.readouterr().out

    def test_create_write_cat(self, capsys):
        out = self.run_commands(capsys, "create notes.txt", "write 0 hello world", "cat 0", "close 0")
        assert "Created file 'notes.txt' with descriptor 0" in out
        assert "Wrote 11 bytes to descriptor 0" in out
        assert "hello world" in out
        assert "Closed descriptor 0" in out
        self.assert_equal(self.fs.get_number_of_blocks_allocated(), 1)

    def test_errors_are_reported(self, capsys):
        out = self.run_commands(capsys, "create a", "close 0", "create a", "cat 0", "close x")
        assert "already exists" in out
        assert "does not match" in out
        assert "Invalid file descriptor" in out

    def test_ls_stat_rm(self, capsys):
        self.make_file("a.txt", "abc")
        out = self.run_commands(capsys, "ls", "stat a.txt", "rm a.txt", "rm a.txt", "ls")
        assert "a.txt" in out
        assert "Direct Blocks:  [0]" in out
        assert "Removed 'a.txt'" in out
        assert "File 'a.txt' not found" in out
        assert "(no files)" in out

    def test_open_missing(self, capsys):
        out = self.run_commands(capsys, "open nope")
        assert "not found" in out

    def test_debug_and_check(self, capsys):
        self.populate(3)
        out = self.run_commands(capsys, "debug", "check")
        assert "3 used" in out
        assert "File system is consistent" in out

    def test_unknown_and_exit(self, capsys):
        out = self.run_commands(capsys, "frobnicate", "exit")
        assert "Unknown command: frobnicate" in out
        self.assert_equal(self.shell.running, False)
