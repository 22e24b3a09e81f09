"""Artisan console tests: discovery, dispatch, argument parsing and exit codes."""

import json
import logging
import sys

import pytest

from larasanic_api.console import Artisan, Command
from larasanic_api.console.artisan import main
from larasanic_api.support import Config


class FailingCommand(Command):
    name = "demo:fail"
    description = "Always fails"

    async def handle(self, *args, **kwargs):
        raise RuntimeError("nothing to do")


class EchoCommand(Command):
    name = "demo:echo"
    description = "Remembers its arguments"

    def __init__(self):
        super().__init__()
        self.received = None

    async def handle(self, *args, **kwargs):
        self.received = (args, kwargs)


class TestDiscovery:
    """Built-in and application commands."""

    def test_builtin_generators_registered(self, app_base):
        artisan = Artisan()
        assert {"api:generate-policy", "api:generate-repository"} <= set(artisan.commands)

    def test_application_commands_discovered(self, app_base):
        console = app_base / "app" / "console"
        console.mkdir(parents=True)
        (console / "hello_command.py").write_text(
            "from larasanic_api.console import Command\n"
            "\n"
            "\n"
            "class HelloCommand(Command):\n"
            "    name = 'app:hello'\n"
            "\n"
            "    async def handle(self, *args, **kwargs):\n"
            "        return 0\n"
        )
        (console / "broken.py").write_text("import not_a_real_module\n")

        artisan = Artisan()
        assert "app:hello" in artisan.commands
        assert artisan.command_files["app:hello"].endswith("hello_command.py")


class TestRun:
    """Dispatch and exit codes."""

    async def test_generate_policy(self, app_base, capsys):
        code = await Artisan().run(["artisan", "api:generate-policy", "Comment", "--path=out"])
        assert code == 0
        assert (app_base / "out" / "comment_policy.py").exists()

    async def test_generate_conflict_exits_non_zero(self, app_base, capsys):
        await Artisan().run(["artisan", "api:generate-repository", "Comment"])
        code = await Artisan().run(["artisan", "api:generate-repository", "Comment"])
        assert code == 1
        assert "already exists" in capsys.readouterr().out

    async def test_force_flag(self, app_base):
        await Artisan().run(["artisan", "api:generate-repository", "Comment"])
        assert await Artisan().run(["artisan", "api:generate-repository", "Comment", "--force"]) == 0

    async def test_unknown_command(self, capsys):
        code = await Artisan(discover=False).run(["artisan", "api:nope"])
        assert code == 1
        assert "Unknown command: api:nope" in capsys.readouterr().out

    async def test_help(self, capsys):
        artisan = Artisan(discover=False)
        artisan.register(EchoCommand())
        assert await artisan.run(["artisan"]) == 0
        out = capsys.readouterr().out
        assert "DEMO:" in out
        assert "Remembers its arguments" in out

    async def test_help_for_command(self, capsys):
        artisan = Artisan(discover=False)
        artisan.register(EchoCommand())
        assert await artisan.run(["artisan", "help", "demo:echo"]) == 0
        assert "Signature: demo:echo" in capsys.readouterr().out

    async def test_failure_reported(self, capsys):
        artisan = Artisan(discover=False)
        artisan.register(FailingCommand())
        assert await artisan.run(["artisan", "demo:fail"]) == 1
        assert "Error executing command: nothing to do" in capsys.readouterr().out

    async def test_none_exit_code_is_success(self):
        artisan = Artisan(discover=False)
        command = artisan.register(EchoCommand())
        assert await artisan.run(["artisan", "demo:echo", "Post", "--path=x", "--force", "--limit=3", "-v"]) == 0
        assert command.received == (("Post",), {"path": "x", "force": True, "limit": 3, "v": True})


class TestParseArgs:
    """Option parsing."""

    def test_bool_values(self):
        _, kwargs = Artisan(discover=False)._parse_args(["--force=false", "--dry=TRUE"])
        assert kwargs == {"force": False, "dry": True}


class TestMain:
    """Entry point wiring."""

    @pytest.fixture
    def package_logger(self, monkeypatch):
        """Undo the file logging main() sets up."""
        monkeypatch.setattr(sys, "path", list(sys.path))
        monkeypatch.delenv("APP_ENV", raising=False)
        logger = logging.getLogger("larasanic_api")
        yield logger
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
        logger.setLevel(logging.NOTSET)
        logger.propagate = True

    def test_generation_logged_to_file(self, app_base, package_logger):
        assert main(["artisan", "api:generate-policy", "Post"]) == 0
        for handler in package_logger.handlers:
            handler.flush()

        entries = [
            json.loads(line)
            for line in (app_base / "storage" / "logs" / "larasanic_api.log").read_text().splitlines()
        ]
        assert any(entry["message"].startswith("Generated policy:") for entry in entries)
        assert (app_base / "app" / "policies" / "post_policy.py").exists()

    def test_configured_handlers(self, app_base, package_logger):
        Config.set("app.allowed_logging_handlers", {
            "package": {"name": "larasanic_api", "format_type": "text", "file_name": "cli"},
        })
        assert main(["artisan"]) == 0
        assert (app_base / "storage" / "logs" / "cli.log").exists()
