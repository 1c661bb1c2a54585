"""
Tests for the command line entry point.
"""

import sqlalchemy

from recap import main


class TestCommands:
    def test_init_db_creates_tables(self, tmp_path, monkeypatch):
        url = f"sqlite:///{tmp_path / 'cli.db'}"
        monkeypatch.setattr("sys.argv", ["recap", "init-db", "--database-url", url])
        main.main()

        engine = sqlalchemy.create_engine(url)
        try:
            tables = set(sqlalchemy.inspect(engine).get_table_names())
        finally:
            engine.dispose()
        assert {"users", "summaries", "email_logs"} <= tables

    def test_serve_uses_host_and_port(self, monkeypatch):
        calls = {}

        class FakeApp:
            def run(self, host, port, debug):
                calls.update(host=host, port=port, debug=debug)

        monkeypatch.setattr("recap.api.server.create_app", lambda: FakeApp())
        monkeypatch.setattr("sys.argv", ["recap", "serve", "--host", "0.0.0.0", "--port", "8123"])
        main.main()
        assert calls == {"host": "0.0.0.0", "port": 8123, "debug": False}

    def test_no_command_prints_help(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.argv", ["recap"])
        main.main()
        assert "serve" in capsys.readouterr().out
