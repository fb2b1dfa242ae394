from waddle import cfg

_NAMES = ["GOOSE_DRIVER", "GOOSE_DBSTRING", "GOOSE_MIGRATION_DIR", "NO_COLOR"]


def _clear(monkeypatch):
    for name in _NAMES:
        monkeypatch.delenv(name, raising=False)


def test_env_or_unset_returns_default(monkeypatch):
    monkeypatch.delenv("WADDLE_TEST_VAR", raising=False)
    assert cfg.env_or("WADDLE_TEST_VAR", "fallback") == "fallback"


def test_env_or_empty_returns_default(monkeypatch):
    monkeypatch.setenv("WADDLE_TEST_VAR", "")
    assert cfg.env_or("WADDLE_TEST_VAR", "fallback") == "fallback"


def test_env_or_set_returns_value(monkeypatch):
    monkeypatch.setenv("WADDLE_TEST_VAR", "value")
    assert cfg.env_or("WADDLE_TEST_VAR", "fallback") == "value"


def test_list_vars_defaults(monkeypatch):
    _clear(monkeypatch)
    result = cfg.list_vars()
    assert [v.name for v in result] == _NAMES
    assert result[0].value == ""
    assert result[1].value == ""
    assert result[2].value == cfg.DEFAULT_MIGRATION_DIR
    assert result[3].value == "false"


def test_list_vars_reads_environment(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("GOOSE_DRIVER", "sqlite3")
    monkeypatch.setenv("GOOSE_MIGRATION_DIR", "migrations")
    values = {v.name: v.value for v in cfg.list_vars()}
    assert values["GOOSE_DRIVER"] == "sqlite3"
    assert values["GOOSE_MIGRATION_DIR"] == "migrations"
    assert values["GOOSE_DBSTRING"] == ""