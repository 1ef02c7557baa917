import pytest

from confreg import InitializationError, Registry


class HookedConfig(Registry):
    ENV_PREFIX = "HOOK_"
    VARIABLES = {"port": "8080", "url": None}

    def __init__(self):
        super().__init__()
        self.calls = 0

    def after_initialize(self):
        self.calls += 1
        if self.get("url") is None:
            self.set("url", f"http://localhost:{self.get('port')}")


class StrictConfig(Registry):
    VARIABLES = {"port": None}

    def after_initialize(self):
        if self.get("port") is None:
            raise InitializationError("port is required")


def test_called_when_initialized_from_env():
    cfg = HookedConfig()
    result = cfg.initialize_from_env(environ={"HOOK_PORT": "9000"})
    assert cfg.calls == 1
    assert result["url"] == "http://localhost:9000"


def test_called_when_initialized_from_yaml(write_yaml):
    cfg = HookedConfig()
    cfg.initialize_from_file(write_yaml("good.yaml", "port: 7000\n"))
    assert cfg.calls == 1
    assert cfg.get("url") == "http://localhost:7000"


def test_not_called_when_load_fails(write_yaml):
    cfg = HookedConfig()
    with pytest.raises(Exception):
        cfg.initialize_from_file(write_yaml("bad.yaml", "nope: 1\n"))
    assert cfg.calls == 0


def test_initialization_error_propagates():
    with pytest.raises(InitializationError):
        StrictConfig().initialize_from_env(environ={})
