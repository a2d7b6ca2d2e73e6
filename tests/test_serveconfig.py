from grimoire.serveconfig import (
    DEFAULT_APP_NAME_LEN,
    DEFAULT_CERT_PATH,
    DEFAULT_KEY_PATH,
    ServerConfig,
    TLSConfig,
)
from grimoire.stdout_logger import StdOutLogger


def test_resolve_tls_default():
    tls = ServerConfig().resolve_tls()
    assert (tls.cert_path, tls.key_path) == (DEFAULT_CERT_PATH, DEFAULT_KEY_PATH)
    assert DEFAULT_CERT_PATH == "cert/cert.pem"


def test_resolve_tls_given():
    tls = TLSConfig("a.pem", "a.key")
    assert ServerConfig(tls_config=tls).resolve_tls() is tls


def test_resolve_logger_default():
    logger = ServerConfig(app_name="demo").resolve_logger()
    assert isinstance(logger, StdOutLogger)
    assert logger.service_name() == "demo"


def test_resolve_logger_given():
    logger = StdOutLogger("mine")
    assert ServerConfig(logger=logger).resolve_logger() is logger


def test_resolve_app_name_generates_once():
    config = ServerConfig()
    name = config.resolve_app_name()
    assert len(name) == DEFAULT_APP_NAME_LEN
    assert config.resolve_app_name() == name
    assert config.app_name == name


def test_resolve_app_name_keeps_given():
    assert ServerConfig(app_name="ExampleApp").resolve_app_name() == "ExampleApp"


def test_resolve_addr_default(monkeypatch):
    monkeypatch.delenv("ENV", raising=False)
    assert ServerConfig(addr="localhost").resolve_addr() == "localhost:8080"
    assert ServerConfig().resolve_addr() == ":8080"


def test_resolve_addr_prod(monkeypatch):
    monkeypatch.setenv("ENV", "PROD")
    assert ServerConfig(addr="localhost").resolve_addr() == "localhost:80"


def test_resolve_addr_tls_wins(monkeypatch):
    monkeypatch.setenv("ENV", "PROD")
    config = ServerConfig(addr="localhost", tls_config=TLSConfig("c", "k"))
    assert config.resolve_addr() == "localhost:443"


def test_resolve_addr_other_env(monkeypatch):
    monkeypatch.setenv("ENV", "DEV")
    assert ServerConfig(addr="host").resolve_addr() == "host:8080"