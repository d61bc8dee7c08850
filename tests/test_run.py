import run
from slideflow.config import get_settings


def test_main_starts_uvicorn_with_settings(monkeypatch):
    calls = []
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    run.main(reload=False)

    settings = get_settings()
    assert calls == [("slideflow.main:app", {"host": settings.host, "port": settings.port, "reload": False})]


def test_main_logs_instead_of_printing(monkeypatch, caplog, capsys):
    monkeypatch.setattr(run.uvicorn, "run", lambda app, **kwargs: None)

    with caplog.at_level("INFO", logger="slideflow.run"):
        run.main()

    assert "Starting carousel layout server" in caplog.text
    assert capsys.readouterr().out == ""
